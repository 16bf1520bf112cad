"""Per-file and repository-level logic analysis results."""

CRITICALITY_LEVELS = ('High', 'Medium', 'Low')


def _string_list(value):
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _test_case_list(value):
    if not isinstance(value, list):
        return []
    cases = []
    for item in value:
        if not isinstance(item, dict):
            continue
        case = dict(item)
        case.setdefault('description', '')
        case.setdefault('criticality', 'Low')
        case.setdefault('impact', '')
        cases.append(case)
    return cases


class PerFileAnalysis:
    """Outcome of one logic file's analysis: success, skip or failure."""

    def __init__(self, file_name, success=False, skipped=False, skip_reason=None,
                 error=None, summary='', expected_functionalities=None,
                 actual_functionalities=None, missing_core_functionalities=None,
                 missing_negative_test_cases=None, coverage_percentage=None):
        self.file_name = file_name
        self.success = success
        self.skipped = skipped
        self.skip_reason = skip_reason
        self.error = error
        self.summary = summary
        self.expected_functionalities = expected_functionalities or []
        self.actual_functionalities = actual_functionalities or []
        self.missing_core_functionalities = missing_core_functionalities or []
        self.missing_negative_test_cases = missing_negative_test_cases or []
        self.coverage_percentage = coverage_percentage

    @classmethod
    def skipped_file(cls, file_name, reason):
        return cls(file_name, success=False, skipped=True, skip_reason=reason)

    @classmethod
    def failed(cls, file_name, error):
        return cls(file_name, success=False, error=error)

    @classmethod
    def from_model_payload(cls, file_name, payload):
        """
        Build a successful analysis from the model's JSON object.

        Missing or malformed fields fall back to empty values. The older
        'missingTestCases' key is read only when 'missingNegativeTestCases'
        is absent or null.
        """
        coverage = payload.get('coveragePercentage')
        if isinstance(coverage, bool) or not isinstance(coverage, (int, float)):
            coverage = None

        test_cases = payload.get('missingNegativeTestCases')
        if test_cases is None:
            test_cases = payload.get('missingTestCases')

        summary = payload.get('summary')
        return cls(
            file_name,
            success=True,
            summary=summary if isinstance(summary, str) else '',
            expected_functionalities=_string_list(payload.get('expectedFunctionalities')),
            actual_functionalities=_string_list(payload.get('actualFunctionalities')),
            missing_core_functionalities=_string_list(payload.get('missingCoreFunctionalities')),
            missing_negative_test_cases=_test_case_list(test_cases),
            coverage_percentage=coverage
        )

    def to_dict(self):
        if self.skipped:
            return {
                'success': False,
                'fileName': self.file_name,
                'skipped': True,
                'reason': self.skip_reason
            }
        if not self.success:
            return {
                'success': False,
                'fileName': self.file_name,
                'skipped': False,
                'error': self.error
            }
        return {
            'success': True,
            'fileName': self.file_name,
            'skipped': False,
            'summary': self.summary,
            'expectedFunctionalities': list(self.expected_functionalities),
            'actualFunctionalities': list(self.actual_functionalities),
            'missingCoreFunctionalities': list(self.missing_core_functionalities),
            'missingNegativeTestCases': [dict(case) for case in self.missing_negative_test_cases],
            'coveragePercentage': self.coverage_percentage
        }

    def __repr__(self):
        state = 'skipped' if self.skipped else ('ok' if self.success else 'failed')
        return f"<PerFileAnalysis(file_name='{self.file_name}', state='{state}')>"


class AggregatedAnalysis:
    def __init__(self, file_count, file_analyses, summary, functionality_comparison,
                 missing_core_functionalities, coverage_percentage, critical_test_cases):
        self.file_count = file_count
        self.file_analyses = file_analyses
        self.summary = summary
        self.functionality_comparison = functionality_comparison
        self.missing_core_functionalities = missing_core_functionalities
        self.coverage_percentage = coverage_percentage
        self.critical_test_cases = critical_test_cases

    def to_dict(self):
        """Convert to dictionary for JSON response"""
        return {
            'success': True,
            'fileCount': dict(self.file_count),
            'fileAnalyses': [analysis.to_dict() for analysis in self.file_analyses],
            'summary': self.summary,
            'functionalityComparison': [dict(row) for row in self.functionality_comparison],
            'missingCoreFunctionalities': list(self.missing_core_functionalities),
            'coveragePercentage': self.coverage_percentage,
            'criticalTestCases': [dict(case) for case in self.critical_test_cases]
        }
