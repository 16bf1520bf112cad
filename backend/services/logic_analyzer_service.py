import json
import logging
import math
import re
from typing import Dict, List

from config import Config
from models import FileRecord, PerFileAnalysis, AggregatedAnalysis
from services.batch import map_ordered
from services.errors import AnalyzerError, NoAnalyzableFilesError

logger = logging.getLogger(__name__)

CRITICALITY_RANK = {'High': 0, 'Medium': 1, 'Low': 2}
SKIP_REASON = 'Error handling file excluded from core functionality analysis'
NO_SUMMARY = 'No successful file analyses to generate summary'


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def is_error_handling_file(file_name: str, content: str) -> bool:
    """Error pages and exception handlers are left out of core functionality analysis"""
    name = (file_name or '').lower()
    text = (content or '').lower()
    return ('error' in name or 'exception' in name
            or 'error page' in text or 'exception page' in text)


def build_functionality_comparison(analyses: List[PerFileAnalysis]) -> List[Dict]:
    """
    One row per distinct expected functionality, in first-seen order.

    Keys match exactly (case-sensitive). A row is implemented when any file
    lists the key among its actual functionalities.
    """
    expected = []
    seen = set()
    for analysis in analyses:
        for functionality in analysis.expected_functionalities:
            if functionality not in seen:
                seen.add(functionality)
                expected.append(functionality)

    table = []
    for functionality in expected:
        implemented_in = [a.file_name for a in analyses
                          if functionality in a.actual_functionalities]
        table.append({
            'functionality': functionality,
            'implemented': bool(implemented_in),
            'implementationStatus': 'Complete' if implemented_in else 'Missing',
            'implementedIn': implemented_in
        })
    return table


def collect_missing_core_functionalities(analyses: List[PerFileAnalysis]) -> List[str]:
    missing = []
    for analysis in analyses:
        for functionality in analysis.missing_core_functionalities:
            if functionality not in missing:
                missing.append(functionality)
    return missing


def compute_coverage(analyses: List[PerFileAnalysis], comparison: List[Dict]) -> int:
    """
    Mean of the per-file percentages the model reported; when no file reported
    one, the implemented share of the comparison table. Never 0 while at least
    one functionality is implemented.
    """
    reported = [a.coverage_percentage for a in analyses if a.coverage_percentage is not None]
    implemented = sum(1 for row in comparison if row['implemented'])

    if reported:
        coverage = round_half_up(sum(reported) / len(reported))
    elif comparison:
        coverage = round_half_up(implemented * 100 / len(comparison))
    else:
        coverage = 0

    if coverage == 0 and implemented > 0:
        coverage = 1
    return coverage


def extract_critical_test_cases(analyses: List[PerFileAnalysis]) -> List[Dict]:
    """Flatten missing negative test cases, tag each with its file, order High to Low"""
    cases = []
    for analysis in analyses:
        for case in analysis.missing_negative_test_cases:
            tagged = dict(case)
            tagged['fileName'] = analysis.file_name
            cases.append(tagged)

    # sorted() is stable, so equal criticalities keep their input order
    return sorted(cases, key=lambda c: CRITICALITY_RANK.get(c.get('criticality'), len(CRITICALITY_RANK)))


def aggregate_summary(analyses: List[PerFileAnalysis]) -> str:
    summaries = [a.summary for a in analyses]
    if not summaries:
        return NO_SUMMARY
    return '\n\n'.join(summaries)


class LogicAnalyzerService:
    """Service for per-file logic analysis and the repository-wide aggregate"""

    SYSTEM_PROMPT = """You are a C# code analyzer specialized in understanding application logic.
Focus ONLY on core functionality, excluding error handling pages/files. Analyze the provided C# file and extract:

1. A concise summary of the core application logic implemented in this file
2. A list of expected core functionalities based on class/method names, comments, and implementation
3. A list of actual core functionalities that are fully implemented
4. A list of missing or incomplete core functionalities (essential features only)
5. A list of missing basic negative test cases (invalid inputs, edge cases) with criticality (Low, Medium, High)
6. The percentage of expected functionalities that are actually implemented

Return ONLY valid JSON with no additional text:
{
  "summary": "...",
  "expectedFunctionalities": ["..."],
  "actualFunctionalities": ["..."],
  "missingCoreFunctionalities": ["..."],
  "missingNegativeTestCases": [
    {"description": "...", "criticality": "Low|Medium|High", "impact": "..."}
  ],
  "coveragePercentage": 75
}"""

    USER_PROMPT_TEMPLATE = """Analyze this C# file named {file_name} where only core functionality is expected:

{file_content}"""

    def __init__(self, llm_client, max_workers: int = None, batch_timeout: float = None):
        self.llm_client = llm_client
        self.max_workers = max_workers or Config.ANALYSIS_MAX_WORKERS
        self.batch_timeout = batch_timeout or Config.ANALYSIS_BATCH_TIMEOUT

    @staticmethod
    def _parse_json(content: str) -> Dict:
        try:
            payload = json.loads(content)
        except json.JSONDecodeError:
            # Try to extract JSON from response if it has extra text
            json_match = re.search(r'\{[\s\S]*\}', content)
            if not json_match:
                raise AnalyzerError("Failed to parse AI response as JSON")
            try:
                payload = json.loads(json_match.group())
            except json.JSONDecodeError:
                raise AnalyzerError("Failed to parse AI response as JSON")

        if not isinstance(payload, dict):
            raise AnalyzerError("AI response is not a JSON object")
        return payload

    def analyze_file(self, file_content: str, file_name: str) -> PerFileAnalysis:
        """
        Analyze one logic file. Never raises for model failures: the failure is
        recorded on the returned analysis so sibling files carry on.
        """
        if is_error_handling_file(file_name, file_content):
            logger.info("Skipping error handling file: %s", file_name)
            return PerFileAnalysis.skipped_file(file_name, SKIP_REASON)

        user_prompt = self.USER_PROMPT_TEMPLATE.format(file_name=file_name, file_content=file_content)
        try:
            content = self.llm_client.complete(self.SYSTEM_PROMPT, user_prompt)
            payload = self._parse_json(content)
        except AnalyzerError as e:
            logger.warning("Logic analysis failed for %s: %s", file_name, e.message)
            return PerFileAnalysis.failed(file_name, e.message or 'Failed to analyze logic file')

        return PerFileAnalysis.from_model_payload(file_name, payload)

    def analyze_files(self, files: List[FileRecord]) -> AggregatedAnalysis:
        """
        Analyze every logic file and merge the results.

        Raises NoAnalyzableFilesError when there are no logic files or every
        one of them is an excluded error handling file.
        """
        logic_files = [f for f in files if f.classification == 'logic']
        if not logic_files:
            raise NoAnalyzableFilesError('No logic files found for analysis')

        analyses = map_ordered(
            lambda f: self.analyze_file(f.content, f.path),
            logic_files,
            max_workers=self.max_workers,
            timeout=self.batch_timeout
        )

        skipped = [a for a in analyses if a.skipped]
        if len(skipped) == len(analyses):
            raise NoAnalyzableFilesError('All logic files were excluded as error handling files')

        successful = [a for a in analyses if a.success]
        comparison = build_functionality_comparison(successful)
        coverage = compute_coverage(successful, comparison)

        file_count = {
            'total': len(logic_files),
            'analyzed': len(successful),
            'skipped': len(skipped),
            'failed': len(analyses) - len(successful) - len(skipped)
        }
        logger.info("Aggregated %d logic files (%d analyzed, %d skipped, %d failed), coverage %d%%",
                    file_count['total'], file_count['analyzed'], file_count['skipped'],
                    file_count['failed'], coverage)

        return AggregatedAnalysis(
            file_count=file_count,
            file_analyses=analyses,
            summary=aggregate_summary(successful),
            functionality_comparison=comparison,
            missing_core_functionalities=collect_missing_core_functionalities(successful),
            coverage_percentage=coverage,
            critical_test_cases=extract_critical_test_cases(successful)
        )

    def analyze_logic_files(self, files: List[FileRecord]) -> Dict:
        """Aggregate as a response body; 'nothing to analyze' is a failed result, not an error"""
        try:
            return self.analyze_files(files).to_dict()
        except NoAnalyzableFilesError as e:
            logger.info("Logic analysis produced no aggregate: %s", e.message)
            return {'success': False, 'error': e.message}
