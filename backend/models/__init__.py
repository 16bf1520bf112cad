"""Session-scoped data models."""

from models.file_record import FileRecord
from models.logic_analysis import PerFileAnalysis, AggregatedAnalysis
from models.test_run_result import TestRunResult

__all__ = [
    'FileRecord',
    'PerFileAnalysis',
    'AggregatedAnalysis',
    'TestRunResult'
]
