from .errors import (
    AnalyzerError, ValidationError, UpstreamError, ContentDecodeError,
    ClassificationError, GenerationError, NoAnalyzableFilesError
)
from .git_api_service import GitApiService
from .llm_client import LLMClient
from .classifier_service import ClassifierService
from .test_generator_service import TestGeneratorService
from .test_runner_service import TestRunnerService
from .logic_analyzer_service import LogicAnalyzerService
from .repository_analysis_service import RepositoryAnalysisService
from .session_store import AnalysisSession

__all__ = [
    'AnalyzerError', 'ValidationError', 'UpstreamError', 'ContentDecodeError',
    'ClassificationError', 'GenerationError', 'NoAnalyzableFilesError',
    'GitApiService', 'LLMClient', 'ClassifierService', 'TestGeneratorService',
    'TestRunnerService', 'LogicAnalyzerService', 'RepositoryAnalysisService',
    'AnalysisSession'
]
