"""
Error taxonomy shared by the analyzer services.

Per-file errors (ClassificationError, GenerationError, ContentDecodeError) are
caught by the batch callers and turned into failure-flagged records. Batch
errors (ValidationError, UpstreamError) reach the Flask error handlers.
"""
from typing import Optional


class AnalyzerError(Exception):
    """Base class for analyzer service errors"""
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AnalyzerError):
    """Bad input shape or missing fields"""
    status_code = 400


class UpstreamError(AnalyzerError):
    """Failure talking to GitHub, the model API or the sandbox"""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 upstream_status: Optional[int] = None):
        super().__init__(message, status_code)
        self.upstream_status = upstream_status


class ContentDecodeError(UpstreamError):
    """File content could not be decoded to text"""


class ClassificationError(AnalyzerError):
    """Model call failed while classifying a file"""


class GenerationError(AnalyzerError):
    """Model call failed while generating test code"""


class NoAnalyzableFilesError(AnalyzerError):
    """No logic files left to analyze after filtering and exclusion"""
    status_code = 422
