import logging
from typing import Dict, List

from config import Config
from models import FileRecord
from services.batch import map_ordered
from services.errors import AnalyzerError

logger = logging.getLogger(__name__)

FILE_ERROR_TEXT = 'Error processing file'


class RepositoryAnalysisService:
    """Lists a repository's source files, then fetches and classifies each one"""

    def __init__(self, git_service, classifier, session, max_workers: int = None,
                 batch_timeout: float = None):
        self.git_service = git_service
        self.classifier = classifier
        self.session = session
        self.max_workers = max_workers or Config.ANALYSIS_MAX_WORKERS
        self.batch_timeout = batch_timeout or Config.ANALYSIS_BATCH_TIMEOUT

    def _process_file(self, repo_url: str, token: str, entry: Dict) -> FileRecord:
        record = FileRecord(entry['path'], size=entry.get('size', 0), blob_id=entry.get('blobId'))
        try:
            record.content = self.git_service.fetch_repo_file(repo_url, entry['path'], token)
            verdict = self.classifier.classify(record.content)
        except AnalyzerError as e:
            logger.warning("Error processing file %s: %s", entry['path'], e.message)
            record.apply_classification('error', FILE_ERROR_TEXT)
            return record

        record.apply_classification(verdict['classification'], verdict['analysis'])
        return record

    def analyze_repository(self, repo_url: str, token: str = None) -> List[FileRecord]:
        """
        Start a new session for repo_url and fill it with classified files.

        Listing failures propagate. Per-file fetch or classification failures
        only mark that file as 'error'.
        """
        self.session.begin(repo_url)
        entries = self.git_service.list_source_files(repo_url, token)

        records = map_ordered(
            lambda entry: self._process_file(repo_url, token, entry),
            entries,
            max_workers=self.max_workers,
            timeout=self.batch_timeout
        )

        for record in records:
            self.session.add(record)

        counts = {}
        for record in records:
            counts[record.classification] = counts.get(record.classification, 0) + 1
        logger.info("Classified %d files from %s: %s", len(records), repo_url, counts)
        return records
