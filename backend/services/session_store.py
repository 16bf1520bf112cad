from datetime import datetime, timezone
from typing import List, Optional

from models import FileRecord


class AnalysisSession:
    """
    In-memory state of the current repository analysis.

    begin() discards everything from the previous submission. Running two
    analyses at once against the same session is not guarded.
    """

    def __init__(self):
        self.repo_url: Optional[str] = None
        self.started_at: Optional[datetime] = None
        self._records = {}

    def begin(self, repo_url: str):
        self.repo_url = repo_url
        self.started_at = datetime.now(timezone.utc)
        self._records = {}

    def add(self, record: FileRecord):
        if record.path in self._records:
            raise ValueError(f"Duplicate file path in session: {record.path}")
        self._records[record.path] = record

    def get(self, path: str) -> Optional[FileRecord]:
        return self._records.get(path)

    def records(self) -> List[FileRecord]:
        return list(self._records.values())

    def is_empty(self) -> bool:
        return not self._records

    def to_dict(self):
        return {
            'repoUrl': self.repo_url,
            'startedAt': self.started_at.isoformat() if self.started_at else None,
            'files': [record.to_dict() for record in self.records()]
        }
