CLASSIFICATIONS = ('logic', 'boilerplate', 'error', 'unknown')


class FileRecord:
    def __init__(self, path, content='', classification='unknown', analysis_text='',
                 size=0, blob_id=None):
        if classification not in CLASSIFICATIONS:
            raise ValueError(f"Unknown classification: {classification}")
        self.path = path
        self.content = content
        self.classification = classification
        self.analysis_text = analysis_text
        self.size = size
        self.blob_id = blob_id

    def apply_classification(self, classification, analysis_text=''):
        """Set the classification once; a classified record is not relabelled"""
        if self.classification != 'unknown':
            raise ValueError(f"{self.path} is already classified as {self.classification}")
        if classification not in CLASSIFICATIONS:
            raise ValueError(f"Unknown classification: {classification}")
        self.classification = classification
        self.analysis_text = analysis_text

    @classmethod
    def from_dict(cls, data):
        """Build from the camelCase wire shape; unknown labels become 'unknown'"""
        classification = data.get('classification') or 'unknown'
        if classification not in CLASSIFICATIONS:
            classification = 'unknown'
        return cls(
            path=data.get('path') or '',
            content=data.get('content') or '',
            classification=classification,
            analysis_text=data.get('analysis') or '',
            size=data.get('size') or 0,
            blob_id=data.get('blobId')
        )

    def to_dict(self):
        """Convert to dictionary for JSON response"""
        return {
            'path': self.path,
            'content': self.content,
            'classification': self.classification,
            'analysis': self.analysis_text,
            'size': self.size,
            'blobId': self.blob_id
        }

    def __repr__(self):
        return f"<FileRecord(path='{self.path}', classification='{self.classification}')>"
