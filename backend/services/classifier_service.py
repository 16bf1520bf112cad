import logging
from typing import Dict

from services.errors import ClassificationError, UpstreamError

logger = logging.getLogger(__name__)

LOGIC = 'logic'
BOILERPLATE = 'boilerplate'


class ClassificationDecision:
    """Turns a model verdict into a classification label"""

    def decide(self, verdict: str) -> str:
        raise NotImplementedError


class KeywordDecision(ClassificationDecision):
    """Label as logic when the verdict mentions the keyword anywhere, case-insensitively"""

    def __init__(self, keyword: str = LOGIC):
        self.keyword = keyword.lower()

    def decide(self, verdict: str) -> str:
        return LOGIC if self.keyword in (verdict or '').lower() else BOILERPLATE


class ClassifierService:
    """Service for labelling a C# file as logic or boilerplate with the model"""

    SYSTEM_PROMPT = """You are a C# code analyzer. Classify the given code as either 'logic' or 'boilerplate'. Logic files contain business logic, algorithms, or core functionality. Boilerplate files contain setup code, configuration, or generated code."""

    def __init__(self, llm_client, decision: ClassificationDecision = None):
        self.llm_client = llm_client
        self.decision = decision or KeywordDecision()

    def classify(self, file_content: str) -> Dict:
        """
        Classify one file.

        Returns: {classification: 'logic'|'boilerplate', analysis: raw model text}
        """
        try:
            verdict = self.llm_client.complete(self.SYSTEM_PROMPT, file_content)
        except UpstreamError as e:
            raise ClassificationError(f'Failed to classify file: {e.message}')

        return {
            'classification': self.decision.decide(verdict),
            'analysis': verdict
        }
