import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from services.errors import UpstreamError
from services.session_store import AnalysisSession


class FakeLLMClient:
    """Stands in for LLMClient: replies from a script keyed on the user prompt"""

    def __init__(self, reply=None, replies=None, fail_on=None):
        self.reply = reply
        self.replies = replies or {}
        self.fail_on = fail_on or set()
        self.calls = []

    def is_configured(self):
        return True

    def complete(self, system, user, max_tokens=None):
        self.calls.append({'system': system, 'user': user, 'max_tokens': max_tokens})
        for marker in self.fail_on:
            if marker in user:
                raise UpstreamError(f'model unavailable for {marker}')
        for marker, reply in self.replies.items():
            if marker in user:
                return reply
        if self.reply is None:
            raise UpstreamError('no scripted reply')
        return self.reply


@pytest.fixture
def fake_llm():
    return FakeLLMClient


@pytest.fixture
def client():
    """Create test client"""
    from app import app
    app.config['TESTING'] = True
    app.extensions['analysis_session'] = AnalysisSession()
    with app.test_client() as client:
        yield client
