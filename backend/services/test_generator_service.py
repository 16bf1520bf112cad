import logging
import re

from services.errors import GenerationError, UpstreamError

logger = logging.getLogger(__name__)


# Opening fence with an optional language tag, or a closing fence at end of line
_FENCE_RE = re.compile(r'^[ \t]*```[\w#+.-]*[ \t]*\r?\n|```[ \t]*$', re.MULTILINE)
_FILE_SCOPED_NAMESPACE_RE = re.compile(r'\bnamespace\s+[\w.]+\s*;[ \t]*\r?\n?')
_BLOCK_NAMESPACE_RE = re.compile(r'\bnamespace\s+[\w.]+\s*\{')
_USING_RE = re.compile(r'\busing\s+(?:static\s+)?(?:\w+\s*=\s*)?[\w.]+\s*;\s*')
# Attribute tags only count at the start of a line so indexers like items[i] survive
_ATTRIBUTE_RE = re.compile(r'^([ \t]*)(?:\[\w+(?:\(.*?\))?\]\s*)+', re.MULTILINE)


def _strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub('', text)


def unwrap_namespaces(text: str) -> str:
    """Drop namespace declarations but keep whatever the block wraps"""
    text = _FILE_SCOPED_NAMESPACE_RE.sub('', text)

    match = _BLOCK_NAMESPACE_RE.search(text)
    while match:
        depth = 1
        close = None
        for i in range(match.end(), len(text)):
            if text[i] == '{':
                depth += 1
            elif text[i] == '}':
                depth -= 1
                if depth == 0:
                    close = i
                    break

        if close is None:
            text = text[:match.start()] + text[match.end():]
        else:
            text = text[:match.start()] + text[match.end():close] + text[close + 1:]
        match = _BLOCK_NAMESPACE_RE.search(text)

    return text


def _strip_usings(text: str) -> str:
    return _USING_RE.sub('', text)


def _strip_attributes(text: str) -> str:
    return _ATTRIBUTE_RE.sub(r'\1', text)


def clean_test_code(text: str) -> str:
    """
    Remove what the model adds despite being told not to.

    Order matters: fences, namespaces, using directives, attributes, then
    whitespace. Passes repeat until nothing changes, so cleaning the result
    again returns it unchanged.
    """
    if not text:
        return ''
    while True:
        cleaned = _strip_code_fences(text)
        cleaned = unwrap_namespaces(cleaned)
        cleaned = _strip_usings(cleaned)
        cleaned = _strip_attributes(cleaned)
        cleaned = cleaned.strip()
        if cleaned == text:
            return cleaned
        text = cleaned


class TestGeneratorService:
    """Service for generating framework-free C# test stubs with the model"""

    __test__ = False

    SYSTEM_PROMPT = """You are a C# test code generator. Generate simple test code for the given C# class.
Follow these guidelines:
1. DO NOT use any external testing frameworks like NUnit, xUnit, or MSTest
2. Create a simple test class named [ClassName]Tests
3. Write test methods that start with 'Test' prefix
4. Use simple Console.WriteLine for output and throw exceptions for failures
5. DO NOT use any attributes like [Test], [TestFixture], etc.
6. DO NOT use any external dependencies or references
7. Keep the code simple and compatible with a basic C# console application
8. Include comments explaining the purpose of each test
9. IMPORTANT: DO NOT include any markdown code block markers or language specifiers in your response
10. IMPORTANT: Return ONLY the C# code with no additional text outside of the code itself
11. DO NOT include namespace declarations or using directives
12. Make sure all test methods are public and return void"""

    MAX_TOKENS = 2000

    def __init__(self, llm_client):
        self.llm_client = llm_client

    def generate(self, file_content: str, file_name: str) -> str:
        """Generate test code for one file and return it cleaned"""
        user_prompt = f"Generate simple C# tests for this C# file named {file_name}:\n\n{file_content}"

        try:
            raw = self.llm_client.complete(self.SYSTEM_PROMPT, user_prompt, max_tokens=self.MAX_TOKENS)
        except UpstreamError as e:
            raise GenerationError(f'Failed to generate test code: {e.message}')

        test_code = clean_test_code(raw)
        logger.info("Generated %d characters of test code for %s", len(test_code), file_name)
        return test_code
