import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10MB request bodies (whole-repository payloads)
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # GitHub API Configuration
    GITHUB_API_BASE = os.environ.get('GITHUB_API_BASE', 'https://api.github.com')
    GITHUB_TOKEN = os.environ.get('GITHUB_TOKEN')
    GITHUB_TIMEOUT = int(os.environ.get('GITHUB_TIMEOUT', 15))
    TARGET_EXTENSION = os.environ.get('TARGET_EXTENSION', '.cs')

    # Anthropic API Configuration
    ANTHROPIC_API_KEY = os.environ.get('ANTHROPIC_API_KEY')
    ANTHROPIC_MODEL = os.environ.get('ANTHROPIC_MODEL', 'claude-3-5-sonnet-20241022')
    ANTHROPIC_MAX_TOKENS = int(os.environ.get('ANTHROPIC_MAX_TOKENS', 4000))
    ANTHROPIC_TEMPERATURE = float(os.environ.get('ANTHROPIC_TEMPERATURE', 0.3))
    LLM_TIMEOUT = float(os.environ.get('LLM_TIMEOUT', 60))

    # Remote execution sandbox
    SANDBOX_URL = os.environ.get('SANDBOX_URL')
    SANDBOX_TIMEOUT = int(os.environ.get('SANDBOX_TIMEOUT', 30))

    # Per-file fan-out for classification and logic analysis
    ANALYSIS_MAX_WORKERS = int(os.environ.get('ANALYSIS_MAX_WORKERS', 4))
    ANALYSIS_BATCH_TIMEOUT = float(os.environ.get('ANALYSIS_BATCH_TIMEOUT', 300))
