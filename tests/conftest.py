"""Pytest fixtures for genai-chat tests."""

import os
from unittest.mock import patch

import pytest

from genai_chat.config import Settings


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing."""
    env_vars = {
        "DEFAULT_PROVIDER": "ollama",
        "API_BASE_URL": "http://ollama.test:11434",
        "CLOUDFLARE_API_URL": "https://gateway.test/v1",
        "CLOUDFLARE_ACCOUNT_ID": "test-account-id",
        "CLOUDFLARE_BEARER_TOKEN": "test-bearer-token",
        "CONTEXT_INJECTION": "false",
        "SEMANTIC_SEARCH_API": "http://search.test/search",
        "HOST": "127.0.0.1",
        "PORT": "3000",
        "LOG_LEVEL": "DEBUG",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def settings(mock_env_vars) -> Settings:
    """Create Settings instance with mocked environment (Ollama provider)."""
    return Settings()


@pytest.fixture
def cloudflare_settings(mock_env_vars) -> Settings:
    """Settings pointing at the Cloudflare AI gateway."""
    with patch.dict(os.environ, {"DEFAULT_PROVIDER": "cloudflare"}):
        return Settings()

