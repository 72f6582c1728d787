"""Shared fixtures: credential control and a stubbed Gemini client.

No test talks to the network; ``get_llm`` is always patched.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessage

from rapsetup.utils.config import API_KEY_ENV_VARS


MINIMAL_PAYLOAD = {
    "files": [
        {
            "filename": "system_dependencies.sh",
            "language": "bash",
            "content": "#!/bin/bash\napt-get update",
            "description": "installs system libs",
        }
    ],
    "summary": "Minimal setup",
}


@pytest.fixture(autouse=True)
def _no_ambient_credential(monkeypatch):
    """Start every test without a key, whatever the shell or .env provides."""
    for name in API_KEY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def api_key(monkeypatch) -> str:
    monkeypatch.setenv("GOOGLE_API_KEY_GEMINI", "test-key")
    return "test-key"


@pytest.fixture
def minimal_payload() -> dict:
    return json.loads(json.dumps(MINIMAL_PAYLOAD))


@pytest.fixture
def fake_llm():
    """Patch get_llm; tests set ``fake_llm.ainvoke`` behaviour as needed."""
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content=json.dumps(MINIMAL_PAYLOAD)))
    with patch("rapsetup.core.llm_client.get_llm", return_value=llm) as factory:
        llm.factory = factory
        yield llm
