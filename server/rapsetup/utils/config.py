# rapsetup/utils/config.py
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

MODEL_NAME = os.environ.get("AI_MODEL_NAME", "gemini-2.5-flash")

# low temperature: the output is runnable configuration, not prose
AGENT_TEMPERATURES = {
    "environment": float(os.environ.get("AI_TEMPERATURE", 0.2)),
}

# checked in order; the first non-empty one wins
API_KEY_ENV_VARS = ("GOOGLE_API_KEY_GEMINI", "API_KEY")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
SESSION_COOKIE_NAME = os.environ.get("RAP_SESSION_COOKIE", "rap_session")


def get_api_key() -> Optional[str]:
    """Read the Gemini credential from the environment at call time."""
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None
