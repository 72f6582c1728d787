# rapsetup/core/llm_client.py
import logging
import time
from typing import Any, Dict, Optional

from langchain_google_genai import ChatGoogleGenerativeAI

from rapsetup.core.errors import EmptyResponse, MissingCredential, ServiceError
from rapsetup.utils.config import API_KEY_ENV_VARS, MODEL_NAME, get_api_key

logger = logging.getLogger(__name__)


def require_api_key() -> str:
    api_key = get_api_key()
    if not api_key:
        raise MissingCredential(
            f"API Key is missing. Please set the {API_KEY_ENV_VARS[0]} environment variable."
        )
    return api_key


# -------------------------
# LLM init + structured call
# -------------------------
def get_llm(api_key: str, response_schema: Dict[str, Any], temperature: float):
    # max_retries=1 is a single attempt: failures are surfaced, never retried
    return ChatGoogleGenerativeAI(
        model=MODEL_NAME,
        google_api_key=api_key,
        temperature=temperature,
        response_mime_type="application/json",
        response_schema=response_schema,
        max_retries=1,
    )


def _message_text(message: Any) -> str:
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        # multi-part responses: keep only the text parts, in order
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text") or "")
        return "".join(parts)
    return "" if content is None else str(content)


async def call_structured_generation(prompt: str,
                                     response_schema: Dict[str, Any],
                                     temperature: float,
                                     api_key: Optional[str] = None) -> str:
    """
    Send one prompt to Gemini with a JSON response schema and return the raw text payload.
    Exactly one outbound call; the caller owns parsing and validation.
    """
    if api_key is None:
        api_key = require_api_key()
    llm = get_llm(api_key, response_schema, temperature)

    start_ts = time.time()
    try:
        result = await llm.ainvoke(prompt)
    except Exception as e:
        logger.exception("Gemini call failed after %.2fs", time.time() - start_ts)
        raise ServiceError(str(e)) from e

    text = _message_text(result)
    logger.debug("Gemini call finished in %.2fs (%d chars)", time.time() - start_ts, len(text))
    if not text.strip():
        raise EmptyResponse("No response text generated")
    return text
