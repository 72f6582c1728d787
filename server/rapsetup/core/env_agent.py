# rapsetup/core/env_agent.py
"""
Environment generation agent.
- Exposes:
    async def request_environment(config) -> GenerationResult
- Turns one SetupConfig snapshot into one Gemini call and validates the
  response at the boundary. All-or-nothing: either every file plus the
  summary is returned, or a GenerationError is raised.
"""
import logging

from pydantic import ValidationError

from rapsetup.core.errors import MalformedResponse
from rapsetup.core.llm_client import call_structured_generation, require_api_key
from rapsetup.core.prompts import RESPONSE_SCHEMA, build_environment_prompt
from rapsetup.models import GenerationResult, SetupConfig
from rapsetup.utils.config import AGENT_TEMPERATURES

logger = logging.getLogger(__name__)


def parse_generation_result(text: str) -> GenerationResult:
    try:
        return GenerationResult.model_validate_json(text)
    except ValidationError as e:
        logger.warning("model output failed validation: %s", e)
        raise MalformedResponse(f"Malformed response from model: {e}") from e


async def request_environment(config: SetupConfig) -> GenerationResult:
    # credential check happens before the prompt is even built
    api_key = require_api_key()

    prompt = build_environment_prompt(config)
    logger.info("requesting environment for R %s (packages: %s)", config.r_version, config.packages)
    text = await call_structured_generation(
        prompt,
        RESPONSE_SCHEMA,
        temperature=AGENT_TEMPERATURES["environment"],
        api_key=api_key,
    )
    result = parse_generation_result(text)
    logger.info("model returned %d files", len(result.files))
    return result
