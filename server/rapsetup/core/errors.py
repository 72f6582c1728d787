# rapsetup/core/errors.py
"""
Failures of a single environment generation request.
None of them are retried; the caller decides how to surface them.
"""


class GenerationError(RuntimeError):
    pass


class MissingCredential(GenerationError):
    """No Gemini API key in the environment. Raised before any network call."""


class ServiceError(GenerationError):
    """The Gemini call itself failed (timeout, auth, quota, 5xx). Message is passed through."""


class EmptyResponse(GenerationError):
    """The call succeeded but the model returned no text."""


class MalformedResponse(GenerationError):
    """The model returned text that is not JSON, or JSON missing required fields."""
