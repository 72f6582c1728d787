# rapsetup/core/session.py
import logging
import uuid
from typing import Awaitable, Callable, Dict, List, Optional

from rapsetup.core.env_agent import request_environment
from rapsetup.core.errors import GenerationError
from rapsetup.models import GeneratedFile, GenerationResult, GeneratorStatus, SetupConfig

logger = logging.getLogger(__name__)

Generator = Callable[[SetupConfig], Awaitable[GenerationResult]]


class WizardSession:
    """
    State behind one browser's wizard page: the current config snapshot,
    the generator status and the last successful output.
    """

    def __init__(self, generate_fn: Optional[Generator] = None):
        self.config = SetupConfig()
        self.status = GeneratorStatus.IDLE
        self.files: List[GeneratedFile] = []
        self.summary = ""
        self.error: Optional[str] = None
        self._generate_fn = generate_fn

    @property
    def is_generating(self) -> bool:
        return self.status is GeneratorStatus.GENERATING

    def update_config(self, **fields) -> SetupConfig:
        # a new validated snapshot every time; a request already in flight keeps its own
        self.config = SetupConfig(**{**self.config.model_dump(), **fields})
        return self.config

    async def generate(self) -> bool:
        """
        Trigger one generation with the current config.
        Returns False without calling the model if a request is still pending.
        """
        if self.is_generating:
            logger.info("generation already in progress; ignoring trigger")
            return False

        self.status = GeneratorStatus.GENERATING
        self.error = None
        self.summary = ""
        snapshot = self.config
        generate_fn = self._generate_fn or request_environment

        try:
            result = await generate_fn(snapshot)
        except GenerationError as e:
            logger.error("generation failed (%s): %s", type(e).__name__, e)
            self._fail(str(e))
            return True
        except Exception as e:
            logger.exception("unexpected error during generation")
            self._fail(str(e))
            return True

        self.files = list(result.files)
        self.summary = result.summary
        self.status = GeneratorStatus.SUCCESS
        return True

    def _fail(self, message: str):
        # earlier files stay on screen; only the status and message change
        self.error = message or "An unexpected error occurred."
        self.status = GeneratorStatus.ERROR


class SessionStore:
    """In-memory sessions keyed by cookie id. Nothing is persisted."""

    def __init__(self, generate_fn: Optional[Generator] = None):
        self._sessions: Dict[str, WizardSession] = {}
        self._generate_fn = generate_fn

    def get_or_create(self, session_id: Optional[str]) -> (str, WizardSession):
        if session_id and session_id in self._sessions:
            return session_id, self._sessions[session_id]
        new_id = uuid.uuid4().hex
        self._sessions[new_id] = WizardSession(self._generate_fn)
        return new_id, self._sessions[new_id]

    def __len__(self) -> int:
        return len(self._sessions)
