import asyncio

import pytest
from pydantic import ValidationError

from rapsetup.core.errors import MalformedResponse, MissingCredential
from rapsetup.core.session import SessionStore, WizardSession
from rapsetup.models import GeneratedFile, GenerationResult, GeneratorStatus, SetupConfig


def _result(*names: str, summary: str = "ok") -> GenerationResult:
    return GenerationResult(
        files=[GeneratedFile(filename=n, language="bash", content="echo", description=n) for n in names],
        summary=summary,
    )


class RecordingGenerator:
    """Stands in for request_environment; optionally blocks until released."""

    def __init__(self, result=None, error=None, block=False):
        self.calls = []
        self.result = result or _result("system_dependencies.sh")
        self.error = error
        self.release = asyncio.Event()
        if not block:
            self.release.set()

    async def __call__(self, config):
        self.calls.append(config)
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.result


@pytest.mark.unit
def test_new_session_defaults():
    session = WizardSession()
    assert session.status is GeneratorStatus.IDLE
    assert session.config == SetupConfig()
    assert session.files == []
    assert session.summary == ""
    assert session.error is None


@pytest.mark.unit
def test_update_config_creates_new_snapshot():
    session = WizardSession()
    first = session.config
    second = session.update_config(packages="sf", include_bioconductor=True)
    assert second is not first
    assert first.packages == "data.table, ggplot2, dplyr"
    assert second.packages == "sf"
    assert second.include_bioconductor is True


@pytest.mark.unit
def test_update_config_rejects_unknown_r_version():
    session = WizardSession()
    with pytest.raises(ValidationError):
        session.update_config(r_version="3.6")
    assert session.config.r_version == "4.3"


@pytest.mark.asyncio
async def test_successful_generation():
    gen = RecordingGenerator(result=_result("a.sh", "b.R", summary="plan"))
    session = WizardSession(gen)

    assert await session.generate() is True
    assert session.status is GeneratorStatus.SUCCESS
    assert [f.filename for f in session.files] == ["a.sh", "b.R"]
    assert session.summary == "plan"
    assert gen.calls == [session.config]


@pytest.mark.asyncio
async def test_failure_sets_error_and_keeps_previous_files():
    gen = RecordingGenerator(result=_result("old.sh"))
    session = WizardSession(gen)
    await session.generate()

    gen.error = MalformedResponse("Malformed response from model: bad")
    await session.generate()

    assert session.status is GeneratorStatus.ERROR
    assert session.error == "Malformed response from model: bad"
    assert session.summary == ""
    assert [f.filename for f in session.files] == ["old.sh"]


@pytest.mark.asyncio
async def test_missing_credential_is_visible():
    session = WizardSession(RecordingGenerator(error=MissingCredential("API Key is missing.")))
    await session.generate()
    assert session.status is GeneratorStatus.ERROR
    assert session.error == "API Key is missing."


@pytest.mark.asyncio
async def test_unexpected_error_without_message_gets_default_text():
    session = WizardSession(RecordingGenerator(error=ValueError()))
    await session.generate()
    assert session.status is GeneratorStatus.ERROR
    assert session.error == "An unexpected error occurred."


@pytest.mark.asyncio
async def test_rapid_triggers_issue_one_call():
    gen = RecordingGenerator(block=True)
    session = WizardSession(gen)

    first = asyncio.ensure_future(session.generate())
    await asyncio.sleep(0)
    assert session.status is GeneratorStatus.GENERATING

    extra = await asyncio.gather(*(session.generate() for _ in range(5)))
    assert extra == [False] * 5

    gen.release.set()
    assert await first is True
    assert len(gen.calls) == 1
    assert session.status is GeneratorStatus.SUCCESS


@pytest.mark.asyncio
async def test_config_change_during_generation_does_not_affect_request():
    gen = RecordingGenerator(block=True)
    session = WizardSession(gen)

    pending = asyncio.ensure_future(session.generate())
    await asyncio.sleep(0)
    session.update_config(goal="something else")
    gen.release.set()
    await pending

    assert gen.calls[0].goal == SetupConfig().goal


@pytest.mark.asyncio
async def test_can_retry_manually_after_error():
    gen = RecordingGenerator(error=MissingCredential("API Key is missing."))
    session = WizardSession(gen)
    await session.generate()

    gen.error = None
    assert await session.generate() is True
    assert session.status is GeneratorStatus.SUCCESS
    assert session.error is None
    assert len(gen.calls) == 2


@pytest.mark.unit
def test_session_store_reuses_known_ids():
    store = SessionStore()
    sid, session = store.get_or_create(None)
    same_sid, same = store.get_or_create(sid)
    assert same_sid == sid
    assert same is session

    other_sid, other = store.get_or_create("unknown")
    assert other_sid != "unknown"
    assert other is not session
    assert len(store) == 2
