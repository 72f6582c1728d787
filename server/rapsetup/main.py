import logging

from fastapi import FastAPI

from rapsetup.api.generate import router as generate_router
from rapsetup.api.wizard import router as wizard_router
from rapsetup.core.session import SessionStore
from rapsetup.utils.config import LOG_LEVEL, MODEL_NAME

logging.basicConfig(level=LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="UKB-RAP Setup")
app.state.sessions = SessionStore()
app.include_router(wizard_router)
app.include_router(generate_router, prefix="/api")

logger.info("UKB-RAP Setup using model %s", MODEL_NAME)


@app.get("/health")
def health_check():
    return {"status": "ok"}
