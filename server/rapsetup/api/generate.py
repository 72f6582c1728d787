# rapsetup/api/generate.py
import logging

from fastapi import APIRouter, HTTPException

from rapsetup.core.env_agent import request_environment
from rapsetup.core.errors import EmptyResponse, MalformedResponse, MissingCredential, ServiceError
from rapsetup.models import GenerationResult, SetupConfig

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/environment", response_model=GenerationResult)
async def generate_environment(config: SetupConfig):
    """
    Stateless JSON variant of the wizard's generate button.
    Request: a SetupConfig. Response: {"files": [...], "summary": "..."}
    """
    try:
        return await request_environment(config)
    except MissingCredential as e:
        raise HTTPException(status_code=500, detail=str(e))
    except (ServiceError, EmptyResponse, MalformedResponse) as e:
        raise HTTPException(status_code=502, detail=str(e))
