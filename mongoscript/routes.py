import threading
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from . import __version__, database
from .config import Settings, get_settings
from .database import check_database_connection, get_database, reset_mongodb
from .errors import LooseLiteralParseError
from .logging_config import logger
from .metadata import parse_metadata
from .parsers import SUPPORTED_METHODS
from .runner import parse_script, run_script
from .schemas import ScriptSubmission

router = APIRouter()

# Lock to allow only one execution at a time
execution_lock = threading.Lock()


def require_token(authorization: Optional[str] = Header(None), settings: Settings = Depends(get_settings)):
    if authorization != f"Bearer {settings.token}":
        raise HTTPException(status_code=401, detail="Unauthorized")
    return settings


@router.get("/")
async def root():
    return {
        "message": "MongoScript API - Mongo shell setup scripts to driver operations",
        "version": __version__,
        "supported_methods": sorted(SUPPORTED_METHODS | {"createCollection"}),
    }


@router.get("/health")
def health_check():
    healthy = False
    if database.mongo_client is not None:
        try:
            database.mongo_client.admin.command("ping"); healthy = True
        except Exception as e: logger.error(f"MongoDB health check failed: {e}")
    return {
        "status": "healthy" if healthy else "degraded",
        "databases": {"mongodb": healthy}
    }


@router.post("/api/v1/parse")
def parse(submission: ScriptSubmission, settings: Settings = Depends(require_token)):
    policy = submission.on_literal_error or settings.on_literal_error
    warnings = []
    try:
        operations = parse_script(submission.script, policy, warnings)
    except LooseLiteralParseError as e:
        raise HTTPException(status_code=422, detail={
            "error": type(e).__name__,
            "message": e.message,
            "statement": e.statement,
            "text": e.text,
        })
    return {
        "success": True,
        "metadata": parse_metadata(submission.script),
        "operations": operations,
        "warnings": warnings,
    }


@router.post("/api/v1/execute")
def execute(submission: ScriptSubmission, settings: Settings = Depends(require_token), db=Depends(get_database)):
    check_database_connection(db)
    policy = submission.on_literal_error or settings.on_literal_error

    with execution_lock:
        try:
            return run_script(db, submission.script, policy)
        finally:
            if submission.reset:
                try:
                    reset_mongodb(db)
                except Exception as reset_err:
                    logger.error(f"Failed to reset database: {reset_err}")
