import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from .schemas import LiteralErrorPolicy

SETTINGS_PATH = Path(__file__).parent / "settings.json"
TOKEN_FILE    = Path(__file__).parent / ".token"
SETTINGS_ENV  = "MONGOSCRIPT_SETTINGS"


class Settings(BaseModel):
    token: str
    mongo_uri: str = "mongodb://localhost:27017/"
    database: str = "mongoscript"
    on_literal_error: LiteralErrorPolicy = LiteralErrorPolicy.ABORT


def _load_token() -> str:
    if TOKEN_FILE.exists():
        token = TOKEN_FILE.read_text(encoding="utf-8").strip()
        if not token:
            raise RuntimeError(".token is empty. Put your token on the first line.")
        return token
    raise RuntimeError(
        "No settings.json or .token found.\n"
        f"Create settings.json (or point {SETTINGS_ENV} at one), or create .token."
    )


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings.json (preferred), falling back to a plain .token file."""
    if path is None:
        path = Path(os.environ[SETTINGS_ENV]) if os.environ.get(SETTINGS_ENV) else SETTINGS_PATH

    data = {}
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Failed to parse {path}: {e}")
        if not isinstance(data, dict):
            raise RuntimeError(f"{path} must contain a JSON object")

    if not (data.get("token") or "").strip():
        if path.exists() and not TOKEN_FILE.exists():
            raise RuntimeError(
                f"{path.name} found but missing 'token'. "
                'Put: {"token":"<your-secret>"}'
            )
        data["token"] = _load_token()

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise RuntimeError(f"Invalid settings in {path}: {e}")


@lru_cache
def get_settings() -> Settings:
    return load_settings()
