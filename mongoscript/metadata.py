import json
import logging
from typing import Optional

from pydantic import ValidationError

from .schemas import ScriptMetadata

logger = logging.getLogger(__name__)

METADATA_MARKER = "// METADATA:"


def parse_metadata(script: str) -> Optional[ScriptMetadata]:
    """Read the JSON block commented out under a '// METADATA:' line.

    Returns None when there is no block or it cannot be decoded.
    """
    collected = []
    in_metadata = False
    for line in script.split("\n"):
        line = line.strip()
        if not in_metadata:
            in_metadata = line.startswith(METADATA_MARKER)
            continue
        if not line.startswith("//"):
            break
        text = line[2:].strip()
        if text:
            collected.append(text)

    if not collected:
        return None

    try:
        return ScriptMetadata.model_validate(json.loads("".join(collected)))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Failed to parse script metadata: {e}")
        return None
