from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class OperationKind(str, Enum):
    CREATE_COLLECTION = "createCollection"
    CREATE_INDEX = "createIndex"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class LiteralErrorPolicy(str, Enum):
    """What parse_script does when an argument literal cannot be decoded."""
    ABORT = "abort"
    COLLECT = "collect"


class ParsedCall(BaseModel):
    collection: Optional[str] = None  # None for db.createCollection(...)
    method: str
    args_text: str = ""


class IndexOptions(BaseModel):
    unique: Optional[bool] = None
    name: Optional[str] = None

    def as_kwargs(self) -> dict:
        return self.model_dump(exclude_none=True)


class Operation(BaseModel):
    kind: OperationKind
    collection: str
    method: str
    documents: list[dict[str, Any]] = Field(default_factory=list)
    filter: Optional[dict[str, Any]] = None
    update: Optional[dict[str, Any]] = None
    options: dict[str, Any] = Field(default_factory=dict)
    index_spec: list[tuple[str, Any]] = Field(default_factory=list)
    index_options: Optional[IndexOptions] = None
    validator: Optional[dict[str, Any]] = None


class Diagnostic(BaseModel):
    statement: str
    error: str
    message: str


class ScriptMetadata(BaseModel):
    description: Optional[str] = None
    version: Optional[str] = None
    author: Optional[str] = None
    dependencies: list[str] = Field(default_factory=list)


class ScriptResult(BaseModel):
    success: bool
    output: list[Any] = Field(default_factory=list)
    error: Optional[str] = None
    warnings: list[Diagnostic] = Field(default_factory=list)


class ScriptSubmission(BaseModel):
    script: str
    on_literal_error: Optional[LiteralErrorPolicy] = None
    reset: bool = False
