"""Convert Mongo shell-style setup scripts into structured operations."""

from .errors import (
    MongoScriptError, FormatError, UnbalancedSyntaxError, UnsupportedMethodError,
    LooseLiteralParseError, OperationError, ArityError, ArgumentTypeError,
    ExecutionError,
)
from .schemas import (
    Diagnostic, IndexOptions, LiteralErrorPolicy, Operation, OperationKind,
    ParsedCall, ScriptMetadata, ScriptResult,
)
from .runner import parse_script, run_script
from .metadata import parse_metadata

__version__ = "1.0.0"
