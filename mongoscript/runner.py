import logging
from typing import Optional, Union

from .errors import LooseLiteralParseError, MongoScriptError
from .mongo_commands import execute_operation
from .operations import build_operation
from .parsers import parse_mongodb_command
from .schemas import Diagnostic, LiteralErrorPolicy, Operation, ScriptResult
from .segmenter import split_statements

logger = logging.getLogger(__name__)


def _skip(diagnostics: list, statement: str, error: MongoScriptError) -> None:
    logger.warning(f"Skipping statement '{statement}': {error.message}")
    diagnostics.append(Diagnostic(statement=statement, error=type(error).__name__, message=str(error)))


def parse_script(
    script: str,
    on_literal_error: Union[LiteralErrorPolicy, str] = LiteralErrorPolicy.ABORT,
    diagnostics: Optional[list] = None,
) -> list[Operation]:
    """Parse a whole script into operations, in source order.

    Statements that are malformed, use an unsupported method or have the
    wrong arguments are skipped and recorded in `diagnostics`. A literal that
    cannot be decoded raises LooseLiteralParseError under the "abort" policy
    and is skipped like the others under "collect".
    """
    policy = LiteralErrorPolicy(on_literal_error)
    if diagnostics is None:
        diagnostics = []

    operations = []
    for statement in split_statements(script):
        try:
            call = parse_mongodb_command(statement)
            operation = build_operation(call)
        except LooseLiteralParseError as e:
            e.statement = statement
            if policy is LiteralErrorPolicy.ABORT:
                raise
            _skip(diagnostics, statement, e)
            continue
        except MongoScriptError as e:
            e.statement = statement
            _skip(diagnostics, statement, e)
            continue
        logger.debug(f"Parsed statement: {statement} -> {operation.kind.value} on {operation.collection}")
        operations.append(operation)
    return operations


def run_script(
    db,
    script: str,
    on_literal_error: Union[LiteralErrorPolicy, str] = LiteralErrorPolicy.ABORT,
) -> ScriptResult:
    """Parse a script and execute its operations against `db` one by one.

    Stops at the first parse (abort policy) or execution error.
    """
    if not script.strip():
        return ScriptResult(success=True, output=["Script is empty, skipped"])

    warnings = []
    try:
        operations = parse_script(script, on_literal_error, warnings)
    except LooseLiteralParseError as e:
        return ScriptResult(success=False, error=f"Failed to parse script operations: {e}", warnings=warnings)

    output = []
    for op in operations:
        try:
            output.append(execute_operation(db, op))
        except MongoScriptError as e:
            return ScriptResult(
                success=False,
                output=output,
                error=f"Failed to execute operation {op.method} on {op.collection}: {e.message}",
                warnings=warnings,
            )
    return ScriptResult(success=True, output=output, warnings=warnings)
