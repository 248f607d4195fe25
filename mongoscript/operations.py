"""Turn a ParsedCall into an Operation the execution layer can run."""
import logging
import re
from typing import Any

from .errors import ArgumentTypeError, ArityError
from .normalizer import parse_loose_literal, parse_loose_pairs
from .parsers import split_top_level_json_args
from .schemas import IndexOptions, Operation, OperationKind, ParsedCall

logger = logging.getLogger(__name__)

NUMERIC_STRING = re.compile(r"-?\d+(\.\d+)?")


def convert_to_number(value: Any) -> Any:
    """Coerce numeric literals and numeric strings to int/float.

    Whole numbers become int. Anything else (e.g. "text", "2dsphere") is
    returned unchanged.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else value
    if isinstance(value, str):
        if not NUMERIC_STRING.fullmatch(value):
            return value
        number = float(value)
        return int(number) if number.is_integer() else number
    return value


def _require_object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ArgumentTypeError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _strip_quotes(name: str) -> str:
    return name.strip().strip("\"'")


# ---------- CREATE COLLECTION ----------
def parse_create_collection(call: ParsedCall) -> Operation:
    args = split_top_level_json_args(call.args_text)
    if not args:
        raise ArityError("createCollection requires a collection name parameter")
    name = _strip_quotes(args[0])
    if not name:
        raise ArityError("createCollection requires a collection name parameter")

    op = Operation(kind=OperationKind.CREATE_COLLECTION, collection=name, method="createCollection")
    if len(args) > 1:
        options = _require_object(parse_loose_literal(args[1]), "createCollection options")
        validator = options.get("validator")
        if isinstance(validator, dict):
            op.validator = validator
    return op


# ---------- CREATE INDEX ----------
def parse_create_index(call: ParsedCall) -> Operation:
    args = split_top_level_json_args(call.args_text)
    if not args:
        raise ArityError("createIndex requires an index specification")

    index_spec = [(key, convert_to_number(value)) for key, value in parse_loose_pairs(args[0])]
    if not index_spec:
        raise ArgumentTypeError("createIndex requires at least one indexed field")

    op = Operation(kind=OperationKind.CREATE_INDEX, collection=call.collection,
                   method="createIndex", index_spec=index_spec)

    if len(args) > 1:
        raw = _require_object(parse_loose_literal(args[1]), "createIndex options")
        opts = IndexOptions()
        if isinstance(raw.get("unique"), bool):
            opts.unique = raw["unique"]
        if isinstance(raw.get("name"), str):
            opts.name = raw["name"]
        ignored = sorted(set(raw) - {"unique", "name"})
        if ignored:
            logger.debug(f"Ignoring index options {ignored} on '{call.collection}'")
        op.index_options = opts
    return op


# ---------- INSERT ----------
def parse_insert(call: ParsedCall) -> Operation:
    args = split_top_level_json_args(call.args_text)
    if not args:
        raise ArityError("no document to insert")

    value = parse_loose_literal(args[0])
    if call.method == "insertMany":
        if not isinstance(value, list):
            raise ArgumentTypeError("insertMany requires an array of documents")
        documents = [_require_object(doc, "insertMany document") for doc in value]
    else:
        documents = [_require_object(value, "insertOne document")]

    return Operation(kind=OperationKind.INSERT, collection=call.collection,
                     method=call.method, documents=documents)


# ---------- UPDATE ----------
def parse_update(call: ParsedCall) -> Operation:
    args = split_top_level_json_args(call.args_text)
    if len(args) < 2:
        raise ArityError(f"{call.method} requires filter and update parameters")

    filter_query = _require_object(parse_loose_literal(args[0]), f"{call.method} filter")
    update_data = _require_object(parse_loose_literal(args[1]), f"{call.method} update")
    options = {}
    if len(args) >= 3:
        options = _require_object(parse_loose_literal(args[2]), f"{call.method} options")

    return Operation(kind=OperationKind.UPDATE, collection=call.collection, method=call.method,
                     filter=filter_query, update=update_data, options=options)


# ---------- DELETE ----------
def parse_delete(call: ParsedCall) -> Operation:
    args = split_top_level_json_args(call.args_text)
    if not args:
        raise ArityError(f"{call.method} requires a filter document")

    filter_query = _require_object(parse_loose_literal(args[0]), f"{call.method} filter")
    return Operation(kind=OperationKind.DELETE, collection=call.collection,
                     method=call.method, filter=filter_query)


BUILDERS = {
    "createCollection": parse_create_collection,
    "createIndex": parse_create_index,
    "insertOne": parse_insert,
    "insertMany": parse_insert,
    "updateOne": parse_update,
    "updateMany": parse_update,
    "deleteOne": parse_delete,
    "deleteMany": parse_delete,
}


def build_operation(call: ParsedCall) -> Operation:
    return BUILDERS[call.method](call)
