import logging

from bson import ObjectId
from bson.errors import BSONError
from pymongo.errors import CollectionInvalid, OperationFailure, PyMongoError

from .errors import ExecutionError
from .schemas import Operation, OperationKind

logger = logging.getLogger(__name__)


def _stringify_id(value):
    return str(value) if isinstance(value, ObjectId) else value


def execute_operation(db, op: Operation):
    """Run one Operation against a pymongo Database and return a printable result."""
    try:
        # ---------- CREATE COLLECTION ----------
        if op.kind is OperationKind.CREATE_COLLECTION:
            options = {"validator": op.validator} if op.validator else {}
            try:
                db.create_collection(op.collection, **options)
            except CollectionInvalid as e:
                if "already exists" not in str(e):
                    raise
                logger.info(f"Collection {op.collection} already exists, skipping")
                return "Collection already exists"
            return f"Collection {op.collection} created successfully"

        collection = db[op.collection]

        # ---------- CREATE INDEX ----------
        if op.kind is OperationKind.CREATE_INDEX:
            kwargs = op.index_options.as_kwargs() if op.index_options else {}
            try:
                name = collection.create_index(list(op.index_spec), **kwargs)
            except OperationFailure as e:
                if "already exists" not in str(e):
                    raise
                logger.info(f"Index already exists on collection {op.collection}, skipping")
                return "Index already exists"
            return f"Index created on {op.collection}: {name}"

        # ---------- INSERT ----------
        if op.kind is OperationKind.INSERT:
            if not op.documents:
                raise ExecutionError("no document to insert")
            if op.method == "insertOne":
                result = collection.insert_one(op.documents[0])
                return _stringify_id(result.inserted_id)
            result = collection.insert_many(op.documents)
            return [_stringify_id(i) for i in result.inserted_ids]

        # ---------- UPDATE ----------
        if op.kind is OperationKind.UPDATE:
            if op.filter is None or op.update is None:
                raise ExecutionError("update operation requires filter and update documents")
            if op.method == "updateOne":
                result = collection.update_one(op.filter, op.update, **op.options)
            else:
                result = collection.update_many(op.filter, op.update, **op.options)
            return result.modified_count

        # ---------- DELETE ----------
        if op.kind is OperationKind.DELETE:
            if op.filter is None:
                raise ExecutionError("delete operation requires filter document")
            if op.method == "deleteOne":
                result = collection.delete_one(op.filter)
            else:
                result = collection.delete_many(op.filter)
            return result.deleted_count

        raise ExecutionError(f"Unsupported operation type: {op.kind}")

    # TypeError: unknown keyword in update options
    # BSONError, OverflowError: document cannot be encoded on the client
    except (PyMongoError, BSONError, OverflowError, TypeError) as e:
        raise ExecutionError(f"MongoDB execution error: {e}") from e
