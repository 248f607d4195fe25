from typing import Optional


class MongoScriptError(ValueError):
    """Base error for anything raised while turning a script into operations."""

    def __init__(self, message: str, statement: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.statement = statement

    def __str__(self):
        if self.statement:
            return f"{self.message} (statement: {self.statement})"
        return self.message


# ---------- CALL EXTRACTION ----------
class FormatError(MongoScriptError):
    """Statement is not shaped like db.<collection>.<method>(...) or db.createCollection(...)."""


class UnbalancedSyntaxError(MongoScriptError):
    """No matching closing parenthesis."""


class UnsupportedMethodError(MongoScriptError):
    def __init__(self, method: str, collection: Optional[str] = None, statement: Optional[str] = None):
        super().__init__(f"Unsupported operation '{method}' for collection '{collection}'", statement)
        self.method = method
        self.collection = collection


# ---------- NORMALIZATION ----------
class LooseLiteralParseError(MongoScriptError):
    """Normalized literal still is not valid JSON."""

    def __init__(self, message: str, text: str, statement: Optional[str] = None):
        super().__init__(message, statement)
        self.text = text

    def __str__(self):
        base = f"{self.message}: {self.text!r}"
        if self.statement:
            return f"{base} (statement: {self.statement})"
        return base


# ---------- OPERATION BUILDING ----------
class OperationError(MongoScriptError):
    pass


class ArityError(OperationError):
    pass


class ArgumentTypeError(OperationError):
    pass


# ---------- EXECUTION ----------
class ExecutionError(MongoScriptError):
    pass
