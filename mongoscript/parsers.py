from .errors import FormatError, UnbalancedSyntaxError, UnsupportedMethodError
from .scanner import QuoteBraceScanner
from .schemas import ParsedCall

CREATE_COLLECTION_PREFIX = "db.createCollection("

SUPPORTED_METHODS = frozenset({
    "createIndex",
    "insertOne", "insertMany",
    "updateOne", "updateMany",
    "deleteOne", "deleteMany",
})


def split_top_level_json_args(s: str) -> list[str]:
    """Split 'a, b, c' into ['a', 'b', 'c'] only on commas at top level
    (ignores commas inside strings/braces/brackets/parentheses)."""
    parts, buf = [], []
    scanner = QuoteBraceScanner()
    for ch in s:
        if ch == "," and scanner.at_top_level:
            parts.append("".join(buf).strip())
            buf = []
            continue
        scanner.advance(ch)
        buf.append(ch)
    tail = "".join(buf).strip()
    if tail:
        parts.append(tail)
    return parts


def find_matching_paren(s: str, start_idx: int) -> int:
    """Return index of matching ')' for '(' at start_idx, or -1.

    Only parentheses are counted; parentheses inside string literals are not
    skipped.
    """
    depth = 0
    for i in range(start_idx, len(s)):
        ch = s[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _extract_args(text: str, paren_index: int, statement: str) -> str:
    close_index = find_matching_paren(text, paren_index)
    if close_index == -1:
        raise UnbalancedSyntaxError("No matching closing parenthesis found", statement)
    return text[paren_index + 1:close_index].strip()


def parse_mongodb_command(line: str) -> ParsedCall:
    """Parse one statement into ParsedCall(collection | None, method, args_text)."""
    statement = line.strip()
    if statement.endswith(";"):
        statement = statement[:-1].rstrip()
    if not statement:
        raise FormatError("Empty command", line)

    # --- db-level: db.createCollection("name", {...}) ---
    if statement.startswith(CREATE_COLLECTION_PREFIX):
        args_text = _extract_args(statement, len(CREATE_COLLECTION_PREFIX) - 1, statement)
        return ParsedCall(collection=None, method="createCollection", args_text=args_text)

    if not statement.startswith("db."):
        raise FormatError("MongoDB commands must start with 'db.'", statement)

    # --- collection-level: db.collection.operation(...) ---
    remaining = statement[3:]  # strip "db."
    dot_index = remaining.find(".")
    if dot_index == -1:
        raise FormatError("Invalid MongoDB command format - missing operation", statement)

    collection = remaining[:dot_index]
    if not collection:
        raise FormatError("Invalid MongoDB command format - missing collection", statement)
    operation_part = remaining[dot_index + 1:]

    paren_index = operation_part.find("(")
    if paren_index == -1:
        raise FormatError("Invalid MongoDB command format - missing parameters", statement)
    method = operation_part[:paren_index].strip()
    args_text = _extract_args(operation_part, paren_index, statement)

    if method not in SUPPORTED_METHODS:
        raise UnsupportedMethodError(method, collection, statement)

    return ParsedCall(collection=collection, method=method, args_text=args_text)
