import json
from typing import Any

from .errors import ArgumentTypeError, LooseLiteralParseError
from .scanner import QuoteBraceScanner


def unify_quotes(s: str) -> str:
    """Single quotes become double quotes, everywhere."""
    return s.replace("'", '"')


def remove_trailing_commas(s: str) -> str:
    """Drop commas (outside strings) whose next non-blank character is } or ]."""
    out = []
    scanner = QuoteBraceScanner()
    n = len(s)
    for i, ch in enumerate(s):
        if ch == "," and scanner.in_quote is None:
            j = i + 1
            while j < n and s[j].isspace():
                j += 1
            if j < n and s[j] in "}]":
                continue
        scanner.advance(ch)
        out.append(ch)
    return "".join(out)


def _is_ident_start(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch in "_$")


def _is_ident_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def quote_keys(s: str) -> str:
    """Wrap unquoted identifier keys (name, _id, $set ...) in double quotes.

    Identifiers not followed by a colon (true, null, bare words) are left alone.
    """
    out = []
    scanner = QuoteBraceScanner()
    i, n = 0, len(s)
    while i < n:
        ch = s[i]
        if scanner.in_quote is None and _is_ident_start(ch) and not (i and _is_ident_char(s[i - 1])):
            start = i
            i += 1
            while i < n and _is_ident_char(s[i]):
                i += 1
            key = s[start:i]
            j = i
            while j < n and s[j].isspace():
                j += 1
            if j < n and s[j] == ":":
                out.append(f'"{key}"')
            else:
                out.append(key)
            continue
        scanner.advance(ch)
        out.append(ch)
        i += 1
    return "".join(out)


def mongo_shell_to_json(s: str) -> str:
    """Convert common Mongo shell object/array syntax to strict JSON.

    Pragmatic, not a full JS parser. Strict JSON comes back unchanged as long
    as it contains no apostrophes.
    """
    if not s:
        return s
    s = unify_quotes(s)
    s = remove_trailing_commas(s)
    return quote_keys(s)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not allowed in JSON")


def parse_loose_literal(text: str, **kwargs) -> Any:
    """Normalize one loose literal and decode it (extra kwargs go to json.loads).

    NaN, Infinity and -Infinity are rejected.
    """
    kwargs.setdefault("parse_constant", _reject_constant)
    text = text.strip()
    if not text:
        raise LooseLiteralParseError("Empty literal", text)
    normalized = mongo_shell_to_json(text)
    try:
        return json.loads(normalized, **kwargs)
    except json.JSONDecodeError as e:
        raise LooseLiteralParseError(f"Invalid literal ({e.msg} at position {e.pos})", normalized) from e
    except ValueError as e:
        raise LooseLiteralParseError(f"Invalid literal ({e})", normalized) from e


def parse_loose_pairs(text: str) -> list[tuple[str, Any]]:
    """Decode a loose object literal into its (key, value) pairs in source order."""
    seen = []

    def hook(pairs):
        seen.append(pairs)
        return dict(pairs)

    value = parse_loose_literal(text, object_pairs_hook=hook)
    if not isinstance(value, dict):
        raise ArgumentTypeError(f"Expected an object literal, got {type(value).__name__}")
    # the outermost object is decoded last
    return list(seen[-1])
