from .scanner import QuoteBraceScanner

COMMENT_PREFIX = "//"


def split_statements(src: str) -> list[str]:
    """Split a script into complete statements, allowing multi-line input.

    Full-line // comments are dropped; lines are joined with a single space.
    A statement ends on a line ending with ';' once braces and quotes are
    balanced. Whatever is left at the end is returned as a last statement.
    Trailing comments after code on the same line are kept as-is.
    """
    statements = []
    buf = []
    scanner = QuoteBraceScanner()

    for line in src.split("\n"):
        line = line.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue

        buf.append(line)
        scanner.feed(line)

        if line.endswith(";") and scanner.at_top_level:
            statements.append(" ".join(buf))
            buf = []
            scanner = QuoteBraceScanner()

    # last chunk
    if buf:
        statements.append(" ".join(buf))

    return statements
