from typing import Optional

QUOTES = ('"', "'")
OPENERS = ("{", "[", "(")
CLOSERS = ("}", "]", ")")


class QuoteBraceScanner:
    """Track quote state and nesting depth one character at a time.

    A quote closes only on the same delimiter that opened it, so the other
    quote character inside a quoted literal is plain text. There is no
    escape handling. Depth counts {, [ and ( and is frozen while a quote is
    open. Create a new scanner for every independent scan.
    """

    def __init__(self):
        self.in_quote: Optional[str] = None
        self.depth = 0

    @property
    def at_top_level(self) -> bool:
        return self.depth == 0 and self.in_quote is None

    def advance(self, ch: str) -> None:
        if self.in_quote is not None:
            if ch == self.in_quote:
                self.in_quote = None
            return
        if ch in QUOTES:
            self.in_quote = ch
        elif ch in OPENERS:
            self.depth += 1
        elif ch in CLOSERS:
            self.depth -= 1

    def feed(self, text: str) -> None:
        for ch in text:
            self.advance(ch)

