"""Parse failures.

Every failure carries the UTF-8 byte offset at which it was detected.
Callers tell the kinds apart with isinstance checks (or ``kind``); turning
one into a message for a person is what ``describe`` is for.
"""


def locate(source: str, offset: int) -> tuple[int, int]:
    """
    Map a UTF-8 byte offset into ``source`` to a 1-based (line, column).

    Columns count characters, not bytes. An offset past the end of the
    source is clamped to the end.
    """
    data = source.encode("utf-8")
    offset = max(0, min(offset, len(data)))
    prefix = data[:offset].decode("utf-8", errors="ignore")
    line = prefix.count("\n") + 1
    column = len(prefix) - (prefix.rfind("\n") + 1) + 1
    return (line, column)


class ParseError(ValueError):
    kind = "ParseError"

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        # filled in by the parser when the failure happens inside an element
        self.tag: str | None = None
        self.element_state: str | None = None

    def describe(self, source: str) -> str:
        line, column = locate(source, self.offset)
        message = f"{line}:{column}: {self.message}"
        if self.tag is not None:
            message += f" (in <{self.tag}>, {self.element_state})"
        elif self.element_state is not None:
            message += f" ({self.element_state})"
        return message


class ExpectedLiteral(ParseError):
    kind = "ExpectedLiteral"

    def __init__(self, literal: str, offset: int) -> None:
        super().__init__(
            f"Expected {literal!r} at byte {offset} but it was not found",
            offset,
        )
        self.literal = literal


class ExpectedName(ExpectedLiteral):
    """An element or attribute name was empty."""

    def __init__(self, offset: int) -> None:
        ParseError.__init__(
            self, f"Expected a name at byte {offset} but it was empty", offset
        )
        self.literal = "name"


class UnexpectedEof(ParseError):
    kind = "UnexpectedEof"

    def __init__(self, offset: int) -> None:
        super().__init__(f"Unexpected end of input at byte {offset}", offset)


class MalformedAttributeQuote(ParseError):
    kind = "MalformedAttributeQuote"

    def __init__(self, quote: str, offset: int) -> None:
        super().__init__(
            f"Attribute value at byte {offset} opens with {quote!r}, "
            "expected a double or single quote",
            offset,
        )
        self.quote = quote
