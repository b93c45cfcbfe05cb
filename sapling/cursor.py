from dataclasses import dataclass
from typing import Callable

from sapling.constants import WHITESPACE
from sapling.errors import ExpectedLiteral, UnexpectedEof


def utf8_length(s: str) -> int:
    return len(s.encode("utf-8"))


@dataclass
class Cursor:
    """
    Read position over a source string.

    ``pos`` indexes code points into ``source``; ``offset`` is the same
    position in UTF-8 bytes, which is what failures report. Both only
    ever move forward.
    """
    source: str = ""
    pos: int = 0
    offset: int = 0

    def eof(self) -> bool:
        return self.pos >= len(self.source)

    def next_char(self) -> str:
        if self.eof():
            raise UnexpectedEof(self.offset)
        return self.source[self.pos]

    def starts_with(self, s: str) -> bool:
        return self.source.startswith(s, self.pos)

    def expect(self, s: str) -> None:
        if not self.starts_with(s):
            raise ExpectedLiteral(s, self.offset)
        self.pos += len(s)
        self.offset += utf8_length(s)

    def consume_char(self) -> str:
        c = self.next_char()
        self.pos += 1
        self.offset += utf8_length(c)
        return c

    def consume_while(self, test: Callable[[str], bool]) -> str:
        start = self.pos
        end = len(self.source)
        while self.pos < end and test(self.source[self.pos]):
            self.pos += 1
        result = self.source[start:self.pos]
        self.offset += utf8_length(result)
        return result

    def consume_whitespace(self) -> None:
        self.consume_while(lambda c: c in WHITESPACE)
