from dataclasses import dataclass, field

from sapling.constants import QUOTE_CHARS, SYNTHETIC_ROOT_TAG
from sapling.cursor import Cursor
from sapling.errors import ExpectedName, MalformedAttributeQuote, ParseError
from sapling.node import Element, Node, Text, elem, text
from sapling.state_machine import ElementState, ElementStateMachine


def is_name_char(c: str) -> bool:
    return c.isascii() and c.isalnum()


@dataclass
class OpenElement:
    """An element whose start tag has been read but not its end tag."""
    tag: str
    attributes: dict[str, str]
    machine: ElementStateMachine
    children: list[Node] = field(default_factory=list)

    def build(self) -> Element:
        return elem(self.tag, self.attributes, self.children)


@dataclass
class HTMLParser:
    """
    Recursive-descent parser over a single source string.

    Nesting is tracked on ``unfinished`` rather than the Python call
    stack, so deeply nested documents don't hit the recursion limit.
    """
    body: str = ""
    cursor: Cursor = field(init=False)
    unfinished: list[OpenElement] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.cursor = Cursor(source=self.body)

    def parse(self) -> Node:
        nodes = self.parse_nodes()
        if len(nodes) == 1:
            return nodes[0]
        return elem(SYNTHETIC_ROOT_TAG, {}, nodes)

    def parse_name(self) -> str:
        start = self.cursor.offset
        name = self.cursor.consume_while(is_name_char)
        if not name:
            raise ExpectedName(start)
        return name

    def parse_node(self) -> Node:
        if self.cursor.starts_with("<"):
            return self.parse_element()
        return self.parse_text()

    def parse_text(self) -> Text:
        return text(self.cursor.consume_while(lambda c: c != '<'))

    def parse_element(self) -> Element:
        depth = len(self.unfinished)
        self.unfinished.append(self.open_element())
        node, = self.parse_content(depth, single=True)
        assert isinstance(node, Element)
        return node

    def parse_attr(self) -> tuple[str, str]:
        name = self.parse_name()
        self.cursor.expect("=")
        value = self.parse_attr_value()
        return (name, value)

    def parse_attr_value(self) -> str:
        start = self.cursor.offset
        open_quote = self.cursor.consume_char()
        if open_quote not in QUOTE_CHARS:
            raise MalformedAttributeQuote(open_quote, start)
        value = self.cursor.consume_while(lambda c: c != open_quote)
        # can only be the matching quote, or EOF
        self.cursor.consume_char()
        return value

    def parse_attributes(self) -> dict[str, str]:
        attributes: dict[str, str] = {}
        while True:
            self.cursor.consume_whitespace()
            if self.cursor.next_char() == '>':
                break
            name, value = self.parse_attr()
            attributes[name] = value
        return attributes

    def parse_nodes(self) -> list[Node]:
        return self.parse_content(len(self.unfinished))

    def parse_content(self, depth: int, single: bool = False) -> list[Node]:
        """
        Parse nodes until the open-element stack is back at ``depth``.

        With ``single`` the element already pushed at ``depth`` is
        parsed to its end tag and returned alone. Otherwise this is the
        node-list production: it stops at EOF or ``</`` once every
        element it opened has been closed.
        """
        collected: list[Node] = []
        try:
            while True:
                if single and collected and len(self.unfinished) == depth:
                    return collected

                self.cursor.consume_whitespace()
                if self.cursor.eof() or self.cursor.starts_with("</"):
                    if len(self.unfinished) == depth:
                        return collected
                    node = self.close_element()
                    self.current_children(depth, collected).append(node)
                elif self.cursor.starts_with("<"):
                    self.unfinished.append(self.open_element())
                else:
                    node = self.parse_text()
                    self.current_children(depth, collected).append(node)
        except ParseError as error:
            if error.element_state is None and self.unfinished:
                current = self.unfinished[-1]
                error.tag = current.tag
                error.element_state = current.machine.state.name
            raise

    def current_children(
        self, depth: int, collected: list[Node]
    ) -> list[Node]:
        if len(self.unfinished) > depth:
            return self.unfinished[-1].children
        return collected

    def open_element(self) -> OpenElement:
        machine = ElementStateMachine()
        tag: str | None = None
        try:
            self.cursor.expect("<")
            machine.advance(ElementState.TAG_NAME)
            tag = self.parse_name()
            machine.advance(ElementState.ATTR_LIST)
            attributes = self.parse_attributes()
            machine.advance(ElementState.CLOSE_ANGLE)
            self.cursor.expect(">")
        except ParseError as error:
            error.tag = tag
            error.element_state = machine.state.name
            raise
        machine.advance(ElementState.CHILDREN)
        return OpenElement(tag=tag, attributes=attributes, machine=machine)

    def close_element(self) -> Element:
        current = self.unfinished[-1]
        current.machine.advance(ElementState.CLOSE_SLASH_ANGLE)
        self.cursor.expect("</")
        current.machine.advance(ElementState.END_TAG_NAME)
        self.cursor.expect(current.tag)
        current.machine.advance(ElementState.END_ANGLE)
        self.cursor.expect(">")
        current.machine.advance(ElementState.DONE)
        self.unfinished.pop()
        return current.build()


def parse(source: str) -> Node:
    return HTMLParser(body=source).parse()
