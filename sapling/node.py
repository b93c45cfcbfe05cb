from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping


class NodeType(Enum):
    TEXT = 1
    ELEMENT = 2


@dataclass(frozen=True)
class Node(ABC):
    children: tuple['Node', ...] = field(default_factory=tuple)

    @property
    @abstractmethod
    def node_type(self) -> NodeType:
        ...


@dataclass(frozen=True, repr=False)
class Element(Node):
    tag: str = ""
    attributes: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        # read-only copies of the caller's containers
        object.__setattr__(
            self, 'attributes', MappingProxyType(dict(self.attributes))
        )
        object.__setattr__(self, 'children', tuple(self.children))

    def __repr__(self) -> str:
        if not self.attributes:
            return f"<{self.tag}>"
        return f"<{self.tag} {self.attribute_str}>"

    @property
    def node_type(self) -> NodeType:
        return NodeType.ELEMENT

    @property
    def attribute_str(self) -> str:
        attrs: list[str] = []
        for key, value in self.attributes.items():
            attrs.append(f'{key}="{value}"')
        return " ".join(attrs)


@dataclass(frozen=True, repr=False)
class Text(Node):
    text: str = ""

    def __repr__(self) -> str:
        return repr(self.text)

    @property
    def node_type(self) -> NodeType:
        return NodeType.TEXT


def text(data: str) -> Text:
    return Text(text=data)


def elem(
    tag: str,
    attributes: Mapping[str, str],
    children: Iterable[Node],
) -> Element:
    return Element(tag=tag, attributes=attributes, children=tuple(children))
