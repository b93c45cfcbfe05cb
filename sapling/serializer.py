import json
from typing import Any

from sapling.node import Element, Node, NodeType, Text


def quote_attribute(value: str) -> str:
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    raise ValueError(
        f"Attribute value {value!r} contains both quote characters"
    )


def serialize(node: Node) -> str:
    """
    Render a tree in canonical form.

    Attributes come out sorted by name and nothing is emitted between
    elements, so parsing the result gives back an equal tree.
    """
    parts: list[str] = []
    write_node(node, parts)
    return "".join(parts)


def write_node(node: Node, parts: list[str]) -> None:
    # explicit stack: trees from the parser can nest deeper than the
    # recursion limit
    stack: list[Node | str] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Text):
            parts.append(item.text)
        elif isinstance(item, Element):
            attrs = "".join(
                f" {name}={quote_attribute(item.attributes[name])}"
                for name in sorted(item.attributes)
            )
            parts.append(f"<{item.tag}{attrs}>")
            stack.append(f"</{item.tag}>")
            stack.extend(reversed(item.children))
        else:
            raise TypeError(f"Unsupported node: {item!r}")


def to_dict(node: Node) -> dict[str, Any]:
    result: dict[str, Any] = {}
    stack: list[tuple[Node, dict[str, Any]]] = [(node, result)]
    while stack:
        current, target = stack.pop()
        if current.node_type == NodeType.TEXT:
            assert isinstance(current, Text)
            target.update(type="text", text=current.text)
            continue

        assert isinstance(current, Element)
        children: list[dict[str, Any]] = []
        target.update(
            type="element",
            tag=current.tag,
            attributes=dict(current.attributes),
            children=children,
        )
        for child in current.children:
            child_dict: dict[str, Any] = {}
            children.append(child_dict)
            stack.append((child, child_dict))
    return result


def to_json(node: Node, indent: int | None = None) -> str:
    """
    Encode ``to_dict(node)`` as JSON text without recursing.

    json.dumps recurses once per nesting level; this walks an explicit
    stack instead. Attribute maps are flat and go through json.dumps.
    """
    item_sep = ", " if indent is None else ","

    def newline(level: int) -> str:
        if indent is None:
            return ""
        return "\n" + " " * (indent * level)

    parts: list[str] = []
    stack: list[tuple[Node, int] | str] = [(node, 0)]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        current, level = item
        inner = newline(level + 1)
        if isinstance(current, Text):
            parts.append(
                "{" + inner + '"type": "text"' + item_sep
                + inner + '"text": ' + json.dumps(current.text)
                + newline(level) + "}"
            )
            continue

        assert isinstance(current, Element)
        parts.append(
            "{" + inner + '"type": "element"' + item_sep
            + inner + '"tag": ' + json.dumps(current.tag) + item_sep
            + inner + '"attributes": ' + json.dumps(dict(current.attributes))
            + item_sep + inner + '"children": ['
        )
        if not current.children:
            parts.append("]" + newline(level) + "}")
            continue

        stack.append(inner + "]" + newline(level) + "}")
        for i in reversed(range(len(current.children))):
            stack.append((current.children[i], level + 2))
            stack.append((item_sep if i else "") + newline(level + 2))
    return "".join(parts)


def format_tree(node: Node, indent: int = 0, step: int = 2) -> str:
    lines: list[str] = []
    stack: list[tuple[Node, int]] = [(node, indent)]
    while stack:
        current, level = stack.pop()
        lines.append(" " * level + repr(current))
        for child in reversed(current.children):
            stack.append((child, level + step))
    return "\n".join(lines)


def print_tree(node: Node, indent: int = 0) -> None:
    print(format_tree(node, indent))
