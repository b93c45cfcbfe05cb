import pytest

from sapling.errors import (
    ExpectedLiteral, ExpectedName, MalformedAttributeQuote, ParseError,
    UnexpectedEof,
)
from sapling.node import Element, NodeType, Text, elem, text
from sapling.parser import HTMLParser, parse


####
# Scenarios
####

@pytest.mark.ci
def test_parser_basic_functionality():
    dom_tree = parse("<html><body>Hello</body></html>")
    assert dom_tree == elem("html", {}, [
        elem("body", {}, [text("Hello")]),
    ])


@pytest.mark.ci
def test_parser_with_attributes():
    dom_tree = parse('<p class="x" id="y">hi</p>')
    assert isinstance(dom_tree, Element)
    assert dom_tree.tag == "p"
    assert dom_tree.attributes == {"class": "x", "id": "y"}
    assert dom_tree.children == (text("hi"),)


@pytest.mark.ci
def test_parser_sibling_elements():
    dom_tree = parse("<a><b></b><c></c></a>")
    assert dom_tree == elem("a", {}, [elem("b", {}, []), elem("c", {}, [])])


@pytest.mark.ci
def test_parser_wraps_multiple_top_level_nodes():
    dom_tree = parse("<a></a><b></b>")
    assert dom_tree == elem("html", {}, [elem("a", {}, []), elem("b", {}, [])])


@pytest.mark.ci
def test_parser_interleaved_text_and_elements():
    dom_tree = parse("<p>a<b>c</b>d</p>")
    assert dom_tree == elem("p", {}, [
        text("a"),
        elem("b", {}, [text("c")]),
        text("d"),
    ])


@pytest.mark.ci
def test_parser_mismatched_end_tag():
    with pytest.raises(ExpectedLiteral) as excinfo:
        parse("<p>oops</q>")
    assert excinfo.value.literal == "p"
    # "</" ends at byte 9, where the "q" is
    assert excinfo.value.offset == 9
    assert excinfo.value.tag == "p"
    assert excinfo.value.element_state == "END_TAG_NAME"


####
# Boundaries
####

@pytest.mark.ci
@pytest.mark.parametrize("content", ["", "   ", "\n\t \r\n"])
def test_parser_empty_input(content: str):
    assert parse(content) == elem("html", {}, [])


@pytest.mark.ci
def test_parser_single_text_is_root():
    dom_tree = parse("just some text")
    assert isinstance(dom_tree, Text)
    assert dom_tree.node_type == NodeType.TEXT
    assert dom_tree.text == "just some text"


@pytest.mark.ci
def test_parser_text_then_element_is_wrapped():
    dom_tree = parse("hello <b>world</b>")
    assert dom_tree == elem("html", {}, [
        text("hello "),
        elem("b", {}, [text("world")]),
    ])


@pytest.mark.ci
def test_quote_handling_in_attributes():
    content = '<a href="http://example.com" title=\'Example "Site"\' k="it\'s">Link</a>'
    a_tag = parse(content)
    assert isinstance(a_tag, Element)
    assert a_tag.attributes["href"] == "http://example.com"
    assert a_tag.attributes["title"] == 'Example "Site"'
    assert a_tag.attributes["k"] == "it's"


@pytest.mark.ci
def test_duplicate_attributes_last_wins():
    dom_tree = parse('<div id="first" class="a" id="second"></div>')
    assert isinstance(dom_tree, Element)
    assert dom_tree.attributes == {"id": "second", "class": "a"}


@pytest.mark.ci
def test_attribute_values_keep_markup_characters():
    dom_tree = parse('<a title="1 < 2 > 0 &amp;">x</a>')
    assert isinstance(dom_tree, Element)
    assert dom_tree.attributes["title"] == "1 < 2 > 0 &amp;"


@pytest.mark.ci
def test_whitespace_around_attributes():
    dom_tree = parse('<div \n class="a"\t id="b"  ></div>')
    assert dom_tree == elem("div", {"class": "a", "id": "b"}, [])


@pytest.mark.ci
def test_tag_names_are_case_sensitive():
    assert parse("<Div></Div>") == elem("Div", {}, [])
    with pytest.raises(ExpectedLiteral) as excinfo:
        parse("<Div></div>")
    assert excinfo.value.literal == "Div"


@pytest.mark.ci
def test_digits_in_names():
    dom_tree = parse('<h1 data2="x">Title</h1>')
    assert dom_tree == elem("h1", {"data2": "x"}, [text("Title")])


####
# Whitespace
####

@pytest.mark.ci
def test_whitespace_between_elements_is_discarded():
    compact = parse("<ul><li>one</li><li>two</li></ul>")
    spaced = parse("""
        <ul>
            <li>one</li>
            <li>two</li>
        </ul>
    """)
    assert compact == spaced


@pytest.mark.ci
def test_whitespace_inside_text_is_preserved():
    dom_tree = parse("<p>  two  words  <b>x</b></p>")
    assert isinstance(dom_tree, Element)
    # leading run is node-list whitespace, the rest belongs to the text
    assert dom_tree.children[0] == text("two  words  ")


@pytest.mark.ci
def test_non_ascii_text_and_attributes_pass_through():
    dom_tree = parse('<p title="café">naïve ☃ text</p>')
    assert dom_tree == elem("p", {"title": "café"}, [text("naïve ☃ text")])


@pytest.mark.ci
def test_trailing_close_tag_at_top_level_is_ignored():
    assert parse("<a></a></b>") == elem("a", {}, [])


####
# Failures
####

@pytest.mark.ci
def test_unclosed_element():
    with pytest.raises(ExpectedLiteral) as excinfo:
        parse("<p>text")
    assert excinfo.value.literal == "</"
    assert excinfo.value.offset == 7


@pytest.mark.ci
def test_missing_close_angle_on_end_tag():
    with pytest.raises(ExpectedLiteral) as excinfo:
        parse("<p></pp>")
    assert excinfo.value.literal == ">"
    assert excinfo.value.offset == 6


@pytest.mark.ci
def test_attribute_without_value():
    with pytest.raises(ExpectedLiteral) as excinfo:
        parse("<input disabled></input>")
    assert excinfo.value.literal == "="
    assert excinfo.value.offset == 15


@pytest.mark.ci
def test_unquoted_attribute_value():
    with pytest.raises(MalformedAttributeQuote) as excinfo:
        parse("<p id=main></p>")
    assert excinfo.value.quote == "m"
    assert excinfo.value.offset == 6


@pytest.mark.ci
def test_unterminated_attribute_value():
    with pytest.raises(UnexpectedEof) as excinfo:
        parse('<p id="main></p>')
    assert excinfo.value.offset == 16
    assert excinfo.value.element_state == "ATTR_LIST"


@pytest.mark.ci
def test_eof_inside_start_tag():
    with pytest.raises(UnexpectedEof):
        parse("<p ")


@pytest.mark.ci
def test_empty_tag_name():
    with pytest.raises(ExpectedName) as excinfo:
        parse("<></>")
    assert isinstance(excinfo.value, ExpectedLiteral)
    assert excinfo.value.offset == 1


@pytest.mark.ci
def test_comments_are_not_accepted():
    with pytest.raises(ParseError):
        parse("<!-- comment --><p></p>")


@pytest.mark.ci
def test_failure_offsets_count_utf8_bytes():
    with pytest.raises(ExpectedLiteral) as excinfo:
        parse("<p>é</q>")
    # "é" is two bytes
    assert excinfo.value.offset == 7


@pytest.mark.ci
def test_failures_are_value_errors():
    with pytest.raises(ValueError):
        parse("<p>")


####
# Properties
####

@pytest.mark.ci
def test_parse_is_deterministic():
    content = '<div class="a"><p>one</p>two<span id="s">three</span></div>'
    assert parse(content) == parse(content)


@pytest.mark.ci
def test_parser_instance_matches_function():
    content = "<a><b>c</b></a>"
    assert HTMLParser(body=content).parse() == parse(content)


@pytest.mark.ci
def test_parser_procedures_stop_at_end_tag():
    parser = HTMLParser(body="one<b>two</b>  </rest>")
    nodes = parser.parse_nodes()
    assert nodes == [text("one"), elem("b", {}, [text("two")])]
    assert parser.cursor.starts_with("</rest>")


@pytest.mark.ci
def test_parse_element_leaves_trailing_input():
    parser = HTMLParser(body="<b>x</b>  tail")
    assert parser.parse_element() == elem("b", {}, [text("x")])
    assert parser.cursor.source[parser.cursor.pos:] == "  tail"
