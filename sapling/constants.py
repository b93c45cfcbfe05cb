SYNTHETIC_ROOT_TAG = "html"

QUOTE_CHARS = ('"', "'")

# Unicode White_Space property; str.isspace() also matches the ASCII
# separator controls 0x1C-0x1F, which are not whitespace here.
WHITESPACE = frozenset(
    chr(code_point)
    for code_point in (
        *range(0x09, 0x0E), 0x20, 0x85, 0xA0, 0x1680,
        *range(0x2000, 0x200B), 0x2028, 0x2029, 0x202F, 0x205F, 0x3000,
    )
)

# CLI
OUTPUT_FORMATS = ("tree", "html", "json")
DEFAULT_OUTPUT_FORMAT = "tree"
DEFAULT_INDENT = 2
