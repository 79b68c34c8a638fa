"""Character sets and anchored patterns used by the scanners.

Patterns are compiled once at import time and matched at the reader's
cursor with ``Pattern.match(source, pos)``, so none of them needs a
leading ``^``.
"""

import re

# Character sets
INDENT_CHARS = frozenset(" \t")
QUOTE_CHARS = frozenset("\"'")
SPACE_CHARS = frozenset(" \t\n")

DEFAULT_BRACKETS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}

# Identifiers
_NAME = r"[a-zA-Z_][a-zA-Z0-9\-_]*"
# A keyword must not run into a longer identifier (``blockquote``, ``iframe``)
_KEYWORD_END = r"(?![a-zA-Z0-9\-_])"

TAG = re.compile(_NAME)
CLASS = re.compile(rf"\.({_NAME})")
ID = re.compile(rf"#({_NAME})")
MIXIN = re.compile(rf"mixin[\t ]+({_NAME})")
MIXIN_CALL = re.compile(rf"\+({_NAME})")
ASSIGNMENT = re.compile(rf"&({_NAME})")
VARIABLE = re.compile(r"\$([a-zA-Z_][a-zA-Z0-9_]*)")
DOCTYPE = re.compile(r"(?:doctype|!!!)[\t ]+(?P<name>[^\n]*)")
FILTER = re.compile(rf":({_NAME})")

IMPORT = re.compile(
    rf"(?P<type>extends|include){_KEYWORD_END}"
    rf"(?::(?P<filter>{_NAME}))?[\t ]+(?P<path>[a-zA-Z0-9\-_\\/\. ]+)"
)
BLOCK = re.compile(
    rf"block{_KEYWORD_END}(?:[\t ]+(?P<mode>append|prepend|replace){_KEYWORD_END})?"
    rf"(?:[\t ]+(?P<name>{_NAME}))?"
)
BLOCK_SHORTHAND = re.compile(
    rf"(?P<mode>append|prepend|replace)[\t ]+(?P<name>{_NAME})"
)

EACH_HEAD = re.compile(
    r"\$?(?P<item>[a-zA-Z_][a-zA-Z0-9_]*)"
    r"(?:[\t ]*,[\t ]*\$?(?P<key>[a-zA-Z_][a-zA-Z0-9_]*))?"
    r"[\t ]+in[\t ]+"
)

# Comments, code and text
COMMENT = re.compile(r"//(?P<hidden>-)?[\t ]*")
CODE = re.compile(r"-(?!-)")
EXPRESSION = re.compile(r"[\t ]*(?P<unchecked>\?)?(?P<unescaped>!)?=[\t ]*")
TEXT_LINE = re.compile(r"(?P<escaped>!)?\|[\t ]?")
TEXT_BLOCK_START = re.compile(r"(?P<escaped>!)?\.(?=[\t \n]|$)")
EXPANSION = re.compile(r":(?P<space>[\t ]*)")

# Attributes
ATTRIBUTE_SEPARATORS = (",", " ", "\n", "\t")
ATTRIBUTE_OPERATORS = ("?!=", "?=", "!=", "=")
ATTRIBUTE_OPERATOR = re.compile(r"[\t ]*(?P<operator>\?!=|\?=|!=|=)[\t ]*")


def control_statement(*names: str) -> re.Pattern[str]:
    """Build the pattern for a control statement keyword.

    The keyword has to be followed by whitespace, a colon or the end of
    input. ``else if`` tolerates any run of spaces between its words.
    """
    alternatives = "|".join(
        re.escape(name).replace(r"\ ", r"[\t ]+") for name in names
    )
    return re.compile(rf"(?P<name>{alternatives})(?=[:\s]|$)[\t ]*")


CONDITIONAL = control_statement("if", "unless", "elseif", "else if", "else")
CASE = control_statement("case")
WHEN = control_statement("when", "default")
EACH = control_statement("each")
WHILE = control_statement("while")
DO = control_statement("do")
FOR = control_statement("for")
