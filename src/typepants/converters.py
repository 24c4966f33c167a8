"""Fixed-string substitutions run before the quote engine.

These are plain replacements: no context is inspected, but the order of the
replacements inside each function matters.
"""

from .entities import (
    BACKSLASH,
    BACKTICK,
    CLOSING_DOUBLE_QUOTE,
    CLOSING_SINGLE_QUOTE,
    DOUBLE_STRAIGHT_QUOTE,
    ELLIPSIS,
    FULL_STOP,
    HYPHEN,
    OPENING_DOUBLE_QUOTE,
    OPENING_SINGLE_QUOTE,
    QUOT_NAMED,
    SINGLE_STRAIGHT_QUOTE,
)

# `\\` must come first, or `\\"` would turn into a backslash plus an escaped quote.
ESCAPES = (
    ("\\\\", BACKSLASH),
    ('\\"', DOUBLE_STRAIGHT_QUOTE),
    ("\\'", SINGLE_STRAIGHT_QUOTE),
    ("\\.", FULL_STOP),
    ("\\-", HYPHEN),
    ("\\`", BACKTICK),
)


def process_escapes(text):
    r"""Replace backslash escapes with numeric entities.

    This forces a "dumb" character through every later stage untouched:

        \\  ->  &#92;
        \"  ->  &#34;
        \'  ->  &#39;
        \.  ->  &#46;
        \-  ->  &#45;
        \`  ->  &#96;
    """
    if "\\" not in text:
        return text
    for escape, entity in ESCAPES:
        text = text.replace(escape, entity)
    return text


def convert_quot_entities(text):
    """Turn `&quot;` into a plain `"` so that the quote engine can curl it."""
    return text.replace(QUOT_NAMED, '"')


def convert_dashes(text, double_dash=None, triple_dash=None):
    """Replace `---` with `triple_dash` and then `--` with `double_dash`.

    Either replacement is skipped when its entity is None.
    """
    if "--" not in text:
        return text
    if triple_dash is not None:
        text = text.replace("---", triple_dash)
    if double_dash is not None:
        text = text.replace("--", double_dash)
    return text


def convert_ellipses(text):
    """Replace `...` and `. . .` with the ellipsis entity.

    >>> convert_ellipses("Huh...?")
    'Huh&#8230;?'
    """
    return text.replace("...", ELLIPSIS).replace(". . .", ELLIPSIS)


def convert_double_backticks(text):
    """Replace ``like this'' with curly double quotes."""
    return text.replace("``", OPENING_DOUBLE_QUOTE).replace("''", CLOSING_DOUBLE_QUOTE)


def convert_single_backticks(text):
    """Replace `like this' with curly single quotes.

    Every remaining `'` becomes a closing quote, so run this after
    `convert_double_backticks`.
    """
    return text.replace("`", OPENING_SINGLE_QUOTE).replace("'", CLOSING_SINGLE_QUOTE)
