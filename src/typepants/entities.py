"""Punctuation entities and output rendering.

Every converter emits decimal numeric character references (&#8220; and
friends) as the canonical internal form. The final rendering step maps those
references to the configured output style.
"""

from __future__ import annotations

import re

# Escaped literals
SINGLE_STRAIGHT_QUOTE = "&#39;"  # '
DOUBLE_STRAIGHT_QUOTE = "&#34;"  # "
HYPHEN = "&#45;"  # -
FULL_STOP = "&#46;"  # .
BACKSLASH = "&#92;"  # \
BACKTICK = "&#96;"  # `

# Produced punctuation
EN_DASH = "&#8211;"
EM_DASH = "&#8212;"
OPENING_SINGLE_QUOTE = "&#8216;"
CLOSING_SINGLE_QUOTE = "&#8217;"
OPENING_DOUBLE_QUOTE = "&#8220;"
CLOSING_DOUBLE_QUOTE = "&#8221;"
ELLIPSIS = "&#8230;"

# Other spellings of the dashes that may already be present in the input
EN_DASH_HEX = "&#x2013;"
EM_DASH_HEX = "&#x2014;"
NBSP_NAMED = "&nbsp;"
QUOT_NAMED = "&quot;"

NAMED_ENTITIES = {
    EN_DASH: "&ndash;",
    EM_DASH: "&mdash;",
    OPENING_SINGLE_QUOTE: "&lsquo;",
    CLOSING_SINGLE_QUOTE: "&rsquo;",
    OPENING_DOUBLE_QUOTE: "&ldquo;",
    CLOSING_DOUBLE_QUOTE: "&rdquo;",
    ELLIPSIS: "&hellip;",
}

UNICODE_CHARACTERS = {
    EN_DASH: "\u2013",  # EN DASH
    EM_DASH: "\u2014",  # EM DASH
    OPENING_SINGLE_QUOTE: "\u2018",  # LEFT SINGLE QUOTATION MARK
    CLOSING_SINGLE_QUOTE: "\u2019",  # RIGHT SINGLE QUOTATION MARK
    OPENING_DOUBLE_QUOTE: "\u201c",  # LEFT DOUBLE QUOTATION MARK
    CLOSING_DOUBLE_QUOTE: "\u201d",  # RIGHT DOUBLE QUOTATION MARK
    ELLIPSIS: "\u2026",  # HORIZONTAL ELLIPSIS
}

ASCII_EQUIVALENTS = {
    EN_DASH: "-",
    EM_DASH: "--",
    OPENING_SINGLE_QUOTE: "'",
    CLOSING_SINGLE_QUOTE: "'",
    OPENING_DOUBLE_QUOTE: '"',
    CLOSING_DOUBLE_QUOTE: '"',
    ELLIPSIS: "...",
}

_PRODUCED_PATTERN = re.compile("|".join(re.escape(entity) for entity in NAMED_ENTITIES))


def render_entities(text: str, table: dict[str, str] | None) -> str:
    """Replace the canonical numeric references in `text` using `table`.

    A `table` of None keeps the numeric references as they are. Escaped
    literals (&#34;, &#39; ...) are never touched, so a backslash-escaped
    quote survives as an entity in every output style.
    """
    if table is None or "&#" not in text:
        return text
    return _PRODUCED_PATTERN.sub(lambda match: table[match.group(0)], text)
