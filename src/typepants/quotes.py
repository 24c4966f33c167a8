"""Curling of straight quotes.

A straight `'` or `"` is turned into an opening or closing curly quote using
only the characters around it. The rules below are the SmartyPants
heuristics: they work for ordinary English prose and will get unusual
constructions wrong (a leading contraction such as 'Twas comes out as an
opening quote). They never fail; every quote ends up curled one way or the
other.

The rules run in a fixed order and each one relies on the earlier ones having
already dealt with the more specific cases.
"""

from __future__ import annotations

import re
import string

from .entities import (
    CLOSING_DOUBLE_QUOTE,
    CLOSING_SINGLE_QUOTE,
    EM_DASH,
    EM_DASH_HEX,
    EN_DASH,
    EN_DASH_HEX,
    NBSP_NAMED,
    OPENING_DOUBLE_QUOTE,
    OPENING_SINGLE_QUOTE,
)

_PUNCT_CLASS = f"[{re.escape(string.punctuation)}]"

# Characters after which a quote is taken to be closing.
_CLOSE_CLASS = r"[^\ \t\r\n\[\{\(\-]"

# Whitespace, a non-breaking space, a pair of dashes or any dash entity.
_OPENING_PREFIX = "|".join(
    (
        r"\s",
        re.escape(NBSP_NAMED),
        "--",
        "&[mn]dash;",
        re.escape(EN_DASH),
        re.escape(EM_DASH),
        re.escape(EN_DASH_HEX),
        re.escape(EM_DASH_HEX),
    )
)

_WHITESPACE = re.compile(r"\s")

# A quote starting the run and followed by punctuation at a non-word break is
# closed by brute force, e.g. the apostrophe in '. or the quote in ",
_LEADING_SINGLE_QUOTE = re.compile(rf"^'(?={_PUNCT_CLASS}\B)")
_LEADING_DOUBLE_QUOTE = re.compile(rf'^"(?={_PUNCT_CLASS}\B)')

# Double sets of quotes: He said, "'Quoted' words in a larger quote."
_DOUBLE_THEN_SINGLE = re.compile(r""""'(?=\w)""")
_SINGLE_THEN_DOUBLE = re.compile(r"""'"(?=\w)""")

# Decade abbreviations: the '80s
_DECADE = re.compile(r"'(?=\d{2}s\b)")

_OPENING_SINGLE = re.compile(rf"(?P<prefix>{_OPENING_PREFIX})'(?=\w)")
_OPENING_DOUBLE = re.compile(rf'(?P<prefix>{_OPENING_PREFIX})"(?=\w)')

# Without a closing character in front, the quote still closes when followed
# by whitespace, the end of the run, or an `s` ending a word. The last case is
# for possessives after markup: <i>Custer</i>'s Last Stand.
_CLOSING_SINGLE = re.compile(rf"(?P<close>{_CLOSE_CLASS})?'(?(close)|(?=\s|s\b|$))")
_CLOSING_DOUBLE = re.compile(rf'(?P<close>{_CLOSE_CLASS})?"(?(close)|(?=\s|$))')


def convert_quotes(text: str, prev_last_char: str | None = None) -> str:
    """Curl the straight quotes of `text`.

    `prev_last_char` is the last character of the previous text token. It is
    only consulted when `text` is a lone quote character, which happens when
    a quote sits directly between two tags.

    >>> convert_quotes('"Isn\\'t this fun?"')
    '&#8220;Isn&#8217;t this fun?&#8221;'
    """
    if text == "'":
        return convert_single_quote_token(prev_last_char)
    if text == '"':
        return convert_double_quote_token(prev_last_char)

    text = convert_leading_quote_with_punctuation(text)
    text = convert_double_sets_of_quotes(text)
    text = convert_decade_abbreviations(text)

    text = convert_opening_single_quotes(text)
    text = convert_closing_single_quotes(text)
    text = text.replace("'", OPENING_SINGLE_QUOTE)

    text = convert_opening_double_quotes(text)
    text = convert_closing_double_quotes(text)
    return text.replace('"', OPENING_DOUBLE_QUOTE)


def _follows_whitespace(prev_last_char):
    return prev_last_char is not None and _WHITESPACE.match(prev_last_char) is not None


def convert_single_quote_token(prev_last_char):
    """Curl a text token that is just `'`: opening after whitespace, else closing."""
    if _follows_whitespace(prev_last_char):
        return OPENING_SINGLE_QUOTE
    return CLOSING_SINGLE_QUOTE


def convert_double_quote_token(prev_last_char):
    """Curl a text token that is just `"`: opening after whitespace, else closing."""
    if _follows_whitespace(prev_last_char):
        return OPENING_DOUBLE_QUOTE
    return CLOSING_DOUBLE_QUOTE


def convert_leading_quote_with_punctuation(text):
    text = _LEADING_SINGLE_QUOTE.sub(CLOSING_SINGLE_QUOTE, text, count=1)
    return _LEADING_DOUBLE_QUOTE.sub(CLOSING_DOUBLE_QUOTE, text, count=1)


def convert_double_sets_of_quotes(text):
    text = _DOUBLE_THEN_SINGLE.sub(OPENING_DOUBLE_QUOTE + OPENING_SINGLE_QUOTE, text)
    return _SINGLE_THEN_DOUBLE.sub(OPENING_SINGLE_QUOTE + OPENING_DOUBLE_QUOTE, text)


def convert_decade_abbreviations(text):
    return _DECADE.sub(CLOSING_SINGLE_QUOTE, text)


def convert_opening_single_quotes(text):
    return _OPENING_SINGLE.sub(rf"\g<prefix>{OPENING_SINGLE_QUOTE}", text)


def convert_closing_single_quotes(text):
    return _CLOSING_SINGLE.sub(rf"\g<close>{CLOSING_SINGLE_QUOTE}", text)


def convert_opening_double_quotes(text):
    return _OPENING_DOUBLE.sub(rf"\g<prefix>{OPENING_DOUBLE_QUOTE}", text)


def convert_closing_double_quotes(text):
    return _CLOSING_DOUBLE.sub(rf"\g<close>{CLOSING_DOUBLE_QUOTE}", text)
