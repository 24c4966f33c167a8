"""Conversion entry point.

Tags are copied to the output as they are. Text between tags runs through
the converters in a fixed order, unless it sits inside one of the verbatim
elements listed in `skip.SKIP_TAGS`.
"""

import sys

from .config import Config, EllipsisBehavior, QuoteBehavior
from .converters import (
    convert_dashes,
    convert_double_backticks,
    convert_ellipses,
    convert_quot_entities,
    convert_single_backticks,
    process_escapes,
)
from .entities import render_entities
from .quotes import convert_quotes
from .skip import SkipTagStack
from .tokenizer import tokenize


class Converter:
    """Per-call conversion state: output pieces, skip stack and the last
    character of the previous text token.
    """

    __slots__ = ("config", "debug", "output", "prev_last_char", "skip_tags")

    def __init__(self, config=None, *, debug=False):
        self.config = config or Config()
        self.debug = bool(debug)
        self.reset()

    def reset(self):
        """Forget everything seen by the previous `run`."""
        self.output = []
        self.skip_tags = SkipTagStack()
        # Context for curling a text token that consists of a lone quote.
        self.prev_last_char = None

    def run(self, text):
        self.reset()
        for token in tokenize(text):
            if token.kind == "tag":
                self.handle_tag(token.content)
            else:
                self.handle_text(token.content)
        return "".join(self.output)

    def handle_tag(self, tag):
        if self.skip_tags.update(tag):
            self._debug(f"skip stack now {list(self.skip_tags.names)} after {_preview(tag)}")
        else:
            self._debug(f"tag {_preview(tag)}")
        self.output.append(tag)

    def handle_text(self, text):
        last_char = text[-1:]
        if self.skip_tags.active:
            self._debug(f"skipping text {_preview(text)}")
            converted = text
        else:
            converted = self.convert_text(text)
            self._debug(f"text {_preview(text)} -> {_preview(converted)}")
        self.prev_last_char = last_char
        self.output.append(converted)

    def convert_text(self, text):
        config = self.config
        text = process_escapes(text)
        if config.convert_quot:
            text = convert_quot_entities(text)
        text = convert_dashes(text, config.double_dash.entity, config.triple_dash.entity)
        if config.ellipses is EllipsisBehavior.CONVERT_TO_ENTITY:
            text = convert_ellipses(text)
        if config.double_backticks is QuoteBehavior.CONVERT_TO_CURLY:
            text = convert_double_backticks(text)
        if config.single_backticks is QuoteBehavior.CONVERT_TO_CURLY:
            text = convert_single_backticks(text)
        if config.quote_chars is QuoteBehavior.CONVERT_TO_CURLY:
            text = convert_quotes(text, self.prev_last_char)
        return render_entities(text, config.entities.table)

    def _debug(self, message):
        if self.debug:
            print(f"typepants: {message}", file=sys.stderr)


def _preview(text, limit=20):
    if len(text) > limit:
        return f"{text[:limit]!r}..."
    return repr(text)


def convert(text, config=None, *, debug=False):
    """Return `text` with its punctuation educated according to `config`.

    `config` defaults to `Config()`; `debug=True` prints a trace of every
    token to standard error.

    >>> convert('"Isn\\'t this fun?"')
    '&#8220;Isn&#8217;t this fun?&#8221;'
    """
    return Converter(config, debug=debug).run(text or "")
