"""Tag-soup tokenizer.

Splits an HTML string into tag tokens, which are never converted, and text
tokens, which may be. No tree is built and nothing is validated: a tag is
anything from `<` to the next `>`, and a comment is `<!--` up to the first
`--` followed by optional whitespace and `>`.

Based on the _tokenize() routines of SmartyPants and Brad Choate's MTRegex.
"""

import re

from .tokens import Tag, Text

_TAG_SOUP = re.compile(r"(?P<text>[^<]*)(?P<tag><!--.*?--\s*>|<[^>]*>)?", re.DOTALL)

# Used once no comment can end further on, so an unterminated `<!--` does not
# rescan the rest of the input.
_TAG_SOUP_WITHOUT_COMMENTS = re.compile(r"(?P<text>[^<]*)(?P<tag><[^>]*>)?")

_COMMENT_END = re.compile(r"--\s*>")

_COMMENT_START = "<!--"


def _last_comment_end(text):
    """Start of the last `--` that is followed by optional whitespace and `>`, or -1."""
    start = -1
    for match in _COMMENT_END.finditer(text):
        start = match.start()
    return start


def tokenize(text):
    """Return the list of tokens making up `text`.

    Joining the token contents gives back `text` unchanged.
    """
    tokens = []
    append = tokens.append
    pos = 0
    length = len(text)
    last_comment_end = _last_comment_end(text)
    while pos < length:
        # A comment opened at or after pos needs its closing `--` past the `<!--`.
        if pos + len(_COMMENT_START) <= last_comment_end:
            match = _TAG_SOUP.match(text, pos)
        else:
            match = _TAG_SOUP_WITHOUT_COMMENTS.match(text, pos)
        tag = match.group("tag")
        if tag is None:
            # Either the end of the input or a `<` with no `>` after it; in
            # both cases nothing left can be a tag.
            append(Text(text[pos:]))
            break
        plain = match.group("text")
        if plain:
            append(Text(plain))
        # HTML4 asks authors to avoid `--` inside comments and HTML5 forbids
        # it, so such a span is treated as text and its dashes get converted.
        if is_comment(tag) and "--" in comment_text(tag):
            append(Text(tag))
        else:
            append(Tag(tag))
        pos = match.end()
    return tokens


def is_comment(tag):
    return tag.startswith(_COMMENT_START)


def comment_text(comment):
    """Return the body of `comment` without its `<!--` and `-->` delimiters."""
    body = comment[len(_COMMENT_START):] if comment.startswith(_COMMENT_START) else comment
    if body.endswith(">"):
        body = body[:-1]
    body = body.rstrip()
    if body.endswith("-"):
        body = body[:-1]
    return body
