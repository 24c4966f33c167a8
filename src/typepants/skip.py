import re

# Elements whose text is shown verbatim and must never be converted.
SKIP_TAGS = ("pre", "samp", "code", "tt", "kbd", "script", "style", "math")

_SKIP_TAG_PATTERN = re.compile(rf"<(/)?({'|'.join(SKIP_TAGS)})[^>]*>", re.IGNORECASE)


class SkipTagStack:
    """Tracks open verbatim elements across the tag tokens of one document.

    Closing tags only pop when they match the innermost open element; any
    other closing tag is ignored, as browsers do with stray end tags.
    """

    __slots__ = ("_stack",)

    def __init__(self):
        self._stack = []

    @property
    def active(self):
        """True while inside at least one verbatim element."""
        return bool(self._stack)

    @property
    def names(self):
        return tuple(self._stack)

    def __len__(self):
        return len(self._stack)

    def update(self, tag):
        """Push or pop according to `tag`. Returns True if the stack changed."""
        match = _SKIP_TAG_PATTERN.match(tag)
        if match is None:
            return False
        name = match.group(2).lower()
        if not match.group(1):
            self._stack.append(name)
            return True
        if self._stack and self._stack[-1] == name:
            self._stack.pop()
            return True
        return False
