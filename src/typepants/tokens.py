class Token:
    """A span of the input, either markup (`Tag`) or convertible text (`Text`)."""

    __slots__ = ("content",)

    kind = None

    def __init__(self, content):
        self.content = content

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.content == other.content

    __hash__ = None  # Unhashable since we define __eq__

    def __repr__(self):
        return f"{self.__class__.__name__}({self.content!r})"


class Tag(Token):
    """A tag or comment exactly as written, delimiters included."""

    __slots__ = ()

    kind = "tag"


class Text(Token):
    """A non-empty run of text between tags."""

    __slots__ = ()

    kind = "text"
