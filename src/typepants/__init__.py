from .config import (
    Config,
    ConfigError,
    DashBehavior,
    EllipsisBehavior,
    EntityStyle,
    QuoteBehavior,
)
from .converter import Converter, convert
from .quotes import convert_quotes
from .tokenizer import tokenize
from .tokens import Tag, Text

__all__ = [
    "Config",
    "ConfigError",
    "Converter",
    "DashBehavior",
    "EllipsisBehavior",
    "EntityStyle",
    "QuoteBehavior",
    "Tag",
    "Text",
    "convert",
    "convert_quotes",
    "tokenize",
]
