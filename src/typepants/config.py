"""Conversion settings.

A `Config` is an immutable bundle of independent switches. The defaults
educate everything except `single' backticks and emit decimal numeric
entities.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum

from .entities import ASCII_EQUIVALENTS, EM_DASH, EN_DASH, NAMED_ENTITIES, UNICODE_CHARACTERS


class ConfigError(ValueError):
    """Raised when a setting or a preset string cannot be interpreted."""


class _StrEnum(str, Enum):
    """Backport of enum.StrEnum (Python 3.11+)."""


class DashBehavior(_StrEnum):
    DO_NOTHING = "do-nothing"
    EN_DASH = "en-dash"
    EM_DASH = "em-dash"

    @property
    def entity(self) -> str | None:
        if self is DashBehavior.EN_DASH:
            return EN_DASH
        if self is DashBehavior.EM_DASH:
            return EM_DASH
        return None


class EllipsisBehavior(_StrEnum):
    DO_NOTHING = "do-nothing"
    CONVERT_TO_ENTITY = "convert"


class QuoteBehavior(_StrEnum):
    DO_NOTHING = "do-nothing"
    CONVERT_TO_CURLY = "curly"


class EntityStyle(_StrEnum):
    UNICODE = "unicode"
    NUMERIC = "numeric"
    NAMED = "named"
    ASCII = "ascii"

    @property
    def table(self) -> dict[str, str] | None:
        """Replacement table for the numeric references, None to keep them."""
        if self is EntityStyle.UNICODE:
            return UNICODE_CHARACTERS
        if self is EntityStyle.NAMED:
            return NAMED_ENTITIES
        if self is EntityStyle.ASCII:
            return ASCII_EQUIVALENTS
        return None


def _coerce(enum_cls, value, field_name):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"invalid {field_name} {value!r} (choose from {choices})") from None


@dataclass(frozen=True, slots=True)
class Config:
    double_dash: DashBehavior = DashBehavior.EN_DASH
    triple_dash: DashBehavior = DashBehavior.EM_DASH
    ellipses: EllipsisBehavior = EllipsisBehavior.CONVERT_TO_ENTITY
    double_backticks: QuoteBehavior = QuoteBehavior.CONVERT_TO_CURLY
    single_backticks: QuoteBehavior = QuoteBehavior.DO_NOTHING
    quote_chars: QuoteBehavior = QuoteBehavior.CONVERT_TO_CURLY
    entities: EntityStyle = EntityStyle.NUMERIC

    # Treat &quot; as a straight double quote (Dreamweaver writes those).
    convert_quot: bool = False

    def __post_init__(self) -> None:
        # Accept plain strings from user code, normalize for internal use.
        for name, enum_cls in _FIELD_ENUMS.items():
            object.__setattr__(self, name, _coerce(enum_cls, getattr(self, name), name))
        if not isinstance(self.convert_quot, bool):
            raise ConfigError(f"invalid convert_quot {self.convert_quot!r} (expected True or False)")

    def replace(self, **changes) -> Config:
        """Return a copy with `changes` applied."""
        try:
            return dataclasses.replace(self, **changes)
        except TypeError as exc:
            raise ConfigError(str(exc)) from None

    @classmethod
    def nothing(cls) -> Config:
        """A configuration with every conversion switched off."""
        return cls(
            double_dash=DashBehavior.DO_NOTHING,
            triple_dash=DashBehavior.DO_NOTHING,
            ellipses=EllipsisBehavior.DO_NOTHING,
            double_backticks=QuoteBehavior.DO_NOTHING,
            single_backticks=QuoteBehavior.DO_NOTHING,
            quote_chars=QuoteBehavior.DO_NOTHING,
        )

    @classmethod
    def from_attr(cls, attr: str) -> Config:
        """Build a configuration from a SmartyPants attribute string.

        "0" does nothing, "1" educates quotes, ``backticks'', `--` as an em
        dash and ellipses, "2" uses `--` for en dashes and `---` for em
        dashes, "3" inverts that, and "-1" only turns existing curly
        entities back into ASCII. Anything else is read as a combination of
        the single-character flags in `ATTR_FLAGS`.
        """
        attr = attr.strip()
        if attr in PRESETS:
            return cls.nothing().replace(**PRESETS[attr])
        changes = {}
        for flag in attr:
            if flag not in ATTR_FLAGS:
                raise ConfigError(f"unknown attribute flag {flag!r} in {attr!r}")
            changes.update(ATTR_FLAGS[flag])
        return cls.nothing().replace(**changes)


_FIELD_ENUMS = {
    "double_dash": DashBehavior,
    "triple_dash": DashBehavior,
    "ellipses": EllipsisBehavior,
    "double_backticks": QuoteBehavior,
    "single_backticks": QuoteBehavior,
    "quote_chars": QuoteBehavior,
    "entities": EntityStyle,
}

_CURLY = QuoteBehavior.CONVERT_TO_CURLY

ATTR_FLAGS = {
    "q": {"quote_chars": _CURLY},
    "b": {"double_backticks": _CURLY},
    "B": {"double_backticks": _CURLY, "single_backticks": _CURLY},
    "d": {"double_dash": DashBehavior.EM_DASH, "triple_dash": DashBehavior.DO_NOTHING},
    "D": {"double_dash": DashBehavior.EN_DASH, "triple_dash": DashBehavior.EM_DASH},
    "i": {"double_dash": DashBehavior.EM_DASH, "triple_dash": DashBehavior.EN_DASH},
    "e": {"ellipses": EllipsisBehavior.CONVERT_TO_ENTITY},
    "w": {"convert_quot": True},
    "u": {"entities": EntityStyle.UNICODE},
    "h": {"entities": EntityStyle.NAMED},
    "s": {"entities": EntityStyle.ASCII},
}


def _flags(flags):
    changes = {}
    for flag in flags:
        changes.update(ATTR_FLAGS[flag])
    return changes


PRESETS = {
    "0": {},
    "1": _flags("qbde"),
    "2": _flags("qbDe"),
    "3": _flags("qbie"),
    "-1": {"entities": EntityStyle.ASCII},
}
