"""Style classes and the spans emitted for them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .exceptions import StyleClassOverflowError, UnknownStyleClassError

# Style sets are stored as one 32-bit mask per character.
MAX_STYLE_CLASSES = 32


class StyleClass(Enum):
    """Styles the highlighter can assign to characters.

    Members are ordered: a member's ordinal selects its bit in a style mask
    and fixes the order of class names inside an emitted span. Append new
    members at the end so existing ordinals stay stable.

    Attributes:
        STRONG: Strong emphasis (``**text**``).
        EM: Emphasis (``*text*``).
        H1: Level 1 header.
        H2: Level 2 header.
        H3: Level 3 header.
        H4: Level 4 header.
        H5: Level 5 header.
        H6: Level 6 header.
    """

    STRONG = auto()
    EM = auto()

    # headers
    H1 = auto()
    H2 = auto()
    H3 = auto()
    H4 = auto()
    H5 = auto()
    H6 = auto()

    @property
    def ordinal(self) -> int:
        return self.value - 1

    @property
    def bit(self) -> int:
        return 1 << self.ordinal

    @property
    def class_name(self) -> str:
        """Style class name handed to the text view, e.g. ``"h1"``."""
        return self.name.lower()

    @classmethod
    def for_header_level(cls, level: int) -> StyleClass | None:
        """Return the header style for `level`, or None outside 1..6.

        Examples:
            StyleClass.for_header_level(2)  # StyleClass.H2
            StyleClass.for_header_level(7)  # None
        """
        return _HEADER_STYLES.get(level)

    @classmethod
    def from_name(cls, name: str) -> StyleClass:
        """Resolve a style class name such as ``"strong"``.

        Raises:
            UnknownStyleClassError: If no member carries that name.
        """
        try:
            return cls[name.upper()]
        except KeyError as error:
            raise UnknownStyleClassError(name) from error


_HEADER_STYLES = {
    1: StyleClass.H1,
    2: StyleClass.H2,
    3: StyleClass.H3,
    4: StyleClass.H4,
    5: StyleClass.H5,
    6: StyleClass.H6,
}


def check_style_class_width() -> None:
    """Ensure every `StyleClass` member has a bit in a 32-bit style mask.

    Raises:
        StyleClassOverflowError: If the enumeration grew past `MAX_STYLE_CLASSES`.
    """
    count = len(StyleClass)
    if count > MAX_STYLE_CLASSES:
        raise StyleClassOverflowError(count, MAX_STYLE_CLASSES)


check_style_class_width()


@dataclass(frozen=True)
class StyleSpan:
    """A run of characters sharing the same style classes.

    Attributes:
        style_classes: Class names in `StyleClass` ordinal order; empty for
            unstyled text.
        length: Number of characters covered by the run.
    """

    style_classes: tuple[str, ...]
    length: int

    def as_pair(self) -> tuple[list[str], int]:
        return list(self.style_classes), self.length


def spans_length(spans: list[StyleSpan]) -> int:
    """Total number of characters covered by `spans`."""
    return sum(span.length for span in spans)
