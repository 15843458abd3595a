"""Per-character style masks and their run-length compression."""

from __future__ import annotations

from .styles import StyleClass, StyleSpan


def translate_mask(mask: int) -> tuple[str, ...]:
    """Convert a style mask into style class names.

    Args:
        mask: Bitwise union of `StyleClass.bit` values.

    Returns:
        tuple[str, ...]: Names of the set styles in ordinal order; empty for 0.

    Examples:
        translate_mask(StyleClass.H2.bit | StyleClass.STRONG.bit)  # ("strong", "h2")
    """
    if mask == 0:
        return ()
    return tuple(style.class_name for style in StyleClass if mask & style.bit)


class StyleBitmap:
    """One style mask per character of a text buffer.

    Masks only ever grow by union, so overlapping styles compose without
    any ordering between paints.

    Args:
        length: Number of characters in the buffer.

    Raises:
        ValueError: If `length` is negative.
    """

    def __init__(self, length: int):
        if length < 0:
            raise ValueError(f"Text length must not be negative, got {length}")
        self._masks = [0] * length

    def __len__(self) -> int:
        return len(self._masks)

    def mask_at(self, index: int) -> int:
        return self._masks[index]

    def paint(self, start: int, end: int, style: StyleClass) -> None:
        """Add `style` to every character in ``[start, end)``.

        The range is clipped to the buffer. Parsers that pad the text with
        trailing newlines before parsing report end offsets past the buffer.

        Args:
            start: First character offset (inclusive).
            end: Last character offset (exclusive).
            style: Style to add.

        Examples:
            bitmap.paint(0, 4, StyleClass.H1)
        """
        masks = self._masks
        bit = style.bit
        for index in range(max(start, 0), min(end, len(masks))):
            masks[index] |= bit

    translate = staticmethod(translate_mask)

    def compress(self) -> list[StyleSpan]:
        """Collapse equal adjacent masks into maximal style spans.

        Returns:
            list[StyleSpan]: Spans whose lengths add up to the buffer length.
                An empty buffer yields a single empty span of length 0.

        Examples:
            StyleBitmap(0).compress()  # [StyleSpan((), 0)]
        """
        masks = self._masks
        if not masks:
            return [StyleSpan((), 0)]

        spans: list[StyleSpan] = []
        span_start = 0
        previous_mask = masks[0]

        for index in range(1, len(masks)):
            mask = masks[index]
            if mask == previous_mask:
                continue

            spans.append(StyleSpan(translate_mask(previous_mask), index - span_start))
            span_start = index
            previous_mask = mask

        spans.append(StyleSpan(translate_mask(previous_mask), len(masks) - span_start))
        return spans
