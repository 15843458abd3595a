"""Package-specific exception types."""

from __future__ import annotations


class HighlightError(ValueError):
    """Base class for highlighting-related errors."""


class StyleClassOverflowError(HighlightError):
    """Raised when the style class enumeration no longer fits in a style mask.

    Args:
        count: Number of style classes defined.
        limit: Maximum number of style classes a mask can hold.
    """

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"Too many style classes ({count}, limit: {limit})")


class UnknownStyleClassError(HighlightError):
    """Raised when a style class name does not match any `StyleClass` member.

    Args:
        name: The unrecognized style class name.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown style class: {name!r}")


class AstFormatError(HighlightError):
    """Raised when a serialized AST cannot be turned into nodes.

    Args:
        message: Description of the problem.
        path: Location of the offending node as child indices from the root,
            or None when the error is not tied to a node.
    """

    def __init__(self, message: str, path: tuple[int, ...] | None = None):
        self.path = path
        if path is None:
            super().__init__(message)
            return
        location = "root" + "".join(f"[{index}]" for index in path)
        super().__init__(f"{location}: {message}")


class InputFileError(HighlightError):
    """Raised when an AST or text file given to the CLI cannot be read."""


class WrongThreadError(HighlightError):
    """Raised when highlighting is requested off the thread owning the text area."""
