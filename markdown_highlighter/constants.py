"""Constants used across the markdown-highlighter package."""

from __future__ import annotations

from .config import HighlightConfig

DEFAULT_CONFIG = HighlightConfig()

DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size

# Keys of a serialized AST document wrapping the root node
TEXT_LENGTH_KEY = "text_length"
ROOT_KEY = "root"
