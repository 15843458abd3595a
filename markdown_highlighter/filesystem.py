"""Reading AST documents and source texts for the CLI."""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE
from .exceptions import AstFormatError, InputFileError

MAX_FILE_SIZE_ENV_VAR = "MARKDOWN_HIGHLIGHTER_MAX_FILE_SIZE"


def max_file_size_from_env(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the input size limit, letting the environment override `default`.

    Raises:
        InputFileError: If `MARKDOWN_HIGHLIGHTER_MAX_FILE_SIZE` is set to
            anything but a positive integer.

    Examples:
        os.environ["MARKDOWN_HIGHLIGHTER_MAX_FILE_SIZE"] = "204800"
        max_file_size_from_env()  # 204800
    """
    raw_limit = os.environ.get(MAX_FILE_SIZE_ENV_VAR, "").strip()
    if not raw_limit:
        return default

    if not raw_limit.isdigit() or int(raw_limit) == 0:
        raise InputFileError(
            f"{MAX_FILE_SIZE_ENV_VAR}={raw_limit!r} is not a positive number of bytes"
        )
    return int(raw_limit)


def read_input_file(filepath: Path, max_size: int, keep_newlines: bool = False) -> str:
    """Read a UTF-8 input file of at most `max_size` bytes.

    Symlinks and anything other than a regular file are refused before the
    file is opened.

    Args:
        filepath: File to read.
        max_size: Largest accepted size in bytes.
        keep_newlines: Return line endings untranslated, so that ``\\r\\n``
            counts as two characters as it does for the Markdown parser.

    Returns:
        str: The decoded file content.

    Raises:
        InputFileError: If the file is missing, not a regular file, too large,
            unreadable, or not valid UTF-8.
    """
    try:
        file_stat = filepath.lstat()
    except OSError as error:
        raise InputFileError(f"Cannot inspect {filepath}: {error.strerror or error}") from error

    if not stat.S_ISREG(file_stat.st_mode):
        kind = "a symlink" if stat.S_ISLNK(file_stat.st_mode) else "not a regular file"
        raise InputFileError(f"Refusing to read {filepath}: {kind}")
    if file_stat.st_size > max_size:
        raise InputFileError(
            f"{filepath} is {file_stat.st_size} bytes, over the {max_size} byte limit"
        )

    try:
        with open(filepath, encoding="utf-8", newline="" if keep_newlines else None) as file:
            return file.read()
    except UnicodeDecodeError as error:
        raise InputFileError(f"{filepath} is not UTF-8 text ({error.reason})") from error
    except OSError as error:
        raise InputFileError(f"Cannot read {filepath}: {error.strerror or error}") from error


def read_text_length(filepath: Path, max_size: int) -> int:
    """Number of characters in a source text, line endings included verbatim."""
    return len(read_input_file(filepath, max_size, keep_newlines=True))


def read_ast_document(filepath: Path, max_size: int) -> object:
    """Load the JSON payload of a serialized AST file.

    Raises:
        InputFileError: If the file cannot be read.
        AstFormatError: If the file is not valid JSON.
    """
    content = read_input_file(filepath, max_size)
    try:
        return json.loads(content)
    except json.JSONDecodeError as error:
        raise AstFormatError(f"{filepath} is not valid JSON: {error}") from error
