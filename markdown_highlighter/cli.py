"""
Computes Markdown highlighting spans for a serialized AST.
Prints the spans as JSON or as one tab-separated line per span.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from .config import OUTPUT_FORMATS, ConfigError, build_config
from .constants import ROOT_KEY, TEXT_LENGTH_KEY
from .exceptions import AstFormatError, InputFileError
from .filesystem import max_file_size_from_env, read_ast_document, read_text_length
from .highlighter import compute_highlighting
from .nodes import node_from_dict
from .styles import StyleClass, StyleSpan

__all__ = ["cli"]

logger = logging.getLogger(__name__)


def split_document(document: object) -> tuple[object, object]:
    """Separate the root node from an optional embedded text length.

    A document is either ``{"text_length": N, "root": {...}}`` or a bare node.
    """
    if isinstance(document, dict) and ROOT_KEY in document:
        return document[ROOT_KEY], document.get(TEXT_LENGTH_KEY)
    return document, None


def format_spans(spans: list[StyleSpan], output_format: str) -> str:
    if output_format == "json":
        return json.dumps([list(span.as_pair()) for span in spans])
    return "\n".join(
        f"{span.length}\t{' '.join(span.style_classes) or '-'}" for span in spans
    )


@click.command()
@click.version_option()
@click.option("--length", type=int, help="Length of the highlighted text")
@click.option(
    "--text",
    "text_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Text file the AST was parsed from; its length is used",
)
@click.option(
    "--disable",
    "disabled_styles",
    multiple=True,
    type=click.Choice([style.class_name for style in StyleClass]),
    help="Style class to leave unpainted (repeatable)",
)
@click.option(
    "--format", "output_format", type=click.Choice(OUTPUT_FORMATS), help="Output format"
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.argument("ast_file", type=click.Path(exists=True, dir_okay=False))
def cli(
    ast_file: str,
    length: int | None = None,
    text_path: str | None = None,
    disabled_styles: tuple[str, ...] = (),
    output_format: str | None = None,
    verbose: bool = False,
):
    """
    Entry point for printing the highlighting spans of a Markdown AST.

    Args:
        ast_file: JSON file holding the AST, optionally wrapped as
            ``{"text_length": N, "root": {...}}``.
        length: Override for the text length.
        text_path: Text file whose character count gives the text length.
        disabled_styles: Style classes to leave unpainted.
        output_format: ``json`` or ``text``.
        verbose: Enables debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If configuration values are invalid or no text
            length can be determined.
        click.ClickException: If input files cannot be read or the AST is malformed.

    Examples:
        markdown-highlighter doc.ast.json --text doc.md --format text
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    filepath = Path(ast_file).resolve()
    try:
        config = build_config(
            filepath.parent,
            disabled_styles=disabled_styles,
            output_format=output_format,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = max_file_size_from_env(default=config.max_file_size)
        document = read_ast_document(filepath, max_file_size)
        raw_root, embedded_length = split_document(document)
        root = node_from_dict(raw_root)
    except InputFileError as error:
        raise click.ClickException(str(error)) from error
    except AstFormatError as error:
        raise click.ClickException(f"{filepath}: {error}") from error

    if length is None and text_path is not None:
        try:
            length = read_text_length(Path(text_path), max_file_size)
        except InputFileError as error:
            raise click.ClickException(str(error)) from error
    if length is None:
        length = embedded_length

    if length is None:
        raise click.BadParameter(
            f"No text length given; pass --length or --text, or add `{TEXT_LENGTH_KEY}` "
            f"to {filepath.name}"
        )
    if isinstance(length, bool) or not isinstance(length, int) or length < 0:
        raise click.BadParameter(f"Text length must be a non-negative integer, got {length!r}")
    if length > config.max_text_length:
        raise click.ClickException(
            f"Text length {length} exceeds the maximum of {config.max_text_length} characters."
        )

    logger.debug("Highlighting %s over %d characters", filepath.name, length)
    spans = compute_highlighting(root, length, config)
    click.echo(format_spans(spans, config.output_format))


if __name__ == "__main__":
    cli()
