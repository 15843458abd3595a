"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .exceptions import UnknownStyleClassError
from .styles import StyleClass

CONFIG_TABLE = "markdown-highlighter"
OUTPUT_FORMATS = ("json", "text")


@dataclass
class HighlightConfig:
    """Configuration for computing style spans.

    Attributes:
        disabled_styles: Style class names (``"strong"``, ``"h1"``, ...) that
            are never painted. Traversal is unaffected.
        max_file_size: Maximum size in bytes of an AST or text file read by the CLI.
        max_text_length: Largest text length the CLI accepts.
        output_format: CLI output format, ``"json"`` or ``"text"``.

    Examples:
        HighlightConfig(disabled_styles=("em",), output_format="text")
    """

    disabled_styles: tuple[str, ...] = ()

    # Limits
    max_file_size: int = 10 * 1024 * 1024
    max_text_length: int = 50_000_000

    # Output
    output_format: str = "json"

    def disabled_style_classes(self) -> frozenset[StyleClass]:
        """Resolve `disabled_styles` into `StyleClass` members.

        Raises:
            ConfigError: If a name does not match any style class.
        """
        try:
            return frozenset(StyleClass.from_name(name) for name in self.disabled_styles)
        except UnknownStyleClassError as error:
            raise ConfigError(f"`disabled_styles` contains {error}") from error


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`output_format` must be one of: json, text")
    """


def load_config(search_path: Path) -> HighlightConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.markdown-highlighter]`` table from `pyproject.toml` and the
    ``[markdown-highlighter]`` or ``[tool.markdown-highlighter]`` table from
    `.markdown-highlighter.toml` when present. TOML files that cannot be read
    or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        HighlightConfig: Loaded configuration, or defaults when nothing is found.

    Raises:
        ConfigError: If the table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    directory = search_path.resolve()

    for candidate in (directory, *directory.parents):
        for filename, table_names in _CONFIG_SOURCES:
            data = _read_toml(candidate / filename)
            if data is None:
                continue
            for table_name in table_names:
                table = _lookup_table(data, table_name)
                if table is not _MISSING:
                    return normalize_config(
                        _config_from_table(table, candidate / filename, table_name)
                    )

    return HighlightConfig()


# Files searched in each directory, with the tables that may hold settings.
_CONFIG_SOURCES = (
    ("pyproject.toml", (f"tool.{CONFIG_TABLE}",)),
    (f".{CONFIG_TABLE}.toml", (CONFIG_TABLE, f"tool.{CONFIG_TABLE}")),
)

_MISSING = object()
_CONFIG_FIELDS = frozenset(field.name for field in fields(HighlightConfig))


def _read_toml(config_file: Path) -> dict | None:
    """Parsed TOML document, or None when the file is absent or unreadable."""
    try:
        with open(config_file, "rb") as stream:
            return tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None


def _lookup_table(data: dict, table_name: str) -> object:
    # Only the first dot separates tables; "markdown-highlighter" itself has none.
    head, _, rest = table_name.partition(".")
    if rest:
        nested = data.get(head)
        return nested.get(rest, _MISSING) if isinstance(nested, dict) else _MISSING
    return data.get(head, _MISSING)


def _config_from_table(table: object, config_file: Path, table_name: str) -> HighlightConfig:
    if not isinstance(table, dict):
        raise ConfigError(f"`[{table_name}]` in {config_file} must be a table")

    unknown = sorted(set(table) - _CONFIG_FIELDS)
    if unknown:
        raise ConfigError(
            f"`[{table_name}]` in {config_file} has unknown settings: {', '.join(unknown)}"
        )
    return HighlightConfig(**table)


def normalize_config(config: HighlightConfig) -> HighlightConfig:
    """Coerce TOML list values and style names into their canonical form."""
    disabled_styles = config.disabled_styles
    if isinstance(disabled_styles, str):
        disabled_styles = (disabled_styles,)
    if not isinstance(disabled_styles, (list, tuple)):
        raise ConfigError("`disabled_styles` must be a list of style class names")
    if not all(isinstance(name, str) for name in disabled_styles):
        raise ConfigError("`disabled_styles` must be a list of style class names")

    disabled_styles = tuple(dict.fromkeys(name.strip().lower() for name in disabled_styles))
    output_format = config.output_format
    if isinstance(output_format, str):
        output_format = output_format.lower()

    return replace(config, disabled_styles=disabled_styles, output_format=output_format)


def validate_config(config: HighlightConfig) -> None:
    """Validate a `HighlightConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If a disabled style is unknown, the output format is
            unsupported, or numeric limits are not positive integers.

    Examples:
        validate_config(HighlightConfig(disabled_styles=("h6",)))
    """
    config = normalize_config(config)

    for name in ("max_file_size", "max_text_length"):
        _check_limit(name, getattr(config, name))

    if config.output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"`output_format` must be one of: {', '.join(OUTPUT_FORMATS)}")

    config.disabled_style_classes()


def apply_overrides(config: HighlightConfig, **overrides: object) -> HighlightConfig:
    """Apply override values to a `HighlightConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set
            to None, and empty style tuples, are ignored.

    Returns:
        HighlightConfig: New configuration with the overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `HighlightConfig`.

    Examples:
        updated = apply_overrides(config, output_format="text")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if "disabled_styles" in changes:
        if not changes["disabled_styles"]:
            del changes["disabled_styles"]
        else:
            changes["disabled_styles"] = (
                *config.disabled_styles,
                *changes["disabled_styles"],
            )
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> HighlightConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored. ``disabled_styles`` overrides extend the loaded ones.

    Returns:
        HighlightConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), disabled_styles=("em",))
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _check_limit(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"`{name}` must be a positive integer, got {value!r}")
