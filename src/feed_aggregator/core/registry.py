"""
Source registry: loads the declared list of feeds.

The registry file is JSON (or YAML for ``.yaml``/``.yml`` files)::

    {"sources": [{"url": "https://example.com/feed.xml", "name": "Example", "maxItems": 5}]}
"""

import json
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from feed_aggregator.config import get_config
from feed_aggregator.logger import get_logger
from feed_aggregator.models import Source, SourceRegistryFile

logger = get_logger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class ConfigError(Exception):
    """Raised when the source registry is missing or malformed."""

    def __init__(self, path: Union[str, Path], message: str):
        self.path = str(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


def _read_document(path: Path):
    """Read and decode the registry file."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(path, "source registry not found") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(path, f"cannot read source registry: {e}") from e

    if not text.strip():
        raise ConfigError(path, "source registry is empty")

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(path, f"source registry is not valid structured data: {e}") from e


def _format_validation_error(error: ValidationError) -> str:
    """Condense a pydantic error into one line."""
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ()))
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)


def load_sources(
    path: Union[str, Path, None] = None,
    default_max_items: Optional[int] = None,
) -> list[Source]:
    """Load the ordered list of feed sources.

    Args:
        path: Registry file path (defaults to the configured sources file)
        default_max_items: maxItems for sources that do not declare one

    Returns:
        Sources in declaration order

    Raises:
        ConfigError: If the file is missing, unparseable, or a source is invalid
    """
    config = get_config()
    path = Path(path or config.sources_file)
    if default_max_items is None:
        default_max_items = config.fetcher.default_max_items

    document = _read_document(path)

    if not isinstance(document, dict):
        raise ConfigError(path, "expected an object with a 'sources' list")

    try:
        registry = SourceRegistryFile.model_validate(document)
    except ValidationError as e:
        raise ConfigError(path, _format_validation_error(e)) from e

    sources = []
    for source in registry.sources:
        if "max_items" not in source.model_fields_set:
            source = source.model_copy(update={"max_items": default_max_items})
        sources.append(source)

    logger.debug(f"Loaded {len(sources)} sources from {path}")
    return sources
