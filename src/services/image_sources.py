import tomllib
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

import structlog
from pydantic import ValidationError

from src.core.exceptions import ConfigError
from src.schemas.images import ImageConfigFile

logger = structlog.get_logger()


def load_image_sources(path: str) -> Mapping[str, str]:
    """Read the ``[secrets]`` table of the TOML file at ``path``.

    Returns a read-only mapping of image key to source URL, ordered like
    ``IMAGE_KEYS``.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Unable to read config file {path}: {e}") from e

    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Unable to parse config file {path}: {e}") from e

    try:
        config = ImageConfigFile.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e

    sources = config.secrets.as_sources()
    logger.info("image_sources_loaded", path=path, keys=list(sources))
    return MappingProxyType(sources)
