"""Loading ``config.yaml``: environment placeholders, then pydantic validation."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from src.catalog.runtime.config.config_data import ConfigData

# ${NAME} or ${NAME:-default}
PLACEHOLDER = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def substitute_env_vars(text: str) -> str:
    """Expand ``${NAME:-default}`` placeholders from the environment.

    An unset variable without a default expands to an empty string, as in a
    shell.
    """
    return PLACEHOLDER.sub(
        lambda match: os.getenv(match.group(1), match.group(2) or ""), text
    )


def apply_environment_overrides(environment: str) -> list[str]:
    """Promote ``<ENVIRONMENT>_NAME`` variables to ``NAME``.

    With ``APP_ENVIRONMENT=test``, ``TEST_DATABASE_URL`` replaces
    ``DATABASE_URL``. Returns the promoted names.
    """
    prefix = f"{environment.upper()}_"
    promoted = {
        name[len(prefix):]: value
        for name, value in os.environ.items()
        if name.startswith(prefix) and len(name) > len(prefix)
    }
    os.environ.update(promoted)
    if promoted:
        logger.info("Environment overrides for {}: {}", environment, sorted(promoted))
    return sorted(promoted)


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Read ``file_path`` and validate its ``config`` section.

    Raises ``FileNotFoundError`` when the file is missing and ``ValueError``
    when it is empty, is not YAML, or does not describe a valid configuration.
    """
    text = Path(file_path).read_text()

    environment = os.getenv("APP_ENVIRONMENT", "development")
    apply_environment_overrides(environment)

    try:
        document = yaml.safe_load(substitute_env_vars(text))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML in {file_path}: {e}") from e
    if not document:
        raise ValueError(f"Failed to parse YAML: {file_path} is empty")

    try:
        config = ConfigData.model_validate(document.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {file_path}: {e}") from e

    logger.info("Loaded {} configuration from {}", environment, file_path)
    return config


def load_config(file_path: Path) -> ConfigData:
    """Load ``file_path`` if it exists, otherwise fall back to model defaults."""
    if not file_path.exists():
        logger.warning("{} not found; using default configuration", file_path)
        return ConfigData()
    return load_templated_yaml(file_path)
