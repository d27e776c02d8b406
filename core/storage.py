"""JSON file persistence for the application configuration."""

import json
import os
from pathlib import Path

from pydantic import ValidationError

from core.exceptions import ConfigurationError
from core.log import get_logger
from core.models.domain.app_config import AppConfig

logger = get_logger(__name__)


class ConfigStore:
    """Load and save ``AppConfig`` as a JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> AppConfig:
        """Read the configuration.

        A missing file yields the default configuration.

        Raises:
            ConfigurationError: If the file cannot be read or is invalid
        """
        if not self.path.exists():
            logger.info(f"No config file at {self.path}, using defaults")
            return AppConfig()

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to read {self.path}: {e}") from e

        try:
            config = AppConfig.model_validate_json(raw)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config file {self.path}: {e}") from e

        logger.info(f"Loaded {len(config.tasks)} tasks from {self.path}")
        return config

    def save(self, config: AppConfig) -> None:
        """Write the configuration, replacing the file atomically.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        data = json.dumps(config.model_dump(mode="json"), indent=2, ensure_ascii=False)
        temp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(data + "\n", encoding="utf-8")
            os.replace(temp_path, self.path)
        except OSError as e:
            raise ConfigurationError(f"Failed to write {self.path}: {e}") from e

        logger.debug(f"Saved {len(config.tasks)} tasks to {self.path}")
