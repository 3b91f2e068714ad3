# populator/core/config.py

from msgspec import Struct
from typing import Optional
from pathlib import Path
import os
import logging

import msgspec

from ..types import DEFAULT_LOCALE
from .logging_config import PopulatorLogger, log_with_context


class PopulatorConfig(Struct):
    default_locale: str = DEFAULT_LOCALE
    rules_file: Optional[str] = None
    locale_key: Optional[str] = None
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    @classmethod
    def from_env(cls, env_vars: dict = None) -> 'PopulatorConfig':
        logger = PopulatorLogger.get_logger('core.config')

        if env_vars is None:
            from dotenv import load_dotenv
            load_dotenv()
        env = os.environ if env_vars is None else env_vars

        log_dir = env.get("POPULATOR_LOG_DIR")

        config = cls(
            default_locale=env.get("POPULATOR_DEFAULT_LOCALE") or DEFAULT_LOCALE,
            rules_file=env.get("POPULATOR_RULES_FILE") or None,
            locale_key=env.get("POPULATOR_LOCALE_KEY") or None,
            log_level=env.get("POPULATOR_LOG_LEVEL") or "INFO",
            log_dir=log_dir or None,
        )

        log_with_context(logger, logging.DEBUG, "Configuration loaded from environment",
                         locale=config.default_locale,
                         document=config.rules_file)
        return config

    @classmethod
    def from_file(cls, config_path: str) -> 'PopulatorConfig':
        path = Path(config_path)
        if not path.exists():
            raise ValueError(f"Config file not found: {config_path}")

        with open(path, 'rb') as f:
            config = msgspec.yaml.decode(f.read(), type=cls)

        if not config.default_locale:
            raise ValueError("default_locale cannot be empty")
        return config

    def configure_logging(self, console_level: Optional[str] = None,
                          structured_format: bool = True) -> None:
        PopulatorLogger.configure(
            log_dir=Path(self.log_dir) if self.log_dir else None,
            log_level=self.log_level,
            console_level=console_level,
            file_enabled=self.log_dir is not None,
            structured_format=structured_format,
        )
