# populator/cli/context.py

"""
CLI context: owns the configuration and the one TransformRegistry that
commands share for the lifetime of a CLI invocation.
"""

from typing import Optional
import logging

from ..core.config import PopulatorConfig
from ..core.logging_config import PopulatorLogger, log_with_context
from ..transform import TransformRegistry
from .. import create_registry


class CLIContext:
    def __init__(self, config: Optional[PopulatorConfig] = None):
        self.logger = PopulatorLogger.get_logger('cli.context')
        self._config = config
        self._registry: Optional[TransformRegistry] = None

    @property
    def config(self) -> PopulatorConfig:
        if self._config is None:
            self._config = PopulatorConfig.from_env()
        return self._config

    @property
    def registry(self) -> TransformRegistry:
        if self._registry is None:
            self._registry = create_registry(self.config)
            log_with_context(self.logger, logging.DEBUG, "Registry created for CLI",
                             locale=self.config.default_locale)
        return self._registry
