# populator/core/__init__.py

from .logging_config import PopulatorLogger, PopulatorFormatter, get_class_logger, log_with_context
from .mixins import LoggingMixin
from .config import PopulatorConfig

__all__ = [
    'PopulatorLogger',
    'PopulatorFormatter',
    'get_class_logger',
    'log_with_context',
    'LoggingMixin',
    'PopulatorConfig',
]
