# populator/core/logging_config.py
"""
Centralized logging configuration for the rules registry.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
import json
from datetime import datetime


class PopulatorFormatter(logging.Formatter):
    """Custom formatter for populator logs with structured output"""
    
    CONTEXT_ATTRS = ['locale', 'class_identity', 'operator', 'rule_kind',
                     'value', 'document', 'error']

    def __init__(self, include_context: bool = True):
        self.include_context = include_context
        super().__init__()
    
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        
        context = {}
        if self.include_context:
            for attr in self.CONTEXT_ATTRS:
                if hasattr(record, attr):
                    context[attr] = getattr(record, attr)
        
        log_entry = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        
        if context:
            log_entry['context'] = context
            
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)
        
        # rule values can be anything YAML produces
        return json.dumps(log_entry, separators=(',', ':'), default=str)


class PopulatorLogger:
    """
    Logger factory for the populator package. Everything logs under the
    'populator' logger; configure() attaches handlers to it once.
    """
    
    _configured = False
    
    @classmethod
    def configure(cls, 
                  log_dir: Optional[Path] = None,
                  log_level: str = "INFO",
                  console_level: Optional[str] = None,
                  console_enabled: bool = True,
                  file_enabled: bool = True,
                  structured_format: bool = True) -> None:
        """
        Console output goes to stderr so command output on stdout stays
        clean; console_level defaults to log_level.
        """
        if cls._configured:
            return
            
        level = getattr(logging, log_level.upper())
        console = getattr(logging, console_level.upper()) if console_level else level
        
        root_logger = logging.getLogger('populator')
        root_logger.setLevel(min(level, console) if console_enabled else level)
        root_logger.handlers.clear()
        
        if console_enabled:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(console)
            
            if structured_format:
                console_handler.setFormatter(PopulatorFormatter(include_context=True))
            else:
                console_handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))
            root_logger.addHandler(console_handler)
        
        if file_enabled and log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_formatter = PopulatorFormatter(include_context=True)

            file_handler = logging.FileHandler(log_dir / 'populator.log')
            file_handler.setLevel(level)
            file_handler.setFormatter(file_formatter)
            root_logger.addHandler(file_handler)
            
            error_handler = logging.FileHandler(log_dir / 'populator_errors.log')
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(file_formatter)
            root_logger.addHandler(error_handler)
        
        cls._configured = True

    @classmethod
    def reset(cls) -> None:
        """Close and drop handlers so configure() can run again"""
        root_logger = logging.getLogger('populator')
        for handler in root_logger.handlers:
            handler.close()
        root_logger.handlers.clear()
        root_logger.setLevel(logging.NOTSET)
        cls._configured = False
    
    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger with the populator namespace"""
        if not name.startswith('populator'):
            name = f'populator.{name}'
        
        return logging.getLogger(name)


def get_class_logger(cls_instance) -> logging.Logger:
    """Get logger for a class instance"""
    module = cls_instance.__class__.__module__
    class_name = cls_instance.__class__.__name__
    
    if module.startswith('populator.'):
        module = module[len('populator.'):]
    
    logger_name = f"{module}.{class_name}"
    return PopulatorLogger.get_logger(logger_name)


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    """Log with additional context"""
    if logger.isEnabledFor(level):
        record = logger.makeRecord(
            logger.name, level, "", 0, message, (), None
        )
        for key, value in context.items():
            setattr(record, key, value)
        logger.handle(record)
