# populator/__init__.py
"""
Transformation rules for bulk data import.

For every (target class, operator) pair the registry can hold a default, an
override, a substitution and prefix/postfix text. The import engine asks for
them while populating; this package only stores and returns them.

Usage:
    registry = create_registry()

    with factory(registry) as rules:
        rules.set_default_on(Project, 'value_as_string', 'default text')

    registry.configure_from(Project, 'config/transforms.yaml', locale_key='en')
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from .core.config import PopulatorConfig
from .core.logging_config import PopulatorLogger
from .types import (
    DEFAULT_LOCALE,
    ConfigurationResult,
    MethodBinding,
    RuleKind,
    Substitution,
    bind,
)
from .transform import RuleStore, RulesDocumentLoader, TransformRegistry

__version__ = "0.1.0"


def create_registry(config: Optional[PopulatorConfig] = None) -> TransformRegistry:
    """
    Build a registry from config. config.rules_file is not applied here,
    since sections are selected per target class: pass it to
    TransformRegistry.configure_from, as the CLI rules commands do when no
    document is given.
    """
    config = config or PopulatorConfig()
    return TransformRegistry(default_locale=config.default_locale)


@contextmanager
def factory(registry: TransformRegistry, locale: Optional[str] = None) -> Iterator[RuleStore]:
    """Yield the rule store for locale, for grouping programmatic rule setup"""
    yield registry.instance(locale)


__all__ = [
    'DEFAULT_LOCALE',
    'ConfigurationResult',
    'MethodBinding',
    'PopulatorConfig',
    'PopulatorLogger',
    'RuleKind',
    'RuleStore',
    'RulesDocumentLoader',
    'Substitution',
    'TransformRegistry',
    'bind',
    'create_registry',
    'factory',
]
