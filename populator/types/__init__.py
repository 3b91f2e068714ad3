# populator/types/__init__.py

from .rules import (
    ClassIdentity,
    Operator,
    DEFAULT_LOCALE,
    RuleKind,
    Substitution,
    ConfigurationResult,
)
from .binding import MethodBinding, bind

__all__ = [
    'ClassIdentity',
    'Operator',
    'DEFAULT_LOCALE',
    'RuleKind',
    'Substitution',
    'ConfigurationResult',
    'MethodBinding',
    'bind',
]
