# populator/types/rules.py

import enum
from typing import Any, List, NewType

from msgspec import Struct


ClassIdentity = NewType('ClassIdentity', str)
Operator = NewType('Operator', str)

DEFAULT_LOCALE = "en"


class RuleKind(enum.Enum):
    DEFAULT = "defaults"
    OVERRIDE = "overrides"
    SUBSTITUTION = "substitutions"
    PREFIX = "prefixes"
    POSTFIX = "postfixes"

    @property
    def section(self) -> str:
        """Name of the document section holding rules of this kind"""
        return self.value


class Substitution(Struct, frozen=True, array_like=True):
    """Replace inbound data matching pattern with replacement"""
    pattern: Any
    replacement: Any

    @classmethod
    def from_list(cls, values: List[Any]) -> 'Substitution':
        if not isinstance(values, (list, tuple)):
            raise ValueError(f"Substitution must be a [pattern, replacement] pair, got {values!r}")
        if len(values) != 2:
            raise ValueError(f"Substitution must have exactly 2 elements, got {len(values)}")
        return cls(pattern=values[0], replacement=values[1])

    def __iter__(self):
        return iter((self.pattern, self.replacement))


class ConfigurationResult(Struct):
    """Summary of one bulk configuration pass for a class"""
    class_identity: ClassIdentity
    locale: str
    applied: int = 0
    skipped: List[str] = []
