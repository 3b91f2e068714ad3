# populator/transform/__init__.py

from .identity import (
    RuleKey,
    normalize_operator,
    identity_of_class,
    resolve_identity_from_class,
    resolve_identity_from_binding,
)
from .store import RuleStore
from .loader import RulesDocumentLoader
from .registry import TransformRegistry

__all__ = [
    'RuleKey',
    'normalize_operator',
    'identity_of_class',
    'resolve_identity_from_class',
    'resolve_identity_from_binding',
    'RuleStore',
    'RulesDocumentLoader',
    'TransformRegistry',
]
