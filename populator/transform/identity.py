# populator/transform/identity.py
"""
Key resolution for rule lookups.

Rules are stored under (class identity, operator). Configuration code passes
an explicit class, the import engine passes a MethodBinding; both funnel into
the same RuleKey so the two access paths address the same storage cell.
"""

from typing import Any

from msgspec import Struct

from ..types import ClassIdentity, Operator, MethodBinding


class RuleKey(Struct, frozen=True):
    class_identity: ClassIdentity
    operator: Operator


def normalize_operator(operator: Any) -> Operator:
    # Case sensitive; YAML may hand back ints or bools as keys
    if operator is None:
        raise ValueError("Operator cannot be None")
    operator = str(operator)
    if not operator:
        raise ValueError("Operator cannot be empty")
    return Operator(operator)


def identity_of_class(klass: Any) -> ClassIdentity:
    """Name-based identity for a class, a str is taken as the name itself"""
    if isinstance(klass, str):
        if not klass:
            raise ValueError("Class name cannot be empty")
        return ClassIdentity(klass)
    name = getattr(klass, '__name__', None)
    if not name:
        raise TypeError(f"Cannot derive a class identity from {klass!r}")
    return ClassIdentity(name)


def resolve_identity_from_class(klass: Any, operator: Any) -> RuleKey:
    return RuleKey(
        class_identity=identity_of_class(klass),
        operator=normalize_operator(operator),
    )


def resolve_identity_from_binding(binding: MethodBinding) -> RuleKey:
    if binding is None:
        raise ValueError("MethodBinding cannot be None")
    return RuleKey(
        class_identity=identity_of_class(binding.klass),
        operator=normalize_operator(binding.operator),
    )
