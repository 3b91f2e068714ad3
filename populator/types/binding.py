# populator/types/binding.py

from typing import Any

from msgspec import Struct


class MethodBinding(Struct, frozen=True):
    """
    Pairs a target class with one of its operators (field, column or accessor).

    The import engine hands these to the registry at population time; the
    registry only reads klass and operator, so any object exposing those two
    attributes can stand in for it.
    """
    klass: Any
    operator: str


def bind(klass: Any, operator: str) -> MethodBinding:
    return MethodBinding(klass=klass, operator=operator)
