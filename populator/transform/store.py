# populator/transform/store.py

import threading
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from ..core.mixins import LoggingMixin
from ..types import ClassIdentity, Operator, RuleKind, Substitution, MethodBinding
from .identity import (
    RuleKey,
    identity_of_class,
    resolve_identity_from_binding,
    resolve_identity_from_class,
)

OperatorMap = Dict[Operator, Any]
RuleTable = Dict[ClassIdentity, OperatorMap]


class RuleStore(LoggingMixin):
    """
    Rule tables for a single locale.

    Each of the five tables maps class identity -> operator -> value. Looking
    up a class that has no bucket yet inserts an empty one, so after any read
    for a class, existence checks for that class only ever miss at the
    operator level.

    Every rule kind is reachable two ways: by MethodBinding (``default``,
    ``has_default``, ``set_default``) as the import engine does while
    populating, and by explicit class plus operator (``default_on``,
    ``has_default_on``, ``set_default_on``) as configuration code does.
    Absent rules read back as None; use the has_* checks to tell a missing
    rule from a stored None.
    """

    def __init__(self, locale: str):
        if not locale:
            raise ValueError("Locale cannot be empty")

        self.locale = locale
        self._lock = threading.RLock()
        self._tables: Dict[RuleKind, RuleTable] = {}
        self.clear()

    def clear(self) -> None:
        with self._lock:
            self._tables = {kind: {} for kind in RuleKind}
        self.log_debug("Rule tables cleared", locale=self.locale)

    # Read-only views

    @property
    def defaults(self) -> Mapping[ClassIdentity, OperatorMap]:
        return MappingProxyType(self._tables[RuleKind.DEFAULT])

    @property
    def overrides(self) -> Mapping[ClassIdentity, OperatorMap]:
        return MappingProxyType(self._tables[RuleKind.OVERRIDE])

    @property
    def substitutions(self) -> Mapping[ClassIdentity, OperatorMap]:
        return MappingProxyType(self._tables[RuleKind.SUBSTITUTION])

    @property
    def prefixes(self) -> Mapping[ClassIdentity, OperatorMap]:
        return MappingProxyType(self._tables[RuleKind.PREFIX])

    @property
    def postfixes(self) -> Mapping[ClassIdentity, OperatorMap]:
        return MappingProxyType(self._tables[RuleKind.POSTFIX])

    # Canonical access, everything below funnels through here

    def table_for(self, kind: RuleKind, class_identity: ClassIdentity) -> OperatorMap:
        """Operator map for a class, created empty on first access"""
        with self._lock:
            return self._tables[kind].setdefault(class_identity, {})

    def get(self, kind: RuleKind, key: RuleKey) -> Optional[Any]:
        with self._lock:
            return self.table_for(kind, key.class_identity).get(key.operator)

    def has(self, kind: RuleKind, key: RuleKey) -> bool:
        with self._lock:
            return key.operator in self.table_for(kind, key.class_identity)

    def set(self, kind: RuleKind, key: RuleKey, value: Any) -> Any:
        if kind is RuleKind.SUBSTITUTION and not isinstance(value, Substitution):
            raise TypeError(f"Substitution rules must be Substitution instances, got {type(value).__name__}")

        with self._lock:
            self.table_for(kind, key.class_identity)[key.operator] = value

        self.log_debug("Rule set",
                       locale=self.locale,
                       rule_kind=kind.section,
                       class_identity=key.class_identity,
                       operator=key.operator)
        return value

    def rules_for(self, klass: Any) -> Dict[str, Dict[Operator, Any]]:
        """Snapshot of every rule held for a class, keyed by section name"""
        class_identity = identity_of_class(klass)
        with self._lock:
            return {
                kind.section: dict(self.table_for(kind, class_identity))
                for kind in RuleKind
            }

    def rule_count(self) -> int:
        with self._lock:
            return sum(len(ops) for table in self._tables.values() for ops in table.values())

    # Per-class buckets

    def defaults_for(self, klass: Any) -> OperatorMap:
        return self.table_for(RuleKind.DEFAULT, identity_of_class(klass))

    def overrides_for(self, klass: Any) -> OperatorMap:
        return self.table_for(RuleKind.OVERRIDE, identity_of_class(klass))

    def substitutions_for(self, klass: Any) -> OperatorMap:
        return self.table_for(RuleKind.SUBSTITUTION, identity_of_class(klass))

    def prefixes_for(self, klass: Any) -> OperatorMap:
        return self.table_for(RuleKind.PREFIX, identity_of_class(klass))

    def postfixes_for(self, klass: Any) -> OperatorMap:
        return self.table_for(RuleKind.POSTFIX, identity_of_class(klass))

    # DEFAULTS - use when no inbound data supplied

    def default(self, binding: MethodBinding) -> Optional[Any]:
        return self.get(RuleKind.DEFAULT, resolve_identity_from_binding(binding))

    def has_default(self, binding: MethodBinding) -> bool:
        return self.has(RuleKind.DEFAULT, resolve_identity_from_binding(binding))

    def set_default(self, binding: MethodBinding, value: Any) -> Any:
        return self.set(RuleKind.DEFAULT, resolve_identity_from_binding(binding), value)

    def default_on(self, klass: Any, operator: str) -> Optional[Any]:
        return self.get(RuleKind.DEFAULT, resolve_identity_from_class(klass, operator))

    def has_default_on(self, klass: Any, operator: str) -> bool:
        return self.has(RuleKind.DEFAULT, resolve_identity_from_class(klass, operator))

    def set_default_on(self, klass: Any, operator: str, value: Any) -> Any:
        return self.set(RuleKind.DEFAULT, resolve_identity_from_class(klass, operator), value)

    # OVERRIDES - use regardless of whether inbound data supplied

    def override(self, binding: MethodBinding) -> Optional[Any]:
        return self.get(RuleKind.OVERRIDE, resolve_identity_from_binding(binding))

    def has_override(self, binding: MethodBinding) -> bool:
        return self.has(RuleKind.OVERRIDE, resolve_identity_from_binding(binding))

    def set_override(self, binding: MethodBinding, value: Any) -> Any:
        return self.set(RuleKind.OVERRIDE, resolve_identity_from_binding(binding), value)

    def override_on(self, klass: Any, operator: str) -> Optional[Any]:
        return self.get(RuleKind.OVERRIDE, resolve_identity_from_class(klass, operator))

    def has_override_on(self, klass: Any, operator: str) -> bool:
        return self.has(RuleKind.OVERRIDE, resolve_identity_from_class(klass, operator))

    def set_override_on(self, klass: Any, operator: str, value: Any) -> Any:
        return self.set(RuleKind.OVERRIDE, resolve_identity_from_class(klass, operator), value)

    # SUBSTITUTIONS

    def substitution(self, binding: MethodBinding) -> Optional[Substitution]:
        return self.get(RuleKind.SUBSTITUTION, resolve_identity_from_binding(binding))

    def has_substitution(self, binding: MethodBinding) -> bool:
        return self.has(RuleKind.SUBSTITUTION, resolve_identity_from_binding(binding))

    def set_substitution(self, binding: MethodBinding, pattern: Any, replacement: Any) -> Substitution:
        return self.set(RuleKind.SUBSTITUTION, resolve_identity_from_binding(binding),
                        Substitution(pattern=pattern, replacement=replacement))

    def substitution_on(self, klass: Any, operator: str) -> Optional[Substitution]:
        return self.get(RuleKind.SUBSTITUTION, resolve_identity_from_class(klass, operator))

    def has_substitution_on(self, klass: Any, operator: str) -> bool:
        return self.has(RuleKind.SUBSTITUTION, resolve_identity_from_class(klass, operator))

    def set_substitution_on(self, klass: Any, operator: str, pattern: Any, replacement: Any) -> Substitution:
        return self.set(RuleKind.SUBSTITUTION, resolve_identity_from_class(klass, operator),
                        Substitution(pattern=pattern, replacement=replacement))

    def set_substitution_on_list(self, klass: Any, operator: str, values: List[Any]) -> Substitution:
        """Raises ValueError unless values is a [pattern, replacement] pair"""
        return self.set(RuleKind.SUBSTITUTION, resolve_identity_from_class(klass, operator),
                        Substitution.from_list(values))

    # PREFIXES

    def prefix(self, binding: MethodBinding) -> Optional[Any]:
        return self.get(RuleKind.PREFIX, resolve_identity_from_binding(binding))

    def has_prefix(self, binding: MethodBinding) -> bool:
        return self.has(RuleKind.PREFIX, resolve_identity_from_binding(binding))

    def set_prefix(self, binding: MethodBinding, value: Any) -> Any:
        return self.set(RuleKind.PREFIX, resolve_identity_from_binding(binding), value)

    def prefix_on(self, klass: Any, operator: str) -> Optional[Any]:
        return self.get(RuleKind.PREFIX, resolve_identity_from_class(klass, operator))

    def has_prefix_on(self, klass: Any, operator: str) -> bool:
        return self.has(RuleKind.PREFIX, resolve_identity_from_class(klass, operator))

    def set_prefix_on(self, klass: Any, operator: str, value: Any) -> Any:
        return self.set(RuleKind.PREFIX, resolve_identity_from_class(klass, operator), value)

    # POSTFIXES

    def postfix(self, binding: MethodBinding) -> Optional[Any]:
        return self.get(RuleKind.POSTFIX, resolve_identity_from_binding(binding))

    def has_postfix(self, binding: MethodBinding) -> bool:
        return self.has(RuleKind.POSTFIX, resolve_identity_from_binding(binding))

    def set_postfix(self, binding: MethodBinding, value: Any) -> Any:
        return self.set(RuleKind.POSTFIX, resolve_identity_from_binding(binding), value)

    def postfix_on(self, klass: Any, operator: str) -> Optional[Any]:
        return self.get(RuleKind.POSTFIX, resolve_identity_from_class(klass, operator))

    def has_postfix_on(self, klass: Any, operator: str) -> bool:
        return self.has(RuleKind.POSTFIX, resolve_identity_from_class(klass, operator))

    def set_postfix_on(self, klass: Any, operator: str, value: Any) -> Any:
        return self.set(RuleKind.POSTFIX, resolve_identity_from_class(klass, operator), value)
