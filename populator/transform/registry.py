# populator/transform/registry.py

import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..core.mixins import LoggingMixin
from ..types import (
    DEFAULT_LOCALE,
    ConfigurationResult,
    MethodBinding,
    RuleKind,
    Substitution,
)
from .identity import identity_of_class
from .loader import RulesDocumentLoader
from .store import RuleStore

RuleSetter = Callable[[Any, str, Any], Any]


class TransformRegistry(LoggingMixin):
    """
    Holds one RuleStore per locale.

    Stores are created on first request for a locale and kept until reset.
    Construct one registry and hand it to whatever needs it; there is no
    module level instance.
    """

    def __init__(self, default_locale: str = DEFAULT_LOCALE,
                 loader: Optional[RulesDocumentLoader] = None):
        if not default_locale:
            raise ValueError("Default locale cannot be empty")

        self.default_locale = default_locale
        self.loader = loader or RulesDocumentLoader()
        self._stores: Dict[str, RuleStore] = {}
        self._lock = threading.Lock()

        self.log_debug("TransformRegistry initialized", locale=default_locale)

    def _locale(self, locale: Optional[str]) -> str:
        return locale or self.default_locale

    def instance(self, locale: Optional[str] = None) -> RuleStore:
        """Store for locale, created empty on first request"""
        locale = self._locale(locale)
        with self._lock:
            store = self._stores.get(locale)
            if store is None:
                store = RuleStore(locale)
                self._stores[locale] = store
                self.log_debug("Created rule store", locale=locale)
            return store

    def reset(self, locale: Optional[str] = None) -> RuleStore:
        """Replace the store for locale with an empty one, other locales untouched"""
        locale = self._locale(locale)
        store = RuleStore(locale)
        with self._lock:
            self._stores[locale] = store
        self.log_info("Rule store reset", locale=locale)
        return store

    def locales(self) -> List[str]:
        with self._lock:
            return sorted(self._stores)

    # === BULK CONFIGURATION ===

    def configure_from(self, target_class: Any, document_path: Union[str, Path],
                       locale_key: Optional[str] = None,
                       locale: Optional[str] = None,
                       context: Optional[Mapping[str, Any]] = None) -> Optional[ConfigurationResult]:
        """
        Apply the section for target_class from a YAML rules document.

        The file is template expanded with context before parsing. When
        locale_key is given the document is first narrowed to that top level
        section. A missing file, locale section or class section is a no-op
        and returns None.
        """
        data = self.loader.load(document_path, context)
        class_identity = identity_of_class(target_class)

        if locale_key:
            data = data.get(locale_key) if isinstance(data, dict) else None
            if data is None:
                self.log_debug("Locale section not present in rules document",
                               document=str(document_path),
                               locale=locale_key)
                return None

        if not isinstance(data, dict) or not data.get(class_identity):
            self.log_debug("No rules for class in document",
                           document=str(document_path),
                           class_identity=class_identity)
            return None

        return self.configure_from_document(target_class, data[class_identity], locale=locale)

    def configure_from_document(self, target_class: Any, document: Any,
                                locale: Optional[str] = None) -> ConfigurationResult:
        """
        Apply every rule in a class section.

        Each of the five sections is optional. A section that is not a mapping
        is skipped, as is a single entry the setter rejects; nothing applied
        before or after it is affected.
        """
        store = self.instance(locale)
        class_identity = identity_of_class(target_class)
        result = ConfigurationResult(class_identity=class_identity, locale=store.locale)

        if not isinstance(document, dict):
            self.log_warning("Rules section is not a mapping, skipping",
                             class_identity=class_identity,
                             locale=store.locale)
            result.skipped.append(class_identity)
            return result

        self.log_info("Configuring transforms for class",
                      class_identity=class_identity,
                      locale=store.locale)

        setters = self._setters(store)

        for kind in RuleKind:
            settings = document.get(kind.section)
            if settings is None:
                continue
            if not isinstance(settings, dict):
                self.log_warning("Rules section is not a mapping, skipping",
                                 class_identity=class_identity,
                                 rule_kind=kind.section)
                result.skipped.append(kind.section)
                continue

            setter = setters[kind]
            for operator, value in settings.items():
                try:
                    setter(target_class, operator, value)
                except (ValueError, TypeError) as e:
                    self.log_warning("Skipping malformed transform",
                                     class_identity=class_identity,
                                     rule_kind=kind.section,
                                     operator=operator,
                                     value=value,
                                     error=str(e))
                    result.skipped.append(f"{kind.section}.{operator}")
                    continue

                self.log_info("Configured transform",
                              class_identity=class_identity,
                              rule_kind=kind.section,
                              operator=operator,
                              value=value)
                result.applied += 1

        return result

    @staticmethod
    def _setters(store: RuleStore) -> Dict[RuleKind, RuleSetter]:
        return {
            RuleKind.DEFAULT: store.set_default_on,
            RuleKind.OVERRIDE: store.set_override_on,
            RuleKind.SUBSTITUTION: store.set_substitution_on_list,
            RuleKind.PREFIX: store.set_prefix_on,
            RuleKind.POSTFIX: store.set_postfix_on,
        }

    # === DEFAULTS ===

    def default(self, binding: MethodBinding, locale: Optional[str] = None) -> Optional[Any]:
        return self.instance(locale).default(binding)

    def has_default(self, binding: MethodBinding, locale: Optional[str] = None) -> bool:
        return self.instance(locale).has_default(binding)

    def set_default(self, binding: MethodBinding, value: Any, locale: Optional[str] = None) -> Any:
        return self.instance(locale).set_default(binding, value)

    def default_on(self, klass: Any, operator: str, locale: Optional[str] = None) -> Optional[Any]:
        return self.instance(locale).default_on(klass, operator)

    def has_default_on(self, klass: Any, operator: str, locale: Optional[str] = None) -> bool:
        return self.instance(locale).has_default_on(klass, operator)

    def set_default_on(self, klass: Any, operator: str, value: Any, locale: Optional[str] = None) -> Any:
        return self.instance(locale).set_default_on(klass, operator, value)

    # === OVERRIDES ===

    def override(self, binding: MethodBinding, locale: Optional[str] = None) -> Optional[Any]:
        return self.instance(locale).override(binding)

    def has_override(self, binding: MethodBinding, locale: Optional[str] = None) -> bool:
        return self.instance(locale).has_override(binding)

    def set_override(self, binding: MethodBinding, value: Any, locale: Optional[str] = None) -> Any:
        return self.instance(locale).set_override(binding, value)

    def override_on(self, klass: Any, operator: str, locale: Optional[str] = None) -> Optional[Any]:
        return self.instance(locale).override_on(klass, operator)

    def has_override_on(self, klass: Any, operator: str, locale: Optional[str] = None) -> bool:
        return self.instance(locale).has_override_on(klass, operator)

    def set_override_on(self, klass: Any, operator: str, value: Any, locale: Optional[str] = None) -> Any:
        return self.instance(locale).set_override_on(klass, operator, value)

    # === SUBSTITUTIONS ===

    def substitution(self, binding: MethodBinding, locale: Optional[str] = None) -> Optional[Substitution]:
        return self.instance(locale).substitution(binding)

    def has_substitution(self, binding: MethodBinding, locale: Optional[str] = None) -> bool:
        return self.instance(locale).has_substitution(binding)

    def set_substitution(self, binding: MethodBinding, pattern: Any, replacement: Any,
                         locale: Optional[str] = None) -> Substitution:
        return self.instance(locale).set_substitution(binding, pattern, replacement)

    def substitution_on(self, klass: Any, operator: str, locale: Optional[str] = None) -> Optional[Substitution]:
        return self.instance(locale).substitution_on(klass, operator)

    def has_substitution_on(self, klass: Any, operator: str, locale: Optional[str] = None) -> bool:
        return self.instance(locale).has_substitution_on(klass, operator)

    def set_substitution_on(self, klass: Any, operator: str, pattern: Any, replacement: Any,
                            locale: Optional[str] = None) -> Substitution:
        return self.instance(locale).set_substitution_on(klass, operator, pattern, replacement)

    def set_substitution_on_list(self, klass: Any, operator: str, values: List[Any],
                                 locale: Optional[str] = None) -> Substitution:
        return self.instance(locale).set_substitution_on_list(klass, operator, values)

    # === PREFIXES ===

    def prefix(self, binding: MethodBinding, locale: Optional[str] = None) -> Optional[Any]:
        return self.instance(locale).prefix(binding)

    def has_prefix(self, binding: MethodBinding, locale: Optional[str] = None) -> bool:
        return self.instance(locale).has_prefix(binding)

    def set_prefix(self, binding: MethodBinding, value: Any, locale: Optional[str] = None) -> Any:
        return self.instance(locale).set_prefix(binding, value)

    def prefix_on(self, klass: Any, operator: str, locale: Optional[str] = None) -> Optional[Any]:
        return self.instance(locale).prefix_on(klass, operator)

    def has_prefix_on(self, klass: Any, operator: str, locale: Optional[str] = None) -> bool:
        return self.instance(locale).has_prefix_on(klass, operator)

    def set_prefix_on(self, klass: Any, operator: str, value: Any, locale: Optional[str] = None) -> Any:
        return self.instance(locale).set_prefix_on(klass, operator, value)

    # === POSTFIXES ===

    def postfix(self, binding: MethodBinding, locale: Optional[str] = None) -> Optional[Any]:
        return self.instance(locale).postfix(binding)

    def has_postfix(self, binding: MethodBinding, locale: Optional[str] = None) -> bool:
        return self.instance(locale).has_postfix(binding)

    def set_postfix(self, binding: MethodBinding, value: Any, locale: Optional[str] = None) -> Any:
        return self.instance(locale).set_postfix(binding, value)

    def postfix_on(self, klass: Any, operator: str, locale: Optional[str] = None) -> Optional[Any]:
        return self.instance(locale).postfix_on(klass, operator)

    def has_postfix_on(self, klass: Any, operator: str, locale: Optional[str] = None) -> bool:
        return self.instance(locale).has_postfix_on(klass, operator)

    def set_postfix_on(self, klass: Any, operator: str, value: Any, locale: Optional[str] = None) -> Any:
        return self.instance(locale).set_postfix_on(klass, operator, value)
