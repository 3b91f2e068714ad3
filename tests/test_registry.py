# tests/test_registry.py

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from populator import DEFAULT_LOCALE, TransformRegistry, bind, create_registry, factory
from populator.core.config import PopulatorConfig


def test_instance_is_cached_per_locale(registry):
    assert registry.instance("fr") is registry.instance("fr")
    assert registry.instance("fr") is not registry.instance("de")


def test_instance_defaults_to_default_locale(registry):
    assert registry.instance() is registry.instance(DEFAULT_LOCALE)
    assert registry.instance().locale == "en"


def test_custom_default_locale():
    registry = TransformRegistry(default_locale="fr")
    assert registry.instance().locale == "fr"


def test_empty_default_locale_rejected():
    with pytest.raises(ValueError):
        TransformRegistry(default_locale="")


def test_locales_lists_created_stores(registry):
    registry.instance("fr")
    registry.instance()
    assert registry.locales() == ["en", "fr"]


def test_pass_through_uses_locale_store(registry, project_class):
    registry.set_default_on(project_class, "status", "en attente", locale="fr")

    assert registry.default_on(project_class, "status", locale="fr") == "en attente"
    assert registry.instance("fr").default_on(project_class, "status") == "en attente"
    assert not registry.has_default_on(project_class, "status")


def test_binding_and_class_access_match(registry, project_class):
    binding = bind(project_class, "status")
    registry.set_override(binding, "closed")
    registry.set_substitution_on(project_class, "name", "_", " ")
    registry.set_prefix_on(project_class, "code", "PRJ-")
    registry.set_postfix(bind(project_class, "code"), "-01")

    assert registry.override_on(project_class, "status") == registry.override(binding) == "closed"
    assert registry.substitution(bind(project_class, "name")) == registry.substitution_on(project_class, "name")
    assert registry.prefix(bind(project_class, "code")) == "PRJ-"
    assert registry.postfix_on(project_class, "code") == "-01"


def test_has_checks_through_registry(registry, project_class):
    binding = bind(project_class, "status")
    assert not registry.has_default(binding)
    assert not registry.has_override(binding)
    assert not registry.has_substitution(binding)
    assert not registry.has_prefix(binding)
    assert not registry.has_postfix(binding)

    registry.set_default(binding, "pending")
    registry.set_substitution(binding, "open", "active")

    assert registry.has_default(binding)
    assert registry.default(binding) == "pending"
    assert registry.has_substitution_on(project_class, "status")


def test_reset_replaces_store_for_one_locale(registry, project_class):
    binding = bind(project_class, "status")
    registry.set_default(binding, "pending")
    registry.set_override(binding, "closed")
    registry.set_substitution(binding, "a", "b")
    registry.set_prefix(binding, "<")
    registry.set_postfix(binding, ">")
    registry.set_default(binding, "en attente", locale="fr")

    old = registry.instance()
    new = registry.reset()

    assert new is not old
    assert registry.instance() is new
    for kind in ("default", "override", "substitution", "prefix", "postfix"):
        assert getattr(registry, f"has_{kind}")(binding) is False
    assert registry.default(binding, locale="fr") == "en attente"
    # the detached store keeps what it had
    assert old.default(binding) == "pending"


def test_reset_of_unseen_locale_creates_store(registry):
    store = registry.reset("es")
    assert registry.instance("es") is store


def test_concurrent_first_access_sees_one_store(registry):
    workers = 32
    barrier = threading.Barrier(workers)

    def first_access():
        barrier.wait()
        return registry.instance("pt")

    with ThreadPoolExecutor(max_workers=workers) as pool:
        stores = list(pool.map(lambda _: first_access(), range(workers)))

    assert len({id(store) for store in stores}) == 1


def test_concurrent_setters_all_land(registry, project_class):
    workers = 16
    barrier = threading.Barrier(workers)

    def configure(i):
        barrier.wait()
        registry.set_default_on(project_class, f"field_{i}", i, locale="it")
        registry.set_default_on(project_class, "shared", i, locale="it")

    with ThreadPoolExecutor(max_workers=workers) as pool:
        list(pool.map(configure, range(workers)))

    for i in range(workers):
        assert registry.default_on(project_class, f"field_{i}", locale="it") == i
    assert registry.default_on(project_class, "shared", locale="it") in range(workers)


def test_factory_yields_locale_store(registry, project_class):
    with factory(registry, "fr") as rules:
        rules.set_default_on(project_class, "value_as_string", "texte par défaut")

    assert registry.default_on(project_class, "value_as_string", locale="fr") == "texte par défaut"


def test_create_registry_honours_config():
    registry = create_registry(PopulatorConfig(default_locale="de"))
    assert registry.instance().locale == "de"


def test_registries_do_not_share_state(project_class):
    first, second = TransformRegistry(), TransformRegistry()
    first.set_default_on(project_class, "status", "pending")
    assert not second.has_default_on(project_class, "status")
