import threading
from abc import abstractmethod

import pytest

from capreg import (
    Capability,
    CapabilityRegistry,
    DuplicateNameError,
    DuplicatePolicy,
    InvalidPluginError,
    NotFoundError,
    RegistryFrozenError,
)


class Greeter(Capability):
    @abstractmethod
    def greet(self, who: str) -> str:
        ...


class NamedGreeter(Greeter):
    def __init__(self, name: str, greeting: str = "Hello"):
        self._name = name
        self._greeting = greeting

    def get_name(self) -> str:
        return self._name

    def greet(self, who: str) -> str:
        return f"{self._greeting} {who} from {self._name}"


def test_lookup_returns_registered_instance():
    registry = CapabilityRegistry(Greeter)
    plugin = NamedGreeter("english")

    registry.register(plugin)

    assert registry.lookup("english") is plugin


def test_lookup_missing_raises_not_found():
    registry = CapabilityRegistry(Greeter)

    with pytest.raises(NotFoundError) as exc_info:
        registry.lookup("unknown_bank")

    assert exc_info.value.name == "unknown_bank"
    assert exc_info.value.available == []


def test_lookup_missing_lists_available_names():
    registry = CapabilityRegistry(Greeter)
    registry.register(NamedGreeter("english"))

    with pytest.raises(NotFoundError) as exc_info:
        registry.lookup("french")

    assert exc_info.value.available == ["english"]


def test_lookup_is_idempotent():
    registry = CapabilityRegistry(Greeter)
    plugin = NamedGreeter("english")
    registry.register(plugin)

    first = registry.lookup("english")
    second = registry.lookup("english")

    assert first is second is plugin
    assert len(registry) == 1


def test_lookup_independent_of_registration_order():
    a, b, c = NamedGreeter("a"), NamedGreeter("b"), NamedGreeter("c")
    forward = CapabilityRegistry(Greeter)
    backward = CapabilityRegistry(Greeter)
    for plugin in (a, b, c):
        forward.register(plugin)
    for plugin in (c, b, a):
        backward.register(plugin)

    for name in ("a", "b", "c"):
        assert forward.lookup(name) is backward.lookup(name)


def test_list_all_preserves_registration_order():
    registry = CapabilityRegistry(Greeter)
    plugins = [NamedGreeter(n) for n in ("zulu", "alpha", "mike")]
    for plugin in plugins:
        registry.register(plugin)

    pairs = list(registry.list_all())

    assert [name for name, _ in pairs] == ["zulu", "alpha", "mike"]
    assert [p for _, p in pairs] == plugins


def test_list_all_is_restartable():
    registry = CapabilityRegistry(Greeter)
    registry.register(NamedGreeter("one"))
    registry.register(NamedGreeter("two"))

    view = registry.list_all()

    assert len(view) == 2
    assert list(view) == list(view)
    assert [name for name, _ in view] == ["one", "two"]


def test_list_all_view_keeps_its_snapshot():
    registry = CapabilityRegistry(Greeter)
    registry.register(NamedGreeter("one"))
    view = registry.list_all()

    registry.register(NamedGreeter("two"))

    assert [name for name, _ in view] == ["one"]
    assert [name for name, _ in registry.list_all()] == ["one", "two"]


def test_list_all_entries_come_from_the_same_snapshot():
    registry = CapabilityRegistry(Greeter, on_duplicate=DuplicatePolicy.REPLACE)
    original = NamedGreeter("one")
    registry.register(original, source="first")
    view = registry.list_all()

    registry.register(NamedGreeter("one", "Hi"), source="second")

    entries = list(view.entries())
    assert [(e.name, e.plugin, e.source) for e in entries] == [("one", original, "first")]
    assert registry.entry("one").source == "second"


def test_two_plugins_are_distinguished_by_name():
    registry = CapabilityRegistry(Greeter)
    english = NamedGreeter("english", "Hello")
    french = NamedGreeter("french", "Bonjour")
    registry.register(english)
    registry.register(french)

    assert dict(registry.list_all()) == {"english": english, "french": french}
    assert registry.lookup("english").greet("Ana") == "Hello Ana from english"
    assert registry.lookup("french").greet("Ana") == "Bonjour Ana from french"


def test_duplicate_name_raises_by_default():
    registry = CapabilityRegistry(Greeter)
    original = NamedGreeter("english")
    registry.register(original, source="first")

    with pytest.raises(DuplicateNameError) as exc_info:
        registry.register(NamedGreeter("english"), source="second")

    assert exc_info.value.name == "english"
    assert "first" in exc_info.value.message
    assert registry.lookup("english") is original


def test_duplicate_name_replace_policy_keeps_position():
    registry = CapabilityRegistry(Greeter, on_duplicate=DuplicatePolicy.REPLACE)
    registry.register(NamedGreeter("english"))
    registry.register(NamedGreeter("french"))
    replacement = NamedGreeter("english", "Hi")

    registry.register(replacement)

    assert registry.lookup("english") is replacement
    assert registry.names() == ["english", "french"]


def test_replace_policy_accepts_string_value():
    registry = CapabilityRegistry(Greeter, on_duplicate="replace")
    registry.register(NamedGreeter("x"))
    registry.register(NamedGreeter("x"))

    assert len(registry) == 1


def test_register_returns_entry_with_source():
    registry = CapabilityRegistry(Greeter)
    plugin = NamedGreeter("english")

    entry = registry.register(plugin, source="static")

    assert entry.name == "english"
    assert entry.plugin is plugin
    assert registry.entry("english").source == "static"


def test_register_rejects_invalid_plugin():
    class Incomplete:
        def get_name(self):
            return "incomplete"

    registry = CapabilityRegistry(Greeter)

    with pytest.raises(InvalidPluginError) as exc_info:
        registry.register(Incomplete())

    assert exc_info.value.missing == ["greet"]
    assert "incomplete" not in registry


def test_register_after_freeze_fails():
    registry = CapabilityRegistry(Greeter)
    registry.register(NamedGreeter("english"))
    registry.freeze()

    with pytest.raises(RegistryFrozenError):
        registry.register(NamedGreeter("french"))

    assert registry.frozen
    assert registry.names() == ["english"]
    assert registry.lookup("english").get_name() == "english"


def test_freeze_is_idempotent(mock_logger):
    registry = CapabilityRegistry(Greeter, logger=mock_logger)
    registry.freeze()
    registry.freeze()

    frozen_events = [c for c in mock_logger.info.call_args_list if c.args[0] == "registry_frozen"]
    assert len(frozen_events) == 1


def test_contains_and_len():
    registry = CapabilityRegistry(Greeter)
    registry.register(NamedGreeter("english"))

    assert "english" in registry
    assert "french" not in registry
    assert len(registry) == 1


def test_registry_rejects_non_capability_interface():
    class NotAnInterface:
        pass

    with pytest.raises(TypeError):
        CapabilityRegistry(NotAnInterface)


def test_register_logs_event(mock_logger):
    registry = CapabilityRegistry(Greeter, logger=mock_logger)

    registry.register(NamedGreeter("english"), source="static")

    mock_logger.info.assert_any_call("plugin_registered", name="english", source="static")


def test_replace_logs_warning(mock_logger):
    registry = CapabilityRegistry(Greeter, on_duplicate=DuplicatePolicy.REPLACE, logger=mock_logger)
    registry.register(NamedGreeter("english"), source="a")
    registry.register(NamedGreeter("english"), source="b")

    mock_logger.warning.assert_called_once_with(
        "plugin_replaced", name="english", source="b", previous_source="a"
    )


def test_concurrent_registration_and_lookup():
    registry = CapabilityRegistry(Greeter)
    registry.register(NamedGreeter("seed"))
    errors = []

    def writer(start: int):
        for i in range(start, start + 50):
            registry.register(NamedGreeter(f"g{i}"))

    def reader():
        for _ in range(200):
            try:
                assert registry.lookup("seed").get_name() == "seed"
                for name, plugin in registry.list_all():
                    assert plugin.get_name() == name
            except AssertionError as exc:
                errors.append(exc)

    threads = [threading.Thread(target=writer, args=(n * 50,)) for n in range(4)]
    threads += [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(registry) == 201
