"""
Plugin discovery sources and the startup composition step.

The registry itself is agnostic to how plugins are found. Sources produce
plugin objects; `populate` feeds them to a registry during startup and then
freezes it.

Sources:
    StaticSource      - explicit list of instances built by the host
    TaggedSource      - classes marked with @tagged(tag) inside given packages
    ConfigSource      - "module:attribute" references listed in a JSON/YAML file
    EntryPointSource  - packaging entry points under a group name

Usage:
    registry = CapabilityRegistry(BankProvider)
    populate(registry, [
        TaggedSource(BANK_TAG, packages=["bank_plugins"]),
        ConfigSource("plugins.yaml"),
    ])
"""

from __future__ import annotations

import importlib
import inspect
import json
import pkgutil
from abc import ABC, abstractmethod
from importlib import metadata
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Union

import yaml

from ._logging import get_component_logger
from .registry import CapabilityRegistry
from .types import DiscoveryError

TAGS_ATTRIBUTE = "__capability_tags__"


def tagged(*tags: str) -> Callable[[type], type]:
    """
    Class decorator marking a plugin class with one or more tags.

    Tags accumulate across stacked decorators and are not inherited by
    subclasses.
    """
    if not tags:
        raise ValueError("tagged() requires at least one tag")

    def decorator(cls: type) -> type:
        existing = cls.__dict__.get(TAGS_ATTRIBUTE, frozenset())
        setattr(cls, TAGS_ATTRIBUTE, frozenset(existing) | frozenset(tags))
        return cls
    return decorator


def tags_of(cls: type) -> frozenset:
    return cls.__dict__.get(TAGS_ATTRIBUTE, frozenset())


def _instantiate(factory: Callable[[type], Any], cls: type, reference: str) -> Any:
    try:
        return factory(cls)
    except Exception as exc:
        raise DiscoveryError(
            message=f"Cannot instantiate plugin '{reference}': {type(exc).__name__}: {exc}",
            reference=reference,
        ) from exc


def _materialize(obj: Any, reference: str) -> Any:
    """Instantiate classes, pass instances through."""
    if inspect.isclass(obj):
        return _instantiate(lambda cls: cls(), obj, reference)
    return obj


def resolve_reference(reference: str) -> Any:
    """
    Resolve "package.module:Attr.sub" to the referenced object.

    Raises:
        DiscoveryError: malformed reference, import failure or missing attribute
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise DiscoveryError(
            message=f"Plugin reference must look like 'module:attribute', got '{reference}'",
            reference=reference,
        )

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise DiscoveryError(
            message=f"Cannot import module '{module_name}': {exc}",
            reference=reference,
        ) from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise DiscoveryError(
                message=f"'{module_name}' has no attribute '{attr_path}'",
                reference=reference,
            ) from exc
    return obj


class PluginSource(ABC):
    @property
    @abstractmethod
    def label(self) -> str:
        """Short description recorded on each registry entry."""
        ...

    @abstractmethod
    def discover(self) -> Iterable[Any]:
        ...


class StaticSource(PluginSource):
    def __init__(self, plugins: Iterable[Any], label: str = "static"):
        self._plugins = list(plugins)
        self._label = label

    @property
    def label(self) -> str:
        return self._label

    def discover(self) -> Iterable[Any]:
        return list(self._plugins)


class TaggedSource(PluginSource):
    """
    Scan packages for classes carrying a tag and instantiate them.

    Every module under each package is imported. Only classes defined in the
    scanned module itself are considered, so re-exports are not picked up
    twice. Order: packages as given, modules by dotted name, classes in
    definition order.
    """

    def __init__(
        self,
        tag: str,
        packages: Sequence[Union[str, ModuleType]],
        factory: Optional[Callable[[type], Any]] = None,
        logger: Optional[Any] = None,
    ):
        self._tag = tag
        self._packages = list(packages)
        self._factory = factory or (lambda cls: cls())
        self._logger = get_component_logger("TaggedSource", logger)

    @property
    def label(self) -> str:
        return f"tag:{self._tag}"

    def discover(self) -> Iterator[Any]:
        for cls in self.tagged_classes():
            yield _instantiate(self._factory, cls, f"{cls.__module__}:{cls.__qualname__}")

    def tagged_classes(self) -> List[type]:
        classes: List[type] = []
        for module in self._iter_modules():
            for obj in vars(module).values():
                if (
                    inspect.isclass(obj)
                    and obj.__module__ == module.__name__
                    and self._tag in tags_of(obj)
                ):
                    classes.append(obj)
        self._logger.debug(
            "tagged_classes_found",
            tag=self._tag,
            classes=[cls.__qualname__ for cls in classes],
        )
        return classes

    def _iter_modules(self) -> Iterator[ModuleType]:
        for package in self._packages:
            root = self._import(package) if isinstance(package, str) else package
            yield root

            search_path = getattr(root, "__path__", None)
            if search_path is None:
                continue

            names = sorted(
                info.name
                for info in pkgutil.walk_packages(search_path, prefix=f"{root.__name__}.")
            )
            for name in names:
                yield self._import(name)

    def _import(self, name: str) -> ModuleType:
        try:
            return importlib.import_module(name)
        except ImportError as exc:
            raise DiscoveryError(
                message=f"Cannot import '{name}' while scanning for tag '{self._tag}': {exc}",
                reference=name,
            ) from exc


class ConfigSource(PluginSource):
    """
    Plugins declared in a configuration file.

    Schema (JSON or YAML):
        plugins:
          - bank_plugins.acme:AcmeBank
          - my_company.banks:initech_bank   # module-level instance
    A bare top-level list is accepted too.
    """

    def __init__(self, path: Union[str, Path], key: str = "plugins"):
        self._path = Path(path)
        self._key = key

    @property
    def label(self) -> str:
        return f"config:{self._path.name}"

    def references(self) -> List[str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DiscoveryError(
                message=f"Cannot read plugin config '{self._path}': {exc}",
                reference=str(self._path),
            ) from exc

        parsed = self._parse(raw)
        if parsed is None:
            return []
        if isinstance(parsed, dict):
            parsed = parsed.get(self._key) or []

        if not isinstance(parsed, list) or not all(isinstance(r, str) for r in parsed):
            raise DiscoveryError(
                message=f"'{self._path}' must list plugin references as strings under '{self._key}'",
                reference=str(self._path),
            )
        return parsed

    def discover(self) -> Iterator[Any]:
        for reference in self.references():
            yield _materialize(resolve_reference(reference), reference)

    def _parse(self, raw: str) -> Any:
        try:
            return json.loads(raw)
        except ValueError:
            pass
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise DiscoveryError(
                message=f"'{self._path}' is neither valid JSON nor YAML: {exc}",
                reference=str(self._path),
            ) from exc


class EntryPointSource(PluginSource):
    """
    Plugins advertised by installed distributions, e.g. in pyproject.toml:

        [project.entry-points."bank_host.banks"]
        acme_bank = "bank_plugins.acme:AcmeBank"
    """

    def __init__(self, group: str):
        self._group = group

    @property
    def label(self) -> str:
        return f"entry_points:{self._group}"

    def discover(self) -> Iterator[Any]:
        for ep in metadata.entry_points(group=self._group):
            try:
                obj = ep.load()
            except (ImportError, AttributeError) as exc:
                raise DiscoveryError(
                    message=f"Cannot load entry point '{ep.name}' ({ep.value}): {exc}",
                    reference=ep.value,
                ) from exc
            yield _materialize(obj, ep.value)


def populate(
    registry: CapabilityRegistry,
    sources: Iterable[PluginSource],
    *,
    freeze: bool = True,
    logger: Optional[Any] = None,
) -> int:
    """
    Register every plugin produced by `sources`, in order.

    Returns:
        Number of plugins registered

    Raises:
        DiscoveryError, InvalidPluginError, DuplicateNameError from the
        sources or the registry; nothing is frozen in that case.
    """
    log = get_component_logger("populate", logger)
    total = 0
    for source in sources:
        count = 0
        for plugin in source.discover():
            registry.register(plugin, source=source.label)
            count += 1
        log.info("plugin_source_loaded", source=source.label, plugin_count=count)
        total += count

    if freeze:
        registry.freeze()
    log.info("registry_populated", plugin_count=total, frozen=freeze)
    return total
