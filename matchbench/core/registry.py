"""
Component registry for datasets, blockers and distance functions.

Components are looked up by the short names used on the command line and in
experiment configs.
"""

from typing import Dict, Type, Any, Callable


class Registry:
    """
    Generic registry for component classes and factories.

    Usage:
        registry = Registry("distances")
        registry.register("jaccard", JaccardDistance)
        distance = registry.create("jaccard", ignore_case=True)
    """

    def __init__(self, name: str):
        self.name = name
        self._registry: Dict[str, Type] = {}
        self._factories: Dict[str, Callable] = {}

    def register(self, name: str, cls: Type = None, factory: Callable = None) -> Callable:
        """Register a component class, or a factory function building one."""
        if (cls is None) == (factory is None):
            raise ValueError(f"Register exactly one of cls or factory for '{name}'")
        if cls is not None:
            self._registry[name] = cls
            return cls
        self._factories[name] = factory
        return factory

    def get(self, name: str) -> Callable:
        """Get a registered class or factory by name."""
        if name in self._registry:
            return self._registry[name]
        if name in self._factories:
            return self._factories[name]
        raise KeyError(f"'{name}' not found in {self.name} registry. "
                       f"Available: {self.list()}")

    def create(self, name: str, **kwargs) -> Any:
        """Create an instance of a registered component."""
        cls_or_factory = self.get(name)
        return cls_or_factory(**kwargs)

    def list(self) -> list:
        """List all registered component names."""
        return sorted(list(self._registry.keys()) + list(self._factories.keys()))

    def __contains__(self, name: str) -> bool:
        return name in self._registry or name in self._factories


_registries: Dict[str, Registry] = {}


def get_registry(name: str) -> Registry:
    """Get or create a named registry."""
    if name not in _registries:
        _registries[name] = Registry(name)
    return _registries[name]


datasets = get_registry("datasets")
blockers = get_registry("blockers")
distances = get_registry("distances")
