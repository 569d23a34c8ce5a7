"""
Service Registry - Central management of application services
Implements dependency injection and lazy loading patterns
"""
from typing import Dict, Any, Callable, List, Optional


class ServiceRegistry:
    """
    Centralized registry for application services.

    Factories may declare dependencies by name; they are resolved through the
    registry and passed to the factory as keyword arguments. Services created
    by a scoped factory are rebuilt on every get, so anything holding a
    database session is never shared across requests.
    """

    def __init__(self):
        self._services: Dict[str, Any] = {}
        self._factories: Dict[str, Callable] = {}
        self._dependencies: Dict[str, List[str]] = {}
        self._scoped: set = set()

    def register(self, name: str, service: Any) -> None:
        """
        Register a service instance directly.

        Args:
            name: Service identifier
            service: Service instance
        """
        self._services[name] = service

    def register_factory(self, name: str, factory: Callable,
                         dependencies: Optional[List[str]] = None,
                         scoped: bool = False) -> None:
        """
        Register a factory function for lazy service instantiation.

        Args:
            name: Service identifier
            factory: Callable that returns a service instance
            dependencies: Names of services to pass to the factory
            scoped: Build a fresh instance on every get instead of caching
        """
        self._factories[name] = factory
        self._dependencies[name] = list(dependencies or [])
        if scoped:
            self._scoped.add(name)
        else:
            self._scoped.discard(name)
        self._services.pop(name, None)

    def get(self, name: str) -> Any:
        """
        Get a service by name. Lazy loads if factory is registered.

        Raises:
            ValueError: If service is not registered
        """
        if name in self._services:
            return self._services[name]

        if name in self._factories:
            kwargs = {dep: self.get(dep) for dep in self._dependencies[name]}
            service = self._factories[name](**kwargs)
            if name not in self._scoped:
                self._services[name] = service
            return service

        raise ValueError(f"Service '{name}' is not registered")

    def has(self, name: str) -> bool:
        """Check if a service is registered."""
        return name in self._services or name in self._factories

    def reset(self) -> None:
        """
        Clear all registered services and factories.
        Useful for testing.
        """
        self._services.clear()
        self._factories.clear()
        self._dependencies.clear()
        self._scoped.clear()

    def reset_service(self, name: str) -> None:
        """Reset a specific service, forcing re-instantiation on next get."""
        self._services.pop(name, None)

    def list_services(self) -> list:
        """List all registered service names."""
        all_services = set(self._services.keys()) | set(self._factories.keys())
        return sorted(all_services)
