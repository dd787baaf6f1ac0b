"""
ServiceCollection - an ordered registry of service registrations.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from .registrations import Lifetime, Registration
from .typeinfo import concrete_class, format_type_name

T = TypeVar("T")


class ServiceCollection:
    """
    An ordered, appendable list of registrations.

    Registration order is preserved; it determines root order in the
    dependency forest and which registration wins when several match.

    Example:
        ```python
        services = ServiceCollection()
        services.add_singleton(Config, Config("prod"))
        services.add_scoped(UserRepository, SqlUserRepository)
        services.make(UserService).transient().type(UserService)
        ```
    """

    def __init__(self) -> None:
        self._registrations: list[Registration] = []

    def add(self, registration: Registration) -> ServiceCollection:
        """Add a ready-made registration."""
        self._registrations.append(registration)
        return self

    def make(self, service_type: type[T] | Any) -> RegistrationBuilder[T]:
        """Create a registration builder for the given service type."""
        return RegistrationBuilder(service_type, self)

    def add_transient(self, service_type: type[T] | Any, implementation: Any = None) -> ServiceCollection:
        """Register a service created every time it is requested."""
        return self._add_inferred(service_type, Lifetime.TRANSIENT, implementation)

    def add_scoped(self, service_type: type[T] | Any, implementation: Any = None) -> ServiceCollection:
        """Register a service created once per scope."""
        return self._add_inferred(service_type, Lifetime.SCOPED, implementation)

    def add_singleton(self, service_type: type[T] | Any, implementation: Any = None) -> ServiceCollection:
        """Register a service created once; non-callable objects are registered as instances."""
        return self._add_inferred(service_type, Lifetime.SINGLETON, implementation)

    def _add_inferred(self, service_type: Any, lifetime: Lifetime, implementation: Any) -> ServiceCollection:
        using = self.make(service_type).with_lifetime(lifetime)

        if implementation is None:
            using.type(service_type)
        elif concrete_class(implementation) is not None:
            using.type(implementation)
        elif callable(implementation):
            using.func(implementation)
        else:
            using.value(implementation)
        return self

    @property
    def registrations(self) -> list[Registration]:
        """Get all registrations, in registration order."""
        return self._registrations.copy()

    def __iter__(self) -> Iterator[Registration]:
        return iter(self._registrations.copy())

    def __len__(self) -> int:
        return len(self._registrations)


class RegistrationBuilder[T]:
    """Builder that picks the lifetime of a registration."""

    def __init__(self, service_type: type[T] | Any, services: ServiceCollection):
        self._service_type = service_type
        self._services = services

    def transient(self) -> UsingBuilder[T]:
        return self.with_lifetime(Lifetime.TRANSIENT)

    def scoped(self) -> UsingBuilder[T]:
        return self.with_lifetime(Lifetime.SCOPED)

    def singleton(self) -> UsingBuilder[T]:
        return self.with_lifetime(Lifetime.SINGLETON)

    def with_lifetime(self, lifetime: Lifetime) -> UsingBuilder[T]:
        """Create a UsingBuilder that finishes the registration with the given lifetime."""

        def finalize(**strategy: Any) -> None:
            registration = Registration(self._service_type, lifetime, **strategy)
            self._services.add(registration)

        return UsingBuilder(self._service_type, lifetime, finalize)


class UsingBuilder[T]:
    """Builder that picks the construction strategy of a registration."""

    def __init__(self, service_type: type[T] | Any, lifetime: Lifetime, finalize_callback: Callable[..., None]):
        self._service_type = service_type
        self._lifetime = lifetime
        self._finalize_callback = finalize_callback

    def type(self, cls: type[T] | Any) -> None:
        """Register a class that the container instantiates."""
        if concrete_class(cls) is None:
            raise TypeError(
                f"Implementation of {format_type_name(self._service_type)} must be a class, got {cls!r}"
            )
        self._finalize_callback(implementation_type=cls)

    def value(self, instance: T) -> None:
        """Register a pre-built instance."""
        if self._lifetime is not Lifetime.SINGLETON:
            raise ValueError(
                f"Instance registration of {format_type_name(self._service_type)} requires "
                f"a {Lifetime.SINGLETON} lifetime, got {self._lifetime}"
            )
        self._finalize_callback(implementation_instance=instance)

    def func(self, factory: Callable[..., T]) -> None:
        """Register a factory function."""
        if not callable(factory):
            raise TypeError(
                f"Factory for {format_type_name(self._service_type)} must be callable, got {factory!r}"
            )
        self._finalize_callback(implementation_factory=factory)
