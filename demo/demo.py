#!/usr/bin/env python3
"""
Demonstration of servicegraph on a small web application registry.

This demo shows:
1. Registering services with classes, instances and factories
2. Open generic registrations satisfying closed generic dependencies
3. Constructor overload selection
4. Tree views, DOT export, usage statistics and deep chains
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import overload

from servicegraph import DependencyTree, ServiceCollection, TreeStyle, TreeViewer


@dataclass
class Config:
    """Application configuration."""

    app_name: str
    debug: bool = False


class ILogger[T](ABC):
    """Logger scoped to the class that requests it."""


class ConsoleLogger[T](ILogger[T]):
    def __init__(self, config: Config):
        self.config = config


class Database(ABC):
    @abstractmethod
    def query(self, sql: str) -> str:
        pass


class PostgresDB(Database):
    def __init__(self, config: Config):
        self.config = config

    def query(self, sql: str) -> str:
        return f"PostgreSQL[{self.config.app_name}]: {sql}"


class Cache:
    pass


class UserRepository:
    @overload
    def __init__(self, database: Database) -> None: ...

    @overload
    def __init__(self, database: Database, cache: Cache) -> None: ...

    def __init__(self, database, cache=None):
        self.database = database
        self.cache = cache


class UserService:
    def __init__(self, repository: UserRepository, logger: ILogger["UserService"]):
        self.repository = repository
        self.logger = logger


class EmailService:
    def __init__(self, config: Config, logger: ILogger["EmailService"]):
        self.config = config
        self.logger = logger


class SignupController:
    def __init__(self, users: UserService, email: EmailService):
        self.users = users
        self.email = email


def make_cache() -> Cache:
    return Cache()


def build_services() -> ServiceCollection:
    services = ServiceCollection()
    services.add_singleton(Config, Config("demo-app", debug=True))
    services.add_singleton(ILogger, ConsoleLogger)
    services.add_singleton(Database, PostgresDB)
    services.add_singleton(Cache, make_cache)
    services.add_scoped(UserRepository)
    services.add_scoped(UserService)
    services.add_transient(EmailService)
    services.make(SignupController).transient().type(SignupController)
    return services


def main() -> None:
    tree = DependencyTree(build_services())

    print("=== Dependency tree ===")
    print(tree.generate_tree_view())

    print("=== Dependency tree (box drawing) ===")
    boxed = DependencyTree(build_services(), viewer=TreeViewer(style=TreeStyle.BOX))
    print(boxed.generate_tree_view())

    print("=== Most used services ===")
    for service_type, count in tree.get_most_used_services(3):
        print(f"{service_type.__name__}: {count}")

    print("\n=== Services nothing depends on ===")
    for service_type in tree.get_unused_services():
        print(service_type.__name__)

    print("\n=== Chains of depth 4 or more ===")
    print(tree.get_registration_chains_by_depth(4).string_representation)

    print("=== Graphviz ===")
    print(tree.export_to_dot())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
