"""Pytest fixtures for nsacl tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import pytest

from nsacl.application.dto.actor import Actor
from nsacl.domain.entities import Grant, Namespace
from nsacl.domain.value_objects import (
    ClaimConfig,
    GrantPermission,
    PatternType,
    ResourceType,
)

GROUP_LABEL = "support-group"
ADMIN_GROUP = "_"

CLAIM_ROLES = {
    ResourceType.TOPIC: "topic-read",
    ResourceType.CONSUMER_GROUP: "group-read",
    ResourceType.CONNECT: "connect-rw",
    ResourceType.CONNECT_CLUSTER: "connect-cluster-read",
    ResourceType.SCHEMA: "registry-read",
}

CLAIM_ADMIN_ROLES = {
    ResourceType.TOPIC: "topic-admin",
    ResourceType.CONSUMER_GROUP: "group-admin",
    ResourceType.CONNECT: "connect-admin",
    ResourceType.CONNECT_CLUSTER: "connect-admin",
    ResourceType.SCHEMA: "registry-admin",
}


def make_config(clusters: tuple[str, ...] = ("cluster1", "cluster2")) -> ClaimConfig:
    return ClaimConfig(
        roles=CLAIM_ROLES,
        admin_roles=CLAIM_ADMIN_ROLES,
        admin_group=ADMIN_GROUP,
        group_label=GROUP_LABEL,
        managed_clusters=clusters,
    )


def make_namespace(name: str, cluster: str = "cluster1", groups: str | None = None) -> Namespace:
    labels = {GROUP_LABEL: groups} if groups is not None else {}
    return Namespace(name=name, cluster=cluster, labels=labels)


def make_grant(
    name: str,
    namespace: str,
    resource: str,
    *,
    granted_to: str | None = None,
    resource_type: ResourceType | str = ResourceType.TOPIC,
    pattern_type: PatternType | str = PatternType.PREFIXED,
    permission: GrantPermission | str = GrantPermission.OWNER,
    cluster: str = "cluster1",
    labels: dict[str, str] | None = None,
) -> Grant:
    """Grant builder; defaults to a self-assigned PREFIXED TOPIC OWNER grant."""
    return Grant(
        name=name,
        namespace=namespace,
        cluster=cluster,
        resource_type=resource_type,
        resource=resource,
        pattern_type=pattern_type,
        permission=permission,
        granted_to=granted_to if granted_to is not None else namespace,
        labels=labels or {},
        created_at=datetime.now(UTC),
    )


# --- Fake repositories ---


class FakeNamespaceRepository:
    """In-memory namespace repository."""

    def __init__(self) -> None:
        self._by_name: dict[str, Namespace] = {}

    def add(self, namespace: Namespace) -> None:
        self._by_name[namespace.name] = namespace

    async def list_all(self) -> list[Namespace]:
        return sorted(self._by_name.values(), key=lambda ns: ns.name)

    async def list_by_cluster(self, cluster: str) -> list[Namespace]:
        return [ns for ns in await self.list_all() if ns.cluster == cluster]

    async def get_by_name(self, name: str) -> Namespace | None:
        return self._by_name.get(name)

    async def create(self, namespace: Namespace) -> Namespace:
        self._by_name[namespace.name] = namespace
        return namespace


class FakeGrantRepository:
    """In-memory grant repository; keeps insertion order."""

    def __init__(self) -> None:
        self._by_identity: dict[tuple[str, str, str], Grant] = {}
        self.locks: list[tuple[str, str]] = []

    def add(self, grant: Grant) -> None:
        self._by_identity[grant.identity] = grant

    async def list_all(self) -> list[Grant]:
        return list(self._by_identity.values())

    async def list_by_cluster(self, cluster: str) -> list[Grant]:
        return [g for g in self._by_identity.values() if g.cluster == cluster]

    async def list_by_namespace(self, namespace: str) -> list[Grant]:
        return [g for g in self._by_identity.values() if g.namespace == namespace]

    async def get_by_name(self, cluster: str, namespace: str, name: str) -> Grant | None:
        return self._by_identity.get((cluster, namespace, name))

    async def create(self, grant: Grant) -> Grant:
        self._by_identity[grant.identity] = grant
        return grant

    async def update_labels(self, grant: Grant) -> None:
        self._by_identity[grant.identity] = grant

    async def delete(self, grant: Grant) -> None:
        self._by_identity.pop(grant.identity, None)

    async def lock_cluster(self, cluster: str, resource_type: ResourceType) -> None:
        self.locks.append((cluster, str(resource_type)))


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.namespaces = FakeNamespaceRepository()
        self.grants = FakeGrantRepository()
        self.committed = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        pass


def factory_for(uow: FakeUnitOfWork):
    """UoW factory that yields the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Fixtures ---


@pytest.fixture
def claim_config() -> ClaimConfig:
    return make_config()


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return factory_for(fake_uow)


@pytest.fixture
def admin() -> Actor:
    return Actor(user_id="admin-1", groups=(ADMIN_GROUP,), is_admin=True)


@pytest.fixture
def team_a() -> Actor:
    """Member of group-a, which ns1 and ns2 are labelled with."""
    return Actor(user_id="user-a", groups=("group-a",))


@pytest.fixture
def mock_ownership_checker():
    """AsyncMock for OwnershipChecker - returns True by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.is_owner.return_value = True
    return mock
