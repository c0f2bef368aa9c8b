"""Fixtures for API tests."""

import falcon.asgi
import pytest

from nsacl.application.use_cases.claim.generate_claim import GenerateClaimUseCase
from nsacl.application.use_cases.grant.apply_grant import ApplyGrantUseCase
from nsacl.application.use_cases.grant.delete_grants import DeleteGrantsUseCase
from nsacl.application.use_cases.grant.list_grants import ListGrantsUseCase
from nsacl.application.use_cases.namespace.check_ownership import CheckOwnershipUseCase
from nsacl.application.use_cases.namespace.create_namespace import CreateNamespaceUseCase
from nsacl.application.use_cases.namespace.list_namespaces import ListNamespacesUseCase
from nsacl.infrastructure.permission.ownership_checker import SnapshotOwnershipChecker
from nsacl.interfaces.api.errors import register_error_handlers
from nsacl.interfaces.api.middleware.auth import RequestUser

from tests.conftest import (
    ADMIN_GROUP,
    FakeUnitOfWork,
    factory_for,
    make_config,
    make_grant,
    make_namespace,
)

USERS = {
    "admin": RequestUser(user_id="admin-1", groups=[ADMIN_GROUP], is_admin=True),
    "team-a": RequestUser(user_id="user-a", groups=["group-a"]),
}


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing.

    X-Test-User picks the user ("admin" or "team-a", default "team-a"); "rejected"
    simulates an invalid token.
    """

    async def process_request(self, req, resp):
        key = req.get_header("X-Test-User") or "team-a"
        req.context.user = USERS.get(key)


@pytest.fixture
def api_uow() -> FakeUnitOfWork:
    """Shared UoW seeded with two team namespaces and an ownership grant."""
    uow = FakeUnitOfWork()
    uow.namespaces.add(make_namespace("ns1", groups="group-a"))
    uow.namespaces.add(make_namespace("ns2", groups="group-a"))
    uow.namespaces.add(make_namespace("ns3", groups="group-b"))
    uow.grants.add(make_grant("ns1-owner", "ns1", "project1."))
    return uow


@pytest.fixture
def app(api_uow):
    """Falcon ASGI app with API resources for testing."""
    from nsacl.interfaces.api.resources.claims import ClaimsResource
    from nsacl.interfaces.api.resources.grants import GrantsResource
    from nsacl.interfaces.api.resources.health import HealthResource
    from nsacl.interfaces.api.resources.namespaces import NamespacesResource
    from nsacl.interfaces.api.resources.ownership import OwnershipResource

    uow_factory = factory_for(api_uow)
    config = make_config()

    app = falcon.asgi.App(middleware=[AuthBypassMiddleware()])
    register_error_handlers(app)
    app.add_route("/v1/health", HealthResource())
    app.add_route(
        "/v1/namespaces",
        NamespacesResource(
            ListNamespacesUseCase(uow_factory, config),
            CreateNamespaceUseCase(uow_factory, config),
        ),
    )
    app.add_route(
        "/v1/namespaces/{namespace}/grants",
        GrantsResource(
            ApplyGrantUseCase(uow_factory, config),
            ListGrantsUseCase(uow_factory, config),
            DeleteGrantsUseCase(uow_factory, config),
        ),
    )
    app.add_route(
        "/v1/namespaces/{namespace}/ownership",
        OwnershipResource(
            CheckOwnershipUseCase(uow_factory, SnapshotOwnershipChecker(uow_factory), config)
        ),
    )
    app.add_route("/v1/claims", ClaimsResource(GenerateClaimUseCase(uow_factory, config)))
    return app


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient
    return TestClient(app)
