"""Application entry point and composition root."""

import logging

import falcon.asgi

from nsacl import __version__
from nsacl.application.use_cases.claim.generate_claim import GenerateClaimUseCase
from nsacl.application.use_cases.grant.apply_grant import ApplyGrantUseCase
from nsacl.application.use_cases.grant.delete_grants import DeleteGrantsUseCase
from nsacl.application.use_cases.grant.list_grants import ListGrantsUseCase
from nsacl.application.use_cases.namespace.check_ownership import CheckOwnershipUseCase
from nsacl.application.use_cases.namespace.create_namespace import CreateNamespaceUseCase
from nsacl.application.use_cases.namespace.list_namespaces import ListNamespacesUseCase
from nsacl.config import Settings, get_settings
from nsacl.infrastructure.auth.keycloak_provider import KeycloakProvider
from nsacl.infrastructure.permission.ownership_checker import SnapshotOwnershipChecker
from nsacl.infrastructure.persistence.postgres.connection import create_pool
from nsacl.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from nsacl.interfaces.api.errors import register_error_handlers
from nsacl.interfaces.api.middleware.auth import AuthMiddleware
from nsacl.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from nsacl.interfaces.api.resources.claims import ClaimsResource
from nsacl.interfaces.api.resources.grants import GrantsResource
from nsacl.interfaces.api.resources.health import HealthResource
from nsacl.interfaces.api.resources.namespaces import NamespacesResource
from nsacl.interfaces.api.resources.ownership import OwnershipResource
from nsacl.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("nsacl.startup", extra={"version": __version__})
    uvicorn.run(create_nsacl_app(settings), host="0.0.0.0", port=8000, log_config=None)


def create_nsacl_app(settings: Settings | None = None):
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    claim_config = settings.claim_config()

    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("auth.disabled", extra={"environment": settings.environment})

    ownership_checker = SnapshotOwnershipChecker(uow_factory)

    apply_grant = ApplyGrantUseCase(uow_factory, claim_config)
    list_grants = ListGrantsUseCase(uow_factory, claim_config)
    delete_grants = DeleteGrantsUseCase(uow_factory, claim_config)
    create_namespace = CreateNamespaceUseCase(uow_factory, claim_config)
    list_namespaces = ListNamespacesUseCase(uow_factory, claim_config)
    check_ownership = CheckOwnershipUseCase(uow_factory, ownership_checker, claim_config)
    generate_claim = GenerateClaimUseCase(uow_factory, claim_config)

    health_resource = HealthResource(pool)
    namespaces_resource = NamespacesResource(list_namespaces, create_namespace)
    grants_resource = GrantsResource(apply_grant, list_grants, delete_grants)
    ownership_resource = OwnershipResource(check_ownership)
    claims_resource = ClaimsResource(generate_claim)

    app = falcon.asgi.App(
        middleware=[
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak, admin_group=claim_config.admin_group),
        ],
    )
    register_error_handlers(app)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/namespaces", namespaces_resource)
    app.add_route("/v1/namespaces/{namespace}/grants", grants_resource)
    app.add_route("/v1/namespaces/{namespace}/ownership", ownership_resource)
    app.add_route("/v1/claims", claims_resource)

    return app
