"""Grants API resources."""

import falcon
import falcon.asgi

from nsacl.application.dto.grant_dto import ApplyStatus, GrantInput
from nsacl.application.use_cases.grant.apply_grant import ApplyGrantUseCase
from nsacl.application.use_cases.grant.delete_grants import DeleteGrantsUseCase
from nsacl.application.use_cases.grant.list_grants import ListGrantsUseCase
from nsacl.domain.value_objects import GrantScope
from nsacl.interfaces.api.middleware.auth import actor_from_request
from nsacl.interfaces.api.resources.serializers import grant_to_media


class GrantsResource:
    """GET/POST/DELETE /v1/namespaces/{namespace}/grants."""

    def __init__(
        self,
        apply_grant: ApplyGrantUseCase,
        list_grants: ListGrantsUseCase,
        delete_grants: DeleteGrantsUseCase,
    ) -> None:
        self._apply = apply_grant
        self._list = list_grants
        self._delete = delete_grants

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        namespace: str,
    ) -> None:
        """List grants. ?scope=all|grantor|grantee, ?name=<wildcard>."""
        actor = actor_from_request(req)
        try:
            scope = GrantScope(req.get_param("scope", default=GrantScope.ALL.value).lower())
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "scope must be one of all, grantor, grantee"}
            return
        grants = await self._list.execute(actor, namespace, scope, req.get_param("name"))
        resp.media = {"items": [grant_to_media(g) for g in grants]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        namespace: str,
    ) -> None:
        """Create a grant or update its labels. ?dryrun=true validates only."""
        actor = actor_from_request(req)
        dry_run = req.get_param_as_bool("dryrun", default=False)
        try:
            grant_input = GrantInput.from_media(await req.get_media())
        except ValueError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        result = await self._apply.execute(actor, namespace, grant_input, dry_run=dry_run)
        resp.media = {
            **grant_to_media(result.grant),
            "status": result.status.value,
            "dry_run": result.dry_run,
        }
        resp.status = falcon.HTTP_201 if result.status == ApplyStatus.CREATED else falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        namespace: str,
    ) -> None:
        """Delete grants issued by the namespace. ?name=<wildcard> is required."""
        actor = actor_from_request(req)
        name_filter = req.get_param("name")
        if not name_filter:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Missing required parameter: name"}
            return
        dry_run = req.get_param_as_bool("dryrun", default=False)
        deleted = await self._delete.execute(actor, namespace, name_filter, dry_run=dry_run)
        resp.media = {
            "deleted": [g.name for g in deleted],
            "dry_run": dry_run,
        }
        resp.status = falcon.HTTP_200
