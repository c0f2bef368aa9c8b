"""Ownership API resource."""

import falcon
import falcon.asgi

from nsacl.application.use_cases.namespace.check_ownership import CheckOwnershipUseCase
from nsacl.domain.value_objects import ResourceType
from nsacl.interfaces.api.middleware.auth import actor_from_request


class OwnershipResource:
    """GET /v1/namespaces/{namespace}/ownership?resource_type=&resource=."""

    def __init__(self, check_ownership: CheckOwnershipUseCase) -> None:
        self._check = check_ownership

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        namespace: str,
    ) -> None:
        actor = actor_from_request(req)
        resource = req.get_param("resource")
        try:
            resource_type = ResourceType(req.get_param("resource_type", default=""))
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid or missing resource_type"}
            return
        if not resource:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Missing required parameter: resource"}
            return
        owner = await self._check.execute(actor, namespace, resource_type, resource)
        resp.media = {"owner": owner}
        resp.status = falcon.HTTP_200
