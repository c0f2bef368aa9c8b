"""Namespaces API resources."""

import falcon
import falcon.asgi

from nsacl.application.dto.namespace_dto import NamespaceInput
from nsacl.application.use_cases.namespace.create_namespace import CreateNamespaceUseCase
from nsacl.application.use_cases.namespace.list_namespaces import ListNamespacesUseCase
from nsacl.interfaces.api.middleware.auth import actor_from_request
from nsacl.interfaces.api.resources.serializers import namespace_to_media


class NamespacesResource:
    """GET/POST /v1/namespaces - list and create namespaces."""

    def __init__(
        self,
        list_namespaces: ListNamespacesUseCase,
        create_namespace: CreateNamespaceUseCase,
    ) -> None:
        self._list = list_namespaces
        self._create = create_namespace

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List namespaces the caller manages."""
        actor = actor_from_request(req)
        namespaces = await self._list.execute(actor)
        resp.media = {"items": [namespace_to_media(ns) for ns in namespaces]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create namespace (administrators only)."""
        actor = actor_from_request(req)
        try:
            data = NamespaceInput.from_media(await req.get_media())
        except ValueError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        namespace = await self._create.execute(actor, data)
        resp.media = namespace_to_media(namespace)
        resp.status = falcon.HTTP_201
