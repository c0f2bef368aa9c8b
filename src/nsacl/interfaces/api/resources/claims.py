"""Claims API resource - consumed by the downstream authorization console."""

import falcon
import falcon.asgi

from nsacl.application.use_cases.claim.generate_claim import GenerateClaimUseCase
from nsacl.interfaces.api.resources.serializers import claim_to_media


class ClaimsResource:
    """POST /v1/claims - body {"groups": [...]}."""

    def __init__(self, generate_claim: GenerateClaimUseCase) -> None:
        self._generate = generate_claim

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await req.get_media(default_when_empty={})
        groups = body.get("groups") if isinstance(body, dict) else None
        if groups is None:
            groups = []
        if not isinstance(groups, list) or not all(isinstance(g, str) for g in groups):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "groups must be a list of strings"}
            return
        claim = await self._generate.execute(groups)
        resp.media = claim_to_media(claim)
        resp.status = falcon.HTTP_200
