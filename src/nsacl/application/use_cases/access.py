"""Namespace access rules shared by the use cases."""

from nsacl.application.dto.actor import Actor
from nsacl.domain.entities import Namespace
from nsacl.domain.exceptions import NotFound, PermissionDenied
from nsacl.domain.value_objects import ClaimConfig


def can_manage(actor: Actor, namespace: Namespace, config: ClaimConfig) -> bool:
    """Administrators manage every namespace; others those labelled with one of their groups."""
    if actor.is_admin:
        return True
    return actor.in_any(namespace.groups(config.group_label, config.group_delimiter))


async def get_managed_namespace(uow, actor: Actor, name: str, config: ClaimConfig) -> Namespace:
    """Load namespace `name` and check the actor may act on it."""
    namespace = await uow.namespaces.get_by_name(name)
    if namespace is None:
        raise NotFound("Namespace", name)
    if not can_manage(actor, namespace, config):
        raise PermissionDenied(f"User does not have access to namespace {name}")
    return namespace
