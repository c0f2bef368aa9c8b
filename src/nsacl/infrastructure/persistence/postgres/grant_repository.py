"""PostgreSQL grant repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from nsacl.domain.entities import Grant
from nsacl.domain.value_objects import GrantPermission, PatternType, ResourceType

_COLUMNS = (
    "cluster, namespace, name, resource_type, resource, pattern_type, "
    "permission, granted_to, labels, created_at"
)


def _enum_or_raw(enum_cls, value: str):
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _row_to_grant(r: tuple) -> Grant:
    return Grant(
        cluster=r[0],
        namespace=r[1],
        name=r[2],
        resource_type=_enum_or_raw(ResourceType, r[3]),
        resource=r[4],
        pattern_type=_enum_or_raw(PatternType, r[5]),
        permission=_enum_or_raw(GrantPermission, r[6]),
        granted_to=r[7],
        labels=r[8] or {},
        created_at=r[9],
    )


class PostgresGrantRepository:
    """Grant repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_all(self) -> list[Grant]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM grant_entry ORDER BY created_at, namespace, name"
        )
        return [_row_to_grant(r) for r in await cur.fetchall()]

    async def list_by_cluster(self, cluster: str) -> list[Grant]:
        """List grants on one cluster, oldest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM grant_entry WHERE cluster = %s "
            "ORDER BY created_at, namespace, name",
            (cluster,),
        )
        return [_row_to_grant(r) for r in await cur.fetchall()]

    async def list_by_namespace(self, namespace: str) -> list[Grant]:
        """List grants issued by namespace."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM grant_entry WHERE namespace = %s "
            "ORDER BY created_at, name",
            (namespace,),
        )
        return [_row_to_grant(r) for r in await cur.fetchall()]

    async def get_by_name(self, cluster: str, namespace: str, name: str) -> Grant | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM grant_entry "
            "WHERE cluster = %s AND namespace = %s AND name = %s",
            (cluster, namespace, name),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_grant(r)

    async def create(self, grant: Grant) -> Grant:
        await self._conn.execute(
            f"INSERT INTO grant_entry ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                grant.cluster,
                grant.namespace,
                grant.name,
                str(grant.resource_type),
                grant.resource,
                str(grant.pattern_type),
                str(grant.permission),
                grant.granted_to,
                Jsonb(grant.labels),
                grant.created_at,
            ),
        )
        return grant

    async def update_labels(self, grant: Grant) -> None:
        """Labels are the only mutable part of a stored grant."""
        await self._conn.execute(
            "UPDATE grant_entry SET labels = %s "
            "WHERE cluster = %s AND namespace = %s AND name = %s",
            (Jsonb(grant.labels), grant.cluster, grant.namespace, grant.name),
        )

    async def delete(self, grant: Grant) -> None:
        await self._conn.execute(
            "DELETE FROM grant_entry WHERE cluster = %s AND namespace = %s AND name = %s",
            (grant.cluster, grant.namespace, grant.name),
        )

    async def lock_cluster(self, cluster: str, resource_type: ResourceType) -> None:
        """Transaction-scoped advisory lock on (cluster, resource type)."""
        await self._conn.execute(
            "SELECT pg_advisory_xact_lock(hashtext(%s), hashtext(%s))",
            (cluster, str(resource_type)),
        )
