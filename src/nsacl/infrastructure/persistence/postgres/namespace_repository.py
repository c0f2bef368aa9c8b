"""PostgreSQL namespace repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from nsacl.domain.entities import Namespace


class PostgresNamespaceRepository:
    """Namespace repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_all(self) -> list[Namespace]:
        cur = await self._conn.execute(
            "SELECT name, cluster, labels, created_at FROM namespace ORDER BY name"
        )
        rows = await cur.fetchall()
        return [
            Namespace(name=r[0], cluster=r[1], labels=r[2] or {}, created_at=r[3])
            for r in rows
        ]

    async def list_by_cluster(self, cluster: str) -> list[Namespace]:
        cur = await self._conn.execute(
            "SELECT name, cluster, labels, created_at FROM namespace "
            "WHERE cluster = %s ORDER BY name",
            (cluster,),
        )
        rows = await cur.fetchall()
        return [
            Namespace(name=r[0], cluster=r[1], labels=r[2] or {}, created_at=r[3])
            for r in rows
        ]

    async def get_by_name(self, name: str) -> Namespace | None:
        cur = await self._conn.execute(
            "SELECT name, cluster, labels, created_at FROM namespace WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Namespace(name=r[0], cluster=r[1], labels=r[2] or {}, created_at=r[3])

    async def create(self, namespace: Namespace) -> Namespace:
        await self._conn.execute(
            "INSERT INTO namespace (name, cluster, labels, created_at) VALUES (%s, %s, %s, %s)",
            (namespace.name, namespace.cluster, Jsonb(namespace.labels), namespace.created_at),
        )
        return namespace
