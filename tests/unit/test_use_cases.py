"""Unit tests for use cases."""

import logging

import pytest

from nsacl.application.dto.actor import Actor
from nsacl.application.dto.grant_dto import ApplyStatus, GrantInput
from nsacl.application.dto.namespace_dto import NamespaceInput
from nsacl.application.use_cases.claim.generate_claim import GenerateClaimUseCase
from nsacl.application.use_cases.grant.apply_grant import ApplyGrantUseCase
from nsacl.application.use_cases.grant.delete_grants import DeleteGrantsUseCase
from nsacl.application.use_cases.grant.list_grants import ListGrantsUseCase
from nsacl.application.use_cases.namespace.check_ownership import CheckOwnershipUseCase
from nsacl.application.use_cases.namespace.create_namespace import CreateNamespaceUseCase
from nsacl.application.use_cases.namespace.list_namespaces import ListNamespacesUseCase
from nsacl.domain.entities import PUBLIC_GRANTEE
from nsacl.domain.exceptions import NotFound, PermissionDenied, ValidationError
from nsacl.domain.value_objects import GrantPermission, GrantScope, PatternType, ResourceType
from nsacl.infrastructure.permission.ownership_checker import SnapshotOwnershipChecker

from tests.conftest import ADMIN_GROUP, FakeUnitOfWork, make_grant, make_namespace


def _seed(uow: FakeUnitOfWork) -> None:
    """ns1 owns project1. and shares a topic with ns2; ns3 belongs to another team."""
    uow.namespaces.add(make_namespace("ns1", groups="group-a"))
    uow.namespaces.add(make_namespace("ns2", groups="group-a"))
    uow.namespaces.add(make_namespace("ns3", groups="group-b"))
    uow.grants.add(make_grant("ns1-owner", "ns1", "project1."))
    uow.grants.add(make_grant("ns3-owner", "ns3", "project3."))
    uow.grants.add(
        make_grant(
            "share-t1", "ns1", "project1.t1", granted_to="ns2",
            pattern_type=PatternType.LITERAL, permission=GrantPermission.READ,
        )
    )
    uow.grants.add(
        make_grant(
            "public-t3", "ns3", "project3.public", granted_to=PUBLIC_GRANTEE,
            pattern_type=PatternType.LITERAL, permission=GrantPermission.READ,
        )
    )


def _input(**overrides) -> GrantInput:
    body = {
        "name": "share-new",
        "resource_type": "TOPIC",
        "resource": "project1.new",
        "pattern_type": "LITERAL",
        "permission": "WRITE",
        "granted_to": "ns2",
    }
    body.update(overrides)
    return GrantInput.from_media(body)


# --- ApplyGrantUseCase ---


@pytest.mark.asyncio
async def test_apply_grant_creates_self_service_grant(fake_uow, uow_factory, claim_config, team_a) -> None:
    _seed(fake_uow)
    use_case = ApplyGrantUseCase(uow_factory, claim_config)

    result = await use_case.execute(team_a, "ns1", _input())

    assert result.status == ApplyStatus.CREATED
    assert result.grant.namespace == "ns1"
    assert result.grant.cluster == "cluster1"
    assert result.grant.created_at is not None
    stored = await fake_uow.grants.get_by_name("cluster1", "ns1", "share-new")
    assert stored == result.grant
    assert fake_uow.grants.locks == [("cluster1", "TOPIC")]


@pytest.mark.asyncio
async def test_apply_grant_dry_run_does_not_persist(fake_uow, uow_factory, claim_config, team_a) -> None:
    _seed(fake_uow)
    use_case = ApplyGrantUseCase(uow_factory, claim_config)

    result = await use_case.execute(team_a, "ns1", _input(), dry_run=True)

    assert result.dry_run
    assert result.status == ApplyStatus.CREATED
    assert await fake_uow.grants.get_by_name("cluster1", "ns1", "share-new") is None


@pytest.mark.asyncio
async def test_apply_grant_reports_every_violation(fake_uow, uow_factory, claim_config, team_a, caplog) -> None:
    _seed(fake_uow)
    use_case = ApplyGrantUseCase(uow_factory, claim_config)

    with caplog.at_level(logging.INFO), pytest.raises(ValidationError) as exc:
        await use_case.execute(
            team_a, "ns1", _input(permission="OWNER", granted_to="ghost", resource="elsewhere")
        )

    assert len(exc.value.violations) == 3
    assert await fake_uow.grants.get_by_name("cluster1", "ns1", "share-new") is None
    assert any(r.getMessage() == "grant.apply.rejected" for r in caplog.records)


@pytest.mark.asyncio
async def test_apply_grant_label_change_and_unchanged(fake_uow, uow_factory, claim_config, team_a) -> None:
    _seed(fake_uow)
    use_case = ApplyGrantUseCase(uow_factory, claim_config)
    await use_case.execute(team_a, "ns1", _input())

    same = await use_case.execute(team_a, "ns1", _input())
    relabelled = await use_case.execute(team_a, "ns1", _input(labels={"team": "a"}))

    assert same.status == ApplyStatus.UNCHANGED
    assert relabelled.status == ApplyStatus.CHANGED
    stored = await fake_uow.grants.get_by_name("cluster1", "ns1", "share-new")
    assert stored.labels == {"team": "a"}


@pytest.mark.asyncio
async def test_apply_grant_payload_is_immutable(fake_uow, uow_factory, claim_config, team_a) -> None:
    _seed(fake_uow)
    use_case = ApplyGrantUseCase(uow_factory, claim_config)
    await use_case.execute(team_a, "ns1", _input())

    with pytest.raises(ValidationError) as exc:
        await use_case.execute(team_a, "ns1", _input(permission="READ"))

    assert exc.value.violations == [
        'Invalid value "share-new" for field "payload": payload is immutable.'
    ]


@pytest.mark.asyncio
async def test_admin_confers_ownership_with_collision_check(fake_uow, uow_factory, claim_config, admin) -> None:
    _seed(fake_uow)
    use_case = ApplyGrantUseCase(uow_factory, claim_config)

    with pytest.raises(ValidationError) as exc:
        await use_case.execute(
            admin,
            "ns2",
            _input(name="ns2-owner", resource="project1.topic", permission="OWNER", granted_to="ns2"),
        )
    assert len(exc.value.violations) == 1
    assert "(child-overlap)" in exc.value.violations[0]

    result = await use_case.execute(
        admin,
        "ns2",
        _input(name="ns2-owner", resource="project2.", pattern_type="PREFIXED",
               permission="OWNER", granted_to="ns2"),
    )
    assert result.status == ApplyStatus.CREATED


@pytest.mark.parametrize(
    "overrides",
    [
        {"pattern_type": "REGEX", "permission": "OWNER"},
        {"pattern_type": "REGEX", "permission": "READ"},
        {"resource_type": "BOGUS", "permission": "OWNER"},
        {"resource_type": "BOGUS", "permission": "WRITE"},
        {"permission": "ADMIN"},
    ],
)
@pytest.mark.asyncio
async def test_admin_self_assigned_grant_rejects_unknown_enums(
    fake_uow, uow_factory, claim_config, admin, overrides
) -> None:
    _seed(fake_uow)
    use_case = ApplyGrantUseCase(uow_factory, claim_config)

    with pytest.raises(ValidationError) as exc:
        await use_case.execute(
            admin,
            "ns2",
            _input(name="bad", resource="project2.", granted_to="ns2", **overrides),
        )
    assert len(exc.value.violations) == 1
    assert await fake_uow.grants.get_by_name("cluster1", "ns2", "bad") is None

    claim = await GenerateClaimUseCase(uow_factory, claim_config).execute(["group-a"])
    assert not claim.admin


@pytest.mark.asyncio
async def test_admin_self_assigned_read_grant_skips_collision_check(
    fake_uow, uow_factory, claim_config, admin
) -> None:
    _seed(fake_uow)
    use_case = ApplyGrantUseCase(uow_factory, claim_config)

    result = await use_case.execute(
        admin,
        "ns2",
        _input(name="ns2-read", resource="project1.", pattern_type="PREFIXED",
               permission="READ", granted_to="ns2"),
    )
    assert result.status == ApplyStatus.CREATED


@pytest.mark.asyncio
async def test_non_admin_cannot_self_assign_ownership(fake_uow, uow_factory, claim_config, team_a) -> None:
    _seed(fake_uow)
    use_case = ApplyGrantUseCase(uow_factory, claim_config)

    with pytest.raises(ValidationError) as exc:
        await use_case.execute(
            team_a, "ns2", _input(resource="project2.", permission="OWNER", granted_to="ns2")
        )
    assert any("cannot grant to yourself" in v for v in exc.value.violations)


@pytest.mark.asyncio
async def test_apply_grant_unknown_namespace_and_foreign_team(fake_uow, uow_factory, claim_config, team_a) -> None:
    _seed(fake_uow)
    use_case = ApplyGrantUseCase(uow_factory, claim_config)

    with pytest.raises(NotFound):
        await use_case.execute(team_a, "ghost", _input())
    with pytest.raises(PermissionDenied):
        await use_case.execute(team_a, "ns3", _input())


# --- ListGrantsUseCase ---


@pytest.mark.asyncio
async def test_list_grants_scopes(fake_uow, uow_factory, claim_config, team_a) -> None:
    _seed(fake_uow)
    use_case = ListGrantsUseCase(uow_factory, claim_config)

    grantor = await use_case.execute(team_a, "ns1", GrantScope.GRANTOR)
    grantee = await use_case.execute(team_a, "ns1", GrantScope.GRANTEE)
    everything = await use_case.execute(team_a, "ns1", GrantScope.ALL)

    assert [g.name for g in grantor] == ["share-t1"]
    assert [g.name for g in grantee] == ["ns1-owner", "public-t3"]
    assert [g.name for g in everything] == ["ns1-owner", "share-t1", "public-t3"]


@pytest.mark.asyncio
async def test_list_grants_name_filter(fake_uow, uow_factory, claim_config, team_a) -> None:
    _seed(fake_uow)
    use_case = ListGrantsUseCase(uow_factory, claim_config)

    grants = await use_case.execute(team_a, "ns1", GrantScope.ALL, "share-*")
    assert [g.name for g in grants] == ["share-t1"]


# --- DeleteGrantsUseCase ---


@pytest.mark.asyncio
async def test_delete_grants_by_wildcard(fake_uow, uow_factory, claim_config, team_a) -> None:
    _seed(fake_uow)
    use_case = DeleteGrantsUseCase(uow_factory, claim_config)

    dry = await use_case.execute(team_a, "ns1", "share-*", dry_run=True)
    assert [g.name for g in dry] == ["share-t1"]
    assert await fake_uow.grants.get_by_name("cluster1", "ns1", "share-t1") is not None

    deleted = await use_case.execute(team_a, "ns1", "share-*")
    assert [g.name for g in deleted] == ["share-t1"]
    assert await fake_uow.grants.get_by_name("cluster1", "ns1", "share-t1") is None


@pytest.mark.asyncio
async def test_delete_grants_nothing_matches(fake_uow, uow_factory, claim_config, team_a) -> None:
    _seed(fake_uow)
    use_case = DeleteGrantsUseCase(uow_factory, claim_config)
    with pytest.raises(NotFound):
        await use_case.execute(team_a, "ns1", "nope-*")


@pytest.mark.asyncio
async def test_only_admin_deletes_self_assigned_grants(fake_uow, uow_factory, claim_config, team_a, admin) -> None:
    _seed(fake_uow)
    use_case = DeleteGrantsUseCase(uow_factory, claim_config)

    with pytest.raises(ValidationError) as exc:
        await use_case.execute(team_a, "ns1", "*")
    assert "ns1-owner" in exc.value.violations[0]
    assert await fake_uow.grants.get_by_name("cluster1", "ns1", "share-t1") is not None

    deleted = await use_case.execute(admin, "ns1", "*")
    assert {g.name for g in deleted} == {"ns1-owner", "share-t1"}


# --- Namespaces ---


@pytest.mark.asyncio
async def test_create_namespace_admin_only(fake_uow, uow_factory, claim_config, admin, team_a) -> None:
    use_case = CreateNamespaceUseCase(uow_factory, claim_config)
    data = NamespaceInput(name="ns9", cluster="cluster2", labels={"support-group": "group-a"})

    with pytest.raises(PermissionDenied):
        await use_case.execute(team_a, data)

    namespace = await use_case.execute(admin, data)
    assert namespace.created_at is not None
    assert await fake_uow.namespaces.get_by_name("ns9") == namespace


@pytest.mark.asyncio
async def test_create_namespace_validation(fake_uow, uow_factory, claim_config, admin) -> None:
    _seed(fake_uow)
    use_case = CreateNamespaceUseCase(uow_factory, claim_config)

    with pytest.raises(ValidationError) as exc:
        await use_case.execute(admin, NamespaceInput(name="ns1", cluster="elsewhere"))
    assert len(exc.value.violations) == 2


@pytest.mark.asyncio
async def test_list_namespaces_by_group(fake_uow, uow_factory, claim_config, admin, team_a) -> None:
    _seed(fake_uow)
    use_case = ListNamespacesUseCase(uow_factory, claim_config)

    assert [ns.name for ns in await use_case.execute(team_a)] == ["ns1", "ns2"]
    assert [ns.name for ns in await use_case.execute(admin)] == ["ns1", "ns2", "ns3"]
    assert await use_case.execute(Actor(user_id="anonymous")) == []


# --- Ownership ---


@pytest.mark.asyncio
async def test_snapshot_ownership_checker(fake_uow, uow_factory) -> None:
    _seed(fake_uow)
    checker = SnapshotOwnershipChecker(uow_factory)

    assert await checker.is_owner("ns1", ResourceType.TOPIC, "project1.anything")
    assert not await checker.is_owner("ns2", ResourceType.TOPIC, "project1.t1")
    assert not await checker.is_owner("ghost", ResourceType.TOPIC, "project1.x")


@pytest.mark.asyncio
async def test_check_ownership_requires_access(
    fake_uow, uow_factory, claim_config, team_a, mock_ownership_checker
) -> None:
    _seed(fake_uow)
    use_case = CheckOwnershipUseCase(uow_factory, mock_ownership_checker, claim_config)

    assert await use_case.execute(team_a, "ns1", ResourceType.TOPIC, "project1.x") is True
    mock_ownership_checker.is_owner.assert_awaited_once_with(
        "ns1", ResourceType.TOPIC, "project1.x"
    )
    with pytest.raises(PermissionDenied):
        await use_case.execute(team_a, "ns3", ResourceType.TOPIC, "project3.x")


# --- GenerateClaimUseCase ---


@pytest.mark.asyncio
async def test_generate_claim_for_team(fake_uow, uow_factory, claim_config) -> None:
    _seed(fake_uow)
    use_case = GenerateClaimUseCase(uow_factory, claim_config)

    claim = await use_case.execute(["group-a"])

    (topics,) = [e for e in claim.entries if e.role == "topic-read"]
    assert topics.patterns == ["^project1\\..*$", "^project3\\.public$"]
    assert topics.clusters == ["^cluster1$"]


@pytest.mark.asyncio
async def test_generate_claim_admin_skips_storage(claim_config) -> None:
    def _factory():
        raise AssertionError("storage must not be touched for administrators")

    use_case = GenerateClaimUseCase(_factory, claim_config)
    claim = await use_case.execute([ADMIN_GROUP])
    assert claim.admin
