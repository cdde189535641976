"""Tests for in-memory and Redis-backed stores."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
import redis

from authzcore import (
    AuthorizationService,
    AuthzConfig,
    CollaborationInstance,
    CollaborationMode,
    ConfigurationError,
    PolicyRule,
    Role,
    RoleBinding,
    StoreConnectionError,
    StoreError,
    Verbs,
    WorkflowCIItem,
)
from authzcore.stores import (
    InMemoryCollaborationInstanceStore,
    InMemoryRoleBindingStore,
    InMemoryRoleStore,
    RedisCollaborationInstanceStore,
    RedisCollaborationModeStore,
    RedisRoleBindingStore,
    RedisRoleStore,
)
from authzcore.stores.redis_store import connect


class TestInMemoryStores:
    def test_public_bindings_filtered_by_namespace(self) -> None:
        store = InMemoryRoleBindingStore()
        store.add("*", "a", "read-only")
        store.add("*", "b", "read-only")
        store.add("u", "a", "viewer")

        assert {b.namespace for b in store.list_public_project_rb()} == {"a", "b"}
        assert [b.namespace for b in store.list_public_project_rb("b")] == ["b"]
        assert all(b.is_public for b in store.list_public_project_rb())

    def test_role_get_missing(self) -> None:
        assert InMemoryRoleStore().get("demo", "ghost") == (None, False)

    def test_role_copies_are_isolated(self) -> None:
        store = InMemoryRoleStore([Role(namespace="demo", name="r", rules=[PolicyRule(verbs=["a"])])])
        role, found = store.get("demo", "r")
        role.rules[0].verbs.append("b")
        assert store.get("demo", "r")[0].verbs() == ["a"]

    def test_missing_instance_is_empty(self) -> None:
        instance = InMemoryCollaborationInstanceStore().find_instance("u", "p")
        assert instance.workflows == []
        assert instance.products == []


class TestRedisRoleBindingStore:
    def test_reads_bindings(self) -> None:
        client = MagicMock()
        client.get.return_value = json.dumps([{"namespace": "demo", "role_name": "viewer"}])
        store = RedisRoleBindingStore(client, "authz")

        bindings = store.list_user_role_binding("u1")

        client.get.assert_called_once_with("authz:rolebindings:u1")
        assert bindings == [RoleBinding(user_id="u1", namespace="demo", role_name="viewer")]

    def test_missing_key_is_empty(self) -> None:
        client = MagicMock()
        client.get.return_value = None
        assert RedisRoleBindingStore(client).list_user_role_binding("u1") == []

    def test_public_bindings(self) -> None:
        client = MagicMock()
        client.get.return_value = json.dumps(
            [{"namespace": "a", "role_name": "read-only"}, {"namespace": "b", "role_name": "read-only"}]
        )
        store = RedisRoleBindingStore(client, "authz")

        assert [b.namespace for b in store.list_public_project_rb("b")] == ["b"]
        client.get.assert_called_with("authz:rolebindings:*")

    def test_connection_error_is_wrapped(self) -> None:
        client = MagicMock()
        client.get.side_effect = redis.exceptions.ConnectionError("refused")
        with pytest.raises(StoreConnectionError) as exc_info:
            RedisRoleBindingStore(client).list_user_role_binding("u1")
        assert exc_info.value.code == "STORE_CONNECTION_ERROR"
        assert isinstance(exc_info.value, StoreError)

    def test_malformed_document(self) -> None:
        client = MagicMock()
        client.get.return_value = "{not json"
        with pytest.raises(StoreError, match="Malformed"):
            RedisRoleBindingStore(client).list_user_role_binding("u1")

    def test_save_bindings(self) -> None:
        client = MagicMock()
        RedisRoleBindingStore(client, "authz").save_user_role_bindings(
            "u1", [RoleBinding(user_id="u1", namespace="demo", role_name="viewer")]
        )
        key, payload = client.set.call_args.args
        assert key == "authz:rolebindings:u1"
        assert json.loads(payload) == [{"namespace": "demo", "role_name": "viewer"}]


class TestRedisRoleStore:
    def _role(self, name: str, *verbs: str) -> str:
        return Role(namespace="demo", name=name, rules=[PolicyRule(verbs=list(verbs))]).model_dump_json()

    def test_get_found(self) -> None:
        client = MagicMock()
        client.hget.return_value = self._role("viewer", Verbs.GET_WORKFLOW)
        role, found = RedisRoleStore(client, "authz").get("demo", "viewer")

        client.hget.assert_called_once_with("authz:roles:demo", "viewer")
        assert found is True
        assert role.verbs() == [Verbs.GET_WORKFLOW]

    def test_get_missing(self) -> None:
        client = MagicMock()
        client.hget.return_value = None
        assert RedisRoleStore(client).get("demo", "ghost") == (None, False)

    def test_list_role_by_verb(self) -> None:
        client = MagicMock()
        client.hgetall.return_value = {
            "viewer": self._role("viewer", Verbs.GET_WORKFLOW),
            "developer": self._role("developer", Verbs.RUN_WORKFLOW, Verbs.GET_WORKFLOW),
            "builder": self._role("builder", Verbs.GET_BUILD),
        }
        names = {r.name for r in RedisRoleStore(client).list_role_by_verb("demo", Verbs.GET_WORKFLOW)}
        assert names == {"viewer", "developer"}

    def test_redis_error_is_wrapped(self) -> None:
        client = MagicMock()
        client.hget.side_effect = redis.exceptions.ResponseError("WRONGTYPE")
        with pytest.raises(StoreError, match="WRONGTYPE"):
            RedisRoleStore(client).get("demo", "viewer")


class TestRedisCollaborationStores:
    def test_find_instance(self) -> None:
        client = MagicMock()
        client.get.return_value = json.dumps({"workflows": [{"name": "wf1", "verbs": ["view"]}], "products": []})
        instance = RedisCollaborationInstanceStore(client, "authz").find_instance("u", "p")

        client.get.assert_called_once_with("authz:collaboration:p:u")
        assert instance.user_id == "u"
        assert instance.project_key == "p"
        assert instance.workflows == [WorkflowCIItem(name="wf1", verbs=["view"])]

    def test_missing_instance_is_empty(self) -> None:
        client = MagicMock()
        client.get.return_value = None
        instance = RedisCollaborationInstanceStore(client).find_instance("u", "p")
        assert instance == CollaborationInstance(user_id="u", project_key="p")

    def test_list_modes(self) -> None:
        client = MagicMock()
        client.get.return_value = json.dumps([{"project_name": "C"}, {"project_name": "D", "name": "ops"}])
        modes = RedisCollaborationModeStore(client).list_user_collaboration_mode("u")
        assert [m.project_name for m in modes] == ["C", "D"]

    def test_save_modes(self) -> None:
        client = MagicMock()
        RedisCollaborationModeStore(client, "x").save_user_collaboration_modes("u", [CollaborationMode(project_name="C")])
        key, payload = client.set.call_args.args
        assert key == "x:collaboration_modes:u"
        assert json.loads(payload)[0]["project_name"] == "C"


class TestConnect:
    def test_requires_redis_url(self) -> None:
        with pytest.raises(ConfigurationError):
            connect(AuthzConfig())

    def test_from_url(self) -> None:
        with patch("authzcore.stores.redis_store.redis.Redis.from_url") as from_url:
            client = connect(AuthzConfig(redis_url="redis://localhost:6379/0"))
        from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)
        assert client is from_url.return_value

    def test_service_from_config_shares_client(self) -> None:
        with patch("authzcore.stores.redis_store.redis.Redis.from_url") as from_url:
            service = AuthorizationService.from_config(AuthzConfig(redis_url="redis://localhost:6379/0", key_prefix="t"))
        assert from_url.call_count == 1
        assert isinstance(service.role_store, RedisRoleStore)
        assert isinstance(service.collaboration_mode_store, RedisCollaborationModeStore)

    def test_end_to_end_over_redis(self) -> None:
        """Aggregation through Redis stores reading mocked documents."""
        client = MagicMock()
        client.get.side_effect = lambda key: {
            "authz:rolebindings:u1": json.dumps([{"namespace": "demo", "role_name": "viewer"}]),
        }.get(key)
        client.hget.side_effect = lambda key, name: (
            Role(namespace="demo", name="viewer", rules=[PolicyRule(verbs=[Verbs.RUN_TEST])]).model_dump_json()
            if (key, name) == ("authz:roles:demo", "viewer")
            else None
        )
        service = AuthorizationService(
            role_binding_store=RedisRoleBindingStore(client),
            role_store=RedisRoleStore(client),
            collaboration_instance_store=RedisCollaborationInstanceStore(client),
            collaboration_mode_store=RedisCollaborationModeStore(client),
        )

        info = service.get_user_auth_info("u1")
        assert info.project_auth_info["demo"].to_matrix()["test"]["execute"] is True
        assert service.list_authorized_project("u1") == ["demo"]
