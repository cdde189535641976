"""Redis-backed store implementations.

Documents are JSON strings under a shared key prefix (``AuthzConfig.key_prefix``):

    {prefix}:rolebindings:{user_id}                  → list of {namespace, role_name}
    {prefix}:roles:{namespace}                       → hash, role name → role document
    {prefix}:collaboration:{project_key}:{user_id}   → collaboration instance document
    {prefix}:collaboration_modes:{user_id}           → list of collaboration modes

Public project bindings live under the wildcard user (``rolebindings:*``).
Missing keys are empty results. Redis failures are raised as StoreError.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import redis
from pydantic import ValidationError as PydanticValidationError

from ..config import AuthzConfig, load_config_from_env
from ..exceptions import ConfigurationError, StoreConnectionError, StoreError
from ..models import CollaborationInstance, CollaborationMode, Role, RoleBinding
from ..permissions.constants import PUBLIC_WILDCARD
from .interfaces import (
    CollaborationInstanceStore,
    CollaborationModeStore,
    RoleBindingStore,
    RoleStore,
)

logger = logging.getLogger(__name__)


def connect(config: Optional[AuthzConfig] = None) -> redis.Redis:
    """Create a Redis client from config (environment when omitted)."""
    config = config or load_config_from_env()
    if not config.redis_url:
        raise ConfigurationError("REDIS_URL is not set; Redis-backed stores need it")
    return redis.Redis.from_url(config.redis_url, decode_responses=True)


class _RedisDocumentStore:
    def __init__(self, client: redis.Redis, key_prefix: str = "authz") -> None:
        self._client = client
        self._prefix = key_prefix

    def _key(self, *parts: str) -> str:
        return ":".join((self._prefix, *parts))

    def _call(self, op: str, key: str, *args: Any) -> Any:
        try:
            return getattr(self._client, op)(key, *args)
        except redis.exceptions.ConnectionError as e:
            raise StoreConnectionError(f"Redis unreachable during {op} {key}: {e}", key=key) from e
        except redis.exceptions.RedisError as e:
            raise StoreError(f"Redis {op} {key} failed: {e}", key=key) from e

    def _load(self, key: str, raw: Any) -> Any:
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Malformed document at {key}: {e}", key=key) from e

    def _get_json(self, key: str, default: Any) -> Any:
        raw = self._call("get", key)
        if raw is None:
            return default
        return self._load(key, raw)

    def _set_json(self, key: str, value: Any) -> None:
        self._call("set", key, json.dumps(value))


class RedisRoleBindingStore(_RedisDocumentStore, RoleBindingStore):
    def _bindings_for(self, user_id: str) -> list[RoleBinding]:
        key = self._key("rolebindings", user_id)
        docs = self._get_json(key, [])
        try:
            return [RoleBinding(user_id=user_id, **doc) for doc in docs]
        except (TypeError, PydanticValidationError) as e:
            raise StoreError(f"Malformed role binding at {key}: {e}", key=key) from e

    def list_user_role_binding(self, user_id: str) -> list[RoleBinding]:
        return self._bindings_for(user_id)

    def list_public_project_rb(self, namespace: str = "") -> list[RoleBinding]:
        bindings = self._bindings_for(PUBLIC_WILDCARD)
        if namespace:
            bindings = [b for b in bindings if b.namespace == namespace]
        return bindings

    def save_user_role_bindings(self, user_id: str, bindings: list[RoleBinding]) -> None:
        self._set_json(
            self._key("rolebindings", user_id),
            [{"namespace": b.namespace, "role_name": b.role_name} for b in bindings],
        )


class RedisRoleStore(_RedisDocumentStore, RoleStore):
    def _parse(self, key: str, raw: Any) -> Role:
        try:
            return Role.model_validate(self._load(key, raw))
        except PydanticValidationError as e:
            raise StoreError(f"Malformed role at {key}: {e}", key=key) from e

    def get(self, namespace: str, name: str) -> tuple[Optional[Role], bool]:
        key = self._key("roles", namespace)
        raw = self._call("hget", key, name)
        if raw is None:
            return None, False
        return self._parse(key, raw), True

    def list_role_by_verb(self, namespace: str, verb: str) -> list[Role]:
        key = self._key("roles", namespace)
        roles = [self._parse(key, raw) for raw in (self._call("hgetall", key) or {}).values()]
        return [role for role in roles if verb in role.verbs()]

    def save_role(self, role: Role) -> None:
        self._call("hset", self._key("roles", role.namespace), role.name, role.model_dump_json())


class RedisCollaborationInstanceStore(_RedisDocumentStore, CollaborationInstanceStore):
    def find_instance(self, user_id: str, project_key: str) -> CollaborationInstance:
        key = self._key("collaboration", project_key, user_id)
        doc = self._get_json(key, None)
        if doc is None:
            logger.debug("No collaboration instance at %s", key)
            return CollaborationInstance(user_id=user_id, project_key=project_key)
        try:
            return CollaborationInstance.model_validate({**doc, "user_id": user_id, "project_key": project_key})
        except PydanticValidationError as e:
            raise StoreError(f"Malformed collaboration instance at {key}: {e}", key=key) from e

    def save_instance(self, instance: CollaborationInstance) -> None:
        self._call(
            "set",
            self._key("collaboration", instance.project_key, instance.user_id),
            instance.model_dump_json(),
        )


class RedisCollaborationModeStore(_RedisDocumentStore, CollaborationModeStore):
    def list_user_collaboration_mode(self, user_id: str) -> list[CollaborationMode]:
        key = self._key("collaboration_modes", user_id)
        docs = self._get_json(key, [])
        try:
            return [CollaborationMode.model_validate(doc) for doc in docs]
        except PydanticValidationError as e:
            raise StoreError(f"Malformed collaboration mode at {key}: {e}", key=key) from e

    def save_user_collaboration_modes(self, user_id: str, modes: list[CollaborationMode]) -> None:
        self._set_json(self._key("collaboration_modes", user_id), [m.model_dump() for m in modes])


__all__ = [
    "RedisCollaborationInstanceStore",
    "RedisCollaborationModeStore",
    "RedisRoleBindingStore",
    "RedisRoleStore",
    "connect",
]
