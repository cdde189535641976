"""Authorization service: one object binding the stores to every query.

Provides:
- ``AuthorizationService``: facade used by request handlers.
- Module-level functions in ``aggregator``, ``collaboration`` and
  ``visibility`` that take their stores explicitly.

The service keeps no state besides its store references: every call builds
its own maps and discards them.
"""

from __future__ import annotations

from typing import Optional

from ..config import AuthzConfig, load_config_from_env
from ..models import AuthorizedResources, ProjectPermission, UserRules
from ..stores.interfaces import (
    CollaborationInstanceStore,
    CollaborationModeStore,
    RoleBindingStore,
    RoleStore,
)
from . import aggregator, collaboration, visibility


class AuthorizationService:
    """Answers permission queries for users against the configured stores.

    Example::

        service = AuthorizationService(
            role_binding_store=InMemoryRoleBindingStore(bindings),
            role_store=InMemoryRoleStore(roles),
            collaboration_instance_store=InMemoryCollaborationInstanceStore(),
            collaboration_mode_store=InMemoryCollaborationModeStore(),
        )
        service.get_user_auth_info("u-1")
        service.list_authorized_project("u-1")
    """

    def __init__(
        self,
        *,
        role_binding_store: RoleBindingStore,
        role_store: RoleStore,
        collaboration_instance_store: CollaborationInstanceStore,
        collaboration_mode_store: CollaborationModeStore,
    ) -> None:
        self.role_binding_store = role_binding_store
        self.role_store = role_store
        self.collaboration_instance_store = collaboration_instance_store
        self.collaboration_mode_store = collaboration_mode_store

    @classmethod
    def from_config(cls, config: Optional[AuthzConfig] = None) -> AuthorizationService:
        """Build a service backed by Redis stores sharing one client."""
        from ..stores.redis_store import (
            RedisCollaborationInstanceStore,
            RedisCollaborationModeStore,
            RedisRoleBindingStore,
            RedisRoleStore,
            connect,
        )

        config = config or load_config_from_env()
        client = connect(config)
        return cls(
            role_binding_store=RedisRoleBindingStore(client, config.key_prefix),
            role_store=RedisRoleStore(client, config.key_prefix),
            collaboration_instance_store=RedisCollaborationInstanceStore(client, config.key_prefix),
            collaboration_mode_store=RedisCollaborationModeStore(client, config.key_prefix),
        )

    # ── Permission aggregation ──────────────────────────

    def get_user_auth_info(self, user_id: str) -> AuthorizedResources:
        return aggregator.get_user_auth_info(
            user_id,
            role_binding_store=self.role_binding_store,
            role_store=self.role_store,
        )

    # ── Collaboration mode ──────────────────────────────

    def check_collaboration_mode_permission(
        self, user_id: str, project_key: str, resource: str, resource_name: str, action: str
    ) -> bool:
        return collaboration.check_collaboration_mode_permission(
            user_id,
            project_key,
            resource,
            resource_name,
            action,
            collaboration_instance_store=self.collaboration_instance_store,
        )

    def check_permission_given_by_collaboration_mode(
        self, user_id: str, project_key: str, resource: str, action: str
    ) -> bool:
        return collaboration.check_permission_given_by_collaboration_mode(
            user_id,
            project_key,
            resource,
            action,
            collaboration_instance_store=self.collaboration_instance_store,
        )

    def list_authorized_workflows(self, user_id: str, project_key: str) -> tuple[list[str], list[str]]:
        return collaboration.list_authorized_workflows(
            user_id, project_key, collaboration_instance_store=self.collaboration_instance_store
        )

    def list_authorized_envs(self, user_id: str, project_key: str) -> tuple[list[str], list[str]]:
        return collaboration.list_authorized_envs(
            user_id, project_key, collaboration_instance_store=self.collaboration_instance_store
        )

    # ── Project visibility ──────────────────────────────

    def list_authorized_project(self, user_id: str) -> list[str]:
        return visibility.list_authorized_project(
            user_id,
            role_binding_store=self.role_binding_store,
            collaboration_mode_store=self.collaboration_mode_store,
        )

    def list_authorized_project_by_verb(self, user_id: str, resource: str, verb: str) -> list[str]:
        return visibility.list_authorized_project_by_verb(
            user_id,
            resource,
            verb,
            role_binding_store=self.role_binding_store,
            role_store=self.role_store,
        )

    def get_user_permission_by_project(self, user_id: str, project_key: str) -> ProjectPermission:
        return visibility.get_user_permission_by_project(
            user_id,
            project_key,
            role_binding_store=self.role_binding_store,
            role_store=self.role_store,
            collaboration_instance_store=self.collaboration_instance_store,
        )

    def get_user_rules(self, user_id: str) -> UserRules:
        return visibility.get_user_rules(
            user_id,
            role_binding_store=self.role_binding_store,
            role_store=self.role_store,
            collaboration_instance_store=self.collaboration_instance_store,
        )


__all__ = ["AuthorizationService"]
