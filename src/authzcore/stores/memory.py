"""In-process store implementations.

Useful for tests, local tooling, and deployments that load role data from a
static file at startup. Each store copies records on read so callers cannot
mutate the stored state.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..models import CollaborationInstance, CollaborationMode, Role, RoleBinding
from ..permissions.constants import PUBLIC_WILDCARD
from .interfaces import (
    CollaborationInstanceStore,
    CollaborationModeStore,
    RoleBindingStore,
    RoleStore,
)


class InMemoryRoleBindingStore(RoleBindingStore):
    def __init__(self, bindings: Iterable[RoleBinding] = ()) -> None:
        self._bindings: list[RoleBinding] = list(bindings)

    def add(self, user_id: str, namespace: str, role_name: str) -> RoleBinding:
        binding = RoleBinding(user_id=user_id, namespace=namespace, role_name=role_name)
        self._bindings.append(binding)
        return binding

    def list_user_role_binding(self, user_id: str) -> list[RoleBinding]:
        return [b.model_copy() for b in self._bindings if b.user_id == user_id]

    def list_public_project_rb(self, namespace: str = "") -> list[RoleBinding]:
        return [
            b.model_copy()
            for b in self._bindings
            if b.user_id == PUBLIC_WILDCARD and (not namespace or b.namespace == namespace)
        ]


class InMemoryRoleStore(RoleStore):
    def __init__(self, roles: Iterable[Role] = ()) -> None:
        self._roles: dict[tuple[str, str], Role] = {}
        for role in roles:
            self.put(role)

    def put(self, role: Role) -> None:
        self._roles[(role.namespace, role.name)] = role

    def get(self, namespace: str, name: str) -> tuple[Optional[Role], bool]:
        role = self._roles.get((namespace, name))
        if role is None:
            return None, False
        return role.model_copy(deep=True), True

    def list_role_by_verb(self, namespace: str, verb: str) -> list[Role]:
        return [
            role.model_copy(deep=True)
            for (ns, _), role in self._roles.items()
            if ns == namespace and verb in role.verbs()
        ]


class InMemoryCollaborationInstanceStore(CollaborationInstanceStore):
    def __init__(self, instances: Iterable[CollaborationInstance] = ()) -> None:
        self._instances: dict[tuple[str, str], CollaborationInstance] = {}
        for instance in instances:
            self.put(instance)

    def put(self, instance: CollaborationInstance) -> None:
        self._instances[(instance.user_id, instance.project_key)] = instance

    def find_instance(self, user_id: str, project_key: str) -> CollaborationInstance:
        instance = self._instances.get((user_id, project_key))
        if instance is None:
            return CollaborationInstance(user_id=user_id, project_key=project_key)
        return instance.model_copy(deep=True)


class InMemoryCollaborationModeStore(CollaborationModeStore):
    def __init__(self, memberships: Optional[dict[str, list[CollaborationMode]]] = None) -> None:
        self._memberships: dict[str, list[CollaborationMode]] = dict(memberships or {})

    def add(self, user_id: str, project_name: str, name: str = "") -> CollaborationMode:
        mode = CollaborationMode(project_name=project_name, name=name, members=[user_id])
        self._memberships.setdefault(user_id, []).append(mode)
        return mode

    def list_user_collaboration_mode(self, user_id: str) -> list[CollaborationMode]:
        return [m.model_copy() for m in self._memberships.get(user_id, [])]


__all__ = [
    "InMemoryCollaborationInstanceStore",
    "InMemoryCollaborationModeStore",
    "InMemoryRoleBindingStore",
    "InMemoryRoleStore",
]
