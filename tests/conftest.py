"""Shared fixtures: in-memory stores seeded with a small role catalogue."""

from __future__ import annotations

import pytest

from authzcore import (
    GENERAL_NAMESPACE,
    PROJECT_ADMIN_ROLE,
    PUBLIC_WILDCARD,
    AuthorizationService,
    PolicyRule,
    Role,
    StoreError,
    Verbs,
)
from authzcore.stores import (
    InMemoryCollaborationInstanceStore,
    InMemoryCollaborationModeStore,
    InMemoryRoleBindingStore,
    InMemoryRoleStore,
)


def make_role(namespace: str, name: str, *rules: list[str]) -> Role:
    return Role(namespace=namespace, name=name, rules=[PolicyRule(verbs=list(r)) for r in rules])


class FailingPublicBindingStore(InMemoryRoleBindingStore):
    """Binding store whose public project listing always fails."""

    def list_public_project_rb(self, namespace: str = ""):
        raise StoreError("public bindings unavailable")


class FailingRoleBindingStore(InMemoryRoleBindingStore):
    def list_user_role_binding(self, user_id: str):
        raise StoreError("bindings unavailable")


class FailingRoleStore(InMemoryRoleStore):
    def get(self, namespace: str, name: str):
        raise StoreError("roles unavailable")

    def list_role_by_verb(self, namespace: str, verb: str):
        raise StoreError("roles unavailable")


class FailingCollaborationModeStore(InMemoryCollaborationModeStore):
    def list_user_collaboration_mode(self, user_id: str):
        raise StoreError("collaboration modes unavailable")


class FailingCollaborationInstanceStore(InMemoryCollaborationInstanceStore):
    def find_instance(self, user_id: str, project_key: str):
        raise StoreError("collaboration instances unavailable")


@pytest.fixture
def role_store() -> InMemoryRoleStore:
    return InMemoryRoleStore(
        [
            make_role("demo", "viewer", [Verbs.GET_WORKFLOW], [Verbs.GET_ENVIRONMENT]),
            make_role("demo", "developer", [Verbs.RUN_WORKFLOW, Verbs.EDIT_WORKFLOW, Verbs.GET_BUILD]),
            make_role("demo", PROJECT_ADMIN_ROLE, [Verbs.GET_WORKFLOW]),
            make_role("ops", "deployer", [Verbs.MANAGE_ENVIRONMENT, Verbs.GET_PRODUCTION_ENV]),
            make_role("ops", PROJECT_ADMIN_ROLE),
            make_role(GENERAL_NAMESPACE, "admin"),
            make_role(GENERAL_NAMESPACE, "template-manager", [Verbs.CREATE_TEMPLATE, Verbs.GET_TEMPLATE]),
            make_role(GENERAL_NAMESPACE, "project-creator", [Verbs.CREATE_PROJECT, Verbs.GET_WORKFLOW]),
        ]
    )


@pytest.fixture
def binding_store() -> InMemoryRoleBindingStore:
    return InMemoryRoleBindingStore()


@pytest.fixture
def instance_store() -> InMemoryCollaborationInstanceStore:
    return InMemoryCollaborationInstanceStore()


@pytest.fixture
def mode_store() -> InMemoryCollaborationModeStore:
    return InMemoryCollaborationModeStore()


@pytest.fixture
def service(binding_store, role_store, instance_store, mode_store) -> AuthorizationService:
    return AuthorizationService(
        role_binding_store=binding_store,
        role_store=role_store,
        collaboration_instance_store=instance_store,
        collaboration_mode_store=mode_store,
    )


@pytest.fixture
def public_project(binding_store):
    """Mark a project public by binding the wildcard user in it."""

    def _mark(project: str) -> None:
        binding_store.add(PUBLIC_WILDCARD, project, "read-only")

    return _mark
