"""Permission aggregation: role bindings + roles → capability matrix.

``get_user_auth_info()`` merges four sources into one ``AuthorizedResources``:

1. System admin short-circuit (admin role in the general namespace)
2. Project roles, merged per project through the project verb table
3. Public projects, which grant read-only view verbs to everyone
4. General-namespace roles, merged through the system verb table

All maps built here are local to the call.
"""

from __future__ import annotations

import logging

from ..logging import AuthzLoggerAdapter, get_authz_logger
from ..models import AuthorizedResources
from ..permissions.actions import ProjectActions, SystemActions
from ..permissions.constants import (
    GENERAL_NAMESPACE,
    PROJECT_ADMIN_ROLE,
    PUBLIC_VIEW_VERBS,
    is_system_admin_role,
)
from ..stores.interfaces import RoleBindingStore, RoleStore

logger = logging.getLogger(__name__)


def group_roles_by_namespace(role_binding_store: RoleBindingStore, user_id: str) -> dict[str, set[str]]:
    """Map each namespace the user is bound in to the role names bound there."""
    namespaced_roles: dict[str, set[str]] = {}
    for binding in role_binding_store.list_user_role_binding(user_id):
        namespaced_roles.setdefault(binding.namespace, set()).add(binding.role_name)
    return namespaced_roles


def list_public_projects(role_binding_store: RoleBindingStore, namespace: str = "") -> set[str]:
    """Namespaces of public project bindings; a failed lookup yields no projects."""
    try:
        bindings = role_binding_store.list_public_project_rb(namespace)
    except Exception as e:
        logger.debug("No public project found, err: %s", e)
        return set()
    return {binding.namespace for binding in bindings}


def _role_verbs(role_store: RoleStore, namespace: str, role_name: str, log: AuthzLoggerAdapter) -> list[str]:
    role, found = role_store.get(namespace, role_name)
    if not found or role is None:
        log.warning("Role %s not found, skipping", role_name, project_key=namespace)
        return []
    return role.verbs()


def get_user_auth_info(
    user_id: str,
    *,
    role_binding_store: RoleBindingStore,
    role_store: RoleStore,
) -> AuthorizedResources:
    """Compute the capability matrix for a user.

    An empty ``user_id`` denotes an internal system caller and is answered
    with the system admin result without touching any store. Never pass an
    empty id on behalf of an end user.

    Args:
        user_id: User identifier.
        role_binding_store: Source of the user's and public bindings.
        role_store: Source of role definitions.

    Returns:
        ``AuthorizedResources``. For system admins only ``is_system_admin`` is
        set; otherwise ``system_actions`` and ``project_auth_info`` are filled.

    Raises:
        StoreError: A binding or role read failed. Public project listing
            failures are tolerated.

    Example::

        info = get_user_auth_info("u-1", role_binding_store=rbs, role_store=rs)
        info.project_auth_info["demo"].allows(ProjectAction.WORKFLOW_VIEW)
    """
    if not user_id:
        return AuthorizedResources.system_admin()

    log = get_authz_logger(__name__, user_id=user_id)
    namespaced_roles = group_roles_by_namespace(role_binding_store, user_id)
    general_roles = namespaced_roles.get(GENERAL_NAMESPACE, set())

    if any(is_system_admin_role(role, GENERAL_NAMESPACE) for role in general_roles):
        log.debug("User is a system admin")
        return AuthorizedResources.system_admin()

    system_actions = SystemActions()
    project_actions: dict[str, ProjectActions] = {}

    for project, roles in namespaced_roles.items():
        if project == GENERAL_NAMESPACE:
            continue
        actions = project_actions.setdefault(project, ProjectActions())
        for role in sorted(roles):
            actions.grant(*_role_verbs(role_store, project, role, log))
            # A role called project-admin is trusted by name.
            if role == PROJECT_ADMIN_ROLE:
                actions.is_project_admin = True

    for project in list_public_projects(role_binding_store) - {GENERAL_NAMESPACE}:
        project_actions.setdefault(project, ProjectActions()).grant(*PUBLIC_VIEW_VERBS)

    for role in sorted(general_roles):
        system_actions.grant(*_role_verbs(role_store, GENERAL_NAMESPACE, role, log))

    return AuthorizedResources(
        is_system_admin=False,
        system_actions=system_actions,
        project_auth_info=project_actions,
    )


__all__ = [
    "get_user_auth_info",
    "group_roles_by_namespace",
    "list_public_projects",
]
