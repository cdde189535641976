"""Project visibility: which projects a user may see, and with which verbs.

Sources are unioned: projects the user holds roles in, public projects, and
projects the user joined through collaboration mode. The wildcard namespace
is a marker and never appears in a result.
"""

from __future__ import annotations

from ..logging import AuthzLoggerAdapter, get_authz_logger
from ..models import ProjectPermission, UserRules
from ..permissions.constants import (
    GENERAL_NAMESPACE,
    PROJECT_ADMIN_ROLE,
    PUBLIC_VIEW_VERBS,
    PUBLIC_WILDCARD,
    ResourceType,
    Roles,
    Verbs,
    is_system_admin_role,
)
from ..stores.interfaces import (
    CollaborationInstanceStore,
    CollaborationModeStore,
    RoleBindingStore,
    RoleStore,
)
from .aggregator import group_roles_by_namespace, list_public_projects
from .collaboration import check_permission_given_by_collaboration_mode

_NON_PROJECTS = frozenset({PUBLIC_WILDCARD, GENERAL_NAMESPACE})


def list_authorized_project(
    user_id: str,
    *,
    role_binding_store: RoleBindingStore,
    collaboration_mode_store: CollaborationModeStore,
) -> list[str]:
    """List every project the user may see.

    A role binding failure propagates. Public project and collaboration mode
    lookups are best-effort: on failure the projects gathered so far are
    returned.

    Returns:
        Sorted, deduplicated project keys.
    """
    log = get_authz_logger(__name__, user_id=user_id)
    try:
        projects = set(group_roles_by_namespace(role_binding_store, user_id))
    except Exception as e:
        log.error("failed to list user role binding, error: %s", e)
        raise

    projects |= list_public_projects(role_binding_store)

    try:
        modes = collaboration_mode_store.list_user_collaboration_mode(user_id)
    except Exception as e:
        log.warning("failed to find user collaboration mode, error: %s", e)
        return sorted(projects - _NON_PROJECTS)

    projects.update(mode.project_name for mode in modes)
    return sorted(projects - _NON_PROJECTS)


def list_authorized_project_by_verb(
    user_id: str,
    resource: str,
    verb: str,
    *,
    role_binding_store: RoleBindingStore,
    role_store: RoleStore,
) -> list[str]:
    """List projects where the user's roles grant ``verb``.

    A project qualifies when the user is ``project-admin`` there, or holds any
    role that ``role_store.list_role_by_verb`` reports for that project.
    ``resource`` is accepted for callers that also gate by resource type;
    collaboration grants are not consulted here.

    Raises:
        StoreError: Any binding or role read failed.
    """
    namespaced_roles = group_roles_by_namespace(role_binding_store, user_id)

    projects: list[str] = []
    for project, roles in sorted(namespaced_roles.items()):
        if project in _NON_PROJECTS:
            continue
        if PROJECT_ADMIN_ROLE in roles:
            projects.append(project)
            continue
        allowed = {role.name for role in role_store.list_role_by_verb(project, verb)}
        if roles & allowed:
            projects.append(project)

    get_authz_logger(__name__, user_id=user_id).debug("holds %s (%s) in %d projects", verb, resource, len(projects))
    return projects


def get_user_permission_by_project(
    user_id: str,
    project_key: str,
    *,
    role_binding_store: RoleBindingStore,
    role_store: RoleStore,
    collaboration_instance_store: CollaborationInstanceStore,
) -> ProjectPermission:
    """Verb-level permissions of one user in one project.

    Project verbs combine the user's roles in the project, the read-only
    verbs of a public project, and the workflow/environment view verbs given
    through collaboration mode. Per-resource collaboration verbs are returned
    alongside; they stay ``None`` if the instance lookup fails.
    """
    if not user_id:
        return ProjectPermission(is_system_admin=True)

    log = get_authz_logger(__name__, user_id=user_id, project_key=project_key)
    namespaced_roles = group_roles_by_namespace(role_binding_store, user_id)
    is_system_admin = any(
        is_system_admin_role(role, GENERAL_NAMESPACE) for role in namespaced_roles.get(GENERAL_NAMESPACE, ())
    )

    is_project_admin = False
    project_verbs: set[str] = set()
    for role_name in sorted(namespaced_roles.get(project_key, ())):
        if role_name == PROJECT_ADMIN_ROLE:
            is_project_admin = True
            continue
        role, found = role_store.get(project_key, role_name)
        if not found or role is None:
            log.warning("Role %s not found, skipping", role_name)
            continue
        project_verbs.update(role.verbs())

    if list_public_projects(role_binding_store, project_key):
        project_verbs.update(PUBLIC_VIEW_VERBS)

    try:
        instance = collaboration_instance_store.find_instance(user_id, project_key)
    except Exception as e:
        log.debug("no collaboration instance: %s", e)
        return ProjectPermission(
            is_system_admin=is_system_admin,
            is_project_admin=is_project_admin,
            project_verbs=sorted(project_verbs),
        )

    workflow_verbs: dict[str, list[str]] = {}
    for workflow in instance.workflows:
        if Verbs.GET_WORKFLOW in workflow.verbs:
            project_verbs.add(Verbs.GET_WORKFLOW)
        workflow_verbs[workflow.name] = list(workflow.verbs)

    environment_verbs: dict[str, list[str]] = {}
    for env in instance.products:
        project_verbs.update(v for v in env.verbs if v in (Verbs.GET_ENVIRONMENT, Verbs.GET_PRODUCTION_ENV))
        environment_verbs[env.name] = list(env.verbs)

    return ProjectPermission(
        is_system_admin=is_system_admin,
        is_project_admin=is_project_admin,
        project_verbs=sorted(project_verbs),
        workflow_verbs=workflow_verbs,
        environment_verbs=environment_verbs,
    )


def _granted_by_collaboration(
    user_id: str,
    project_key: str,
    resource: str,
    verb: str,
    store: CollaborationInstanceStore,
    log: AuthzLoggerAdapter,
) -> bool:
    try:
        return check_permission_given_by_collaboration_mode(
            user_id, project_key, resource, verb, collaboration_instance_store=store
        )
    except Exception as e:
        # Users without a collaboration mode have no instance to read.
        log.debug("collaboration check for %s failed, treated as not granted: %s", verb, e, project_key=project_key)
        return False


def get_user_rules(
    user_id: str,
    *,
    role_binding_store: RoleBindingStore,
    role_store: RoleStore,
    collaboration_instance_store: CollaborationInstanceStore,
) -> UserRules:
    """Verb-level permissions of one user across every project.

    Reads the user's own bindings plus the public project bindings. Each
    project bound through a role gets its role verbs (``read-project-only``
    contributes none) and the workflow/environment view verbs a collaboration
    mode grants there. ``project-admin`` bindings are listed separately and
    add no verbs; general-namespace roles feed ``system_verbs``.

    Raises:
        StoreError: Reading the user's bindings or a role failed.
    """
    if not user_id:
        return UserRules(is_system_admin=True)

    log = get_authz_logger(__name__, user_id=user_id)
    bindings = list(role_binding_store.list_user_role_binding(user_id))
    try:
        bindings.extend(role_binding_store.list_public_project_rb())
    except Exception as e:
        log.debug("No public project found, err: %s", e)

    is_system_admin = False
    project_admins: set[str] = set()
    project_verbs: dict[str, set[str]] = {}
    system_verbs: set[str] = set()

    for binding in bindings:
        if is_system_admin_role(binding.role_name, binding.namespace):
            is_system_admin = True
            continue
        if binding.role_name == PROJECT_ADMIN_ROLE:
            project_admins.add(binding.namespace)
            continue

        role, found = role_store.get(binding.namespace, binding.role_name)
        if not found or role is None:
            log.warning("Role %s not found, skipping", binding.role_name, project_key=binding.namespace)
            continue

        if binding.namespace == GENERAL_NAMESPACE:
            system_verbs.update(role.verbs())
            continue
        verbs = project_verbs.setdefault(binding.namespace, set())
        if role.name != Roles.READ_PROJECT_ONLY:
            verbs.update(role.verbs())

    for project, verbs in project_verbs.items():
        for resource, verb in ((ResourceType.WORKFLOW, Verbs.GET_WORKFLOW), (ResourceType.ENVIRONMENT, Verbs.GET_ENVIRONMENT)):
            if _granted_by_collaboration(user_id, project, resource, verb, collaboration_instance_store, log):
                verbs.add(verb)

    return UserRules(
        is_system_admin=is_system_admin,
        project_admin_list=sorted(project_admins),
        project_verb_map={project: sorted(verbs) for project, verbs in project_verbs.items()},
        system_verbs=sorted(system_verbs),
    )


__all__ = [
    "get_user_permission_by_project",
    "get_user_rules",
    "list_authorized_project",
    "list_authorized_project_by_verb",
]
