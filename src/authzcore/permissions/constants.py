"""Verb constants, reserved namespaces, and well-known role names.

Provides:
- ``Verbs``: every verb a role rule may carry (resource-qualified identifiers).
- ``Namespaces``: the reserved general namespace and public wildcard.
- ``Roles``: built-in role names with special semantics.
- ``ResourceType``: resource kinds understood by collaboration checks.
"""

from __future__ import annotations


class Verbs:
    """Canonical verb constants.

    Verbs are already resource-qualified (``get_workflow``, ``run_scan``), so a
    rule never needs an accompanying resource type.

    Project-scoped verbs are merged into a project's action matrix; system
    verbs only take effect when bound in the general namespace.
    """

    # ── Workflow ────────────────────────────────────────
    GET_WORKFLOW = "get_workflow"
    CREATE_WORKFLOW = "create_workflow"
    EDIT_WORKFLOW = "edit_workflow"
    DELETE_WORKFLOW = "delete_workflow"
    RUN_WORKFLOW = "run_workflow"
    DEBUG_WORKFLOW = "debug_workflow"

    # ── Environment ─────────────────────────────────────
    GET_ENVIRONMENT = "get_environment"
    CREATE_ENVIRONMENT = "create_environment"
    CONFIG_ENVIRONMENT = "config_environment"
    MANAGE_ENVIRONMENT = "manage_environment"
    DELETE_ENVIRONMENT = "delete_environment"
    DEBUG_ENVIRONMENT_POD = "debug_pod"
    ENVIRONMENT_SSH_PM = "ssh_pm"

    # ── Production environment ──────────────────────────
    GET_PRODUCTION_ENV = "get_production_environment"
    CREATE_PRODUCTION_ENV = "create_production_environment"
    CONFIG_PRODUCTION_ENV = "config_production_environment"
    EDIT_PRODUCTION_ENV = "edit_production_environment"
    DELETE_PRODUCTION_ENV = "delete_production_environment"
    DEBUG_PRODUCTION_ENV_POD = "production_debug_pod"

    # ── Service ─────────────────────────────────────────
    GET_SERVICE = "get_service"
    CREATE_SERVICE = "create_service"
    EDIT_SERVICE = "edit_service"
    DELETE_SERVICE = "delete_service"

    GET_PRODUCTION_SERVICE = "get_production_service"
    CREATE_PRODUCTION_SERVICE = "create_production_service"
    EDIT_PRODUCTION_SERVICE = "edit_production_service"
    DELETE_PRODUCTION_SERVICE = "delete_production_service"

    # ── Build / Test / Scan ─────────────────────────────
    GET_BUILD = "get_build"
    CREATE_BUILD = "create_build"
    EDIT_BUILD = "edit_build"
    DELETE_BUILD = "delete_build"

    GET_TEST = "get_test"
    CREATE_TEST = "create_test"
    EDIT_TEST = "edit_test"
    DELETE_TEST = "delete_test"
    RUN_TEST = "run_test"

    GET_SCAN = "get_scan"
    CREATE_SCAN = "create_scan"
    EDIT_SCAN = "edit_scan"
    DELETE_SCAN = "delete_scan"
    RUN_SCAN = "run_scan"

    # ── Delivery (versions) ─────────────────────────────
    GET_DELIVERY = "get_delivery"
    CREATE_DELIVERY = "create_delivery"
    DELETE_DELIVERY = "delete_delivery"

    # ── System scope ────────────────────────────────────
    CREATE_PROJECT = "create_project"
    DELETE_PROJECT = "delete_project"
    CREATE_TEMPLATE = "create_template"
    GET_TEMPLATE = "get_template"
    EDIT_TEMPLATE = "edit_template"
    DELETE_TEMPLATE = "delete_template"
    VIEW_TEST_CENTER = "get_test_center"
    VIEW_RELEASE_CENTER = "get_release_center"
    DELIVERY_CENTER_GET_VERSIONS = "get_delivery_center_versions"
    DELIVERY_CENTER_GET_ARTIFACT = "get_delivery_center_artifact"
    GET_DATA_CENTER_OVERVIEW = "get_data_center_overview"
    GET_DATA_CENTER_INSIGHT = "get_data_center_insight"
    EDIT_DATA_CENTER_INSIGHT_CONFIG = "edit_data_center_insight_config"


# Read-only verbs every user receives on a public project.
PUBLIC_VIEW_VERBS: tuple[str, ...] = (
    Verbs.GET_WORKFLOW,
    Verbs.GET_ENVIRONMENT,
    Verbs.GET_PRODUCTION_ENV,
    Verbs.GET_TEST,
    Verbs.GET_SCAN,
    Verbs.GET_SERVICE,
    Verbs.GET_BUILD,
    Verbs.GET_DELIVERY,
)


class Namespaces:
    """Reserved namespace values.

    The general (system) namespace and the public wildcard share the value
    ``*``: system roles are bound under it, and it never names a real project.
    """

    GENERAL = "*"
    WILDCARD = "*"


class Roles:
    """Built-in role names."""

    ADMIN = "admin"
    PROJECT_ADMIN = "project-admin"
    READ_PROJECT_ONLY = "read-project-only"


class ResourceType:
    """Resource kinds a collaboration instance grants verbs on."""

    WORKFLOW = "workflow"
    ENVIRONMENT = "environment"


class WorkflowType:
    """Workflow kinds stored on collaboration workflow entries."""

    PRODUCT = "product"
    CUSTOM = "common_workflow"


GENERAL_NAMESPACE = Namespaces.GENERAL
PUBLIC_WILDCARD = Namespaces.WILDCARD
ADMIN_ROLE = Roles.ADMIN
PROJECT_ADMIN_ROLE = Roles.PROJECT_ADMIN


def is_system_admin_role(role_name: str, namespace: str) -> bool:
    """Return True if ``role_name`` bound in ``namespace`` makes a system admin.

    Only the admin role bound in the general namespace qualifies.
    """
    return namespace == GENERAL_NAMESPACE and role_name == ADMIN_ROLE


__all__ = [
    "ADMIN_ROLE",
    "GENERAL_NAMESPACE",
    "PROJECT_ADMIN_ROLE",
    "PUBLIC_VIEW_VERBS",
    "PUBLIC_WILDCARD",
    "Namespaces",
    "ResourceType",
    "Roles",
    "Verbs",
    "WorkflowType",
    "is_system_admin_role",
]
