"""Verb registry and capability matrices for authzcore.

Defines:
- Verbs: every verb a role rule may carry
- Namespaces / Roles: reserved namespace values and built-in role names
- PUBLIC_VIEW_VERBS: read-only verbs granted on public projects
- ProjectAction / SystemAction: enumerated capability flags
- PROJECT_VERB_ACTIONS / SYSTEM_VERB_ACTIONS: verb → flag tables
- ProjectActions / SystemActions: monotonic flag sets
"""

from .actions import (
    PROJECT_VERB_ACTIONS,
    SYSTEM_VERB_ACTIONS,
    ProjectAction,
    ProjectActions,
    SystemAction,
    SystemActions,
)
from .constants import (
    ADMIN_ROLE,
    GENERAL_NAMESPACE,
    PROJECT_ADMIN_ROLE,
    PUBLIC_VIEW_VERBS,
    PUBLIC_WILDCARD,
    Namespaces,
    ResourceType,
    Roles,
    Verbs,
    WorkflowType,
    is_system_admin_role,
)

__all__ = [
    "ADMIN_ROLE",
    "GENERAL_NAMESPACE",
    "PROJECT_ADMIN_ROLE",
    "PROJECT_VERB_ACTIONS",
    "PUBLIC_VIEW_VERBS",
    "PUBLIC_WILDCARD",
    "SYSTEM_VERB_ACTIONS",
    "Namespaces",
    "ProjectAction",
    "ProjectActions",
    "ResourceType",
    "Roles",
    "SystemAction",
    "SystemActions",
    "Verbs",
    "WorkflowType",
    "is_system_admin_role",
]
