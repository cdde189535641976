"""Data models consumed and produced by the authorization core.

These are Pydantic models. Store records (role bindings, roles,
collaboration data) are read-only inputs; ``AuthorizedResources`` and
``ProjectPermission`` are the results handed back to callers.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .permissions.actions import ProjectActions, SystemActions
from .permissions.constants import PUBLIC_WILDCARD, WorkflowType


class RoleBinding(BaseModel):
    """Association of a user to a role within a namespace.

    Public project bindings use the wildcard user ``*``.
    """

    user_id: str
    namespace: str
    role_name: str

    @property
    def is_public(self) -> bool:
        return self.user_id == PUBLIC_WILDCARD


class PolicyRule(BaseModel):
    """One rule of a role: a set of resource-qualified verbs."""

    verbs: list[str] = Field(default_factory=list)


class Role(BaseModel):
    """Role definition scoped to a namespace."""

    namespace: str
    name: str
    rules: list[PolicyRule] = Field(default_factory=list)

    def verbs(self) -> list[str]:
        """All verbs across the rules, in rule order."""
        return [verb for rule in self.rules for verb in rule.verbs]


class WorkflowCIItem(BaseModel):
    """Workflow entry of a collaboration instance."""

    name: str
    workflow_type: str = WorkflowType.PRODUCT
    verbs: list[str] = Field(default_factory=list)


class ProductCIItem(BaseModel):
    """Environment entry of a collaboration instance."""

    name: str
    verbs: list[str] = Field(default_factory=list)


class CollaborationInstance(BaseModel):
    """Per-user, per-project explicit grants on named resources.

    A missing instance is represented by an empty model, never by an error.
    """

    user_id: str = ""
    project_key: str = ""
    workflows: list[WorkflowCIItem] = Field(default_factory=list)
    products: list[ProductCIItem] = Field(default_factory=list)


class CollaborationMode(BaseModel):
    """Collaboration mode membership; only ``project_name`` is used by the core."""

    project_name: str
    name: str = ""
    members: list[str] = Field(default_factory=list)


class AuthorizedResources(BaseModel):
    """Capability matrix for one user.

    System admins carry neither ``system_actions`` nor ``project_auth_info``.
    """

    is_system_admin: bool = False
    system_actions: Optional[SystemActions] = None
    project_auth_info: Optional[dict[str, ProjectActions]] = None

    @model_validator(mode="after")
    def _admin_has_no_matrix(self) -> AuthorizedResources:
        if self.is_system_admin and (self.system_actions is not None or self.project_auth_info is not None):
            raise ValueError("system admin result must not carry system_actions or project_auth_info")
        return self

    @classmethod
    def system_admin(cls) -> AuthorizedResources:
        return cls(is_system_admin=True)


class ProjectPermission(BaseModel):
    """Verb-level permission view of a single project for one user."""

    is_system_admin: bool = False
    is_project_admin: bool = False
    project_verbs: list[str] = Field(default_factory=list)
    workflow_verbs: Optional[dict[str, list[str]]] = None
    environment_verbs: Optional[dict[str, list[str]]] = None


class UserRules(BaseModel):
    """Verb-level permission view of every project for one user."""

    is_system_admin: bool = False
    project_admin_list: list[str] = Field(default_factory=list)
    project_verb_map: dict[str, list[str]] = Field(default_factory=dict)
    system_verbs: list[str] = Field(default_factory=list)


__all__ = [
    "AuthorizedResources",
    "CollaborationInstance",
    "CollaborationMode",
    "PolicyRule",
    "ProductCIItem",
    "ProjectPermission",
    "Role",
    "RoleBinding",
    "UserRules",
    "WorkflowCIItem",
]
