"""Capability flags and the verb → flag lookup tables.

Provides:
- ``ProjectAction`` / ``SystemAction``: enumerated capability flags
  (``{group}.{field}`` format, e.g. ``workflow.view``).
- ``PROJECT_VERB_ACTIONS`` / ``SYSTEM_VERB_ACTIONS``: static verb tables.
- ``ProjectActions`` / ``SystemActions``: monotonic flag sets built during
  aggregation.

Merging is a set union: granting the same verbs in any order, any number of
times, yields the same flags. Nothing ever removes a flag.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Iterable

from pydantic import BaseModel, Field, model_serializer, model_validator

from .constants import Verbs


class ProjectAction(str, Enum):
    """Per-project capability flags."""

    WORKFLOW_VIEW = "workflow.view"
    WORKFLOW_CREATE = "workflow.create"
    WORKFLOW_EDIT = "workflow.edit"
    WORKFLOW_DELETE = "workflow.delete"
    WORKFLOW_EXECUTE = "workflow.execute"
    WORKFLOW_DEBUG = "workflow.debug"

    ENV_VIEW = "env.view"
    ENV_CREATE = "env.create"
    ENV_EDIT_CONFIG = "env.edit_config"
    ENV_MANAGE_PODS = "env.manage_pods"
    ENV_DELETE = "env.delete"
    ENV_DEBUG_POD = "env.debug_pod"
    ENV_SSH = "env.ssh"

    PRODUCTION_ENV_VIEW = "production_env.view"
    PRODUCTION_ENV_CREATE = "production_env.create"
    PRODUCTION_ENV_EDIT_CONFIG = "production_env.edit_config"
    PRODUCTION_ENV_MANAGE_PODS = "production_env.manage_pods"
    PRODUCTION_ENV_DELETE = "production_env.delete"
    PRODUCTION_ENV_DEBUG_POD = "production_env.debug_pod"

    SERVICE_VIEW = "service.view"
    SERVICE_CREATE = "service.create"
    SERVICE_EDIT = "service.edit"
    SERVICE_DELETE = "service.delete"

    PRODUCTION_SERVICE_VIEW = "production_service.view"
    PRODUCTION_SERVICE_CREATE = "production_service.create"
    PRODUCTION_SERVICE_EDIT = "production_service.edit"
    PRODUCTION_SERVICE_DELETE = "production_service.delete"

    BUILD_VIEW = "build.view"
    BUILD_CREATE = "build.create"
    BUILD_EDIT = "build.edit"
    BUILD_DELETE = "build.delete"

    TEST_VIEW = "test.view"
    TEST_CREATE = "test.create"
    TEST_EDIT = "test.edit"
    TEST_DELETE = "test.delete"
    TEST_EXECUTE = "test.execute"

    SCANNING_VIEW = "scanning.view"
    SCANNING_CREATE = "scanning.create"
    SCANNING_EDIT = "scanning.edit"
    SCANNING_DELETE = "scanning.delete"
    SCANNING_EXECUTE = "scanning.execute"

    VERSION_VIEW = "version.view"
    VERSION_CREATE = "version.create"
    VERSION_DELETE = "version.delete"


class SystemAction(str, Enum):
    """System-wide capability flags."""

    PROJECT_CREATE = "project.create"
    PROJECT_DELETE = "project.delete"

    TEMPLATE_CREATE = "template.create"
    TEMPLATE_VIEW = "template.view"
    TEMPLATE_EDIT = "template.edit"
    TEMPLATE_DELETE = "template.delete"

    TEST_CENTER_VIEW = "test_center.view"
    RELEASE_CENTER_VIEW = "release_center.view"

    DELIVERY_CENTER_VIEW_ARTIFACT = "delivery_center.view_artifact"
    DELIVERY_CENTER_VIEW_VERSION = "delivery_center.view_version"

    DATA_CENTER_VIEW_OVERVIEW = "data_center.view_overview"
    DATA_CENTER_VIEW_INSIGHT = "data_center.view_insight"
    DATA_CENTER_EDIT_INSIGHT_CONFIG = "data_center.edit_insight_config"


# ── Verb → Flag Tables ──────────────────────────────────
# Verbs absent from a table are ignored by that table.

PROJECT_VERB_ACTIONS: dict[str, ProjectAction] = {
    Verbs.GET_WORKFLOW: ProjectAction.WORKFLOW_VIEW,
    Verbs.CREATE_WORKFLOW: ProjectAction.WORKFLOW_CREATE,
    Verbs.EDIT_WORKFLOW: ProjectAction.WORKFLOW_EDIT,
    Verbs.DELETE_WORKFLOW: ProjectAction.WORKFLOW_DELETE,
    Verbs.RUN_WORKFLOW: ProjectAction.WORKFLOW_EXECUTE,
    Verbs.DEBUG_WORKFLOW: ProjectAction.WORKFLOW_DEBUG,
    Verbs.GET_ENVIRONMENT: ProjectAction.ENV_VIEW,
    Verbs.CREATE_ENVIRONMENT: ProjectAction.ENV_CREATE,
    Verbs.CONFIG_ENVIRONMENT: ProjectAction.ENV_EDIT_CONFIG,
    Verbs.MANAGE_ENVIRONMENT: ProjectAction.ENV_MANAGE_PODS,
    Verbs.DELETE_ENVIRONMENT: ProjectAction.ENV_DELETE,
    Verbs.DEBUG_ENVIRONMENT_POD: ProjectAction.ENV_DEBUG_POD,
    Verbs.ENVIRONMENT_SSH_PM: ProjectAction.ENV_SSH,
    Verbs.GET_PRODUCTION_ENV: ProjectAction.PRODUCTION_ENV_VIEW,
    Verbs.CREATE_PRODUCTION_ENV: ProjectAction.PRODUCTION_ENV_CREATE,
    Verbs.CONFIG_PRODUCTION_ENV: ProjectAction.PRODUCTION_ENV_EDIT_CONFIG,
    Verbs.EDIT_PRODUCTION_ENV: ProjectAction.PRODUCTION_ENV_MANAGE_PODS,
    Verbs.DELETE_PRODUCTION_ENV: ProjectAction.PRODUCTION_ENV_DELETE,
    Verbs.DEBUG_PRODUCTION_ENV_POD: ProjectAction.PRODUCTION_ENV_DEBUG_POD,
    Verbs.GET_SERVICE: ProjectAction.SERVICE_VIEW,
    Verbs.CREATE_SERVICE: ProjectAction.SERVICE_CREATE,
    Verbs.EDIT_SERVICE: ProjectAction.SERVICE_EDIT,
    Verbs.DELETE_SERVICE: ProjectAction.SERVICE_DELETE,
    Verbs.GET_PRODUCTION_SERVICE: ProjectAction.PRODUCTION_SERVICE_VIEW,
    Verbs.CREATE_PRODUCTION_SERVICE: ProjectAction.PRODUCTION_SERVICE_CREATE,
    Verbs.EDIT_PRODUCTION_SERVICE: ProjectAction.PRODUCTION_SERVICE_EDIT,
    Verbs.DELETE_PRODUCTION_SERVICE: ProjectAction.PRODUCTION_SERVICE_DELETE,
    Verbs.GET_BUILD: ProjectAction.BUILD_VIEW,
    Verbs.CREATE_BUILD: ProjectAction.BUILD_CREATE,
    Verbs.EDIT_BUILD: ProjectAction.BUILD_EDIT,
    Verbs.DELETE_BUILD: ProjectAction.BUILD_DELETE,
    Verbs.GET_TEST: ProjectAction.TEST_VIEW,
    Verbs.CREATE_TEST: ProjectAction.TEST_CREATE,
    Verbs.EDIT_TEST: ProjectAction.TEST_EDIT,
    Verbs.DELETE_TEST: ProjectAction.TEST_DELETE,
    Verbs.RUN_TEST: ProjectAction.TEST_EXECUTE,
    Verbs.GET_SCAN: ProjectAction.SCANNING_VIEW,
    Verbs.CREATE_SCAN: ProjectAction.SCANNING_CREATE,
    Verbs.EDIT_SCAN: ProjectAction.SCANNING_EDIT,
    Verbs.DELETE_SCAN: ProjectAction.SCANNING_DELETE,
    Verbs.RUN_SCAN: ProjectAction.SCANNING_EXECUTE,
    Verbs.GET_DELIVERY: ProjectAction.VERSION_VIEW,
    Verbs.CREATE_DELIVERY: ProjectAction.VERSION_CREATE,
    Verbs.DELETE_DELIVERY: ProjectAction.VERSION_DELETE,
}

SYSTEM_VERB_ACTIONS: dict[str, SystemAction] = {
    Verbs.CREATE_PROJECT: SystemAction.PROJECT_CREATE,
    Verbs.DELETE_PROJECT: SystemAction.PROJECT_DELETE,
    Verbs.CREATE_TEMPLATE: SystemAction.TEMPLATE_CREATE,
    Verbs.GET_TEMPLATE: SystemAction.TEMPLATE_VIEW,
    Verbs.EDIT_TEMPLATE: SystemAction.TEMPLATE_EDIT,
    Verbs.DELETE_TEMPLATE: SystemAction.TEMPLATE_DELETE,
    Verbs.VIEW_TEST_CENTER: SystemAction.TEST_CENTER_VIEW,
    Verbs.VIEW_RELEASE_CENTER: SystemAction.RELEASE_CENTER_VIEW,
    Verbs.DELIVERY_CENTER_GET_VERSIONS: SystemAction.DELIVERY_CENTER_VIEW_VERSION,
    Verbs.DELIVERY_CENTER_GET_ARTIFACT: SystemAction.DELIVERY_CENTER_VIEW_ARTIFACT,
    Verbs.GET_DATA_CENTER_OVERVIEW: SystemAction.DATA_CENTER_VIEW_OVERVIEW,
    Verbs.GET_DATA_CENTER_INSIGHT: SystemAction.DATA_CENTER_VIEW_INSIGHT,
    Verbs.EDIT_DATA_CENTER_INSIGHT_CONFIG: SystemAction.DATA_CENTER_EDIT_INSIGHT_CONFIG,
}


def _build_matrix(actions: Iterable[Enum], granted: set) -> dict[str, dict[str, bool]]:
    matrix: dict[str, dict[str, bool]] = {}
    for action in actions:
        group, name = action.value.split(".", 1)
        matrix.setdefault(group, {})[name] = action in granted
    return matrix


def _parse_matrix(actions: Iterable[Enum], data: Any) -> Any:
    """Accept the nested boolean shape produced by serialization."""
    if not isinstance(data, dict) or "granted" in data:
        return data
    granted = set()
    for action in actions:
        group, name = action.value.split(".", 1)
        flags = data.get(group)
        if isinstance(flags, dict) and flags.get(name):
            granted.add(action)
    parsed = {"granted": granted}
    if "is_project_admin" in data:
        parsed["is_project_admin"] = data["is_project_admin"]
    return parsed


class ProjectActions(BaseModel):
    """Capability flags for one project.

    ``is_project_admin`` records a ``project-admin`` binding. It does NOT
    switch on every flag; callers that treat project admins as all-powerful
    must check it explicitly.

    Example::

        actions = ProjectActions()
        actions.grant(Verbs.GET_WORKFLOW, Verbs.RUN_WORKFLOW)
        actions.allows(ProjectAction.WORKFLOW_EXECUTE)  # True
        actions.to_matrix()["workflow"]["edit"]          # False
    """

    verb_table: ClassVar[dict[str, ProjectAction]] = PROJECT_VERB_ACTIONS

    is_project_admin: bool = False
    granted: set[ProjectAction] = Field(default_factory=set)

    @model_validator(mode="before")
    @classmethod
    def _from_matrix(cls, data: Any) -> Any:
        return _parse_matrix(ProjectAction, data)

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        return {"is_project_admin": self.is_project_admin, **self.to_matrix()}

    def grant(self, *verbs: str) -> ProjectActions:
        """OR-merge verbs into the flag set. Unknown verbs are ignored."""
        for verb in verbs:
            action = self.verb_table.get(verb)
            if action is not None:
                self.granted.add(action)
        return self

    def allows(self, action: ProjectAction | str) -> bool:
        return ProjectAction(action) in self.granted

    def to_matrix(self) -> dict[str, dict[str, bool]]:
        """Nested boolean view (``{"workflow": {"view": True, ...}, ...}``)."""
        return _build_matrix(ProjectAction, self.granted)


class SystemActions(BaseModel):
    """System-wide capability flags, granted only by general-namespace roles."""

    verb_table: ClassVar[dict[str, SystemAction]] = SYSTEM_VERB_ACTIONS

    granted: set[SystemAction] = Field(default_factory=set)

    @model_validator(mode="before")
    @classmethod
    def _from_matrix(cls, data: Any) -> Any:
        return _parse_matrix(SystemAction, data)

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        return self.to_matrix()

    def grant(self, *verbs: str) -> SystemActions:
        """OR-merge verbs into the flag set. Unknown verbs are ignored."""
        for verb in verbs:
            action = self.verb_table.get(verb)
            if action is not None:
                self.granted.add(action)
        return self

    def allows(self, action: SystemAction | str) -> bool:
        return SystemAction(action) in self.granted

    def to_matrix(self) -> dict[str, dict[str, bool]]:
        return _build_matrix(SystemAction, self.granted)


__all__ = [
    "PROJECT_VERB_ACTIONS",
    "SYSTEM_VERB_ACTIONS",
    "ProjectAction",
    "ProjectActions",
    "SystemAction",
    "SystemActions",
]
