"""Collaboration-mode checks on individual workflows and environments.

A collaboration instance grants verbs on named resources, independently of
roles. Store errors from ``find_instance`` propagate; a user without an
instance simply has nothing granted.
"""

from __future__ import annotations

from typing import Iterable, Union

from ..models import CollaborationInstance, ProductCIItem, WorkflowCIItem
from ..permissions.constants import ResourceType, Verbs, WorkflowType
from ..stores.interfaces import CollaborationInstanceStore

_Item = Union[WorkflowCIItem, ProductCIItem]

_ENV_READ_VERBS = frozenset({Verbs.GET_ENVIRONMENT, Verbs.GET_PRODUCTION_ENV})
_ENV_EDIT_VERBS = frozenset({Verbs.CONFIG_ENVIRONMENT, Verbs.CONFIG_PRODUCTION_ENV})


def _items_for(instance: CollaborationInstance, resource: str) -> Iterable[_Item]:
    if resource == ResourceType.WORKFLOW:
        return instance.workflows
    if resource == ResourceType.ENVIRONMENT:
        return instance.products
    return ()


def check_collaboration_mode_permission(
    user_id: str,
    project_key: str,
    resource: str,
    resource_name: str,
    action: str,
    *,
    collaboration_instance_store: CollaborationInstanceStore,
) -> bool:
    """Check one verb on one named resource.

    Returns True iff the instance holds an entry of type ``resource`` named
    ``resource_name`` whose verbs include ``action``. Unknown resource types
    and unknown names yield False.
    """
    instance = collaboration_instance_store.find_instance(user_id, project_key)
    for item in _items_for(instance, resource):
        if item.name == resource_name and action in item.verbs:
            return True
    return False


def check_permission_given_by_collaboration_mode(
    user_id: str,
    project_key: str,
    resource: str,
    action: str,
    *,
    collaboration_instance_store: CollaborationInstanceStore,
) -> bool:
    """Check whether any resource of type ``resource`` grants ``action``."""
    instance = collaboration_instance_store.find_instance(user_id, project_key)
    return any(action in item.verbs for item in _items_for(instance, resource))


def list_authorized_workflows(
    user_id: str,
    project_key: str,
    *,
    collaboration_instance_store: CollaborationInstanceStore,
) -> tuple[list[str], list[str]]:
    """Workflows the user may view through collaboration mode.

    Returns:
        ``(product_workflows, custom_workflows)``. Entries without a custom
        type are product workflows.
    """
    instance = collaboration_instance_store.find_instance(user_id, project_key)

    workflows: list[str] = []
    custom_workflows: list[str] = []
    for workflow in instance.workflows:
        if Verbs.GET_WORKFLOW not in workflow.verbs:
            continue
        if workflow.workflow_type == WorkflowType.CUSTOM:
            custom_workflows.append(workflow.name)
        else:
            workflows.append(workflow.name)
    return workflows, custom_workflows


def list_authorized_envs(
    user_id: str,
    project_key: str,
    *,
    collaboration_instance_store: CollaborationInstanceStore,
) -> tuple[list[str], list[str]]:
    """Environments the user may read and edit through collaboration mode.

    Returns:
        ``(read_envs, edit_envs)``, each sorted and deduplicated.
    """
    instance = collaboration_instance_store.find_instance(user_id, project_key)

    read_envs: set[str] = set()
    edit_envs: set[str] = set()
    for env in instance.products:
        verbs = set(env.verbs)
        if verbs & _ENV_READ_VERBS:
            read_envs.add(env.name)
        if verbs & _ENV_EDIT_VERBS:
            edit_envs.add(env.name)
    return sorted(read_envs), sorted(edit_envs)


__all__ = [
    "check_collaboration_mode_permission",
    "check_permission_given_by_collaboration_mode",
    "list_authorized_envs",
    "list_authorized_workflows",
]
