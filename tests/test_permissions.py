"""Tests for verb constants, verb tables, and capability flag sets."""

from __future__ import annotations

import itertools
import json

from authzcore import (
    AuthorizedResources,
    GENERAL_NAMESPACE,
    PUBLIC_VIEW_VERBS,
    ProjectAction,
    ProjectActions,
    SystemAction,
    SystemActions,
    Verbs,
    is_system_admin_role,
)
from authzcore.permissions import PROJECT_VERB_ACTIONS, SYSTEM_VERB_ACTIONS


def _verb_values() -> list[str]:
    return [getattr(Verbs, attr) for attr in dir(Verbs) if not attr.startswith("_")]


class TestVerbs:
    """Tests for Verbs constants."""

    def test_unique_verbs(self) -> None:
        """All verb values are unique."""
        values = _verb_values()
        assert len(values) == len(set(values)), "Duplicate verb values found"

    def test_every_verb_is_mapped_once(self) -> None:
        """Each verb maps into exactly one of the project or system tables."""
        for verb in _verb_values():
            in_project = verb in PROJECT_VERB_ACTIONS
            in_system = verb in SYSTEM_VERB_ACTIONS
            assert in_project != in_system, f"{verb} mapped {in_project=} {in_system=}"

    def test_tables_cover_every_flag(self) -> None:
        """Every flag is reachable from some verb."""
        assert set(PROJECT_VERB_ACTIONS.values()) == set(ProjectAction)
        assert set(SYSTEM_VERB_ACTIONS.values()) == set(SystemAction)

    def test_public_view_verbs(self) -> None:
        """Public projects grant exactly eight read-only verbs."""
        assert len(PUBLIC_VIEW_VERBS) == 8
        actions = ProjectActions().grant(*PUBLIC_VIEW_VERBS)
        assert all(action.value.endswith(".view") for action in actions.granted)


class TestSystemAdminPredicate:
    def test_admin_in_general_namespace(self) -> None:
        assert is_system_admin_role("admin", GENERAL_NAMESPACE) is True

    def test_admin_in_project_is_not_system_admin(self) -> None:
        assert is_system_admin_role("admin", "demo") is False

    def test_other_role_in_general_namespace(self) -> None:
        assert is_system_admin_role("project-admin", GENERAL_NAMESPACE) is False


class TestProjectActions:
    """Tests for the OR-merge on project flags."""

    def test_default_is_all_false(self) -> None:
        matrix = ProjectActions().to_matrix()
        assert matrix["workflow"] == {
            "view": False,
            "create": False,
            "edit": False,
            "delete": False,
            "execute": False,
            "debug": False,
        }
        assert not any(flag for group in matrix.values() for flag in group.values())

    def test_grant_sets_mapped_flag(self) -> None:
        actions = ProjectActions().grant(Verbs.RUN_WORKFLOW)
        assert actions.allows(ProjectAction.WORKFLOW_EXECUTE)
        assert actions.to_matrix()["workflow"]["execute"] is True
        assert actions.to_matrix()["workflow"]["view"] is False

    def test_allows_accepts_string_value(self) -> None:
        actions = ProjectActions().grant(Verbs.GET_DELIVERY)
        assert actions.allows("version.view")

    def test_unknown_and_system_verbs_ignored(self) -> None:
        actions = ProjectActions().grant("not_a_verb", Verbs.CREATE_PROJECT)
        assert actions.granted == set()

    def test_merge_is_idempotent(self) -> None:
        once = ProjectActions().grant(Verbs.GET_WORKFLOW, Verbs.DELETE_SCAN)
        twice = ProjectActions().grant(Verbs.GET_WORKFLOW, Verbs.DELETE_SCAN).grant(
            Verbs.GET_WORKFLOW, Verbs.DELETE_SCAN
        )
        assert once.to_matrix() == twice.to_matrix()

    def test_merge_is_order_independent(self) -> None:
        verbs = [Verbs.GET_WORKFLOW, Verbs.CONFIG_ENVIRONMENT, Verbs.RUN_TEST]
        results = {
            frozenset(ProjectActions().grant(*perm).granted) for perm in itertools.permutations(verbs)
        }
        assert len(results) == 1

    def test_project_admin_flag_does_not_expand(self) -> None:
        actions = ProjectActions(is_project_admin=True)
        assert actions.granted == set()
        assert not actions.allows(ProjectAction.WORKFLOW_DELETE)


class TestSystemActions:
    def test_default_is_all_false(self) -> None:
        matrix = SystemActions().to_matrix()
        assert set(matrix) == {
            "project",
            "template",
            "test_center",
            "release_center",
            "delivery_center",
            "data_center",
        }
        assert not any(flag for group in matrix.values() for flag in group.values())

    def test_grant_system_verbs(self) -> None:
        actions = SystemActions().grant(Verbs.CREATE_PROJECT, Verbs.DELIVERY_CENTER_GET_ARTIFACT)
        assert actions.allows(SystemAction.PROJECT_CREATE)
        assert actions.to_matrix()["delivery_center"] == {"view_artifact": True, "view_version": False}

    def test_project_verbs_ignored(self) -> None:
        assert SystemActions().grant(Verbs.GET_WORKFLOW).granted == set()


class TestMatrixSerialization:
    """Serialized flag sets use the fixed nested boolean shape."""

    def test_project_actions_dump_full_matrix(self) -> None:
        dumped = ProjectActions(is_project_admin=True).grant(Verbs.GET_WORKFLOW).model_dump()
        assert dumped["is_project_admin"] is True
        assert "granted" not in dumped
        assert dumped["workflow"]["view"] is True
        assert dumped["workflow"]["delete"] is False
        assert dumped["version"] == {"view": False, "create": False, "delete": False}

    def test_authorized_resources_json_shape(self) -> None:
        result = AuthorizedResources(
            system_actions=SystemActions().grant(Verbs.CREATE_PROJECT),
            project_auth_info={"d": ProjectActions().grant(Verbs.GET_WORKFLOW)},
        )
        data = json.loads(result.model_dump_json())
        assert data["project_auth_info"]["d"]["is_project_admin"] is False
        assert data["project_auth_info"]["d"]["workflow"]["view"] is True
        assert data["project_auth_info"]["d"]["env"]["view"] is False
        assert data["system_actions"]["project"]["create"] is True

    def test_matrix_validates_back(self) -> None:
        original = ProjectActions(is_project_admin=True).grant(Verbs.RUN_TEST, Verbs.GET_BUILD)
        restored = ProjectActions.model_validate(original.model_dump())
        assert restored.granted == original.granted
        assert restored.is_project_admin is True

        system = SystemActions().grant(Verbs.CREATE_TEMPLATE)
        assert SystemActions.model_validate_json(system.model_dump_json()).granted == system.granted
