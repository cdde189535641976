"""Tests for the exception hierarchy and result model invariants."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from authzcore import (
    AuthorizedResources,
    AuthzError,
    ConfigurationError,
    ProjectActions,
    StoreConnectionError,
    StoreError,
    SystemActions,
    ValidationError,
)
from authzcore.exceptions import error_registry, register_error


class TestExceptionHierarchy:
    def test_default_code_and_message(self) -> None:
        err = StoreError()
        assert err.code == "STORE_ERROR"
        assert err.message == "Store read failed"
        assert str(err) == "Store read failed"

    def test_details_kept(self) -> None:
        err = StoreConnectionError("down", key="authz:roles:demo")
        assert err.details == {"key": "authz:roles:demo"}
        assert isinstance(err, StoreError)
        assert isinstance(err, AuthzError)

    def test_code_override(self) -> None:
        assert ValidationError("user not exist", code="USER_NOT_FOUND").code == "USER_NOT_FOUND"

    def test_registry(self) -> None:
        assert error_registry.get("STORE_ERROR") is StoreError
        assert error_registry.get("CONFIGURATION_ERROR") is ConfigurationError
        assert error_registry.get("NOPE") is None

    def test_register_custom_error(self) -> None:
        @register_error("LDAP_ERROR")
        class LdapError(AuthzError):
            code = "LDAP_ERROR"

        assert error_registry.get("LDAP_ERROR") is LdapError
        assert "LDAP_ERROR" in error_registry.all()


class TestAuthorizedResourcesInvariant:
    def test_admin_result_has_no_matrix(self) -> None:
        result = AuthorizedResources.system_admin()
        assert result.is_system_admin is True
        assert result.system_actions is None
        assert result.project_auth_info is None

    def test_admin_with_system_actions_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            AuthorizedResources(is_system_admin=True, system_actions=SystemActions())

    def test_admin_with_projects_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            AuthorizedResources(is_system_admin=True, project_auth_info={"demo": ProjectActions()})

    def test_serializes(self) -> None:
        result = AuthorizedResources(
            system_actions=SystemActions(),
            project_auth_info={"demo": ProjectActions(is_project_admin=True)},
        )
        dumped = result.model_dump()
        assert dumped["is_system_admin"] is False
        assert dumped["project_auth_info"]["demo"]["is_project_admin"] is True
