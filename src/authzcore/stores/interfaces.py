from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..models import CollaborationInstance, CollaborationMode, Role, RoleBinding


class RoleBindingStore(ABC):
    """Source of (user, namespace, role) associations."""

    @abstractmethod
    def list_user_role_binding(self, user_id: str) -> List[RoleBinding]:
        raise NotImplementedError

    @abstractmethod
    def list_public_project_rb(self, namespace: str = "") -> List[RoleBinding]:
        """Bindings held by the public wildcard user.

        An empty ``namespace`` lists public bindings of every project.
        """
        raise NotImplementedError


class RoleStore(ABC):
    """Source of role definitions."""

    @abstractmethod
    def get(self, namespace: str, name: str) -> Tuple[Optional[Role], bool]:
        """Return ``(role, found)``; a missing role is ``(None, False)``."""
        raise NotImplementedError

    @abstractmethod
    def list_role_by_verb(self, namespace: str, verb: str) -> List[Role]:
        raise NotImplementedError


class CollaborationInstanceStore(ABC):
    @abstractmethod
    def find_instance(self, user_id: str, project_key: str) -> CollaborationInstance:
        """Return the user's instance for the project, or an empty instance."""
        raise NotImplementedError


class CollaborationModeStore(ABC):
    @abstractmethod
    def list_user_collaboration_mode(self, user_id: str) -> List[CollaborationMode]:
        raise NotImplementedError


__all__ = [
    "CollaborationInstanceStore",
    "CollaborationModeStore",
    "RoleBindingStore",
    "RoleStore",
]
