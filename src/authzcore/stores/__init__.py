"""Store contracts consumed by the authorization core, plus implementations.

- ``interfaces``: abstract contracts for role, binding, and collaboration stores
- ``memory``: in-process implementations
- ``redis_store``: Redis-backed implementations (JSON documents)
"""

from .interfaces import (
    CollaborationInstanceStore,
    CollaborationModeStore,
    RoleBindingStore,
    RoleStore,
)
from .memory import (
    InMemoryCollaborationInstanceStore,
    InMemoryCollaborationModeStore,
    InMemoryRoleBindingStore,
    InMemoryRoleStore,
)
from .redis_store import (
    RedisCollaborationInstanceStore,
    RedisCollaborationModeStore,
    RedisRoleBindingStore,
    RedisRoleStore,
)

__all__ = [
    "CollaborationInstanceStore",
    "CollaborationModeStore",
    "InMemoryCollaborationInstanceStore",
    "InMemoryCollaborationModeStore",
    "InMemoryRoleBindingStore",
    "InMemoryRoleStore",
    "RedisCollaborationInstanceStore",
    "RedisCollaborationModeStore",
    "RedisRoleBindingStore",
    "RedisRoleStore",
    "RoleBindingStore",
    "RoleStore",
]
