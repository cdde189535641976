from .config import AuthzConfig, LogLevel, load_config_from_env
from .exceptions import (
    AuthzError,
    ConfigurationError,
    StoreConnectionError,
    StoreError,
    ValidationError,
)
from .logging import (
    AuthzFormatter,
    AuthzLoggerAdapter,
    get_authz_logger,
    safe_preview,
    setup_logging,
)
from .models import (
    AuthorizedResources,
    CollaborationInstance,
    CollaborationMode,
    PolicyRule,
    ProductCIItem,
    ProjectPermission,
    Role,
    RoleBinding,
    UserRules,
    WorkflowCIItem,
)
from .permissions import (
    ADMIN_ROLE,
    GENERAL_NAMESPACE,
    PROJECT_ADMIN_ROLE,
    PUBLIC_VIEW_VERBS,
    PUBLIC_WILDCARD,
    ProjectAction,
    ProjectActions,
    ResourceType,
    SystemAction,
    SystemActions,
    Verbs,
    WorkflowType,
    is_system_admin_role,
)
from .service import AuthorizationService

__all__ = [
    'ADMIN_ROLE',
    'GENERAL_NAMESPACE',
    'PROJECT_ADMIN_ROLE',
    'PUBLIC_VIEW_VERBS',
    'PUBLIC_WILDCARD',
    'AuthorizationService',
    'AuthorizedResources',
    'AuthzConfig',
    'AuthzError',
    'AuthzFormatter',
    'AuthzLoggerAdapter',
    'CollaborationInstance',
    'CollaborationMode',
    'ConfigurationError',
    'LogLevel',
    'PolicyRule',
    'ProductCIItem',
    'ProjectAction',
    'ProjectActions',
    'ProjectPermission',
    'ResourceType',
    'Role',
    'RoleBinding',
    'StoreConnectionError',
    'StoreError',
    'SystemAction',
    'SystemActions',
    'UserRules',
    'ValidationError',
    'Verbs',
    'WorkflowCIItem',
    'WorkflowType',
    'get_authz_logger',
    'is_system_admin_role',
    'load_config_from_env',
    'safe_preview',
    'setup_logging',
]
