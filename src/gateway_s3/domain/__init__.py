from .credential_scoper import OPERATION_ACTIONS, CredentialScoper
from .models import (
    AccessPolicy,
    GatewayRequest,
    GatewayResponse,
    ObjectKey,
    OperationKind,
    ProxyResponse,
    RoutedRequest,
    ScopedCredential,
    StoredObject,
)
from .object_proxy import ObjectProxy
from .path_router import PathRouter

__all__ = [
    "AccessPolicy",
    "CredentialScoper",
    "GatewayRequest",
    "GatewayResponse",
    "OPERATION_ACTIONS",
    "ObjectKey",
    "ObjectProxy",
    "OperationKind",
    "PathRouter",
    "ProxyResponse",
    "RoutedRequest",
    "ScopedCredential",
    "StoredObject",
]
