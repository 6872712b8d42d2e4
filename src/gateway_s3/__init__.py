from gateway_s3.config import AppConfig, load_config
from gateway_s3.domain import ObjectKey, OperationKind, ScopedCredential
from gateway_s3.logging import setup_logging

__all__ = [
    "setup_logging",
    "AppConfig",
    "load_config",
    "ObjectKey",
    "OperationKind",
    "ScopedCredential",
]
