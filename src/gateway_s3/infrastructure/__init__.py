"""Concrete implementations of infrastructure interfaces."""

from .credential_issuers import (
    LocalCredentialIssuer,
    MinioStsCredentialIssuer,
    StaticCredentialIssuer,
)
from .memory_storage import InMemoryObjectStore
from .minio_storage import MinioObjectStore

__all__ = [
    "MinioObjectStore",
    "InMemoryObjectStore",
    "MinioStsCredentialIssuer",
    "StaticCredentialIssuer",
    "LocalCredentialIssuer",
]
