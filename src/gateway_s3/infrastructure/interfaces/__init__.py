"""Abstract interfaces for infrastructure dependencies."""

from .credential_issuer import CredentialIssuer
from .object_store import ObjectStore

__all__ = ["ObjectStore", "CredentialIssuer"]
