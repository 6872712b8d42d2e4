"""Abstract interface for the credential-issuing authority."""

from abc import ABC, abstractmethod

from gateway_s3.domain.models import AccessPolicy, OperationKind, ScopedCredential


class CredentialIssuer(ABC):
    """Abstract base class for authorities that mint scoped credentials."""

    @abstractmethod
    def issue(self, operation: OperationKind, policy: AccessPolicy) -> ScopedCredential:
        """
        Issues a credential restricted to the given policy.

        Implementations must be safe to call from many threads at once.

        Args:
            operation: The operation kind the credential is for.
            policy: The only actions and resource the credential may cover.

        Returns:
            A credential bound to the operation kind.

        Raises:
            CredentialUnavailableError: If the authority cannot issue one.
        """
