"""Per-operation least-privilege credentials."""

import threading

from gateway_s3.domain.models import AccessPolicy, OperationKind, ScopedCredential
from gateway_s3.exceptions import CredentialUnavailableError
from gateway_s3.infrastructure.interfaces import CredentialIssuer
from gateway_s3.logging import setup_logging

logger = setup_logging()

OPERATION_ACTIONS: dict[OperationKind, tuple[str, ...]] = {
    OperationKind.PUT: ("s3:PutObject",),
    OperationKind.GET: ("s3:GetObject",),
    OperationKind.DELETE: ("s3:DeleteObject",),
}


class CredentialScoper:
    """
    Obtains a credential authorized for exactly one operation kind.

    Each operation kind has a fixed policy: the single storage action it
    needs, on the single bucket resource this gateway serves. Every credential
    coming back from the issuer is checked against that policy before it is
    handed out; a credential wider than its policy is never returned.

    Calls into the issuer are bounded by a semaphore, since the issuing
    authority is shared and may be rate limited.
    """

    def __init__(self, issuer: CredentialIssuer, resource: str, max_concurrency: int = 8):
        self._issuer = issuer
        self._resource = resource
        self._slots = threading.BoundedSemaphore(max_concurrency)

    def policy_for(self, operation: OperationKind) -> AccessPolicy:
        """Returns the fixed policy for an operation kind."""
        return AccessPolicy(resource=self._resource, actions=OPERATION_ACTIONS[operation])

    def scope(self, operation: OperationKind) -> ScopedCredential:
        """
        Returns a credential scoped to a single operation kind.

        Args:
            operation: The operation the credential will be used for.

        Returns:
            A credential whose policy covers only that operation's action.

        Raises:
            CredentialUnavailableError: If the issuer fails, or returns a
                credential that does not match the operation's policy.
        """
        policy = self.policy_for(operation)
        with self._slots:
            credential = self._issuer.issue(operation, policy)
        self._check_scope(operation, policy, credential)
        return credential

    def _check_scope(
        self,
        operation: OperationKind,
        policy: AccessPolicy,
        credential: ScopedCredential,
    ) -> None:
        within_policy = (
            credential.operation == operation
            and credential.resource == policy.resource
            and set(credential.actions) <= set(policy.actions)
        )
        if not within_policy:
            logger.critical(
                "Issued credential exceeds its operation policy",
                extra={
                    "operation": operation.value,
                    "credential_operation": credential.operation.value,
                    "credential_actions": list(credential.actions),
                    "credential_resource": credential.resource,
                    "policy_actions": list(policy.actions),
                },
            )
            raise CredentialUnavailableError(operation.value)
