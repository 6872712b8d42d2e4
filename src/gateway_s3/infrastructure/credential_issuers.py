"""Implementations of the CredentialIssuer interface."""

import json
import secrets
from datetime import datetime, timedelta, timezone

import urllib3
from minio.credentials import AssumeRoleProvider

from gateway_s3.config import OperationKeys, StaticCredentialsConfig
from gateway_s3.domain.models import AccessPolicy, OperationKind, ScopedCredential
from gateway_s3.exceptions import CredentialUnavailableError
from gateway_s3.infrastructure.interfaces import CredentialIssuer
from gateway_s3.logging import setup_logging

logger = setup_logging()


class MinioStsCredentialIssuer(CredentialIssuer):
    """
    Issues temporary credentials through MinIO's STS AssumeRole API.

    The policy is attached as an inline session policy, so the temporary
    credential can never do more than the policy allows even though the
    issuing identity itself is broader. A new provider is created per call;
    nothing is cached between requests.
    """

    def __init__(
        self,
        sts_endpoint: str,
        user: str,
        password: str,
        duration_seconds: int,
        region: str,
        http_client: urllib3.PoolManager,
    ):
        self._sts_endpoint = sts_endpoint
        self._user = user
        self._password = password
        self._duration_seconds = duration_seconds
        self._region = region
        self._http_client = http_client

    def issue(self, operation: OperationKind, policy: AccessPolicy) -> ScopedCredential:
        provider = AssumeRoleProvider(
            self._sts_endpoint,
            self._user,
            self._password,
            duration_seconds=self._duration_seconds,
            policy=json.dumps(policy.to_document()),
            region=self._region,
            role_session_name=f"gateway-s3-{operation.value.lower()}",
            http_client=self._http_client,
        )
        issued_at = datetime.now(timezone.utc)
        try:
            credentials = provider.retrieve()
        except (ValueError, urllib3.exceptions.HTTPError) as e:
            logger.exception(
                "STS AssumeRole failed",
                extra={"operation": operation.value, "sts_endpoint": self._sts_endpoint},
            )
            raise CredentialUnavailableError(operation.value, e) from e

        logger.info(
            "Temporary credential issued",
            extra={"operation": operation.value, "actions": list(policy.actions)},
        )
        return ScopedCredential(
            operation=operation,
            resource=policy.resource,
            actions=policy.actions,
            access_key=credentials.access_key,
            secret_key=credentials.secret_key,
            session_token=credentials.session_token,
            expires_at=issued_at + timedelta(seconds=self._duration_seconds),
        )


class StaticCredentialIssuer(CredentialIssuer):
    """
    Hands out pre-provisioned key pairs, one service account per operation.

    The backend enforces each account's policy; the accounts must have been
    provisioned with exactly the actions the scoper asks for.
    """

    def __init__(self, config: StaticCredentialsConfig):
        self._keys: dict[OperationKind, OperationKeys] = {
            OperationKind.PUT: config.put,
            OperationKind.GET: config.get,
            OperationKind.DELETE: config.delete,
        }

    def issue(self, operation: OperationKind, policy: AccessPolicy) -> ScopedCredential:
        keys = self._keys[operation]
        if not keys.access_key or not keys.secret_key:
            logger.error(
                "No static credential configured",
                extra={"operation": operation.value},
            )
            raise CredentialUnavailableError(operation.value)
        return ScopedCredential(
            operation=operation,
            resource=policy.resource,
            actions=policy.actions,
            access_key=keys.access_key,
            secret_key=keys.secret_key,
        )


class LocalCredentialIssuer(CredentialIssuer):
    """Mints random tokens for the in-memory backend."""

    def issue(self, operation: OperationKind, policy: AccessPolicy) -> ScopedCredential:
        return ScopedCredential(
            operation=operation,
            resource=policy.resource,
            actions=policy.actions,
            access_key=f"local-{operation.value.lower()}-{secrets.token_hex(8)}",
            secret_key=secrets.token_hex(20),
        )
