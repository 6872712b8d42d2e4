"""FastAPI dependency injection configuration."""

import urllib3

from gateway_s3.config import AppConfig, load_config
from gateway_s3.domain import CredentialScoper, ObjectProxy, PathRouter
from gateway_s3.handlers import FileGateway
from gateway_s3.infrastructure import (
    InMemoryObjectStore,
    LocalCredentialIssuer,
    MinioObjectStore,
    MinioStsCredentialIssuer,
    StaticCredentialIssuer,
)
from gateway_s3.infrastructure.interfaces import CredentialIssuer, ObjectStore
from gateway_s3.logging import setup_logging

logger = setup_logging()


def build_gateway(config: AppConfig) -> FileGateway:
    """Wires the gateway components for the given configuration."""
    store: ObjectStore
    issuer: CredentialIssuer

    if config.storage_backend == "memory":
        store = InMemoryObjectStore(config.minio.bucket_name)
        issuer = LocalCredentialIssuer()
    else:
        # Shared connection pool only; credentials are bound per call.
        http_client = urllib3.PoolManager(
            timeout=urllib3.Timeout(
                connect=config.gateway.connect_timeout_seconds,
                read=config.gateway.request_timeout_seconds,
            ),
            maxsize=10,
            retries=False,
        )
        store = MinioObjectStore(
            endpoint=config.minio.endpoint,
            bucket_name=config.minio.bucket_name,
            region=config.minio.region,
            secure=config.minio.secure,
            http_client=http_client,
        )
        if config.credential_mode == "sts":
            issuer = MinioStsCredentialIssuer(
                sts_endpoint=config.sts.endpoint,
                user=config.sts.user,
                password=config.sts.password,
                duration_seconds=config.sts.duration_seconds,
                region=config.minio.region,
                http_client=http_client,
            )
        else:
            issuer = StaticCredentialIssuer(config.static_credentials)

    scoper = CredentialScoper(
        issuer,
        resource=config.minio.bucket_resource,
        max_concurrency=config.sts.max_concurrency,
    )

    logger.info(
        "Gateway configured",
        extra={
            "storage_backend": config.storage_backend,
            "credential_mode": config.credential_mode,
            "bucket_name": config.minio.bucket_name,
            "delete_enabled": config.gateway.delete_enabled,
        },
    )

    return FileGateway(
        router=PathRouter(delete_enabled=config.gateway.delete_enabled),
        scoper=scoper,
        proxy=ObjectProxy(store),
        request_timeout_seconds=config.gateway.request_timeout_seconds,
        max_upload_bytes=config.gateway.max_upload_bytes,
    )


_config = load_config()
_gateway = build_gateway(_config)


def get_gateway() -> FileGateway:
    """Returns the configured file gateway."""
    return _gateway
