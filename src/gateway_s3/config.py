"""Application configuration loaded from environment variables."""

import os
from typing import Literal

from pydantic import BaseModel, computed_field, model_validator


class MinioConfig(BaseModel, frozen=True):
    """MinIO / S3-compatible backend configuration."""

    endpoint: str
    secure: bool = False
    region: str = "us-east-1"
    bucket_name: str = "lazy-gateway-s3"

    @computed_field
    @property
    def bucket_resource(self) -> str:
        """Returns the resource ARN covering every object in the bucket."""
        return f"arn:aws:s3:::{self.bucket_name}/*"


class StsConfig(BaseModel, frozen=True):
    """STS AssumeRole configuration for issuing per-operation credentials."""

    endpoint: str
    user: str
    password: str
    duration_seconds: int = 900
    max_concurrency: int = 8


class OperationKeys(BaseModel, frozen=True):
    """A pre-provisioned key pair dedicated to a single operation kind."""

    access_key: str
    secret_key: str


class StaticCredentialsConfig(BaseModel, frozen=True):
    """Pre-provisioned per-operation key pairs, one service account each."""

    put: OperationKeys
    get: OperationKeys
    delete: OperationKeys

    @model_validator(mode="after")
    def _keys_are_distinct(self) -> "StaticCredentialsConfig":
        access_keys = [self.put.access_key, self.get.access_key, self.delete.access_key]
        configured = [key for key in access_keys if key]
        if len(set(configured)) != len(configured):
            raise ValueError("each operation kind needs its own access key")
        return self


class GatewayConfig(BaseModel, frozen=True):
    """Request handling limits."""

    request_timeout_seconds: float = 29.0
    connect_timeout_seconds: float = 5.0
    max_upload_bytes: int = 10 * 1024 * 1024
    delete_enabled: bool = True


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    storage_backend: Literal["minio", "memory"] = "minio"
    credential_mode: Literal["sts", "static"] = "sts"
    minio: MinioConfig
    sts: StsConfig
    static_credentials: StaticCredentialsConfig
    gateway: GatewayConfig


def _default_sts_endpoint(endpoint: str, secure: str) -> str:
    scheme = "https" if secure.lower() in ("1", "true", "yes") else "http"
    return f"{scheme}://{endpoint}"


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    endpoint = os.getenv("MINIO_ENDPOINT", "minio:9000")
    secure = os.getenv("MINIO_SECURE", "false")
    return AppConfig(
        storage_backend=os.getenv("STORAGE_BACKEND", "minio"),
        credential_mode=os.getenv("CREDENTIAL_MODE", "sts"),
        minio=MinioConfig(
            endpoint=endpoint,
            secure=secure,
            region=os.getenv("MINIO_REGION", "us-east-1"),
            bucket_name=os.getenv("MINIO_BUCKET", "lazy-gateway-s3"),
        ),
        sts=StsConfig(
            endpoint=os.getenv("STS_ENDPOINT", _default_sts_endpoint(endpoint, secure)),
            user=os.getenv("STS_USER", ""),
            password=os.getenv("STS_PASSWORD", ""),
            duration_seconds=os.getenv("STS_DURATION_SECONDS", "900"),
            max_concurrency=os.getenv("STS_MAX_CONCURRENCY", "8"),
        ),
        static_credentials=StaticCredentialsConfig(
            put=OperationKeys(
                access_key=os.getenv("PUT_ACCESS_KEY", ""),
                secret_key=os.getenv("PUT_SECRET_KEY", ""),
            ),
            get=OperationKeys(
                access_key=os.getenv("GET_ACCESS_KEY", ""),
                secret_key=os.getenv("GET_SECRET_KEY", ""),
            ),
            delete=OperationKeys(
                access_key=os.getenv("DELETE_ACCESS_KEY", ""),
                secret_key=os.getenv("DELETE_SECRET_KEY", ""),
            ),
        ),
        gateway=GatewayConfig(
            request_timeout_seconds=os.getenv("REQUEST_TIMEOUT_SECONDS", "29"),
            connect_timeout_seconds=os.getenv("CONNECT_TIMEOUT_SECONDS", "5"),
            max_upload_bytes=os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)),
            delete_enabled=os.getenv("DELETE_ENABLED", "true"),
        ),
    )
