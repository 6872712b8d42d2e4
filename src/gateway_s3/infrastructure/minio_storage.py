"""MinIO implementation of the ObjectStore interface."""

from typing import BinaryIO

import urllib3
from minio import Minio
from minio.error import InvalidResponseError, S3Error, ServerError

from gateway_s3.domain.models import ObjectKey, ScopedCredential, StoredObject
from gateway_s3.exceptions import (
    AccessDeniedError,
    BackendTimeoutError,
    BackendUnavailableError,
    ObjectNotFoundError,
    ProxyError,
)
from gateway_s3.infrastructure.interfaces import ObjectStore
from gateway_s3.logging import setup_logging

logger = setup_logging()

_NOT_FOUND_CODES = {"NoSuchKey"}
_DENIED_CODES = {
    "AccessDenied",
    "InvalidAccessKeyId",
    "SignatureDoesNotMatch",
    "ExpiredToken",
    "InvalidToken",
}
_DEFAULT_CONTENT_TYPE = "application/octet-stream"


def _translate_error(object_name: str, error: Exception) -> ProxyError:
    """Maps SDK and transport errors onto the proxy error taxonomy."""
    if isinstance(error, S3Error):
        if error.code in _NOT_FOUND_CODES:
            return ObjectNotFoundError(object_name, error)
        if error.code in _DENIED_CODES:
            return AccessDeniedError(object_name, error)
        return BackendUnavailableError(object_name, error)
    if isinstance(error, urllib3.exceptions.TimeoutError):
        return BackendTimeoutError(object_name, error)
    if isinstance(error, urllib3.exceptions.MaxRetryError) and isinstance(
        error.reason, urllib3.exceptions.TimeoutError
    ):
        return BackendTimeoutError(object_name, error)
    return BackendUnavailableError(object_name, error)


_BACKEND_ERRORS = (
    S3Error,
    ServerError,
    InvalidResponseError,
    urllib3.exceptions.HTTPError,
)


class MinioObjectStore(ObjectStore):
    """
    Stores objects in a single MinIO / S3-compatible bucket.

    A fresh SDK client is bound to the scoped credential of every call, so no
    credential outlives the request it was issued for. Only the urllib3
    connection pool is shared between calls. The region is always given to
    the client so it never issues a bucket-location lookup, which none of the
    scoped policies allow.
    """

    def __init__(
        self,
        endpoint: str,
        bucket_name: str,
        region: str,
        secure: bool,
        http_client: urllib3.PoolManager,
    ):
        self._endpoint = endpoint
        self._bucket_name = bucket_name
        self._region = region
        self._secure = secure
        self._http_client = http_client

    def _client(self, credential: ScopedCredential) -> Minio:
        return Minio(
            endpoint=self._endpoint,
            access_key=credential.access_key,
            secret_key=credential.secret_key,
            session_token=credential.session_token,
            secure=self._secure,
            region=self._region,
            http_client=self._http_client,
        )

    def put(
        self,
        key: ObjectKey,
        content_type: str,
        data: BinaryIO,
        size: int,
        credential: ScopedCredential,
    ) -> None:
        object_name = key.object_name
        try:
            self._client(credential).put_object(
                bucket_name=self._bucket_name,
                object_name=object_name,
                data=data,
                length=size,
                content_type=content_type,
            )
            logger.info(
                "Object written to MinIO",
                extra={
                    "bucket_name": self._bucket_name,
                    "object_name": object_name,
                    "size": size,
                },
            )
        except _BACKEND_ERRORS as e:
            logger.exception(
                "MinIO put failed",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
            )
            raise _translate_error(object_name, e) from e

    def get(self, key: ObjectKey, credential: ScopedCredential) -> StoredObject:
        object_name = key.object_name
        try:
            response = self._client(credential).get_object(self._bucket_name, object_name)
            try:
                data = response.data
                content_type = response.headers.get("Content-Type", _DEFAULT_CONTENT_TYPE)
            finally:
                response.close()
                response.release_conn()
            logger.info(
                "Object read from MinIO",
                extra={
                    "bucket_name": self._bucket_name,
                    "object_name": object_name,
                    "size": len(data),
                },
            )
            return StoredObject(content_type=content_type, data=data)
        except S3Error as e:
            if e.code in _NOT_FOUND_CODES:
                logger.info(
                    "Object not found in MinIO",
                    extra={"bucket_name": self._bucket_name, "object_name": object_name},
                )
            else:
                logger.exception(
                    "MinIO get failed",
                    extra={"bucket_name": self._bucket_name, "object_name": object_name},
                )
            raise _translate_error(object_name, e) from e
        except _BACKEND_ERRORS as e:
            logger.exception(
                "MinIO get failed",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
            )
            raise _translate_error(object_name, e) from e

    def delete(self, key: ObjectKey, credential: ScopedCredential) -> None:
        object_name = key.object_name
        try:
            self._client(credential).remove_object(self._bucket_name, object_name)
            logger.info(
                "Object removed from MinIO",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
            )
        except _BACKEND_ERRORS as e:
            logger.exception(
                "MinIO delete failed",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
            )
            raise _translate_error(object_name, e) from e
