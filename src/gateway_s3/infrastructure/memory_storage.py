"""In-process implementation of the ObjectStore interface."""

import threading
from typing import BinaryIO

from gateway_s3.domain.models import ObjectKey, ScopedCredential, StoredObject
from gateway_s3.exceptions import AccessDeniedError, ObjectNotFoundError
from gateway_s3.infrastructure.interfaces import ObjectStore
from gateway_s3.logging import setup_logging

logger = setup_logging()

PUT_ACTION = "s3:PutObject"
GET_ACTION = "s3:GetObject"
DELETE_ACTION = "s3:DeleteObject"


class InMemoryObjectStore(ObjectStore):
    """
    Keeps objects in a dictionary guarded by a lock.

    Authorization is checked on every call the way a real backend checks a
    signed request: the credential must cover this store's resource and list
    the action the call needs. Unlike S3, deleting an absent object is
    reported as not found.
    """

    def __init__(self, bucket_name: str):
        self._bucket_name = bucket_name
        self._resource = f"arn:aws:s3:::{bucket_name}/*"
        self._objects: dict[str, StoredObject] = {}
        self._lock = threading.Lock()

    def _authorize(self, object_name: str, credential: ScopedCredential, action: str) -> None:
        if credential.resource != self._resource or action not in credential.actions:
            logger.warning(
                "Request denied by in-memory store",
                extra={
                    "bucket_name": self._bucket_name,
                    "object_name": object_name,
                    "action": action,
                },
            )
            raise AccessDeniedError(object_name)

    def put(
        self,
        key: ObjectKey,
        content_type: str,
        data: BinaryIO,
        size: int,
        credential: ScopedCredential,
    ) -> None:
        object_name = key.object_name
        self._authorize(object_name, credential, PUT_ACTION)
        payload = data.read(size)
        with self._lock:
            self._objects[object_name] = StoredObject(content_type=content_type, data=payload)
        logger.info(
            "Object written to memory",
            extra={"object_name": object_name, "size": len(payload)},
        )

    def get(self, key: ObjectKey, credential: ScopedCredential) -> StoredObject:
        object_name = key.object_name
        self._authorize(object_name, credential, GET_ACTION)
        with self._lock:
            stored = self._objects.get(object_name)
        if stored is None:
            raise ObjectNotFoundError(object_name)
        return stored

    def delete(self, key: ObjectKey, credential: ScopedCredential) -> None:
        object_name = key.object_name
        self._authorize(object_name, credential, DELETE_ACTION)
        with self._lock:
            removed = self._objects.pop(object_name, None)
        if removed is None:
            raise ObjectNotFoundError(object_name)
        logger.info("Object removed from memory", extra={"object_name": object_name})
