"""Executes a single object operation against the storage backend."""

import io

from gateway_s3.domain.models import (
    ObjectKey,
    OperationKind,
    ProxyResponse,
    ScopedCredential,
)
from gateway_s3.exceptions import InvalidPayloadError
from gateway_s3.infrastructure.interfaces import ObjectStore


class ObjectProxy:
    """
    Relays one operation to the object store and shapes its result.

    Payloads are treated as opaque bytes in both directions. Exactly one
    backend call is made per execution; there is no caching and no retry.
    """

    def __init__(self, store: ObjectStore):
        self._store = store

    def execute(
        self,
        operation: OperationKind,
        key: ObjectKey,
        credential: ScopedCredential,
        content_type: str | None,
        body: bytes | None = None,
    ) -> ProxyResponse:
        """
        Executes an operation on the object at `key`.

        Args:
            operation: The operation kind.
            key: The object key.
            credential: Credential scoped to `operation`.
            content_type: Content-Type of the request; required for PUT.
            body: The payload for PUT; must be absent otherwise.

        Returns:
            The status, Content-Type and body to relay to the caller.

        Raises:
            InvalidPayloadError: If the body or Content-Type does not fit the
                operation.
            ProxyError: Any backend failure, as raised by the object store.
        """
        object_name = key.object_name

        if operation is OperationKind.PUT:
            if body is None:
                raise InvalidPayloadError(object_name, "PUT requires a body")
            if not content_type:
                raise InvalidPayloadError(object_name, "PUT requires a Content-Type")
            self._store.put(key, content_type, io.BytesIO(body), len(body), credential)
            return ProxyResponse(content_type=content_type)

        if body is not None:
            raise InvalidPayloadError(object_name, f"{operation.value} does not take a body")

        if operation is OperationKind.GET:
            stored = self._store.get(key, credential)
            return ProxyResponse(content_type=stored.content_type, body=stored.data)

        self._store.delete(key, credential)
        return ProxyResponse()
