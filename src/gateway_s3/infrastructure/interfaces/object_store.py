"""Abstract interface for object storage operations."""

from abc import ABC, abstractmethod
from typing import BinaryIO

from gateway_s3.domain.models import ObjectKey, ScopedCredential, StoredObject


class ObjectStore(ABC):
    """Abstract base class for object storage backends."""

    @abstractmethod
    def put(
        self,
        key: ObjectKey,
        content_type: str,
        data: BinaryIO,
        size: int,
        credential: ScopedCredential,
    ) -> None:
        """
        Writes an object verbatim.

        Args:
            key: The object key.
            content_type: MIME type stored with the object.
            data: File-like object containing the payload.
            size: Size of the payload in bytes.
            credential: The credential the call is signed with.

        Raises:
            AccessDeniedError: If the credential does not allow writing.
            BackendUnavailableError: If the backend fails.
            BackendTimeoutError: If the backend does not answer in time.
        """

    @abstractmethod
    def get(self, key: ObjectKey, credential: ScopedCredential) -> StoredObject:
        """
        Reads an object with its stored Content-Type.

        Args:
            key: The object key.
            credential: The credential the call is signed with.

        Returns:
            The stored bytes and Content-Type.

        Raises:
            ObjectNotFoundError: If no object exists at the key.
            AccessDeniedError: If the credential does not allow reading.
            BackendUnavailableError: If the backend fails.
            BackendTimeoutError: If the backend does not answer in time.
        """

    @abstractmethod
    def delete(self, key: ObjectKey, credential: ScopedCredential) -> None:
        """
        Removes an object.

        Whether removing an absent object is an error is up to the backend;
        its own not-found signal is surfaced as ObjectNotFoundError.

        Args:
            key: The object key.
            credential: The credential the call is signed with.

        Raises:
            ObjectNotFoundError: If the backend reports the object absent.
            AccessDeniedError: If the credential does not allow deleting.
            BackendUnavailableError: If the backend fails.
            BackendTimeoutError: If the backend does not answer in time.
        """
