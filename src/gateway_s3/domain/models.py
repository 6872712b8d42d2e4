"""Domain models for the file gateway."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

_FORBIDDEN_SEGMENTS = {".", ".."}
_FORBIDDEN_CHARACTERS = ("/", "\\", "\x00")


class OperationKind(str, Enum):
    """The object operations the gateway exposes, one per HTTP verb."""

    PUT = "PUT"
    GET = "GET"
    DELETE = "DELETE"


class ObjectKey(BaseModel, frozen=True):
    """Identifies a stored object by its folder and file segments."""

    folder: str
    file: str

    @field_validator("folder", "file")
    @classmethod
    def _single_segment(cls, value: str) -> str:
        if not value:
            raise ValueError("segment must not be empty")
        if value in _FORBIDDEN_SEGMENTS:
            raise ValueError(f"segment '{value}' is not allowed")
        if any(char in value for char in _FORBIDDEN_CHARACTERS):
            raise ValueError("segment must not contain separators")
        return value

    @property
    def object_name(self) -> str:
        """Returns the backend object name for this key."""
        return f"{self.folder}/{self.file}"


class RoutedRequest(BaseModel, frozen=True):
    """Result of routing a request: which operation on which object."""

    operation: OperationKind
    key: ObjectKey


class AccessPolicy(BaseModel, frozen=True):
    """An allow-only policy over one storage resource."""

    resource: str
    actions: tuple[str, ...]

    def to_document(self) -> dict:
        """Renders the policy as an IAM policy document."""
        return {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Action": list(self.actions),
                    "Resource": [self.resource],
                }
            ],
        }


class ScopedCredential(BaseModel, frozen=True):
    """A credential bound to exactly one operation kind and one resource."""

    operation: OperationKind
    resource: str
    actions: tuple[str, ...]
    access_key: str
    secret_key: str = Field(repr=False)
    session_token: str | None = Field(default=None, repr=False)
    expires_at: datetime | None = None


class StoredObject(BaseModel, frozen=True):
    """Bytes and Content-Type of an object read from the backend."""

    content_type: str
    data: bytes


class ProxyResponse(BaseModel, frozen=True):
    """What the object proxy relays back for a completed operation."""

    status_code: int = 200
    content_type: str | None = None
    body: bytes = b""


class GatewayRequest(BaseModel, frozen=True):
    """Transport-independent view of an inbound HTTP request."""

    method: str
    path: str
    content_type: str | None = None
    body: bytes | None = None


class GatewayResponse(BaseModel, frozen=True):
    """Transport-independent HTTP response produced by the gateway."""

    status_code: int
    content_type: str | None = None
    body: bytes = b""
    headers: dict[str, str] = {}
