"""Custom exceptions for the file gateway."""


class RouteError(Exception):
    """Raised when a request cannot be routed to an object operation."""


class MalformedPathError(RouteError):
    """Raised when a request path does not match /files/{folder}/{file}."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed path '{path}': {reason}")


class UnsupportedMethodError(RouteError):
    """Raised when the HTTP method has no object operation."""

    def __init__(self, method: str, allowed: tuple[str, ...]):
        self.method = method
        self.allowed = allowed
        super().__init__(f"Method '{method}' is not supported")


class CredentialUnavailableError(Exception):
    """Raised when no correctly scoped credential can be obtained."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"No credential available for '{operation}' operations")


class ProxyError(Exception):
    """Base class for failures of a proxied object operation."""

    def __init__(self, object_name: str, message: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(message)


class ObjectNotFoundError(ProxyError):
    """Raised when the addressed object does not exist in the backend."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        super().__init__(object_name, f"Object '{object_name}' not found", cause)


class AccessDeniedError(ProxyError):
    """Raised when the backend rejects the credential for the attempted call."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        super().__init__(object_name, f"Access denied to '{object_name}'", cause)


class BackendUnavailableError(ProxyError):
    """Raised when the storage backend fails or cannot be reached."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        super().__init__(object_name, f"Storage backend unavailable for '{object_name}'", cause)


class BackendTimeoutError(ProxyError):
    """Raised when the storage backend does not answer within the deadline."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        super().__init__(object_name, f"Storage backend timed out for '{object_name}'", cause)


class InvalidPayloadError(ProxyError):
    """Raised when the request body or its Content-Type does not fit the operation."""

    def __init__(self, object_name: str, reason: str):
        self.reason = reason
        super().__init__(object_name, f"Invalid payload for '{object_name}': {reason}")


class PayloadTooLargeError(ProxyError):
    """Raised when an upload exceeds the configured size ceiling."""

    def __init__(self, object_name: str, limit: int):
        self.limit = limit
        super().__init__(object_name, f"Payload for '{object_name}' exceeds {limit} bytes")
