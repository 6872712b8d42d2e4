"""Maps request paths and methods onto object operations."""

from urllib.parse import unquote

from pydantic import ValidationError

from gateway_s3.domain.models import ObjectKey, OperationKind, RoutedRequest
from gateway_s3.exceptions import MalformedPathError, UnsupportedMethodError

FILES_PREFIX = "files"


class PathRouter:
    """
    Parses `/files/{folder}/{file}` paths into object keys.

    Routing is a pure function of (path, method). The path is expected in its
    raw, percent-encoded form; each segment is decoded exactly once.
    """

    def __init__(self, delete_enabled: bool = True):
        operations = [OperationKind.PUT, OperationKind.GET]
        if delete_enabled:
            operations.append(OperationKind.DELETE)
        self._operations = {operation.value: operation for operation in operations}

    @property
    def allowed_methods(self) -> tuple[str, ...]:
        return tuple(self._operations)

    def route(self, path: str, method: str) -> RoutedRequest:
        """
        Routes a request to an operation and object key.

        Args:
            path: The raw request path, without query string.
            method: The HTTP method.

        Returns:
            The routed operation and key.

        Raises:
            MalformedPathError: If the path does not match the grammar.
            UnsupportedMethodError: If the method maps to no operation.
        """
        key = self._parse_key(path)

        operation = self._operations.get(method.upper())
        if operation is None:
            raise UnsupportedMethodError(method, self.allowed_methods)

        return RoutedRequest(operation=operation, key=key)

    def _parse_key(self, path: str) -> ObjectKey:
        if not path.startswith("/") or path.startswith("//"):
            raise MalformedPathError(path, "path must start with a single '/'")
        segments = path[1:].split("/")
        if segments[0] != FILES_PREFIX:
            raise MalformedPathError(path, f"path must start with '/{FILES_PREFIX}/'")
        if len(segments) != 3:
            raise MalformedPathError(path, "expected exactly a folder and a file segment")

        try:
            folder, file = (unquote(segment, errors="strict") for segment in segments[1:])
        except UnicodeDecodeError as e:
            raise MalformedPathError(path, "segments must decode to UTF-8") from e
        try:
            return ObjectKey(folder=folder, file=file)
        except ValidationError as e:
            raise MalformedPathError(path, "invalid folder or file segment") from e
