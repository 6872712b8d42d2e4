"""Request orchestration from routing to the proxied backend call."""

from collections.abc import AsyncIterable, Awaitable, Callable
from functools import partial

import anyio
import anyio.to_thread
from starlette.requests import ClientDisconnect

from gateway_s3.domain import (
    CredentialScoper,
    GatewayRequest,
    GatewayResponse,
    ObjectProxy,
    OperationKind,
    PathRouter,
    ProxyResponse,
    RoutedRequest,
    ScopedCredential,
)
from gateway_s3.exceptions import (
    AccessDeniedError,
    BackendTimeoutError,
    BackendUnavailableError,
    CredentialUnavailableError,
    InvalidPayloadError,
    MalformedPathError,
    ObjectNotFoundError,
    PayloadTooLargeError,
    ProxyError,
    RouteError,
    UnsupportedMethodError,
)
from gateway_s3.logging import setup_logging
from gateway_s3.response_models import ErrorResponse

logger = setup_logging()

_STATUS_CODES: list[tuple[type[Exception], int]] = [
    (MalformedPathError, 400),
    (UnsupportedMethodError, 405),
    (InvalidPayloadError, 400),
    (PayloadTooLargeError, 413),
    (ObjectNotFoundError, 404),
    (AccessDeniedError, 403),
    (CredentialUnavailableError, 503),
    (BackendUnavailableError, 502),
    (BackendTimeoutError, 504),
]
_DISCONNECT_POLL_SECONDS = 0.1
CLIENT_CLOSED_REQUEST = 499

DisconnectProbe = Callable[[], Awaitable[bool]]


def status_code_for(error: Exception) -> int:
    """Returns the HTTP status code for a gateway failure."""
    for error_type, status_code in _STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


class FileGateway:
    """
    Handles one file request end to end.

    A request moves Received -> Routed -> Authorized -> Proxied -> Responded
    and stops at the first failure. This is the only place where failures
    become HTTP status codes. No state is kept between requests.
    """

    def __init__(
        self,
        router: PathRouter,
        scoper: CredentialScoper,
        proxy: ObjectProxy,
        request_timeout_seconds: float,
        max_upload_bytes: int,
    ):
        self._router = router
        self._scoper = scoper
        self._proxy = proxy
        self._request_timeout_seconds = request_timeout_seconds
        self._max_upload_bytes = max_upload_bytes

    async def handle(
        self,
        request: GatewayRequest,
        body_stream: AsyncIterable[bytes] | None = None,
        is_disconnected: DisconnectProbe | None = None,
    ) -> GatewayResponse:
        """
        Routes, authorizes and proxies a request.

        Args:
            request: Method, raw path and Content-Type of the request.
            body_stream: The request body; only read for PUT.
            is_disconnected: Probe for the caller having gone away while the
                backend call is in flight.

        Returns:
            The response to relay to the caller.
        """
        try:
            routed = self._router.route(request.path, request.method)
        except RouteError as e:
            logger.info(
                "Request rejected by router",
                extra={"method": request.method, "path": request.path, "reason": str(e)},
            )
            return self._error_response(e)

        context = {
            "operation": routed.operation.value,
            "folder": routed.key.folder,
            "file": routed.key.file,
        }
        logger.info("Request routed", extra=context)

        try:
            body = await self._read_body(routed, request, body_stream)
        except ClientDisconnect:
            logger.warning("Client disconnected during upload", extra=context)
            return GatewayResponse(status_code=CLIENT_CLOSED_REQUEST)
        except ProxyError as e:
            return self._error_response(e, context)

        try:
            credential = await anyio.to_thread.run_sync(self._scoper.scope, routed.operation)
            logger.info("Request authorized", extra=context)
            result = await self._proxy_call(
                routed, credential, request.content_type, body, is_disconnected
            )
        except (CredentialUnavailableError, ProxyError) as e:
            return self._error_response(e, context)

        if result is None:
            logger.warning("Client disconnected, backend call abandoned", extra=context)
            return GatewayResponse(status_code=CLIENT_CLOSED_REQUEST)

        logger.info(
            "Request proxied",
            extra={**context, "status": result.status_code, "size": len(result.body)},
        )
        return GatewayResponse(
            status_code=result.status_code,
            content_type=result.content_type,
            body=result.body,
        )

    async def _read_body(
        self,
        routed: RoutedRequest,
        request: GatewayRequest,
        body_stream: AsyncIterable[bytes] | None,
    ) -> bytes | None:
        if routed.operation is not OperationKind.PUT:
            return None

        object_name = routed.key.object_name
        if not request.content_type:
            raise InvalidPayloadError(object_name, "PUT requires a Content-Type")
        if body_stream is None:
            return None

        chunks: list[bytes] = []
        total = 0
        async for chunk in body_stream:
            total += len(chunk)
            if total > self._max_upload_bytes:
                raise PayloadTooLargeError(object_name, self._max_upload_bytes)
            chunks.append(chunk)
        return b"".join(chunks)

    async def _proxy_call(
        self,
        routed: RoutedRequest,
        credential: ScopedCredential,
        content_type: str | None,
        body: bytes | None,
        is_disconnected: DisconnectProbe | None,
    ) -> ProxyResponse | None:
        """Runs the proxy in a worker thread under the request deadline.

        Returns None if the caller disconnected before the call finished.
        """
        outcome: dict = {}
        execute = partial(
            self._proxy.execute,
            routed.operation,
            routed.key,
            credential,
            content_type,
            body,
        )

        async def run_proxy(cancel_scope: anyio.CancelScope) -> None:
            try:
                with anyio.fail_after(self._request_timeout_seconds):
                    outcome["response"] = await anyio.to_thread.run_sync(
                        execute, abandon_on_cancel=True
                    )
            except TimeoutError as e:
                outcome["error"] = BackendTimeoutError(routed.key.object_name, e)
            except Exception as e:
                outcome["error"] = e
            finally:
                cancel_scope.cancel()

        async def watch_disconnect(cancel_scope: anyio.CancelScope) -> None:
            while not await is_disconnected():
                await anyio.sleep(_DISCONNECT_POLL_SECONDS)
            outcome["disconnected"] = True
            cancel_scope.cancel()

        async with anyio.create_task_group() as task_group:
            task_group.start_soon(run_proxy, task_group.cancel_scope)
            if is_disconnected is not None:
                task_group.start_soon(watch_disconnect, task_group.cancel_scope)

        if "error" in outcome:
            raise outcome["error"]
        return outcome.get("response")

    def _error_response(self, error: Exception, context: dict | None = None) -> GatewayResponse:
        status_code = status_code_for(error)
        extra = {**(context or {}), "status": status_code, "error": type(error).__name__}

        if isinstance(error, AccessDeniedError):
            logger.critical(
                "Backend denied a scoped credential; operation policies have drifted",
                extra=extra,
            )
        elif status_code >= 500:
            logger.error("Request failed", extra=extra)
        elif context is not None:
            logger.info("Request rejected", extra=extra)

        headers = {}
        if isinstance(error, UnsupportedMethodError):
            headers["Allow"] = ", ".join(error.allowed)

        return GatewayResponse(
            status_code=status_code,
            content_type="application/json",
            body=ErrorResponse(detail=str(error)).model_dump_json().encode(),
            headers=headers,
        )
