"""File endpoints: PUT, GET and DELETE on /files/{folder}/{file}."""

from typing import Annotated
from urllib.parse import quote, quote_from_bytes

from fastapi import APIRouter, Depends, Request, Response

from gateway_s3.dependencies import get_gateway
from gateway_s3.domain import GatewayRequest
from gateway_s3.handlers import FileGateway

router = APIRouter(tags=["files"])

GatewayDep = Annotated[FileGateway, Depends(get_gateway)]

# Every method and path reaches the gateway so that routing failures are
# answered by the gateway's own path grammar.
_ALL_METHODS = ["GET", "PUT", "DELETE", "POST", "PATCH", "HEAD", "OPTIONS"]


_PATH_SAFE = "/%:@!$&'()*+,;="


def _raw_path(request: Request) -> str:
    """
    Returns the request path percent-encoded, without query string.

    Bytes outside ASCII are escaped rather than decoded here, so the router's
    single strict decode decides whether they form valid UTF-8.
    """
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return quote(request.scope["path"], safe=_PATH_SAFE)
    return quote_from_bytes(raw_path.split(b"?", 1)[0], safe=_PATH_SAFE)


@router.api_route("/{request_path:path}", methods=_ALL_METHODS, include_in_schema=False)
async def proxy_file(request: Request, gateway: GatewayDep) -> Response:
    """
    Proxies a file request to object storage.

    Bodies pass through as raw bytes in both directions, with the
    Content-Type relayed unchanged.
    """
    result = await gateway.handle(
        GatewayRequest(
            method=request.method,
            path=_raw_path(request),
            content_type=request.headers.get("content-type"),
        ),
        body_stream=request.stream(),
        is_disconnected=request.is_disconnected,
    )

    headers = dict(result.headers)
    if result.content_type is not None:
        headers["Content-Type"] = result.content_type
    return Response(content=result.body, status_code=result.status_code, headers=headers)
