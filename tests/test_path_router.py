import pytest

from gateway_s3.domain import ObjectKey, OperationKind, PathRouter
from gateway_s3.exceptions import MalformedPathError, UnsupportedMethodError


@pytest.fixture
def router() -> PathRouter:
    return PathRouter()


@pytest.mark.parametrize(
    "method, operation",
    [
        ("PUT", OperationKind.PUT),
        ("GET", OperationKind.GET),
        ("DELETE", OperationKind.DELETE),
        ("get", OperationKind.GET),
    ],
)
def test_route_maps_methods_to_operations(router, method, operation):
    routed = router.route("/files/reports/q1.pdf", method)

    assert routed.operation is operation
    assert routed.key == ObjectKey(folder="reports", file="q1.pdf")


def test_route_decodes_segments_once(router):
    routed = router.route("/files/my%20folder/100%2525.txt", "GET")

    assert routed.key.folder == "my folder"
    assert routed.key.file == "100%25.txt"
    assert routed.key.object_name == "my folder/100%25.txt"


@pytest.mark.parametrize(
    "path",
    [
        "/files/a",
        "/files/a/",
        "/files//b",
        "/files/a/b/c",
        "/files",
        "/",
        "",
        "files/a/b",
        "//files/a/b",
        "/other/a/b",
        "/FILES/a/b",
        "/files/a%2Fb/c",
        "/files/a/b%5Cc",
        "/files/../b",
        "/files/a/..",
        "/files/%2E%2E/b",
        "/files/a/%00",
    ],
)
def test_route_rejects_malformed_paths(router, path):
    with pytest.raises(MalformedPathError):
        router.route(path, "GET")


@pytest.mark.parametrize("method", ["POST", "PATCH", "HEAD", "OPTIONS"])
def test_route_rejects_unsupported_methods(router, method):
    with pytest.raises(UnsupportedMethodError) as excinfo:
        router.route("/files/a/b", method)

    assert excinfo.value.allowed == ("PUT", "GET", "DELETE")


def test_malformed_path_wins_over_unsupported_method(router):
    with pytest.raises(MalformedPathError):
        router.route("/files/a", "POST")


def test_delete_can_be_disabled():
    router = PathRouter(delete_enabled=False)

    with pytest.raises(UnsupportedMethodError) as excinfo:
        router.route("/files/a/b", "DELETE")

    assert excinfo.value.allowed == ("PUT", "GET")


@pytest.mark.parametrize(
    "path",
    ["/files/a/%FF", "/files/a/%FE", "/files/a/%C3%28", "/files/%80/b", "/files/a/x%E2%82"],
)
def test_route_rejects_segments_that_are_not_utf8(router, path):
    with pytest.raises(MalformedPathError):
        router.route(path, "PUT")


def test_route_decodes_utf8_segments(router):
    routed = router.route("/files/caf%C3%A9/%E2%82%AC.txt", "GET")

    assert routed.key == ObjectKey(folder="café", file="€.txt")
