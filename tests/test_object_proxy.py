import pytest

from gateway_s3.domain import ObjectKey, ObjectProxy, OperationKind
from gateway_s3.exceptions import (
    AccessDeniedError,
    InvalidPayloadError,
    ObjectNotFoundError,
)

KEY = ObjectKey(folder="photos", file="cat.jpg")


@pytest.fixture
def proxy(store) -> ObjectProxy:
    return ObjectProxy(store)


def _put(proxy, scoper, key, data, content_type):
    return proxy.execute(
        OperationKind.PUT, key, scoper.scope(OperationKind.PUT), content_type, data
    )


def test_put_then_get_returns_bytes_and_content_type(proxy, scoper):
    response = _put(proxy, scoper, KEY, b"\xff\xd8\xff\xe0jpeg", "image/jpeg")

    assert response.status_code == 200
    assert response.content_type == "image/jpeg"
    assert response.body == b""

    fetched = proxy.execute(OperationKind.GET, KEY, scoper.scope(OperationKind.GET), None)

    assert fetched.status_code == 200
    assert fetched.content_type == "image/jpeg"
    assert fetched.body == b"\xff\xd8\xff\xe0jpeg"


def test_unregistered_content_type_is_kept_verbatim(proxy, scoper):
    content_type = "application/x-vnd.acme+cbor; version=3"
    _put(proxy, scoper, KEY, b"\x00\x01", content_type)

    fetched = proxy.execute(OperationKind.GET, KEY, scoper.scope(OperationKind.GET), None)

    assert fetched.content_type == content_type


def test_empty_body_is_a_valid_put(proxy, scoper):
    _put(proxy, scoper, KEY, b"", "text/plain")

    fetched = proxy.execute(OperationKind.GET, KEY, scoper.scope(OperationKind.GET), None)

    assert fetched.body == b""


def test_delete_removes_object(proxy, scoper):
    _put(proxy, scoper, KEY, b"data", "text/plain")

    response = proxy.execute(
        OperationKind.DELETE, KEY, scoper.scope(OperationKind.DELETE), None
    )

    assert response.status_code == 200
    with pytest.raises(ObjectNotFoundError):
        proxy.execute(OperationKind.GET, KEY, scoper.scope(OperationKind.GET), None)


def test_delete_of_absent_object_is_not_found(proxy, scoper):
    with pytest.raises(ObjectNotFoundError):
        proxy.execute(OperationKind.DELETE, KEY, scoper.scope(OperationKind.DELETE), None)


def test_get_of_absent_object_is_not_found(proxy, scoper):
    with pytest.raises(ObjectNotFoundError):
        proxy.execute(OperationKind.GET, KEY, scoper.scope(OperationKind.GET), None)


@pytest.mark.parametrize(
    "credential_for, attempted",
    [
        (OperationKind.PUT, OperationKind.GET),
        (OperationKind.PUT, OperationKind.DELETE),
        (OperationKind.GET, OperationKind.DELETE),
        (OperationKind.DELETE, OperationKind.GET),
    ],
)
def test_credential_only_works_for_its_operation(proxy, scoper, credential_for, attempted):
    _put(proxy, scoper, KEY, b"secret", "text/plain")

    with pytest.raises(AccessDeniedError):
        proxy.execute(attempted, KEY, scoper.scope(credential_for), None)


@pytest.mark.parametrize("credential_for", [OperationKind.GET, OperationKind.DELETE])
def test_put_needs_a_put_credential(proxy, scoper, store, credential_for):
    with pytest.raises(AccessDeniedError):
        proxy.execute(OperationKind.PUT, KEY, scoper.scope(credential_for), "text/plain", b"x")


def test_put_requires_body(proxy, scoper, store):
    with pytest.raises(InvalidPayloadError):
        proxy.execute(OperationKind.PUT, KEY, scoper.scope(OperationKind.PUT), "text/plain")

    assert store.calls == []


def test_put_requires_content_type(proxy, scoper, store):
    with pytest.raises(InvalidPayloadError):
        proxy.execute(OperationKind.PUT, KEY, scoper.scope(OperationKind.PUT), None, b"x")

    assert store.calls == []


@pytest.mark.parametrize("operation", [OperationKind.GET, OperationKind.DELETE])
def test_body_is_rejected_for_reads_and_deletes(proxy, scoper, store, operation):
    with pytest.raises(InvalidPayloadError):
        proxy.execute(operation, KEY, scoper.scope(operation), None, b"unexpected")

    assert store.calls == []


def test_each_execution_is_one_backend_call(proxy, scoper, store):
    _put(proxy, scoper, KEY, b"a", "text/plain")
    proxy.execute(OperationKind.GET, KEY, scoper.scope(OperationKind.GET), None)
    proxy.execute(OperationKind.DELETE, KEY, scoper.scope(OperationKind.DELETE), None)

    assert store.calls == ["put", "get", "delete"]


def test_delete_result_carries_no_content_type(proxy, scoper):
    _put(proxy, scoper, KEY, b"data", "text/plain")

    response = proxy.execute(
        OperationKind.DELETE, KEY, scoper.scope(OperationKind.DELETE), "text/plain"
    )

    assert response.content_type is None
    assert response.body == b""
