import os

os.environ.setdefault("DD_TRACE_ENABLED", "false")
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["MINIO_BUCKET"] = "test-bucket"

import pytest
from fastapi.testclient import TestClient

from gateway_s3.dependencies import get_gateway
from gateway_s3.domain import (
    CredentialScoper,
    ObjectProxy,
    OperationKind,
    PathRouter,
)
from gateway_s3.handlers import FileGateway
from gateway_s3.infrastructure import InMemoryObjectStore, LocalCredentialIssuer
from gateway_s3.infrastructure.interfaces import CredentialIssuer, ObjectStore

BUCKET = "test-bucket"
RESOURCE = f"arn:aws:s3:::{BUCKET}/*"
MAX_UPLOAD_BYTES = 1024 * 1024


class CountingIssuer(CredentialIssuer):
    """Local issuer that records every call."""

    def __init__(self):
        self._inner = LocalCredentialIssuer()
        self.calls: list[OperationKind] = []

    def issue(self, operation, policy):
        self.calls.append(operation)
        return self._inner.issue(operation, policy)


class CountingStore(ObjectStore):
    """Wraps a store and records every backend call."""

    def __init__(self, inner: ObjectStore):
        self._inner = inner
        self.calls: list[str] = []

    def put(self, key, content_type, data, size, credential):
        self.calls.append("put")
        return self._inner.put(key, content_type, data, size, credential)

    def get(self, key, credential):
        self.calls.append("get")
        return self._inner.get(key, credential)

    def delete(self, key, credential):
        self.calls.append("delete")
        return self._inner.delete(key, credential)


async def stream_of(*chunks: bytes):
    for chunk in chunks:
        yield chunk


@pytest.fixture
def memory_store() -> InMemoryObjectStore:
    return InMemoryObjectStore(BUCKET)


@pytest.fixture
def store(memory_store) -> CountingStore:
    return CountingStore(memory_store)


@pytest.fixture
def issuer() -> CountingIssuer:
    return CountingIssuer()


@pytest.fixture
def scoper(issuer) -> CredentialScoper:
    return CredentialScoper(issuer, resource=RESOURCE)


@pytest.fixture
def gateway(scoper, store) -> FileGateway:
    return FileGateway(
        router=PathRouter(),
        scoper=scoper,
        proxy=ObjectProxy(store),
        request_timeout_seconds=5.0,
        max_upload_bytes=MAX_UPLOAD_BYTES,
    )


@pytest.fixture
def client(gateway):
    from gateway_s3.main import app

    app.dependency_overrides[get_gateway] = lambda: gateway
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
