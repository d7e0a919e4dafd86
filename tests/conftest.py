"""Test configuration and fixtures for bucket-tools."""

import boto3
import pytest
from moto import mock_aws

from bucket_tools.core.exceptions import ObjectNotFoundError
from bucket_tools.objectstorage.context import StorageContext, reset_context
from bucket_tools.schemas import S3StorageConfig

BUCKET = "test-bucket"


class MemoryObjectStore:
    """In-memory ObjectStoreClient that records every call.

    Listings honour prefix, delimiter and paging the way S3 does: objects and
    common prefixes share one key-ordered result set that is cut into pages
    of ``page_size`` entries.
    """

    def __init__(self, objects=None, page_size=1000):
        self.objects = dict(objects or {})
        self.page_size = page_size
        self.calls = []

    def operations(self):
        return [call[0] for call in self.calls]

    async def get(self, key, range=None):
        self.calls.append(("get", key, range))
        if key not in self.objects:
            raise ObjectNotFoundError(key)
        return {"Body": self.objects[key]}

    async def put(self, key, body, **extra):
        self.calls.append(("put", key, extra))
        self.objects[key] = body if isinstance(body, bytes) else str(body).encode()
        return {"ETag": f'"{key}"'}

    async def head(self, key):
        self.calls.append(("head", key))
        if key not in self.objects:
            raise ObjectNotFoundError(key)
        return {"ContentLength": len(self.objects[key])}

    async def delete(self, key):
        self.calls.append(("delete", key))
        self.objects.pop(key, None)
        return {"DeleteMarker": False}

    async def delete_many(self, keys):
        self.calls.append(("delete_many", list(keys)))
        for key in keys:
            self.objects.pop(key, None)
        return {"Deleted": [{"Key": key} for key in keys], "Errors": []}

    async def list(self, prefix, delimiter, continuation_token=None, max_keys=None):
        self.calls.append(("list", prefix, continuation_token))

        entries = []
        seen_prefixes = set()
        for key in sorted(self.objects):
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix):]
            if delimiter and delimiter in rest:
                common = prefix + rest[: rest.index(delimiter) + 1]
                if common not in seen_prefixes:
                    seen_prefixes.add(common)
                    entries.append(("prefix", common))
            else:
                entries.append(("key", key))

        start = int(continuation_token or 0)
        size = max_keys or self.page_size
        page = entries[start : start + size]
        truncated = start + size < len(entries)

        response = {"IsTruncated": truncated, "KeyCount": len(page)}
        contents = [{"Key": value} for kind, value in page if kind == "key"]
        prefixes = [{"Prefix": value} for kind, value in page if kind == "prefix"]
        if contents:
            response["Contents"] = contents
        if prefixes:
            response["CommonPrefixes"] = prefixes
        if truncated:
            response["NextContinuationToken"] = str(start + size)
        return response


@pytest.fixture(autouse=True)
def clean_default_context():
    """Make sure no test leaks a configured default context."""
    reset_context()
    yield
    reset_context()


@pytest.fixture
def storage_config():
    return S3StorageConfig(
        bucket=BUCKET,
        access_key_id="test_key",
        secret_access_key="test_secret",
        region_name="us-east-1",
    )


@pytest.fixture
def s3_client(monkeypatch):
    """A mocked S3 with an empty test bucket."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test_key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test_secret")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")

    with mock_aws():
        client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def s3_context(s3_client, storage_config):
    """A storage context backed by boto3 against the mocked bucket."""
    return StorageContext.from_config(storage_config)


@pytest.fixture
def sample_tree(s3_client):
    """Create a small directory tree in the mocked bucket."""
    s3_client.put_object(Bucket=BUCKET, Key="src/a.txt", Body=b"alpha")
    s3_client.put_object(Bucket=BUCKET, Key="src/sub/b.txt", Body=b"bravo")
    return s3_client


@pytest.fixture
def memory_store():
    return MemoryObjectStore()


@pytest.fixture
def memory_context(memory_store, storage_config):
    return StorageContext(config=storage_config, store=memory_store)


@pytest.fixture
def bucket_keys(s3_client):
    """Return a function listing every key in the mocked bucket."""

    def _keys(prefix=""):
        response = s3_client.list_objects_v2(Bucket=BUCKET, Prefix=prefix)
        return sorted(obj["Key"] for obj in response.get("Contents", []))

    return _keys
