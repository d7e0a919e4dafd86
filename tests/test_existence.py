"""Tests for object and directory existence probes."""

import pytest

from bucket_tools.core.exceptions import ObjectNotFoundError
from bucket_tools.objectstorage.existence import S3ExistenceProber


class TestS3ExistenceProber:
    """Test existence checks against mocked S3."""

    @pytest.mark.asyncio
    async def test_object_exists(self, sample_tree, s3_context):
        prober = S3ExistenceProber(s3_context)

        assert await prober.object_exists("src/a.txt") is True
        assert await prober.object_exists("/src//a.txt") is True
        assert await prober.object_exists("src/missing.txt") is False

    @pytest.mark.asyncio
    async def test_implicit_directory_exists(self, sample_tree, s3_context):
        """Test a prefix with objects but no marker is a directory."""
        prober = S3ExistenceProber(s3_context)

        assert await prober.directory_exists("src") is True
        assert await prober.directory_exists("src/sub/") is True

    @pytest.mark.asyncio
    async def test_missing_directory(self, sample_tree, s3_context):
        """Test a prefix with no objects, prefixes or marker does not exist."""
        prober = S3ExistenceProber(s3_context)

        assert await prober.directory_exists("nothing-here") is False
        assert await prober.directory_exists("src/a") is False

    @pytest.mark.asyncio
    async def test_marker_directory_exists(self, s3_client, s3_context):
        """Test an empty directory is visible through its marker object."""
        s3_client.put_object(Bucket="test-bucket", Key="empty/", Body=b"")

        assert await S3ExistenceProber(s3_context).directory_exists("empty") is True


class TestProbeRequests:
    """Test which store requests the probes issue."""

    @pytest.mark.asyncio
    async def test_marker_short_circuits_listing(self, memory_store, memory_context):
        memory_store.objects = {"dir/": b""}

        assert await S3ExistenceProber(memory_context).directory_exists("dir")
        assert memory_store.operations() == ["head"]

    @pytest.mark.asyncio
    async def test_falls_back_to_listing(self, memory_store, memory_context):
        memory_store.objects = {"dir/nested/file.txt": b""}

        assert await S3ExistenceProber(memory_context).directory_exists("dir")
        assert memory_store.operations() == ["head", "list"]

    @pytest.mark.asyncio
    async def test_root_is_listed_without_head(self, memory_store, memory_context):
        memory_store.objects = {"file.txt": b""}

        assert await S3ExistenceProber(memory_context).directory_exists("/")
        assert memory_store.operations() == ["list"]

    @pytest.mark.asyncio
    async def test_not_found_listing_is_false(self, memory_store, memory_context):
        async def missing(*args, **kwargs):
            raise ObjectNotFoundError("dir/")

        memory_store.list = missing

        assert await S3ExistenceProber(memory_context).directory_exists("dir") is False

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, memory_store, memory_context):
        async def broken(*args, **kwargs):
            raise RuntimeError("access denied")

        memory_store.head = broken

        with pytest.raises(RuntimeError, match="access denied"):
            await S3ExistenceProber(memory_context).object_exists("file.txt")
