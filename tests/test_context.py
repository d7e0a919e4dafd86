"""Tests for the storage context and the module-level operations."""

import pytest

import bucket_tools
from bucket_tools.core.exceptions import NotConfiguredError
from bucket_tools.objectstorage.clients import S3ObjectStore
from bucket_tools.objectstorage.context import (
    StorageContext,
    configure,
    get_context,
)
from bucket_tools.schemas import S3StorageConfig


class TestConfigure:
    """Test explicit configuration of the default context."""

    def test_not_configured(self):
        with pytest.raises(NotConfiguredError, match="configure"):
            get_context()

    @pytest.mark.asyncio
    async def test_module_functions_require_configuration(self):
        with pytest.raises(NotConfiguredError):
            await bucket_tools.directory_exists("anything/")

    def test_configure_with_store(self, storage_config, memory_store):
        context = configure(storage_config, store=memory_store)

        assert get_context() is context
        assert context.store is memory_store
        assert context.bucket == "test-bucket"

    def test_configure_builds_boto3_store(self, storage_config):
        context = configure(storage_config)

        assert isinstance(context.store, S3ObjectStore)
        assert context.store.bucket == "test-bucket"

    def test_configure_from_environment(self, monkeypatch):
        monkeypatch.setenv("SS_AWS_S3_BUCKET", "env-bucket")

        context = configure()

        assert context.config.bucket == "env-bucket"

    def test_last_configuration_wins(self, memory_store):
        configure(S3StorageConfig(bucket="first"), store=memory_store)
        configure(S3StorageConfig(bucket="second"), store=memory_store)

        assert get_context().bucket == "second"

    def test_context_is_immutable(self, memory_context):
        with pytest.raises(AttributeError):
            memory_context.store = None

    def test_put_parameters(self, memory_store):
        plain = StorageContext(S3StorageConfig(bucket="b"), memory_store)
        encrypted = StorageContext(
            S3StorageConfig(bucket="b", kms_key_id="k"), memory_store
        )

        assert plain.put_parameters() == {"ACL": "private"}
        assert encrypted.put_parameters()["SSEKMSKeyId"] == "k"


class TestModuleOperations:
    """Test the module-level coroutines over a configured default context."""

    @pytest.mark.asyncio
    async def test_tree_round_trip(self, s3_context, bucket_keys):
        configure(s3_context.config)

        await bucket_tools.make_directory("projects/alpha")
        await bucket_tools.put_object("projects/alpha/readme.md", b"# alpha")
        await bucket_tools.put_object_json("projects/alpha/meta.json", {"v": 1})

        page = await bucket_tools.list_objects("projects/alpha")
        assert page.object_keys == (
            "projects/alpha/",
            "projects/alpha/meta.json",
            "projects/alpha/readme.md",
        )

        results = await bucket_tools.move_directory("projects/alpha", "archive/alpha")
        assert len(results) == 3
        assert await bucket_tools.directory_exists("projects/alpha") is False
        assert await bucket_tools.object_exists("archive/alpha/readme.md") is True
        assert await bucket_tools.get_object_json("archive/alpha/meta.json") == {"v": 1}

        await bucket_tools.delete_object("archive/")
        assert bucket_keys() == []

    @pytest.mark.asyncio
    async def test_text_and_head(self, memory_store, memory_context):
        configure(memory_context.config, store=memory_store)
        memory_store.objects = {"notes/today.txt": "héllo".encode("utf-8")}

        assert await bucket_tools.get_object_text("notes/today.txt") == "héllo"
        head = await bucket_tools.head_object("/notes//today.txt")
        assert head["ContentLength"] == 6

    @pytest.mark.asyncio
    async def test_filesystem_over_memory_store(self, memory_store, memory_context):
        fs = bucket_tools.S3FileSystem(memory_context, page_size=1)
        memory_store.objects = {"a/1": b"", "a/2": b"", "a/3": b""}

        page = await fs.list_objects("a")

        assert page.object_keys == ("a/1", "a/2", "a/3")
        assert memory_store.operations() == ["list", "list", "list"]
        assert await fs.delete_objects([]) is None
