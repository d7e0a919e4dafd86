"""Tests for the command-line interface."""

import logging

import pytest
from typer.testing import CliRunner

from bucket_tools import __version__
from bucket_tools.cli import app

runner = CliRunner()

BUCKET_ARGS = [
    "--bucket",
    "test-bucket",
    "--access-key-id",
    "test_key",
    "--secret-access-key",
    "test_secret",
    "--region",
    "us-east-1",
]


def invoke(*args):
    return runner.invoke(app, [*BUCKET_ARGS, *args])


class TestCLI:
    """Test CLI commands against mocked S3."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_list(self, sample_tree):
        result = invoke("list", "src")

        assert result.exit_code == 0
        assert "src/sub/" in result.stdout
        assert "src/a.txt" in result.stdout

    def test_list_empty(self, s3_client):
        result = invoke("list", "nothing")

        assert result.exit_code == 0
        assert "No objects found." in result.stdout

    def test_exists(self, sample_tree):
        assert invoke("exists", "src/a.txt").exit_code == 0
        assert invoke("exists", "src/").exit_code == 0
        assert invoke("exists", "src/missing.txt").exit_code == 1

    def test_mkdir(self, s3_client, bucket_keys):
        first = invoke("mkdir", "fresh")
        second = invoke("mkdir", "fresh")

        assert first.exit_code == 0
        assert "Created directory: fresh/" in first.stdout
        assert "already exists" in second.stdout
        assert bucket_keys() == ["fresh/"]

    def test_copy_directory(self, sample_tree, bucket_keys):
        result = invoke("copy", "src/", "dst/")

        assert result.exit_code == 0
        assert "Copied 2 object(s)" in result.stdout
        assert bucket_keys("dst/") == ["dst/a.txt", "dst/sub/b.txt"]

    def test_move_object(self, sample_tree, bucket_keys):
        result = invoke("move", "src/a.txt", "moved.txt")

        assert result.exit_code == 0
        assert "moved.txt" in bucket_keys()
        assert "src/a.txt" not in bucket_keys()

    def test_delete_tree(self, sample_tree, bucket_keys):
        result = invoke("delete", "src/")

        assert result.exit_code == 0
        assert bucket_keys() == []

    def test_delete_many(self, sample_tree, bucket_keys):
        result = invoke("delete", "src/a.txt", "src/sub/b.txt")

        assert result.exit_code == 0
        assert bucket_keys() == []

    def test_cat(self, sample_tree):
        result = invoke("cat", "src/sub/b.txt")

        assert result.exit_code == 0
        assert result.stdout == "bravo"

    def test_copy_missing_directory(self, s3_client):
        result = invoke("copy", "missing/", "dst/")

        assert result.exit_code == 1
        assert "not found" in result.output

    @pytest.mark.parametrize("command", [["list"], ["cat", "x"]])
    def test_missing_bucket_configuration(self, monkeypatch, command):
        monkeypatch.delenv("SS_AWS_S3_BUCKET", raising=False)

        result = runner.invoke(app, command)

        assert result.exit_code == 1
        assert "No bucket configured" in result.output

    def test_delete_root_asks_first(self, sample_tree, bucket_keys):
        result = runner.invoke(app, [*BUCKET_ARGS, "delete", "/"], input="n\n")

        assert result.exit_code == 1
        assert bucket_keys() == ["src/a.txt", "src/sub/b.txt"]

    def test_delete_root_confirmed(self, sample_tree, bucket_keys):
        result = invoke("delete", "/", "--yes")

        assert result.exit_code == 0
        assert "every object" in result.stdout
        assert bucket_keys() == []

    def test_log_level_option(self, sample_tree):
        root = logging.getLogger()
        level = root.level
        try:
            result = runner.invoke(app, ["--log-level", "warning", *BUCKET_ARGS, "list"])
            assert result.exit_code == 0
            assert root.level == logging.WARNING
        finally:
            root.setLevel(level)
