"""Command-line interface for bucket-tools.

This module provides filesystem-style commands over an S3 bucket.

Commands:
    - list: List objects and sub-directories of one directory level
    - exists: Check whether an object or directory exists
    - mkdir: Create a directory marker
    - copy: Copy an object or a directory tree
    - move: Move an object or a directory tree
    - delete: Delete objects or a directory tree
    - cat: Print an object's contents

Connection options are given before the command name; anything left unset
is read from the SS_AWS_* environment variables.
"""

import asyncio
from typing import Annotated, List, NoReturn, Optional

import typer

from . import __version__
from .cli_params import (
    AccessKeyOption,
    BucketOption,
    EndpointUrlOption,
    KmsKeyOption,
    LogLevelOption,
    ProfileOption,
    RegionOption,
    SecretKeyOption,
    SessionTokenOption,
    YesOption,
)
from .core.observability import setup_logging
from .objectstorage import S3FileSystem, StorageContext
from .path import normalize_path

app = typer.Typer(
    name="bucket-tools",
    help="Filesystem-style directories on S3-compatible object storage.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"bucket-tools {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    bucket: BucketOption = None,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointUrlOption = None,
    aws_profile: ProfileOption = None,
    kms_key_id: KmsKeyOption = None,
    log_level: LogLevelOption = None,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    Bucket-Tools: directories, recursive copy, move and delete for S3.
    """
    if log_level is not None:
        setup_logging(log_level.value)

    ctx.obj = {
        "bucket": bucket,
        "access_key_id": access_key_id,
        "secret_access_key": secret_access_key,
        "session_token": session_token,
        "region_name": region_name,
        "endpoint_url": endpoint_url,
        "aws_profile": aws_profile,
        "kms_key_id": kms_key_id,
    }


def _filesystem(ctx: typer.Context) -> S3FileSystem:
    """Create a filesystem from the connection options and environment."""
    return S3FileSystem(StorageContext.from_environment(**(ctx.obj or {})))


def _fail(error: Exception) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Directory to list")] = "",
) -> None:
    """
    List one directory level: sub-directories first, then objects.

    Examples:
        bucket-tools --bucket my-bucket list reports/2024
    """
    try:
        page = asyncio.run(_filesystem(ctx).list_objects(path))

        if page.is_empty:
            typer.echo("No objects found.")
            return
        for prefix in page.common_prefixes:
            typer.echo(prefix)
        for key in page.object_keys:
            typer.echo(key)

    except Exception as e:
        _fail(e)


@app.command("exists")
def exists_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Object or directory path")],
) -> None:
    """
    Check whether an object or directory exists; exit 1 if it does not.

    Paths ending in a slash are checked as directories.
    """
    try:
        fs = _filesystem(ctx)
        normalized = normalize_path(path)
        if normalized.is_directory:
            found = asyncio.run(fs.directory_exists(normalized.key))
        else:
            found = asyncio.run(fs.object_exists(normalized.key))
    except Exception as e:
        _fail(e)

    if found:
        typer.echo(f"✓ {path} exists")
    else:
        typer.echo(f"✗ {path} not found", err=True)
        raise typer.Exit(1)


@app.command("mkdir")
def mkdir_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Directory to create")],
) -> None:
    """
    Create a directory marker; does nothing if the directory exists.
    """
    try:
        result = asyncio.run(_filesystem(ctx).make_directory(path))
        if result is None:
            typer.echo(f"Directory already exists: {path}")
        else:
            typer.echo(f"Created directory: {normalize_path(path, True).key}")
    except Exception as e:
        _fail(e)


def _transfer(
    ctx: typer.Context, source: str, destination: str, delete_original: bool
) -> None:
    fs = _filesystem(ctx)
    if normalize_path(source).is_directory:
        results = asyncio.run(
            fs.copy_directory(source, destination, delete_original=delete_original)
        )
        count = len(results)
    else:
        asyncio.run(
            fs.copy_object(source, destination, delete_original=delete_original)
        )
        count = 1

    verb = "Moved" if delete_original else "Copied"
    typer.echo(f"{verb} {count:,} object(s) from {source} to {destination}")


@app.command("copy")
def copy_cmd(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="Source object or directory/")],
    destination: Annotated[str, typer.Argument(help="Destination path")],
) -> None:
    """
    Copy an object, or a whole directory tree when SOURCE ends with a slash.

    Examples:
        bucket-tools copy reports/2024/summary.json archive/summary.json
        bucket-tools copy reports/2024/ archive/2024/
    """
    try:
        _transfer(ctx, source, destination, delete_original=False)
    except Exception as e:
        _fail(e)


@app.command("move")
def move_cmd(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="Source object or directory/")],
    destination: Annotated[str, typer.Argument(help="Destination path")],
) -> None:
    """
    Move an object, or a whole directory tree when SOURCE ends with a slash.
    """
    try:
        _transfer(ctx, source, destination, delete_original=True)
    except Exception as e:
        _fail(e)


@app.command("delete")
def delete_cmd(
    ctx: typer.Context,
    paths: Annotated[
        List[str], typer.Argument(help="Objects to delete, or one directory/")
    ],
    yes: YesOption = False,
) -> None:
    """
    Delete objects. A single path ending in a slash deletes the whole tree.

    Deleting the bucket root (``/``) asks for confirmation unless --yes is
    given.
    """
    emptying_bucket = len(paths) == 1 and normalize_path(paths[0]).is_root
    if emptying_bucket and not yes:
        typer.confirm("Delete every object in the bucket?", abort=True)

    try:
        fs = _filesystem(ctx)
        if len(paths) == 1:
            result = asyncio.run(fs.delete_object(paths[0]))
        else:
            result = asyncio.run(fs.delete_objects(paths))

        if emptying_bucket:
            typer.echo("Deleted every object in the bucket.")
        elif result is None:
            typer.echo("Nothing to delete.")
        else:
            typer.echo(f"Deleted: {', '.join(paths)}")
    except Exception as e:
        _fail(e)


@app.command("cat")
def cat_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Object to print")],
) -> None:
    """
    Write an object's contents to stdout.
    """
    try:
        response = asyncio.run(_filesystem(ctx).get_object(path))
        typer.echo(response.get("Body") or b"", nl=False)
    except Exception as e:
        _fail(e)


if __name__ == "__main__":
    app()
