"""S3 client configuration and management.

This module owns the only code that talks to boto3. The directory engine
sees the store through the small asynchronous :class:`ObjectStoreClient`
protocol; :class:`S3ObjectStore` implements it by running each blocking
boto3 call in a worker thread.

Authentication Methods Supported:
    1. Explicit credentials (access_key_id, secret_access_key)
    2. AWS CLI profiles (aws_profile)
    3. IAM roles / environment variables (no explicit credentials)
    4. Temporary credentials (session_token)

S3-Compatible Services:
    Supports custom endpoints for services like MinIO, DigitalOcean Spaces,
    and other S3-compatible object storage providers via endpoint_url.
"""

import asyncio
from typing import Any, Dict, Optional, Protocol, Sequence

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from bucket_tools.core import get_logger
from bucket_tools.core.exceptions import BatchDeleteError, ObjectNotFoundError
from bucket_tools.schemas import S3StorageConfig

logger = get_logger(__name__)

NOT_FOUND_CODES = frozenset({"404", "NotFound", "NoSuchKey"})

# S3 DeleteObjects accepts at most this many keys per request
MAX_DELETE_BATCH = 1000


def is_not_found(error: BaseException) -> bool:
    """Check whether a boto3 error means the requested key does not exist."""
    if isinstance(error, ObjectNotFoundError):
        return True
    if isinstance(error, ClientError):
        code = str(error.response.get("Error", {}).get("Code", ""))
        return code in NOT_FOUND_CODES
    return False


class ObjectStoreClient(Protocol):
    """Flat, per-key primitives offered by an object store.

    Every method fails with ObjectNotFoundError when the key is absent and
    lets any other store error propagate unchanged.
    """

    async def get(self, key: str, range: Optional[str] = None) -> Dict[str, Any]:
        """Fetch an object; the response's ``Body`` holds the bytes."""
        ...

    async def put(self, key: str, body: Any, **extra: Any) -> Dict[str, Any]:
        """Write an object, passing ``extra`` through as request parameters."""
        ...

    async def head(self, key: str) -> Dict[str, Any]:
        """Fetch object metadata."""
        ...

    async def delete(self, key: str) -> Dict[str, Any]:
        """Delete one key."""
        ...

    async def delete_many(self, keys: Sequence[str]) -> Dict[str, Any]:
        """Delete several keys; per-key failures raise BatchDeleteError."""
        ...

    async def list(
        self,
        prefix: str,
        delimiter: Optional[str],
        continuation_token: Optional[str] = None,
        max_keys: Optional[int] = None,
    ) -> Dict[str, Any]:
        """List one page of keys under a prefix."""
        ...


class S3ClientManager:
    """Manages S3 client connections."""

    def __init__(self, config: S3StorageConfig):
        """Initialize S3 client manager.

        Args:
            config: S3 storage configuration
        """
        self.config = config
        self._client = None
        logger.info("S3 client manager initialized", region=config.region_name)

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """Create boto3 S3 client with the configured settings."""
        kwargs: Dict[str, Any] = {
            "region_name": self.config.region_name,
        }

        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url

        if self.config.user_agent:
            kwargs["config"] = Config(user_agent_extra=self.config.user_agent)

        if self.config.aws_profile:
            session = boto3.Session(profile_name=self.config.aws_profile)
            client = session.client("s3", **kwargs)  # type: ignore
            logger.info(
                "S3 client created with profile", profile=self.config.aws_profile
            )
        else:
            if self.config.access_key_id and self.config.secret_access_key:
                kwargs.update(
                    {
                        "aws_access_key_id": self.config.access_key_id,
                        "aws_secret_access_key": self.config.secret_access_key,
                    }
                )
                if self.config.session_token:
                    kwargs["aws_session_token"] = self.config.session_token
                logger.info("S3 client created with explicit credentials")
            else:
                logger.info("S3 client created with default credential chain")

            client = boto3.client("s3", **kwargs)  # type: ignore

        return client


class S3ObjectStore:
    """ObjectStoreClient backed by a boto3 S3 client for a single bucket."""

    def __init__(self, client_manager: S3ClientManager, bucket: Optional[str] = None):
        self.client_manager = client_manager
        self.bucket = bucket or client_manager.config.bucket

    @classmethod
    def from_config(cls, config: S3StorageConfig) -> "S3ObjectStore":
        return cls(S3ClientManager(config))

    async def _call(self, operation: str, key: Optional[str] = None, **params: Any):
        """Run one boto3 operation in a worker thread.

        Not-found responses are raised as ObjectNotFoundError; everything
        else propagates as raised by boto3.
        """
        method = getattr(self.client_manager.client, operation)
        try:
            return await asyncio.to_thread(method, Bucket=self.bucket, **params)
        except ClientError as e:
            if is_not_found(e):
                raise ObjectNotFoundError(key or params.get("Prefix", "")) from e
            raise

    async def get(self, key: str, range: Optional[str] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {"Key": key}
        if range:
            params["Range"] = range

        response = await self._call("get_object", key, **params)

        body = response.get("Body")
        if body is not None:
            response["Body"] = await asyncio.to_thread(body.read)
        return response

    async def put(self, key: str, body: Any, **extra: Any) -> Dict[str, Any]:
        return await self._call("put_object", key, Key=key, Body=body, **extra)

    async def head(self, key: str) -> Dict[str, Any]:
        return await self._call("head_object", key, Key=key)

    async def delete(self, key: str) -> Dict[str, Any]:
        return await self._call("delete_object", key, Key=key)

    async def delete_many(self, keys: Sequence[str]) -> Dict[str, Any]:
        """Delete keys in as many requests as the S3 batch limit requires.

        Raises:
            BatchDeleteError: If S3 reports per-key failures in any batch
        """
        response: Dict[str, Any] = {"Deleted": [], "Errors": []}
        for start in range(0, len(keys), MAX_DELETE_BATCH):
            batch = keys[start : start + MAX_DELETE_BATCH]
            result = await self._call(
                "delete_objects",
                Delete={"Objects": [{"Key": key} for key in batch]},
            )
            response["Deleted"].extend(result.get("Deleted", []))
            response["Errors"].extend(result.get("Errors", []))

        if response["Errors"]:
            logger.warning(
                "Batch delete reported errors",
                bucket=self.bucket,
                error_count=len(response["Errors"]),
            )
            raise BatchDeleteError(response["Errors"])
        return response

    async def list(
        self,
        prefix: str,
        delimiter: Optional[str],
        continuation_token: Optional[str] = None,
        max_keys: Optional[int] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {"Prefix": prefix}
        if delimiter:
            params["Delimiter"] = delimiter
        if continuation_token:
            params["ContinuationToken"] = continuation_token
        if max_keys:
            params["MaxKeys"] = max_keys
        return await self._call("list_objects_v2", **params)
