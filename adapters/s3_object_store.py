"""
S3-compatible object store adapter.

Implements ObjectStorePort using boto3 against MinIO (or any S3 endpoint).
"""

from __future__ import annotations

import mimetypes
from typing import Optional

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ports.object_store import ObjectStorePort  # noqa: F401 (runtime_checkable)
from shared_utils.constants import Defaults, LogScope
from shared_utils.error_handler import UploadFailedError
from shared_utils.logging_utils import get_scoped_logger


logger = get_scoped_logger(LogScope.ADAPTER)


class S3ObjectStoreAdapter:
    """S3 implementation of ObjectStorePort.

    Stores every upload at ``{bucket}/{key}``; keys are flat random names so no
    prefix handling is needed.
    """

    def __init__(
        self,
        bucket: str,
        endpoint_url: str = "",
        access_key: str = "",
        secret_key: str = "",
        region: str = Defaults.MINIO_REGION,
        timeout: float = Defaults.REQUEST_TIMEOUT,
        s3_client: Optional[object] = None,
    ) -> None:
        self.bucket = bucket
        client_kwargs: dict = {
            "region_name": region,
            "config": Config(
                connect_timeout=timeout,
                read_timeout=timeout,
                retries={"max_attempts": 1},
                s3={"addressing_style": "path"},
            ),
        }
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url
        if access_key and secret_key:
            client_kwargs["aws_access_key_id"] = access_key
            client_kwargs["aws_secret_access_key"] = secret_key
        self._s3 = s3_client or boto3.client("s3", **client_kwargs)

    # ------------------------------------------------------------------
    # ObjectStorePort implementation
    # ------------------------------------------------------------------

    def upload_file(self, local_path: str, key: str) -> str:
        """Upload a local file to the bucket under *key*."""
        extra_args = {}
        content_type = self._guess_content_type(key)
        if content_type:
            extra_args["ContentType"] = content_type

        try:
            self._s3.upload_file(
                Filename=local_path,
                Bucket=self.bucket,
                Key=key,
                ExtraArgs=extra_args or None,
            )
        except (ClientError, BotoCoreError, S3UploadFailedError, OSError) as exc:
            logger.error("s3_upload_failed", key=key, local_path=local_path, error=str(exc))
            raise UploadFailedError(
                "Failed to upload to CDN",
                fallback_path=local_path,
                context={"key": key, "error": str(exc)},
            ) from exc

        uri = f"s3://{self.bucket}/{key}"
        logger.info("object_uploaded", s3_uri=uri, content_type=content_type)
        return uri

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _guess_content_type(key: str) -> Optional[str]:
        """Content type from the key's extension, None when unknown."""
        content_type, _ = mimetypes.guess_type(key)
        return content_type
