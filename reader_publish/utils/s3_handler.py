import logging
from dataclasses import dataclass
from typing import Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from reader_publish.config import StorageConfig
from reader_publish.errors import ObjectAlreadyExists, StorageError
from reader_publish.models.summary import OBJECT_CACHE_CONTROL

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}
_PRECONDITION_CODES = {"412", "PreconditionFailed"}


@dataclass(frozen=True)
class PutResult:
    etag: Optional[str]
    size: int


def _error_code(e: ClientError) -> str:
    return str(e.response.get("Error", {}).get("Code", ""))


def _status_code(e: ClientError) -> int:
    return e.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)


def make_client(config: StorageConfig):
    """boto3 S3 client for an S3-compatible endpoint."""
    kwargs = {"region_name": config.region}
    if config.endpoint_url:
        kwargs["endpoint_url"] = config.endpoint_url
    if config.access_key_id and config.secret_access_key:
        kwargs["aws_access_key_id"] = config.access_key_id
        kwargs["aws_secret_access_key"] = config.secret_access_key
    if config.path_style:
        kwargs["config"] = Config(s3={"addressing_style": "path"})
    return boto3.client("s3", **kwargs)


class S3Handler:
    def __init__(self, config: StorageConfig, client=None):
        self.bucket_name = config.bucket
        self.s3 = client if client is not None else make_client(config)
        logger.info(f"S3Handler initialized for bucket: {self.bucket_name}")

    def exists(self, key: str) -> bool:
        """HEAD the key. Not-found is False; any other failure raises StorageError."""
        try:
            self.s3.head_object(Bucket=self.bucket_name, Key=key)
            return True
        except ClientError as e:
            if _error_code(e) in _NOT_FOUND_CODES or _status_code(e) == 404:
                return False
            logger.error(f"AWS ClientError checking s3://{self.bucket_name}/{key}: {e}", exc_info=True)
            raise StorageError(f"Failed to check {key} in bucket {self.bucket_name}: {e}") from e
        except BotoCoreError as e:
            logger.error(f"Storage transport error checking {key}: {e}", exc_info=True)
            raise StorageError(f"Failed to check {key} in bucket {self.bucket_name}: {e}") from e

    def put_if_new(
        self,
        key: str,
        body: bytes,
        content_type: str,
        metadata: Dict[str, str],
        *,
        conditional: bool = False,
    ) -> PutResult:
        """
        Write the object. This is a plain PUT unless ``conditional`` is set, in which
        case the store is asked to refuse the write when the key already exists and
        ObjectAlreadyExists is raised.
        """
        params = {
            "Bucket": self.bucket_name,
            "Key": key,
            "Body": body,
            "ContentType": content_type,
            "CacheControl": OBJECT_CACHE_CONTROL,
            "Metadata": metadata,
        }
        if conditional:
            params["IfNoneMatch"] = "*"

        try:
            logger.info(f"Uploading object to s3://{self.bucket_name}/{key}")
            response = self.s3.put_object(**params)
        except ClientError as e:
            if conditional and (_error_code(e) in _PRECONDITION_CODES or _status_code(e) == 412):
                logger.info(f"Conditional write refused, object exists: s3://{self.bucket_name}/{key}")
                raise ObjectAlreadyExists(f"Object {key} already exists") from e
            logger.error(f"AWS ClientError uploading to S3: {e}", exc_info=True)
            raise StorageError(f"Failed to upload {key} to bucket {self.bucket_name}: {e}") from e
        except BotoCoreError as e:
            logger.error(f"Storage transport error uploading {key}: {e}", exc_info=True)
            raise StorageError(f"Failed to upload {key} to bucket {self.bucket_name}: {e}") from e

        result = PutResult(etag=response.get("ETag"), size=len(body))
        logger.info(f"Successfully uploaded {key} to {self.bucket_name} ({result.size} bytes, etag {result.etag})")
        return result
