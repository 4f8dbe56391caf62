"""S3 record store: one JSON object per record key."""

from __future__ import annotations

import logging
from typing import Any

log = logging.getLogger(__name__)


class S3RecordStore:
    """Stores record documents as objects under a bucket prefix.

    ``evaluation_id`` namespaces the keys so one bucket can hold the
    records of many evaluations.
    """

    def __init__(
        self,
        bucket: str,
        prefix: str = "records/",
        region: str = "us-east-2",
        evaluation_id: str = "",
        kms_key_id: str = "",
        s3_client: Any | None = None,
    ) -> None:
        if s3_client is not None:
            self._s3 = s3_client
        else:
            try:
                import boto3 as _boto3
            except ImportError as e:
                raise ImportError(
                    "boto3 is required for the S3 record store. "
                    "Install with: pip install fce-synthesis[aws]"
                ) from e
            self._s3 = _boto3.client("s3", region_name=region)

        self._bucket = bucket
        self._prefix = f"{prefix}{evaluation_id}/" if evaluation_id else prefix
        self._kms_key_id = kms_key_id

    def _full_key(self, key: str) -> str:
        return f"{self._prefix}{key}.json"

    def save(self, key: str, data: str) -> None:
        put_kwargs: dict[str, Any] = {
            "Bucket": self._bucket,
            "Key": self._full_key(key),
            "Body": data.encode("utf-8"),
            "ContentType": "application/json",
        }
        if self._kms_key_id:
            put_kwargs["ServerSideEncryption"] = "aws:kms"
            put_kwargs["SSEKMSKeyId"] = self._kms_key_id
        self._s3.put_object(**put_kwargs)
        log.debug("Saved record %s to s3://%s/%s", key, self._bucket, self._full_key(key))

    def load(self, key: str) -> str:
        try:
            response = self._s3.get_object(Bucket=self._bucket, Key=self._full_key(key))
        except self._s3.exceptions.NoSuchKey:
            raise KeyError(f"Record not found in S3: {key}") from None
        return response["Body"].read().decode("utf-8")

