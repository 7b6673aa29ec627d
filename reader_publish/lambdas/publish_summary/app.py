import hmac
import logging
import os
import time
from typing import Any, Callable, Dict, Mapping, Optional

from reader_publish.config import PublishConfig
from reader_publish.errors import BadRequest, MethodNotAllowed, ObjectAlreadyExists, Unauthorized
from reader_publish.lambdas.common import (
    API_KEY_HEADER,
    fail,
    header,
    no_content,
    parse_body,
    respond,
    with_context,
)
from reader_publish.models.summary import (
    OBJECT_CONTENT_LABEL,
    OBJECT_CONTENT_TYPE,
    PublishRequest,
    is_present,
)
from reader_publish.services.blob_builder import build_blob, object_key, serialize_blob
from reader_publish.services.validator import validate
from reader_publish.utils.notifier import Notifier
from reader_publish.utils.s3_handler import S3Handler

logger = logging.getLogger()


def _log_level(name: Optional[str]) -> int:
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


logger.setLevel(_log_level(os.environ.get("LOG_LEVEL")))

UNKNOWN_RECORD = "unknown"


class PublishHandler:
    """
    Validates a summary record, builds its compact blob and writes it once to
    ``{recordId}/summary.json``. A key that already exists is reported as a
    skip; its content is never compared with the new blob.
    """

    def __init__(
        self,
        config: PublishConfig,
        storage: Optional[S3Handler] = None,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self.storage = storage if storage is not None else S3Handler(config.storage)
        self.notifier = notifier if notifier is not None else Notifier(config.notifier)
        self._clock = clock

    def _authorized(self, provided: Optional[str]) -> bool:
        expected = self.config.api_key
        if not expected or not provided:
            return False
        return hmac.compare_digest(str(provided).encode("utf-8"), expected.encode("utf-8"))

    def _admit(self, method: str, headers: Optional[Mapping[str, Any]]) -> None:
        if method != "POST":
            raise MethodNotAllowed("Method not allowed. Use POST.")
        provided = header(headers, API_KEY_HEADER)
        if not self._authorized(provided):
            logger.warning(with_context("Authentication failed", providedKey="present" if provided else "missing"))
            raise Unauthorized("Unauthorized. Invalid or missing API key.")

    def _duration(self, start: float) -> str:
        return f"{int((self._clock() - start) * 1000)}ms"

    def _cdn_url(self, key: str) -> str:
        return f"{self.config.cdn_base_url.rstrip('/')}/{key}"

    def handle(
        self,
        method: Optional[str],
        headers: Optional[Mapping[str, Any]],
        body: Any,
        *,
        is_base64_encoded: bool = False,
    ) -> Dict[str, Any]:
        method = (method or "").upper()
        if method == "OPTIONS":
            return no_content()
        try:
            self._admit(method, headers)
        except (MethodNotAllowed, Unauthorized) as e:
            return fail(e.message, e.status_code)

        start = self._clock()
        record_id: Any = UNKNOWN_RECORD
        try:
            payload = parse_body(body, is_base64_encoded)
            if is_present(payload.get("recordId")):
                record_id = payload["recordId"]
            logger.info(with_context("Processing publish request", recordId=record_id, contentType=payload.get("contentType")))

            validation = validate(payload)
            if not validation.valid:
                raise BadRequest(validation.error)

            request = PublishRequest.from_body(payload)
            blob = build_blob(request)
            key = object_key(request.record_id)

            if self.storage.exists(key):
                logger.info(with_context("Object already exists, skipping upload", recordId=record_id, objectKey=key))
                return self._skipped(record_id, key, start)

            data = serialize_blob(blob)
            metadata = {"record-id": str(record_id), "content-type": OBJECT_CONTENT_LABEL}
            try:
                result = self.storage.put_if_new(
                    key, data, OBJECT_CONTENT_TYPE, metadata, conditional=self.config.conditional_put
                )
            except ObjectAlreadyExists:
                logger.info(with_context("Concurrent write won, skipping upload", recordId=record_id, objectKey=key))
                return self._skipped(record_id, key, start)

            duration = self._duration(start)
            logger.info(with_context("Publish complete", recordId=record_id, duration=duration, size=result.size))
            return respond({
                "success": True,
                "recordId": record_id,
                "queryParam": f"r={record_id}",
                "cdnUrl": self._cdn_url(key),
                "size": result.size,
                "duration": duration,
            })

        except BadRequest as e:
            logger.warning(with_context(f"Validation failed: {e.message}", recordId=record_id))
            return fail(e.message, e.status_code, duration=self._duration(start))

        except Exception as e:
            duration = self._duration(start)
            message = str(e) or type(e).__name__
            logger.error(with_context(f"Error: {message}", recordId=record_id), exc_info=True)
            self.notifier.notify(message, {"recordId": record_id, "duration": duration})
            return fail(message, 500, recordId=record_id, duration=duration)

    def _skipped(self, record_id: Any, key: str, start: float) -> Dict[str, Any]:
        return respond({
            "success": True,
            "skipped": True,
            "message": "Content already exists",
            "recordId": record_id,
            "queryParam": f"r={record_id}",
            "cdnUrl": self._cdn_url(key),
            "duration": self._duration(start),
        })


_handler: Optional[PublishHandler] = None


def _get_handler() -> PublishHandler:
    global _handler
    if _handler is None:
        _handler = PublishHandler(PublishConfig.from_env())
    return _handler


def _event_method(event: Dict[str, Any]) -> Optional[str]:
    if event.get("httpMethod"):
        return event["httpMethod"]
    return ((event.get("requestContext") or {}).get("http") or {}).get("method")


def lambda_handler(event, context):
    """
    API Gateway proxy entrypoint (REST v1 or HTTP API v2 payloads).
    """
    event = event or {}
    return _get_handler().handle(
        _event_method(event),
        event.get("headers"),
        event.get("body"),
        is_base64_encoded=bool(event.get("isBase64Encoded")),
    )
