"""
Function entry point for API-gateway proxy events.

Points are stamped with ``Summary.Timestamp`` from the report. Failures are
raised to the runtime; only success produces a proxy response.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Callable, Dict, Optional

from durability.influx_writer import InfluxWriter
from reportparser import report_processor
from reportparser.timestamps import ReportTimestampPolicy
from util.config import Settings
from util.errors import IngestError, InputError
from util.logging import setup_logging


def _request_body(event: Dict[str, Any]) -> str:
    body = event.get("body") or ""
    if body and event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise InputError(f"JSON decode error: invalid base64 body: {e}") from e
    return body


def make_handler(
    settings: Settings,
    logger: logging.Logger,
    writer: Optional[InfluxWriter] = None,
) -> Callable[[Dict[str, Any], Any], Dict[str, Any]]:
    processor = report_processor(ReportTimestampPolicy())
    writer = writer or InfluxWriter(settings, logger)

    def _handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
        request_id = (event.get("requestContext") or {}).get("requestId", "")
        logger.debug("Processing Lambda request %s", request_id)
        try:
            points = processor.process_body(_request_body(event))
            writer.write(points)
        except IngestError as e:
            logger.error(e.detail)
            raise
        return {"body": "OK", "statusCode": 200}

    return _handler


_default_handler = None


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Runtime entry point; settings and logging are set up on the first invocation."""
    global _default_handler
    if _default_handler is None:
        settings = Settings.from_env()
        logger = setup_logging("c2i.serverless", settings.debug, settings.log_format)
        _default_handler = make_handler(settings, logger)
    return _default_handler(event, context)
