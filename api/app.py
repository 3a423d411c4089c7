"""HTTP entry point: reports are POSTed to ``/data/`` and stamped with the current time."""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from durability.influx_writer import InfluxWriter
from reportparser import ReportProcessor, report_processor
from reportparser.timestamps import TimestampPolicy, WallClockPolicy
from util.config import Settings
from util.errors import IngestError


def register_error_handlers(app: FastAPI, logger: logging.Logger) -> None:
    @app.exception_handler(IngestError)
    async def _ingest(request: Request, exc: IngestError) -> PlainTextResponse:
        logger.error(exc.detail)
        return PlainTextResponse(exc.detail, status_code=500)


def create_app(
    settings: Settings,
    logger: logging.Logger,
    writer: InfluxWriter | None = None,
    timestamp_policy: TimestampPolicy | None = None,
) -> FastAPI:
    processor: ReportProcessor = report_processor(timestamp_policy or WallClockPolicy())
    writer = writer or InfluxWriter(settings, logger)

    router = APIRouter()

    @router.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    @router.post("/data/{suffix:path}")
    async def data(request: Request) -> PlainTextResponse:
        client = request.client
        logger.info(
            "Processing request: %s %s HTTP/%s %s %s",
            f"{client.host}:{client.port}" if client else "-",
            request.method,
            request.scope.get("http_version", "1.1"),
            request.headers.get("host", ""),
            request.url.path,
        )
        body = await request.body()

        def ingest() -> None:
            points = processor.process_body(body)
            writer.write(points)

        await run_in_threadpool(ingest)
        return PlainTextResponse("OK")

    app = FastAPI(title="c2i", description="Performance test report ingestion into InfluxDB")
    register_error_handlers(app, logger)
    app.include_router(router)
    return app
