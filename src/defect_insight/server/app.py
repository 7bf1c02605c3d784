"""Starlette ASGI application exposing detection over HTTP."""

from __future__ import annotations

import logging
from typing import Any, Optional

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route

from .. import __version__
from ..batch import detect, process_batch
from ..config import DetectorConfig
from ..dashboard import get_model_performance, get_training_data
from ..exceptions import FetchError, NoValidDataError, PersistenceError
from ..identity import StaticIdentity
from ..ingestion import fetch_csv_url, load_metric_rows, parse_csv_text
from ..persistence import ResultStore
from ..reporting import render_batch_report

logger = logging.getLogger(__name__)

USER_HEADER = "X-User-Id"
MAX_HISTORY_LIMIT = 1000


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def create_app(config: Optional[DetectorConfig] = None, store: Optional[ResultStore] = None) -> Starlette:
    """Build the Starlette application.

    Args:
        config: Runtime configuration (thresholds, database location)
        store: Result store; defaults to one at ``config.db_path``
    """
    config = config or DetectorConfig()
    store = store or ResultStore(config.db_path)

    def identity_for(request: Request) -> StaticIdentity:
        return StaticIdentity(request.headers.get(USER_HEADER))

    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "version": __version__})

    async def api_detect(request: Request) -> JSONResponse:
        try:
            payload = await request.json()
        except ValueError:
            # JSONDecodeError and UnicodeDecodeError alike
            return _error("Request body must be JSON", 400)
        if not isinstance(payload, dict):
            return _error("Request body must be a JSON object of metric values", 400)

        metrics, verdict = await run_in_threadpool(
            detect,
            payload,
            identity=identity_for(request),
            store=store,
            thresholds=config.thresholds,
        )
        return JSONResponse({"metrics": metrics.to_dict(), **verdict.to_dict()})

    async def api_batch(request: Request) -> Any:
        content_type = request.headers.get("content-type", "")
        try:
            if content_type.startswith("application/json"):
                try:
                    payload = await request.json()
                except ValueError:
                    return _error("Request body must be JSON", 400)
                url = payload.get("url") if isinstance(payload, dict) else None
                if not url:
                    return _error("JSON body must contain a 'url'", 400)
                raw_rows = await run_in_threadpool(
                    fetch_csv_url, url, config.fetch_timeout_seconds
                )
            else:
                body = await request.body()
                raw_rows = parse_csv_text(body.decode("utf-8-sig", errors="replace"))

            rows = load_metric_rows(raw_rows)
            result = await run_in_threadpool(
                process_batch,
                rows,
                identity=identity_for(request),
                store=store,
                thresholds=config.thresholds,
            )
        except NoValidDataError as e:
            return _error(str(e), 422)
        except FetchError as e:
            logger.warning("CSV fetch failed: %s", e)
            return _error(str(e), 502)

        if request.query_params.get("format") == "html":
            return HTMLResponse(render_batch_report(result))
        return JSONResponse(result.to_dict())

    async def api_history(request: Request) -> JSONResponse:
        user_id = identity_for(request).current_user_id()
        if user_id is None:
            return _error(f"Missing {USER_HEADER} header", 401)
        try:
            limit = int(request.query_params.get("limit", config.history_limit))
        except ValueError:
            return _error("limit must be an integer", 400)
        limit = max(1, min(limit, MAX_HISTORY_LIMIT))

        try:
            results = await run_in_threadpool(store.history, user_id, limit)
        except PersistenceError as e:
            logger.error("History read failed: %s", e)
            return _error("Could not read history", 500)
        return JSONResponse([r.to_dict() for r in results])

    async def api_performance(request: Request) -> JSONResponse:
        return JSONResponse(get_model_performance().to_dict())

    async def api_training(request: Request) -> JSONResponse:
        return JSONResponse(get_training_data().to_dict())

    routes = [
        Route("/api/health", health),
        Route("/api/detect", api_detect, methods=["POST"]),
        Route("/api/batch", api_batch, methods=["POST"]),
        Route("/api/history", api_history),
        Route("/api/model/performance", api_performance),
        Route("/api/model/training", api_training),
    ]

    return Starlette(routes=routes)
