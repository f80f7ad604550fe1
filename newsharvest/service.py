"""HTTP API exposing the listing harvest and the single-article reader."""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import requests
from flask import Flask, jsonify, request

from newsharvest.models import HarvestConfigError
from newsharvest.pipeline import HarvestPipeline
from newsharvest.reader import ArticleReader
from newsharvest.settings import HarvestSettings, load_settings

logger = logging.getLogger(__name__)

ROUTE = "/dapo/berita"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def _response_time(start: float) -> str:
    return f"{int((time.perf_counter() - start) * 1000)} ms"


def _listing_data(records) -> Dict[str, Any]:
    return {"dapo": {"berita": [record.model_dump() for record in records]}}


def _int_arg(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise HarvestConfigError(f"{name} must be an integer, got {raw!r}") from None


def register_routes(app: Flask, pipeline: HarvestPipeline, reader: ArticleReader) -> None:
    """Register the listing/article routes with the Flask app.

    Args:
        app: Flask app instance.
        pipeline: HarvestPipeline used for GET requests.
        reader: ArticleReader used for POST ``read`` actions.
    """

    @app.route(ROUTE, methods=["GET"])
    def harvest_listing():
        logger.info("Received harvest request")
        try:
            params = pipeline.params(
                first_page=_int_arg("first_page"),
                last_page=_int_arg("last_page"),
                max_concurrent=_int_arg("max_concurrent"),
            )
        except HarvestConfigError as exc:
            logger.warning("Rejected harvest request: %s", exc)
            return jsonify({"response": "400", "message": str(exc)}), 400

        result = pipeline.run(params)
        response_time = f"{int(result.elapsed_ms or 0)} ms"
        if not result.found:
            return jsonify(
                {
                    "response": "404",
                    "message": "No data found",
                    "responseTime": response_time,
                    "data": _listing_data([]),
                }
            )
        return jsonify(
            {
                "response": "200",
                "message": "success",
                "responseTime": response_time,
                "data": _listing_data(result.records),
            }
        )

    @app.route(ROUTE, methods=["POST"])
    def read_article():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or not isinstance(payload.get("url"), str) or not payload["url"].strip():
            return jsonify({"response": "400", "message": "Invalid request body"}), 400
        if payload.get("action") != "read":
            return jsonify({"response": "400", "message": "Action not supported"}), 400

        start = time.perf_counter()
        url = payload["url"].strip()
        try:
            detail = reader.read(url)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Failed to read %s: %s", url, exc)
            return jsonify({"response": "500", "message": f"Error scraping URL: {exc}"}), 500

        return jsonify(
            {
                "response": "200",
                "responseTime": _response_time(start),
                "message": "Success",
                "data": detail.model_dump(),
            }
        )

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return jsonify({"response": "405", "message": "Only GET and POST are supported"}), 405


def create_app(
    settings: Optional[HarvestSettings] = None,
    pipeline: Optional[HarvestPipeline] = None,
    reader: Optional[ArticleReader] = None,
) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__)
    app.json.sort_keys = False
    pipeline = pipeline or HarvestPipeline(settings)
    reader = reader or ArticleReader(user_agent=settings.user_agent, timeout=settings.fetch_timeout)
    register_routes(app, pipeline, reader)
    return app
