"""Cloud Function Entry Point.

This module provides the HTTP entry point for the earthquake list.
It's a thin wrapper that loads settings and invokes the orchestrator.
"""

import logging
import os
import json
from dataclasses import replace
from typing import Any

import functions_framework
from flask import Request

from src.core.config import Settings
from src.core.errors import SettingsError
from src.core.formatter import format_list_item
from src.orchestrator import Orchestrator
from src.shell.settings_store import load_settings


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _apply_request_overrides(settings: Settings, args: Any) -> Settings:
    """Apply minmag/orderby/limit query args on top of stored settings.

    Raises:
        SettingsError: If limit is not an integer
    """
    overrides: dict[str, Any] = {}

    if args.get("minmag"):
        overrides["min_magnitude"] = args.get("minmag")
    if args.get("orderby"):
        overrides["order_by"] = args.get("orderby")
    if args.get("limit"):
        try:
            overrides["limit"] = int(args.get("limit"))
        except ValueError as e:
            raise SettingsError(f"Invalid limit: {args.get('limit')!r}") from e

    return replace(settings, **overrides) if overrides else settings


@functions_framework.http
def earthquake_report(request: Request) -> tuple[dict[str, Any], int]:
    """HTTP Cloud Function entry point.

    Returns the current earthquake list as display-ready JSON.

    Args:
        request: Flask request object; optional minmag, orderby, limit args

    Returns:
        Tuple of (response dict, HTTP status code)
    """
    logger.info("Starting earthquake list refresh")

    try:
        # Load settings and apply per-request overrides
        settings = _apply_request_overrides(load_settings(), request.args)
        orchestrator = Orchestrator(settings)

        try:
            result = orchestrator.process()
        finally:
            orchestrator.close()

        response = {
            "status": "success",
            "count": len(result.earthquakes),
            "earthquakes": [format_list_item(r) for r in result.earthquakes],
            "empty_state": result.empty_state,
        }

        logger.info("Completed: %s", result.summary)

        return response, 200

    except SettingsError as e:
        logger.warning("Rejected request: %s", e)
        return {
            "status": "error",
            "message": str(e),
        }, 400

    except Exception as e:
        logger.exception("Unexpected error in earthquake report")
        return {
            "status": "error",
            "message": str(e),
        }, 500


# For local testing
if __name__ == "__main__":

    class MockRequest:
        args: dict[str, str] = {}

    response, status = earthquake_report(MockRequest())
    print(f"\nResponse ({status}):")
    print(json.dumps(response, indent=2))
