#!/usr/bin/env python3
"""Validate runtime configuration for pre-production/production deploys.

Examples:
  python backend/scripts/validate_runtime_config.py
  python backend/scripts/validate_runtime_config.py --require-token --pretty
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any
from urllib.parse import urlparse

# Add backend/ to path when run as a script.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import DEFAULT_CATALOG_API_URL, Settings, is_local_env


def _validate_settings(*, require_token: bool) -> tuple[list[str], dict[str, Any]]:
    # Settings() directly so guardrail failures are reported, not raised.
    settings = Settings()
    local_env = is_local_env(settings.app_env)
    failures: list[str] = []

    if settings.page_size < 1:
        failures.append("PAGE_SIZE must be at least 1")
    if settings.notification_history < 1:
        failures.append("NOTIFICATION_HISTORY must be at least 1")
    if settings.catalog_api_timeout <= 0:
        failures.append("CATALOG_API_TIMEOUT must be positive")

    parsed = urlparse(settings.catalog_api_url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        failures.append("CATALOG_API_URL must be an absolute http(s) URL")

    if not local_env:
        if settings.debug:
            failures.append("DEBUG=true is not allowed outside local/dev/test")
        if settings.catalog_api_url.rstrip("/") == DEFAULT_CATALOG_API_URL:
            failures.append("CATALOG_API_URL must not use the default value outside local/dev/test")
        elif parsed.scheme != "https":
            failures.append("CATALOG_API_URL must use https outside local/dev/test")

    if require_token and not settings.catalog_api_token.strip():
        failures.append("CATALOG_API_TOKEN is required when --require-token is set")

    summary = {
        "status": "success" if not failures else "failed",
        "app_env": settings.app_env,
        "local_env": local_env,
        "catalog_api_url": settings.catalog_api_url,
        "require_token": bool(require_token),
        "failures": failures,
    }
    return failures, summary


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate deployment runtime config")
    parser.add_argument(
        "--require-token",
        action="store_true",
        help="Require a catalog API bearer token for this deploy target",
    )
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    args = parser.parse_args()

    try:
        failures, summary = _validate_settings(require_token=bool(args.require_token))
    except Exception as exc:  # noqa: BLE001
        summary = {
            "status": "failed",
            "error": str(exc),
            "require_token": bool(args.require_token),
        }
        failures = [str(exc)]

    if args.pretty:
        print(json.dumps(summary, indent=2, sort_keys=True))
    else:
        print(json.dumps(summary))

    return 0 if not failures else 1


if __name__ == "__main__":
    raise SystemExit(main())
