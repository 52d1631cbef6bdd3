from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path


def _parse_json_output(stdout: str) -> dict:
    lines = [line.strip() for line in stdout.splitlines() if line.strip()]
    return json.loads(lines[-1])


def _run_script(env_overrides: dict[str, str], *args: str) -> subprocess.CompletedProcess:
    repo_root = Path(__file__).resolve().parents[2]
    script_path = repo_root / "backend" / "scripts" / "validate_runtime_config.py"

    env = os.environ.copy()
    env.update(env_overrides)
    return subprocess.run(
        [sys.executable, str(script_path), *args],
        cwd=str(repo_root),
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )


def test_validate_runtime_config_fails_with_default_url_in_production():
    completed = _run_script(
        {
            "APP_ENV": "production",
            "DEBUG": "false",
            "CATALOG_API_URL": "http://localhost:8000/api",
            "CATALOG_API_TOKEN": "",
        },
        "--require-token",
    )
    assert completed.returncode == 1
    payload = _parse_json_output(completed.stdout)
    assert payload["status"] == "failed"
    assert any("default value" in message for message in payload["failures"])
    assert any("CATALOG_API_TOKEN" in message for message in payload["failures"])


def test_validate_runtime_config_requires_https_outside_local():
    completed = _run_script(
        {
            "APP_ENV": "staging",
            "DEBUG": "false",
            "CATALOG_API_URL": "http://catalog.internal/api",
        }
    )
    assert completed.returncode == 1
    payload = _parse_json_output(completed.stdout)
    assert any("https" in message for message in payload["failures"])


def test_validate_runtime_config_passes_with_production_settings():
    completed = _run_script(
        {
            "APP_ENV": "production",
            "DEBUG": "false",
            "CATALOG_API_URL": "https://catalog.example.com/api",
            "CATALOG_API_TOKEN": "prod-token",
        },
        "--require-token",
    )
    assert completed.returncode == 0
    payload = _parse_json_output(completed.stdout)
    assert payload["status"] == "success"
    assert payload["failures"] == []
    assert payload["require_token"] is True


def test_validate_runtime_config_accepts_local_defaults():
    completed = _run_script(
        {"APP_ENV": "local", "DEBUG": "true", "CATALOG_API_URL": "http://localhost:8000/api"},
        "--pretty",
    )
    assert completed.returncode == 0
    payload = json.loads(completed.stdout)
    assert payload["local_env"] is True


def test_validate_runtime_config_rejects_empty_notification_history():
    completed = _run_script({"APP_ENV": "local", "NOTIFICATION_HISTORY": "0"})
    assert completed.returncode == 1
    payload = _parse_json_output(completed.stdout)
    assert "NOTIFICATION_HISTORY must be at least 1" in payload["failures"]
