"""Desktop-side helpers: probe the API, export and import notes, start the backends."""

from __future__ import annotations

import os
import subprocess
import sys
import time
from pathlib import Path

import requests

API_BASE = "http://localhost:8000/api"
DATABASE_URL = "http://localhost:8000"
REQUEST_TIMEOUT = 10.0
STARTUP_WAIT = 2.0

SURREAL_USER = "root"
SURREAL_PASSWORD = "password"
NAMESPACE = "cosmiqnotz"
DATABASE_NAME = "cosmiqnotz"
DATABASE_FILE = Path("data.db")
INIT_SCRIPT = Path("migrations") / "init.surql"

API_MODULE = "cosmiqnotz.api"


class CommandError(Exception):
    """Raised when a desktop command cannot complete."""


def check_api_status(base_url: str = API_BASE) -> bool:
    """Tell whether the notes endpoint answers with a 2xx or 3xx status."""
    try:
        response = requests.head(
            f"{base_url.rstrip('/')}/notes",
            timeout=REQUEST_TIMEOUT,
            allow_redirects=False,
        )
    except requests.RequestException:
        return False
    return 200 <= response.status_code < 400


def export_notes(path: str | os.PathLike[str], base_url: str = API_BASE) -> str:
    """Fetch every note from the API and write the raw JSON to ``path``."""
    try:
        response = requests.get(f"{base_url.rstrip('/')}/notes", timeout=REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        raise CommandError("Failed to fetch notes from API") from exc

    target = Path(path)
    try:
        handle = target.open("wb")
    except OSError as exc:
        raise CommandError(f"Failed to create file: {exc}") from exc
    with handle:
        try:
            handle.write(response.content)
        except OSError as exc:
            raise CommandError(f"Failed to write to file: {exc}") from exc
    return f"Notes exported to {os.fspath(path)}"


def import_notes(path: str | os.PathLike[str], base_url: str = API_BASE) -> str:
    """Send the JSON held in ``path`` to the API's import endpoint."""
    source = Path(path)
    if not source.exists():
        raise CommandError("File does not exist")
    try:
        notes = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CommandError(f"Failed to read file: {exc}") from exc

    try:
        requests.post(
            f"{base_url.rstrip('/')}/notes/import",
            data=notes.encode("utf-8"),
            headers={"Content-Type": "application/json"},
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        raise CommandError("Failed to import notes") from exc
    return "Notes imported successfully"


def _is_running(pattern: list[str], what: str) -> bool:
    try:
        result = subprocess.run(["pgrep", *pattern], capture_output=True)
    except OSError as exc:
        raise CommandError(f"Failed to check if {what} is running: {exc}") from exc
    return result.returncode == 0


def start_surrealdb() -> None:
    """Start the database server unless it runs already, and initialise a new database."""
    if _is_running(["surreal"], "SurrealDB"):
        return

    try:
        subprocess.Popen(
            [
                "surreal",
                "start",
                "--user",
                SURREAL_USER,
                "--pass",
                SURREAL_PASSWORD,
                f"file:{DATABASE_FILE}",
            ]
        )
    except OSError as exc:
        raise CommandError(f"Failed to start SurrealDB: {exc}") from exc

    time.sleep(STARTUP_WAIT)

    if DATABASE_FILE.exists():
        return
    if not INIT_SCRIPT.is_file():
        raise CommandError(f"Failed to initialize database: {INIT_SCRIPT} not found")
    try:
        subprocess.run(
            [
                "surreal",
                "import",
                "--conn",
                DATABASE_URL,
                "--user",
                SURREAL_USER,
                "--pass",
                SURREAL_PASSWORD,
                "--ns",
                NAMESPACE,
                "--db",
                DATABASE_NAME,
                str(INIT_SCRIPT),
            ],
            capture_output=True,
        )
    except OSError as exc:
        raise CommandError(f"Failed to initialize database: {exc}") from exc


def start_api_server() -> None:
    """Start the notes API server unless it runs already."""
    if _is_running(["-f", API_MODULE], "API server"):
        return
    try:
        subprocess.Popen([sys.executable, "-m", API_MODULE])
    except OSError as exc:
        raise CommandError(f"Failed to start API server: {exc}") from exc
    time.sleep(STARTUP_WAIT)