"""Client-side note operations: the remote API and an offline store with a sync queue."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import requests

from cosmiqnotz.note import Note
from cosmiqnotz.storage import LocalStorage

API_BASE = "http://localhost:8000/api"
SYNC_QUEUE_KEY = "sync_queue"
NOTE_KEY_PREFIX = "note_"
REQUEST_TIMEOUT = 10.0

_log = logging.getLogger(__name__)


class NoteServiceError(Exception):
    """Raised when a note operation against the API or the local store fails."""


class NoteService:
    """Talks to the notes API and keeps an offline copy of notes in local storage."""

    def __init__(
        self,
        storage: LocalStorage,
        api_base: str = API_BASE,
        session: requests.Session | None = None,
    ) -> None:
        self.storage = storage
        self.api_base = api_base.rstrip("/")
        self._session = session if session is not None else requests.Session()

    def _send(
        self,
        method: str,
        path: str,
        action: str,
        ok_statuses: tuple[int, ...],
        note: Note | None = None,
    ) -> Any:
        payload = note.to_json().encode("utf-8") if note is not None else None
        try:
            response = self._session.request(
                method,
                f"{self.api_base}{path}",
                headers={"Content-Type": "application/json"},
                data=payload,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise NoteServiceError(f"Network error: {exc}") from exc
        if response.status_code not in ok_statuses:
            raise NoteServiceError(f"Failed to {action}: HTTP {response.status_code}")
        try:
            return response.json()
        except ValueError as exc:
            raise NoteServiceError(f"Failed to parse response: {exc}") from exc

    @staticmethod
    def _note_from(data: Any) -> Note:
        try:
            return Note.from_dict(data)
        except ValueError as exc:
            raise NoteServiceError(f"Failed to parse response: {exc}") from exc

    def get_notes(self) -> list[Note]:
        """Fetch every note from the API."""
        data = self._send("GET", "/notes", "get notes", (200,))
        if not isinstance(data, list):
            raise NoteServiceError("Failed to parse response: expected a list of notes")
        return [self._note_from(item) for item in data]

    def create_note(self, note: Note) -> Note:
        """Create ``note`` on the API and return the stored version."""
        data = self._send("POST", "/notes", "create note", (200, 201), note)
        return self._note_from(data)

    def update_note(self, note: Note) -> Note:
        """Replace the note with the same id on the API and return the stored version."""
        if note.id is None:
            raise NoteServiceError("Note ID is missing")
        data = self._send("PUT", f"/notes/{note.id}", "update note", (200,), note)
        return self._note_from(data)

    def save_note_locally(self, note: Note) -> str:
        """Store ``note`` offline and return its storage key.

        Notes with an id are also queued for syncing; drafts are not.
        """
        if note.id is not None:
            key = f"{NOTE_KEY_PREFIX}{note.id}"
        else:
            key = f"{NOTE_KEY_PREFIX}draft_{int(time.time() * 1000)}"
        try:
            self.storage.set_item(key, note.to_json())
        except OSError as exc:
            raise NoteServiceError("Failed to save note to localStorage") from exc
        if note.id is not None:
            self.add_to_sync_queue(key)
        return key

    def get_local_notes(self) -> list[Note]:
        """Return the notes kept offline, most recently updated first."""
        notes: list[Note] = []
        for key in self.storage.keys():
            if not key.startswith(NOTE_KEY_PREFIX):
                continue
            raw = self.storage.get_item(key)
            if raw is None:
                continue
            try:
                notes.append(Note.from_json(raw))
            except ValueError as exc:
                _log.warning("Failed to parse note: %s", exc)
        notes.sort(key=lambda note: note.updated_at, reverse=True)
        return notes

    def _read_queue(self) -> list[str] | None:
        raw = self.storage.get_item(SYNC_QUEUE_KEY)
        if raw is None:
            return None
        try:
            queue = json.loads(raw)
        except ValueError as exc:
            raise NoteServiceError(f"Failed to parse sync queue: {exc}") from exc
        if not isinstance(queue, list) or not all(isinstance(key, str) for key in queue):
            raise NoteServiceError("Failed to parse sync queue: expected a list of keys")
        return queue

    def _write_queue(self, queue: list[str]) -> None:
        try:
            self.storage.set_item(SYNC_QUEUE_KEY, json.dumps(queue))
        except OSError as exc:
            raise NoteServiceError("Failed to save sync queue to localStorage") from exc

    def add_to_sync_queue(self, key: str) -> None:
        """Queue the storage key ``key`` for syncing, once."""
        queue = self._read_queue()
        if queue is None:
            queue = [key]
        elif key not in queue:
            queue.append(key)
        self._write_queue(queue)

    def process_sync_queue(self) -> None:
        """Push every queued note to the API, keeping only the ones that failed."""
        queue = self._read_queue()
        if not queue:
            return
        remaining: list[str] = []
        for key in queue:
            raw = self.storage.get_item(key)
            if raw is None:
                continue
            try:
                note = Note.from_json(raw)
            except ValueError as exc:
                raise NoteServiceError(f"Failed to parse note: {exc}") from exc
            try:
                self.update_note(note)
            except NoteServiceError as exc:
                _log.info("Failed to sync note: %s", exc)
                remaining.append(key)
            else:
                _log.info("Successfully synced note: %s", note.id or "unknown")
        self._write_queue(remaining)

    def check_online_status(self) -> bool:
        """Tell whether the API can be reached at all."""
        try:
            self._session.get(f"{self.api_base}/notes", timeout=REQUEST_TIMEOUT)
        except requests.RequestException:
            return False
        return True