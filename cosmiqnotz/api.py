"""HTTP API serving notes from an in-memory store."""

from __future__ import annotations

import argparse
import json
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone

from flask import Flask, Response, abort, request

from cosmiqnotz.note import Note

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Credentials": "true",
}


def _copy(note: Note) -> Note:
    return replace(note, shared_with=list(note.shared_with))


class NoteStore:
    """A thread-safe in-memory table of notes keyed by id."""

    def __init__(self) -> None:
        self._notes: dict[str, Note] = {}
        self._lock = threading.Lock()

    def select_all(self) -> list[Note]:
        """Return every stored note."""
        with self._lock:
            return [_copy(note) for note in self._notes.values()]

    def select(self, note_id: str) -> Note | None:
        """Return the note with ``note_id``, or None."""
        with self._lock:
            note = self._notes.get(note_id)
            return _copy(note) if note is not None else None

    def create(self, note: Note) -> Note:
        """Store ``note`` under a fresh id and return the stored note."""
        stored = replace(note, id=uuid.uuid4().hex, shared_with=list(note.shared_with))
        with self._lock:
            self._notes[stored.id] = stored
        return _copy(stored)

    def update(self, note_id: str, note: Note) -> Note | None:
        """Replace the note with ``note_id``; None when there is none."""
        stored = replace(note, id=note_id, shared_with=list(note.shared_with))
        with self._lock:
            if note_id not in self._notes:
                return None
            self._notes[note_id] = stored
        return _copy(stored)

    def delete(self, note_id: str) -> bool:
        """Remove the note with ``note_id``; tell whether it existed."""
        with self._lock:
            return self._notes.pop(note_id, None) is not None


def _json_response(payload: str) -> Response:
    return Response(payload, status=200, mimetype="application/json")


def _read_note() -> Note:
    try:
        data = json.loads(request.get_data(as_text=True))
    except ValueError:
        abort(400)
    try:
        return Note.from_dict(data)
    except ValueError:
        abort(422)


def create_app(store: NoteStore | None = None) -> Flask:
    """Build the web application serving notes under ``/api``."""
    store = store if store is not None else NoteStore()
    app = Flask(__name__)

    @app.before_request
    def _preflight():
        if request.method == "OPTIONS" and (
            request.path == "/api" or request.path.startswith("/api/")
        ):
            return Response(status=204)
        return None

    @app.after_request
    def _cors(response: Response) -> Response:
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response

    @app.get("/api/notes")
    def get_notes():
        return _json_response(
            json.dumps([note.to_dict() for note in store.select_all()], ensure_ascii=False)
        )

    @app.get("/api/notes/<note_id>")
    def get_note(note_id: str):
        note = store.select(note_id)
        if note is None:
            abort(404)
        return _json_response(note.to_json())

    @app.post("/api/notes")
    def create_note():
        note = _read_note()
        now = datetime.now(timezone.utc)
        if note.created_at.timestamp() == 0:
            note.created_at = now
        note.updated_at = now
        return _json_response(store.create(note).to_json())

    @app.put("/api/notes/<note_id>")
    def update_note(note_id: str):
        note = _read_note()
        if note.id is None:
            note.id = note_id
        elif note.id != note_id:
            abort(400)
        note.updated_at = datetime.now(timezone.utc)
        updated = store.update(note_id, note)
        if updated is None:
            abort(404)
        return _json_response(updated.to_json())

    @app.delete("/api/notes/<note_id>")
    def delete_note(note_id: str):
        if not store.delete(note_id):
            abort(404)
        return Response(status=204)

    return app


def main(argv: list[str] | None = None) -> int:
    """Run the notes API server."""
    parser = argparse.ArgumentParser(description="Serve the notes API.")
    parser.add_argument("--host", default="127.0.0.1", help="address to listen on")
    parser.add_argument("--port", type=int, default=8000, help="port to listen on")
    args = parser.parse_args(argv)
    create_app().run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())