# cosmiqnotz

An offline-first notes package. Notes are kept in a local key-value store,
queued for synchronisation, and pushed to a small REST API when it can be
reached. Two small extras ride along: a moon phase reporter and a
bouncing-balls simulation.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Commands

Start the notes API (routes are served under `/api`; defaults to
`127.0.0.1:8000`):

```
cosmiqnotz-api
cosmiqnotz-api --host 0.0.0.0 --port 8080
```

Print a date and the phase of the moon on it (today in UTC when no date is
given):

```
cosmiqnotz-moon-phase
cosmiqnotz-moon-phase 2024-01-01
```

## Library use

### Notes (`cosmiqnotz.note`)

```python
from cosmiqnotz.note import Note

note = Note.create("Groceries", "milk, bread", "current_user")
note.update("Groceries", "milk, bread, eggs")   # bumps version and updated_at
text = note.to_json()
same = Note.from_json(text)
```

`Note.to_dict()` and `Note.from_dict()` give the plain-dictionary form used
on the wire. Timestamps are RFC 3339 strings in UTC ending in `Z`; the `id`
field is left out while a note has none. `from_dict` raises `ValueError` for
missing fields or fields of the wrong type.

### Local storage (`cosmiqnotz.storage`)

`LocalStorage` maps string keys to string values in insertion order. Given a
path, it loads that JSON file at start and rewrites it atomically on every
change; without one it lives in memory only. It offers `get_item`,
`set_item`, `remove_item`, `keys()` and `len()`.

### Note service and sync (`cosmiqnotz.note_service`)

```python
from cosmiqnotz.storage import LocalStorage
from cosmiqnotz.note_service import NoteService, NoteServiceError

storage = LocalStorage("notes.json")
service = NoteService(storage, "http://localhost:8000/api", None)

key = service.save_note_locally(note)  # "note_<id>" or "note_draft_<millis>"
notes = service.get_local_notes()      # newest first
if service.check_online_status():
    service.process_sync_queue()       # failed notes stay queued
```

- `get_notes`, `create_note` and `update_note` talk to the API.
- `save_note_locally` stores a note; notes that have an id are also added
  to the sync queue (kept under the `sync_queue` key), drafts are not.
- `process_sync_queue` sends each queued note with `update_note` and keeps
  only the keys whose upload failed.
- `check_online_status` is true when any answer comes back from
  `<api_base>/notes`.

Errors from the API or the store are raised as `NoteServiceError`.

### The REST API in your own process (`cosmiqnotz.api`)

```python
from cosmiqnotz.api import NoteStore, create_app

app = create_app(NoteStore())
client = app.test_client()
client.get("/api/notes")
```

Endpoints: `GET /api/notes`, `GET /api/notes/<id>`, `POST /api/notes`
(assigns a fresh id and sets `updated_at`), `PUT /api/notes/<id>` (400 when
the body carries a different id, 404 when the note is unknown),
`DELETE /api/notes/<id>` (204, or 404), and CORS preflight `OPTIONS` on every
path under `/api`. Every response carries the CORS headers. Malformed JSON is
answered with 400, a body that is not a valid note with 422.

### Application state (`cosmiqnotz.app`)

`App` holds the note list, the selected note, the loading, syncing and
online flags, and the last error. Its methods (`load_notes`, `select_note`,
`create_note`, `save_note`, `sync_notes`, `check_online`, `set_online`,
`report_error`) drive a `NoteService`; coming back online starts a sync.
`view()` renders the page as HTML using the pieces from
`cosmiqnotz.components` (`render_toolbar`, `render_note_list`, and
`NoteEditor`, which tracks the title and content being edited and a dirty
flag).

### Desktop helpers (`cosmiqnotz.commands`)

- `check_api_status(base_url)`: true when `<base_url>/notes` answers a HEAD
  request with a 2xx or 3xx status.
- `export_notes(path, base_url)`: writes the body of `GET <base_url>/notes`
  to `path`.
- `import_notes(path, base_url)`: posts the file's JSON to
  `<base_url>/notes/import`.
- `start_surrealdb()`: starts the external `surreal` server unless `pgrep`
  finds it running, and on a fresh `data.db` imports
  `migrations/init.surql` from the current directory.
- `start_api_server()`: starts `python -m cosmiqnotz.api` unless it is
  already running.

Failures raise `CommandError`.

### Extras

```python
import datetime
from cosmiqnotz.moon_phase import moon_phase, phase_description

phase = moon_phase(datetime.date(2024, 1, 1))   # fraction of the lunar cycle
print(phase_description(phase))                 # (name, emoji)

from cosmiqnotz.balls import World
world = World(800, 600, 20, None)
world.update()
```

`World.draw(ctx)` and `Ball.draw(ctx)` draw onto any object offering
`begin_path`, `set_fill_style`, `arc`, `fill` and `clear_rect`.

## What this package does not do

- There is no interactive user interface. `App.view()` returns HTML text,
  but nothing serves it or wires its buttons to the `App` methods; the
  application is driven by calling those methods.
- The API server keeps notes in memory only; they are lost when it stops.
  It is not backed by a database, even though `start_surrealdb` can start
  one.
- The API has no `/notes/import` endpoint, so `import_notes` only works
  against a server that provides one.
- No canvas or window is supplied for the bouncing balls; the caller
  provides the drawing context.