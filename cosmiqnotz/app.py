"""The notes application: state, the actions that change it, and its view."""

from __future__ import annotations

from dataclasses import replace

from markupsafe import Markup

from cosmiqnotz.components import NoteEditor, render_note_list, render_toolbar
from cosmiqnotz.note import Note
from cosmiqnotz.note_service import NoteService, NoteServiceError

DEFAULT_USER_ID = "current_user"
UNTITLED_TITLE = "Untitled Note"


def _clone(note: Note) -> Note:
    return replace(note, shared_with=list(note.shared_with))


def _same_id(first: Note, second: Note) -> bool:
    return first.id is not None and second.id is not None and first.id == second.id


class App:
    """Holds the note list, the selection and the online/sync state."""

    def __init__(self, service: NoteService) -> None:
        self.service = service
        self.notes: list[Note] = []
        self.selected_note: Note | None = None
        self.is_loading = True
        self.is_syncing = False
        self.is_online = False
        self.error: str | None = None
        self._editor: NoteEditor | None = None
        self.load_notes()
        self.check_online()

    def _upsert(self, note: Note) -> None:
        index = next(
            (position for position, known in enumerate(self.notes) if _same_id(known, note)),
            None,
        )
        if index is None:
            self.notes.insert(0, note)
        else:
            self.notes[index] = note

    def load_notes(self) -> None:
        """Load notes from the API, falling back to the offline copy."""
        self.is_loading = True
        try:
            notes = self.service.get_notes()
        except NoteServiceError:
            try:
                notes = self.service.get_local_notes()
            except NoteServiceError as exc:
                self.is_loading = False
                self.error = str(exc)
                return
        self.is_loading = False
        self.notes = notes
        if self.selected_note is None and self.notes:
            self.selected_note = _clone(self.notes[0])

    def select_note(self, note: Note) -> None:
        """Make ``note`` the one shown in the editor."""
        self.selected_note = note

    def create_note(self) -> None:
        """Start a new untitled note and store it online or offline."""
        new_note = Note.create(UNTITLED_TITLE, "", DEFAULT_USER_ID)
        self.selected_note = _clone(new_note)
        if self.is_online:
            self.save_note(new_note.title, new_note.content)
            return
        try:
            self.service.save_note_locally(new_note)
        except NoteServiceError as exc:
            self.error = str(exc)
        else:
            self.notes.insert(0, new_note)

    def save_note(self, title: str, content: str) -> None:
        """Apply an edit to the selected note, store it offline and, when online, on the API."""
        if self.selected_note is None:
            return
        note = _clone(self.selected_note)
        note.update(title, content)

        try:
            self.service.save_note_locally(note)
        except NoteServiceError as exc:
            self.error = str(exc)
        else:
            self._upsert(_clone(note))
            self.selected_note = _clone(note)

        if not self.is_online:
            return
        try:
            if note.id is not None:
                saved = self.service.update_note(note)
            else:
                saved = self.service.create_note(note)
        except NoteServiceError as exc:
            self.error = str(exc)
            return
        self._upsert(_clone(saved))
        self.selected_note = saved

    def sync_notes(self) -> None:
        """Push queued offline changes to the API and reload the notes."""
        if not self.is_online or self.is_syncing:
            return
        self.is_syncing = True
        try:
            self.service.process_sync_queue()
        except NoteServiceError as exc:
            self.error = str(exc)
            return
        finally:
            self.is_syncing = False
        self.load_notes()

    def check_online(self) -> None:
        """Probe the API and record whether it can be reached."""
        self.set_online(self.service.check_online_status())

    def set_online(self, is_online: bool) -> None:
        """Record the online state; coming back online starts a sync."""
        was_offline = not self.is_online
        self.is_online = is_online
        if is_online and was_offline:
            self.sync_notes()

    def report_error(self, error: str) -> None:
        """Set the message shown in the error notification."""
        self.error = error

    def _content_area(self) -> Markup:
        if self.is_loading:
            return Markup('<div class="loading">Loading...</div>')
        if self.selected_note is not None:
            if self._editor is None:
                self._editor = NoteEditor(self.selected_note)
            else:
                self._editor.set_note(self.selected_note)
            return self._editor.render()
        return Markup(
            '<div class="empty-state"><h2>Select a note or create a new one</h2></div>'
        )

    def _error_area(self) -> Markup:
        if self.error is None:
            return Markup("")
        return Markup(
            '<div class="error-notification"><p>{error}</p>'
            '<button class="dismiss-error">\u00d7</button></div>'
        ).format(error=self.error)

    @property
    def editor(self) -> NoteEditor | None:
        """The editor for the selected note, as of the last view."""
        return self._editor

    def view(self) -> Markup:
        """Render the whole application."""
        return Markup(
            '<div class="app">{toolbar}'
            '<div class="main-content">{note_list}'
            '<div class="content-area">{content}</div>'
            "</div>"
            "{error}"
            "</div>"
        ).format(
            toolbar=render_toolbar(self.is_syncing, self.is_online),
            note_list=render_note_list(self.notes),
            content=self._content_area(),
            error=self._error_area(),
        )