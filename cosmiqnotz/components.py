"""HTML views for the toolbar, the note list and the note editor."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from markupsafe import Markup

from cosmiqnotz.note import Note

_DISABLED = Markup(" disabled")


def _classes(*names: str | None) -> str:
    return " ".join(name for name in names if name)


def render_toolbar(is_syncing: bool, is_online: bool) -> Markup:
    """Render the top bar with the online indicator and the sync button."""
    blocked = is_syncing or not is_online
    return Markup(
        '<div class="toolbar">'
        '<div class="logo"><h1>CosmiqNotz</h1></div>'
        '<div class="actions">'
        '<div class="{status_classes}">{status}</div>'
        '<button class="{button_classes}"{disabled}>{label}</button>'
        "</div>"
        "</div>"
    ).format(
        status_classes=_classes("status-indicator", "online" if is_online else "offline"),
        status="Online" if is_online else "Offline",
        button_classes=_classes("sync-button", "disabled" if blocked else None),
        disabled=_DISABLED if blocked else Markup(""),
        label="Syncing..." if is_syncing else "Sync",
    )


def _render_note_item(index: int, note: Note) -> Markup:
    return Markup(
        '<div class="note-item" data-index="{index}">'
        '<h3 class="note-title">{title}</h3>'
        '<p class="note-date">{date}</p>'
        "</div>"
    ).format(
        index=index,
        title=note.title,
        date=f"Updated: {note.updated_at:%Y-%m-%d %H:%M}",
    )


def render_note_list(notes: Iterable[Note]) -> Markup:
    """Render the side list of notes with its "New Note" button."""
    items = [_render_note_item(index, note) for index, note in enumerate(notes)]
    if items:
        body = Markup("").join(items)
    else:
        body = Markup(
            '<div class="empty-list">'
            "<p>No notes yet. Create one to get started!</p>"
            "</div>"
        )
    return Markup(
        '<div class="note-list">'
        '<div class="note-list-header">'
        "<h2>Notes</h2>"
        '<button class="create-button">New Note</button>'
        "</div>"
        '<div class="note-list-items">{body}</div>'
        "</div>"
    ).format(body=body)


class NoteEditor:
    """Editing state for one note: the title and content being typed and a dirty flag."""

    def __init__(self, note: Note) -> None:
        self.note = note
        self.title = note.title
        self.content = note.content
        self.is_dirty = False

    def set_note(self, note: Note) -> None:
        """Show ``note``; edits are discarded only when the note actually changed."""
        if note == self.note:
            return
        self.note = note
        self.title = note.title
        self.content = note.content
        self.is_dirty = False

    def change_title(self, title: str) -> None:
        """Record a new title typed by the user."""
        self.title = title
        self.is_dirty = True

    def change_content(self, content: str) -> None:
        """Record new content typed by the user."""
        self.content = content
        self.is_dirty = True

    def save(self, on_save: Callable[[str, str], object]) -> None:
        """Hand the current title and content to ``on_save`` and clear the dirty flag."""
        on_save(self.title, self.content)
        self.is_dirty = False

    def render(self) -> Markup:
        """Render the editor form."""
        blocked = not self.is_dirty
        return Markup(
            '<div class="note-editor">'
            '<div class="editor-header">'
            '<input type="text" class="title-input" placeholder="Note title" value="{title}">'
            '<button class="{button_classes}"{disabled}>Save</button>'
            "</div>"
            '<div class="editor-content">'
            '<textarea class="content-textarea" placeholder="Write your note here...">'
            "{content}</textarea>"
            "</div>"
            "</div>"
        ).format(
            title=self.title,
            button_classes=_classes("save-button", "disabled" if blocked else None),
            disabled=_DISABLED if blocked else Markup(""),
            content=self.content,
        )