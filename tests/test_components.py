from cosmiqnotz.components import NoteEditor, render_note_list, render_toolbar
from cosmiqnotz.note import Note


def _note(note_id, title, content="body", updated="2024-01-02T03:04:59Z"):
    return Note.from_dict(
        {
            "id": note_id,
            "title": title,
            "content": content,
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": updated,
            "created_by": "user",
            "is_shared": False,
            "shared_with": [],
            "version": 1,
        }
    )


def test_toolbar_online_and_idle():
    html = render_toolbar(is_syncing=False, is_online=True)
    assert 'class="status-indicator online"' in html
    assert ">Online<" in html
    assert 'class="sync-button">Sync<' in html
    assert "disabled" not in html


def test_toolbar_offline_disables_sync():
    html = render_toolbar(is_syncing=False, is_online=False)
    assert 'class="status-indicator offline"' in html
    assert ">Offline<" in html
    assert 'class="sync-button disabled" disabled' in html


def test_toolbar_while_syncing():
    html = render_toolbar(is_syncing=True, is_online=True)
    assert "Syncing..." in html
    assert 'class="sync-button disabled" disabled' in html
    assert "CosmiqNotz" in html


def test_empty_note_list():
    html = render_note_list([])
    assert "No notes yet. Create one to get started!" in html
    assert "note-item" not in html
    assert "New Note" in html


def test_note_list_keeps_order_and_formats_dates():
    notes = [_note("a", "First"), _note("b", "Second")]
    html = render_note_list(notes)
    assert html.index("First") < html.index("Second")
    assert html.count('class="note-item"') == 2
    assert "Updated: 2024-01-02 03:04" in html
    assert "No notes yet" not in html


def test_note_list_escapes_titles():
    html = render_note_list([_note("a", "<b>bold</b>")])
    assert "&lt;b&gt;bold&lt;/b&gt;" in html
    assert "<b>" not in html


def test_editor_starts_clean_with_note_values():
    note = _note("a", "Title", "Content")
    editor = NoteEditor(note)
    assert (editor.title, editor.content, editor.is_dirty) == ("Title", "Content", False)
    assert 'class="save-button disabled" disabled' in editor.render()


def test_editor_changes_mark_dirty_and_enable_save():
    editor = NoteEditor(_note("a", "Title"))
    editor.change_title("New title")
    assert editor.is_dirty
    html = editor.render()
    assert 'value="New title"' in html
    assert 'class="save-button">Save<' in html


def test_editor_save_hands_over_values_and_clears_dirty():
    editor = NoteEditor(_note("a", "Title", "Content"))
    editor.change_title("T2")
    editor.change_content("C2")
    received = []
    editor.save(lambda title, content: received.append((title, content)))
    assert received == [("T2", "C2")]
    assert editor.is_dirty is False


def test_editor_set_note_resets_only_on_change():
    note = _note("a", "Title", "Content")
    editor = NoteEditor(note)
    editor.change_content("typing")
    editor.set_note(note)
    assert editor.content == "typing"
    assert editor.is_dirty

    other = _note("b", "Other", "More")
    editor.set_note(other)
    assert (editor.title, editor.content, editor.is_dirty) == ("Other", "More", False)


def test_editor_escapes_content():
    editor = NoteEditor(_note("a", 'say "hi"', "<script>x</script>"))
    html = editor.render()
    assert "&lt;script&gt;x&lt;/script&gt;" in html
    assert "<script>" not in html
    assert 'value="say &#34;hi&#34;"' in html