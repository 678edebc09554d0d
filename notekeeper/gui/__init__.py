"""
gui — PyQt6 front-end for notekeeper.

Modules
───────
main_window  — MainWindow: note form above a newest-first note list
note_form    — NoteFormPanel
note_list    — NoteListPanel
viewmodels   — pure-Python state containers (no Qt)

Widgets are not imported here so ``viewmodels`` stays usable where
QtWidgets cannot load (headless hosts without GL libraries).
"""
