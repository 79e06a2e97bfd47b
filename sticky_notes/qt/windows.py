from PyQt6.QtCore import QEvent, QPoint, Qt
from PyQt6.QtGui import QAction, QGuiApplication
from PyQt6.QtWidgets import (QHBoxLayout, QLabel, QLineEdit, QListWidget, QListWidgetItem,
                             QMainWindow, QMenu, QMessageBox, QPushButton, QVBoxLayout, QWidget)

from sticky_notes.lifecycle import EditorState
from sticky_notes.qt.editor import MarkdownEditor
from sticky_notes.qt.tasks import spawn

NOTE_COLOR = "#FFFF99"


def preview_title(preview):
    first_line = preview.strip().split('\n')[0] if preview.strip() else ""
    if not first_line:
        return "(empty note)"
    return first_line[:40] + ('...' if len(first_line) > 40 else '')


class NoteWindow(QWidget):
    """
    A frameless floating window editing one note.
    """
    def __init__(self, lifecycle, window_manager):
        super().__init__()
        self.lifecycle = lifecycle
        self.window_manager = window_manager
        self.editor = None
        self._drag_offset = None
        self.init_ui()

    def init_ui(self):
        # --- Window Setup ---
        self.setWindowTitle("Sticky Note")
        self.setWindowFlags(Qt.WindowType.FramelessWindowHint | Qt.WindowType.Tool)
        self.resize(300, 300)

        self.main_layout = QVBoxLayout()
        self.main_layout.setContentsMargins(5, 5, 5, 5)
        self.setLayout(self.main_layout)

        # Top bar doubles as the drag handle
        control_layout = QHBoxLayout()
        self.drag_label = QLabel("⋮⋮")
        self.drag_label.setCursor(Qt.CursorShape.SizeAllCursor)
        control_layout.addWidget(self.drag_label)
        control_layout.addStretch()

        self.pin_button = QPushButton("📌")
        self.pin_button.setCheckable(True)
        self.pin_button.setToolTip("Pin/Unpin")
        self.minimize_button = QPushButton("—")
        self.minimize_button.setToolTip("Minimize")
        self.close_button = QPushButton("✕")
        self.close_button.setToolTip("Close")

        control_layout.addWidget(self.pin_button)
        control_layout.addWidget(self.minimize_button)
        control_layout.addWidget(self.close_button)
        self.main_layout.addLayout(control_layout)

        self.loading_label = QLabel("Loading...")
        self.loading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.main_layout.addWidget(self.loading_label)

        self.apply_styles()

        self.pin_button.clicked.connect(self.toggle_pin)
        self.minimize_button.clicked.connect(self.lifecycle.minimize)
        self.close_button.clicked.connect(self.close)

    def apply_styles(self):
        color = NOTE_COLOR
        r, g, b = tuple(int(color.lstrip('#')[i:i+2], 16) for i in (0, 2, 4))
        hover_color = f"#{max(0, r - 20):02x}{max(0, g - 20):02x}{max(0, b - 20):02x}"
        self.setStyleSheet(f"""
            NoteWindow, QWidget {{ background-color: {color}; }}
            QPlainTextEdit {{ background-color: {color}; border: none; }}
            QPushButton {{
                background-color: transparent;
                border: none;
                border-radius: 3px;
                padding: 4px 8px;
                color: #555;
                font-size: 11px;
            }}
            QPushButton:hover {{ background-color: {hover_color}; }}
            QPushButton:checked {{ background-color: rgba(0, 0, 0, 0.15); }}
            QLabel {{ color: #888; font-size: 10px; }}
        """)

    async def load(self):
        content = await self.lifecycle.load()
        if self.lifecycle.state is not EditorState.EDITING:
            return
        self.main_layout.removeWidget(self.loading_label)
        self.loading_label.deleteLater()
        self.editor = MarkdownEditor(content)
        self.editor.content_changed.connect(self.lifecycle.on_edit)
        self.main_layout.addWidget(self.editor)
        self.editor.setFocus()

    def toggle_pin(self):
        pinned = self.lifecycle.toggle_pin()
        self.pin_button.setText("📍" if pinned else "📌")
        self.pin_button.setChecked(pinned)

    def destroy_window(self):
        """Tear down without saving; any flush has already happened."""
        running_save = self.lifecycle.abandon()
        self.close()
        self.deleteLater()
        return running_save

    # --- Qt events ---

    def closeEvent(self, event):
        if self.lifecycle.state is EditorState.DESTROYED:
            super().closeEvent(event)
            return
        # Destroyed by the lifecycle once the pending edit is on disk.
        event.ignore()
        spawn(self.lifecycle.close())

    def changeEvent(self, event):
        if event.type() == QEvent.Type.ActivationChange and self.isActiveWindow():
            self.window_manager.note_focused(self.lifecycle.note_id)
        super().changeEvent(event)

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self._drag_offset = event.globalPosition().toPoint() - self.frameGeometry().topLeft()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._drag_offset is not None and event.buttons() & Qt.MouseButton.LeftButton:
            self.move(event.globalPosition().toPoint() - self._drag_offset)
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        self._drag_offset = None
        super().mouseReleaseEvent(event)

    def center_on_screen(self, offset=QPoint(0, 0)):
        screen_center = QGuiApplication.primaryScreen().availableGeometry().center()
        self.move(screen_center - self.rect().center() + offset)


class DashboardWindow(QMainWindow):
    """
    Lists every note. Closing it only hides it; the app lives in the tray.
    """
    def __init__(self, lifecycle, aggregator):
        super().__init__()
        self.lifecycle = lifecycle
        self.aggregator = aggregator
        self.summaries = []
        self.init_ui()
        self.aggregator.add_listener(self.set_summaries)

    def init_ui(self):
        self.setWindowTitle("Sticky Notes")
        self.setGeometry(0, 0, 400, 500)
        screen_center = QGuiApplication.primaryScreen().availableGeometry().center()
        self.move(screen_center - self.frameGeometry().center())

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)

        header = QLabel("Sticky Notes")
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        header.setStyleSheet("background-color: #333; color: white; font-size: 16px; font-weight: bold; padding: 10px;")
        main_layout.addWidget(header)

        btn_layout = QHBoxLayout()
        self.new_note_btn = QPushButton("+ New Note")
        self.new_note_btn.setStyleSheet("background-color: #4CAF50; color: white;")
        delete_note_btn = QPushButton("Delete Note")
        delete_note_btn.setStyleSheet("background-color: #f44336; color: white;")
        btn_layout.addWidget(self.new_note_btn)
        btn_layout.addWidget(delete_note_btn)
        main_layout.addLayout(btn_layout)

        search_layout = QHBoxLayout()
        search_layout.addWidget(QLabel("Search:"))
        self.search_entry = QLineEdit()
        search_layout.addWidget(self.search_entry)
        main_layout.addLayout(search_layout)

        self.notes_listbox = QListWidget()
        self.notes_listbox.setSelectionMode(QListWidget.SelectionMode.ExtendedSelection)
        self.notes_listbox.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        main_layout.addWidget(self.notes_listbox)

        self.new_note_btn.clicked.connect(self.create_new_note)
        delete_note_btn.clicked.connect(self.delete_selected_notes)
        self.search_entry.textChanged.connect(self.refresh_list)
        self.notes_listbox.itemDoubleClicked.connect(self.on_note_double_click)
        self.notes_listbox.customContextMenuRequested.connect(self.show_list_context_menu)

        new_note_action = QAction(self)
        new_note_action.setShortcut("Ctrl+Shift+N")
        new_note_action.triggered.connect(self.create_new_note)
        self.addAction(new_note_action)

    def set_summaries(self, summaries):
        self.summaries = summaries
        self.refresh_list()

    def refresh_list(self):
        self.notes_listbox.clear()
        search_query = self.search_entry.text().lower()
        for summary in self.summaries:
            if search_query and search_query not in summary.preview.lower():
                continue
            item = QListWidgetItem(preview_title(summary.preview))
            item.setToolTip(summary.preview)
            item.setData(Qt.ItemDataRole.UserRole, summary.note_id)
            self.notes_listbox.addItem(item)

    def create_new_note(self):
        spawn(self._create_new_note())

    async def _create_new_note(self):
        self.new_note_btn.setEnabled(False)
        try:
            await self.aggregator.create_note()
        finally:
            self.new_note_btn.setEnabled(True)

    def on_note_double_click(self, item):
        self.aggregator.open_note(item.data(Qt.ItemDataRole.UserRole))

    def get_selected_note_ids(self):
        return [item.data(Qt.ItemDataRole.UserRole) for item in self.notes_listbox.selectedItems()]

    def delete_selected_notes(self):
        note_ids = self.get_selected_note_ids()
        if not note_ids:
            QMessageBox.warning(self, "Select Note", "Please select one or more notes to delete.")
            return
        if self.confirm_delete(f"Delete {len(note_ids)} selected note(s)?"):
            spawn(self._delete_notes(note_ids))

    async def _delete_notes(self, note_ids):
        for note_id in note_ids:
            await self.aggregator.delete_note(note_id)

    def show_list_context_menu(self, pos):
        selected_ids = self.get_selected_note_ids()
        if not selected_ids:
            return

        menu = QMenu()
        open_action = QAction(f"Open {len(selected_ids)} Note(s)", self)
        delete_action = QAction(f"Delete {len(selected_ids)} Note(s)", self)
        open_action.triggered.connect(lambda: [self.aggregator.open_note(i) for i in selected_ids])
        delete_action.triggered.connect(self.delete_selected_notes)
        menu.addAction(open_action)
        menu.addAction(delete_action)
        menu.exec(self.notes_listbox.mapToGlobal(pos))

    def confirm_delete(self, message):
        reply = QMessageBox.question(self, "Confirm Delete", message,
                                     QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                                     QMessageBox.StandardButton.No)
        return reply == QMessageBox.StandardButton.Yes

    def closeEvent(self, event):
        event.ignore()
        spawn(self.lifecycle.close())
