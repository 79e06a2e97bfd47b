from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QPlainTextEdit


class MarkdownEditor(QPlainTextEdit):
    """Plain markdown source editor that reports every change with the full text."""

    content_changed = pyqtSignal(str)

    def __init__(self, initial_value="", parent=None):
        super().__init__(parent)
        self.setPlainText(initial_value)
        self.setPlaceholderText("Write something...")
        self.setFrameStyle(0)
        font = QFont("monospace")
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.setFont(font)
        # Connected after the initial text so loading is not reported as an edit.
        self.textChanged.connect(self._emit_content)

    def _emit_content(self):
        self.content_changed.emit(self.toPlainText())
