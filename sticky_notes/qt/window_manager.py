"""Live Qt windows, addressed by their labels."""
import asyncio
import logging

from PyQt6.QtCore import QPoint, Qt, QTimer

from sticky_notes import roles
from sticky_notes.lifecycle import WindowLifecycle
from sticky_notes.qt.tasks import spawn
from sticky_notes.qt.windows import NoteWindow

logger = logging.getLogger(__name__)

# Focus events caused by raise_all() must not reorder the session.
BATCH_FOCUS_SETTLE_MS = 500


class QtWindowManager:
    def __init__(self, store, bus, session_state, save_delay):
        self.store = store
        self.bus = bus
        self.session_state = session_state
        self.save_delay = save_delay
        self._windows = {}
        self.quitting = False
        self.batch_focusing = False

    def register_dashboard(self, window):
        self._windows[roles.DASHBOARD_LABEL] = window

    def get(self, label):
        return self._windows.get(label)

    def note_windows(self):
        return [w for label, w in self._windows.items() if label != roles.DASHBOARD_LABEL]

    def open(self, label, remember=True):
        window = self._windows.get(label)
        if window is not None:
            self._bring_forward(window)
            return
        role = roles.resolve(label)
        if isinstance(role, roles.Dashboard):
            logger.error("Dashboard window is not registered")
            return

        lifecycle = WindowLifecycle(label, self, self.store, self.bus, self.save_delay)
        window = NoteWindow(lifecycle, self)
        cascade = 25 * (len(self.note_windows()) % 10)
        window.center_on_screen(QPoint(cascade, cascade))
        self._windows[label] = window
        logger.info("Opened window %s", label)
        if remember:
            self.session_state.touch(role.note_id)
        self._bring_forward(window)
        spawn(window.load())

    def focus(self, label):
        window = self._windows.get(label)
        if window is not None:
            self._bring_forward(window)

    def hide(self, label):
        window = self._windows.get(label)
        if window is not None:
            window.hide()

    def destroy(self, label):
        window = self._windows.pop(label, None)
        if window is None:
            return None
        role = roles.resolve(label)
        if isinstance(role, roles.NoteEditor) and not self.quitting:
            self.session_state.forget(role.note_id)
        running_save = window.destroy_window()
        logger.info("Destroyed window %s", label)
        return running_save

    def set_always_on_top(self, label, on_top):
        window = self._windows.get(label)
        if window is not None:
            window.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, on_top)
            window.show()  # Re-show to apply window flag change

    def minimize(self, label):
        window = self._windows.get(label)
        if window is not None:
            window.showMinimized()

    def note_focused(self, note_id):
        if not self.batch_focusing and not self.quitting:
            self.session_state.touch(note_id)

    def restore_session(self, existing_ids):
        """Reopen the notes that were open last time, oldest focus first."""
        for note_id in list(self.session_state.open_notes):
            if note_id in existing_ids:
                self.open(roles.note_label(note_id), remember=False)
            else:
                self.session_state.forget(note_id)

    def raise_all(self):
        """Bring every visible note to the front, keeping the session order."""
        order = {note_id: rank for rank, note_id in enumerate(self.session_state.open_notes)}
        windows = sorted(
            (w for w in self.note_windows() if w.isVisible() or w.isMinimized()),
            key=lambda w: order.get(w.lifecycle.note_id, len(order)),
        )
        if not windows:
            return
        self.batch_focusing = True
        for window in windows:
            window.showNormal()
            window.raise_()
        windows[-1].activateWindow()
        QTimer.singleShot(BATCH_FOCUS_SETTLE_MS, self._end_batch_focus)

    def _end_batch_focus(self):
        self.batch_focusing = False

    async def flush_all(self):
        flushes = [w.lifecycle.persistence.flush_now()
                   for w in self.note_windows() if w.lifecycle.persistence is not None]
        await asyncio.gather(*flushes)

    def _bring_forward(self, window):
        if window.isMinimized():
            window.showNormal()
        window.show()
        window.raise_()
        window.activateWindow()
