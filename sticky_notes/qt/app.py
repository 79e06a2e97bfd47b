import asyncio
import logging
import os
import sys

import qasync
from PIL import Image, ImageDraw
from pynput import keyboard
from PyQt6.QtCore import QObject, QUrl, pyqtSignal
from PyQt6.QtGui import QAction, QDesktopServices, QIcon
from PyQt6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from sticky_notes import roles
from sticky_notes.bus import RefreshBus
from sticky_notes.dashboard import DashboardAggregator
from sticky_notes.lifecycle import WindowLifecycle
from sticky_notes.qt.tasks import spawn
from sticky_notes.qt.window_manager import QtWindowManager
from sticky_notes.qt.windows import DashboardWindow
from sticky_notes.session_state import SessionState
from sticky_notes.store import FileNoteStore

logger = logging.getLogger(__name__)


def resource_path(relative_path):
    """ Get absolute path to resource, works for dev and for PyInstaller """
    base_path = getattr(sys, "_MEIPASS", os.path.abspath("."))
    return os.path.join(base_path, relative_path)


class HotkeySignaler(QObject):
    """Helper class to emit Qt signals from the hotkey thread"""
    create_note_signal = pyqtSignal()


class StickyNotesApp:
    def __init__(self, settings):
        self.settings = settings
        self.settings.data_dir.mkdir(parents=True, exist_ok=True)

        # --- Qt App Initialization ---
        self.app = QApplication(sys.argv)
        self.app.setQuitOnLastWindowClosed(False)
        self.loop = qasync.QEventLoop(self.app)
        asyncio.set_event_loop(self.loop)
        self.app_icon = self.create_icon()
        self.app.setWindowIcon(self.app_icon)

        # --- Services ---
        self.bus = RefreshBus()
        self.store = FileNoteStore(settings.notes_dir, settings.preview_length)
        self.session_state = SessionState(settings.state_file)
        self.windows = QtWindowManager(self.store, self.bus, self.session_state, settings.save_delay)
        self.dashboard = DashboardAggregator(self.store, self.bus, self.windows)
        self.manager = DashboardWindow(WindowLifecycle(roles.DASHBOARD_LABEL, self.windows), self.dashboard)
        self.windows.register_dashboard(self.manager)
        self._quit_requested = asyncio.Event()
        self.app.aboutToQuit.connect(self._quit_requested.set)

        # --- Global Hotkey Setup ---
        self.hotkey_listener = None
        self.hotkey_signaler = HotkeySignaler()
        self.hotkey_signaler.create_note_signal.connect(self.create_new_note)
        self.start_hotkey_listener()

        self.init_tray_icon()

    def start_hotkey_listener(self):
        """Start the global hotkey listener in a background thread"""
        try:
            hotkey = keyboard.HotKey(
                keyboard.HotKey.parse(self.settings.hotkey),
                self.hotkey_signaler.create_note_signal.emit
            )
        except ValueError:
            logger.error("Invalid hotkey %r, global shortcut disabled", self.settings.hotkey)
            return

        def for_canonical(f):
            return lambda k: f(listener.canonical(k))

        listener = keyboard.Listener(
            on_press=for_canonical(hotkey.press),
            on_release=for_canonical(hotkey.release)
        )
        listener.daemon = True
        listener.start()
        self.hotkey_listener = listener

    def create_icon(self):
        icon_path = resource_path("icon.png")
        if not os.path.exists(icon_path):
            icon_path = str(self.settings.data_dir / "icon.png")
            if not os.path.exists(icon_path):
                img = Image.new('RGB', (64, 64), color='black')
                d = ImageDraw.Draw(img)
                d.text((10, 10), "SN", fill='white')
                img.save(icon_path)
        return QIcon(icon_path)

    def init_tray_icon(self):
        self.tray_icon = QSystemTrayIcon(self.app_icon, self.app)
        self.tray_icon.setToolTip("Sticky Notes")

        menu = QMenu()
        new_note_action = QAction("New Note", self.app)
        dashboard_action = QAction("Open Dashboard", self.app)
        open_data_action = QAction("Open Data Folder", self.app)
        quit_action = QAction("Quit", self.app)

        new_note_action.triggered.connect(self.create_new_note)
        dashboard_action.triggered.connect(self.show_manager)
        open_data_action.triggered.connect(self.open_data_folder)
        quit_action.triggered.connect(self.quit_app)

        menu.addAction(new_note_action)
        menu.addAction(dashboard_action)
        menu.addAction(open_data_action)
        menu.addSeparator()
        menu.addAction(quit_action)
        self.tray_menu = menu
        self.tray_icon.setContextMenu(menu)
        self.tray_icon.activated.connect(self.on_tray_activated)
        self.tray_icon.show()

    def on_tray_activated(self, reason):
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self.windows.raise_all()
        elif reason == QSystemTrayIcon.ActivationReason.DoubleClick:
            self.show_manager()

    def show_manager(self):
        self.windows.open(roles.DASHBOARD_LABEL)
        self.bus.publish()

    def open_data_folder(self):
        QDesktopServices.openUrl(QUrl.fromLocalFile(str(self.settings.data_dir)))

    def create_new_note(self):
        spawn(self.dashboard.create_note())

    def quit_app(self):
        self._quit_requested.set()

    async def restore_open_notes(self):
        try:
            existing = {summary.note_id for summary in await self.store.list_all()}
        except Exception:
            logger.exception("Could not list notes, skipping session restore")
            existing = set()
        self.windows.restore_session(existing)
        if not self.windows.note_windows():
            await self.dashboard.create_note()

    async def main(self):
        self.bus.start()
        await self.dashboard.start()
        await self.restore_open_notes()
        await self._quit_requested.wait()
        await self.shutdown()

    async def shutdown(self):
        """Saves all open notes before exiting."""
        logger.info("Shutting down")
        self.windows.quitting = True
        await self.windows.flush_all()
        self.dashboard.stop()
        await self.bus.close()
        if self.hotkey_listener is not None:
            self.hotkey_listener.stop()
        self.tray_icon.hide()

    def run(self):
        with self.loop:
            self.loop.run_until_complete(self.main())
        return 0
