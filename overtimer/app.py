"""Main application window for Overtimer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QActionGroup, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QStatusBar, QDialog,
)

from .api.client import HttpSessionStore
from .database.repository import SqlSessionStore
from .sessions.recorder import SessionRecorder
from .sessions.store import SessionRecord, SessionStore
from .settings import Settings, load_settings, save_settings
from .timer.clock import PRESET_MINUTES
from .timer.engine import TimerEngine, TimerMode
from .ui.custom_time_dialog import CustomTimeDialog
from .ui.session_history import SessionHistoryWidget
from .ui.styles import build_stylesheet, get_palette, skin_names
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)


def make_store(settings: Settings) -> SessionStore:
    """Local database unless a server URL is configured."""
    if settings.server_url:
        logger.info("Using session server at %s", settings.server_url)
        return HttpSessionStore(settings.server_url)
    return SqlSessionStore()


class OvertimerApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        store: SessionStore | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Overtimer")
        self.setMinimumSize(480, 420)

        # ── geometry save timer ────────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings & store ──────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self._store: SessionStore = store or make_store(self._settings)

        # ── engine + recorder ─────────────────────────────────────────
        self._timer_engine = TimerEngine(
            self,
            target_seconds=self._settings.target_total_seconds,
            warning_seconds=self._settings.warning_seconds,
        )
        self._recorder = SessionRecorder(self._store, self)
        self._recorder.session_name = self._settings.session_name
        self._recorder.attach(self._timer_engine)

        # ── apply skin ────────────────────────────────────────────────
        self._palette = get_palette(self._settings.skin)
        self.setStyleSheet(build_stylesheet(self._palette))

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(16, 12, 16, 12)
        root_layout.setSpacing(8)

        self._timer_widget = TimerWidget(self._timer_engine, central)
        self._timer_widget.set_session_name(self._settings.session_name)
        self._timer_widget.apply_palette(self._palette)
        root_layout.addWidget(self._timer_widget)

        self._session_history = SessionHistoryWidget(self._store, central)
        self._session_history.apply_palette(self._palette)
        self._session_history.setVisible(self._settings.show_history)
        root_layout.addWidget(self._session_history, 1)

        # Status bar
        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Ready to start")

        self._build_menu_bar()

        # ── wire signals ──────────────────────────────────────────────
        self._timer_widget.session_name_changed.connect(self._on_session_name_changed)
        self._timer_widget.set_time_requested.connect(self._open_custom_time)
        self._timer_engine.mode_changed.connect(self._on_mode_changed)
        self._timer_engine.target_changed.connect(self._on_target_changed)
        self._recorder.saved.connect(self._on_session_saved)
        self._session_history.sessions_changed.connect(self._on_history_changed)

        self._restore_geometry()
        if self._settings.show_history:
            self._session_history.refresh()

    # ══════════════════════════════════════════════════════════════════
    #  MENU BAR
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        timer_menu = menu_bar.addMenu("Timer")

        toggle_action = QAction("Start / Pause", self)
        toggle_action.triggered.connect(self._on_space)
        timer_menu.addAction(toggle_action)

        reset_action = QAction("Reset", self)
        reset_action.triggered.connect(self._timer_engine.reset)
        timer_menu.addAction(reset_action)

        timer_menu.addSeparator()

        custom_action = QAction("Set Time…", self)
        custom_action.setShortcut(QKeySequence("Ctrl+T"))
        custom_action.triggered.connect(self._open_custom_time)
        timer_menu.addAction(custom_action)

        presets_menu = timer_menu.addMenu("Presets")
        for minutes in PRESET_MINUTES:
            action = QAction(f"{minutes} minutes", self)
            action.triggered.connect(
                lambda _=False, m=minutes: self._timer_engine.set_preset(m)
            )
            presets_menu.addAction(action)

        view_menu = menu_bar.addMenu("View")

        self._history_action = QAction("Show History", self)
        self._history_action.setCheckable(True)
        self._history_action.setChecked(self._settings.show_history)
        self._history_action.setShortcut(QKeySequence("Ctrl+H"))
        self._history_action.toggled.connect(self._set_history_visible)
        view_menu.addAction(self._history_action)

        skin_menu = view_menu.addMenu("Skin")
        self._skin_group = QActionGroup(self)
        self._skin_group.setExclusive(True)
        for name in skin_names():
            action = QAction(name.title(), self)
            action.setCheckable(True)
            action.setChecked(name == self._settings.skin)
            action.triggered.connect(lambda _=False, n=name: self._apply_skin(n))
            self._skin_group.addAction(action)
            skin_menu.addAction(action)

    # ══════════════════════════════════════════════════════════════════
    #  SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _on_session_name_changed(self, name: str) -> None:
        self._recorder.session_name = name
        self._settings.session_name = name.strip()
        save_settings(self._settings)

    def _on_mode_changed(self, mode: TimerMode) -> None:
        messages = {
            TimerMode.IDLE: "Ready to start",
            TimerMode.COUNTING_DOWN: "Focus time",
            TimerMode.OVERTIME: "Overtime: the target has passed",
        }
        self._status_bar.showMessage(messages[mode])

    def _on_target_changed(self, target_seconds: int) -> None:
        self._settings.target_minutes, self._settings.target_seconds = divmod(target_seconds, 60)
        save_settings(self._settings)

    def _on_session_saved(self, record: SessionRecord) -> None:
        self._status_bar.showMessage(f"Saved “{record.session_name}”", 4000)
        if self._settings.show_history:
            self._session_history.refresh()

    def _on_history_changed(self) -> None:
        self._status_bar.showMessage("History updated", 4000)

    def _open_custom_time(self) -> None:
        minutes, seconds = divmod(self._timer_engine.target_duration, 60)
        dialog = CustomTimeDialog(minutes, seconds, self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self._timer_engine.set_custom_time(*dialog.values())

    def _set_history_visible(self, visible: bool) -> None:
        self._session_history.setVisible(visible)
        if visible:
            self._session_history.refresh()
        if self._history_action.isChecked() != visible:
            self._history_action.setChecked(visible)
        self._settings.show_history = visible
        save_settings(self._settings)

    def _apply_skin(self, skin: str) -> None:
        self._settings.skin = skin
        self._palette = get_palette(skin)
        self.setStyleSheet(build_stylesheet(self._palette))
        self._timer_widget.apply_palette(self._palette)
        self._session_history.apply_palette(self._palette)
        save_settings(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD SHORTCUTS
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        """Start or pause the timer."""
        if self._timer_widget.name_input_has_focus():
            return
        self._timer_engine.toggle()

    def _on_reset_key(self) -> None:
        if self._timer_widget.name_input_has_focus():
            return
        self._timer_engine.reset()

    def _on_escape(self) -> None:
        """Close the history panel."""
        if self._settings.show_history:
            self._set_history_visible(False)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        self.resize(s.window_width, s.window_height)
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)

    def _save_geometry(self) -> None:
        geo = self.geometry()
        self._settings.window_x = geo.x()
        self._settings.window_y = geo.y()
        self._settings.window_width = geo.width()
        self._settings.window_height = geo.height()
        save_settings(self._settings)

    def _schedule_geometry_save(self) -> None:
        self._geometry_save_timer.start()

    def shutdown(self) -> None:
        """Let queued saves finish.  Called when the application quits."""
        self._recorder.wait_for_pending(5000)
        if isinstance(self._store, HttpSessionStore):
            self._store.close()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space (start/pause), R (reset) and Escape (close history)."""
        key = event.key()
        if event.modifiers() == Qt.KeyboardModifier.NoModifier:
            if key == Qt.Key.Key_Space:
                self._on_space()
                event.accept()
                return
            if key == Qt.Key.Key_R:
                self._on_reset_key()
                event.accept()
                return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)
