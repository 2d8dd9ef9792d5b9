"""Session history panel: the latest finished runs, newest first.

Read-only apart from deleting: each row has a delete button and the
header has "Clear all".  Both ask for confirmation because neither can
be undone.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame, QPushButton,
    QScrollArea, QSizePolicy, QMessageBox,
)

from ..sessions.errors import SessionStoreError
from ..sessions.store import SessionRecord, SessionStore
from ..timer.clock import format_duration

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


def _hex_to_rgba(hex_color: str, alpha: float) -> str:
    """Convert '#RRGGBB' to 'rgba(R, G, B, alpha)'."""
    h = hex_color.lstrip("#")
    r, g, b = int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    return f"rgba({r}, {g}, {b}, {alpha})"


def outcome_tag(record: SessionRecord) -> str:
    """Short label for how a run ended."""
    if record.has_overtime:
        return f"+{format_duration(record.extra_time_seconds)} overtime"
    if record.reached_target:
        return "completed"
    return "stopped early"


class SessionHistoryWidget(QWidget):
    """Lists stored sessions and lets the user delete them."""

    sessions_changed = pyqtSignal()

    def __init__(self, store: SessionStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._store = store
        self._palette: dict[str, str] = {}
        self._records: list[SessionRecord] = []
        self._build_ui()

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 0)
        layout.setSpacing(6)

        header_row = QHBoxLayout()
        header = QLabel("History")
        header_row.addWidget(header)
        header_row.addStretch()
        self._clear_btn = QPushButton("Clear all")
        self._clear_btn.setObjectName("dangerButton")
        self._clear_btn.clicked.connect(lambda: self.clear_all())
        header_row.addWidget(self._clear_btn)
        layout.addLayout(header_row)
        self._header = header

        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        body = QWidget()
        self._rows_container = QVBoxLayout(body)
        self._rows_container.setSpacing(4)
        self._rows_container.setContentsMargins(0, 0, 0, 0)
        self._rows_container.addStretch()
        scroll.setWidget(body)
        layout.addWidget(scroll)

        self._empty_label = QLabel("No sessions yet. Finish a run to see it here.")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._empty_label)

        self._row_widgets: list[QWidget] = []

        self._apply_styles()

    # ── store ─────────────────────────────────────────────────────────

    @property
    def records(self) -> list[SessionRecord]:
        return list(self._records)

    def set_store(self, store: SessionStore) -> None:
        self._store = store
        self.refresh()

    def refresh(self) -> None:
        """Reload sessions from the store."""
        for w in self._row_widgets:
            w.setParent(None)
            w.deleteLater()
        self._row_widgets.clear()

        try:
            self._records = self._store.list_sessions(HISTORY_LIMIT)
        except SessionStoreError as exc:
            logger.warning("Could not load session history: %s", exc)
            self._records = []
            self._empty_label.setText("History is unavailable right now.")
            self._empty_label.setVisible(True)
            self._clear_btn.setEnabled(False)
            return

        self._empty_label.setText("No sessions yet. Finish a run to see it here.")
        self._empty_label.setVisible(not self._records)
        self._clear_btn.setEnabled(bool(self._records))

        for record in self._records:
            row = self._make_row(record)
            # keep the trailing stretch last
            self._rows_container.insertWidget(self._rows_container.count() - 1, row)
            self._row_widgets.append(row)

    def delete_session(self, session_id: int, *, confirm: bool = True) -> bool:
        if confirm and not self._ask(
            "Delete session?",
            "Delete this session? This cannot be undone.",
        ):
            return False
        try:
            deleted = self._store.delete_session(session_id)
        except SessionStoreError as exc:
            logger.warning("Could not delete session %d: %s", session_id, exc)
            return False
        self.refresh()
        if deleted:
            self.sessions_changed.emit()
        return deleted

    def clear_all(self, *, confirm: bool = True) -> int:
        if confirm and not self._ask(
            "Clear all sessions?",
            "Delete every stored session? This cannot be undone.",
        ):
            return 0
        try:
            count = self._store.delete_all_sessions()
        except SessionStoreError as exc:
            logger.warning("Could not clear sessions: %s", exc)
            return 0
        self.refresh()
        self.sessions_changed.emit()
        return count

    def _ask(self, title: str, text: str) -> bool:
        reply = QMessageBox.question(
            self,
            title,
            text,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return reply == QMessageBox.StandardButton.Yes

    # ── row builder ───────────────────────────────────────────────────

    def _make_row(self, record: SessionRecord) -> QWidget:
        text_color = self._palette.get("text", "#1F2937")
        text_muted = self._palette.get("text_muted", "#6B7280")
        overtime = self._palette.get("overtime", "#EF4444")
        hover_bg = _hex_to_rgba(self._palette.get("accent", "#EAB308"), 0.06)

        frame = QFrame(self)
        frame.setStyleSheet(
            f"QFrame {{ background: transparent; border-radius: 6px; }}"
            f"QFrame:hover {{ background: {hover_bg}; }}"
        )
        row = QHBoxLayout(frame)
        row.setContentsMargins(8, 4, 8, 4)
        row.setSpacing(8)

        name_lbl = QLabel(record.session_name)
        name_lbl.setStyleSheet(f"font-size: 12px; color: {text_color};")
        name_lbl.setSizePolicy(
            QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred,
        )

        dur_lbl = QLabel(
            f"{format_duration(record.actual_duration_seconds)}"
            f" / {format_duration(record.target_duration_seconds)}"
        )
        dur_lbl.setStyleSheet(f"font-size: 12px; color: {text_muted};")

        tag_lbl = QLabel(outcome_tag(record))
        tag_color = overtime if record.has_overtime else text_muted
        tag_lbl.setStyleSheet(f"font-size: 11px; color: {tag_color};")

        time_lbl = QLabel(record.completed_at.strftime("%b %d, %H:%M"))
        time_lbl.setStyleSheet(f"font-size: 11px; color: {text_muted};")
        time_lbl.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)

        delete_btn = QPushButton("✕")
        delete_btn.setObjectName("dangerButton")
        delete_btn.setFixedWidth(32)
        delete_btn.setToolTip("Delete this session")
        delete_btn.clicked.connect(
            lambda _=False, sid=record.id: self.delete_session(sid)
        )

        row.addWidget(name_lbl)
        row.addWidget(dur_lbl)
        row.addWidget(tag_lbl)
        row.addWidget(time_lbl)
        row.addWidget(delete_btn)

        return frame

    # ── theming ───────────────────────────────────────────────────────

    def _apply_styles(self) -> None:
        text_muted = self._palette.get("text_muted", "#6B7280")
        border_color = self._palette.get("border", "#E5E7EB")

        self._header.setStyleSheet(
            f"font-size: 13px; font-weight: 600; color: {text_muted};"
        )
        self._empty_label.setStyleSheet(
            f"font-size: 12px; color: {border_color};"
        )

    def apply_palette(self, palette: dict[str, str]) -> None:
        self._palette = palette
        self._apply_styles()
        if self._row_widgets:
            self.refresh()
