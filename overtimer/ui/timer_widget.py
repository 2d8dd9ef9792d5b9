"""Main timer display widget.

Layout (top → bottom):
    - Session name input (subtle, top of card)
    - Large MM:SS clock
    - Thin progress bar through the countdown
    - Status line (Ready / Focus Time / Final Minutes / Overtime)
    - Start/Pause + Reset
    - Quick presets and "Set Time"
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QLineEdit, QFrame, QProgressBar,
)

from ..timer.clock import PRESET_MINUTES
from ..timer.engine import TimerEngine, TimerMode
from .styles import clock_color, get_palette, resolve_mono_family

STATUS_READY = "Ready to Start"
STATUS_FOCUS = "Focus Time"
STATUS_PAUSED = "Paused"
STATUS_FINAL = "Final Minutes"
STATUS_OVERTIME = "Overtime"

PROGRESS_STEPS = 1000


def status_text(engine: TimerEngine) -> str:
    if engine.mode == TimerMode.OVERTIME:
        return STATUS_OVERTIME
    if engine.is_final_minutes:
        return STATUS_FINAL
    if engine.is_running:
        return STATUS_FOCUS
    if engine.mode == TimerMode.COUNTING_DOWN:
        return STATUS_PAUSED
    return STATUS_READY


class TimerWidget(QWidget):
    """The clock card."""

    session_name_changed = pyqtSignal(str)
    set_time_requested = pyqtSignal()

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._palette: dict[str, str] = get_palette("classic")
        self._build_ui()
        self._connect_signals()
        self._refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(0)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── session name input (top, subtle) ─────────────────────────
        self._name_input = QLineEdit(card)
        self._name_input.setPlaceholderText("Session name (defaults to today's date)")
        self._name_input.setMaxLength(255)
        self._name_input.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._name_input)

        layout.addSpacing(16)

        # ── clock ────────────────────────────────────────────────────
        self._clock_label = QLabel("00:00", card)
        self._clock_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = QFont(resolve_mono_family())
        font.setPointSize(72)
        font.setWeight(QFont.Weight.Black)
        self._clock_label.setFont(font)
        layout.addWidget(self._clock_label)

        # countdown progress; full once overtime starts
        self._progress_bar = QProgressBar(card)
        self._progress_bar.setRange(0, PROGRESS_STEPS)
        self._progress_bar.setTextVisible(False)
        self._progress_bar.setFixedHeight(4)
        layout.addWidget(self._progress_bar)
        layout.addSpacing(8)

        self._status_label = QLabel(STATUS_READY, card)
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._status_label)

        layout.addSpacing(20)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")
        self._reset_btn.setToolTip("Stop and save this session (R)")

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        layout.addSpacing(16)

        # ── presets ──────────────────────────────────────────────────
        preset_row = QHBoxLayout()
        preset_row.setSpacing(8)
        preset_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._preset_btns: dict[int, QPushButton] = {}
        for minutes in PRESET_MINUTES:
            btn = QPushButton(f"{minutes}m", card)
            btn.setObjectName("presetButton")
            btn.clicked.connect(lambda _=False, m=minutes: self._engine.set_preset(m))
            self._preset_btns[minutes] = btn
            preset_row.addWidget(btn)

        self._set_time_btn = QPushButton("Set Time", card)
        self._set_time_btn.setObjectName("presetButton")
        preset_row.addWidget(self._set_time_btn)
        layout.addLayout(preset_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._engine.toggle)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._set_time_btn.clicked.connect(lambda: self.set_time_requested.emit())
        self._name_input.textChanged.connect(self.session_name_changed)

        self._engine.tick.connect(self._refresh)
        self._engine.mode_changed.connect(self._refresh)
        self._engine.running_changed.connect(self._refresh)
        self._engine.target_changed.connect(self._refresh)

    # ── slots ─────────────────────────────────────────────────────────────

    def _refresh(self, *_args) -> None:
        engine = self._engine
        self._clock_label.setText(engine.display_time)
        self._status_label.setText(status_text(engine))
        self._start_pause_btn.setText("Pause" if engine.is_running else "Start")
        self._progress_bar.setValue(round(engine.percent_complete * PROGRESS_STEPS))

        color = clock_color(
            self._palette,
            engine.mode,
            running=engine.is_running,
            final_minutes=engine.is_final_minutes,
        )
        self._clock_label.setStyleSheet(f"color: {color}; background: transparent;")
        status_color = color if color in (
            self._palette["overtime"], self._palette["warning"],
        ) else self._palette["text_muted"]
        self._status_label.setStyleSheet(
            f"font-size: 16px; font-weight: 600; color: {status_color};"
        )
        self._progress_bar.setStyleSheet(
            f"QProgressBar {{ background: {self._palette['border']}; border: none; border-radius: 2px; }}"
            f"QProgressBar::chunk {{ background: {color}; border-radius: 2px; }}"
        )

    # ── public ────────────────────────────────────────────────────────────

    @property
    def session_name(self) -> str:
        return self._name_input.text().strip()

    def set_session_name(self, name: str) -> None:
        self._name_input.setText(name)

    def name_input_has_focus(self) -> bool:
        return self._name_input.hasFocus()

    # ── theming ───────────────────────────────────────────────────────────

    def apply_palette(self, palette: dict[str, str]) -> None:
        self._palette = palette
        self._refresh()
