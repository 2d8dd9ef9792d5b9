"""Dialog for picking a custom target time.

Minutes and seconds spin boxes plus a one-minute-step slider over the
whole 0-180 minute range.  Whatever the user types is clamped, never
rejected.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QSlider, QPushButton, QWidget,
)

from ..timer.clock import (
    MAX_CUSTOM_MINUTES,
    MAX_CUSTOM_SECONDS,
    clamp_custom_time,
    format_clock,
)


class CustomTimeDialog(QDialog):
    """Modal dialog returning a clamped ``(minutes, seconds)`` pair."""

    def __init__(
        self,
        minutes: int,
        seconds: int,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Set Custom Time")
        self.setMinimumWidth(360)
        self.setModal(True)
        self._syncing = False

        self._build_ui()
        self.set_time(minutes, seconds)

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(14)

        self._preview = QLabel("00:00")
        self._preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview.setStyleSheet("font-size: 36px; font-weight: 300;")
        root.addWidget(self._preview)

        self._total_label = QLabel("")
        self._total_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._total_label)

        self._slider = QSlider(Qt.Orientation.Horizontal)
        self._slider.setRange(0, MAX_CUSTOM_MINUTES * 60)
        self._slider.setSingleStep(60)
        self._slider.setPageStep(15 * 60)
        self._slider.valueChanged.connect(self._on_slider_changed)
        root.addWidget(self._slider)

        form = QFormLayout()
        form.setHorizontalSpacing(20)

        self._minutes_spin = QSpinBox()
        self._minutes_spin.setRange(0, MAX_CUSTOM_MINUTES)
        self._minutes_spin.setSuffix(" min")
        self._minutes_spin.valueChanged.connect(self._on_spin_changed)
        form.addRow("Minutes:", self._minutes_spin)

        self._seconds_spin = QSpinBox()
        self._seconds_spin.setRange(0, MAX_CUSTOM_SECONDS)
        self._seconds_spin.setSuffix(" s")
        self._seconds_spin.valueChanged.connect(self._on_spin_changed)
        form.addRow("Seconds:", self._seconds_spin)

        root.addLayout(form)

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.setObjectName("secondaryButton")
        cancel_btn.clicked.connect(self.reject)
        apply_btn = QPushButton("Apply")
        apply_btn.setObjectName("primaryButton")
        apply_btn.setDefault(True)
        apply_btn.clicked.connect(self.accept)
        btn_row.addWidget(cancel_btn)
        btn_row.addWidget(apply_btn)
        root.addLayout(btn_row)

    # ── sync ──────────────────────────────────────────────────────────

    def _on_slider_changed(self, total: int) -> None:
        if self._syncing:
            return
        # slider moves in whole minutes
        self.set_time(total // 60, 0)

    def _on_spin_changed(self) -> None:
        if self._syncing:
            return
        self.set_time(self._minutes_spin.value(), self._seconds_spin.value())

    # ── public ────────────────────────────────────────────────────────

    def set_time(self, minutes: int, seconds: int) -> None:
        minutes, seconds = clamp_custom_time(minutes, seconds)
        total = minutes * 60 + seconds
        self._syncing = True
        try:
            self._minutes_spin.setValue(minutes)
            self._seconds_spin.setValue(seconds)
            self._slider.setValue(total)
        finally:
            self._syncing = False
        self._preview.setText(format_clock(total))
        self._total_label.setText(
            f"{total} seconds total" if total > 0 else "Set a time above 0"
        )

    def values(self) -> tuple[int, int]:
        return self._minutes_spin.value(), self._seconds_spin.value()
