"""QSS stylesheets, skins, and clock colors for Overtimer.

A skin is only a palette.  Every skin drives the same widgets and the
same timer engine; switching skins never touches timer state.
"""

from __future__ import annotations

from ..timer.engine import TimerMode

# ── skins ─────────────────────────────────────────────────────────────────
#    Keys used by every palette:
#    bg, bg_secondary, surface, accent, text, text_muted, border,
#    clock_idle, clock_running, warning, overtime, danger

SKINS: dict[str, dict[str, str]] = {
    "classic": {
        "bg":            "#F8FAFC",
        "bg_secondary":  "#FFFFFF",
        "surface":       "#F1F5F9",
        "accent":        "#EAB308",
        "text":          "#1F2937",
        "text_muted":    "#6B7280",
        "border":        "#E5E7EB",
        "clock_idle":    "#1F2937",
        "clock_running": "#111827",
        "warning":       "#F59E0B",
        "overtime":      "#EF4444",
        "danger":        "#DC2626",
    },
    "midnight": {
        "bg":            "#1A1A2E",
        "bg_secondary":  "#232340",
        "surface":       "#2A2A4A",
        "accent":        "#CBA6F7",
        "text":          "#E2E2F0",
        "text_muted":    "#7A7A9A",
        "border":        "#313154",
        "clock_idle":    "#B4B4D0",
        "clock_running": "#FFFFFF",
        "warning":       "#F9E2AF",
        "overtime":      "#F38BA8",
        "danger":        "#F38BA8",
    },
    "paper": {
        "bg":            "#FAF7F0",
        "bg_secondary":  "#FFFDF8",
        "surface":       "#F1ECE1",
        "accent":        "#78716C",
        "text":          "#292524",
        "text_muted":    "#78716C",
        "border":        "#E7E5E4",
        "clock_idle":    "#44403C",
        "clock_running": "#1C1917",
        "warning":       "#D97706",
        "overtime":      "#B91C1C",
        "danger":        "#B91C1C",
    },
    "ocean": {
        "bg":            "#0F2027",
        "bg_secondary":  "#16323D",
        "surface":       "#1E4250",
        "accent":        "#4ECDC4",
        "text":          "#E0F7FA",
        "text_muted":    "#80A8B0",
        "border":        "#24505E",
        "clock_idle":    "#B2EBF2",
        "clock_running": "#FFFFFF",
        "warning":       "#FFD166",
        "overtime":      "#FF6B6B",
        "danger":        "#FF6B6B",
    },
    "forest": {
        "bg":            "#1B2A1F",
        "bg_secondary":  "#233528",
        "surface":       "#2C4232",
        "accent":        "#A6E3A1",
        "text":          "#E6F2E6",
        "text_muted":    "#8BA58F",
        "border":        "#35503C",
        "clock_idle":    "#C8E6C9",
        "clock_running": "#FFFFFF",
        "warning":       "#F4D35E",
        "overtime":      "#EE6055",
        "danger":        "#EE6055",
    },
    "ember": {
        "bg":            "#1C1412",
        "bg_secondary":  "#2A1E1A",
        "surface":       "#362620",
        "accent":        "#FB923C",
        "text":          "#FDEDE4",
        "text_muted":    "#A8877A",
        "border":        "#4A332A",
        "clock_idle":    "#FCD9C4",
        "clock_running": "#FFFFFF",
        "warning":       "#FACC15",
        "overtime":      "#EF4444",
        "danger":        "#EF4444",
    },
}

DEFAULT_SKIN = "classic"


def skin_names() -> list[str]:
    return list(SKINS)


def get_palette(skin: str) -> dict[str, str]:
    """Palette for *skin*, falling back to the default skin."""
    return dict(SKINS.get(skin, SKINS[DEFAULT_SKIN]))


def clock_color(
    palette: dict[str, str],
    mode: TimerMode,
    *,
    running: bool,
    final_minutes: bool,
) -> str:
    """Clock text color: overtime beats warning beats running/idle."""
    if mode == TimerMode.OVERTIME:
        return palette["overtime"]
    if final_minutes:
        return palette["warning"]
    return palette["clock_running"] if running else palette["clock_idle"]


# ── font resolution ───────────────────────────────────────────────────

_resolved_font: str | None = None


def resolve_mono_family() -> str:
    """Detect the best available monospaced font for the clock.  Must be
    called after QApplication is created (font database needs the app
    context)."""
    global _resolved_font
    if _resolved_font is None:
        from PyQt6.QtGui import QFontDatabase
        families = set(QFontDatabase.families())
        for candidate in ("JetBrains Mono", "SF Mono", "Menlo", "DejaVu Sans Mono"):
            if candidate in families:
                _resolved_font = candidate
                break
        else:
            _resolved_font = "monospace"
    return _resolved_font


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str]) -> str:
    p = palette
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-size: 14px;
    }}

    QMainWindow {{
        background-color: {p['bg']};
    }}

    /* ── buttons ────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 8px 18px;
        font-size: 14px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
        border-color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
        border: 1px solid {p['border']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QPushButton#secondaryButton:hover {{
        color: {p['text']};
        border-color: {p['text_muted']};
    }}

    QPushButton#dangerButton {{
        background-color: transparent;
        color: {p['danger']};
        border: 1px solid {p['border']};
        font-size: 13px;
        padding: 6px 12px;
        border-radius: 8px;
    }}

    QPushButton#dangerButton:hover {{
        background-color: {p['danger']};
        color: {p['bg']};
        border-color: {p['danger']};
    }}

    QPushButton#presetButton {{
        background-color: {p['bg_secondary']};
        color: {p['text_muted']};
        border: 1px solid {p['border']};
        font-size: 13px;
        padding: 6px 14px;
        border-radius: 8px;
    }}

    QPushButton#presetButton:hover {{
        color: {p['text']};
        border-color: {p['text_muted']};
    }}

    /* ── inputs ──────────────────────────────────── */
    QLineEdit, QSpinBox {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 6px 12px;
        font-size: 13px;
    }}

    QLineEdit:focus, QSpinBox:focus {{
        border-color: {p['accent']};
    }}

    /* ── scroll area ─────────────────────────────── */
    QScrollArea {{
        border: none;
        background-color: transparent;
    }}

    QScrollBar:vertical {{
        background-color: transparent;
        width: 6px;
    }}

    QScrollBar::handle:vertical {{
        background-color: {p['border']};
        border-radius: 3px;
        min-height: 20px;
    }}

    QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {{
        height: 0px;
    }}

    /* ── frame / card ────────────────────────────── */
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
    }}

    /* ── status bar ──────────────────────────────── */
    QStatusBar {{
        background-color: {p['bg']};
        color: {p['text_muted']};
        font-size: 12px;
        border-top: 1px solid {p['border']};
    }}
    """
