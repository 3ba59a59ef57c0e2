"""
PocketCalc Configuration Settings
"""
import os
import logging

# Application Settings
APP_NAME = "PocketCalc"
VERSION = "1.0.0"

# Display Settings
WINDOW_WIDTH = 420
WINDOW_HEIGHT = 560
DISPLAY_FONT = ("Consolas", 28, "bold")
EXPRESSION_FONT = ("Consolas", 14)
BUTTON_FONT = ("Segoe UI", 14)
LABEL_FONT = ("Segoe UI", 11)

# ── Palettes ───────────────────────────────────────────────────────────────────

# LIGHT palette
NEU_LIGHT = {
    "bg":           "#DDE6ED",   # base surface
    "bg_dark":      "#C8D4DF",   # slightly darker variant (inset feel)
    "shadow_dark":  "#B2BFC8",
    "shadow_lite":  "#FFFFFF",
    "display_bg":   "#C8D4DF",
    "display_fg":   "#1A2332",   # high-contrast dark text
    "btn_bg":       "#DDE6ED",
    "btn_fg":       "#2B3A4A",
    "operator_fg":  "#1E7A56",
    "equals_bg":    "#2E8B57",
    "equals_fg":    "#FFFFFF",
    "mode_fg":      "#2C5F8A",
    "mode_bg":      "#C8D4DF",
    "accent":       "#2E8B57",
    "text":         "#2B3A4A",
    "subtext":      "#6E8090",
    "danger":       "#B03A2E",
    "listbox_bg":   "#C8D4DF",
    "listbox_fg":   "#1A2332",
}

# DARK palette
NEU_DARK = {
    "bg":           "#1E2530",
    "bg_dark":      "#161C26",
    "shadow_dark":  "#10161E",
    "shadow_lite":  "#283040",
    "display_bg":   "#161C26",
    "display_fg":   "#9ADDB0",   # LCD green-on-dark
    "btn_bg":       "#1E2530",
    "btn_fg":       "#BDD0E0",
    "operator_fg":  "#4DB888",
    "equals_bg":    "#2D8A58",
    "equals_fg":    "#FFFFFF",
    "mode_fg":      "#5E8FC8",
    "mode_bg":      "#283040",
    "accent":       "#4DB888",
    "text":         "#BDD0E0",
    "subtext":      "#4E6070",
    "danger":       "#E55A4E",
    "listbox_bg":   "#161C26",
    "listbox_fg":   "#9ADDB0",
}

THEMES = ("light", "dark")
DEFAULT_THEME = "light"


def get_theme(dark: bool) -> dict:
    """Return the active colour palette."""
    return NEU_DARK if dark else NEU_LIGHT


# Database Settings
DB_PATH = os.path.join(os.path.dirname(__file__), "pocketcalc.db")

# Storage keys
HISTORY_KEY = "calculatorHistory"
# The web portal keeps its own history so it never overwrites the desktop one
WEB_HISTORY_KEY = "webCalculatorHistory"
THEME_KEY = "calculator-theme"

# Calculator Settings
MAX_DISPLAY_DIGITS = 10
INITIAL_DISPLAY = "0"
OVERFLOW_THRESHOLD = 1e100
UNDERFLOW_THRESHOLD = 1e-100

# History Settings
MAX_HISTORY_ITEMS = 10

# Web Portal settings
WEB_HOST = '0.0.0.0'
WEB_PORT = 8888

# Logging
LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
