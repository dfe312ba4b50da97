"""
Colors and fonts shared by the UI.
"""

PANEL_BG = "#f0f0f0"
CANVAS_BG = "#000000"
PLACEHOLDER_BG = "purple"

GAUGE_TRIANGLE = "#ffffff"
GAUGE_X_FILL = "cyan"
GAUGE_Y_FILL = "lime"
CAPTION_FG = "#ffffff"
CAPTION_FONT = ("TkDefaultFont", 18, "bold")

STATUS_GREEN = "#1a7f1a"
STATUS_RED = "#b00020"
