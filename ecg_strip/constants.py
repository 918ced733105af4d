"""Constants for the ECG strip chart"""
from PyQt6.QtCore import QSize
from PyQt6.QtGui import QColor


# Window settings
WINDOW_TITLE = "ECG Strip Chart"
WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 700
CHART_VIEWPORT_HEIGHT = 500  # Height of the scrollable chart container

# Toolbar settings
TOOLBAR_ICON_SIZE = QSize(24, 24)
ZOOM_FACTORS = ["1.5x", "2x", "4x"]
DEFAULT_ZOOM_FACTOR = "2x"

# Colors
COLOR_RED = QColor(220, 40, 40)
COLOR_DARK_RED = QColor(150, 20, 20)
COLOR_WHITE = QColor(255, 255, 255)
WINDOW_ICON_SIZE = 64

# Canonical 12-lead order, used as the sort key for incoming channels
CLINICAL_LEAD_ORDER = (
    "I", "II", "III",
    "AVR", "AVL", "AVF",
    "V1", "V2", "V3", "V4", "V5", "V6",
)

# ECG paper conventions
#   0.04 s per small horizontal box, 0.20 s per large one
#   0.1 mV per small vertical box, 0.5 mV per large one
X_BOX = 0.04  # seconds
Y_BOX = 0.1  # mV
MINMV = -0.5  # Lowest voltage shown for a single lead
MAXMV = 2.5  # Highest voltage shown for a single lead
LEAD_SPAN_MV = abs(MINMV) + MAXMV  # Height of one lead band
BOX_PX = 8  # Pixel size of one small box
LARGE_BOX_EVERY = 5
MIN_ZOOM_WIDTH = X_BOX / 100  # Narrowest time window the toolbar can zoom to, in seconds

# Chart margins in pixels
MARGIN_LEFT = 5
MARGIN_RIGHT = 5
MARGIN_TOP = 5
MARGIN_BOTTOM = 5

# Gridlines and traces
GRIDLINE_COLOR = "red"
GRID_STROKE_MAJOR = 0.8
GRID_STROKE_MINOR = 0.3
TRACE_COLOR = "black"
TRACE_WIDTH = 1
LABEL_COLOR = "black"
LABEL_OFFSET_BOXES = 7  # Label sits this many small boxes below its band top

# Redraw animation
TRANSITION_DURATION_MS = 1000
TRANSITION_FRAME_MS = 16

# Parser settings
DEFAULT_SAMPLE_RATE = 500.0  # Hz, used for CSV files without a sample rate header
CSV_SAMPLE_RATE_PREFIX = "# sample_rate="

# File dialog settings
FILE_DIALOG_TITLE = "Open ECG Recording"
FILE_DIALOG_FILTER = "ECG Recordings (*.json *.csv);;All Files (*.*)"

# Help dialog text
HELP_DIALOG_TEXT = """
<h3>Paper</h3>
<p style='margin-left: 20px;'>
<b>Small box</b> - 0.04 s wide, 0.1 mV tall<br>
<b>Large box</b> - 0.20 s wide, 0.5 mV tall (bold lines)
</p>

<h3>Mouse Controls</h3>
<p style='margin-left: 20px;'>
<b>Left Drag</b> - Select a time window to zoom into<br>
<b>Double Click</b> - Return to the full recording
</p>

<h3>Toolbar</h3>
<p style='margin-left: 20px;'>
<b>Zoom In / Zoom Out</b> - Narrow or widen the visible time window by the selected factor<br>
<b>Reset Zoom</b> - Same as double click
</p>

<h3>File Formats</h3>
<p style='margin-left: 20px;'>
<b>JSON</b> - <code>{"channels": [{"label": "II", "sample_rate": 500}], "buffer": [[...]]}</code><br>
<b>CSV</b> - Header row of lead names, one row per sample,
optional <code># sample_rate=500</code> first line
</p>
"""
