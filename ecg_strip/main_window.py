"""Main window for the ECG strip chart"""
import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QVBoxLayout, QWidget, QFileDialog, QToolBar,
    QMessageBox, QDialog, QTextEdit, QComboBox, QLabel
)
from PyQt6.QtGui import QAction

from .exceptions import ECGStripError
from .graph_widget import ECGStripChartWidget
from .icons import IconFactory
from .loader import WaveformLoaderThread
from .models import WaveformBuffer
from .constants import (
    WINDOW_TITLE, WINDOW_WIDTH, WINDOW_HEIGHT,
    TOOLBAR_ICON_SIZE, ZOOM_FACTORS, DEFAULT_ZOOM_FACTOR,
    FILE_DIALOG_TITLE, FILE_DIALOG_FILTER, HELP_DIALOG_TEXT
)
from .utils import get_version

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window"""

    def __init__(self, initial_file: str = None, sample_rate: Optional[float] = None):
        super().__init__()
        self.setWindowTitle(f"{WINDOW_TITLE} {get_version()}")
        self.setGeometry(100, 100, WINDOW_WIDTH, WINDOW_HEIGHT)
        self.setWindowIcon(IconFactory.create_window_icon())

        self.sample_rate = sample_rate
        self.loader_thread = None
        self.current_file_path = None

        self._create_toolbar()

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 0)

        self.graph_widget = ECGStripChartWidget()
        layout.addWidget(self.graph_widget)

        self._set_zoom_enabled(False)

        if initial_file:
            self.current_file_path = initial_file
            self._load_file_with_progress(initial_file)

    def _create_toolbar(self):
        """Create and configure the main toolbar"""
        toolbar = QToolBar("Main Toolbar")
        toolbar.setIconSize(TOOLBAR_ICON_SIZE)
        toolbar.setMovable(False)
        toolbar.setStyleSheet("""
            QToolBar {
                background: #f4f4f4;
                border-bottom: 1px solid #d5d5d5;
                spacing: 6px;
                padding: 4px;
            }
            QToolButton {
                background: #ffffff;
                border: 1px solid #d5d5d5;
                border-radius: 4px;
                padding: 4px;
            }
            QToolButton:hover {
                background: #fbeaea;
                border: 1px solid #dc2828;
            }
        """)
        self.addToolBar(toolbar)

        open_action = QAction(IconFactory.create_folder_icon(), "Open File", self)
        open_action.setToolTip("Open an ECG recording (JSON or CSV)")
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.open_file)
        toolbar.addAction(open_action)

        toolbar.addSeparator()

        self.zoom_in_action = QAction(IconFactory.create_zoom_in_icon(), "Zoom In", self)
        self.zoom_in_action.setToolTip("Narrow the visible time window by the selected factor [Shortcut: +]")
        self.zoom_in_action.setShortcut("+")
        self.zoom_in_action.triggered.connect(lambda: self.handle_zoom_in(self.zoom_factor_combo.currentText()))
        toolbar.addAction(self.zoom_in_action)

        self.zoom_out_action = QAction(IconFactory.create_zoom_out_icon(), "Zoom Out", self)
        self.zoom_out_action.setToolTip("Widen the visible time window by the selected factor [Shortcut: -]")
        self.zoom_out_action.setShortcut("-")
        self.zoom_out_action.triggered.connect(lambda: self.handle_zoom_out(self.zoom_factor_combo.currentText()))
        toolbar.addAction(self.zoom_out_action)

        toolbar.addWidget(QLabel(" Factor: "))
        self.zoom_factor_combo = QComboBox()
        self.zoom_factor_combo.addItems(ZOOM_FACTORS)
        self.zoom_factor_combo.setCurrentText(DEFAULT_ZOOM_FACTOR)
        self.zoom_factor_combo.setEditable(True)
        toolbar.addWidget(self.zoom_factor_combo)

        self.reset_zoom_action = QAction(IconFactory.create_reset_zoom_icon(), "Reset Zoom", self)
        self.reset_zoom_action.setToolTip("Show the full recording (same as double click) [Shortcut: 0]")
        self.reset_zoom_action.setShortcut("0")
        self.reset_zoom_action.triggered.connect(self.handle_reset_zoom)
        toolbar.addAction(self.reset_zoom_action)

        toolbar.addSeparator()

        help_action = QAction(IconFactory.create_help_icon(), "Help", self)
        help_action.setToolTip("Show controls and file formats")
        help_action.triggered.connect(self.show_help)
        toolbar.addAction(help_action)

    def _set_zoom_enabled(self, enabled: bool):
        self.zoom_in_action.setEnabled(enabled)
        self.zoom_out_action.setEnabled(enabled)
        self.reset_zoom_action.setEnabled(enabled)

    def handle_zoom_in(self, zoom_factor: str):
        """Toolbar zoom in; zoom_factor is a multiplier such as "2x" """
        self._apply_zoom(self.graph_widget.zoom_in, zoom_factor)

    def handle_zoom_out(self, zoom_factor: str):
        """Toolbar zoom out; zoom_factor is a multiplier such as "2x" """
        self._apply_zoom(self.graph_widget.zoom_out, zoom_factor)

    def handle_reset_zoom(self):
        self.graph_widget.reset_zoom()

    def _apply_zoom(self, zoom, zoom_factor: str):
        try:
            zoom(zoom_factor)
        except ECGStripError as e:
            QMessageBox.warning(self, "Invalid Zoom Factor", str(e))

    def open_file(self):
        """Open and parse an ECG recording"""
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            FILE_DIALOG_TITLE,
            "",
            FILE_DIALOG_FILTER
        )

        if file_path:
            self.current_file_path = file_path
            self._load_file_with_progress(file_path)

    def show_help(self):
        """Show help dialog with controls and file formats"""
        help_dialog = QDialog(self)
        help_dialog.setWindowTitle(f"{WINDOW_TITLE} - Help")
        layout = QVBoxLayout(help_dialog)
        text = QTextEdit()
        text.setReadOnly(True)
        text.setHtml(HELP_DIALOG_TEXT)
        layout.addWidget(text)
        help_dialog.resize(520, 420)
        help_dialog.exec()

    def _load_file_with_progress(self, file_path: str):
        """Load file in background with progress display"""
        self._set_zoom_enabled(False)
        self.graph_widget.set_loading_progress(0, "Starting...")

        self.loader_thread = WaveformLoaderThread(file_path, self.sample_rate)
        self.loader_thread.progress.connect(self._update_progress)
        self.loader_thread.finished.connect(self._on_file_loaded)
        self.loader_thread.error.connect(self._on_load_error)
        self.loader_thread.start()

    def _update_progress(self, value: int, message: str):
        """Update progress display"""
        self.graph_widget.set_loading_progress(value, message)

    def _on_file_loaded(self, waveform: WaveformBuffer):
        """Draw the loaded recording"""
        self.graph_widget.hide_progress()
        try:
            self.graph_widget.set_waveform(waveform)
        except ECGStripError as e:
            self._on_load_error(str(e))
            return

        self._set_zoom_enabled(self.graph_widget.controller.has_data)
        if not self.graph_widget.controller.has_data:
            logger.warning("No clinical leads found in %s", self.current_file_path)

        if self.loader_thread:
            self.loader_thread.deleteLater()
            self.loader_thread = None

    def _on_load_error(self, error_message: str):
        """Handle file load error"""
        self.graph_widget.hide_progress()

        QMessageBox.critical(
            self,
            "Error Loading File",
            f"Failed to load file:\n\n{error_message}",
            QMessageBox.StandardButton.Ok
        )

        if self.loader_thread:
            self.loader_thread.deleteLater()
            self.loader_thread = None
