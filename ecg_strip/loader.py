"""Background file loader thread for the ECG strip chart"""
import logging
import os
import time
from typing import Optional

from PyQt6.QtCore import QThread, pyqtSignal

from .exceptions import ECGStripError
from .parser import WaveformParser

logger = logging.getLogger(__name__)


class WaveformLoaderThread(QThread):
    """Background thread for loading and parsing recordings"""
    finished = pyqtSignal(object)  # Emits WaveformBuffer
    error = pyqtSignal(str)  # Emits error message
    progress = pyqtSignal(int, str)  # Emits (progress percentage, status message)

    def __init__(self, file_path: str, sample_rate: Optional[float] = None):
        super().__init__()
        self.file_path = file_path
        self.sample_rate = sample_rate

    def run(self):
        """Load and parse the file in the background"""
        start_time = time.time()
        self.progress.emit(0, "Opening file...")

        def progress_callback(percent: int, message: str):
            self.progress.emit(percent, message)

        try:
            waveform = WaveformParser.parse(self.file_path, self.sample_rate, progress_callback)
        except ECGStripError as e:
            logger.error("Failed to load %s: %s", self.file_path, e)
            self.error.emit(str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error loading %s", self.file_path)
            self.error.emit(f"Error loading file: {e}")
            return

        total_time = time.time() - start_time
        file_size_mb = os.path.getsize(self.file_path) / (1024 * 1024)
        total_samples = sum(len(samples) for samples in waveform.buffer)
        logger.info(
            "Loaded %s: %.2f MB, %d channel(s), %d samples in %.2f ms",
            os.path.basename(self.file_path), file_size_mb,
            len(waveform.channels), total_samples, total_time * 1000
        )

        self.progress.emit(100, "Complete!")
        self.finished.emit(waveform)
