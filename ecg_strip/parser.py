"""Parser for ECG recording files"""
from pathlib import Path
from typing import Callable, List, Optional
import json

import numpy as np

from .constants import DEFAULT_SAMPLE_RATE, CSV_SAMPLE_RATE_PREFIX
from .exceptions import WaveformParseError
from .models import Channel, WaveformBuffer

ProgressCallback = Optional[Callable[[int, str], None]]


class WaveformParser:
    """Reads recordings into a WaveformBuffer"""

    @staticmethod
    def detect_format(file_path: str, text: Optional[str] = None) -> str:
        """
        Work out whether a file holds JSON or CSV.

        The extension decides when it is .json or .csv; otherwise a leading
        '{' in the content means JSON.
        """
        suffix = Path(file_path).suffix.lower()
        if suffix == '.json':
            return 'json'
        if suffix == '.csv':
            return 'csv'
        if text is None:
            text = WaveformParser._read_text(file_path)
        return 'json' if text.lstrip().startswith('{') else 'csv'

    @staticmethod
    def parse(file_path: str, sample_rate: Optional[float] = None,
              progress_callback: ProgressCallback = None) -> WaveformBuffer:
        """
        Parse a recording file of either supported format

        Args:
            file_path: Path to a .json or .csv recording
            sample_rate: Sample rate for CSV files without a sample rate line
            progress_callback: Optional callback(percent, message)

        Returns:
            WaveformBuffer with one entry per channel in the file
        """
        text = WaveformParser._read_text(file_path)
        if progress_callback:
            progress_callback(10, "Detecting format...")

        if WaveformParser.detect_format(file_path, text) == 'json':
            waveform = WaveformParser.parse_json_text(text)
        else:
            waveform = WaveformParser.parse_csv_text(text, sample_rate, progress_callback)

        if progress_callback:
            progress_callback(95, "Validating channels...")
        waveform.validate()
        return waveform

    @staticmethod
    def parse_json_text(text: str) -> WaveformBuffer:
        """Parse the channel-data JSON shape {"channels": [...], "buffer": [[...]]}"""
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise WaveformParseError(f"Invalid JSON: {e}") from e

        if not isinstance(payload, dict) or 'channels' not in payload or 'buffer' not in payload:
            raise WaveformParseError("JSON recording must contain 'channels' and 'buffer'")
        if not isinstance(payload['channels'], list) or not isinstance(payload['buffer'], list):
            raise WaveformParseError("JSON 'channels' and 'buffer' must both be lists")

        channels = []
        for i, entry in enumerate(payload['channels']):
            try:
                channels.append(Channel(label=str(entry['label']), sample_rate=float(entry['sample_rate'])))
            except (KeyError, TypeError, ValueError) as e:
                raise WaveformParseError(f"Channel {i} is missing a label or sample rate") from e

        buffer = []
        for i, samples in enumerate(payload['buffer']):
            try:
                lead = np.asarray(samples, dtype=float)
            except (TypeError, ValueError) as e:
                raise WaveformParseError(f"Lead {i} contains non-numeric samples") from e
            if lead.ndim != 1:
                raise WaveformParseError(f"Lead {i} must be a flat list of samples")
            buffer.append(lead)

        return WaveformBuffer(channels=channels, buffer=buffer)

    @staticmethod
    def parse_csv_text(text: str, sample_rate: Optional[float] = None,
                       progress_callback: ProgressCallback = None) -> WaveformBuffer:
        """
        Parse a CSV recording: one header row of lead labels, then one row per sample.

        A first line of the form "# sample_rate=500" sets the sample rate for
        every lead; an explicit sample_rate argument wins over it.
        """
        file_rate = None
        lines: List[str] = []
        for line in text.splitlines():
            stripped = line.strip()
            if not stripped:
                continue
            if stripped.startswith(CSV_SAMPLE_RATE_PREFIX):
                try:
                    file_rate = float(stripped[len(CSV_SAMPLE_RATE_PREFIX):])
                except ValueError as e:
                    raise WaveformParseError(f"Invalid sample rate line: {stripped!r}") from e
                continue
            if stripped.startswith('#'):
                continue
            lines.append(stripped)

        if not lines:
            raise WaveformParseError("CSV recording has no header row")

        labels = [label.strip() for label in lines[0].split(',')]
        rate = sample_rate if sample_rate is not None else (file_rate or DEFAULT_SAMPLE_RATE)

        if progress_callback:
            progress_callback(30, f"Reading {len(lines) - 1:,} sample rows...")

        if len(lines) > 1:
            try:
                data = np.loadtxt(lines[1:], delimiter=',', dtype=float, ndmin=2)
            except ValueError as e:
                raise WaveformParseError(f"Invalid sample row: {e}") from e
            if data.shape[1] != len(labels):
                raise WaveformParseError(
                    f"Header has {len(labels)} column(s) but rows have {data.shape[1]}"
                )
            buffer = [data[:, i].copy() for i in range(len(labels))]
        else:
            buffer = [np.zeros(0) for _ in labels]

        if progress_callback:
            progress_callback(90, "Building channels...")

        channels = [Channel(label=label, sample_rate=rate) for label in labels]
        return WaveformBuffer(channels=channels, buffer=buffer)

    @staticmethod
    def _read_text(file_path: str) -> str:
        try:
            return Path(file_path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise WaveformParseError(f"Could not read {file_path}: {e}") from e
