"""
ECG Strip Chart - 12-lead ECG Viewer

A GUI application for viewing ECG recordings on clinical paper with brush zoom.
"""
import sys
import argparse
import logging
import statistics
import time
from PyQt6.QtWidgets import QApplication
from ecg_strip.controller import ZoomController
from ecg_strip.exceptions import ECGStripError
from ecg_strip.main_window import MainWindow
from ecg_strip.parser import WaveformParser


class _NullSurface:
    """Surface that draws nothing, for timing the scene pipeline on its own"""

    def clear(self, group=None): pass
    def set_size(self, width, height): pass
    def draw_gridline(self, gridline): pass
    def draw_polyline(self, polyline, duration_ms=0): pass
    def draw_text(self, label): pass
    def clear_brush(self): pass
    def listen_for_drag(self, callback): pass
    def listen_for_double_click(self, callback): pass


def configure_logging(debug: bool = False):
    """Console logging for the application"""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def benchmark_render(file_path: str, runs: int = 10, sample_rate: float = None):
    """
    Benchmark scene building by rendering a recording multiple times.

    Args:
        file_path: Path to the recording to benchmark
        runs: Number of full renders
        sample_rate: Sample rate for CSV files without a sample rate line
    """
    print(f"\n{'='*70}")
    print(f"🔬 BENCHMARK MODE - Rendering '{file_path}' {runs} times")
    print(f"{'='*70}\n")

    try:
        waveform = WaveformParser.parse(file_path, sample_rate)
    except ECGStripError as e:
        print(f"\n❌ Error loading file: {e}")
        return

    controller = ZoomController(_NullSurface())
    times = []
    for run in range(1, runs + 1):
        print(f"Run {run}/{runs}: ", end="", flush=True)
        start_time = time.time()
        scene = controller.render(waveform)
        elapsed = (time.time() - start_time) * 1000
        times.append(elapsed)
        print(f"{elapsed:.2f} ms ✓")

    print(f"\n{'='*70}")
    print("📊 BENCHMARK RESULTS")
    print(f"{'='*70}")
    print(f"  Runs:            {runs}")
    print(f"  Leads:           {len(scene.polylines)}")
    print(f"  Gridlines:       {len(scene.gridlines)}")
    print(f"\n⏱️  Timing Statistics (ms):")
    print(f"  Min:             {min(times):.2f} ms")
    print(f"  Max:             {max(times):.2f} ms")
    print(f"  Average:         {statistics.mean(times):.2f} ms")
    if len(times) > 1:
        print(f"  Std Dev:         {statistics.stdev(times):.2f} ms")
    print(f"{'='*70}\n")


def main():
    """Application entry point"""
    parser = argparse.ArgumentParser(
        description='ECG Strip Chart - 12-lead ECG Viewer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                    # Launch GUI normally
  python main.py recording.json                     # Load file on startup
  python main.py leads.csv --sample-rate 250        # CSV sampled at 250 Hz
  python main.py recording.json --benchmark_render 10
  python main.py recording.json --enable_debug      # Enable debug output
        """
    )
    parser.add_argument(
        'file',
        nargs='?',
        help='Path to an ECG recording (JSON or CSV) to load on startup'
    )
    parser.add_argument(
        '--sample-rate',
        type=float,
        metavar='HZ',
        help='Sample rate for CSV recordings without a "# sample_rate=" line'
    )
    parser.add_argument(
        '--benchmark_render',
        type=int,
        metavar='RUNS',
        help='Benchmark mode: render the recording N times and report statistics (no GUI)'
    )
    parser.add_argument(
        '--enable_debug',
        action='store_true',
        help='Enable debug output'
    )

    args = parser.parse_args()
    configure_logging(args.enable_debug)

    if args.benchmark_render:
        if not args.file:
            print("❌ Error: File path required for benchmarking")
            sys.exit(1)
        benchmark_render(args.file, args.benchmark_render, args.sample_rate)
        sys.exit(0)

    app = QApplication(sys.argv)
    window = MainWindow(initial_file=args.file, sample_rate=args.sample_rate)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
