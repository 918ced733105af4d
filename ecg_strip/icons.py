"""Icon factory for the ECG strip chart"""
from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QIcon, QPixmap, QPainter, QPen, QPolygonF
import qtawesome as qta
from .constants import COLOR_RED, COLOR_DARK_RED, COLOR_WHITE, WINDOW_ICON_SIZE


class IconFactory:
    """Factory class for creating application icons"""

    @staticmethod
    def create_window_icon() -> QIcon:
        """Create the main window icon - white square on red paper with a QRS complex"""
        pixmap = QPixmap(WINDOW_ICON_SIZE, WINDOW_ICON_SIZE)
        pixmap.fill(Qt.GlobalColor.transparent)

        painter = QPainter(pixmap)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Paper background with a red border
        painter.setBrush(COLOR_WHITE)
        painter.setPen(QPen(COLOR_RED, 4))
        painter.drawRoundedRect(2, 2, 60, 60, 8, 8)

        # One beat: flat, P, QRS spike, T, flat
        trace = QPolygonF([
            QPointF(6, 36), QPointF(18, 36), QPointF(22, 32), QPointF(26, 36),
            QPointF(30, 40), QPointF(34, 10), QPointF(38, 50), QPointF(42, 36),
            QPointF(48, 30), QPointF(52, 36), QPointF(58, 36),
        ])
        painter.setPen(QPen(COLOR_DARK_RED, 3))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolyline(trace)

        painter.end()
        return QIcon(pixmap)

    @staticmethod
    def create_folder_icon() -> QIcon:
        """Create a folder open icon using Font Awesome"""
        return qta.icon('fa6s.folder-open', color=COLOR_RED)

    @staticmethod
    def create_zoom_in_icon() -> QIcon:
        return qta.icon('fa6s.magnifying-glass-plus', color=COLOR_RED)

    @staticmethod
    def create_zoom_out_icon() -> QIcon:
        return qta.icon('fa6s.magnifying-glass-minus', color=COLOR_RED)

    @staticmethod
    def create_reset_zoom_icon() -> QIcon:
        """Create a reset icon for returning to the full recording"""
        return qta.icon('fa6s.rotate-left', color=COLOR_RED)

    @staticmethod
    def create_help_icon() -> QIcon:
        """Create a help/info icon using Font Awesome"""
        return qta.icon('fa6s.circle-question', color=COLOR_RED)
