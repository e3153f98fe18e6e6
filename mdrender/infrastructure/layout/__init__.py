"""
基础设施层 - 排版模块
"""
from .text_collector import collect_text
from .layout_engine import LayoutEngine, LayoutCursor, PageGeometry
from .canvas_writer import CanvasWriter

__all__ = [
    "collect_text",
    "LayoutEngine",
    "LayoutCursor",
    "PageGeometry",
    "CanvasWriter",
]
