"""
mdrender - 将 Markdown 渲染为带样式的 HTML 或 PDF
"""

from .application import ConversionOrchestrator, select_converter
from .domain import ConversionError, ErrorCode, NodeKind, TreeNode
from .types import ConvertConfig, ConversionResult, DrawCommand, OutputFormat, PdfEngine

__version__ = "1.0.0"

__all__ = [
    "ConversionOrchestrator",
    "select_converter",
    "ConversionError",
    "ErrorCode",
    "NodeKind",
    "TreeNode",
    "ConvertConfig",
    "ConversionResult",
    "DrawCommand",
    "OutputFormat",
    "PdfEngine",
]
