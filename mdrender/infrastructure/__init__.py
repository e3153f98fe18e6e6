"""
基础设施层
"""
from .browser import (
    BrowserLocator,
    BrowserProcess,
    DevToolsClient,
    BrowserPrintOrchestrator,
)
from .html import HtmlAssembler
from .layout import LayoutEngine, CanvasWriter, collect_text
from .parser import MarkdownParser
from .pdf import WkhtmltopdfConverter

__all__ = [
    "BrowserLocator",
    "BrowserProcess",
    "DevToolsClient",
    "BrowserPrintOrchestrator",
    "HtmlAssembler",
    "LayoutEngine",
    "CanvasWriter",
    "collect_text",
    "MarkdownParser",
    "WkhtmltopdfConverter",
]
