"""
基础设施层 - Markdown解析适配模块
"""
from .markdown_parser import MarkdownParser, StrikethroughExtension
from .tree_builder import TreeCaptureExtension

__all__ = ["MarkdownParser", "StrikethroughExtension", "TreeCaptureExtension"]
