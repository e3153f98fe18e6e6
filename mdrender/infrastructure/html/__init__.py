"""
基础设施层 - HTML组装模块
"""
from .html_assembler import HtmlAssembler

__all__ = ["HtmlAssembler"]
