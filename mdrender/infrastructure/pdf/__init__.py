"""
基础设施层 - 命令行PDF转换模块
"""
from .wkhtmltopdf_converter import WkhtmltopdfConverter

__all__ = ["WkhtmltopdfConverter"]
