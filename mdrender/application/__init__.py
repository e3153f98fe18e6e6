"""
应用层
"""
from .conversion_orchestrator import ConversionOrchestrator
from .converter_selector import select_converter

__all__ = ["ConversionOrchestrator", "select_converter"]
