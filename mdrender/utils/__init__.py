"""
工具层 - AOP装饰器和通用工具
"""

from .decorators import log_execution, best_effort, best_effort_sync
from . import regex_patterns

__all__ = ["log_execution", "best_effort", "best_effort_sync", "regex_patterns"]
