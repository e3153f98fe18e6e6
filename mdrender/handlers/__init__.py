"""
处理器层
"""
from .command_handler import CommandHandler, USAGE

__all__ = ["CommandHandler", "USAGE"]
