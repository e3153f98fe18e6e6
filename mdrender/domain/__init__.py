"""
领域层 - 核心接口、文档树和错误定义
"""

from .interfaces import (
    IMarkdownParser,
    IHtmlAssembler,
    ILayoutEngine,
    IPdfConverter,
    IConversionOrchestrator,
)
from .errors import (
    ErrorCode,
    ConversionError,
    IoFailureError,
    ProcessUnavailableError,
    RemoteProtocolError,
    NetworkError,
    ConversionFailedError,
)
from .tree import NodeKind, TreeNode

__all__ = [
    "IMarkdownParser",
    "IHtmlAssembler",
    "ILayoutEngine",
    "IPdfConverter",
    "IConversionOrchestrator",
    "ErrorCode",
    "ConversionError",
    "IoFailureError",
    "ProcessUnavailableError",
    "RemoteProtocolError",
    "NetworkError",
    "ConversionFailedError",
    "NodeKind",
    "TreeNode",
]
