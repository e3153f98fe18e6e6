"""
领域层 - 错误类型定义
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """错误代码枚举"""

    IO_FAILURE = "IO_FAILURE"
    PROCESS_UNAVAILABLE = "PROCESS_UNAVAILABLE"
    REMOTE_PROTOCOL_FAILURE = "REMOTE_PROTOCOL_FAILURE"
    NETWORK_FAILURE = "NETWORK_FAILURE"
    CONVERSION_FAILURE = "CONVERSION_FAILURE"


class ConversionError(Exception):
    """转换错误基类"""

    def __init__(self, message: str, code: ErrorCode = None):
        super().__init__(message)
        self.code = code


class IoFailureError(ConversionError):
    """文件读写错误"""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.IO_FAILURE)


class ProcessUnavailableError(ConversionError):
    """外部程序不可用，附带安装提示"""

    def __init__(self, message: str, install_hint: str = ""):
        if install_hint:
            message = f"{message}\n{install_hint}"
        super().__init__(message, code=ErrorCode.PROCESS_UNAVAILABLE)
        self.install_hint = install_hint


class RemoteProtocolError(ConversionError):
    """控制端点返回了非预期的响应"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, code=ErrorCode.REMOTE_PROTOCOL_FAILURE)
        self.status_code = status_code


class NetworkError(ConversionError):
    """无法连接控制端点"""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.NETWORK_FAILURE)


class ConversionFailedError(ConversionError):
    """转换器退出码非零，或PDF数据无法解码"""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message, code=ErrorCode.CONVERSION_FAILURE)
        self.stderr = stderr
