"""
基础设施层 - 浏览器模块
"""
from .browser_locator import BrowserLocator, browser_install_hint, wkhtmltopdf_install_hint
from .browser_process import BrowserProcess
from .devtools_client import DevToolsClient
from .print_orchestrator import BrowserPrintOrchestrator, BrowserSession, BrowserState

__all__ = [
    "BrowserLocator",
    "browser_install_hint",
    "wkhtmltopdf_install_hint",
    "BrowserProcess",
    "DevToolsClient",
    "BrowserPrintOrchestrator",
    "BrowserSession",
    "BrowserState",
]
