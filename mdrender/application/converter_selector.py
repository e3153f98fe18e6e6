"""
PDF转换策略选择
由配置决定使用命令行转换器还是浏览器打印，两者互斥
"""

from ..domain.interfaces import IPdfConverter
from ..infrastructure.browser import BrowserPrintOrchestrator
from ..infrastructure.pdf import WkhtmltopdfConverter
from ..types import ConvertConfig, PdfEngine

_FACTORIES = {
    PdfEngine.WKHTMLTOPDF: WkhtmltopdfConverter.from_config,
    PdfEngine.BROWSER: BrowserPrintOrchestrator.from_config,
}


def select_converter(config: ConvertConfig) -> IPdfConverter:
    """按 config.pdf_engine 返回唯一的PDF转换器"""
    return _FACTORIES[config.pdf_engine](config)
