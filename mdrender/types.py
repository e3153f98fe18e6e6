"""
mdrender 类型定义
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

from .domain.errors import ErrorCode
from .domain.tree import TreeNode

DEFAULT_CSS_URL = (
    "https://cdnjs.cloudflare.com/ajax/libs/github-markdown-css/4.0.0/"
    "github-markdown.min.css"
)
DEFAULT_CSS_CLASS = "markdown-body"


class OutputFormat(Enum):
    """输出格式"""

    HTML = "html"
    PDF = "pdf"  # 经由HTML和外部转换器
    LAYOUT = "layout"  # 内置排版引擎直接绘制

    @property
    def suffix(self) -> str:
        return ".html" if self is OutputFormat.HTML else ".pdf"


class PdfEngine(Enum):
    """PDF生成策略"""

    WKHTMLTOPDF = "wkhtmltopdf"
    BROWSER = "browser"


@dataclass(frozen=True)
class ConvertConfig:
    """转换配置（不可变）"""

    css_url: str = DEFAULT_CSS_URL
    css_class: str = DEFAULT_CSS_CLASS
    pdf_engine: PdfEngine = PdfEngine.WKHTMLTOPDF
    wkhtmltopdf_binary: str = "wkhtmltopdf"
    browser_candidates: tuple[str, ...] = (
        "google-chrome",
        "chromium",
        "chromium-browser",
    )
    use_bundled_chromium: bool = True
    debug_port: int = 9222
    startup_timeout: float = 10.0
    load_timeout: float = 10.0
    settle_delay: float = 0.5
    request_timeout: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "ConvertConfig":
        """从字典读取配置，缺省项使用默认值

        Raises:
            ValueError: pdf_engine 不是已知的策略
        """
        defaults = cls()
        candidates = config.get("browser_candidates", defaults.browser_candidates)
        if isinstance(candidates, str):
            candidates = [c.strip() for c in candidates.split(",") if c.strip()]

        return cls(
            css_url=config.get("css_url", defaults.css_url),
            css_class=config.get("css_class", defaults.css_class),
            pdf_engine=PdfEngine(config.get("pdf_engine", defaults.pdf_engine.value)),
            wkhtmltopdf_binary=config.get(
                "wkhtmltopdf_binary", defaults.wkhtmltopdf_binary
            ),
            browser_candidates=tuple(candidates),
            use_bundled_chromium=_as_bool(
                config.get("use_bundled_chromium", defaults.use_bundled_chromium)
            ),
            debug_port=int(config.get("debug_port", defaults.debug_port)),
            startup_timeout=float(
                config.get("startup_timeout", defaults.startup_timeout)
            ),
            load_timeout=float(config.get("load_timeout", defaults.load_timeout)),
            settle_delay=float(config.get("settle_delay", defaults.settle_delay)),
            request_timeout=float(
                config.get("request_timeout", defaults.request_timeout)
            ),
            log_level=str(config.get("log_level", defaults.log_level)).upper(),
        )


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@dataclass(frozen=True)
class ParsedDocument:
    """解析结果：HTML片段与文档树"""

    fragment: str
    tree: TreeNode


@dataclass(frozen=True)
class DrawCommand:
    """单条定位文本绘制指令，坐标单位为毫米"""

    text: str
    font_size: int
    x: float
    y: float


@dataclass
class ConversionResult:
    """转换结果"""

    success: bool
    output_path: Optional[Path] = None
    error_message: Optional[str] = None
    error_code: Optional[ErrorCode] = None
