"""
HTML组装器
将HTML片段包装为带样式表的完整文档
"""

import html
from pathlib import Path
from typing import Optional

from ...domain.errors import IoFailureError

DEFAULT_TEMPLATE = Path(__file__).resolve().parent.parent.parent / "templates" / "template.html"


class HtmlAssembler:
    """HTML组装器"""

    def __init__(self, template_path: Path = DEFAULT_TEMPLATE):
        self._template_path = template_path
        self._template_cache: Optional[str] = None

    def assemble(self, fragment: str, css_url: str, css_class: str) -> str:
        """将HTML片段包装为完整文档

        片段原样插入且最后替换，片段中出现的占位符文本不会被展开。
        """
        page = self._load_template()
        page = page.replace("{{CSS_URL}}", html.escape(css_url, quote=True))
        page = page.replace("{{CSS_CLASS}}", html.escape(css_class, quote=True))
        return page.replace("{{CONTENT}}", fragment)

    def _load_template(self) -> str:
        """读取模板（首次读取后缓存）"""
        if self._template_cache is None:
            try:
                with open(self._template_path, "r", encoding="utf-8") as f:
                    self._template_cache = f.read()
            except OSError as e:
                raise IoFailureError(f"无法读取HTML模板 {self._template_path}: {e}")
        return self._template_cache
