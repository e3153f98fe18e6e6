"""
Markdown解析器
一次解析同时产出HTML片段和文档树
"""

import re

import markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import SimpleTagInlineProcessor
from loguru import logger

from ...types import ParsedDocument
from ...utils import log_execution, regex_patterns
from .tree_builder import TreeCaptureExtension


class StrikethroughExtension(Extension):
    """~~删除线~~ 语法"""

    def extendMarkdown(self, md: markdown.Markdown) -> None:
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(regex_patterns.STRIKETHROUGH, "del"),
            "strikethrough",
            40,
        )


class MarkdownParser:
    """Markdown解析器"""

    EXTENSIONS = ["tables", "fenced_code", "footnotes", "def_list"]

    @log_execution
    def parse(self, md_text: str) -> ParsedDocument:
        """解析Markdown，返回HTML片段和文档树"""
        md_text = self._preprocess_markdown(md_text)

        capture = TreeCaptureExtension()
        md = markdown.Markdown(
            extensions=[*self.EXTENSIONS, StrikethroughExtension(), capture]
        )
        fragment = md.convert(md_text)

        logger.debug(
            f"[MdRender] 解析完成，HTML片段长度: {len(fragment)}，"
            f"顶层节点数: {len(capture.tree.children)}"
        )
        return ParsedDocument(fragment=fragment, tree=capture.tree)

    def _preprocess_markdown(self, text: str) -> str:
        """预处理Markdown，补齐 Python-Markdown 比 CommonMark 更严格的空行要求"""
        lines = text.replace("\r\n", "\n").split("\n")
        result = []
        in_code_block = False

        for line in lines:
            stripped = line.strip()

            if stripped.startswith("```") or stripped.startswith("~~~"):
                if not in_code_block and result and result[-1].strip():
                    result.append("")
                in_code_block = not in_code_block
                result.append(line)
                continue

            if in_code_block:
                result.append(line)
                continue

            # 标题或列表项前需要空行
            is_heading = bool(re.match(r"^#{1,6}\s+", stripped))
            is_list_item = bool(re.match(r"^([-*+]|\d+\.)\s+", stripped))

            if (is_heading or is_list_item) and result:
                prev_line = result[-1].strip()
                prev_is_list = bool(re.match(r"^([-*+]|\d+\.)\s+", prev_line))
                prev_is_continuation = result[-1].startswith((" ", "\t"))
                if prev_line and (
                    is_heading or not (prev_is_list or prev_is_continuation)
                ):
                    result.append("")

            result.append(line)

        return "\n".join(result)
