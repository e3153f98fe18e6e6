"""
文档树构建器
在 Python-Markdown 序列化之前截获 ElementTree，转换为 TreeNode 树
"""

import html
import xml.etree.ElementTree as etree
from typing import Optional

from markdown import Markdown
from markdown.extensions import Extension
from markdown.serializers import to_html_string
from markdown.treeprocessors import Treeprocessor

from ...domain.tree import NodeKind, TreeNode
from ...utils import regex_patterns

# 在 inline(20) 与 footnote-duplicate(15) 之后、prettify(10) 之前运行，
# 此时行内元素已展开，块级文本还未被插入换行
TREE_CAPTURE_PRIORITY = 12

_TAG_KINDS = {
    "p": NodeKind.PARAGRAPH,
    "ul": NodeKind.LIST,
    "ol": NodeKind.LIST,
    "em": NodeKind.EMPHASIS,
    "i": NodeKind.EMPHASIS,
    "strong": NodeKind.STRONG,
    "b": NodeKind.STRONG,
    "br": NodeKind.LINE_BREAK,
    "hr": NodeKind.THEMATIC_BREAK,
    "blockquote": NodeKind.BLOCK_QUOTE,
    "table": NodeKind.TABLE,
    "tr": NodeKind.TABLE_ROW,
    "th": NodeKind.TABLE_CELL,
    "td": NodeKind.TABLE_CELL,
    "dl": NodeKind.DESCRIPTION_LIST,
    "dt": NodeKind.DESCRIPTION_TERM,
    "dd": NodeKind.DESCRIPTION_DETAILS,
    "a": NodeKind.LINK,
    "del": NodeKind.STRIKETHROUGH,
    "s": NodeKind.STRIKETHROUGH,
}

_HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}

# 块级容器中只含空白的文本不产生 Text 节点
_BLOCK_CONTAINERS = {
    NodeKind.DOCUMENT,
    NodeKind.LIST,
    NodeKind.TABLE,
    NodeKind.TABLE_ROW,
    NodeKind.BLOCK_QUOTE,
    NodeKind.DESCRIPTION_LIST,
    NodeKind.DESCRIPTION_ITEM,
}


class TreeCaptureProcessor(Treeprocessor):
    """将 ElementTree 转换为 TreeNode 树，同时为任务列表项插入复选框"""

    def __init__(self, md: Markdown, extension: "TreeCaptureExtension"):
        super().__init__(md)
        self._extension = extension

    def run(self, root: etree.Element) -> None:
        document = TreeNode(NodeKind.DOCUMENT)
        self._convert_children(root, document)
        self._extension.tree = document

    def _convert_children(self, element: etree.Element, parent: TreeNode) -> None:
        self._append_text(element.text, parent)
        for child in element:
            self._convert(child, parent)
            self._append_text(child.tail, parent)

    def _convert(self, element: etree.Element, parent: TreeNode) -> None:
        tag = element.tag if isinstance(element.tag, str) else ""
        css_class = element.get("class", "")

        if tag in _HEADING_TAGS:
            node = parent.append(TreeNode(NodeKind.HEADING, level=_HEADING_TAGS[tag]))
            self._convert_children(element, node)
        elif tag == "p":
            block = self._stashed_block(element)
            if block is not None:
                parent.append(block)
            else:
                self._convert_children(element, parent.append(TreeNode(NodeKind.PARAGRAPH)))
        elif tag == "li":
            self._convert_item(element, parent)
        elif tag == "pre":
            code = element.find("code")
            source = code if code is not None else element
            literal = html.unescape("".join(source.itertext()))
            parent.append(TreeNode(NodeKind.CODE_BLOCK, literal=literal))
        elif tag == "code":
            literal = html.unescape("".join(element.itertext()))
            parent.append(TreeNode(NodeKind.CODE, literal=literal))
        elif tag == "img":
            node = parent.append(TreeNode(NodeKind.IMAGE, literal=element.get("src", "")))
            self._append_text(element.get("alt", ""), node)
        elif tag == "sup" and element.get("id", "").startswith("fnref"):
            node = parent.append(TreeNode(NodeKind.FOOTNOTE_REFERENCE))
            self._convert_children(element, node)
        elif tag == "a" and "footnote-backref" in css_class:
            return
        elif tag == "div" and "footnote" in css_class.split():
            self._convert_footnotes(element, parent)
        elif tag == "dl":
            self._convert_description_list(element, parent)
        elif tag in ("thead", "tbody"):
            # 表头/表体不单独建节点，行直接挂在表格下
            self._convert_children(element, parent)
        elif tag in _TAG_KINDS:
            node = parent.append(TreeNode(_TAG_KINDS[tag]))
            self._convert_children(element, node)
        else:
            self._convert_children(element, parent)

    def _convert_item(self, element: etree.Element, parent: TreeNode) -> None:
        holder = element
        if not (element.text or "").strip() and len(element) and element[0].tag == "p":
            holder = element[0]

        match = regex_patterns.TASK_MARKER.match(holder.text or "")
        if match is None:
            self._convert_children(element, parent.append(TreeNode(NodeKind.ITEM)))
            return

        checked = match.group(1) in "xX"
        holder.text = holder.text[match.end():]
        node = parent.append(TreeNode(NodeKind.TASK_ITEM, checked=checked))
        self._convert_children(element, node)
        self._insert_checkbox(element, holder, checked)

    def _insert_checkbox(
        self, item: etree.Element, holder: etree.Element, checked: bool
    ) -> None:
        item.set("class", "task-list-item")
        checkbox = etree.Element("input", {"type": "checkbox", "disabled": "disabled"})
        if checked:
            checkbox.set("checked", "checked")
        checkbox.tail = " " + holder.text if holder.text else " "
        holder.text = None
        holder.insert(0, checkbox)

    def _convert_footnotes(self, element: etree.Element, parent: TreeNode) -> None:
        for item in element.iter("li"):
            if regex_patterns.FOOTNOTE_ID.match(item.get("id", "")):
                node = parent.append(TreeNode(NodeKind.FOOTNOTE_DEFINITION))
                self._convert_children(item, node)

    def _convert_description_list(self, element: etree.Element, parent: TreeNode) -> None:
        dl = parent.append(TreeNode(NodeKind.DESCRIPTION_LIST))
        current: Optional[TreeNode] = None
        for child in element:
            if child.tag == "dt" or current is None:
                current = dl.append(TreeNode(NodeKind.DESCRIPTION_ITEM))
            self._convert(child, current)

    def _stashed_block(self, element: etree.Element) -> Optional[TreeNode]:
        """整段只有一个原始HTML占位符时，还原为 HtmlBlock 或围栏代码块"""
        if len(element):
            return None
        match = regex_patterns.HTML_PLACEHOLDER.fullmatch((element.text or "").strip())
        if match is None:
            return None
        raw = self._stash_lookup(int(match.group(1)))
        code = regex_patterns.FENCED_CODE_HTML.match(raw)
        if code:
            return TreeNode(NodeKind.CODE_BLOCK, literal=html.unescape(code.group(1)))
        return TreeNode(NodeKind.HTML_BLOCK, literal=raw)

    def _stash_lookup(self, index: int) -> str:
        blocks = self.md.htmlStash.rawHtmlBlocks
        if index >= len(blocks):
            return ""
        raw = blocks[index]
        return raw if isinstance(raw, str) else to_html_string(raw)

    def _append_text(self, text: Optional[str], parent: TreeNode) -> None:
        if not text:
            return
        if parent.kind in _BLOCK_CONTAINERS and not text.strip():
            return

        position = 0
        for match in regex_patterns.HTML_PLACEHOLDER.finditer(text):
            self._append_plain(text[position:match.start()], parent)
            raw = self._stash_lookup(int(match.group(1)))
            if regex_patterns.HTML_ENTITY.fullmatch(raw):
                self._append_plain(html.unescape(raw), parent)
            else:
                parent.append(TreeNode(NodeKind.HTML_INLINE, literal=raw))
            position = match.end()
        self._append_plain(text[position:], parent)

    def _append_plain(self, text: str, parent: TreeNode) -> None:
        text = regex_patterns.ESCAPED_CHAR.sub(lambda m: chr(int(m.group(1))), text)
        text = regex_patterns.STRAY_PLACEHOLDER.sub("", text)
        lines = text.split("\n")
        for index, line in enumerate(lines):
            if index:
                parent.append(TreeNode(NodeKind.SOFT_BREAK))
            if line:
                parent.append(TreeNode.text(line))


class TreeCaptureExtension(Extension):
    """注册 TreeCaptureProcessor，转换结束后 tree 属性保存文档树"""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.tree = TreeNode(NodeKind.DOCUMENT)

    def extendMarkdown(self, md: Markdown) -> None:
        md.treeprocessors.register(
            TreeCaptureProcessor(md, self), "tree_capture", TREE_CAPTURE_PRIORITY
        )
