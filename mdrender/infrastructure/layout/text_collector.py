"""
文本收集
把节点子树压平成一行纯文本，不保留任何样式标记
"""

from ...domain.tree import NodeKind, TreeNode

_LEAF_KINDS = (NodeKind.TEXT, NodeKind.CODE)
_BREAK_KINDS = (NodeKind.SOFT_BREAK, NodeKind.LINE_BREAK)


def collect_text(node: TreeNode) -> str:
    """递归拼接 Text/Code 的内容，软/硬换行记为一个空格"""
    if node.kind in _LEAF_KINDS:
        return node.literal
    if node.kind in _BREAK_KINDS:
        return " "
    return "".join(collect_text(child) for child in node.children)
