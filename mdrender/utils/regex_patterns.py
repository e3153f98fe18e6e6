"""
正则表达式模式集中管理模块

本模块集中定义和预编译解析适配层用到的正则表达式。
按功能分组，命名使用全大写+下划线。
"""

import re
from typing import Pattern

from markdown import util

# ============================================================================
# 文档树构建相关正则 (tree_builder.py)
# ============================================================================

# Python-Markdown 暂存原始HTML时留下的占位符，如 \x02wzxhzdk:3\x03
HTML_PLACEHOLDER: Pattern[str] = util.HTML_PLACEHOLDER_RE

# 反斜杠转义字符的占位形式 \x02<ord>\x03
ESCAPED_CHAR: Pattern[str] = re.compile(f"{util.STX}([0-9]+){util.ETX}")

# 其余扩展内部使用的占位符（脚注回链、不换行空格等）
STRAY_PLACEHOLDER: Pattern[str] = re.compile(f"{util.STX}[^{util.ETX}]*{util.ETX}")

# fenced_code 扩展暂存的代码块HTML
FENCED_CODE_HTML: Pattern[str] = re.compile(
    r"^\s*<pre[^>]*><code[^>]*>(.*)</code></pre>\s*$", re.DOTALL
)

# 被暂存的单个HTML实体，如 &copy; / &#169;
HTML_ENTITY: Pattern[str] = re.compile(r"&(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);")

# 任务列表项前缀 [ ] / [x]
TASK_MARKER: Pattern[str] = re.compile(r"^\s*\[([ xX])\]\s+")

# 脚注定义的 li id，如 fn:1
FOOTNOTE_ID: Pattern[str] = re.compile(r"^fn:")


# ============================================================================
# 行内语法扩展相关正则 (markdown_parser.py)
# ============================================================================

# ~~删除线~~
STRIKETHROUGH: str = r"(~{2})(.+?)~{2}"
