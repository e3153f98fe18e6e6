import pytest

from mdrender.domain.tree import NodeKind, TreeNode
from mdrender.infrastructure.layout import LayoutEngine, PageGeometry, collect_text
from tests.conftest import doc, item, para, text


# --- Text collection ---

def test_collect_text_strips_nested_styles():
    node = TreeNode.of(NodeKind.STRONG, TreeNode.of(NodeKind.EMPHASIS, text("x")))
    assert collect_text(node) == "x"


def test_collect_text_soft_break_becomes_space():
    node = para(text("a"), TreeNode(NodeKind.SOFT_BREAK), text("b"))
    assert collect_text(node) == "a b"


def test_collect_text_line_break_becomes_space():
    node = para(text("a"), TreeNode(NodeKind.LINE_BREAK), text("b"))
    assert collect_text(node) == "a b"


def test_collect_text_includes_code_and_other_kinds():
    node = para(
        text("run "),
        TreeNode(NodeKind.CODE, literal="make"),
        text(" or see "),
        TreeNode.of(NodeKind.LINK, text("docs")),
    )
    assert collect_text(node) == "run make or see docs"


def test_collect_text_empty_container():
    assert collect_text(TreeNode(NodeKind.BLOCK_QUOTE)) == ""


# --- Layout engine ---

def test_heading_sizes_non_increasing_and_y_strictly_decreasing():
    root = doc(*[TreeNode.heading(level, text(f"h{level}")) for level in range(1, 7)])
    commands = LayoutEngine().layout(root)

    assert [c.font_size for c in commands] == [24, 20, 16, 14, 14, 14]
    ys = [c.y for c in commands]
    assert all(a > b for a, b in zip(ys, ys[1:]))
    assert all(c.x == 20 for c in commands)


def test_heading_advances_before_and_after_drawing():
    root = doc(TreeNode.heading(1, text("Title")), TreeNode.heading(2, text("Sub")))
    first, second = LayoutEngine().layout(root)

    assert first.y == pytest.approx(297 - 10 - 24 * 0.7)
    assert second.y == pytest.approx(first.y - 4 - 20 * 0.7)


def test_single_paragraph():
    commands = LayoutEngine().layout(doc(para(text("Hello"))))

    assert len(commands) == 1
    assert commands[0].text == "Hello"
    assert commands[0].font_size == 12
    assert commands[0].x == 20
    assert commands[0].y == pytest.approx(277)


def test_list_items_get_bullets_and_indent():
    root = doc(TreeNode.of(NodeKind.LIST, item(text("a")), item(text("b"))))
    commands = LayoutEngine().layout(root)

    assert [c.text for c in commands] == ["• a", "• b"]
    assert all(c.x == 25 and c.font_size == 12 for c in commands)
    assert commands[0].y == pytest.approx(279)
    assert commands[1].y == pytest.approx(269)


def test_list_alone_as_root():
    root = TreeNode.of(NodeKind.LIST, item(text("a")), item(text("b")))
    commands = LayoutEngine().layout(root)
    assert len(commands) == 2
    assert commands[0].y > commands[1].y


def test_unsupported_containers_still_render_nested_blocks():
    root = doc(
        TreeNode.of(NodeKind.BLOCK_QUOTE, para(text("quoted"))),
        TreeNode.of(
            NodeKind.TABLE,
            TreeNode.of(
                NodeKind.TABLE_ROW,
                TreeNode.of(NodeKind.TABLE_CELL, TreeNode.heading(3, text("cell"))),
            ),
        ),
    )
    commands = LayoutEngine().layout(root)

    assert [(c.text, c.font_size) for c in commands] == [("quoted", 12), ("cell", 16)]


def test_unsupported_container_without_blocks_emits_nothing():
    root = doc(
        TreeNode.of(NodeKind.BLOCK_QUOTE, text("loose text")),
        TreeNode(NodeKind.THEMATIC_BREAK),
        TreeNode(NodeKind.CODE_BLOCK, literal="print(1)"),
    )
    assert LayoutEngine().layout(root) == []


def test_task_items_fall_back_to_generic_rule():
    task = TreeNode(NodeKind.TASK_ITEM, [para(text("todo"))], checked=False)
    root = doc(TreeNode.of(NodeKind.LIST, task, item(text("plain"))))
    commands = LayoutEngine().layout(root)

    assert [(c.text, c.x) for c in commands] == [("todo", 20), ("• plain", 25)]


def test_empty_tree_produces_no_commands():
    assert LayoutEngine().layout(doc()) == []


def test_overflow_renders_off_page():
    root = doc(*[para(text(str(i))) for i in range(30)])
    commands = LayoutEngine().layout(root)

    assert len(commands) == 30
    assert commands[-1].y < 0


def test_custom_geometry():
    engine = LayoutEngine(PageGeometry(height=100, top_offset=0))
    (command,) = engine.layout(doc(para(text("x"))))
    assert command.y == pytest.approx(90)
