import pytest

from mdrender.domain.errors import IoFailureError
from mdrender.infrastructure.layout import CanvasWriter
from mdrender.types import DrawCommand


def test_writes_single_page_pdf(tmp_path):
    pdf_file = tmp_path / "out.pdf"
    commands = [
        DrawCommand(text="Title", font_size=24, x=20, y=270.2),
        DrawCommand(text="• item", font_size=12, x=25, y=250),
    ]

    CanvasWriter().write(commands, pdf_file)

    data = pdf_file.read_bytes()
    assert data.startswith(b"%PDF")
    assert b"/Count 1" in data


def test_empty_command_list_still_produces_a_page(tmp_path):
    pdf_file = tmp_path / "empty.pdf"
    CanvasWriter().write([], pdf_file)
    assert pdf_file.read_bytes().startswith(b"%PDF")


def test_unwritable_destination(tmp_path):
    with pytest.raises(IoFailureError):
        CanvasWriter().write([], tmp_path / "missing-dir" / "out.pdf")
