import asyncio

import pytest

from mdrender.domain.errors import (
    ConversionFailedError,
    ErrorCode,
    ProcessUnavailableError,
)
from mdrender.infrastructure.pdf import WkhtmltopdfConverter
from mdrender.infrastructure.pdf.wkhtmltopdf_converter import CONVERT_FLAGS
from tests.conftest import requires_posix_shell

# Records its arguments next to the output and writes a tiny PDF.
WORKING_BINARY = """
if [ "$1" = "--version" ]; then echo "wkhtmltopdf 0.12.6"; exit 0; fi
for arg in "$@"; do out="$arg"; done
echo "$@" > "$(dirname "$out")/args.txt"
printf '%%PDF-1.4 fake' > "$out"
"""

FAILING_BINARY = """
echo "Exit with code 1 due to network error: ContentNotFoundError" >&2
exit 1
"""


@pytest.fixture
def html_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text("<p>Hello</p>", encoding="utf-8")
    return path


def test_missing_binary_is_process_unavailable(tmp_path, html_file):
    converter = WkhtmltopdfConverter(binary=str(tmp_path / "no-such-binary"))

    with pytest.raises(ProcessUnavailableError) as exc_info:
        asyncio.run(converter.convert(html_file, tmp_path / "out.pdf"))

    assert exc_info.value.code is ErrorCode.PROCESS_UNAVAILABLE
    assert "wkhtmltopdf" in exc_info.value.install_hint
    assert not (tmp_path / "out.pdf").exists()


@requires_posix_shell
def test_non_executable_binary_is_process_unavailable(tmp_path, html_file):
    binary = tmp_path / "wkhtmltopdf"
    binary.write_text("#!/bin/sh\nexit 0\n")
    binary.chmod(0o644)

    with pytest.raises(ProcessUnavailableError):
        asyncio.run(WkhtmltopdfConverter(str(binary)).convert(html_file, tmp_path / "out.pdf"))


@requires_posix_shell
def test_binary_lost_after_version_check_is_process_unavailable(fake_binary, tmp_path, html_file):
    # Answers --version, then drops its own execute bit before the real run.
    binary = fake_binary(
        "wkhtmltopdf",
        'if [ "$1" = "--version" ]; then chmod -x "$0"; echo "wkhtmltopdf 0.12.6"; exit 0; fi\n'
        "exit 0\n",
    )

    with pytest.raises(ProcessUnavailableError) as exc_info:
        asyncio.run(WkhtmltopdfConverter(str(binary)).convert(html_file, tmp_path / "out.pdf"))

    assert "wkhtmltopdf" in exc_info.value.install_hint


@requires_posix_shell
def test_nonzero_exit_is_conversion_failure(fake_binary, tmp_path, html_file):
    binary = fake_binary("wkhtmltopdf", FAILING_BINARY)
    pdf_file = tmp_path / "out.pdf"

    with pytest.raises(ConversionFailedError) as exc_info:
        asyncio.run(WkhtmltopdfConverter(str(binary)).convert(html_file, pdf_file))

    assert exc_info.value.code is ErrorCode.CONVERSION_FAILURE
    assert "ContentNotFoundError" in exc_info.value.stderr
    assert not pdf_file.exists()


@requires_posix_shell
def test_successful_conversion_passes_fixed_flags(fake_binary, tmp_path, html_file):
    binary = fake_binary("wkhtmltopdf", WORKING_BINARY)
    pdf_file = tmp_path / "out.pdf"

    asyncio.run(WkhtmltopdfConverter(str(binary)).convert(html_file, pdf_file))

    assert pdf_file.read_bytes() == b"%PDF-1.4 fake"
    recorded = (tmp_path / "args.txt").read_text().split()
    assert recorded == [*CONVERT_FLAGS, str(html_file), str(pdf_file)]


@requires_posix_shell
def test_probe_returns_version(fake_binary):
    binary = fake_binary("wkhtmltopdf", WORKING_BINARY)
    assert asyncio.run(WkhtmltopdfConverter(str(binary)).probe()) == "wkhtmltopdf 0.12.6"


def test_flags():
    assert CONVERT_FLAGS[:2] == ["--enable-local-file-access", "--print-media-type"]
    for side in ("top", "bottom", "left", "right"):
        index = CONVERT_FLAGS.index(f"--margin-{side}")
        assert CONVERT_FLAGS[index + 1] == "20mm"
    assert CONVERT_FLAGS[CONVERT_FLAGS.index("--page-size") + 1] == "A4"
    assert CONVERT_FLAGS[CONVERT_FLAGS.index("--encoding") + 1] == "UTF-8"
