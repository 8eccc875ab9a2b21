"""Тесты определения числа страниц (pdfinfo)."""

import pytest

from pdfripper.config import settings
from pdfripper.exceptions import ExternalToolError, ParseError
from pdfripper.services.page_counter import count_pages, parse_page_count
from tests.conftest import PDFINFO_TEMPLATE


def test_parse_simple_line():
    assert parse_page_count("Pages: 42") == 42


def test_parse_full_pdfinfo_output():
    assert parse_page_count(PDFINFO_TEMPLATE.format(pages=318)) == 318


def test_parse_zero_pages_is_valid():
    assert parse_page_count("Title: empty\nPages: 0\n") == 0


def test_parse_missing_line():
    with pytest.raises(ParseError):
        parse_page_count("Title: x\nProducer: y\n")


def test_parse_empty_output():
    with pytest.raises(ParseError):
        parse_page_count("")


def test_parse_non_numeric_value():
    with pytest.raises(ParseError):
        parse_page_count("Pages: abc")


def test_parse_negative_value():
    with pytest.raises(ParseError):
        parse_page_count("Pages: -3\n")


def test_parse_label_must_start_line():
    with pytest.raises(ParseError):
        parse_page_count("Custom Pages: 12\n")


def test_parse_skips_label_without_value():
    assert parse_page_count("Pages:\nPages: 7\n") == 7


def test_count_pages(fake_tools, pdf_file):
    fake_tools.pages = 12
    assert count_pages(str(pdf_file)) == 12
    assert fake_tools.pdfinfo_calls == 1


def test_count_pages_tool_failed(fake_tools, pdf_file):
    fake_tools.pdfinfo_returncode = 1

    with pytest.raises(ExternalToolError) as exc_info:
        count_pages(str(pdf_file))

    assert exc_info.value.returncode == 1
    assert "trailer" in exc_info.value.stderr
    assert exc_info.value.command == [settings.pdfinfo_bin, str(pdf_file)]


def test_count_pages_tool_missing(fake_tools, pdf_file, monkeypatch):
    monkeypatch.setattr(settings, "pdfinfo_bin", "no-such-pdfinfo")

    with pytest.raises(ExternalToolError) as exc_info:
        count_pages(str(pdf_file))

    assert exc_info.value.returncode is None
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_count_pages_unparseable_output(fake_tools, pdf_file):
    fake_tools.pdfinfo_stdout = "Pages: many\n"

    with pytest.raises(ParseError):
        count_pages(str(pdf_file))
