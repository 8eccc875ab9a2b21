"""Тесты CLI."""

import os

from pdfripper.cli import main


def test_missing_input_is_usage_error(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().out.lower()


def test_successful_run(fake_tools, pdf_file, tmp_path, capsys):
    out = tmp_path / "pages"

    code = main(["-input", str(pdf_file), "-output", str(out), "-processes", "2"])

    assert code == 0
    assert "Extraction complete." in capsys.readouterr().out
    assert len(os.listdir(out)) == 5


def test_double_dash_flags(fake_tools, pdf_file, tmp_path):
    out = tmp_path / "pages"
    assert main(["--input", str(pdf_file), "--output", str(out)]) == 0
    assert len(os.listdir(out)) == 5


def test_failed_page_exit_code(fake_tools, pdf_file, tmp_path, capsys):
    fake_tools.failing_pages = {1}

    code = main(["-input", str(pdf_file), "-output", str(tmp_path / "pages")])

    assert code == 1
    assert "Extraction complete." not in capsys.readouterr().out


def test_page_count_failure_exit_code(fake_tools, pdf_file, tmp_path):
    fake_tools.pdfinfo_returncode = 2
    assert main(["-input", str(pdf_file), "-output", str(tmp_path / "pages")]) == 1
    assert fake_tools.extracted == []


def test_output_dir_defaults_to_pdf_name(fake_tools, pdf_file, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["-input", str(pdf_file)]) == 0
    assert (tmp_path / "report" / "page_1.txt").is_file()


def test_negative_page_count_exit_code(fake_tools, pdf_file, tmp_path):
    fake_tools.pdfinfo_stdout = "Pages: -3\n"

    assert main(["-input", str(pdf_file), "-output", str(tmp_path / "pages")]) == 1
    assert fake_tools.extracted == []
