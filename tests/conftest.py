"""
Общие фикстуры тестов.

fake_tools подменяет subprocess.run: вызовы pdfinfo и pdftotext
обслуживаются в памяти, реальные poppler-utils не нужны.
"""

import subprocess
import threading

import pytest

from pdfripper.config import settings


PDFINFO_TEMPLATE = """Title:          Quarterly report
Producer:       LibreOffice 7.5
Tagged:         no
Pages:          {pages}
Encrypted:      no
Page size:      595.276 x 841.89 pts (A4)
PDF version:    1.7
"""


class FakeTools:
    """
    Поддельные pdfinfo/pdftotext.

    Attributes:
        pages: сколько страниц "сообщает" pdfinfo
        pdfinfo_returncode: код возврата pdfinfo
        pdfinfo_stdout: вывод pdfinfo (None — шаблон с pages)
        failing_pages: страницы, на которых pdftotext возвращает 1
        extracted: номера страниц, переданные pdftotext (в порядке вызова)
    """

    def __init__(self):
        # Имена утилит на момент создания: тест может подменить settings
        self.pdfinfo_bin = settings.pdfinfo_bin
        self.pdftotext_bin = settings.pdftotext_bin
        self.pages = 5
        self.pdfinfo_returncode = 0
        self.pdfinfo_stdout = None
        self.failing_pages = set()
        self.extracted = []
        self.pdfinfo_calls = 0
        self._lock = threading.Lock()

    def run(self, command, capture_output=False, text=False, **kwargs):
        name = command[0]

        if name == self.pdfinfo_bin:
            self.pdfinfo_calls += 1
            stdout = self.pdfinfo_stdout
            if stdout is None:
                stdout = PDFINFO_TEMPLATE.format(pages=self.pages)
            stderr = "" if self.pdfinfo_returncode == 0 else "Syntax Error: Couldn't find trailer dictionary"
            return subprocess.CompletedProcess(command, self.pdfinfo_returncode, stdout, stderr)

        if name == self.pdftotext_bin:
            # pdftotext -f <k> -l <k> <pdf> <out>
            page = int(command[2])
            assert command[4] == str(page)
            with self._lock:
                self.extracted.append(page)

            if page in self.failing_pages:
                return subprocess.CompletedProcess(command, 1, "", f"Error: page {page} is broken")

            with open(command[-1], "w", encoding="utf-8") as f:
                f.write(f"text of page {page}\n")
            return subprocess.CompletedProcess(command, 0, "", "")

        raise FileNotFoundError(2, "No such file or directory", name)


@pytest.fixture
def fake_tools(monkeypatch):
    tools = FakeTools()
    monkeypatch.setattr(subprocess, "run", tools.run)
    return tools


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.7\n%fake\n")
    return path
