"""Tests for the CLI module: arg parsing, exit codes, end-to-end."""

from __future__ import annotations

import io
import sys
from pathlib import Path

from slidemark.cli import CliOptions, build_parser, compile_file, main

# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_input_only(self) -> None:
        p = build_parser()
        ns = p.parse_args(["talk.slides"])
        assert ns.input == "talk.slides"
        assert ns.output is None
        assert ns.fragment is None

    def test_output_flag(self) -> None:
        p = build_parser()
        ns = p.parse_args(["talk.slides", "-o", "out.html"])
        assert ns.output == "out.html"

    def test_title_lang_flags(self) -> None:
        p = build_parser()
        ns = p.parse_args(["talk.slides", "--title", "Intro", "--lang", "bg"])
        assert ns.title == "Intro"
        assert ns.lang == "bg"

    def test_switches(self) -> None:
        p = build_parser()
        ns = p.parse_args(["talk.slides", "--fragment", "--watch", "--debug"])
        assert ns.fragment is True
        assert ns.watch is True
        assert ns.debug is True


# ---------------------------------------------------------------------------
# compile_file
# ---------------------------------------------------------------------------


def _options(path: Path, **overrides) -> CliOptions:
    values = dict(
        input_file=path,
        output_file=None,
        title=None,
        lang=None,
        fragment=False,
        watch=False,
        debug=False,
    )
    values.update(overrides)
    return CliOptions(**values)


class TestCompileFile:
    def test_full_document(self, tmp_path: Path) -> None:
        src = tmp_path / "talk.slides"
        src.write_text("= Hello\n* one\n", encoding="utf-8")
        html = compile_file(_options(src))
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Hello</title>" in html
        assert '<li class="action">one</li>' in html

    def test_title_from_first_slide_text(self, tmp_path: Path) -> None:
        src = tmp_path / "talk.slides"
        src.write_text("= The `map` *function*\n", encoding="utf-8")
        html = compile_file(_options(src))
        assert "<title>The map function</title>" in html

    def test_explicit_title(self, tmp_path: Path) -> None:
        src = tmp_path / "talk.slides"
        src.write_text("= Hello\n", encoding="utf-8")
        html = compile_file(_options(src, title="Lecture 1", lang="en"))
        assert "<title>Lecture 1</title>" in html
        assert '<html lang="en">' in html

    def test_fragment(self, tmp_path: Path) -> None:
        src = tmp_path / "talk.slides"
        src.write_text("= Hello\n", encoding="utf-8")
        html = compile_file(_options(src, fragment=True))
        assert html == '<section class="slide">\n<hgroup><h1>Hello</h1></hgroup>\n</section>\n'

    def test_debug_dumps_ast(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "talk.slides"
        src.write_text("= Hello\n", encoding="utf-8")
        compile_file(_options(src, debug=True))
        assert "Presentation" in capsys.readouterr().err

    def test_debug_dump_follows_current_stderr(self, tmp_path: Path, monkeypatch) -> None:
        src = tmp_path / "talk.slides"
        src.write_text("= Hello\n", encoding="utf-8")
        compile_file(_options(src))
        stream = io.StringIO()
        monkeypatch.setattr(sys, "stderr", stream)
        compile_file(_options(src, debug=True))
        assert stream.getvalue().startswith("Presentation\n  Slide @1\n")


# ---------------------------------------------------------------------------
# main: exit codes and output
# ---------------------------------------------------------------------------


class TestMain:
    def test_success_to_stdout(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "talk.slides"
        src.write_text("= Hello\n", encoding="utf-8")
        assert main([str(src)]) == 0
        assert "<h1>Hello</h1>" in capsys.readouterr().out

    def test_output_file(self, tmp_path: Path) -> None:
        src = tmp_path / "talk.slides"
        src.write_text("= Hello\n", encoding="utf-8")
        out = tmp_path / "talk.html"
        assert main([str(src), "-o", str(out)]) == 0
        assert "<h1>Hello</h1>" in out.read_text(encoding="utf-8")

    def test_parse_error_exit_code(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "talk.slides"
        src.write_text("= Hello\n`open\n", encoding="utf-8")
        assert main([str(src)]) == 1
        err = capsys.readouterr().err
        assert "unterminated inline code" in err
        assert f"{src}:2:6" in err

    def test_missing_input_file(self, tmp_path: Path, capsys) -> None:
        assert main([str(tmp_path / "missing.slides")]) == 2
        assert "error:" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "talk.slides"
        src.write_text("= Hello\n", encoding="utf-8")
        (tmp_path / "slidemark.toml").write_text("[document\n", encoding="utf-8")
        assert main([str(src)]) == 2
        assert "invalid config" in capsys.readouterr().err
