"""
Tests for the tb command line (tb/)
"""

import json

import pytest

from tb.cli import build_parser, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TEXTBOOK_NAMESPACE", "TEXTBOOK_BOOK", "TEXT_REPOSITORY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def source_file(tmp_path, sample_source):
    path = tmp_path / "v1.md"
    path.write_text(sample_source, encoding="utf-8")
    return path


class TestParser:
    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_compile_defaults(self):
        args = build_parser().parse_args(["compile"])
        assert args.source is None
        assert args.out is None
        assert not args.show


class TestRefCommand:
    def test_exact(self, capsys):
        main(["ref", "acme:v1/exercise/1.2(ii)"])
        out = capsys.readouterr().out
        assert "list_item" in out
        assert "#exercise-1.2(ii)" in out
        assert "V1 HW 1.2(ii)" in out

    def test_partial(self, capsys):
        main(["ref", "acme:v1/text/1.", "--partial"])
        out = capsys.readouterr().out
        assert "chapter" in out
        assert "kanoniczna" not in out

    def test_invalid_reference_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["ref", "acme:v1/result/1(ab)"])
        assert exc.value.code == 1
        assert "Nieprawidłowa referencja" in capsys.readouterr().out


class TestCompileCommand:
    def test_json_on_stdout(self, capsys, source_file):
        main(["compile", str(source_file)])
        captured = capsys.readouterr()
        tree = json.loads(captured.out)
        assert tree["1"]["page"] == 3
        assert "Pominięte tagi (1)" in captured.err

    def test_out_file(self, capsys, source_file, tmp_path):
        out = tmp_path / "v1.json"
        main(["compile", str(source_file), "--out", str(out), "--book", "v9"])
        tree = json.loads(out.read_text(encoding="utf-8"))
        assert tree["1"]["reference"] == "acme:v9/text/1"
        assert capsys.readouterr().out == ""

    def test_source_from_repository(self, capsys, monkeypatch, source_file):
        monkeypatch.setenv("TEXT_REPOSITORY", str(source_file.parent))
        main(["compile", "--show"])
        err = capsys.readouterr().err
        assert "1.1.1" in err

    def test_no_source_and_no_repository(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["compile"])
        assert exc.value.code == 1

    def test_compile_error_exits(self, capsys, tmp_path):
        path = tmp_path / "broken.md"
        path.write_text('# 1: A\n\n<result id="1">\nNo end.\n', encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["compile", str(path)])
        assert exc.value.code == 1
        assert "Błąd kompilacji" in capsys.readouterr().err

    def test_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["compile", str(tmp_path / "missing.md")])
        assert exc.value.code == 1


class TestValidateCommand:
    def test_valid_json(self, capsys, source_file, tmp_path):
        out = tmp_path / "v1.json"
        main(["compile", str(source_file), "--out", str(out)])
        capsys.readouterr()
        main(["validate", str(out)])
        assert "OK" in capsys.readouterr().out

    def test_source_with_duplicates(self, capsys, tmp_path):
        path = tmp_path / "dup.md"
        path.write_text('# 1: A\n\n<figure id="1">\nx\n</figure>\n\n<figure id="1">\ny\n</figure>\n', encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["validate", str(path), "--quiet"])
        assert exc.value.code == 1
        assert "E_DUPLICATE_REFERENCE" in capsys.readouterr().out

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["validate", str(path)])
        assert exc.value.code == 1


class TestLinksCommand:
    def test_unknown_links_are_counted(self, capsys, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("See [[acme:v1/result/1.2]]\nand [[squeeze]].\n", encoding="utf-8")
        main(["links", str(path)])
        out = capsys.readouterr().out
        assert "#result-1.2" in out
        assert "2 linków, 1 nierozpoznanych" in out
