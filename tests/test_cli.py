"""Tests for the command line driver."""

import json

import pytest

from main import main

BODY = '''msgid "hello"
msgstr "bonjour"

msgid "cancel"
msgstr ""
'''


def test_converts_files(write_po, temp_dir, capsys):
    output = temp_dir / "out.json"
    main([write_po("a.po", BODY), "-o", str(output)])

    assert json.loads(output.read_text(encoding="utf-8")) == {
        "hello": "bonjour",
        "cancel": "cancel",
    }
    assert "Resource Summary" in capsys.readouterr().out


def test_config_file_policy(write_po, temp_dir):
    config = temp_dir / "config.yaml"
    config.write_text("msgfmt:\n  duplicates: first-wins\n", encoding="utf-8")
    first = write_po("a.po", BODY)
    second = write_po("b.po", 'msgid "hello"\nmsgstr "salut"\n')
    output = temp_dir / "out.json"

    main([first, second, "-o", str(output), "-c", str(config)])
    assert json.loads(output.read_text(encoding="utf-8"))["hello"] == "bonjour"


def test_command_line_overrides_config(write_po, temp_dir):
    config = temp_dir / "config.yaml"
    config.write_text("msgfmt:\n  duplicates: first-wins\n", encoding="utf-8")
    first = write_po("a.po", BODY)
    second = write_po("b.po", 'msgid "hello"\nmsgstr "salut"\n')
    output = temp_dir / "out.json"

    main([first, second, "-o", str(output), "-c", str(config), "--duplicates", "last-wins"])
    assert json.loads(output.read_text(encoding="utf-8"))["hello"] == "salut"


def test_missing_input_exits_with_error(temp_dir):
    with pytest.raises(SystemExit) as excinfo:
        main([str(temp_dir / "missing.po"), "-o", str(temp_dir / "out.json")])
    assert excinfo.value.code == 1


def test_duplicate_keys_exit_with_error(write_po, temp_dir, capsys):
    first = write_po("a.po", BODY)
    second = write_po("b.po", 'msgid "hello"\nmsgstr "salut"\n')
    with pytest.raises(SystemExit) as excinfo:
        main([first, second, "-o", str(temp_dir / "out.json"), "--duplicates", "keep-all"])
    assert excinfo.value.code == 1
    assert "Error adding item hello" in capsys.readouterr().out


def test_output_is_required(write_po):
    with pytest.raises(SystemExit) as excinfo:
        main([write_po("a.po", BODY)])
    assert excinfo.value.code == 2
