"""Tests for mdir CLI commands."""

import os

import pytest
from click.testing import CliRunner

from mdir import Dir
from mdir.cli import main

MESSAGE = (
    b"From: alice@example.com\n"
    b"To: bob@example.com\n"
    b"Subject: Lunch\n"
    b"\n"
    b"See you at noon.\n"
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def box(maildir):
    """Args selecting the test maildir."""
    return ["-m", str(maildir.path)]


class TestInit:
    def test_init(self, runner, tmp_path):
        path = tmp_path / "Mail"
        result = runner.invoke(main, ["init", str(path)])
        assert result.exit_code == 0
        assert "Initialized maildir" in result.output
        assert Dir(path).is_maildir()

    def test_init_from_option(self, runner, tmp_path):
        path = tmp_path / "Mail"
        result = runner.invoke(main, ["-m", str(path), "init"])
        assert result.exit_code == 0
        assert Dir(path).is_maildir()

    def test_init_already_exists(self, runner, maildir):
        result = runner.invoke(main, ["init", str(maildir.path)])
        assert result.exit_code == 0
        assert "Already initialized" in result.output

    def test_init_no_path(self, runner):
        result = runner.invoke(main, ["init"])
        assert result.exit_code == 1

    def test_alias(self, runner, tmp_path):
        result = runner.invoke(main, ["i", str(tmp_path / "Mail")])
        assert result.exit_code == 0


class TestRequireMaildir:
    def test_no_maildir(self, runner):
        result = runner.invoke(main, ["ls"])
        assert result.exit_code == 1

    def test_not_a_maildir(self, runner, tmp_path):
        result = runner.invoke(main, ["-m", str(tmp_path), "ls"])
        assert result.exit_code == 1

    def test_maildir_from_env(self, runner, maildir, monkeypatch):
        monkeypatch.setenv("MAILDIR", str(maildir.path))
        (maildir.cur / "a:2,S").write_bytes(b"")
        result = runner.invoke(main, ["ls", "-k"])
        assert result.exit_code == 0
        assert result.output.split() == ["a"]


class TestKey:
    def test_key(self, runner):
        result = runner.invoke(main, ["key", "-n", "3"])
        assert result.exit_code == 0
        keys = result.output.split()
        assert len(keys) == 3
        assert len(set(keys)) == 3


class TestDeliverAndList:
    def test_deliver_stdin(self, runner, maildir, box):
        result = runner.invoke(main, [*box, "deliver"], input=MESSAGE)
        assert result.exit_code == 0
        key = result.output.strip()
        assert maildir.new_keys() == [key]

    def test_deliver_file_with_flags(self, runner, maildir, box, tmp_path):
        msg = tmp_path / "msg.eml"
        msg.write_bytes(MESSAGE)
        result = runner.invoke(main, [*box, "deliver", "-f", "SR", str(msg)])
        assert result.exit_code == 0
        key = result.output.strip()
        assert maildir.flags(key) == ["R", "S"]

    def test_ls_keys_only(self, runner, maildir, box):
        (maildir.cur / "b:2,S").write_bytes(b"")
        (maildir.cur / "a:2,").write_bytes(b"")
        (maildir.cur / ".hidden").write_bytes(b"")
        result = runner.invoke(main, [*box, "ls", "-k"])
        assert result.exit_code == 0
        assert result.output.split() == ["a", "b"]

    def test_ls_new(self, runner, maildir, box):
        (maildir.new / "n").write_bytes(b"")
        result = runner.invoke(main, [*box, "ls", "-n", "-k"])
        assert result.output.split() == ["n"]

    def test_ls_table(self, runner, maildir, box):
        (maildir.cur / "a:2,S").write_bytes(MESSAGE)
        (maildir.cur / "b:1,x").write_bytes(MESSAGE)
        result = runner.invoke(main, [*box, "ls", "-s"])
        assert result.exit_code == 0
        assert "2 messages in cur/" in result.output
        assert "Lunch" in result.output

    def test_ls_empty(self, runner, box):
        result = runner.invoke(main, [*box, "ls"])
        assert result.exit_code == 0
        assert "0 messages in cur/" in result.output


class TestUnseen:
    def test_unseen(self, runner, maildir, box):
        (maildir.new / "a").write_bytes(b"")
        (maildir.new / "b").write_bytes(b"")
        result = runner.invoke(main, [*box, "unseen"])
        assert result.exit_code == 0
        assert sorted(result.output.split()) == ["a", "b"]
        assert sorted(os.listdir(maildir.cur)) == ["a:2,S", "b:2,S"]

    def test_separator_option(self, runner, tmp_path):
        d = Dir.create(tmp_path / "box", separator=";")
        (d.new / "a").write_bytes(b"")
        result = runner.invoke(main, ["-m", str(d.path), "-S", ";", "unseen"])
        assert result.exit_code == 0
        assert os.listdir(d.cur) == ["a;2,S"]

    def test_bad_separator_option(self, runner, box):
        result = runner.invoke(main, [*box, "-S", "//", "unseen"])
        assert result.exit_code == 2

    def test_hex_separator_option(self, runner, box):
        result = runner.invoke(main, [*box, "-S", "0", "unseen"])
        assert result.exit_code == 2


class TestFlags:
    def test_flags(self, runner, maildir, box):
        (maildir.cur / "k:2,SR").write_bytes(b"")
        result = runner.invoke(main, [*box, "flags", "k"])
        assert result.exit_code == 0
        assert result.output.strip() == "RS"

    def test_flags_long(self, runner, maildir, box):
        (maildir.cur / "k:2,SR").write_bytes(b"")
        result = runner.invoke(main, [*box, "flags", "-l", "k"])
        assert result.output.strip() == "replied, seen"

    def test_flags_bad_info(self, runner, maildir, box):
        (maildir.cur / "k:1,x").write_bytes(b"")
        result = runner.invoke(main, [*box, "flags", "k"])
        assert result.exit_code == 1

    def test_flags_ambiguous(self, runner, maildir, box):
        (maildir.cur / "key:2,S").write_bytes(b"")
        (maildir.cur / "key2:2,S").write_bytes(b"")
        result = runner.invoke(main, [*box, "flags", "key"])
        assert result.exit_code == 1

    def test_set_info(self, runner, maildir, box):
        (maildir.cur / "k:2,S").write_bytes(b"")
        result = runner.invoke(main, [*box, "set-info", "k", "2,SR"])
        assert result.exit_code == 0
        assert os.listdir(maildir.cur) == ["k:2,SR"]
        assert maildir.flags("k") == ["R", "S"]

    def test_set_flags(self, runner, maildir, box):
        (maildir.cur / "k:2,S").write_bytes(b"")
        result = runner.invoke(main, [*box, "set-flags", "k", "TF"])
        assert result.exit_code == 0
        assert os.listdir(maildir.cur) == ["k:2,FT"]

    def test_set_flags_add_remove(self, runner, maildir, box):
        (maildir.cur / "k:2,S").write_bytes(b"")
        runner.invoke(main, [*box, "set-flags", "-a", "k", "F"])
        assert os.listdir(maildir.cur) == ["k:2,FS"]
        runner.invoke(main, [*box, "sf", "-r", "k", "S"])
        assert os.listdir(maildir.cur) == ["k:2,F"]

    def test_set_flags_exclusive(self, runner, maildir, box):
        (maildir.cur / "k:2,S").write_bytes(b"")
        result = runner.invoke(main, [*box, "set-flags", "-a", "-r", "k", "F"])
        assert result.exit_code == 2


class TestShow:
    def test_show(self, runner, maildir, box):
        (maildir.cur / "k:2,S").write_bytes(MESSAGE)
        result = runner.invoke(main, [*box, "show", "k"])
        assert result.exit_code == 0
        assert "Subject: Lunch" in result.output
        assert "See you at noon." in result.output

    def test_show_headers(self, runner, maildir, box):
        (maildir.cur / "k:2,S").write_bytes(MESSAGE)
        result = runner.invoke(main, [*box, "show", "-H", "k"])
        assert "To: bob@example.com" in result.output
        assert "See you" not in result.output

    def test_show_raw(self, runner, maildir, box):
        (maildir.cur / "k:2,S").write_bytes(MESSAGE)
        result = runner.invoke(main, [*box, "show", "-r", "k"])
        assert result.stdout_bytes == MESSAGE

    def test_show_missing(self, runner, box):
        result = runner.invoke(main, [*box, "show", "nope"])
        assert result.exit_code == 1


class TestConfigCmd:
    def test_show_default(self, runner):
        result = runner.invoke(main, ["config"])
        assert result.exit_code == 0
        assert "separator" in result.output

    def test_set(self, runner, tmp_path):
        result = runner.invoke(main, ["config", "-m", str(tmp_path / "Mail"), "-S", ";"])
        assert result.exit_code == 0
        assert "Saved config" in result.output
        text = (tmp_path / "config" / "config.yaml").read_text()
        assert "Mail" in text
        assert ";" in text

    def test_config_used_by_commands(self, runner, tmp_path):
        d = Dir.create(tmp_path / "box", separator=";")
        (d.new / "a").write_bytes(b"")
        runner.invoke(main, ["config", "-m", str(d.path), "-S", ";"])
        result = runner.invoke(main, ["unseen"])
        assert result.exit_code == 0
        assert os.listdir(d.cur) == ["a;2,S"]
