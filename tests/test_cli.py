"""
Tests for the command-line interface.
"""

import json

import click
import pytest
from click.testing import CliRunner

from eventtaxonomy import REGISTRY, WEB_HISTORY
from eventtaxonomy.cli import main, parse_attributes, resolve_type


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.delenv("EVENTTAXONOMY_LABELS", raising=False)
    monkeypatch.delenv("EVENTTAXONOMY_LOG_LEVEL", raising=False)
    return CliRunner()


class TestHelpers:
    def test_resolve_by_id_key_and_name(self):
        assert resolve_type(REGISTRY, "11") is WEB_HISTORY
        assert resolve_type(REGISTRY, "web_history") is WEB_HISTORY
        assert resolve_type(REGISTRY, "Web History") is WEB_HISTORY

    def test_resolve_unknown(self):
        with pytest.raises(click.BadParameter):
            resolve_type(REGISTRY, "Nonsense")

    def test_parse_attributes(self):
        assert parse_attributes(("tsk_name=Bob", "TSK_VALUE=a=b")) == {
            "TSK_NAME": "Bob",
            "TSK_VALUE": "a=b",
        }

    def test_parse_attributes_rejects_missing_separator(self):
        with pytest.raises(click.BadParameter):
            parse_attributes(("TSK_NAME",))


class TestTreeCommand:
    def test_full_tree(self, runner):
        result = runner.invoke(main, ["tree"])
        assert result.exit_code == 0
        assert "Web Activity (2)" in result.output
        assert "User Created (26)" in result.output

    def test_subtree(self, runner):
        result = runner.invoke(main, ["tree", "--root", "CUSTOM_TYPES"])
        assert result.exit_code == 0
        assert "Other (23)" in result.output
        assert "Web Activity" not in result.output

    def test_labels_file(self, runner, tmp_path):
        labels = tmp_path / "labels.json"
        labels.write_text(json.dumps({"BaseTypes.webActivity.name": "Browsing"}))
        result = runner.invoke(main, ["--labels", str(labels), "tree"])
        assert result.exit_code == 0
        assert "Browsing (2)" in result.output


class TestTypesCommand:
    def test_lists_all_types(self, runner):
        result = runner.invoke(main, ["types"])
        assert result.exit_code == 0
        assert "WEB_FORM_ADDRESSES" in result.output
        assert "ROOT_EVENT_TYPE" in result.output

    def test_filter_by_base(self, runner):
        result = runner.invoke(main, ["types", "--base", "FILE_SYSTEM"])
        assert result.exit_code == 0
        assert "FILE_MODIFIED" in result.output
        assert "MESSAGE" not in result.output


class TestDescribeCommand:
    def test_path_event_as_json(self, runner):
        result = runner.invoke(
            main, ["describe", "FILE_MODIFIED", "--path", "/a/b/c.txt", "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "full": "/a/b/c.txt",
            "medium": "/a/b",
            "short": "c.txt",
        }

    def test_message_table(self, runner):
        result = runner.invoke(
            main,
            [
                "describe",
                "MESSAGE",
                "--attr", "TSK_DIRECTION=Incoming",
                "--attr", "TSK_READ_STATUS=Read",
                "--attr", "TSK_PHONE_NUMBER=555-1234",
                "--attr", "TSK_SUBJECT=hi",
            ],
        )
        assert result.exit_code == 0
        assert "Incoming Read from 555-1234 hi" in result.output

    def test_exif_with_file_name(self, runner):
        result = runner.invoke(
            main,
            [
                "describe", "EXIF",
                "--object-id", "42",
                "--file-name", "IMG_0001.jpg",
                "--attr", "TSK_DEVICE_MAKE=Canon",
                "--json",
            ],
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"full": "IMG_0001.jpg", "medium": "", "short": "Canon"}

    def test_exif_lookup_failure(self, runner):
        result = runner.invoke(main, ["describe", "EXIF", "--object-id", "42"])
        assert result.exit_code == 1
        assert "Lookup failed" in result.output

    def test_base_type_rejected(self, runner):
        result = runner.invoke(main, ["describe", "WEB_ACTIVITY"])
        assert result.exit_code == 2
        assert "has no descriptions" in result.output

    def test_extra_attributes_ignored(self, runner):
        result = runner.invoke(
            main,
            [
                "describe", "OTHER",
                "--attr", "TSK_DESCRIPTION=hello",
                "--attr", "TSK_THREAD_ID=t1",
                "--json",
            ],
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout)["short"] == "hello"

    def test_unknown_type_rejected(self, runner):
        result = runner.invoke(main, ["describe", "NOT_A_TYPE"])
        assert result.exit_code == 2


class TestParseCommand:
    def test_path_type_recomputes(self, runner):
        result = runner.invoke(main, ["parse", "FILE_MODIFIED", "/a/b/c.txt", "x", "y", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "full": "/a/b/c.txt",
            "medium": "/a/b",
            "short": "c.txt",
        }

    def test_other_types_keep_strings(self, runner):
        result = runner.invoke(main, ["parse", "MESSAGE", "f", "m", "s", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"full": "f", "medium": "m", "short": "s"}
