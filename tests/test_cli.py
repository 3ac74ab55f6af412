"""
Tests for the timespanparser command line entry point.
"""

import pytest

from timespanparser_cli.cli import entrance


class TestEntrance:

    def test_prints_span(self, capsys):
        entrance(["last", "week", "--now", "2023-10-25T12:33:17+00:00"])
        out = capsys.readouterr().out
        assert out.strip() == "2023-10-16T00:00:00+00:00 / 2023-10-23T00:00:00+00:00"

    def test_naive_now_with_timezone(self, capsys):
        entrance(["today", "--now", "2023-10-25T12:00:00", "--timezone", "+02:00"])
        out = capsys.readouterr().out
        assert out.strip() == "2023-10-25T00:00:00+02:00 / 2023-10-25T12:00:00+02:00"

    def test_single_quoted_phrase(self, capsys):
        """A phrase passed as one argument is split on whitespace."""
        entrance(["april to yesterday", "--now", "2024-03-21T12:00:00+00:00"])
        out = capsys.readouterr().out
        assert out.strip() == "2023-04-01T00:00:00+00:00 / 2024-03-21T00:00:00+00:00"

    def test_parse_error_exits(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            entrance(["this", "thursday", "--now", "2024-02-21T12:00:00+00:00"])
        assert excinfo.value.code == 2
        assert "Ambiguous phrase" in capsys.readouterr().err

    def test_empty_phrase_exits(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            entrance(["--now", "2024-02-21T12:00:00+00:00"])
        assert excinfo.value.code == 2
        assert "No time span given" in capsys.readouterr().err

    def test_invalid_now_exits(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            entrance(["today", "--now", "yesterday-ish"])
        assert excinfo.value.code == 2
        assert "--now" in capsys.readouterr().err

    def test_invalid_timezone_exits(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            entrance(["today", "--timezone", "Not/AZone"])
        assert excinfo.value.code == 2
        assert "TIMEZONE" in capsys.readouterr().err
