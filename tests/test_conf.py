"""
Tests for settings and the package-level parse() entry point.
"""

import pytest
from datetime import datetime, timedelta, timezone

import timespanparser
from timespanparser.conf import (
    Settings,
    SettingValidationError,
    apply_settings,
    resolve_timezone,
    settings as default_settings,
)
from timespanparser.parser import Context
from timespanparser.timespan import TimeSpan
from timespanparser.timestamp import Timestamp


def ts(year, month, day, hour=0, minute=0, second=0, offset_hours=0):
    tz = timezone(timedelta(hours=offset_hours))
    return Timestamp(datetime(year, month, day, hour, minute, second, tzinfo=tz))


class TestSettings:

    def test_defaults(self):
        assert default_settings.TIMEZONE == "local"
        assert default_settings.RELATIVE_BASE is False
        assert default_settings._default is True

    def test_replace_returns_new_instance(self):
        modified = default_settings.replace(TIMEZONE="UTC")
        assert modified.TIMEZONE == "UTC"
        assert modified._default is False
        assert default_settings.TIMEZONE == "local"

    def test_replace_rejects_none(self):
        with pytest.raises(TypeError):
            default_settings.replace(TIMEZONE=None)

    def test_apply_settings_converts_dict(self):
        @apply_settings
        def get(settings=None):
            return settings

        result = get(settings={"TIMEZONE": "+02:00"})
        assert isinstance(result, Settings)
        assert result.TIMEZONE == "+02:00"
        assert result.RELATIVE_BASE is False

    def test_apply_settings_default(self):
        @apply_settings
        def get(settings=None):
            return settings

        assert get() is default_settings

    def test_apply_settings_rejects_other_types(self):
        @apply_settings
        def get(settings=None):
            return settings

        with pytest.raises(TypeError):
            get(settings=["TIMEZONE"])

    def test_unknown_setting(self):
        with pytest.raises(SettingValidationError):
            timespanparser.parse("today", settings={"PREFER_FUTURE": True})

    def test_timezone_must_be_str(self):
        with pytest.raises(SettingValidationError):
            timespanparser.parse("today", settings={"TIMEZONE": 2})

    def test_unknown_timezone(self):
        with pytest.raises(SettingValidationError):
            timespanparser.parse("today", settings={"TIMEZONE": "Not/AZone"})

    def test_invalid_relative_base(self):
        with pytest.raises(SettingValidationError):
            timespanparser.parse("today", settings={"RELATIVE_BASE": "2023-10-25"})


class TestResolveTimezone:

    def test_utc(self):
        assert resolve_timezone("UTC") is timezone.utc

    @pytest.mark.parametrize("name, hours, minutes", [
        ("+02:00", 2, 0),
        ("-0530", -5, -30),
        ("+00:00", 0, 0),
    ])
    def test_offsets(self, name, hours, minutes):
        assert resolve_timezone(name) == timezone(timedelta(hours=hours, minutes=minutes))

    def test_local(self):
        tz = resolve_timezone("local")
        assert datetime(2023, 10, 25, tzinfo=tz).utcoffset() is not None


class TestParseEntryPoint:

    def test_relative_base_datetime(self):
        now = datetime(2023, 10, 25, 12, 33, 17, tzinfo=timezone.utc)
        span = timespanparser.parse("this week", settings={"RELATIVE_BASE": now})
        assert span == TimeSpan(ts(2023, 10, 23), ts(2023, 10, 30))

    def test_relative_base_timestamp(self):
        now = ts(2023, 10, 25, 12, 33, 17)
        span = timespanparser.parse(["yesterday"], settings={"RELATIVE_BASE": now})
        assert span == TimeSpan(ts(2023, 10, 24), ts(2023, 10, 25))

    def test_naive_relative_base_uses_timezone(self):
        span = timespanparser.parse(
            "today",
            settings={"RELATIVE_BASE": datetime(2023, 10, 25, 12), "TIMEZONE": "+02:00"},
        )
        assert span.start == ts(2023, 10, 25, offset_hours=2)
        assert span.end == ts(2023, 10, 25, 12, offset_hours=2)

    def test_explicit_context(self):
        context = Context(now=ts(2024, 3, 21))
        assert timespanparser.parse("april", context=context) == TimeSpan(
            ts(2023, 4, 1), ts(2023, 5, 1)
        )

    def test_get_context(self):
        now = ts(2024, 3, 21)
        assert timespanparser.get_context(settings={"RELATIVE_BASE": now}) == Context(now=now)

    def test_clock_used_without_relative_base(self):
        """Without an anchor, "this year" contains the current instant."""
        span = timespanparser.parse("this year", settings={"TIMEZONE": "UTC"})
        assert Timestamp.now(timezone.utc) in span

    def test_errors_propagate(self):
        with pytest.raises(timespanparser.LanguageIsComplicated):
            timespanparser.parse("last friday", settings={"RELATIVE_BASE": ts(2024, 2, 21)})
