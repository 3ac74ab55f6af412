from datetime import datetime, timedelta, timezone
from functools import wraps

import regex as re
from tzlocal import get_localzone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .timestamp import Timestamp

OFFSET_PATTERN = re.compile(r"([+-])([0-9]{2}):?([0-9]{2})")

default_settings = {
    # Zone used to build "now" when RELATIVE_BASE is not set. "local", "UTC",
    # an offset like "+02:00" or an IANA name like "Europe/Berlin".
    "TIMEZONE": "local",
    # Anchor for relative phrases. False means "read the clock".
    "RELATIVE_BASE": False,
}


class SettingValidationError(ValueError):
    pass


class Settings:
    """Control and configure default parsing behavior of timespanparser.

    Currently, supported settings are:

    * `TIMEZONE`
    * `RELATIVE_BASE`
    """

    _default = True

    def __init__(self, settings=None):
        if settings:
            self._updateall(settings.items())
        else:
            self._updateall(default_settings.items())

    def _updateall(self, iterable):
        for key, value in iterable:
            setattr(self, key, value)

    def replace(self, mod_settings=None, **kwds):
        for k, v in kwds.items():
            if v is None:
                raise TypeError('Invalid {{"{}": {}}}'.format(k, v))

        for x in default_settings:
            kwds.setdefault(x, getattr(self, x))

        kwds["_default"] = False
        if mod_settings:
            kwds["_mod_settings"] = mod_settings

        return self.__class__(settings=kwds)

    def __repr__(self):
        values = ", ".join("%s=%r" % (key, getattr(self, key)) for key in default_settings)
        return "Settings(%s)" % values


settings = Settings()


def apply_settings(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        mod_settings = kwargs.get("settings")

        kwargs["settings"] = mod_settings or settings

        if isinstance(kwargs["settings"], dict):
            kwargs["settings"] = settings.replace(
                mod_settings=mod_settings, **kwargs["settings"]
            )

        if not isinstance(kwargs["settings"], Settings):
            raise TypeError(
                "settings can only be either dict or instance of Settings class"
            )

        check_settings(kwargs["settings"])
        return f(*args, **kwargs)

    return wrapper


def resolve_timezone(name):
    """Turn a TIMEZONE setting into a tzinfo."""
    if name.lower() == "local":
        return get_localzone()
    if name.upper() == "UTC":
        return timezone.utc

    match = OFFSET_PATTERN.fullmatch(name)
    if match:
        sign, hours, minutes = match.groups()
        offset = timedelta(hours=int(hours), minutes=int(minutes))
        return timezone(-offset if sign == "-" else offset)

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise SettingValidationError(
            '"{}" is not a valid value for TIMEZONE'.format(name)
        )


def _check_timezone(setting_name, setting_value):
    if not isinstance(setting_value, str):
        raise SettingValidationError(
            '"{}" must be "str", not "{}".'.format(
                setting_name, type(setting_value).__name__
            )
        )
    resolve_timezone(setting_value)


def _check_relative_base(setting_name, setting_value):
    if setting_value is False:
        return
    if isinstance(setting_value, Timestamp):
        return
    if isinstance(setting_value, datetime):
        return
    raise SettingValidationError(
        '"{}" must be False, a datetime or a Timestamp, not "{}".'.format(
            setting_name, type(setting_value).__name__
        )
    )


_SETTING_CHECKS = {
    "TIMEZONE": _check_timezone,
    "RELATIVE_BASE": _check_relative_base,
}


def check_settings(settings):
    """
    Check that the settings are valid.

    :raises SettingValidationError: on an unknown setting or an invalid value.
    """
    if settings._default:
        return

    modified_settings = getattr(settings, "_mod_settings", None) or {}
    for setting_name in modified_settings:
        if setting_name not in _SETTING_CHECKS:
            raise SettingValidationError(
                '"{}" is not a valid setting'.format(setting_name)
            )

    for setting_name, check in _SETTING_CHECKS.items():
        check(setting_name, getattr(settings, setting_name))
