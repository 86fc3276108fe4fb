from datetime import datetime
from functools import wraps

from .operations import FIXED_LENGTH_UNITS

DEFAULT_SETTINGS = {
    "RELATIVE_BASE": None,
    "RETURN_AS_TIMEZONE_AWARE": True,
    "STRINGIFY_UNITS": "wdhms",
}


class SettingValidationError(ValueError):
    pass


class Settings:
    """Control and configure default behavior of datemath.

    Currently, supported settings are:

    * `RELATIVE_BASE`
    * `RETURN_AS_TIMEZONE_AWARE`
    * `STRINGIFY_UNITS`
    """

    def __init__(self, settings=None):
        self._settings = dict(DEFAULT_SETTINGS)
        if settings:
            self._settings.update(settings)
        self._default = self._settings == DEFAULT_SETTINGS
        for key, value in self._settings.items():
            setattr(self, key, value)

    def replace(self, mod_settings=None, **kwds):
        for key in kwds:
            if key not in DEFAULT_SETTINGS:
                raise TypeError("Invalid setting: %r" % key)

        updated = dict(self._settings)
        updated.update(mod_settings or {})
        updated.update(kwds)

        return Settings(updated)


settings = Settings()


def apply_settings(f):
    """Turn the ``settings`` keyword argument of ``f`` into a validated
    :class:`Settings` instance, falling back to the module defaults."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        mod_settings = kwargs.get("settings")

        if mod_settings is None:
            kwargs["settings"] = settings
        elif isinstance(mod_settings, Settings):
            pass
        elif isinstance(mod_settings, dict):
            check_settings(mod_settings)
            kwargs["settings"] = settings.replace(mod_settings=mod_settings)
        else:
            raise TypeError("settings can only be either dict or instance of Settings class")

        return f(*args, **kwargs)

    return wrapper


def _check_stringify_units(setting_name, setting_value):
    if not setting_value:
        raise SettingValidationError(
            '"{}" must contain at least one unit'.format(setting_name)
        )
    invalid = [u for u in setting_value if u not in FIXED_LENGTH_UNITS]
    if invalid:
        raise SettingValidationError(
            'Found invalid units {} in "{}". Supported units: "{}"'.format(
                ", ".join(repr(u) for u in invalid), setting_name, FIXED_LENGTH_UNITS
            )
        )
    if len(set(setting_value)) != len(setting_value):
        raise SettingValidationError(
            'There are repeated units in "{}"'.format(setting_name)
        )
    if sorted(setting_value, key=FIXED_LENGTH_UNITS.index) != list(setting_value):
        raise SettingValidationError(
            'Units in "{}" must go from largest to smallest ("{}")'.format(
                setting_name, FIXED_LENGTH_UNITS
            )
        )


def check_settings(settings):
    """Check that the settings values are valid.

    :raises: SettingValidationError
    """
    settings_values = {
        "RELATIVE_BASE": {"type": datetime},
        "RETURN_AS_TIMEZONE_AWARE": {"type": bool},
        "STRINGIFY_UNITS": {"type": str, "extra_check": _check_stringify_units},
    }

    if isinstance(settings, Settings):
        settings = settings._settings

    for setting_name, setting_value in settings.items():
        if setting_name not in settings_values:
            raise SettingValidationError(
                '"{}" is not a valid setting'.format(setting_name)
            )

        if setting_value is None and setting_name == "RELATIVE_BASE":
            continue

        setting_type = settings_values[setting_name]["type"]
        if not isinstance(setting_value, setting_type):
            raise SettingValidationError(
                '"{}" must be "{}", not "{}".'.format(
                    setting_name, setting_type.__name__, type(setting_value).__name__
                )
            )

        extra_check = settings_values[setting_name].get("extra_check")
        if extra_check:
            extra_check(setting_name, setting_value)
