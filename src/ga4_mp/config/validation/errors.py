"""Config validation errors.

Each error names the settings field and, when it was read from the
environment, the ``GA4_*`` variable it came from.
"""
from __future__ import annotations

from typing import Any

from ga4_mp.kernel.errors import BaseError


def _source(env_key: str | None) -> str:
    return f" (from {env_key})" if env_key else ""


class ConfigError(BaseError):
    """Client or batch settings could not be loaded or are out of range."""

    default_code = "config_error"
    context_fields = ("setting_name", "env_key")

    def __init__(
        self,
        message: str,
        *,
        setting_name: str | None = None,
        env_key: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.setting_name = setting_name
        self.env_key = env_key


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, env_key: str | None = None) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is missing{_source(env_key)}",
            setting_name=setting_name,
            env_key=env_key,
        )


class InvalidSettingValueError(ConfigError):
    default_code = "invalid_setting_value"
    context_fields = ("setting_name", "env_key", "value", "reason")

    def __init__(
        self,
        setting_name: str,
        value: object,
        reason: str,
        env_key: str | None = None,
    ) -> None:
        super().__init__(
            f"Setting '{setting_name}'{_source(env_key)} has invalid value {value!r}: {reason}",
            setting_name=setting_name,
            env_key=env_key,
        )
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
