"""Config settings – dataclass settings and environment loaders."""
from ga4_mp.config.settings.base import BatchSettings, ClientSettings, Settings
from ga4_mp.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "BatchSettings",
    "ClientSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsLoader",
]
