from .settings import DelambdaSettings, get_settings, reset_settings, update_settings

__all__ = ["DelambdaSettings", "get_settings", "reset_settings", "update_settings"]
