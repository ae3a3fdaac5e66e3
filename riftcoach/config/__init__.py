from .settings import DEFAULT_THRESHOLDS, AnalysisThresholds, Settings, get_settings, reset_settings

__all__ = [
    "DEFAULT_THRESHOLDS",
    "AnalysisThresholds",
    "Settings",
    "get_settings",
    "reset_settings",
]
