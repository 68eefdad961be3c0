"""
Configuration module for workload scaler settings
"""

from .settings import Settings, settings, KubernetesSettings, WorkloadSettings, LoggingSettings, MetricsSettings

__all__ = [
    "Settings",
    "settings",
    "KubernetesSettings",
    "WorkloadSettings",
    "LoggingSettings",
    "MetricsSettings"
]
