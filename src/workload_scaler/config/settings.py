#!/usr/bin/env python3
"""
Configuration settings using Pydantic for environment variable loading
"""

import os
from typing import Optional, Dict, Any

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load environment variables from .env file if it exists
load_dotenv()


class KubernetesSettings(BaseSettings):
    """Kubernetes API session settings"""
    in_cluster: bool = os.getenv("KUBERNETES_IN_CLUSTER", "false").lower() == "true"
    kubeconfig_path: Optional[str] = os.getenv("KUBECONFIG_PATH", None)
    context: Optional[str] = os.getenv("KUBERNETES_CONTEXT", None)
    server_host: Optional[str] = os.getenv("K8S_SERVER_HOST", None)

    class Config:
        extra = "ignore"


class WorkloadSettings(BaseSettings):
    """Workload resource settings"""
    annotation_base: str = os.getenv("WORKLOAD_ANNOTATION_BASE", "workload-scaler.io")
    default_namespace: str = os.getenv("WORKLOAD_DEFAULT_NAMESPACE", "default")

    # Seconds; applied to each API request unless the caller passes its own
    request_timeout: float = float(os.getenv("WORKLOAD_REQUEST_TIMEOUT", "30"))

    # Size of the thread pool the blocking kubernetes client runs on
    max_workers: int = int(os.getenv("WORKLOAD_MAX_WORKERS", "8"))

    # 0 means a single list request with the server's own page size
    list_page_size: int = int(os.getenv("WORKLOAD_LIST_PAGE_SIZE", "0"))

    class Config:
        extra = "ignore"


class LoggingSettings(BaseSettings):
    """Logging configuration settings"""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    file: Optional[str] = os.getenv("LOG_FILE", None)

    class Config:
        extra = "ignore"


class MetricsSettings(BaseSettings):
    """Prometheus instrumentation settings"""
    enabled: bool = os.getenv("METRICS_ENABLED", "true").lower() == "true"
    # Prefix for every exported metric name
    namespace: str = os.getenv("METRICS_NAMESPACE", "workload_scaler")

    class Config:
        extra = "ignore"


class Settings(BaseSettings):
    """Main settings class that includes all sub-settings"""
    # Forces DEBUG logging regardless of LOG_LEVEL
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Component settings
    kubernetes: KubernetesSettings = Field(default_factory=KubernetesSettings)
    workloads: WorkloadSettings = Field(default_factory=WorkloadSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def last_modified_annotation(self) -> str:
        """Reserved annotation key holding the last scale timestamp"""
        return f"{self.workloads.annotation_base}/last_modified"

    def get_config_dict(self) -> Dict[str, Any]:
        """Convert settings to a plain nested dictionary"""
        return {
            "debug": self.debug,
            "kubernetes": {
                "in_cluster": self.kubernetes.in_cluster,
                "kubeconfig_path": self.kubernetes.kubeconfig_path,
                "context": self.kubernetes.context,
                "server_host": self.kubernetes.server_host
            },
            "workloads": {
                "annotation_base": self.workloads.annotation_base,
                "default_namespace": self.workloads.default_namespace,
                "request_timeout": self.workloads.request_timeout,
                "max_workers": self.workloads.max_workers,
                "list_page_size": self.workloads.list_page_size
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "file": self.logging.file
            },
            "metrics": {
                "enabled": self.metrics.enabled,
                "namespace": self.metrics.namespace
            }
        }

    @classmethod
    def load_from_yaml_with_env_override(cls, yaml_path: str) -> "Settings":
        """Load settings from YAML file and override with environment variables"""
        import yaml

        # Load YAML if it exists
        yaml_config = {}
        if os.path.exists(yaml_path):
            with open(yaml_path, 'r') as f:
                # Process environment variables in YAML
                yaml_content = f.read()
                for key, value in os.environ.items():
                    yaml_content = yaml_content.replace(f"${{{key}}}", value)
                    yaml_content = yaml_content.replace(f"${key}", value)
                yaml_config = yaml.safe_load(yaml_content) or {}

        return Settings(
            debug=yaml_config.get("debug", False),
            kubernetes=KubernetesSettings(**yaml_config.get("kubernetes", {})),
            workloads=WorkloadSettings(**yaml_config.get("workloads", {})),
            logging=LoggingSettings(**yaml_config.get("logging", {})),
            metrics=MetricsSettings(**yaml_config.get("metrics", {}))
        )


# Global settings instance
settings = Settings()
