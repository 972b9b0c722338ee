# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for Cloudlog.

Configuration precedence (highest to lowest):
1. Code arguments (explicit values passed to CloudlogConfig)
2. Environment variables (CLOUDLOG_*, GOOGLE_CLOUD_PROJECT, GCE_METADATA_HOST)
3. YAML config file (cloudlog.yaml or specified path)
4. Built-in defaults
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from cloudlog.resources.sources import DEFAULT_METADATA_HOST, DEFAULT_METADATA_TIMEOUT

logger = logging.getLogger(__name__)

_PROJECT_ENV_VARS = ("CLOUDLOG_PROJECT_ID", "GOOGLE_CLOUD_PROJECT", "GCLOUD_PROJECT", "GCP_PROJECT")
_TRUE_VALUES = ("true", "1", "yes")


@dataclass
class CloudlogConfig:
    """Configuration for platform detection and log enrichment.

    Example::

        >>> config = CloudlogConfig(project_id="my-project")

        >>> # Force a resource type instead of detecting it
        >>> config = CloudlogConfig(project_id="my-project", resource_type="global")

        >>> # Or load from YAML
        >>> config = CloudlogConfig.from_yaml("config/cloudlog.yaml")
    """

    project_id: Optional[str] = None

    # Resource detection; an explicit resource_type skips detection
    resource_type: Optional[str] = None
    auto_detect_resources: bool = True

    # Metadata server
    metadata_host: Optional[str] = None
    metadata_timeout_seconds: float = DEFAULT_METADATA_TIMEOUT

    # Apply log enhancers to spans too
    enrich_spans: bool = True

    _config_file: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Apply environment variable defaults."""
        if self.project_id is None:
            for env_var in _PROJECT_ENV_VARS:
                value = os.getenv(env_var)
                if value:
                    self.project_id = value
                    break

        if self.resource_type is None:
            self.resource_type = os.getenv("CLOUDLOG_RESOURCE_TYPE") or None

        env_auto_detect = os.getenv("CLOUDLOG_AUTO_DETECT_RESOURCES")
        if env_auto_detect is not None:
            self.auto_detect_resources = env_auto_detect.lower() in _TRUE_VALUES

        if self.metadata_host is None:
            self.metadata_host = os.getenv("GCE_METADATA_HOST", DEFAULT_METADATA_HOST)

        env_timeout = os.getenv("CLOUDLOG_METADATA_TIMEOUT")
        if env_timeout:
            self.metadata_timeout_seconds = float(env_timeout)

        env_enrich_spans = os.getenv("CLOUDLOG_ENRICH_SPANS")
        if env_enrich_spans is not None:
            self.enrich_spans = env_enrich_spans.lower() in _TRUE_VALUES

    @property
    def effective_resource_type(self) -> Optional[str]:
        """Resource type to build; ``None`` means detect."""
        if self.resource_type:
            return self.resource_type
        if not self.auto_detect_resources:
            return "global"
        return None

    # ------------------------------------------------------------------
    # YAML loading
    # ------------------------------------------------------------------

    @classmethod
    def from_yaml(cls, path: Optional[str] = None) -> CloudlogConfig:
        """Load configuration from a YAML file.

        Supports environment variable interpolation using ``${VAR_NAME}`` syntax.

        Args:
            path: Path to YAML config file.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ValueError: If YAML is malformed.
        """
        if path is None:
            raise FileNotFoundError("No config file path provided")

        resolved = Path(path)
        if not resolved.exists():
            raise FileNotFoundError(f"Config file not found: {resolved}")

        try:
            import yaml  # type: ignore[import-untyped]
        except ImportError as err:
            raise ImportError("PyYAML required for YAML config. Install with: pip install pyyaml") from err

        with open(resolved) as fh:
            raw_content = fh.read()

        content = _interpolate_env_vars(raw_content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {resolved}: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid config in {resolved}: expected a mapping at top level")

        return cls._from_dict(data, config_file=str(resolved))

    @classmethod
    def from_file_or_env(cls, path: Optional[str] = None) -> CloudlogConfig:
        """Load config from file if exists, otherwise use environment variables.

        Search order:
        1. Explicit *path* argument
        2. ``CLOUDLOG_CONFIG_FILE`` env var
        3. ``./cloudlog.yaml``
        4. ``./config/cloudlog.yaml``
        5. Falls back to env-only config
        """
        search_paths: List[Path] = []

        if path:
            search_paths.append(Path(path))

        env_path = os.getenv("CLOUDLOG_CONFIG_FILE")
        if env_path:
            search_paths.append(Path(env_path))

        search_paths.extend(
            [
                Path("cloudlog.yaml"),
                Path("cloudlog.yml"),
                Path("config/cloudlog.yaml"),
                Path("config/cloudlog.yml"),
            ]
        )

        for candidate in search_paths:
            if candidate.exists():
                logger.info("Loading config from: %s", candidate)
                return cls.from_yaml(str(candidate))

        logger.debug("No config file found, using environment variables only")
        return cls()

    @classmethod
    def _from_dict(
        cls,
        data: Dict[str, Any],
        config_file: Optional[str] = None,
    ) -> CloudlogConfig:
        """Create config from dictionary (parsed YAML)."""
        project = data.get("project") or {}
        resource = data.get("resource") or {}
        metadata = data.get("metadata") or {}
        tracing = data.get("tracing") or {}

        return cls(
            project_id=project.get("id"),
            resource_type=resource.get("type"),
            auto_detect_resources=resource.get("auto_detect", True),
            metadata_host=metadata.get("host"),
            metadata_timeout_seconds=float(metadata.get("timeout", DEFAULT_METADATA_TIMEOUT)),
            enrich_spans=tracing.get("enrich_spans", True),
            _config_file=config_file,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "project": {
                "id": self.project_id,
            },
            "resource": {
                "type": self.resource_type,
                "auto_detect": self.auto_detect_resources,
            },
            "metadata": {
                "host": self.metadata_host,
                "timeout": self.metadata_timeout_seconds,
            },
            "tracing": {
                "enrich_spans": self.enrich_spans,
            },
        }


def _interpolate_env_vars(content: str) -> str:
    """Interpolate ``${VAR_NAME}`` and ``${VAR_NAME:-default}`` in *content*."""
    pattern = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")

    def _replace(match: re.Match) -> str:  # type: ignore[type-arg]
        var_name = match.group(1)
        default = match.group(2)
        value = os.getenv(var_name)
        if value is not None:
            return value
        if default is not None:
            return default
        return match.group(0)

    return pattern.sub(_replace, content)
