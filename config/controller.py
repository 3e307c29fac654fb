"""Configuration controller for YAML-based settings."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import yaml

from insight.settings import InsightSettings


@dataclass(frozen=True)
class ConfigPaths:
    """Filesystem paths for configuration files."""

    config_dir: Path
    config_file: Path
    override_file: Path


class ConfigController:
    """Singleton controller for loading and updating configuration."""

    _instance: "ConfigController | None" = None

    def __init__(self, config_file: str = "default.yaml") -> None:
        if ConfigController._instance is not None:
            raise RuntimeError("You cannot create another ConfigController class")

        config_dir = Path("config")
        self.paths = ConfigPaths(
            config_dir=config_dir,
            config_file=config_dir / config_file,
            override_file=config_dir / "override.yaml",
        )
        self.config: dict[str, Any] = {}
        self.load_config()

    @classmethod
    def get_instance(cls) -> "ConfigController":
        """Return the singleton instance of the controller."""

        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def load_config(self) -> None:
        """Load configuration from default and override YAML files."""

        with self.paths.config_file.open("r", encoding="utf-8") as file:
            config = yaml.safe_load(file) or {}

        if self.paths.override_file.exists():
            with self.paths.override_file.open("r", encoding="utf-8") as file:
                override_config = yaml.safe_load(file) or {}
            if override_config:
                config = self._deep_merge(config, override_config)

        self.config = self._normalize_config(config)

    def save_config(self, config: dict[str, Any]) -> None:
        """Persist configuration to override.yaml, archiving previous overrides."""

        if self.paths.override_file.exists():
            archive_index = 1
            archive_file = self._archive_path(archive_index)
            while archive_file.exists():
                archive_index += 1
                archive_file = self._archive_path(archive_index)
            self.paths.override_file.rename(archive_file)

        with self.paths.override_file.open("w", encoding="utf-8") as file:
            yaml.safe_dump(config, file)

    def get_config(self) -> dict[str, Any]:
        """Return the currently loaded configuration."""

        return dict(self.config)

    def set_config(self, config: dict[str, Any]) -> None:
        """Set and persist configuration values."""

        self.config = self._normalize_config(dict(config))
        self.save_config(self.config)

    def _archive_path(self, index: int) -> Path:
        """Return the archive path for a given override index."""

        filename = f"override_{index:04d}.yaml"
        return self.paths.config_dir / filename

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge dictionaries, overriding base values with override values."""

        merged = dict(base)
        for key, value in override.items():
            if (
                key in merged
                and isinstance(merged[key], dict)
                and isinstance(value, dict)
            ):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _normalize_config(self, config: dict[str, Any]) -> dict[str, Any]:
        """Fill defaults for the insight, telemetry, and reasoning sections."""

        normalized = dict(config)
        normalized["logging_level"] = str(normalized.get("logging_level", "INFO")).upper()
        normalized["file_logging_enabled"] = bool(normalized.get("file_logging_enabled", False))
        normalized["log_file"] = str(normalized.get("log_file", "./var/log/insight.log"))

        defaults = InsightSettings()
        insight_cfg = dict(normalized.get("insight") or {})
        insight_cfg["cooldown_s"] = float(insight_cfg.get("cooldown_s", defaults.cooldown_s))
        timeout = insight_cfg.get("request_timeout_s", defaults.request_timeout_s)
        insight_cfg["request_timeout_s"] = float(timeout) if timeout is not None else None
        insight_cfg["context_priority"] = (
            str(insight_cfg.get("context_priority", defaults.context_priority)).strip().lower()
        )

        progress_cfg = dict(insight_cfg.get("progress") or {})
        progress_cfg["interval_s"] = float(
            progress_cfg.get("interval_s", defaults.progress_interval_s)
        )
        progress_cfg["max_step"] = float(progress_cfg.get("max_step", defaults.progress_max_step))
        progress_cfg["cap"] = float(progress_cfg.get("cap", defaults.progress_cap))
        insight_cfg["progress"] = progress_cfg

        thresholds_cfg = dict(insight_cfg.get("thresholds") or {})
        for key, default in asdict(defaults.thresholds).items():
            thresholds_cfg[key] = type(default)(thresholds_cfg.get(key, default))
        insight_cfg["thresholds"] = thresholds_cfg
        normalized["insight"] = insight_cfg

        telemetry_cfg = dict(normalized.get("telemetry") or {})
        telemetry_cfg["tick_interval_s"] = float(telemetry_cfg.get("tick_interval_s", 1.0))
        seed = telemetry_cfg.get("seed")
        telemetry_cfg["seed"] = int(seed) if seed is not None else None
        normalized["telemetry"] = telemetry_cfg

        reasoning_cfg = dict(normalized.get("reasoning") or {})
        reasoning_cfg["enabled"] = bool(reasoning_cfg.get("enabled", False))
        reasoning_cfg["provider"] = str(reasoning_cfg.get("provider") or "null").strip().lower()

        openai_cfg = dict(reasoning_cfg.get("openai") or {})
        openai_cfg["model"] = str(openai_cfg.get("model", "gpt-4o-mini"))
        openai_cfg["timeout_s"] = float(openai_cfg.get("timeout_s", 30.0))
        openai_cfg["max_tokens"] = int(openai_cfg.get("max_tokens", 300))
        reasoning_cfg["openai"] = openai_cfg

        gemini_cfg = dict(reasoning_cfg.get("gemini") or {})
        gemini_cfg["model"] = str(gemini_cfg.get("model", "gemini-2.5-pro"))
        gemini_cfg["timeout_s"] = float(gemini_cfg.get("timeout_s", 60.0))
        gemini_cfg["thinking_budget"] = int(gemini_cfg.get("thinking_budget", 16000))
        reasoning_cfg["gemini"] = gemini_cfg

        normalized["reasoning"] = reasoning_cfg
        return normalized
