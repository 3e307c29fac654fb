"""Diagnostics routines for the configuration subsystem."""

from __future__ import annotations

from pathlib import Path

import yaml

from diagnostics.models import DiagnosticResult, DiagnosticStatus


def probe(base_dir: Path | None = None) -> DiagnosticResult:
    """Check that config files exist and parse as YAML mappings.

    Args:
        base_dir: Optional base directory for offline testing.

    Returns:
        Diagnostic result indicating config readiness.
    """

    name = "config"
    root_dir = base_dir if base_dir is not None else Path.cwd()
    config_dir = root_dir / "config"
    default_config = config_dir / "default.yaml"
    override_config = config_dir / "override.yaml"

    if not default_config.exists():
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details=f"Missing default config at {default_config}",
        )

    try:
        for path in (default_config, override_config):
            if not path.exists():
                continue
            loaded = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if not isinstance(loaded, dict):
                return DiagnosticResult(
                    name=name,
                    status=DiagnosticStatus.FAIL,
                    details=f"{path.name} is not a mapping",
                )
            insight_cfg = loaded.get("insight")
            if insight_cfg is not None and not isinstance(insight_cfg, dict):
                return DiagnosticResult(
                    name=name,
                    status=DiagnosticStatus.FAIL,
                    details=f"'insight' in {path.name} must be a mapping",
                )
    except OSError as exc:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details=f"Config access failed: {exc}",
        )
    except yaml.YAMLError as exc:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details=f"Config parse failed: {exc}",
        )

    return DiagnosticResult(
        name=name,
        status=DiagnosticStatus.PASS,
        details=f"Config files readable at {config_dir}",
    )
