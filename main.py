"""Command-line entry point for the insight dashboard runtime."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
import sys

from config import ConfigController
from core.app import AppConfig, run
from core.logging import enable_file_logging, log_error, logger, set_level


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Raw command-line arguments.

    Returns:
        Parsed arguments namespace.
    """

    parser = argparse.ArgumentParser(
        description="Run the telemetry dashboard with the heuristic insight controller."
    )
    parser.add_argument(
        "--diagnostics",
        action="store_true",
        help="Run diagnostics probes and exit.",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=0,
        help="Number of telemetry ticks to run (0 runs until interrupted).",
    )
    parser.add_argument(
        "--tick-interval",
        type=float,
        default=None,
        help="Seconds between telemetry ticks (defaults to telemetry.tick_interval_s).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for simulated telemetry.")
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print a status line on every tick.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Application entry point.

    Args:
        argv: Optional list of command-line arguments.

    Returns:
        Process exit code.
    """

    if argv is None:
        argv = sys.argv[1:]

    args = parse_args(argv)
    config = ConfigController.get_instance().get_config()
    set_level(config.get("logging_level", "INFO"))

    if args.diagnostics:
        from config.diagnostics import probe as config_probe
        from core.diagnostics import probe as core_probe
        from diagnostics.runner import exit_code, format_results, run_diagnostics
        from insight.diagnostics import probe as insight_probe
        from services.diagnostics import probe as services_probe

        results = run_diagnostics([config_probe, core_probe, insight_probe, services_probe])
        print(format_results(results))
        return exit_code(results)

    if config.get("file_logging_enabled", False):
        log_file_path = Path(config.get("log_file", "./var/log/insight.log"))
        enable_file_logging(log_file_path)
        logger.info("Writing logs to %s", log_file_path)

    telemetry_cfg = config.get("telemetry") or {}
    app_config = AppConfig(
        ticks=max(0, args.ticks),
        tick_interval_s=(
            args.tick_interval
            if args.tick_interval is not None
            else float(telemetry_cfg.get("tick_interval_s", 1.0))
        ),
        seed=args.seed if args.seed is not None else telemetry_cfg.get("seed"),
        show_status=not args.quiet,
    )

    try:
        return asyncio.run(run(app_config, config))
    except KeyboardInterrupt:
        logger.info("Dashboard terminated by user")
    except Exception as exc:
        log_error(f"An unexpected error occurred: {exc}")
        logger.debug("Traceback for unexpected error", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
