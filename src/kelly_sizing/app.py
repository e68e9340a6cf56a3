from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from kelly_sizing.infrastructure.logging import get_logger

logger = get_logger(__name__)


def build_command() -> list[str]:
    app_path = Path(__file__).resolve().parent / "presentation" / "streamlit_app.py"
    return [sys.executable, "-m", "streamlit", "run", str(app_path)]


def main() -> None:
    try:
        import streamlit  # noqa: F401
    except ImportError as exc:  # pragma: no cover - runtime check
        logger.error("Streamlit is not installed. Install the 'prod' extra and retry.", extra={"error": str(exc)})
        raise SystemExit(1) from exc

    cmd = build_command()
    logger.info("Launching Kelly Sizing Lab", extra={"command": " ".join(cmd)})
    try:
        raise SystemExit(subprocess.call(cmd))
    except KeyboardInterrupt:
        logger.info("Kelly Sizing Lab interrupted by user")
        raise SystemExit(0)


if __name__ == "__main__":
    main()
