"""Entry point for the primor-pos Textual app."""

from __future__ import annotations

import logging
from pathlib import Path

from primor_pos.config import LOG_LEVEL, LOG_PATH
from primor_pos.pos_app import PrimorApp


def configure_logging(log_path: str | Path = LOG_PATH, level: str = LOG_LEVEL) -> None:
    """Send logs to a file; the terminal belongs to Textual."""
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level.upper())


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    PrimorApp().run()


if __name__ == "__main__":
    main()
