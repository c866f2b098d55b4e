from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

_CONFIGURED = False


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable while Streamlit is running:
    - billminder logs pass through
    - Python warnings (captured as 'py.warnings') only WARNING+
    - any other third party (streamlit, sqlalchemy, ...) only WARNING+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "billminder" or record.name.startswith("billminder."):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(
    *,
    console_level: int = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
    file_level: int = logging.DEBUG,
    force: bool = False,
) -> None:
    """
    Configure logging with:
    - Console handler: filtered, at console_level
    - File handler (only when log_dir is given): everything at file_level

    Streamlit re-executes the app script on every interaction, so repeated
    calls are ignored unless force=True.
    """
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        if getattr(h, "_billminder", False):
            root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    ch._billminder = True  # type: ignore[attr-defined]
    root.addHandler(ch)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path / "billminder.log"), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        fh._billminder = True  # type: ignore[attr-defined]
        root.addHandler(fh)

    logging.captureWarnings(True)
    _CONFIGURED = True
