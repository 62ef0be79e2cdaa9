"""Structured JSON + txt logs."""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

def setup_logging(
    log_file: Optional[Path] = None,
    verbose: bool = False,
) -> None:
    """Set up logging configuration.

    Args:
        log_file: Optional path that also receives every log record
        verbose: Whether to enable debug logging
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s" if verbose else "%(message)s",
    )
    if log_file:
        root = logging.getLogger()
        target = os.path.abspath(log_file)
        # One file handler per path, even if called once per command.
        if not any(getattr(h, "baseFilename", None) == target for h in root.handlers):
            handler = logging.FileHandler(log_file)
            handler.setFormatter(logging.Formatter("%(message)s"))
            root.addHandler(handler)

def log_step(
    step: str,
    data: Dict[str, Any],
    log_file: Optional[Path] = None,
) -> None:
    """Log a pipeline step as one JSON object.

    Args:
        step: Step name, e.g. ``resolve`` or ``invoke``
        data: Step data; values that are not JSON types are logged via str()
        log_file: Optional JSONL file to append to instead of logging
    """
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "step": step,
        **data,
    }
    line = json.dumps(entry, default=str)
    if log_file:
        with open(log_file, "a") as f:
            f.write(line + "\n")
    else:
        logging.getLogger("opmodels.steps").info(line)
