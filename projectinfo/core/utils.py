"""Utility functions for projectinfo."""
import logging
from pathlib import Path
from typing import Optional


def setup_logging(debug: bool = False, log_dir: Optional[Path] = None):
    """Set up logging configuration."""
    log_level = logging.DEBUG if debug else logging.INFO
    log_dir = Path(log_dir) if log_dir else Path.home() / '.projectinfo' / 'logs'
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / 'projectinfo.log'

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler() if debug else logging.NullHandler()
        ],
        force=True
    )
