#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
logging_utils.py — Centralized logging and runtime banners for plocarkit
========================================================================
Standard logging setup for the `plocarkit` command-line tool. Library
modules only create named loggers under the `plocarkit` namespace; the
handlers below are attached by the command-line entry point.

Main functions
---------------
- **setup_logger(name='plocarkit', log_file=True)**
    Configure and return a `logging.Logger` with a console handler and,
    optionally, a UTF-8 file handler named `run_YYYY-MM-DD_HHMMSS.log`.

- **banner(logger)**
    Display a standardized start banner for a PLOCAR conversion run.

Logging format
---------------
- **Message format:**  `%(asctime)s  %(levelname)8s: %(message)s`
- **Timestamp format:** `%Y-%m-%d %H:%M:%S`

License:
    MIT License (see LICENSE file)

Version:
    1.0.0
"""


from __future__ import annotations
import logging, sys, datetime, glob, os

LOG_FMT  = "%(asctime)s  %(levelname)8s: %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"

def setup_logger(name: str = "plocarkit", log_file: bool = True,
                 level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # Console handler to stdout
    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(logging.Formatter(LOG_FMT, DATE_FMT))

    # Reset and attach
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.addHandler(ch)

    if log_file:
        # Clean up old logs in cwd
        for old in glob.glob("run_*.log"):
            try:
                os.remove(old)
            except OSError:
                pass
        stamp = datetime.datetime.now().strftime("%Y-%m-%d_%H%M%S")
        fh = logging.FileHandler(f"run_{stamp}.log", mode="w", encoding="utf-8")
        fh.setFormatter(logging.Formatter(LOG_FMT, DATE_FMT))
        logger.addHandler(fh)
    return logger

def banner(logger: logging.Logger) -> None:
    logger.info("═"*70)
    logger.info(" Starting PLOCAR conversion ")
    logger.info("═"*70)
