#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CncBuilder settings
Environment-driven options, read from .env when present.
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

# ============================================================
# LOGGING
# ============================================================

LOG_LEVEL = os.getenv("CNCBUILDER_LOG_LEVEL", "INFO").upper()

LOG_FORMAT = os.getenv(
    "CNCBUILDER_LOG_FORMAT",
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# ============================================================
# JOB DEFAULTS
# ============================================================

# Machining defaults file; empty means the packaged default_config.json
CONFIG_PATH = os.getenv("CNCBUILDER_CONFIG") or None

# Overrides 'nesting.metodo' from the config file when set
DEFAULT_NESTING_METHOD = os.getenv("CNCBUILDER_NESTING_METHOD") or None

# G-code file extension written by the CLI
OUTPUT_EXTENSION = os.getenv("CNCBUILDER_OUTPUT_EXTENSION", ".nc")

VALID_NESTING_METHODS = ("greedy", "shelf", "guillotine")


# ============================================================
# CONFIG VALIDATION
# ============================================================

def validate_config():
    """
    Check the environment settings.
    Call once at start-up.
    """
    errors = []

    if logging.getLevelName(LOG_LEVEL) == f"Level {LOG_LEVEL}":
        errors.append(f"CNCBUILDER_LOG_LEVEL is not a logging level: {LOG_LEVEL}")

    if DEFAULT_NESTING_METHOD and DEFAULT_NESTING_METHOD not in VALID_NESTING_METHODS:
        errors.append(f"CNCBUILDER_NESTING_METHOD must be one of {', '.join(VALID_NESTING_METHODS)}")

    if CONFIG_PATH and not Path(CONFIG_PATH).exists():
        errors.append(f"CNCBUILDER_CONFIG points to a missing file: {CONFIG_PATH}")

    if not OUTPUT_EXTENSION.startswith("."):
        errors.append("CNCBUILDER_OUTPUT_EXTENSION must start with '.'")

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return True


if __name__ == "__main__":
    print("=" * 60)
    print("CNCBUILDER SETTINGS")
    print("=" * 60)
    print(f"Log level: {LOG_LEVEL}")
    print(f"Config file: {CONFIG_PATH or '(packaged defaults)'}")
    print(f"Nesting method: {DEFAULT_NESTING_METHOD or '(from config)'}")
    print(f"Output extension: {OUTPUT_EXTENSION}")
    print()

    try:
        validate_config()
        print("Settings OK")
    except ValueError as e:
        print(f"ERROR: {e}")
