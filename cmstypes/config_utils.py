#!/usr/bin/env python3
"""
Configuration utilities for the CMS types generator.

This module provides centralized configuration loading and resolves the
source and output directories used by the CLI and the generator.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger


def load_environment_config(environment: Optional[str] = None) -> None:
    """
    Load environment-specific configuration files.

    Args:
        environment: Specific environment to load ('dev', 'prod'),
                    or None to use ENVIRONMENT variable
    """
    if environment is None:
        environment = os.getenv("ENVIRONMENT", "")

    if environment in ["dev", "prod"]:
        env_file = f".env.{environment}"
        if os.path.exists(env_file):
            load_dotenv(env_file, override=True)
            logger.info(f"Loaded environment config: {env_file}")
        else:
            logger.warning(f"Environment config file not found: {env_file}")
    else:
        load_dotenv()
        if environment:
            logger.warning(f"Unknown environment '{environment}', loaded default .env")


def get_source_dir() -> Path:
    """
    Get the directory holding content-types.json and sections.json.

    Returns:
        CMS_TYPES_SOURCE_DIR if set, otherwise the current working directory
    """
    return Path(os.getenv("CMS_TYPES_SOURCE_DIR") or os.getcwd())


def get_output_dir() -> Path:
    """
    Get the node_modules directory the @cms-types packages are written into.

    Returns:
        CMS_TYPES_OUTPUT_DIR if set, otherwise ./node_modules

    Raises:
        ValueError: If the configured path exists and is not a directory
    """
    output_dir = Path(os.getenv("CMS_TYPES_OUTPUT_DIR") or Path(os.getcwd()) / "node_modules")

    if output_dir.exists() and not output_dir.is_dir():
        raise ValueError(f"Output path is not a directory: {output_dir}")

    return output_dir
