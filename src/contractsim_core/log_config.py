# --- src/contractsim_core/log_config.py ---
import logging
import os
import sys
from typing import Optional, Union

LOG_LEVEL_ENV_VAR = "CONTRACTSIM_LOG_LEVEL"
PACKAGE_LOGGER_NAME = "contractsim_core"


def resolve_log_level(level: Optional[Union[int, str]] = None) -> int:
    """
    Resolves the effective level: an explicit argument wins, then the
    CONTRACTSIM_LOG_LEVEL environment variable, then WARNING.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level '{level}' (from {LOG_LEVEL_ENV_VAR} or argument).")
        return resolved
    return level


def setup_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Configures the package logger to write to stdout.

    Only the `contractsim_core` logger is touched, so the logging setup of the
    test runner (pytest's caplog, for example) keeps working. An unknown level
    in CONTRACTSIM_LOG_LEVEL falls back to WARNING instead of failing the import;
    an unknown explicit `level` still raises.
    """
    log_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"
    )
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    # Clear handlers installed by an earlier call
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    bad_env_level = None
    try:
        resolved = resolve_log_level(level)
    except ValueError:
        if level is not None:
            raise
        bad_env_level = os.environ.get(LOG_LEVEL_ENV_VAR)
        resolved = logging.WARNING

    package_logger.setLevel(resolved)
    package_logger.addHandler(console_handler)
    if bad_env_level is not None:
        package_logger.warning(f"Ignoring unknown log level '{bad_env_level}' in {LOG_LEVEL_ENV_VAR}; using WARNING.")
    package_logger.debug("Logging configured.")
    return package_logger
