"""
Targeting context logger.

Provides logging interface for targeting context with automatic [target] prefix.
All targeting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from claimfit.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[target]"


def setup_targeting_logger(log_dir: Path, command: str = "match", console: bool = True) -> Path:
    """
    Setup logger for targeting context.

    Args:
        log_dir: Directory for this matching session
        command: CLI command name for provenance ("rank", "recommend", "fit")
        console: Also echo INFO and above to the console

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="target",
        log_dir=log_dir,
        extra_provenance={"Command name": command},
        console=console,
    )


# Wrapper functions with automatic [target] prefix


def _log_info(message: str) -> None:
    """Log info message with [target] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [target] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [target] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [target] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [target] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level targeting-specific logging helpers


def log_inputs_loaded(claim_count: int, role_label: str, role_type: str) -> None:
    """Log what a matching run is about to score."""
    _log_info(f"Loaded {claim_count} claim(s) for role '{role_label}'")
    _log_debug(f"Role type profile: {role_type}")


def log_ranking_result(command: str, returned: int, scored: int, elapsed_time: float) -> None:
    """Log how many scored claims survived a ranking command."""
    _log_success(f"{command}: returned {returned} of {scored} claim(s) ({elapsed_time:.3f}s)")
