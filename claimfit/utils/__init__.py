"""
Shared utilities for ClaimFit.

Common functionality used across contexts:
- Logger setup with provenance tracking
- Text report formatting
"""

from claimfit.utils.logger import log_provenance, setup_logger
from claimfit.utils.report_formatter import Column, TableFormatter, format_percentage

__all__ = ["setup_logger", "log_provenance", "Column", "TableFormatter", "format_percentage"]
