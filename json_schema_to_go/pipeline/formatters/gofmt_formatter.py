"""
Formatter delegating to the gofmt binary.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from ...errors import EmissionFormatError
from ..config import FormatterConfig
from .base import Formatter
from .go_formatter import GoFormatter

logger = logging.getLogger(__name__)


class GofmtFormatter(Formatter):
    """Formatter using gofmt for Go code."""

    def __init__(self, gofmt_path: str = "gofmt"):
        self.gofmt_path = gofmt_path
        self._available = None

    def is_available(self) -> bool:
        """Check if gofmt is installed."""
        if self._available is None:
            self._available = shutil.which(self.gofmt_path) is not None
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Go code using gofmt.

        Args:
            code: Go source code to format
            config: Formatter configuration

        Returns:
            Formatted code

        Raises:
            EmissionFormatError: If gofmt rejects the code
        """
        if not self.is_available():
            logger.warning("%s not found, using the builtin Go formatter", self.gofmt_path)
            return GoFormatter().format(code, config)

        try:
            result = subprocess.run(
                [self.gofmt_path],
                input=code,
                capture_output=True,
                text=True,
                timeout=config.timeout,
            )
        except subprocess.SubprocessError as e:
            raise EmissionFormatError(f"gofmt failed: {e}") from e

        if result.returncode != 0:
            raise EmissionFormatError(f"gofmt rejected the generated code: {result.stderr.strip()}")
        return result.stdout
