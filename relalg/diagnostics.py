"""
Non-fatal reporting channel for invalid operator input.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple, Union

from .errors import RelAlgError

logger = logging.getLogger(__name__)


class Diagnostics:
    """Writes flaw reports and optionally re-raises them."""

    def __init__(self):
        self.strict = False
        self.last_flaw: Optional[Tuple[str, str]] = None

    def flaw(self, method: str, message: Union[str, RelAlgError]) -> bool:
        """
        Report a flaw found by ``method``.

        Returns:
            False, so the call can stand in for a failed boolean check.

        Raises:
            RelAlgError: Only in strict mode, when ``message`` is an exception.
        """
        self.last_flaw = (method, str(message))
        if self.strict and isinstance(message, RelAlgError):
            raise message
        logger.warning("FLAW in %s: %s", method, message)
        return False

    @contextmanager
    def raising(self) -> Iterator['Diagnostics']:
        """Re-raise reported errors instead of returning sentinels."""
        previous = self.strict
        self.strict = True
        try:
            yield self
        finally:
            self.strict = previous


diagnostics = Diagnostics()


def flaw(method: str, message: Union[str, RelAlgError]) -> bool:
    """Report through the shared channel."""
    return diagnostics.flaw(method, message)
