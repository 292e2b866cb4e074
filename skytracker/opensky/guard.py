"""Result-size policy for bulk flight queries."""

import logging
from typing import Sequence, TypeVar

from skytracker.errors import ResultTooLarge

logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_MAX_RESULTS = 500


class QueryGuard:
    """
    Rejects result sets larger than a fixed ceiling.

    A bounding box covering half the globe easily returns thousands of
    aircraft; callers get a ResultTooLarge with the real count instead
    of a payload they cannot process.
    """

    def __init__(self, max_results: int = DEFAULT_MAX_RESULTS):
        self.max_results = max_results

    def check(self, results: Sequence[T]) -> Sequence[T]:
        """Return results unchanged, or raise ResultTooLarge."""
        count = len(results)
        if count > self.max_results:
            logger.warning(f'Rejecting {count} results (limit {self.max_results})')
            raise ResultTooLarge(count, self.max_results)
        return results
