"""
Error handling policies for DocuifyLib.

Policies decide what happens to an error that a fail-soft operation
(currently the content preloader) has absorbed: log it, record it, or both.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors
    absorbed while processing individual nodes.
    """

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []

    @abstractmethod
    async def handle(self, error: Exception, method_name: str, node: Any) -> None:
        """
        Handle an error that occurred while processing a node.

        Args:
            error: The exception that was raised
            method_name: Name of the operation that failed (e.g., 'load')
            node: The node being processed when the error occurred
        """
        pass

    def _record(self, error: Exception, method_name: str, node: Any) -> Dict[str, Any]:
        error_record = {
            'path': getattr(node, 'full_path', None),
            'method': method_name,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        }
        self.errors.append(error_record)
        return error_record

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        by_type: Dict[str, int] = {}
        for record in self.errors:
            by_type[record['error_type']] = by_type.get(record['error_type'], 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_type': by_type,
            'errors': self.errors,
        }


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that logs errors and continues.

    Errors are collected for later inspection. This is the default for
    preloading, where one bad file must not stop the rest.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning for every error
        """
        super().__init__()
        self.verbose = verbose

    async def handle(self, error: Exception, method_name: str, node: Any) -> None:
        record = self._record(error, method_name, node)
        if self.verbose:
            logger.warning("Error in %s for %r: %s", method_name, record['path'], error)


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that collects all errors without logging, for batch processing.

    Useful for collecting all errors and presenting them at the end.
    """

    async def handle(self, error: Exception, method_name: str, node: Any) -> None:
        self._record(error, method_name, node)
