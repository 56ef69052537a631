"""Internal helpers shared across DocuifyLib packages.

This internal package should NOT be imported directly by users, and it must
never import from the other DocuifyLib packages to avoid circular imports.
"""

import inspect
from typing import Any


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it unchanged.

    Loaders, transforms and plugin hooks may be plain callables or
    coroutine functions.
    """
    if inspect.isawaitable(value):
        return await value
    return value


__all__ = [
    'maybe_await',
]
