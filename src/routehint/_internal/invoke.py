"""Invoke helper — call sync or async handlers uniformly.

Route handlers and error handlers can be ``def`` or ``async def``.
The sync/async check lives here and nowhere else::

    result = await invoke(handler, *args, **kwargs)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
