"""Invoke helpers — call sync or async handlers uniformly.

Handlers registered with a mux can be ``def`` or ``async def``. This
module keeps the sync/async check in exactly one place.

Usage::

    from reroute._internal.invoke import invoke

    result = await invoke(handler, request)
    result = await invoke(handler, request, threaded=True)
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, *args: Any, threaded: bool = False, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine.

    When *threaded* is true, plain ``def`` handlers run in an anyio worker
    thread so blocking work does not stall the event loop. Coroutine
    functions are always awaited on the loop.
    """
    if threaded and not inspect.iscoroutinefunction(handler):
        call = functools.partial(handler, *args, **kwargs)
        result = await anyio.to_thread.run_sync(call)
    else:
        result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
