"""Invoke helpers — settle sync or async handler results uniformly.

Handlers run synchronously inside the dispatcher, but an ``async def``
handler hands back a coroutine. Any code that turns a handler result into
a response must handle both cases; the check lives here.
"""

import inspect
from typing import Any


async def resolve(result: Any) -> Any:
    """Await *result* if it is awaitable, otherwise return it unchanged.

    Works with results of both sync and async handlers::

        def show(ctx):
            return {"id": ctx.param("id", "int")}

        async def show(ctx):
            item = await repo.get(ctx.param("id", "int"))
            return {"id": item.id}
    """
    if inspect.isawaitable(result):
        result = await result
    return result
