from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass
import socket
import threading

from aiohttp import web
import pytest


@dataclass(slots=True)
class ItemServer:
    base_url: str
    hits: Counter[str]


def _build_app(hits: Counter[str]) -> web.Application:
    async def item(request: web.Request) -> web.Response:
        name = request.match_info["name"]
        hits[name] += 1
        return web.Response(text=f"item {name} v{hits[name]}")

    async def missing(request: web.Request) -> web.Response:
        raise web.HTTPNotFound()

    app = web.Application()
    app.router.add_get("/items/{name}", item)
    app.router.add_get("/missing/{name}", missing)
    return app


@pytest.fixture()
def item_server() -> Iterator[ItemServer]:
    hits: Counter[str] = Counter()
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]

    async def start() -> web.AppRunner:
        runner = web.AppRunner(_build_app(hits))
        await runner.setup()
        await web.SockSite(runner, sock).start()
        return runner

    runner = asyncio.run_coroutine_threadsafe(start(), loop).result()
    try:
        yield ItemServer(base_url=f"http://127.0.0.1:{port}", hits=hits)
    finally:
        asyncio.run_coroutine_threadsafe(runner.cleanup(), loop).result()
        loop.call_soon_threadsafe(loop.stop)
        thread.join()
        loop.close()
