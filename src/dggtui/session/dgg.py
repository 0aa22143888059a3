"""Websocket chat session.

Runs an aiohttp websocket client on its own thread and event loop, decodes
frames with `protocol.parse_frame` and fans them out to registered handlers
from that thread.

Reconnect policy: a failure to connect during `open()` is fatal. Once a
connection has been established, a dropped connection is reported as an
ErrorNotice and retried with exponential backoff up to `reconnect_attempts`
times; after that the session gives up and reports it.
"""

import asyncio
import threading
from typing import Any

import aiohttp

from ..config import RECONNECT_INITIAL_BACKOFF, RECONNECT_MAX_BACKOFF
from ..errors import SessionError, SessionOpenError
from ..events import ErrorNotice, Join, Quit
from .base import ChatSession
from .protocol import Names, encode_message, parse_frame


class DggSession(ChatSession):
    """Chat session over the destiny.gg websocket protocol.

    Example:
        session = DggSession("wss://chat.destiny.gg/ws", auth_key="...")
        session.add_message_handler(print)
        session.open()
        session.send_message("hello")
        session.close()
    """

    def __init__(
        self,
        url: str,
        auth_key: str = "",
        reconnect_attempts: int = 5,
        connect_timeout: float = 10.0,
        heartbeat: float = 30.0,
    ) -> None:
        super().__init__()
        self._url = url
        self._auth_key = auth_key
        self._reconnect_attempts = reconnect_attempts
        self._connect_timeout = connect_timeout
        self._heartbeat = heartbeat

        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._task: asyncio.Task | None = None
        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._opened = threading.Event()
        self._open_error: BaseException | None = None
        self._stopping = threading.Event()
        self._debug_callback: Any = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Session", message)

    def open(self) -> None:
        if self._thread is not None:
            raise SessionError("session already opened")

        self._stopping.clear()
        self._thread = threading.Thread(target=self._runner, name="dgg-session", daemon=True)
        self._thread.start()

        if not self._opened.wait(timeout=self._connect_timeout):
            self.close()
            raise SessionOpenError(f"timed out connecting to {self._url}")
        if self._open_error is not None:
            error = self._open_error
            self.close()
            raise SessionOpenError(f"cannot connect to {self._url}: {error}") from error

    def close(self) -> None:
        self._stopping.set()
        loop, task = self._loop, self._task
        if loop is not None and task is not None and not loop.is_closed():
            loop.call_soon_threadsafe(task.cancel)
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=5.0)
        self._thread = None

    def send_message(self, text: str) -> None:
        loop, ws = self._loop, self._ws
        if loop is None or ws is None or ws.closed:
            raise SessionError("not connected")
        future = asyncio.run_coroutine_threadsafe(ws.send_str(encode_message(text)), loop)
        try:
            future.result(timeout=self._connect_timeout)
        except (aiohttp.ClientError, ConnectionError, TimeoutError) as e:
            raise SessionError(f"send failed: {e}") from e

    # Session thread

    def _runner(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._task = loop.create_task(self._run())
        try:
            loop.run_until_complete(self._task)
        except asyncio.CancelledError:
            pass
        except Exception as e:
            # Before the first connection open() reports it
            if self._opened.is_set():
                self._emit(ErrorNotice(message=f"session stopped: {e}"))
            else:
                self._open_error = e
        finally:
            self._opened.set()
            loop.close()
            self._loop = None
            self._task = None

    async def _run(self) -> None:
        headers = {}
        if self._auth_key:
            headers["Cookie"] = f"authtoken={self._auth_key}"

        backoff = RECONNECT_INITIAL_BACKOFF
        attempts = 0
        established = False

        async with aiohttp.ClientSession(headers=headers) as http:
            while not self._stopping.is_set():
                try:
                    async with http.ws_connect(
                        self._url,
                        heartbeat=self._heartbeat,
                        timeout=aiohttp.ClientWSTimeout(ws_close=self._connect_timeout),
                    ) as ws:
                        self._ws = ws
                        if not established:
                            established = True
                            self._opened.set()
                        attempts = 0
                        backoff = RECONNECT_INITIAL_BACKOFF
                        self._debug("info", f"Connected to {self._url}")
                        await self._read_loop(ws)
                except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
                    if not established:
                        self._open_error = e
                        self._opened.set()
                        return
                    self._emit(ErrorNotice(message=f"connection error: {e}"))
                finally:
                    self._ws = None

                if self._stopping.is_set():
                    break

                attempts += 1
                if attempts > self._reconnect_attempts:
                    self._emit(ErrorNotice(message="disconnected from chat, giving up"))
                    break
                self._emit(ErrorNotice(
                    message=f"disconnected, reconnecting in {backoff:.1f}s "
                            f"({attempts}/{self._reconnect_attempts})"
                ))
                await asyncio.sleep(backoff)
                backoff = min(backoff * 2, RECONNECT_MAX_BACKOFF)

    async def _read_loop(self, ws: aiohttp.ClientWebSocketResponse) -> None:
        async for msg in ws:
            if msg.type == aiohttp.WSMsgType.TEXT:
                self._handle_frame(msg.data)
            elif msg.type in (aiohttp.WSMsgType.CLOSED, aiohttp.WSMsgType.ERROR):
                break

    def _handle_frame(self, raw: str) -> None:
        decoded = parse_frame(raw)
        if decoded is None:
            self._debug("debug", f"Ignored frame: {raw[:80]}")
            return

        if isinstance(decoded, Names):
            self._set_users(decoded.users)
            self._debug("info", f"Roster received: {len(decoded.users)} users")
            return

        if isinstance(decoded, (Join, Quit)):
            decoded = self._apply_presence(decoded)
        self._emit(decoded)
