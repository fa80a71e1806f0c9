"""SSH server: one menu session per connection."""

from __future__ import annotations

import asyncio
import io
import logging
import signal
from functools import partial
from pathlib import Path
from typing import Awaitable, Callable, Sequence

import asyncssh
from rich.align import Align
from rich.console import Console

from unari.config import ESCAPE_TIMEOUT_SECONDS, Settings
from unari.fetch import FetchError, fetch_menus
from unari.models import Restaurant
from unari.rendering import Frame
from unari.session import Session
from unari.state import DataFailed, DataLoaded, Effect, Resize
from unari.terminal_input import InputDecoder, KeyPress, Pointer

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Sequence[Restaurant]]]

ENTER_SCREEN = "\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1006h"
LEAVE_SCREEN = "\x1b[?1006l\x1b[?1000l\x1b[?25h\x1b[?1049l"
CLEAR_SCREEN = "\x1b[H\x1b[2J"

_EOF = object()


def color_system_for(term_type: str | None) -> str:
    term = (term_type or "").lower()
    if term in {"linux", "vt100", "vt220", "dumb"}:
        return "standard"
    return "truecolor"


def frame_to_ansi(frame: Frame, width: int, height: int, color_system: str = "truecolor") -> str:
    """Render a frame to escape sequences for a raw terminal channel."""
    console = Console(
        file=io.StringIO(),
        width=max(width, 1),
        height=max(height, 1),
        force_terminal=True,
        color_system=color_system,
        legacy_windows=False,
        highlight=False,
        emoji=False,
    )
    renderable = Align.center(frame.body, vertical="middle", height=max(height, 1)) if frame.centered else frame.body
    with console.capture() as capture:
        console.print(renderable, end="", no_wrap=True, crop=True)
    output = capture.get()
    # A newline on the last row would scroll the screen.
    if output.endswith("\n"):
        output = output[:-1]
    return CLEAR_SCREEN + output.replace("\n", "\r\n")


def load_host_key(path: str) -> asyncssh.SSHKey:
    """Read the host key, generating an ed25519 key at `path` if missing."""
    key_path = Path(path)
    if key_path.exists():
        return asyncssh.read_private_key(str(key_path))
    key = asyncssh.generate_private_key("ssh-ed25519")
    key_path.parent.mkdir(parents=True, exist_ok=True)
    key.write_private_key(str(key_path))
    key_path.chmod(0o600)
    logger.info("generated host key at %s", key_path)
    return key


class MenuSSHServer(asyncssh.SSHServer):
    """Per-connection server object; accepts every client without auth."""

    def __init__(self, connections: set) -> None:
        self._connections = connections
        self._conn: asyncssh.SSHServerConnection | None = None

    def connection_made(self, conn: asyncssh.SSHServerConnection) -> None:
        self._conn = conn
        self._connections.add(conn)
        logger.info("connection from %s", conn.get_extra_info("peername"))

    def connection_lost(self, exc: Exception | None) -> None:
        if self._conn is not None:
            self._connections.discard(self._conn)
        if exc is not None:
            logger.info("connection lost: %s", exc)

    def begin_auth(self, username: str) -> bool:
        return False


class MenuChannelSession:
    """Drives one Session over an SSH process channel."""

    def __init__(self, process: asyncssh.SSHServerProcess, fetcher: Fetcher) -> None:
        self._process = process
        self._fetcher = fetcher
        self._queue: asyncio.Queue = asyncio.Queue()
        self._decoder = InputDecoder()
        self._fetch_task: asyncio.Task | None = None
        self._color_system = color_system_for(process.get_terminal_type())
        width, height, _, _ = process.get_terminal_size()
        self.session = Session(width, height)

    async def run(self) -> None:
        reader = asyncio.create_task(self._read_input())
        try:
            self._write(ENTER_SCREEN)
            self._perform(self.session.start())
            self._draw()
            while True:
                item = await self._queue.get()
                if item is _EOF:
                    break
                if isinstance(item, (KeyPress, Pointer)):
                    effect = self.session.feed(item)
                else:
                    effect = self.session.dispatch(item)
                if effect is Effect.QUIT:
                    break
                self._perform(effect)
                self._draw()
        finally:
            reader.cancel()
            if self._fetch_task is not None:
                self._fetch_task.cancel()
            self._write(LEAVE_SCREEN)

    def _perform(self, effect: Effect | None) -> None:
        if effect is not Effect.FETCH:
            return
        if self._fetch_task is not None:
            self._fetch_task.cancel()
        self._fetch_task = asyncio.create_task(self._fetch())

    async def _fetch(self) -> None:
        try:
            restaurants = await self._fetcher()
        except FetchError as exc:
            logger.warning("menu fetch failed: %s", exc)
            await self._queue.put(DataFailed(str(exc)))
            return
        except Exception as exc:
            logger.exception("menu fetch crashed")
            await self._queue.put(DataFailed(f"unexpected error: {exc}"))
            return
        await self._queue.put(DataLoaded(restaurants))

    async def _read_input(self) -> None:
        while True:
            try:
                if self._decoder.pending:
                    data = await asyncio.wait_for(self._process.stdin.read(1024), ESCAPE_TIMEOUT_SECONDS)
                else:
                    data = await self._process.stdin.read(1024)
            except asyncio.TimeoutError:
                for event in self._decoder.flush():
                    await self._queue.put(event)
                continue
            except asyncssh.TerminalSizeChanged as exc:
                await self._queue.put(Resize(exc.width, exc.height))
                continue
            except (asyncssh.BreakReceived, asyncssh.SignalReceived, asyncssh.Error, OSError):
                data = ""
            if not data:
                await self._queue.put(_EOF)
                return
            for event in self._decoder.feed(data):
                await self._queue.put(event)

    def _draw(self) -> None:
        frame = self.session.render()
        state = self.session.state
        self._write(frame_to_ansi(frame, state.viewport_width, state.viewport_height, self._color_system))

    def _write(self, text: str) -> None:
        try:
            self._process.stdout.write(text)
        except (OSError, asyncssh.Error):
            logger.debug("write to closed channel dropped")


async def handle_process(process: asyncssh.SSHServerProcess, fetcher: Fetcher) -> None:
    if process.get_terminal_type() is None:
        process.stdout.write("unari needs an interactive terminal (try ssh -t)\r\n")
        process.exit(1)
        return

    channel_session = MenuChannelSession(process, fetcher)
    state = channel_session.session.state
    logger.info("session started (%dx%d)", state.viewport_width, state.viewport_height)
    try:
        await channel_session.run()
    except Exception:
        logger.exception("session crashed")
    finally:
        logger.info("session ended")
        process.exit(0)


class MenuServer:
    """Listener plus the set of live connections, for clean shutdown."""

    def __init__(self, settings: Settings, fetcher: Fetcher | None = None) -> None:
        self.settings = settings
        self._fetcher = fetcher or partial(fetch_menus, settings.api_url)
        self._connections: set = set()
        self._acceptor: asyncssh.SSHAcceptor | None = None

    async def start(self) -> None:
        host_key = load_host_key(self.settings.host_key_path)
        self._acceptor = await asyncssh.create_server(
            partial(MenuSSHServer, self._connections),
            self.settings.host,
            self.settings.port,
            server_host_keys=[host_key],
            process_factory=partial(handle_process, fetcher=self._fetcher),
            line_editor=False,
        )
        logger.info("starting SSH server on %s:%d", self.settings.host, self.settings.port)

    async def stop(self) -> None:
        logger.info("stopping SSH server")
        if self._acceptor is not None:
            self._acceptor.close()
            await self._acceptor.wait_closed()
        for conn in list(self._connections):
            conn.close()


async def serve(settings: Settings) -> None:
    """Run until SIGINT/SIGTERM."""
    server = MenuServer(settings)
    await server.start()
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)
    try:
        await stop.wait()
    finally:
        await server.stop()
