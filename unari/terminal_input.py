"""Decode raw terminal input into key names and pointer events."""

from __future__ import annotations

import re
from dataclasses import dataclass

ESC = "\x1b"

_CSI_RE = re.compile(r"\x1b\[([0-9;<?]*)([A-Za-z~])")
_SS3_RE = re.compile(r"\x1bO([A-Za-z])")
_SGR_MOUSE_RE = re.compile(r"<(\d+);(\d+);(\d+)")

_CSI_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "Z": "shift+tab",
}

_TILDE_KEYS: dict[str, str] = {
    "1": "home",
    "2": "insert",
    "3": "delete",
    "4": "end",
    "5": "pageup",
    "6": "pagedown",
}

_CONTROL_KEYS: dict[str, str] = {
    "\t": "tab",
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
    "\x08": "backspace",
}

BUTTON_LEFT = 1
BUTTON_MIDDLE = 2
BUTTON_RIGHT = 3
BUTTON_WHEEL_UP = 4
BUTTON_WHEEL_DOWN = 5


@dataclass(frozen=True)
class KeyPress:
    key: str


@dataclass(frozen=True)
class Pointer:
    """Pointer event in 0-based screen cells."""

    x: int
    y: int
    button: int
    action: str


InputEvent = KeyPress | Pointer


def _decode_sgr_mouse(params: str, final: str) -> Pointer | None:
    match = _SGR_MOUSE_RE.fullmatch(params)
    if match is None:
        return None
    code, x, y = (int(part) for part in match.groups())
    if code & 32:
        return None  # motion
    if code & 64:
        button = BUTTON_WHEEL_UP if code & 1 == 0 else BUTTON_WHEEL_DOWN
        return Pointer(x - 1, y - 1, button, "press")
    button = {0: BUTTON_LEFT, 1: BUTTON_MIDDLE, 2: BUTTON_RIGHT}.get(code & 3)
    if button is None:
        return None
    return Pointer(x - 1, y - 1, button, "press" if final == "M" else "release")


def _decode_csi(params: str, final: str) -> InputEvent | None:
    if params.startswith("<") and final in "Mm":
        return _decode_sgr_mouse(params, final)
    if final == "~":
        key = _TILDE_KEYS.get(params.split(";")[0])
        return KeyPress(key) if key else None
    key = _CSI_KEYS.get(final)
    return KeyPress(key) if key else None


class InputDecoder:
    """Incremental decoder; escape sequences split across reads are buffered."""

    def __init__(self) -> None:
        self._pending = ""

    @property
    def pending(self) -> bool:
        return bool(self._pending)

    def feed(self, data: str) -> list[InputEvent]:
        events: list[InputEvent] = []
        if self._pending == ESC and data and data[0] not in "[O":
            # ESC arrived alone in its own read; the next chunk is a new key.
            events.extend(self.flush())
        buf = self._pending + data
        self._pending = ""
        pos = 0
        while pos < len(buf):
            char = buf[pos]
            if char != ESC:
                events.append(KeyPress(self._key_for_char(char)))
                pos += 1
                continue

            rest = buf[pos:]
            match = _CSI_RE.match(rest) or _SS3_RE.match(rest)
            if match is not None:
                if match.re is _CSI_RE:
                    event = _decode_csi(match.group(1), match.group(2))
                else:
                    event = _decode_csi("", match.group(1))
                if event is not None:
                    events.append(event)
                pos += match.end()
                continue

            if self._is_incomplete(rest):
                self._pending = rest
                break

            if rest[1] == ESC:
                events.append(KeyPress("escape"))
                pos += 1
                continue

            # Alt+key arrives as ESC followed by the key.
            events.append(KeyPress(f"alt+{self._key_for_char(rest[1])}"))
            pos += 2
        return events

    def flush(self) -> list[InputEvent]:
        """Settle buffered input after the line has gone quiet.

        A lone ESC is the escape key. A truncated sequence is dropped.
        """
        pending, self._pending = self._pending, ""
        if pending == ESC:
            return [KeyPress("escape")]
        return []

    @staticmethod
    def _is_incomplete(rest: str) -> bool:
        if rest in (ESC, f"{ESC}[", f"{ESC}O"):
            return True
        return rest.startswith(f"{ESC}[") and re.fullmatch(r"\x1b\[[0-9;<?]*", rest) is not None

    @staticmethod
    def _key_for_char(char: str) -> str:
        if char in _CONTROL_KEYS:
            return _CONTROL_KEYS[char]
        code = ord(char)
        if code < 0x20:
            return f"ctrl+{chr(code + 0x60)}"
        if char == " ":
            return "space"
        return char
