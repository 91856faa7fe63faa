"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing and multi-byte UTF-8 characters.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
UNKNOWN_KEY = "UNKNOWN"
_MAX_CSI_BODY = 16

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x15": "CTRL_U",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\t": "TAB",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"7": "HOME",
    b"8": "END",
}


def _utf8_sequence_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


class KeyReader:
    """Decode key tokens from a raw-mode file descriptor.

    Bytes read ahead while probing an escape sequence are kept on the
    instance and replayed by the next ``read_key`` call.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._pending: list[bytes] = []

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            return None
        return ch

    def read_key(self, timeout_ms: int | None = None) -> str:
        """Return the next key token, or ``""`` on timeout/EOF."""
        if self._pending:
            ch = self._pending.pop(0)
        else:
            if timeout_ms is not None:
                ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
                if not ready:
                    return ""
            ch = os.read(self.fd, 1)
            if not ch:
                return ""

        control = _CONTROL_KEYS.get(ch)
        if control is not None:
            return control
        if ch == b"\x1b":
            return self._read_escape_sequence()

        expected = _utf8_sequence_length(ch[0])
        data = ch
        while len(data) < expected:
            nxt = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if nxt is None:
                break
            data += nxt
        return data.decode("utf-8", errors="replace")

    def _read_escape_sequence(self) -> str:
        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return "ESC"
        if seq == b"O":
            final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if final is None:
                return "ESC"
            return _CSI_FINAL_KEYS.get(final, UNKNOWN_KEY)
        if seq != b"[":
            self._pending.append(seq)
            return "ESC"

        # CSI: parameter bytes, intermediate bytes, then one final byte.
        body = b""
        while True:
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return "ESC" if not body else UNKNOWN_KEY
            if 0x40 <= part[0] <= 0x7E:
                break
            if not 0x20 <= part[0] <= 0x3F:
                self._pending.append(part)
                return UNKNOWN_KEY
            body += part
            if len(body) > _MAX_CSI_BODY:
                return UNKNOWN_KEY

        if not body and part in _CSI_FINAL_KEYS:
            return _CSI_FINAL_KEYS[part]
        if part == b"~" and body in _CSI_TILDE_KEYS:
            return _CSI_TILDE_KEYS[body]
        return UNKNOWN_KEY
