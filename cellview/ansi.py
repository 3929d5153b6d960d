"""Translation of ANSI escape sequences into colour tags."""

from __future__ import annotations

import enum
import io
from typing import Protocol


class _TextSink(Protocol):
    def write(self, text: str) -> object: ...


class _State(enum.Enum):
    TEXT = enum.auto()
    ESCAPE = enum.auto()
    SUBSTRING = enum.auto()
    CONTROL_SEQUENCE = enum.auto()


_ESC = "\x1b"
_RESET = "[-:-:-]"

_COLOR_NAMES = (
    "black",
    "maroon",
    "green",
    "olive",
    "navy",
    "purple",
    "teal",
    "silver",
    "gray",
    "red",
    "lime",
    "yellow",
    "blue",
    "fuchsia",
    "aqua",
    "white",
)

_FOREGROUND = {str(n) for n in range(30, 38)}
_BACKGROUND = {str(n) for n in range(40, 48)}
_BRIGHT_FOREGROUND = {str(n) for n in range(90, 98)}
_BRIGHT_BACKGROUND = {str(n) for n in range(100, 108)}


def _atoi(text: str) -> int:
    """Parse an integer, yielding 0 where the text is not one."""
    try:
        return int(text)
    except ValueError:
        return 0


def _lookup_color(number: int) -> str:
    if number < 0 or number > 15:
        return "black"
    return _COLOR_NAMES[number]


def _hex(red: int, green: int, blue: int) -> str:
    return f"#{red:02x}{green:02x}{blue:02x}"


def _extended_color(rest: list[str]) -> str:
    """Decode the arguments following an SGR 38 or 48 field."""
    if not rest:
        return ""
    if rest[0] == "5" and len(rest) > 1:
        number = _atoi(rest[1])
        if number <= 15:
            return _lookup_color(number)
        if number <= 231:
            red = (number - 16) // 36
            green = ((number - 16) // 6) % 6
            blue = (number - 16) % 6
            return _hex(255 * red // 5, 255 * green // 5, 255 * blue // 5)
        if number <= 255:
            grey = 255 * (number - 232) // 23
            return _hex(grey, grey, grey)
        return ""
    if rest[0] == "2" and len(rest) > 3:
        return _hex(_atoi(rest[1]), _atoi(rest[2]), _atoi(rest[3]))
    return ""


class AnsiWriter:
    """A text sink that turns ANSI escape codes into colour tags.

    Codes other than SGR and "next line" are removed. The translated text is
    written to the wrapped writer. Parser state carries over between writes.
    """

    def __init__(self, writer: _TextSink) -> None:
        self._writer = writer
        self._parameters: list[str] = []
        self._intermediate: list[str] = []
        self._attributes = ""
        self._state = _State.TEXT

    def write(self, text: str | bytes) -> int:
        """Translate ``text`` and pass it on; return the length consumed."""
        if isinstance(text, (bytes, bytearray)):
            decoded = bytes(text).decode("utf-8", errors="replace")
        else:
            decoded = text
        out: list[str] = []
        for char in decoded:
            self._feed(char, out)
        self._writer.write("".join(out))
        return len(text)

    def _feed(self, char: str, out: list[str]) -> None:
        if self._state is _State.ESCAPE:
            if char == "[":
                self._parameters.clear()
                self._intermediate.clear()
                self._state = _State.CONTROL_SEQUENCE
            elif char == "c":
                out.append(_RESET)
                self._state = _State.TEXT
            elif char in "P]X^_":
                self._state = _State.SUBSTRING
            else:
                self._state = _State.TEXT
        elif self._state is _State.CONTROL_SEQUENCE:
            code = ord(char)
            if 0x30 <= code <= 0x3F:
                self._parameters.append(char)
            elif 0x20 <= code <= 0x2F:
                self._intermediate.append(char)
            elif 0x40 <= code <= 0x7E:
                out.append(self._final(char))
                self._state = _State.TEXT
            else:
                self._state = _State.TEXT
        elif self._state is _State.SUBSTRING:
            if char == _ESC:
                self._state = _State.ESCAPE
        elif char == _ESC:
            self._state = _State.ESCAPE
        else:
            out.append(char)

    def _final(self, char: str) -> str:
        parameters = "".join(self._parameters)
        if char == "E":
            return "\n" * (_atoi(parameters) or 1)
        if char == "m":
            return self._select_graphic_rendition(parameters)
        return ""

    def _add_attribute(self, flag: str) -> None:
        if flag not in self._attributes:
            self._attributes += flag

    def _remove_attribute(self, flag: str) -> None:
        self._attributes = self._attributes.replace(flag, "", 1)

    def _select_graphic_rendition(self, parameters: str) -> str:
        fields = parameters.split(";")
        if not parameters or fields == ["0"]:
            self._attributes = ""
            return _RESET

        foreground = background = ""
        for index, field in enumerate(fields):
            if field in ("1", "01"):
                self._add_attribute("b")
            elif field in ("2", "02"):
                self._add_attribute("d")
            elif field in ("4", "04"):
                self._add_attribute("u")
            elif field in ("5", "05"):
                self._add_attribute("l")
            elif field == "22":
                self._remove_attribute("b")
                self._remove_attribute("d")
            elif field == "24":
                self._remove_attribute("u")
            elif field == "25":
                self._remove_attribute("l")
            elif field in _FOREGROUND:
                foreground = _lookup_color(int(field) - 30)
            elif field == "39":
                foreground = "-"
            elif field in _BACKGROUND:
                background = _lookup_color(int(field) - 40)
            elif field == "49":
                background = "-"
            elif field in _BRIGHT_FOREGROUND:
                foreground = _lookup_color(int(field) - 82)
            elif field in _BRIGHT_BACKGROUND:
                background = _lookup_color(int(field) - 92)
            elif field in ("38", "48"):
                color = _extended_color(fields[index + 1 :])
                if color:
                    if field == "38":
                        foreground = color
                    else:
                        background = color
                break

        if foreground or background or self._attributes:
            colon = ":" if self._attributes else ""
            return f"[{foreground}:{background}{colon}{self._attributes}]"
        return ""


def translate_ansi(text: str) -> str:
    """Return ``text`` with its ANSI escape sequences replaced by colour tags."""
    buffer = io.StringIO()
    AnsiWriter(buffer).write(text)
    return buffer.getvalue()