"""Reading and writing INI files.

Sections and keys are case-insensitive and surrounding whitespace is ignored.
Comments are lines starting with ``;``; a trailing comment is allowed on a
section line.  A literal ``=`` inside a key is written as ``\\=``.

Writing to an existing file is done lazily: the file is read again, and only
the values that changed, the keys and sections that were added and those that
were removed are touched, so comments and formatting survive.
"""

from __future__ import annotations

import enum
import os
import sys
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable, Optional, Union

_WHITESPACE = " \t\n\r\f\v"
_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)
_ENDL = "\r\n" if sys.platform == "win32" else "\n"
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def _trim(text: str) -> str:
    return text.strip(_WHITESPACE)


def _normalize(key: str) -> str:
    return _trim(key).translate(_LOWER)


class LineKind(enum.Enum):
    """What a single line of an INI file holds."""

    NONE = enum.auto()
    COMMENT = enum.auto()
    SECTION = enum.auto()
    KEYVALUE = enum.auto()
    UNKNOWN = enum.auto()


class IniMap:
    """An ordered map with case-insensitive, whitespace-trimmed keys.

    Reading a missing key with ``m[key]`` inserts an empty value, as in the
    INI structure it models.  A plain map holds strings; the structure
    returned by :func:`parse_ini` and :meth:`IniFile.read` holds one map per
    section.
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._factory: Callable[[], Any] = str

    @classmethod
    def _sections(cls) -> "IniMap":
        structure = cls()
        structure._factory = cls
        return structure

    def _coerce(self, value: Any) -> Any:
        if isinstance(value, Mapping) and not isinstance(value, IniMap):
            section = IniMap()
            section.set_many(value)
            return section
        return value

    def __getitem__(self, key: str) -> Any:
        key = _normalize(key)
        if key not in self._data:
            self._data[key] = self._factory()
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _normalize(key) in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniMap):
            return NotImplemented
        return list(self._data.items()) == list(other._data.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"IniMap({self._data!r})"

    def get(self, key: str, default: Any = None) -> Any:
        """Return a copy of the value for *key* without changing the map."""
        key = _normalize(key)
        if key not in self._data:
            return self._factory() if default is None else default
        value = self._data[key]
        return value.copy() if isinstance(value, IniMap) else value

    def has(self, key: str) -> bool:
        return key in self

    def set(self, key: str, value: Any) -> None:
        """Set *key* to *value*; a new key goes to the end."""
        self._data[_normalize(key)] = self._coerce(value)

    def set_many(
        self, pairs: Union[Mapping[str, Any], Iterable[tuple[str, Any]]]
    ) -> None:
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        for key, value in items:
            self.set(key, value)

    def remove(self, key: str) -> bool:
        """Remove *key*; return whether it was there."""
        return self._data.pop(_normalize(key), None) is not None

    def clear(self) -> None:
        self._data.clear()

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter(list(self._data.items()))

    def copy(self) -> "IniMap":
        duplicate = IniMap()
        duplicate._factory = self._factory
        for key, value in self._data.items():
            duplicate._data[key] = (
                value.copy() if isinstance(value, IniMap) else value
            )
        return duplicate


def parse_line(line: str) -> tuple[LineKind, str, str]:
    """Classify one line; return its kind, the key or section name and value."""
    line = _trim(line)
    if not line:
        return LineKind.NONE, "", ""
    if line[0] == ";":
        return LineKind.COMMENT, "", ""
    if line[0] == "[":
        comment_at = line.find(";")
        if comment_at != -1:
            line = line[:comment_at]
        closing_at = line.rfind("]")
        if closing_at != -1:
            return LineKind.SECTION, _trim(line[1:closing_at]), ""
    equals_at = line.replace("\\=", "  ").find("=")
    if equals_at != -1:
        key = _trim(line[:equals_at]).replace("\\=", "=")
        value = _trim(line[equals_at + 1:])
        return LineKind.KEYVALUE, key, value
    return LineKind.UNKNOWN, "", ""


def _split_lines(text: str) -> list[str]:
    if not text:
        return []
    return text.replace("\0", "").replace("\r", "").split("\n")


def _parse(lines: Iterable[str]) -> tuple[IniMap, list[str]]:
    """Build the structure and collect the lines a lazy write works from."""
    data = IniMap._sections()
    kept: list[str] = []
    section = ""
    in_section = False
    for line in lines:
        kind, key, value = parse_line(line)
        if kind is LineKind.SECTION:
            in_section = True
            section = key
            data[section]
        elif in_section and kind is LineKind.KEYVALUE:
            data[section][key] = value
        if kind is LineKind.UNKNOWN:
            continue
        if kind is LineKind.KEYVALUE and not in_section:
            continue
        kept.append(line)
    return data, kept


def parse_ini(text: str) -> IniMap:
    """Parse INI text into a map of sections; ``parse_ini("")`` is empty."""
    return _parse(_split_lines(text))[0]


def _format_pair(key: str, value: str, pretty: bool) -> str:
    separator = " = " if pretty else "="
    return key.replace("=", "\\=") + separator + _trim(value)


def generate_ini(data: IniMap, pretty: bool = False) -> str:
    """Render a map of sections as INI text, without a final line break."""
    blocks = []
    for section, collection in data.items():
        lines = [f"[{section}]"]
        lines.extend(
            _format_pair(key, value, pretty) for key, value in collection.items()
        )
        blocks.append(_ENDL.join(lines))
    return (_ENDL * 2 if pretty else _ENDL).join(blocks)


def _first_non_space(text: str, start: int) -> Optional[int]:
    return next(
        (index for index, char in enumerate(text[start:], start)
         if char not in _WHITESPACE),
        None,
    )


def _lazy_output(
    lines: list[str], data: IniMap, original: IniMap, pretty: bool
) -> list[str]:
    output: list[str] = []
    section_current = ""
    parsing_section = False
    continue_to_next = False
    discard_next_empty = False
    last_key_line = 0

    def flush() -> None:
        if not (data.has(section_current) and original.has(section_current)):
            return
        collection = data[section_current]
        collection_original = original[section_current]
        added = [
            _format_pair(key, value, pretty)
            for key, value in collection.items()
            if not collection_original.has(key)
        ]
        output[last_key_line:last_key_line] = added

    index = 0
    while index < len(lines):
        line = lines[index]
        is_last = index == len(lines) - 1
        kind, key, value = parse_line(line)

        if kind is LineKind.SECTION:
            if parsing_section:
                parsing_section = False
                flush()
                continue
            section_current = key
            if not data.has(section_current):
                continue_to_next = True
                discard_next_empty = True
                index += 1
                continue
            parsing_section = True
            continue_to_next = False
            discard_next_empty = False
            output.append(line)
            last_key_line = len(output)
        elif kind is LineKind.KEYVALUE:
            if continue_to_next:
                index += 1
                continue
            if data.has(section_current):
                collection = data[section_current]
                if collection.has(key):
                    new_value = collection[key]
                    if value == new_value:
                        output.append(line)
                    else:
                        equals_at = line.replace("\\=", "  ").find("=")
                        value_at = _first_non_space(line, equals_at + 1)
                        new_line = line if value_at is None else line[:value_at]
                        if pretty and value_at == equals_at + 1:
                            new_line += " "
                        output.append(new_line + _trim(new_value))
                    last_key_line = len(output)
        elif discard_next_empty and not line:
            discard_next_empty = False
        elif kind is not LineKind.UNKNOWN:
            output.append(line)

        if is_last:
            flush()
        index += 1

    for section, collection in data.items():
        if original.has(section):
            continue
        if pretty and output and output[-1]:
            output.append("")
        output.append(f"[{section}]")
        output.extend(
            _format_pair(key, value, pretty) for key, value in collection.items()
        )
    return output


class IniFile:
    """An INI file on disk."""

    def __init__(self, filename: Union[str, os.PathLike]) -> None:
        self.filename = os.fspath(filename)

    def _check(self) -> None:
        if not self.filename:
            raise ValueError("no file name given")

    def _read_text(self) -> str:
        with open(self.filename, "rb") as handle:
            return handle.read().decode(_ENCODING, _ERRORS)

    def _write_text(self, text: str) -> None:
        with open(self.filename, "wb") as handle:
            handle.write(text.encode(_ENCODING, _ERRORS))

    def read(self) -> IniMap:
        """Read the file into a map of sections."""
        self._check()
        return parse_ini(self._read_text())

    def generate(self, data: IniMap, pretty: bool = False) -> None:
        """Overwrite the file with *data*, dropping any existing content."""
        self._check()
        self._write_text(generate_ini(data, pretty))

    def write(self, data: IniMap, pretty: bool = False) -> None:
        """Write only the changes in *data*, keeping comments and layout."""
        self._check()
        if not os.path.exists(self.filename):
            self.generate(data, pretty)
            return
        original, lines = _parse(_split_lines(self._read_text()))
        self._write_text(_ENDL.join(_lazy_output(lines, data, original, pretty)))