# pagebind — attribute-directive templating for static pages
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Reference-time date layouts.

A layout is written as the reference moment ``Mon Jan 2 15:04:05 MST 2006``
would look, e.g. ``"January 02, 2006"`` or ``"2006-01-02T15:04:05Z07:00"``.
Recognised chunks are replaced by the matching component of the value;
everything else is copied literally.

Month and weekday names are fixed English strings, never taken from the
process locale, so output is identical on every machine.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Longest-first within each shared prefix.
_CHUNKS = (
    "January", "Jan", "Monday", "Mon", "MST",
    "2006", "002", "01", "02", "03", "04", "05", "06",
    "15", "_2", "1", "2", "3", "4", "5",
    "PM", "pm",
    "-07:00:00", "-070000", "-07:00", "-0700", "-07",
    "Z07:00:00", "Z070000", "Z07:00", "Z0700", "Z07",
)


def _starts_lower(text: str, pos: int) -> bool:
    return pos < len(text) and "a" <= text[pos] <= "z"


def _fraction_chunk(layout: str, pos: int) -> str | None:
    """Match ``.000`` / ``,999`` style fractional-second chunks."""
    if layout[pos] not in ".," or pos + 1 >= len(layout):
        return None
    digit = layout[pos + 1]
    if digit not in "09":
        return None
    end = pos + 1
    while end < len(layout) and layout[end] == digit:
        end += 1
    if end < len(layout) and layout[end].isdigit():
        return None
    return layout[pos:end]


def tokenize(layout: str) -> list[tuple[bool, str]]:
    """Split a layout into ``(is_chunk, text)`` pairs."""
    out: list[tuple[bool, str]] = []
    literal: list[str] = []
    i = 0
    while i < len(layout):
        if layout.startswith("_2006", i):
            literal.append("_")
            i += 1
            continue
        match = _fraction_chunk(layout, i)
        if match is None:
            for chunk in _CHUNKS:
                if not layout.startswith(chunk, i):
                    continue
                if chunk in ("Jan", "Mon") and _starts_lower(layout, i + 3):
                    continue
                match = chunk
                break
        if match is None:
            literal.append(layout[i])
            i += 1
            continue
        if literal:
            out.append((False, "".join(literal)))
            literal = []
        out.append((True, match))
        i += len(match)
    if literal:
        out.append((False, "".join(literal)))
    return out


def _offset(value: datetime) -> timedelta:
    off = value.utcoffset()
    return off if off is not None else timedelta(0)


def _format_offset(value: datetime, chunk: str) -> str:
    seconds = int(_offset(value).total_seconds())
    if chunk.startswith("Z") and seconds == 0:
        return "Z"
    sign = "-" if seconds < 0 else "+"
    seconds = abs(seconds)
    hh, rem = divmod(seconds, 3600)
    mm, ss = divmod(rem, 60)
    body = chunk[1:]
    if body == "07":
        return f"{sign}{hh:02d}"
    if body == "0700":
        return f"{sign}{hh:02d}{mm:02d}"
    if body == "07:00":
        return f"{sign}{hh:02d}:{mm:02d}"
    if body == "070000":
        return f"{sign}{hh:02d}{mm:02d}{ss:02d}"
    return f"{sign}{hh:02d}:{mm:02d}:{ss:02d}"


def _zone_name(value: datetime) -> str:
    if value.tzinfo is None:
        return "UTC"
    name = value.tzname()
    if name and name.isalpha():
        return name
    return _format_offset(value, "-0700")


def _hour12(hour: int) -> int:
    return hour % 12 or 12


def _render_chunk(value: datetime, chunk: str) -> str:
    if chunk[0] in ".,":
        digits = len(chunk) - 1
        frac = f"{value.microsecond:06d}"
        frac = (frac + "000")[:digits] if digits > 6 else frac[:digits]
        if chunk[1] == "9":
            frac = frac.rstrip("0")
            return f"{chunk[0]}{frac}" if frac else ""
        return f"{chunk[0]}{frac}"
    if chunk[0] in "-Z":
        return _format_offset(value, chunk)

    if chunk == "January":
        return MONTHS[value.month - 1]
    if chunk == "Jan":
        return MONTHS[value.month - 1][:3]
    if chunk == "Monday":
        return WEEKDAYS[value.weekday()]
    if chunk == "Mon":
        return WEEKDAYS[value.weekday()][:3]
    if chunk == "MST":
        return _zone_name(value)
    if chunk == "2006":
        return f"{value.year:04d}"
    if chunk == "06":
        return f"{value.year % 100:02d}"
    if chunk == "01":
        return f"{value.month:02d}"
    if chunk == "1":
        return str(value.month)
    if chunk == "02":
        return f"{value.day:02d}"
    if chunk == "2":
        return str(value.day)
    if chunk == "_2":
        return f"{value.day:>2}"
    if chunk == "002":
        return f"{value.timetuple().tm_yday:03d}"
    if chunk == "15":
        return f"{value.hour:02d}"
    if chunk == "03":
        return f"{_hour12(value.hour):02d}"
    if chunk == "3":
        return str(_hour12(value.hour))
    if chunk == "04":
        return f"{value.minute:02d}"
    if chunk == "4":
        return str(value.minute)
    if chunk == "05":
        return f"{value.second:02d}"
    if chunk == "5":
        return str(value.second)
    if chunk == "PM":
        return "PM" if value.hour >= 12 else "AM"
    if chunk == "pm":
        return "pm" if value.hour >= 12 else "am"
    raise ValueError(f"unhandled layout chunk {chunk!r}")


def format_layout(value: date | datetime, layout: str) -> str:
    """Format ``value`` according to a reference-time layout."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    parts: list[str] = []
    for is_chunk, text in tokenize(layout):
        parts.append(_render_chunk(value, text) if is_chunk else text)
    return "".join(parts)
