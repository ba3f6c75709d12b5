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

"""Error types raised while parsing, evaluating, and rendering.

All errors are content-authoring errors: deterministic, never retried, and
fatal for the page being rendered.  Each carries the offending expression
source and the template location once the renderer has annotated it.
"""

from __future__ import annotations

from enum import Enum


class EvalErrorKind(str, Enum):
    UNKNOWN_NAMESPACE = "unknown_namespace"
    NO_LOOP = "no_loop"
    UNKNOWN_FIELD = "unknown_field"
    UNKNOWN_METHOD = "unknown_method"
    BAD_ARGUMENT = "bad_argument"
    BAD_VALUE = "bad_value"


class LinkErrorKind(str, Enum):
    NOT_FOUND = "not_found"


class PagebindError(Exception):
    """Base class for all pagebind errors."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        location: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.location = location

    def with_context(
        self,
        *,
        source: str | None = None,
        location: str | None = None,
    ) -> PagebindError:
        """Attach expression source / template location if not already set.

        The innermost annotation wins, so nested renders report the element
        closest to the failure.
        """
        if self.source is None and source is not None:
            self.source = source
        if self.location is None and location is not None:
            self.location = location
        return self

    def _describe(self) -> str:
        return self.message

    def __str__(self) -> str:
        parts = [self._describe()]
        if self.source is not None:
            parts.append(f"in expression {self.source!r}")
        if self.location is not None:
            parts.append(f"at {self.location}")
        return " ".join(parts)


class ParseError(PagebindError):
    """Malformed expression or template syntax."""


class EvalError(PagebindError):
    """Expression could not be evaluated against the binding context."""

    def __init__(
        self,
        kind: EvalErrorKind,
        message: str,
        *,
        source: str | None = None,
        location: str | None = None,
    ) -> None:
        super().__init__(message, source=source, location=location)
        self.kind = kind

    def _describe(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class LinkError(PagebindError):
    """A page or anchor reference could not be resolved."""

    def __init__(
        self,
        kind: LinkErrorKind,
        message: str,
        *,
        source: str | None = None,
        location: str | None = None,
    ) -> None:
        super().__init__(message, source=source, location=location)
        self.kind = kind

    def _describe(self) -> str:
        return f"[{self.kind.value}] {self.message}"
