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

"""Expression tree nodes.

``$loop.it.date.format('January 02, 2006')`` parses to::

    Expression(namespace="loop", steps=(
        FieldStep("it"), FieldStep("date"),
        CallStep("format", (Literal("January 02, 2006"),)),
    ))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, eq=False)
class Literal:
    value: str | int | float | bool


@dataclass(frozen=True, eq=False)
class FieldStep:
    name: str


@dataclass(frozen=True, eq=False)
class CallStep:
    name: str
    args: tuple[Argument, ...] = ()


@dataclass(frozen=True, eq=False)
class Expression:
    """A parsed ``$namespace.step.step(...)`` chain."""

    source: str
    namespace: str
    steps: tuple[Step, ...] = ()

    def __str__(self) -> str:
        return self.source


Step = Union[FieldStep, CallStep]
Argument = Union[Literal, Expression]
