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

"""Tests for pagebind.formatters."""

from __future__ import annotations

import threading
from datetime import date, datetime, timedelta, timezone

import pytest

from pagebind.config import RenderConfig
from pagebind.errors import EvalError, EvalErrorKind
from pagebind.expr import BindingContext, evaluate, parse_expression
from pagebind.formatters import registry
from pagebind.formatters.dates import format_layout, tokenize
from pagebind.formatters.registry import (
    formatter_names,
    get_formatter,
    list_formatters,
    register_formatter,
)

REFERENCE = datetime(2006, 1, 2, 15, 4, 5)


class TestFormatLayout:
    def test_reference_time_roundtrip(self):
        assert format_layout(REFERENCE, "Mon Jan 2 15:04:05 MST 2006") == "Mon Jan 2 15:04:05 UTC 2006"

    def test_long_date(self):
        assert format_layout(datetime(2024, 3, 5), "January 02, 2006") == "March 05, 2024"

    def test_weekday_names(self):
        assert format_layout(datetime(2024, 3, 5), "Monday, 2 Jan") == "Tuesday, 5 Mar"

    def test_numeric_date(self):
        assert format_layout(datetime(2024, 3, 5), "2006-01-02") == "2024-03-05"
        assert format_layout(datetime(2024, 3, 5), "1/2/06") == "3/5/24"

    def test_day_of_year(self):
        assert format_layout(datetime(2024, 3, 5), "2006.002") == "2024.065"

    def test_space_padded_day(self):
        assert format_layout(datetime(2024, 3, 5), "[_2]") == "[ 5]"

    def test_twelve_hour_clock(self):
        assert format_layout(datetime(2024, 3, 5, 0, 0), "3:04PM") == "12:00AM"
        assert format_layout(datetime(2024, 3, 5, 13, 7), "03:04pm") == "01:07pm"

    def test_fractional_seconds(self):
        value = datetime(2024, 3, 5, 9, 30, 0, 120000)
        assert format_layout(value, "05.000") == "00.120"
        assert format_layout(value, "05.999") == "00.12"
        assert format_layout(datetime(2024, 3, 5), "05.999") == "00"

    def test_zone_offsets(self):
        utc = datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc)
        plus_one = datetime(2024, 3, 5, 9, 30, tzinfo=timezone(timedelta(hours=1)))
        assert format_layout(utc, "Z07:00") == "Z"
        assert format_layout(plus_one, "Z07:00") == "+01:00"
        assert format_layout(plus_one, "-0700") == "+0100"
        assert format_layout(plus_one, "MST") == "+0100"
        assert format_layout(utc, "MST") == "UTC"

    def test_rfc3339_layout(self):
        value = datetime(2024, 3, 5, 9, 30, 15, tzinfo=timezone.utc)
        assert format_layout(value, "2006-01-02T15:04:05Z07:00") == "2024-03-05T09:30:15Z"

    def test_lowercase_continuation_is_literal(self):
        assert format_layout(datetime(2024, 3, 5), "Janet") == "Janet"

    def test_plain_date_value(self):
        assert format_layout(date(2024, 3, 5), "Jan 2, 2006") == "Mar 5, 2024"

    def test_tokenize(self):
        assert tokenize("January 02, 2006") == [
            (True, "January"),
            (False, " "),
            (True, "02"),
            (False, ", "),
            (True, "2006"),
        ]


class TestDateFormatters:
    def test_timezone_conversion(self):
        config = RenderConfig(timezone=timezone(timedelta(hours=1)))
        ctx = BindingContext(
            namespaces={"page": {"date": datetime(2024, 3, 5, 23, 30, tzinfo=timezone.utc)}},
            config=config,
        )
        expr = parse_expression("$page.date.format('2006-01-02 15:04')")
        assert evaluate(expr, ctx) == "2024-03-06 00:30"

    def test_naive_value_is_not_converted(self):
        config = RenderConfig(timezone=timezone(timedelta(hours=1)))
        ctx = BindingContext(namespaces={"page": {"date": datetime(2024, 3, 5, 23, 30)}}, config=config)
        assert evaluate(parse_expression("$page.date.format('15:04')"), ctx) == "23:30"

    def test_iso(self):
        ctx = BindingContext(namespaces={"page": {"date": datetime(2024, 3, 5, 9, 30)}})
        assert evaluate(parse_expression("$page.date.iso()"), ctx) == "2024-03-05T09:30:00"


class TestRegistry:
    def test_builtin_lookup(self):
        assert get_formatter("x", "upper") is not None
        assert get_formatter(["a"], "join").arity == 1
        assert get_formatter(3, "upper") is None

    def test_datetime_and_date_share_names(self):
        assert formatter_names(datetime) == ["format", "iso"]
        assert formatter_names(date) == ["format", "iso"]

    def test_list_formatters(self):
        names = {f.name for f in list_formatters()}
        assert {"format", "upper", "join", "limit"} <= names

    def test_bool_is_not_a_number(self):
        formatter = get_formatter(["a", "b"], "limit")
        ctx = BindingContext()
        with pytest.raises(EvalError) as exc:
            formatter(["a", "b"], [True], ctx)
        assert exc.value.kind is EvalErrorKind.BAD_ARGUMENT

    def test_negative_limit(self):
        formatter = get_formatter(["a"], "limit")
        with pytest.raises(EvalError) as exc:
            formatter(["a"], [-1], BindingContext())
        assert exc.value.kind is EvalErrorKind.BAD_ARGUMENT

    def test_concurrent_first_lookup(self, monkeypatch):
        monkeypatch.setattr(registry, "_REGISTRY", {})
        monkeypatch.setattr(registry, "_builtins_loaded", False)
        workers = 8
        value = datetime(2024, 1, 1)

        for _ in range(50):
            registry._REGISTRY.clear()
            registry._builtins_loaded = False
            barrier = threading.Barrier(workers)
            results = []

            def lookup():
                barrier.wait()
                results.append(get_formatter(value, "format"))

            threads = [threading.Thread(target=lookup) for _ in range(workers)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

            assert len(results) == workers
            assert all(f is not None for f in results)

    def test_register_custom_formatter(self):
        register_formatter(str, "shout", lambda v, *, context: v.upper() + "!", (), "Shout")
        try:
            ctx = BindingContext(namespaces={"page": {"title": "hello"}})
            assert evaluate(parse_expression("$page.title.shout()"), ctx) == "HELLO!"
            assert "shout" in formatter_names(str)
        finally:
            registry._REGISTRY.pop((str, "shout"), None)
        assert get_formatter("x", "shout") is None
