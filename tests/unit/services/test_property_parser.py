"""Unit tests for the restricted object-literal property parser."""

from __future__ import annotations

import pytest

from app.services.events.property_parser import parse_event_properties, strip_comments


class TestLiteralGrammar:
    def test_flat_object_with_trailing_comma(self):
        assert parse_event_properties("{ plan: 'pro', seats: 3, trial: false, }") == {
            "plan": "pro",
            "seats": 3,
            "trial": False,
        }

    def test_nested_values(self):
        fragment = '{ items: [1, "two", { sku: `A-1` }], meta: { ok: true } }'

        assert parse_event_properties(fragment) == {
            "items": [1, "two", {"sku": "A-1"}],
            "meta": {"ok": True},
        }

    def test_null_and_undefined_are_none(self):
        assert parse_event_properties("{ a: null, b: undefined }") == {"a": None, "b": None}

    def test_quoted_and_numeric_keys(self):
        assert parse_event_properties("{ 'user id': 1, \"x\": 2, 3: 'c' }") == {
            "user id": 1,
            "x": 2,
            "3": "c",
        }

    def test_numbers(self):
        assert parse_event_properties("{ n: -1.5, e: 1e3, i: 42 }") == {
            "n": -1.5,
            "e": 1000.0,
            "i": 42,
        }

    def test_string_escapes(self):
        assert parse_event_properties(r"{ s: 'A\n', q: 'it\'s' }") == {
            "s": "A\n",
            "q": "it's",
        }


class TestComments:
    def test_comments_are_ignored(self):
        fragment = "{\n  a: 1, // first\n  /* second */ b: 2\n}"

        assert parse_event_properties(fragment) == {"a": 1, "b": 2}

    def test_strip_comments(self):
        assert strip_comments("{ a: 1 /* x */ } // tail") == "{ a: 1  }"


class TestFallbackToEmpty:
    @pytest.mark.parametrize(
        "fragment",
        [
            None,
            "",
            "{}",
            "   ",
            "{ total: cart.total }",
            "{ id: getId() }",
            "{ ...base, a: 1 }",
            "{ label: `hello ${name}` }",
            "{ a: 1",
            "[1, 2]",
            "'just a string'",
            "{ a: 1 } extra",
        ],
    )
    def test_unsupported_fragments(self, fragment):
        assert parse_event_properties(fragment) == {}

    def test_pathological_nesting(self):
        fragment = "{ a: " + "[" * 5000 + "]" * 5000 + " }"

        assert parse_event_properties(fragment) == {}


class TestUnicodeEscapes:
    def test_basic_escape(self):
        assert parse_event_properties(r"{ s: '\u0041' }") == {"s": "A"}

    def test_surrogate_pair_combines_into_one_character(self):
        assert parse_event_properties(r'{ icon: "\ud83d\ude00" }') == {"icon": "\U0001F600"}

    @pytest.mark.parametrize(
        "fragment",
        [
            r"{ s: '\ud83d' }",
            r"{ s: '\ud83dx' }",
            r"{ s: '\ud83d\u0041' }",
            r"{ s: '\ude00' }",
            r"{ s: '\u12' }",
            r"{ s: '\u+1ab' }",
        ],
    )
    def test_lone_surrogates_and_bad_escapes_degrade_to_empty(self, fragment):
        assert parse_event_properties(fragment) == {}


class TestOversizedNumbers:
    def test_integer_past_digit_limit_degrades_to_empty(self):
        assert parse_event_properties("{ seats: " + "9" * 5000 + " }") == {}
