from __future__ import annotations

import re
import unittest

from pg_client_helper import InvalidParameterName, transform_query
from pg_client_helper.core.transform import is_spread


def _placeholder_indices(sql: str) -> set[int]:
    return {int(m) for m in re.findall(r"\$(\d+)", sql)}


class TransformQueryTests(unittest.TestCase):
    def test_named_scalars_become_positional(self) -> None:
        sql, params = transform_query(
            "SELECT * FROM users WHERE name = $name AND age = $age",
            {"$name": "John", "$age": 25},
        )

        self.assertEqual(sql, "SELECT * FROM users WHERE name = $1 AND age = $2")
        self.assertEqual(params, ["John", 25])

    def test_list_value_is_spread(self) -> None:
        sql, params = transform_query("SELECT * FROM users WHERE id IN ($ids)", {"$ids": [1, 2, 3]})

        self.assertEqual(sql, "SELECT * FROM users WHERE id IN ($1, $2, $3)")
        self.assertEqual(params, [1, 2, 3])

    def test_tuple_value_is_spread_after_scalars(self) -> None:
        sql, params = transform_query(
            "SELECT * FROM t WHERE a = $a AND b IN ($bs)",
            {"$a": "x", "$bs": ("p", "q")},
        )

        # `$bs` is longer, so it is numbered first.
        self.assertEqual(sql, "SELECT * FROM t WHERE a = $3 AND b IN ($1, $2)")
        self.assertEqual(params, ["p", "q", "x"])

    def test_longer_key_is_not_corrupted_by_prefix_key(self) -> None:
        sql, params = transform_query(
            "SELECT * FROM t WHERE field = $some_field_2 AND field2 = $some_field",
            {"$some_field": "value", "$some_field_2": "anotherValue"},
        )

        self.assertEqual(sql, "SELECT * FROM t WHERE field = $1 AND field2 = $2")
        self.assertEqual(params, ["anotherValue", "value"])

    def test_equal_length_keys_keep_mapping_order(self) -> None:
        sql, params = transform_query("VALUES ($b, $a)", {"$a": 1, "$b": 2})

        self.assertEqual(sql, "VALUES ($2, $1)")
        self.assertEqual(params, [1, 2])

    def test_all_occurrences_share_one_placeholder(self) -> None:
        sql, params = transform_query(
            "SELECT * FROM t WHERE a = $v OR b = $v",
            {"$v": 7},
        )

        self.assertEqual(sql, "SELECT * FROM t WHERE a = $1 OR b = $1")
        self.assertEqual(params, [7])

    def test_repeated_spread_reuses_same_placeholders(self) -> None:
        sql, params = transform_query("a IN ($ids) OR b IN ($ids)", {"$ids": [4, 5]})

        self.assertEqual(sql, "a IN ($1, $2) OR b IN ($1, $2)")
        self.assertEqual(params, [4, 5])

    def test_unused_key_is_dropped(self) -> None:
        sql, params = transform_query("name = $name", {"$name": "John", "$unused": "x"})

        self.assertEqual(sql, "name = $1")
        self.assertEqual(params, ["John"])

    def test_invalid_key_raises(self) -> None:
        with self.assertRaises(InvalidParameterName) as ctx:
            transform_query("name = $name", {"name": "John"})

        self.assertEqual(ctx.exception.key, "name")
        self.assertIn("must start with a dollar sign", str(ctx.exception))
        self.assertIsInstance(ctx.exception, ValueError)

    def test_invalid_key_raises_even_when_unused(self) -> None:
        with self.assertRaises(InvalidParameterName):
            transform_query("name = $name", {"$name": "John", "other": 1})

    def test_bare_dollar_and_non_string_keys_are_invalid(self) -> None:
        with self.assertRaises(InvalidParameterName):
            transform_query("x = $", {"$": 1})
        with self.assertRaises(InvalidParameterName):
            transform_query("x = $1", {1: 1})

    def test_positional_params_pass_through(self) -> None:
        positional = ["John", 25]
        sql, params = transform_query("name = $1 AND age = $2", positional)

        self.assertEqual(sql, "name = $1 AND age = $2")
        self.assertIs(params, positional)

        tuple_params = ("a",)
        self.assertEqual(transform_query("x = $1", tuple_params), ("x = $1", tuple_params))

    def test_missing_params_pass_through(self) -> None:
        self.assertEqual(transform_query("SELECT 1"), ("SELECT 1", None))

    def test_empty_mapping_yields_empty_list(self) -> None:
        self.assertEqual(transform_query("SELECT 1", {}), ("SELECT 1", []))

    def test_empty_spread_removes_placeholder(self) -> None:
        sql, params = transform_query("id IN ($ids) AND a = $a", {"$ids": [], "$a": 1})

        self.assertEqual(sql, "id IN () AND a = $1")
        self.assertEqual(params, [1])

    def test_strings_and_dicts_are_scalars(self) -> None:
        sql, params = transform_query(
            "a = $text AND b = $doc",
            {"$text": "abc", "$doc": {"k": "v"}},
        )

        self.assertEqual(sql, "a = $1 AND b = $2")
        self.assertEqual(params, ["abc", {"k": "v"}])

    def test_only_lists_and_tuples_are_spread(self) -> None:
        for value in ([1, 2], (1, 2), [], ()):
            self.assertTrue(is_spread(value), value)
        for value in ("ab", b"ab", {"k": 1}, {1, 2}, None, 3, 1.5):
            self.assertFalse(is_spread(value), value)

    def test_bytes_and_sets_bind_as_single_values(self) -> None:
        sql, params = transform_query("a = $raw AND b = $set", {"$raw": b"\x00\x01", "$set": {"x"}})

        self.assertEqual(sql, "a = $1 AND b = $2")
        self.assertEqual(params, [b"\x00\x01", {"x"}])

    def test_regex_metacharacters_in_key_are_literal(self) -> None:
        sql, params = transform_query("a = $a.b AND c = $axb", {"$a.b": 1})

        self.assertEqual(sql, "a = $1 AND c = $axb")
        self.assertEqual(params, [1])

    def test_key_text_inside_literals_is_rewritten(self) -> None:
        sql, params = transform_query("SELECT '$name', $name", {"$name": "n"})

        self.assertEqual(sql, "SELECT '$1', $1")
        self.assertEqual(params, ["n"])

    def test_unsupported_params_type_raises(self) -> None:
        with self.assertRaises(TypeError):
            transform_query("x = $1", "oops")  # type: ignore[arg-type]

    def test_placeholder_indices_are_contiguous(self) -> None:
        cases = [
            ("a = $a AND b IN ($bb) AND c = $ccc", {"$a": 1, "$bb": [2, 3, 4], "$ccc": 5}),
            ("$x, $xy, $xyz", {"$x": 1, "$xy": (2,), "$xyz": [3, 4], "$unused": 9}),
            ("$id_2 $id $id_22", {"$id": 1, "$id_2": 2, "$id_22": [3, 3]}),
        ]
        for query, named in cases:
            with self.subTest(query=query):
                sql, params = transform_query(query, named)
                self.assertEqual(_placeholder_indices(sql), set(range(1, len(params) + 1)))


if __name__ == "__main__":
    unittest.main()
