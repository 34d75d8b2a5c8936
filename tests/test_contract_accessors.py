from __future__ import annotations

import unittest
from types import SimpleNamespace

from daygrid.accessors import resolve_accessor


class TestAccessorContract(unittest.TestCase):
    def test_field_name_reads_mapping_then_attribute(self) -> None:
        get = resolve_accessor("start")
        self.assertEqual(get({"start": 1}), 1)
        self.assertEqual(get(SimpleNamespace(start=2)), 2)
        self.assertIsNone(get({}))
        self.assertIsNone(get(object()))

    def test_callable_is_used_as_is(self) -> None:
        fn = lambda e: e[0]  # noqa: E731
        self.assertIs(resolve_accessor(fn), fn)

    def test_invalid_accessors_raise(self) -> None:
        with self.assertRaises(ValueError):
            resolve_accessor("  ")
        with self.assertRaises(TypeError):
            resolve_accessor(42)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main(verbosity=2)
