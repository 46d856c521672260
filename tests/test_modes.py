"""Unit tests for the mode registry."""

import dataclasses
import unittest

from lined.modes import ModeRegistry, Modes, StartupOptions

FLAGS = ("extended_regexp", "restricted", "scripted", "strip_cr", "traditional")


class TestModeRegistry(unittest.TestCase):
    """Test the combined getter/setter flags."""

    def setUp(self):
        self.registry = ModeRegistry()

    def test_flags_default_to_false(self):
        for name in FLAGS:
            self.assertFalse(getattr(self.registry, name)())

    def test_set_returns_new_value(self):
        for name in FLAGS:
            self.assertTrue(getattr(self.registry, name)(True))

    def test_set_value_stays_set(self):
        """Repeated reads after a set keep returning True."""
        self.registry.restricted(True)
        for _ in range(3):
            self.assertTrue(self.registry.restricted())

    def test_flags_are_independent(self):
        self.registry.scripted(True)
        self.assertTrue(self.registry.scripted())
        for name in FLAGS:
            if name != "scripted":
                self.assertFalse(getattr(self.registry, name)())

    def test_snapshot_reflects_flags(self):
        self.registry.strip_cr(True)
        self.registry.traditional(True)

        modes = self.registry.snapshot()

        self.assertEqual(modes, Modes(strip_cr=True, traditional=True))

    def test_snapshot_is_immutable(self):
        modes = self.registry.snapshot()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            modes.restricted = True

    def test_snapshot_unaffected_by_later_writes(self):
        modes = self.registry.snapshot()
        self.registry.extended_regexp(True)
        self.assertFalse(modes.extended_regexp)


class TestStartupOptions(unittest.TestCase):

    def test_defaults(self):
        options = StartupOptions()
        self.assertFalse(options.loose)
        self.assertFalse(options.verbose)
        self.assertIsNone(options.prompt)


if __name__ == '__main__':
    unittest.main()
