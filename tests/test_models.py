"""
Tests for the data types – derived usage figures and credential hygiene.
"""

import dataclasses
import unittest
from datetime import datetime

from ymobile_monitor.models import Credentials, UsageSnapshot

NOW = datetime(2026, 10, 18, 21, 5, 59, 123456)


class TestUsageSnapshot(unittest.TestCase):
    def _snap(self, carry=1.0, base=3.0, extra=0.0, used=1.5):
        return UsageSnapshot(carry, base, extra, used, observed_at=NOW)

    def test_total_is_base_plus_carry_over(self):
        self.assertEqual(self._snap().total_gb, 4.0)

    def test_extra_is_not_part_of_total(self):
        self.assertEqual(self._snap(extra=10.0).total_gb, 4.0)

    def test_remaining_rounded_to_two_places(self):
        snap = self._snap(carry=0.1, base=0.2, used=0.0)
        self.assertEqual(snap.remaining_gb, 0.3)

    def test_remaining_can_go_negative(self):
        self.assertEqual(self._snap(used=5.25).remaining_gb, -1.25)

    def test_percentage(self):
        self.assertAlmostEqual(self._snap(used=1.0).used_percentage, 25.0)

    def test_percentage_zero_total(self):
        self.assertEqual(self._snap(carry=0.0, base=0.0, used=2.0).used_percentage, 0.0)

    def test_observed_at_truncated_to_minute(self):
        self.assertEqual(self._snap().observed_at, datetime(2026, 10, 18, 21, 5))

    def test_immutable(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self._snap().used_gb = 0.0

    def test_as_dict(self):
        data = self._snap().as_dict()
        self.assertEqual(data["total_gb"], 4.0)
        self.assertEqual(data["remaining_gb"], 2.5)
        self.assertEqual(data["observed_at"], "2026-10-18 21:05")


class TestCredentials(unittest.TestCase):
    def test_repr_hides_secret(self):
        creds = Credentials("09012345678", "hunter2")
        self.assertNotIn("hunter2", repr(creds))
        self.assertIn("09012345678", repr(creds))

    def test_truthiness(self):
        self.assertTrue(Credentials("a", "b"))
        self.assertFalse(Credentials("a", ""))
        self.assertFalse(Credentials("", "b"))


if __name__ == "__main__":
    unittest.main()
