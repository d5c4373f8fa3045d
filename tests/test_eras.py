"""
test_eras.py
============
Unit tests for collection-era assignment.
"""

import unittest

from stormrank.eras import FIRST_RECORD_YEAR, era_of
from stormrank.errors import MalformedDate, MalformedRecord, OutOfRangeYear
from stormrank.models import CollectionEra


class TestEraBoundaries(unittest.TestCase):

    def test_first_year(self):
        self.assertEqual(era_of(FIRST_RECORD_YEAR), CollectionEra.ERA1)

    def test_era1_last_year(self):
        self.assertEqual(era_of(1954), CollectionEra.ERA1)

    def test_era2_first_year(self):
        self.assertEqual(era_of(1955), CollectionEra.ERA2)

    def test_era2_last_year(self):
        self.assertEqual(era_of(1995), CollectionEra.ERA2)

    def test_era3_first_year(self):
        self.assertEqual(era_of(1996), CollectionEra.ERA3)

    def test_recent_year(self):
        self.assertEqual(era_of(2011), CollectionEra.ERA3)

    def test_era_first_years(self):
        self.assertEqual([e.first_year for e in CollectionEra], [1950, 1955, 1996])


class TestEraErrors(unittest.TestCase):

    def test_before_first_year(self):
        with self.assertRaises(OutOfRangeYear):
            era_of(1949)

    def test_custom_first_year(self):
        with self.assertRaises(OutOfRangeYear):
            era_of(1950, first_year=1951)

    def test_string_year(self):
        with self.assertRaises(MalformedDate):
            era_of("1996")

    def test_bool_year(self):
        with self.assertRaises(MalformedDate):
            era_of(True)

    def test_float_year(self):
        with self.assertRaises(MalformedDate):
            era_of(1996.0)

    def test_errors_are_malformed_records(self):
        self.assertTrue(issubclass(OutOfRangeYear, MalformedRecord))
        self.assertTrue(issubclass(MalformedDate, ValueError))


if __name__ == "__main__":
    unittest.main()
