"""
test_loader.py
==============
Unit tests for reading the Storm Data CSV into RawRecords.
"""

import bz2
import os
import tempfile
import unittest
from datetime import date

from stormrank.errors import MissingColumn
from stormrank.loader import iter_storm_records, load_storm_csv

HEADER = ('"STATE__","BGN_DATE","BGN_TIME","COUNTY","EVTYPE","FATALITIES","INJURIES",'
          '"PROPDMG","PROPDMGEXP","CROPDMG","CROPDMGEXP","REMARKS"')

ROWS = [
    '1,"4/18/1950 0:00:00","0130",97,"TORNADO",0,15,25,"K",0,"",""',
    '1,"7/4/2000 0:00:00","1500",3,"HAIL 075",0,0,10,"k",1.5,"M","Large hail"',
    '1,"not a date","1500",3,"TSTM WIND",1,,,"",,"",""',
    '1,"1/1/2006 0:00:00","0000",55,"FLOOD",0,0,115,"B",32.5,"M","Napa"',
]


def write_csv(path, header=HEADER, rows=ROWS, opener=open):
    with opener(path, "wt", encoding="utf-8") as f:
        f.write(header + "\n")
        for r in rows:
            f.write(r + "\n")
    return path


class TestLoader(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.csv_path = write_csv(os.path.join(self.tmp.name, "storm.csv"))

    def tearDown(self):
        self.tmp.cleanup()

    def test_fields(self):
        records = load_storm_csv(self.csv_path)
        self.assertEqual(len(records), 4)
        r = records[0]
        self.assertEqual(r.begin_date, date(1950, 4, 18))
        self.assertEqual(r.raw_event_label, "TORNADO")
        self.assertEqual(r.fatalities, 0)
        self.assertEqual(r.injuries, 15)
        self.assertEqual(r.property_damage_amount, 25.0)
        self.assertEqual(r.property_damage_exponent_code, "K")
        self.assertEqual(r.crop_damage_exponent_code, "")

    def test_codes_kept_as_text(self):
        r = load_storm_csv(self.csv_path)[1]
        self.assertEqual(r.property_damage_exponent_code, "k")
        self.assertEqual(r.crop_damage_amount, 1.5)
        self.assertEqual(r.crop_damage_exponent_code, "M")

    def test_bad_date_is_none(self):
        self.assertIsNone(load_storm_csv(self.csv_path)[2].begin_date)

    def test_blank_numbers_are_zero(self):
        r = load_storm_csv(self.csv_path)[2]
        self.assertEqual(r.injuries, 0)
        self.assertEqual(r.property_damage_amount, 0.0)
        self.assertEqual(r.crop_damage_amount, 0.0)

    def test_nrows(self):
        self.assertEqual(len(load_storm_csv(self.csv_path, nrows=2)), 2)

    def test_chunked_reading(self):
        records = list(iter_storm_records(self.csv_path, chunksize=1))
        self.assertEqual(records, load_storm_csv(self.csv_path))

    def test_bz2(self):
        path = write_csv(os.path.join(self.tmp.name, "storm.csv.bz2"), opener=bz2.open)
        self.assertEqual(load_storm_csv(path), load_storm_csv(self.csv_path))

    def test_column_names_matched_loosely(self):
        header = HEADER.replace('"BGN_DATE"', '"bgn_date"').replace('"EVTYPE"', '"EvType"')
        path = write_csv(os.path.join(self.tmp.name, "loose.csv"), header=header)
        self.assertEqual(load_storm_csv(path)[0].raw_event_label, "TORNADO")

    def test_missing_column(self):
        header = HEADER.replace('"CROPDMGEXP"', '"OTHER"')
        path = write_csv(os.path.join(self.tmp.name, "missing.csv"), header=header)
        with self.assertRaises(MissingColumn):
            load_storm_csv(path)


if __name__ == "__main__":
    unittest.main()
