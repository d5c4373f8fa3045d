"""
test_aggregate.py
=================
Unit tests for grouping, summing and top-N ranking.
"""

import unittest

from stormrank.aggregate import (
    ECONOMIC, HEALTH, GroupBy, Measure, aggregate, aggregate_partitioned,
    merge_partials, partial_sums, rank,
)
from stormrank.models import CollectionEra, NormalizedRecord

E1, E2, E3 = CollectionEra.ERA1, CollectionEra.ERA2, CollectionEra.ERA3


def rec(event, era=E3, fat=0, inj=0, prop=None, crop=None, year=None):
    if year is None:
        year = era.first_year
    return NormalizedRecord(event, era, year, fat, inj, prop, crop)


def pairs(rows):
    return [(r.event, r.value) for r in rows]


class TestSingleMeasure(unittest.TestCase):

    def test_sum_and_order(self):
        records = [rec("tornado", fat=5), rec("flood", fat=2), rec("tornado", fat=1), rec("heat", fat=4)]
        rows = aggregate(records, GroupBy.EVENT, Measure.FATALITIES)
        self.assertEqual(pairs(rows), [("tornado", 6), ("heat", 4), ("flood", 2)])
        self.assertEqual([r.rank for r in rows], [1, 2, 3])

    def test_tie_broken_by_event_name(self):
        rows = aggregate([rec("hail", fat=3), rec("flood", fat=3)], GroupBy.EVENT, Measure.FATALITIES)
        self.assertEqual(pairs(rows), [("flood", 3), ("hail", 3)])

    def test_fewer_groups_than_top_n(self):
        records = [rec("a", inj=1), rec("b", inj=2), rec("c", inj=3)]
        self.assertEqual(len(aggregate(records, GroupBy.EVENT, Measure.INJURIES, top_n=5)), 3)

    def test_truncation(self):
        records = [rec(f"event{i:02d}", fat=i) for i in range(1, 21)]
        rows = aggregate(records, GroupBy.EVENT, Measure.FATALITIES, top_n=10)
        self.assertEqual(len(rows), 10)
        self.assertEqual(rows[0].event, "event20")
        self.assertEqual(rows[-1].event, "event11")

    def test_zero_values_do_not_form_groups(self):
        rows = aggregate([rec("tornado", fat=0, inj=4)], GroupBy.EVENT, Measure.FATALITIES)
        self.assertEqual(rows, [])

    def test_absent_only_group_has_no_row(self):
        records = [rec("drought", prop=None, crop=5.0), rec("flood", prop=100.0)]
        rows = aggregate(records, GroupBy.EVENT, Measure.PROPERTY_USD)
        self.assertEqual(pairs(rows), [("flood", 100.0)])

    def test_absent_values_do_not_count_as_zero(self):
        records = [rec("flood", prop=None), rec("flood", prop=250.0), rec("flood", prop=None)]
        rows = aggregate(records, GroupBy.EVENT, Measure.PROPERTY_USD)
        self.assertEqual(pairs(rows), [("flood", 250.0)])

    def test_top_zero(self):
        self.assertEqual(aggregate([rec("a", fat=1)], GroupBy.EVENT, Measure.FATALITIES, top_n=0), [])

    def test_negative_top_n(self):
        with self.assertRaises(ValueError):
            aggregate([rec("a", fat=1)], GroupBy.EVENT, Measure.FATALITIES, top_n=-1)

    def test_empty_input(self):
        self.assertEqual(aggregate([], GroupBy.EVENT_ERA, Measure.CROP_USD), [])


class TestPerEra(unittest.TestCase):

    def test_truncated_per_era(self):
        records = [
            rec("tornado", era=E1, fat=10),
            rec("tornado", era=E2, fat=3),
            rec("hail", era=E2, fat=7),
            rec("heat", era=E3, fat=9),
            rec("flood", era=E3, fat=1),
        ]
        rows = aggregate(records, GroupBy.EVENT_ERA, Measure.FATALITIES, top_n=1)
        self.assertEqual([(r.era, r.event, r.value, r.rank) for r in rows], [
            (E1, "tornado", 10, 1),
            (E2, "hail", 7, 1),
            (E3, "heat", 9, 1),
        ])

    def test_eras_summed_separately(self):
        records = [rec("tornado", era=E1, fat=2), rec("tornado", era=E3, fat=5)]
        rows = aggregate(records, GroupBy.EVENT_ERA, Measure.FATALITIES)
        self.assertEqual([(r.era, r.value) for r in rows], [(E1, 2), (E3, 5)])

    def test_all_eras_grouping_has_no_era(self):
        records = [rec("tornado", era=E1, fat=2), rec("tornado", era=E3, fat=5)]
        rows = aggregate(records, GroupBy.EVENT, Measure.FATALITIES)
        self.assertEqual([(r.era, r.value) for r in rows], [(None, 7)])


class TestCombinedMeasure(unittest.TestCase):

    def test_health_ordering(self):
        records = [
            rec("b", fat=2, inj=8),
            rec("c", fat=10),
            rec("a", fat=10),
            rec("d", fat=2, inj=9),
            rec("e", fat=1, inj=9),
        ]
        rows = aggregate(records, GroupBy.EVENT, HEALTH)
        # total desc, fatalities desc, injuries desc, then name
        self.assertEqual(pairs(rows), [("d", 11), ("a", 10), ("c", 10), ("b", 10), ("e", 10)])

    def test_components(self):
        rows = aggregate([rec("tornado", fat=3, inj=4), rec("tornado", fat=1)], GroupBy.EVENT, HEALTH)
        r = rows[0]
        self.assertEqual(r.value, 8)
        self.assertEqual(r.component("fatalities"), 4)
        self.assertEqual(r.component("injuries"), 4)
        with self.assertRaises(KeyError):
            r.component("crop_usd")

    def test_economic_crop_before_property(self):
        records = [rec("flood", prop=100.0, crop=50.0), rec("drought", prop=50.0, crop=100.0)]
        rows = aggregate(records, GroupBy.EVENT, ECONOMIC)
        self.assertEqual(pairs(rows), [("drought", 150.0), ("flood", 150.0)])
        self.assertEqual([name for name, _ in rows[0].components], ["crop_usd", "property_usd"])

    def test_zero_health_total_has_no_row(self):
        records = [rec("tornado", fat=5), rec("hail", prop=10000.0)]
        rows = aggregate(records, GroupBy.EVENT, HEALTH)
        self.assertEqual(pairs(rows), [("tornado", 5)])

    def test_zero_economic_total_has_no_row(self):
        records = [rec("lightning", inj=3, prop=0.0, crop=0.0), rec("flood", prop=5000.0)]
        rows = aggregate(records, GroupBy.EVENT, ECONOMIC)
        self.assertEqual(pairs(rows), [("flood", 5000.0)])

    def test_zero_total_dropped_per_era(self):
        records = [rec("hail", era=E2, prop=1.0), rec("tornado", era=E2, inj=1)]
        rows = aggregate(records, GroupBy.EVENT_ERA, HEALTH)
        self.assertEqual([(r.era, r.event) for r in rows], [(E2, "tornado")])

    def test_partially_absent_components(self):
        records = [rec("flood", prop=100.0, crop=None), rec("hail", prop=None, crop=None)]
        rows = aggregate(records, GroupBy.EVENT, ECONOMIC)
        self.assertEqual(pairs(rows), [("flood", 100.0)])
        self.assertEqual(rows[0].component("crop_usd"), 0)


class TestPartitioned(unittest.TestCase):

    def setUp(self):
        events = ["tornado", "hail", "flood", "heat", "lightning"]
        eras = [E1, E2, E3]
        self.records = [
            rec(events[i % 5], era=eras[i % 3], fat=i % 4, inj=i % 6,
                prop=None if i % 7 == 0 else float(i * 1000), crop=float(i % 3 * 500))
            for i in range(300)
        ]

    def test_same_as_single_pass(self):
        parts = [self.records[:90], self.records[90:200], self.records[200:]]
        for group_by in GroupBy:
            for measure in list(Measure) + [HEALTH, ECONOMIC]:
                self.assertEqual(
                    aggregate_partitioned(parts, group_by, measure, top_n=3),
                    aggregate(self.records, group_by, measure, top_n=3),
                )

    def test_merge_order_does_not_matter(self):
        a = partial_sums(self.records[:150], GroupBy.EVENT, Measure.FATALITIES)
        b = partial_sums(self.records[150:], GroupBy.EVENT, Measure.FATALITIES)
        a2 = partial_sums(self.records[:150], GroupBy.EVENT, Measure.FATALITIES)
        b2 = partial_sums(self.records[150:], GroupBy.EVENT, Measure.FATALITIES)
        self.assertEqual(rank(merge_partials([a, b])), rank(merge_partials([b2, a2])))

    def test_no_partitions(self):
        self.assertEqual(aggregate_partitioned([], GroupBy.EVENT, Measure.FATALITIES), [])

    def test_mismatched_merge(self):
        a = partial_sums([], GroupBy.EVENT, Measure.FATALITIES)
        b = partial_sums([], GroupBy.EVENT_ERA, Measure.FATALITIES)
        with self.assertRaises(ValueError):
            a.merge(b)
        with self.assertRaises(ValueError):
            merge_partials([])


if __name__ == "__main__":
    unittest.main()
