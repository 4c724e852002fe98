"""Tests for per-model aggregation."""

import unittest

from tokenlens.analytics.models import (
    calculate_cost_breakdown, calculate_model_stats, compare_models, record_cache_efficiency
)
from tokenlens.models.entities import AGGREGATED_MODEL_NAME
from tokenlens.tests.helpers import make_record


class TestCompareModels(unittest.TestCase):
    """Test compare_models."""

    def setUp(self):
        self.records = [
            make_record('2024-01-01T00:00:00', model='b', total_tokens=100, cost=1.0),
            make_record('2024-01-01T01:00:00', model='a', total_tokens=200, cost=2.0),
            make_record('2024-01-01T02:00:00', model='c', total_tokens=300, cost=3.0),
            make_record('2024-01-01T03:00:00', model='c', total_tokens=100, cost=1.0),
        ]

    def test_empty(self):
        """Verify empty input gives no groups."""
        self.assertEqual(compare_models([]), [])

    def test_order_by_requests_then_first_seen(self):
        """Verify descending request count with stable ties."""
        names = [m.model for m in compare_models(self.records)]
        self.assertEqual(names, ['c', 'b', 'a'])

    def test_per_request_averages(self):
        """Verify sums are converted to averages."""
        c = compare_models(self.records)[0]
        self.assertEqual(c.total_requests, 2)
        self.assertAlmostEqual(c.avg_cost_per_request, 2.0)
        self.assertAlmostEqual(c.avg_tokens_per_request, 200.0)

    def test_aggregated_view(self):
        """Verify aggregated view collapses to one group."""
        result = compare_models(self.records, 'aggregated')
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].model, AGGREGATED_MODEL_NAME)
        self.assertEqual(result[0].total_requests, len(self.records))

    def test_request_counts_sum_to_total(self):
        """Verify group request counts add up to the input size."""
        total = sum(m.total_requests for m in compare_models(self.records))
        self.assertEqual(total, len(self.records))

    def test_cache_efficiency_is_mean_of_records(self):
        """Verify cache efficiency averages per-record ratios."""
        records = [
            make_record('2024-01-01T00:00:00', cache_read=50, input_with_cache=100),
            make_record('2024-01-01T01:00:00', cache_read=0, input_with_cache=900),
        ]
        # per-record: 50% and 0% -> mean 25%; pooled would be 5%
        self.assertAlmostEqual(compare_models(records)[0].cache_efficiency, 25.0)

    def test_record_efficiency_zero_input(self):
        """Verify zero input tokens gives 0 efficiency."""
        self.assertEqual(record_cache_efficiency(make_record('2024-01-01T00:00:00', cache_read=10)), 0.0)


class TestModelStats(unittest.TestCase):
    """Test calculate_model_stats and calculate_cost_breakdown."""

    def test_pooled_cache_efficiency(self):
        """Verify model stats pool cache reads over input plus cache reads."""
        records = [
            make_record('2024-01-01T00:00:00', cache_read=50, input_with_cache=100),
            make_record('2024-01-01T01:00:00', cache_read=0, input_with_cache=900),
        ]
        stats = calculate_model_stats(records)
        self.assertEqual(len(stats), 1)
        # 50 / (1000 + 50)
        self.assertAlmostEqual(stats[0].cache_efficiency, 50 / 1050 * 100)
        self.assertEqual(stats[0].total_requests, 2)
        self.assertEqual(stats[0].total_tokens, 200)

    def test_cache_only_group(self):
        """Verify a group with only cache reads is fully efficient."""
        records = [make_record('2024-01-01T00:00:00', cache_read=40)]
        self.assertAlmostEqual(calculate_model_stats(records)[0].cache_efficiency, 100.0)

    def test_no_input_or_cache(self):
        """Verify zero input and zero cache reads give 0."""
        records = [make_record('2024-01-01T00:00:00')]
        self.assertEqual(calculate_model_stats(records)[0].cache_efficiency, 0.0)

    def test_cost_breakdown(self):
        """Verify cost shares and ordering."""
        records = [
            make_record('2024-01-01T00:00:00', model='small', cost=1.0),
            make_record('2024-01-01T01:00:00', model='big', cost=3.0),
        ]
        breakdown = calculate_cost_breakdown(records)
        self.assertEqual([b.model for b in breakdown], ['big', 'small'])
        self.assertAlmostEqual(breakdown[0].percentage, 75.0)
        self.assertAlmostEqual(breakdown[1].percentage, 25.0)

    def test_cost_breakdown_zero_cost(self):
        """Verify zero total cost gives zero shares."""
        records = [make_record('2024-01-01T00:00:00', cost=0.0)]
        self.assertEqual(calculate_cost_breakdown(records)[0].percentage, 0.0)


if __name__ == '__main__':
    unittest.main()
