"""Tests for CLI argument parsing and integration."""

import copy
import io
import json
import unittest
from contextlib import redirect_stdout
from datetime import datetime, timezone
from pathlib import Path
from unittest import mock

from tokenlens.config.loader import DEFAULT_CONFIG
from tokenlens.tokenlens import build_options, create_parser, main, parse_date_filters

FIXTURE = str(Path(__file__).parent / 'test_fixtures' / 'usage_sample.csv')


class TestArgumentParser(unittest.TestCase):
    """Test CLI argument parsing."""

    def setUp(self):
        """Create parser."""
        self.parser = create_parser()

    def test_default_no_args(self):
        """Verify default with no arguments."""
        args = self.parser.parse_args([])
        self.assertIsNone(args.csv_file)
        self.assertFalse(args.all)
        self.assertFalse(args.aggregated)
        self.assertFalse(args.hourly)

    def test_view_flags(self):
        """Verify report and view mode flags."""
        args = self.parser.parse_args(['usage.csv', '--models', '--aggregated', '--hourly'])
        self.assertEqual(args.csv_file, 'usage.csv')
        self.assertTrue(args.models)
        self.assertTrue(args.aggregated)
        self.assertTrue(args.hourly)

    def test_reports_mutually_exclusive(self):
        """Verify --models and --timeline cannot combine."""
        with mock.patch('sys.stderr', io.StringIO()):
            with self.assertRaises(SystemExit):
                self.parser.parse_args(['--models', '--timeline'])

    def test_date_flags(self):
        """Verify --from/--to destinations."""
        args = self.parser.parse_args(['--from', '2024-01-01', '--to', '2024-01-31'])
        self.assertEqual(args.date_from, '2024-01-01')
        self.assertEqual(args.date_to, '2024-01-31')


class TestDateFilters(unittest.TestCase):
    """Test --from/--to parsing."""

    def setUp(self):
        self.parser = create_parser()

    def test_whole_days_inclusive(self):
        """Verify dates expand to whole days."""
        args = self.parser.parse_args(['--from', '2024-01-01', '--to', '2024-01-02'])
        date_range = parse_date_filters(args, 'UTC')
        self.assertEqual(date_range.start, datetime(2024, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(date_range.end.date().isoformat(), '2024-01-02')
        self.assertEqual(date_range.end.hour, 23)

    def test_no_filters(self):
        """Verify absent flags leave the range unbounded."""
        args = self.parser.parse_args([])
        self.assertFalse(parse_date_filters(args, 'UTC').is_bounded)

    def test_bad_date(self):
        """Verify malformed dates raise ValueError."""
        args = self.parser.parse_args(['--from', '01/02/2024'])
        with self.assertRaises(ValueError):
            parse_date_filters(args, 'UTC')

    def test_reversed_range(self):
        """Verify from after to raises ValueError."""
        args = self.parser.parse_args(['--from', '2024-02-01', '--to', '2024-01-01'])
        with self.assertRaises(ValueError):
            parse_date_filters(args, 'UTC')

    def test_build_options_from_flags(self):
        """Verify flags override config defaults."""
        args = self.parser.parse_args(['--aggregated', '--hourly', '--tz', 'Europe/Paris'])
        options = build_options(args, DEFAULT_CONFIG)
        self.assertEqual(options.model_view, 'aggregated')
        self.assertEqual(options.granularity, 'hourly')
        self.assertEqual(options.timezone, 'Europe/Paris')


class TestMain(unittest.TestCase):
    """Test the main entry point end to end."""

    def _run(self, argv):
        out = io.StringIO()
        with mock.patch('tokenlens.tokenlens.load_config', return_value=DEFAULT_CONFIG):
            with redirect_stdout(out):
                main(argv)
        return out.getvalue()

    def test_summary_output(self):
        """Verify the default summary report."""
        output = self._run([FIXTURE, '--no-color'])
        self.assertIn('TOKEN USAGE ANALYTICS', output)
        self.assertIn('claude-4-sonnet', output)

    def test_all_reports(self):
        """Verify --all prints every report."""
        output = self._run([FIXTURE, '--all', '--no-color'])
        self.assertIn('MODEL COMPARISON', output)
        self.assertIn('TOKEN USAGE OVER TIME', output)

    def test_json_output(self):
        """Verify --json emits the comprehensive stats."""
        data = json.loads(self._run([FIXTURE, '--json']))
        self.assertEqual(data['summary']['record_count'], 4)
        self.assertEqual(len(data['hourly_usage']), 24)

    def test_table_width_from_config(self):
        """Verify display.table_max_width narrows report tables."""
        config = copy.deepcopy(DEFAULT_CONFIG)
        config['display']['table_max_width'] = 60
        out = io.StringIO()
        with mock.patch('tokenlens.tokenlens.load_config', return_value=config):
            with redirect_stdout(out):
                main([FIXTURE, '--models', '--no-color'])
        self.assertIn('claude-…', out.getvalue())

    def test_missing_file_exits(self):
        """Verify a missing file exits with status 1."""
        with self.assertRaises(SystemExit) as ctx:
            self._run(['/nonexistent/usage.csv'])
        self.assertEqual(ctx.exception.code, 1)

    def test_bad_timezone_exits(self):
        """Verify an unknown zone exits with status 1."""
        with self.assertRaises(SystemExit) as ctx:
            self._run([FIXTURE, '--tz', 'Nowhere/Special'])
        self.assertEqual(ctx.exception.code, 1)


if __name__ == '__main__':
    unittest.main()
