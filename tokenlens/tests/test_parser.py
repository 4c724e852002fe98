"""Tests for the usage export parser."""

import unittest
from datetime import datetime, timezone
from pathlib import Path

from tokenlens.etl.parser import CSVFormatError, parse_csv_file, parse_csv_text

FIXTURES = Path(__file__).parent / 'test_fixtures'

HEADER = (
    'Date,Kind,Model,Max Mode,Input (w/ Cache Write),Input (w/o Cache Write),'
    'Cache Read,Output Tokens,Total Tokens,Cost'
)


class TestParseFile(unittest.TestCase):
    """Test parsing the sample export."""

    def setUp(self):
        self.records = parse_csv_file(FIXTURES / 'usage_sample.csv')

    def test_record_count(self):
        """Verify every data row becomes a record."""
        self.assertEqual(len(self.records), 4)

    def test_first_record_fields(self):
        """Verify columns map onto record fields."""
        r = self.records[0]
        self.assertEqual(r.timestamp, datetime(2024, 7, 15, 14, 3, 11, tzinfo=timezone.utc))
        self.assertEqual(r.kind, 'Included')
        self.assertEqual(r.model, 'claude-4-sonnet')
        self.assertFalse(r.max_mode)
        self.assertEqual(r.input_with_cache, 1200)
        self.assertEqual(r.input_without_cache, 340)
        self.assertEqual(r.cache_read, 15000)
        self.assertEqual(r.output_tokens, 820)
        self.assertEqual(r.total_tokens, 17360)
        self.assertAlmostEqual(r.cost, 0.12)

    def test_thousands_separator_and_currency(self):
        """Verify '2,500' and '$1.45' are accepted."""
        r = self.records[2]
        self.assertTrue(r.max_mode)
        self.assertEqual(r.input_with_cache, 2500)
        self.assertAlmostEqual(r.cost, 1.45)

    def test_missing_file(self):
        """Verify a missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            parse_csv_file(FIXTURES / 'does_not_exist.csv')


class TestParseErrors(unittest.TestCase):
    """Test rejection of malformed exports."""

    def test_empty_content(self):
        """Verify empty text is rejected."""
        with self.assertRaises(CSVFormatError):
            parse_csv_text('')
        with self.assertRaises(CSVFormatError):
            parse_csv_text('   \n')

    def test_header_only(self):
        """Verify a header with no rows gives no records."""
        self.assertEqual(parse_csv_text(HEADER + '\n'), [])

    def test_missing_column(self):
        """Verify a missing column is reported by name."""
        with self.assertRaises(CSVFormatError) as ctx:
            parse_csv_text('Date,Kind,Model\n2024-01-01,Included,x\n')
        self.assertIn('Missing required columns', str(ctx.exception))
        self.assertIn('Cost', str(ctx.exception))

    def test_bad_timestamp_reports_row(self):
        """Verify a bad timestamp names its row."""
        text = HEADER + '\nnot-a-date,Included,x,No,1,1,1,1,4,0.1\n'
        with self.assertRaises(CSVFormatError) as ctx:
            parse_csv_text(text)
        self.assertEqual(ctx.exception.row, 2)
        self.assertTrue(str(ctx.exception).startswith('Row 2:'))

    def test_negative_tokens(self):
        """Verify negative token counts are rejected."""
        text = HEADER + '\n2024-01-01T00:00:00Z,Included,x,No,-1,1,1,1,4,0.1\n'
        with self.assertRaises(CSVFormatError):
            parse_csv_text(text)

    def test_non_numeric_cost(self):
        """Verify a non-numeric cost is rejected."""
        text = HEADER + '\n2024-01-01T00:00:00Z,Included,x,No,1,1,1,1,4,free\n'
        with self.assertRaises(CSVFormatError):
            parse_csv_text(text)

    def test_wrong_column_count(self):
        """Verify short rows are rejected."""
        text = HEADER + '\n2024-01-01T00:00:00Z,Included,x\n'
        with self.assertRaises(CSVFormatError) as ctx:
            parse_csv_text(text)
        self.assertIn('Expected 10 columns', str(ctx.exception))

    def test_oversized_field(self):
        """Verify a field past the csv module limit is a format error."""
        text = HEADER + '\n2024-01-01T00:00:00Z,Included,' + 'm' * 200_000 + ',No,1,1,1,1,4,0.1\n'
        with self.assertRaises(CSVFormatError) as ctx:
            parse_csv_text(text)
        self.assertEqual(ctx.exception.row, 2)

    def test_oversized_header(self):
        """Verify an oversized header is a format error, not a crash."""
        with self.assertRaises(CSVFormatError) as ctx:
            parse_csv_text('x' * 200_000)
        self.assertEqual(ctx.exception.row, 1)

    def test_invalid_max_mode(self):
        """Verify unknown Max Mode values are rejected."""
        text = HEADER + '\n2024-01-01T00:00:00Z,Included,x,Maybe,1,1,1,1,4,0.1\n'
        with self.assertRaises(CSVFormatError):
            parse_csv_text(text)


class TestParseLenient(unittest.TestCase):
    """Test accepted variations."""

    def test_bom_and_blank_lines(self):
        """Verify a leading BOM and blank lines are tolerated."""
        text = '\ufeff' + HEADER + '\n\n2024-01-01 10:00:00,Included,x,No,1,1,1,1,4,0.1\n\n'
        records = parse_csv_text(text)
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].timestamp.tzinfo, timezone.utc)
        self.assertEqual(records[0].timestamp.hour, 10)

    def test_offset_timestamp(self):
        """Verify explicit offsets are preserved."""
        text = HEADER + '\n2024-01-01T10:00:00+02:00,Included,x,No,1,1,1,1,4,0.1\n'
        record = parse_csv_text(text)[0]
        self.assertEqual(record.timestamp.astimezone(timezone.utc).hour, 8)


if __name__ == '__main__':
    unittest.main()
