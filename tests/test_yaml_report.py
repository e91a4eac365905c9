#!/usr/bin/env python3

"""
Unit tests for the YAML report exporter.
"""

# Standard Library
import os
import sys
import unittest
from decimal import Decimal

# PIP3 modules
import yaml

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from silencelib.core.formatter import ReportFormatter
from silencelib.core.models import FileReport
from silencelib.core.models import SilenceRecord
from silencelib.core.settings import ScanThresholds
from silencelib.exporters.yaml_report import YamlReportExporter

#============================================

class YamlReportTest(unittest.TestCase):
	#============================================
	def test_dump_round_trips_through_safe_load(self) -> None:
		"""Reports load back as plain YAML with files sorted by path."""
		total = Decimal("300.00")
		reports = [
			FileReport(path="z.wav", records=[
				SilenceRecord("z.wav", Decimal("10.0"), Decimal("12.5"), Decimal("2.5"), total),
				SilenceRecord("z.wav", Decimal("299"), None, None, total),
			]),
			FileReport(path="clean.wav"),
			FileReport(path="bad.wav", error="ffmpeg timed out after 5s"),
		]
		exporter = YamlReportExporter(ReportFormatter(ScanThresholds()))
		data = yaml.safe_load(exporter.dump(reports))
		self.assertEqual(data['detect_silence'], 1)
		self.assertEqual(data['thresholds']['noise_db'], -90.0)
		self.assertEqual([entry['path'] for entry in data['files']], ["bad.wav", "z.wav"])
		self.assertEqual(data['files'][0]['error'], "ffmpeg timed out after 5s")
		self.assertEqual(data['files'][0]['silences'], [])
		entry = data['files'][1]
		self.assertEqual(entry['total_duration'], 300.0)
		self.assertEqual(entry['silences'][0], {
			'start': 10.0, 'end': 12.5, 'duration': 2.5,
			'flagged': True, 'trailing': False,
		})
		self.assertIsNone(entry['silences'][1]['end'])
		self.assertTrue(entry['silences'][1]['trailing'])
		self.assertFalse(entry['silences'][1]['flagged'])

#============================================

def main() -> None:
	"""Run the unit tests."""
	unittest.main()

#============================================

if __name__ == "__main__":
	main()
