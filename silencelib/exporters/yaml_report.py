#!/usr/bin/env python3

"""
YAML rendering of scan results for use by other tools.
"""

import yaml
from silencelib.core.formatter import ReportFormatter

#============================================

def _number(value):
	if value is None:
		return None
	return float(value)

#============================================

class YamlReportExporter():
	def __init__(self, formatter: ReportFormatter):
		self.formatter = formatter
		self.thresholds = formatter.thresholds

	#============================
	def build_record(self, record) -> dict:
		return {
			'start': _number(record.start),
			'end': _number(record.end),
			'duration': _number(record.duration),
			'flagged': self.formatter.is_flagged(record),
			'trailing': record.is_trailing(),
		}

	#============================
	def build_file(self, report) -> dict:
		total = None
		if len(report.records) > 0:
			total = report.records[0].total_duration
		entry = {
			'path': report.path,
			'total_duration': _number(total),
			'silences': [self.build_record(record) for record in report.records],
		}
		if report.error is not None:
			entry['error'] = report.error
		return entry

	#============================
	def build_document(self, reports: list) -> dict:
		ordered = sorted(reports, key=lambda item: item.path)
		files = []
		for report in ordered:
			if report.error is None and len(report.records) == 0:
				continue
			files.append(self.build_file(report))
		return {
			'detect_silence': 1,
			'thresholds': {
				'noise_db': _number(self.thresholds.noise_floor_db),
				'min_silence': _number(self.thresholds.min_silence_duration),
				'mid_flag': _number(self.thresholds.mid_flag_threshold),
				'end_flag': _number(self.thresholds.end_flag_threshold),
			},
			'files': files,
		}

	#============================
	def dump(self, reports: list) -> str:
		document = self.build_document(reports)
		return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
