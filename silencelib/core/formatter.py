#!/usr/bin/env python3

import math
from silencelib.core import utils
from silencelib.core.settings import ScanThresholds

#============================================

UNICODE_GLYPHS = {
	'flag': "🚩",
	'none': "🔳",
	'bar': "▉",
}

ASCII_GLYPHS = {
	'flag': "[!]",
	'none': "none",
	'bar': "#",
}

BAR_MAX_CHARS = 80

#============================================

class ReportFormatter():
	def __init__(self, thresholds: ScanThresholds = None, glyphs: dict = None):
		if thresholds is None:
			thresholds = ScanThresholds()
		if glyphs is None:
			glyphs = UNICODE_GLYPHS
		self.thresholds = thresholds
		self.glyphs = glyphs

	#============================
	def is_mid_flagged(self, record) -> bool:
		if record.duration is None:
			return False
		return record.duration >= self.thresholds.mid_flag_threshold

	#============================
	def is_end_flagged(self, record) -> bool:
		trailing = record.trailing_seconds()
		if trailing is None:
			return False
		return trailing >= self.thresholds.end_flag_threshold

	#============================
	def is_flagged(self, record) -> bool:
		return self.is_mid_flagged(record) or self.is_end_flagged(record)

	#============================
	def bar_length(self, record) -> int:
		"""
		Number of bar glyphs for a silence that runs to the end of file.

		The bar is the silent fraction of the file scaled to BAR_MAX_CHARS.
		"""
		trailing = record.trailing_seconds()
		if trailing is None or record.total_duration == 0:
			return 0
		silent_fraction = trailing / record.total_duration
		length = math.floor(silent_fraction * BAR_MAX_CHARS)
		return max(0, min(length, BAR_MAX_CHARS))

	#============================
	def end_silence_bar(self, record):
		length = self.bar_length(record)
		if length < 1:
			return None
		return self.glyphs['bar'] * length

	#============================
	def _field(self, value) -> str:
		if value is None:
			return self.glyphs['none']
		return utils.format_decimal(value)

	#============================
	def format_record(self, record) -> list:
		"""
		Render the indented detail lines for one record.

		Returns:
			list: Lines without trailing newlines, empty for an all-absent record.
		"""
		if record.is_empty():
			return []
		prefix = "\t"
		if self.is_flagged(record):
			prefix += self.glyphs['flag'] + " "
		lines = []
		lines.append(
			f"{prefix}start {self._field(record.start)}, "
			f"end {self._field(record.end)}, "
			f"duration {self._field(record.duration)}"
		)
		total = self.glyphs['none']
		if record.total_duration is not None:
			total = utils.format_seconds(record.total_duration)
		lines.append(f"\ttotal duration: {total}")
		bar = self.end_silence_bar(record)
		if bar is not None:
			lines.append(f"\t{bar}")
		return lines
