#!/usr/bin/env python3

"""
Parse the stderr text ffmpeg writes while running the silencedetect filter.

Sample lines:

	[silencedetect @ 0x1027000c0] silence_start: 334.117
	[silencedetect @ 0x1027000c0] silence_end: 431.543 | silence_duration: 97.4255
	  Duration: 00:08:00.00, start: 0.000000, bitrate: 1411 kb/s
"""

import re
from decimal import Decimal
from decimal import InvalidOperation
from silencelib.core import utils
from silencelib.core.errors import ReportParseError
from silencelib.core.models import SilenceEvent

#============================================

SILENCE_MARKER_RE = re.compile(r"silence_(start|end|duration):[ \t]*([^\s|]*)",
	re.IGNORECASE)
TOTAL_DURATION_RE = re.compile(r"Duration:\s(\d+):(\d+):(\d+(?:\.\d*)?)")

#============================================

def parse_marker_value(tag: str, fragment: str) -> Decimal:
	"""
	Convert the captured text of one marker into a Decimal.

	Negative values are kept as-is; ffmpeg reports slightly negative
	timestamps for silence at the very start of some files. ffmpeg
	prints times with %g, so exponent forms like -2.26757e-05 occur.

	Args:
		tag: Marker tag (start, end or duration).
		fragment: Captured value text.

	Returns:
		Decimal: Parsed value.
	"""
	try:
		value = Decimal(fragment)
	except InvalidOperation:
		raise ReportParseError(
			f"malformed silence_{tag} value {fragment!r}", tag=tag, fragment=fragment)
	if not value.is_finite():
		raise ReportParseError(
			f"malformed silence_{tag} value {fragment!r}", tag=tag, fragment=fragment)
	return value

#============================================

def parse_total_duration(report_text: str):
	"""
	Find the media duration line and convert it to seconds.

	Args:
		report_text: Full ffmpeg stderr text.

	Returns:
		Decimal or None: Total seconds from the last Duration line, or None.
	"""
	total = None
	for match in TOTAL_DURATION_RE.finditer(report_text):
		hours, minutes, seconds = match.groups()
		total = utils.parse_timecode(hours, minutes, seconds)
	return total

#============================================

class ReportParser():
	def __init__(self, report_text: str):
		self.report_text = report_text
		self._total_duration = None
		self._total_parsed = False

	#============================
	def has_silence_markers(self) -> bool:
		return SILENCE_MARKER_RE.search(self.report_text) is not None

	#============================
	def total_duration(self):
		if not self._total_parsed:
			self._total_duration = parse_total_duration(self.report_text)
			self._total_parsed = True
		return self._total_duration

	#============================
	def iter_events(self):
		"""
		Yield one SilenceEvent per closed silence region, in report order.

		A start marker opens a region, an end marker bounds it and a
		duration marker closes it. A start that is still open when the
		text runs out is yielded last, without end or duration.
		"""
		pending = {}
		for match in SILENCE_MARKER_RE.finditer(self.report_text):
			tag = match.group(1).lower()
			value = parse_marker_value(tag, match.group(2))
			if tag == 'start':
				if len(pending) > 0:
					yield SilenceEvent(**pending)
				pending = {'start': value}
			elif tag == 'end':
				pending['end'] = value
			else:
				if 'end' not in pending:
					raise ReportParseError(
						f"silence_duration {match.group(2)!r} without silence_end",
						tag=tag, fragment=match.group(0))
				pending['duration'] = value
				yield SilenceEvent(**pending)
				pending = {}
		if len(pending) > 0:
			yield SilenceEvent(**pending)

	#============================
	def events(self) -> list:
		return list(self.iter_events())
