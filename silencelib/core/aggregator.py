#!/usr/bin/env python3

from silencelib.core.models import SilenceRecord

#============================================

class SilenceAggregator():
	"""
	Turn raw parser events for one file into finished records.
	"""
	def __init__(self, source_path: str, total_duration=None):
		self.source_path = source_path
		self.total_duration = total_duration

	#============================
	def _dedupe_key(self, event) -> tuple:
		# total duration is attached later and is not part of the key
		return (event.start, event.end, event.duration, self.source_path)

	#============================
	def aggregate(self, events):
		previous_key = None
		for event in events:
			key = self._dedupe_key(event)
			if key == previous_key:
				continue
			previous_key = key
			if event.is_empty():
				continue
			yield SilenceRecord(
				source_path=self.source_path,
				start=event.start,
				end=event.end,
				duration=event.duration,
				total_duration=self.total_duration,
			)
