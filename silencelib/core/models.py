#!/usr/bin/env python3

"""
Value types passed between the parse, aggregate and format stages.
"""

from dataclasses import dataclass
from dataclasses import field
from decimal import Decimal
from typing import Optional

#============================================

@dataclass(frozen=True)
class SilenceEvent():
	"""
	One silence region as read from an ffmpeg report.

	A missing end means the silence runs to the end of the file.
	"""
	start: Optional[Decimal] = None
	end: Optional[Decimal] = None
	duration: Optional[Decimal] = None

	#============================
	def is_empty(self) -> bool:
		return self.start is None and self.end is None and self.duration is None

#============================================

@dataclass(frozen=True)
class SilenceRecord():
	"""
	A finished silence region tied to its source file.
	"""
	source_path: str
	start: Optional[Decimal] = None
	end: Optional[Decimal] = None
	duration: Optional[Decimal] = None
	total_duration: Optional[Decimal] = None

	#============================
	def is_empty(self) -> bool:
		return self.start is None and self.end is None and self.duration is None

	#============================
	def is_trailing(self) -> bool:
		return self.start is not None and self.end is None and self.duration is None

	#============================
	def trailing_seconds(self) -> Optional[Decimal]:
		"""
		Implicit length of a silence that runs to the end of the file.
		"""
		if not self.is_trailing() or self.total_duration is None:
			return None
		return self.total_duration - self.start

#============================================

@dataclass
class FileReport():
	path: str
	records: list = field(default_factory=list)
	error: Optional[str] = None

#============================================

@dataclass
class ScanSummary():
	scanned: int = 0
	with_silence: int = 0
	flagged: int = 0
	skipped: int = 0
	interrupted: bool = False
