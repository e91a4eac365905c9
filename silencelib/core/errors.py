#!/usr/bin/env python3

"""
Exceptions raised while scanning files for silence.
"""

#============================================

class SilenceScanError(RuntimeError):
	"""Base exception for per-file scan failures."""

	pass

#============================================

class ReportParseError(SilenceScanError):
	"""An ffmpeg silence marker carried a value that is not a number."""

	def __init__(self, message: str, tag: str = None, fragment: str = None):
		super().__init__(message)
		self.tag = tag
		self.fragment = fragment

#============================================

class AnalysisError(SilenceScanError):
	"""ffmpeg could not be launched or did not finish in time."""

	pass
