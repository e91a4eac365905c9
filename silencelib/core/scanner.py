#!/usr/bin/env python3

"""
Walk a directory tree and run silence detection on every file.

Files are analyzed on a thread pool. Only the calling thread prints,
and it prints each file's block in one piece, so reports never interleave.
"""

import os
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import as_completed
from tqdm import tqdm
from silencelib.core import utils
from silencelib.core.aggregator import SilenceAggregator
from silencelib.core.errors import SilenceScanError
from silencelib.core.formatter import ReportFormatter
from silencelib.core.models import FileReport
from silencelib.core.models import ScanSummary
from silencelib.core.parser import ReportParser
from silencelib.core.settings import DEFAULT_TIMEOUT
from silencelib.core.settings import ScanThresholds
from silencelib.media.ffmpeg_silence import detect_silence_report

#============================================

def _report_walk_error(exc: OSError) -> None:
	utils.warn(f"cannot read {exc.filename}: {exc.strerror}")
	return

#============================================

def normalize_extensions(extensions) -> tuple:
	if not extensions:
		return ()
	normalized = []
	for ext in extensions:
		ext = ext.strip().lower()
		if ext == "":
			continue
		if not ext.startswith('.'):
			ext = '.' + ext
		normalized.append(ext)
	return tuple(normalized)

#============================================

def iter_media_files(root_path: str, extensions=None, on_error=None):
	"""
	Yield regular, non-hidden files below root_path in sorted order.

	Args:
		root_path: Directory to descend, or a single file.
		extensions: Optional iterable of file extensions to keep.
		on_error: Called with the OSError of an unreadable directory.
	"""
	if on_error is None:
		on_error = _report_walk_error
	wanted = normalize_extensions(extensions)
	if os.path.isfile(root_path):
		yield root_path
		return
	for dirpath, dirnames, filenames in os.walk(root_path, onerror=on_error):
		dirnames[:] = sorted(name for name in dirnames if not utils.is_hidden(name))
		for filename in sorted(filenames):
			if utils.is_hidden(filename):
				continue
			if wanted and not filename.lower().endswith(wanted):
				continue
			filepath = os.path.join(dirpath, filename)
			if not os.path.isfile(filepath):
				continue
			yield filepath

#============================================

def analyze_report(path: str, report_text: str) -> list:
	"""
	Parse and aggregate one ffmpeg report into finished records.

	The list is fully built before returning so a malformed marker
	never leaves a partial report behind.

	Args:
		path: Source file path.
		report_text: ffmpeg stderr text.

	Returns:
		list: SilenceRecord values, empty when no silence was found.
	"""
	parser = ReportParser(report_text)
	if not parser.has_silence_markers():
		return []
	aggregator = SilenceAggregator(path, parser.total_duration())
	return list(aggregator.aggregate(parser.iter_events()))

#============================================

class ScanOrchestrator():
	def __init__(self, thresholds: ScanThresholds = None,
		formatter: ReportFormatter = None, ffmpeg_path: str = "ffmpeg",
		workers: int = None, timeout: float = DEFAULT_TIMEOUT,
		extensions=None, runner=None):
		if thresholds is None:
			thresholds = ScanThresholds()
		if formatter is None:
			formatter = ReportFormatter(thresholds)
		if workers is None:
			workers = os.cpu_count() or 1
		if workers < 1:
			raise RuntimeError("workers must be at least 1")
		if timeout is not None and timeout <= 0:
			raise RuntimeError("timeout must be positive")
		if runner is None:
			runner = detect_silence_report
		self.thresholds = thresholds
		self.formatter = formatter
		self.ffmpeg_path = ffmpeg_path
		self.workers = workers
		self.timeout = timeout
		self.extensions = extensions
		self.runner = runner
		self.reports = []
		self._stop = threading.Event()

	#============================
	def analyze_file(self, path: str):
		"""
		Run ffmpeg on one file and build its FileReport.

		Returns None when the scan was stopped before this file started.
		"""
		if self._stop.is_set():
			return None
		try:
			report_text = self.runner(path, self.thresholds,
				ffmpeg_path=self.ffmpeg_path, timeout=self.timeout)
			records = analyze_report(path, report_text)
		except SilenceScanError as exc:
			return FileReport(path=path, error=str(exc))
		return FileReport(path=path, records=records)

	#============================
	def render_report(self, report: FileReport) -> list:
		lines = []
		for record in report.records:
			lines.extend(self.formatter.format_record(record))
		if len(lines) == 0:
			return []
		return [f"Silence found in {report.path}"] + lines

	#============================
	def _tally(self, summary: ScanSummary, report: FileReport) -> None:
		summary.scanned += 1
		if report.error is not None:
			summary.skipped += 1
			return
		if len(report.records) > 0:
			summary.with_silence += 1
		for record in report.records:
			if self.formatter.is_flagged(record):
				summary.flagged += 1

	#============================
	def _emit(self, report: FileReport, print_lines: bool) -> None:
		if report.error is not None:
			utils.warn(f"skipped {report.path}: {report.error}")
			return
		if not print_lines:
			return
		lines = self.render_report(report)
		if len(lines) > 0:
			utils.echo("\n".join(lines))

	#============================
	def run(self, root_path: str, print_lines: bool = True) -> ScanSummary:
		"""
		Scan every file below root_path and print each report as it finishes.

		Args:
			root_path: Directory (or single file) to scan.
			print_lines: Print text reports; False collects reports only.

		Returns:
			ScanSummary: Counts for the whole scan.
		"""
		summary = ScanSummary()
		self.reports = []
		self._stop.clear()
		paths = list(iter_media_files(root_path, self.extensions))
		progress = tqdm(total=len(paths), unit="file", leave=False,
			disable=utils.is_quiet_mode())
		executor = ThreadPoolExecutor(max_workers=self.workers)
		try:
			futures = [executor.submit(self.analyze_file, path) for path in paths]
			for future in as_completed(futures):
				report = future.result()
				progress.update(1)
				if report is None:
					continue
				self.reports.append(report)
				self._tally(summary, report)
				self._emit(report, print_lines)
		except KeyboardInterrupt:
			self._stop.set()
			summary.interrupted = True
			executor.shutdown(wait=True, cancel_futures=True)
		finally:
			executor.shutdown(wait=True)
			progress.close()
		return summary
