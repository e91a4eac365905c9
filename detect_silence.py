#!/usr/bin/env python3

"""
detect_silence.py

Recursively scan a directory for audio files and report periods of silence
found by ffmpeg's silencedetect filter. Long silences are flagged.
"""

# Standard Library
import argparse
import os
import sys

# local repo modules
from silencelib.core import utils
from silencelib.core import settings
from silencelib.core.formatter import ASCII_GLYPHS
from silencelib.core.formatter import UNICODE_GLYPHS
from silencelib.core.formatter import ReportFormatter
from silencelib.core.scanner import ScanOrchestrator
from silencelib.exporters.yaml_report import YamlReportExporter

#============================================

VERSION = "1.1.0"

#============================================

def parse_args(argv: list = None):
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(prog="detect_silence",
		description="Scan audio files for silence using ffmpeg silencedetect")
	parser.add_argument('root_path', metavar='ROOT',
		help='directory to scan recursively (or a single file)')
	parser.add_argument('-n', '--noise', dest='noise_db', default=None,
		help=f"noise floor in dB (default {settings.DEFAULT_NOISE_FLOOR_DB})")
	parser.add_argument('-s', '--min-silence', dest='min_silence', default=None,
		help=f"minimum silence seconds (default {settings.DEFAULT_MIN_SILENCE})")
	parser.add_argument('-m', '--mid-threshold', dest='mid_threshold', default=None,
		help="flag bounded silences at or above these seconds "
		f"(default {settings.DEFAULT_MID_FLAG_THRESHOLD})")
	parser.add_argument('-t', '--end-threshold', dest='end_threshold', default=None,
		help="flag silences running to end of file at or above these seconds "
		f"(default {settings.DEFAULT_END_FLAG_THRESHOLD})")
	parser.add_argument('-f', '--ffmpeg', dest='ffmpeg_path', default="ffmpeg",
		help='ffmpeg executable')
	parser.add_argument('-j', '--jobs', dest='jobs', type=int, default=None,
		help='parallel ffmpeg processes (default one per CPU)')
	parser.add_argument('-T', '--timeout', dest='timeout', type=float,
		default=settings.DEFAULT_TIMEOUT,
		help='seconds before a hung ffmpeg is killed')
	parser.add_argument('-e', '--extension', dest='extensions', action='append',
		default=None, help='only scan files with this extension (repeatable)')
	parser.add_argument('-a', '--ascii', dest='ascii', action='store_true',
		help='use ASCII markers instead of emoji')
	parser.add_argument('-y', '--yaml', dest='yaml_output', action='store_true',
		help='print a YAML report instead of text')
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help='no banner or progress bar')
	parser.add_argument('-d', '--debug', dest='debug', action='store_true',
		help='echo ffmpeg commands')
	parser.add_argument('--version', action='version',
		version=f"detect_silence v{VERSION}")
	parser.set_defaults(ascii=False, yaml_output=False, quiet=False, debug=False)
	args = parser.parse_args(argv)
	if not os.path.exists(args.root_path):
		parser.error(f"root path not found: {args.root_path}")
	if not (os.path.isdir(args.root_path) or os.path.isfile(args.root_path)):
		parser.error(f"root path is not a directory or file: {args.root_path}")
	if args.jobs is not None and args.jobs < 1:
		parser.error("--jobs must be at least 1")
	if args.timeout <= 0:
		parser.error("--timeout must be positive")
	try:
		args.thresholds = settings.build_thresholds(args.noise_db,
			args.min_silence, args.mid_threshold, args.end_threshold)
	except RuntimeError as exc:
		parser.error(str(exc))
	return args

#============================================

def print_summary(summary) -> None:
	print("")
	print(f"Finished scanning. {summary.scanned} files, "
		f"{summary.with_silence} with silence, {summary.flagged} flagged, "
		f"{summary.skipped} skipped.")
	return

#============================================

def main(argv: list = None) -> int:
	args = parse_args(argv)
	utils.set_quiet_mode(args.quiet or args.yaml_output)
	utils.set_debug_mode(args.debug)
	try:
		ffmpeg_path = utils.check_dependency(args.ffmpeg_path)
	except RuntimeError as exc:
		print(f"detect_silence: {exc}", file=sys.stderr)
		return 1
	glyphs = ASCII_GLYPHS if args.ascii else UNICODE_GLYPHS
	formatter = ReportFormatter(args.thresholds, glyphs)
	scanner = ScanOrchestrator(args.thresholds, formatter=formatter,
		ffmpeg_path=ffmpeg_path, workers=args.jobs, timeout=args.timeout,
		extensions=args.extensions)
	if not utils.is_quiet_mode():
		print(f"\ndetect_silence v{VERSION}")
		print("\nScanning files for silence:\n")
	summary = scanner.run(args.root_path, print_lines=not args.yaml_output)
	if summary.interrupted:
		print("detect_silence: interrupted", file=sys.stderr)
		return 130
	if args.yaml_output:
		exporter = YamlReportExporter(formatter)
		sys.stdout.write(exporter.dump(scanner.reports))
	elif not utils.is_quiet_mode():
		print_summary(summary)
	return 0

#============================================

if __name__ == '__main__':
	sys.exit(main())
