#!/usr/bin/env python3

import subprocess
from silencelib.core import utils
from silencelib.core.errors import AnalysisError
from silencelib.core.settings import DEFAULT_TIMEOUT
from silencelib.core.settings import ScanThresholds

#============================================

def build_silencedetect_cmd(media_file: str, thresholds: ScanThresholds,
	ffmpeg_path: str = "ffmpeg") -> list:
	"""
	Build the ffmpeg command that decodes a file through silencedetect.

	Info log level is the lowest that still prints both the silence
	markers and the input Duration line. Output goes to the null muxer.

	Args:
		media_file: Audio file path.
		thresholds: Noise floor and minimum silence settings.
		ffmpeg_path: ffmpeg executable.

	Returns:
		list: Command list.
	"""
	audio_filter = (
		f"silencedetect=noise={thresholds.noise_arg()}"
		f":d={thresholds.min_silence_arg()}"
	)
	cmd = [
		ffmpeg_path, "-hide_banner", "-nostdin",
		"-i", media_file,
		"-loglevel", "info",
		"-af", audio_filter,
		"-f", "null", "-",
	]
	return cmd

#============================================

def detect_silence_report(media_file: str, thresholds: ScanThresholds,
	ffmpeg_path: str = "ffmpeg", timeout: float = DEFAULT_TIMEOUT) -> str:
	"""
	Run silencedetect on one file and return ffmpeg's stderr text.

	A non-zero exit is not an error here; files ffmpeg cannot decode
	simply carry no silence markers.

	Args:
		media_file: Audio file path.
		thresholds: Scan thresholds.
		ffmpeg_path: ffmpeg executable.
		timeout: Seconds before ffmpeg is killed.

	Returns:
		str: Captured stderr text.
	"""
	cmd = build_silencedetect_cmd(media_file, thresholds, ffmpeg_path)
	try:
		proc = utils.run_process(cmd, timeout=timeout, check=False)
	except subprocess.TimeoutExpired:
		raise AnalysisError(f"ffmpeg timed out after {timeout:g}s")
	except OSError as exc:
		raise AnalysisError(f"cannot launch {ffmpeg_path}: {exc}")
	if proc.returncode != 0:
		utils.debug(f"ffmpeg exit status {proc.returncode}: {media_file}")
	return proc.stderr
