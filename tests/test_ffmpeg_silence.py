#!/usr/bin/env python3

"""
Tests for the ffmpeg silencedetect runner.
"""

# Standard Library
import os
import shutil
import subprocess
import sys
import tempfile
from decimal import Decimal

# PIP3 modules
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from silencelib.core.errors import AnalysisError
from silencelib.core.scanner import analyze_report
from silencelib.core.settings import ScanThresholds
from silencelib.media import ffmpeg_silence

#============================================

HAVE_FFMPEG = shutil.which("ffmpeg") is not None

#============================================

def _make_tone_then_silence(path: str) -> None:
	"""
	Write 1 second of tone followed by 3 seconds of digital silence.
	"""
	proc = subprocess.run([
		"ffmpeg", "-y", "-hide_banner", "-loglevel", "error",
		"-f", "lavfi", "-i", "aevalsrc='if(lt(t,1),sin(440*2*PI*t),0)':s=44100:d=4",
		"-ac", "1", "-acodec", "pcm_s16le",
		path,
	], capture_output=True, text=True)
	if proc.returncode != 0:
		raise RuntimeError(f"ffmpeg failed: {proc.stderr.strip()}")
	return

#============================================

def test_build_cmd() -> None:
	cmd = ffmpeg_silence.build_silencedetect_cmd("in put.wav", ScanThresholds(),
		ffmpeg_path="/opt/ffmpeg")
	assert cmd[0] == "/opt/ffmpeg"
	assert cmd[cmd.index("-i") + 1] == "in put.wav"
	assert cmd[cmd.index("-af") + 1] == "silencedetect=noise=-90.0dB:d=0.25"
	assert cmd[-3:] == ["-f", "null", "-"]
	assert "-nostdin" in cmd

#============================================

def test_missing_binary_is_analysis_error() -> None:
	with pytest.raises(AnalysisError):
		ffmpeg_silence.detect_silence_report("a.wav", ScanThresholds(),
			ffmpeg_path="/nonexistent/ffmpeg-binary", timeout=5)

#============================================

def test_timeout_is_analysis_error(monkeypatch) -> None:
	def fake_run(*args, **kwargs):
		raise subprocess.TimeoutExpired(cmd="ffmpeg", timeout=1)

	monkeypatch.setattr(subprocess, "run", fake_run)
	with pytest.raises(AnalysisError) as excinfo:
		ffmpeg_silence.detect_silence_report("a.wav", ScanThresholds(), timeout=1)
	assert "timed out" in str(excinfo.value)

#============================================

@pytest.mark.skipif(not HAVE_FFMPEG, reason="ffmpeg not installed")
def test_detects_trailing_silence() -> None:
	"""
	A tone followed by silence reports one silence running to the end.

	Newer ffmpeg releases close a silence at end of stream with a
	silence_end marker, older ones leave it open.
	"""
	with tempfile.TemporaryDirectory(prefix="detect-silence-test-") as temp_dir:
		wav_path = os.path.join(temp_dir, "tone.wav")
		_make_tone_then_silence(wav_path)
		text = ffmpeg_silence.detect_silence_report(wav_path, ScanThresholds(), timeout=60)
	records = analyze_report(wav_path, text)
	assert len(records) == 1
	record = records[0]
	assert record.total_duration == Decimal("4")
	if not record.is_trailing():
		assert Decimal("3.9") < record.end <= Decimal("4.1")
	assert Decimal("0.9") < record.start < Decimal("1.1")

#============================================

@pytest.mark.skipif(not HAVE_FFMPEG, reason="ffmpeg not installed")
def test_non_media_file_has_no_markers() -> None:
	with tempfile.TemporaryDirectory(prefix="detect-silence-test-") as temp_dir:
		text_path = os.path.join(temp_dir, "notes.txt")
		with open(text_path, "w") as handle:
			handle.write("not audio\n")
		text = ffmpeg_silence.detect_silence_report(text_path, ScanThresholds(), timeout=60)
	assert analyze_report(text_path, text) == []
