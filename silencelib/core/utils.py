#!/usr/bin/env python3

import shlex
import shutil
import subprocess
import sys
from decimal import Decimal
from tqdm import tqdm

#============================================

_QUIET_MODE = False
_DEBUG_MODE = False

#============================================

def set_quiet_mode(value: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(value)
	return

#============================================

def is_quiet_mode() -> bool:
	return _QUIET_MODE

#============================================

def set_debug_mode(value: bool) -> None:
	global _DEBUG_MODE
	_DEBUG_MODE = bool(value)
	return

#============================================

def is_debug_mode() -> bool:
	return _DEBUG_MODE

#============================================

def echo(text: str) -> None:
	"""
	Print a report line without tearing an active progress bar.
	"""
	tqdm.write(text, file=sys.stdout)
	return

#============================================

def warn(text: str) -> None:
	"""
	Print a diagnostic line to stderr without tearing an active progress bar.
	"""
	tqdm.write(text, file=sys.stderr)
	return

#============================================

def debug(text: str) -> None:
	if _DEBUG_MODE:
		warn(text)
	return

#============================================

def check_dependency(cmd_name: str) -> str:
	"""
	Ensure a required external command exists.

	Args:
		cmd_name: Command name or path to locate.

	Returns:
		str: Resolved executable path.
	"""
	resolved = shutil.which(cmd_name)
	if resolved is None:
		raise RuntimeError(f"missing dependency: {cmd_name}")
	return resolved

#============================================

def run_process(cmd: list, timeout: float = None,
	check: bool = True) -> subprocess.CompletedProcess:
	"""
	Run a subprocess command and capture its output as text.

	Args:
		cmd: Command list to execute.
		timeout: Seconds before the child is killed, or None to wait forever.
		check: Raise RuntimeError on a non-zero exit status when True.

	Returns:
		subprocess.CompletedProcess: The completed process.
	"""
	showcmd = shlex.join(cmd)
	debug(f"CMD: '{showcmd}'")
	proc = subprocess.run(cmd, capture_output=True, text=True,
		encoding='utf-8', errors='replace', timeout=timeout)
	if check and proc.returncode != 0:
		stderr_text = proc.stderr.strip()
		raise RuntimeError(f"command failed: {showcmd}\n{stderr_text}")
	return proc

#============================================

def parse_timecode(hours: str, minutes: str, seconds: str) -> Decimal:
	"""
	Convert HH, MM and SS.ss fields into seconds.
	"""
	return Decimal(hours) * Decimal(3600) + Decimal(minutes) * Decimal(60) + Decimal(seconds)

#============================================

def format_decimal(value: Decimal) -> str:
	"""
	Render a decimal exactly as it was read, never in exponent form.
	"""
	return format(value, 'f')

#============================================

def format_seconds(value: Decimal) -> str:
	"""
	Render a computed seconds value with trailing zeros trimmed
	but at least one fractional digit, e.g. 300.00 -> 300.0.
	"""
	text = format(value.normalize(), 'f')
	if '.' not in text:
		text += '.0'
	return text

#============================================

def is_hidden(name: str) -> bool:
	return name.startswith('.')
