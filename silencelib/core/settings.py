#!/usr/bin/env python3

"""
Scan thresholds shared read-only by every worker.
"""

from dataclasses import dataclass
from decimal import Decimal
from decimal import InvalidOperation

#============================================

# amplitude at or below this level counts as silence
DEFAULT_NOISE_FLOOR_DB = Decimal("-90.0")
# shortest span ffmpeg reports as silence
DEFAULT_MIN_SILENCE = Decimal("0.25")
# bounded silences at or above this length get a flag
DEFAULT_MID_FLAG_THRESHOLD = Decimal("1")
# silences running to the end of file at or above this length get a flag
DEFAULT_END_FLAG_THRESHOLD = Decimal("2.5")

DEFAULT_TIMEOUT = 600.0

#============================================

@dataclass(frozen=True)
class ScanThresholds():
	noise_floor_db: Decimal = DEFAULT_NOISE_FLOOR_DB
	min_silence_duration: Decimal = DEFAULT_MIN_SILENCE
	mid_flag_threshold: Decimal = DEFAULT_MID_FLAG_THRESHOLD
	end_flag_threshold: Decimal = DEFAULT_END_FLAG_THRESHOLD

	#============================
	def noise_arg(self) -> str:
		return f"{self.noise_floor_db}dB"

	#============================
	def min_silence_arg(self) -> str:
		return f"{self.min_silence_duration}"

#============================================

def coerce_decimal(value, key_path: str) -> Decimal:
	"""
	Coerce a value to a finite Decimal.

	Args:
		value: Raw value (str, int, float or Decimal).
		key_path: Setting name used in error messages.

	Returns:
		Decimal: Coerced value.
	"""
	if isinstance(value, Decimal):
		number = value
	elif isinstance(value, bool):
		raise RuntimeError(f"{key_path} must be a number")
	elif isinstance(value, (int, str)):
		try:
			number = Decimal(str(value).strip())
		except InvalidOperation:
			raise RuntimeError(f"{key_path} must be a number, got {value!r}")
	elif isinstance(value, float):
		number = Decimal(str(value))
	else:
		raise RuntimeError(f"{key_path} must be a number")
	if not number.is_finite():
		raise RuntimeError(f"{key_path} must be finite")
	return number

#============================================

def build_thresholds(noise_floor_db=None, min_silence=None,
	mid_flag_threshold=None, end_flag_threshold=None) -> ScanThresholds:
	"""
	Build validated thresholds, falling back to defaults for None values.

	Returns:
		ScanThresholds: Immutable thresholds for the whole scan.
	"""
	if noise_floor_db is None:
		noise_floor_db = DEFAULT_NOISE_FLOOR_DB
	if min_silence is None:
		min_silence = DEFAULT_MIN_SILENCE
	if mid_flag_threshold is None:
		mid_flag_threshold = DEFAULT_MID_FLAG_THRESHOLD
	if end_flag_threshold is None:
		end_flag_threshold = DEFAULT_END_FLAG_THRESHOLD
	noise = coerce_decimal(noise_floor_db, "noise")
	minimum = coerce_decimal(min_silence, "min_silence")
	mid = coerce_decimal(mid_flag_threshold, "mid_threshold")
	end = coerce_decimal(end_flag_threshold, "end_threshold")
	if noise > 0:
		raise RuntimeError("noise must be 0 or negative dB")
	if minimum <= 0:
		raise RuntimeError("min_silence must be positive")
	return ScanThresholds(
		noise_floor_db=noise,
		min_silence_duration=minimum,
		mid_flag_threshold=mid,
		end_flag_threshold=end,
	)
