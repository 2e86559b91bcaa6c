"""Generators of sine-wave test audio as little-endian sample bytes."""

from __future__ import annotations

import math
import struct

_PI_F32 = struct.unpack("<f", struct.pack("<f", math.pi))[0]


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _sine_values(count: int) -> list[float]:
    return [_f32(math.sin(_f32(_f32(float(i) * 50.0) / _PI_F32))) for i in range(count)]


def _to_stereo(samples: list, stereo: bool) -> list:
    if not stereo:
        return samples
    return [sample for sample in samples for _ in range(2)]


def make_sine(float_len: int, stereo: bool) -> bytes:
    """``float_len`` 32-bit float sine samples, duplicated per channel if ``stereo``."""
    samples = _to_stereo(_sine_values(float_len), stereo)
    return struct.pack(f"<{len(samples)}f", *samples)


def make_pcm_sine(i16_len: int, stereo: bool) -> bytes:
    """``i16_len`` 16-bit PCM sine samples of amplitude 10 000, duplicated if ``stereo``."""
    ints = [
        max(-32768, min(32767, int(_f32(value * 10_000.0))))
        for value in _sine_values(i16_len)
    ]
    samples = _to_stereo(ints, stereo)
    return struct.pack(f"<{len(samples)}h", *samples)