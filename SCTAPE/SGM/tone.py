# =============================================================================
# tone.py — Single-cycle Tone Synthesiser
# =============================================================================
#
# Builds the one-cycle sine tables that every other part of the encoder
# copies into the output.  A table is built once per tone kind (start, zero,
# one) and then reused for every bit; never call synthesize() per byte.
#
#   sample[i] = round((sin(2*pi*i / cycle_length) * volume + 1) * 128)
#
# Output is unsigned 8-bit, centred on 128.  With volume <= 0.98 the peak is
# 253, so the table always fits a uint8.

from __future__ import annotations
import numpy as np


def synthesize(cycle_length: int, volume: float) -> np.ndarray:
    """
    Return one full sine cycle as unsigned 8-bit samples.

    Args:
        cycle_length: Number of samples in the cycle (> 0).
        volume:       Peak amplitude as a fraction of full scale, 0.0–1.0.

    Returns:
        numpy uint8 array of length cycle_length.
    """
    if cycle_length <= 0:
        raise ValueError(f"cycle_length must be positive, got {cycle_length}")

    phase = 2 * np.pi * np.arange(cycle_length) / cycle_length
    table = np.rint((np.sin(phase) * volume + 1) * 128)
    return np.clip(table, 0, 255).astype(np.uint8)
