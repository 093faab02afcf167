from dataclasses import dataclass

import numpy as np

from huff_tree import ALPH_SIZE


@dataclass
class CodecStats:
    bits_in: int = 0
    bits_out: int = 0
    header_bits: int = 0
    payload_bits: int = 0
    leaves: int = 0
    entropy: float = 0.0
    avg_code: float = 0.0


def compression_ratio(n_in: int, n_out: int) -> float:
    if n_out == 0:
        return 0.0
    return float(n_in) / float(n_out)


def space_saving(n_in: int, n_out: int) -> float:
    """Percent of the input size saved (negative when the output grew)."""
    if n_in == 0:
        return 0.0
    return 100.0 * (1.0 - float(n_out) / float(n_in))


def entropy_bits(freqs) -> float:
    """Shannon entropy in bits per byte, pseudo-EOF excluded."""
    f = np.asarray(freqs[:ALPH_SIZE], dtype=np.float64)
    total = f.sum()
    if total == 0:
        return 0.0
    p = f[f > 0] / total
    return float(-(p * np.log2(p)).sum())


def average_code_length(freqs, codes) -> float:
    f = np.asarray(freqs[:ALPH_SIZE], dtype=np.float64)
    total = f.sum()
    if total == 0:
        return 0.0
    lengths = np.zeros(ALPH_SIZE, dtype=np.float64)
    for sym, code in codes.items():
        if sym < ALPH_SIZE:
            lengths[sym] = len(code)
    return float((f * lengths).sum() / total)
