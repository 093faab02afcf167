from __future__ import annotations
import heapq
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

BITS_PER_WORD = 8
ALPH_SIZE = 1 << BITS_PER_WORD
PSEUDO_EOF = ALPH_SIZE

COUNT_CHUNK = 1 << 16


@dataclass
class Node:
    weight: int
    sym: Optional[int] = None
    left: Optional["Node"] = None
    right: Optional["Node"] = None


def count_frequencies(br) -> np.ndarray:
    """
    Count every 8-bit word of the source, then rewind it.
    Returns int64 array of length ALPH_SIZE + 1, freqs[PSEUDO_EOF] == 1.
    """
    freqs = np.zeros(ALPH_SIZE + 1, dtype=np.int64)
    chunk = bytearray()
    while True:
        val = br.read_bits(BITS_PER_WORD)
        if val is None:
            break
        chunk.append(val)
        if len(chunk) >= COUNT_CHUNK:
            freqs[:ALPH_SIZE] += np.bincount(np.frombuffer(bytes(chunk), dtype=np.uint8), minlength=ALPH_SIZE)
            chunk.clear()
    if chunk:
        freqs[:ALPH_SIZE] += np.bincount(np.frombuffer(bytes(chunk), dtype=np.uint8), minlength=ALPH_SIZE)
    freqs[PSEUDO_EOF] = 1
    br.reset()
    return freqs


def frequencies_from_bytes(data: bytes) -> np.ndarray:
    freqs = np.zeros(ALPH_SIZE + 1, dtype=np.int64)
    if data:
        freqs[:ALPH_SIZE] = np.bincount(np.frombuffer(data, dtype=np.uint8), minlength=ALPH_SIZE)
    freqs[PSEUDO_EOF] = 1
    return freqs


def build_tree(freqs) -> Node:
    # heap order is (weight, seq): leaves use their symbol as seq,
    # merged nodes count up from PSEUDO_EOF + 1 in creation order
    pq = [(int(f), s, Node(int(f), sym=s)) for s, f in enumerate(freqs) if f > 0]
    if not pq:
        raise ValueError("cannot build a tree from an empty frequency table")
    heapq.heapify(pq)
    seq = PSEUDO_EOF + 1
    while len(pq) > 1:
        wa, _, a = heapq.heappop(pq)
        wb, _, b = heapq.heappop(pq)
        heapq.heappush(pq, (wa + wb, seq, Node(wa + wb, left=a, right=b)))
        seq += 1
    return pq[0][2]


def build_codebook(node: Node, prefix: str = "", code: Optional[Dict[int, str]] = None) -> Dict[int, str]:
    if code is None:
        code = {}
    if node.sym is not None:
        code[node.sym] = prefix
    else:
        build_codebook(node.left, prefix + "0", code)
        build_codebook(node.right, prefix + "1", code)
    return code


def count_leaves(node: Node) -> int:
    if node.sym is not None:
        return 1
    return count_leaves(node.left) + count_leaves(node.right)
