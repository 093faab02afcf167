from bitpack import BitReader, BitWriter
from bitstream import (
    HuffException, TruncatedStream,
    write_magic, read_magic, write_tree, read_tree,
)
from huff_tree import (
    BITS_PER_WORD, PSEUDO_EOF,
    count_frequencies, build_tree, build_codebook, count_leaves,
)
from metrics import CodecStats, average_code_length, entropy_bits

DEBUG_LOW = 1
DEBUG_HIGH = 4


def _sym_name(sym: int) -> str:
    if sym == PSEUDO_EOF:
        return "EOF"
    if 32 <= sym < 127:
        return repr(chr(sym))
    return f"0x{sym:02x}"


def write_compressed_bits(codes, br, bw):
    """Re-read the (rewound) source and write one code per word, then the EOF code."""
    while True:
        val = br.read_bits(BITS_PER_WORD)
        if val is None:
            break
        code = codes[val]
        if code:
            bw.write_code(code)
    eof = codes[PSEUDO_EOF]
    if eof:
        bw.write_code(eof)


def read_compressed_bits(root, br, bw):
    """Walk the tree bit by bit, writing one word per leaf until the EOF leaf."""
    if root.sym is not None:
        # single leaf tree: only valid for empty input
        if root.sym == PSEUDO_EOF:
            return
        raise HuffException("Malformed stream: tree has no pseudo-EOF leaf")

    current = root
    while True:
        bit = br.read_bits(1)
        if bit is None:
            raise TruncatedStream("Malformed stream: code stream ended before pseudo-EOF")
        current = current.left if bit == 0 else current.right
        if current.sym is not None:
            if current.sym == PSEUDO_EOF:
                break
            bw.write_bits(BITS_PER_WORD, current.sym)
            current = root


def compress(br, bw, debug: int = 0) -> CodecStats:
    """
    Compress everything 'br' holds into 'bw'. The source is read twice
    (count, rewind, encode). The writer is left open; the caller closes it.
    """
    freqs = count_frequencies(br)
    root = build_tree(freqs)
    codes = build_codebook(root)

    if debug >= DEBUG_HIGH:
        for sym in range(PSEUDO_EOF + 1):
            if freqs[sym] > 0:
                print(f"[compress] freq {_sym_name(sym)}={int(freqs[sym])} code={codes[sym] or '(empty)'}")

    start = bw.bits_written
    write_magic(bw)
    write_tree(bw, root)
    header_bits = bw.bits_written - start
    write_compressed_bits(codes, br, bw)

    stats = CodecStats(
        bits_in=br.bits_read,
        bits_out=bw.bits_written - start,
        header_bits=header_bits,
        payload_bits=bw.bits_written - start - header_bits,
        leaves=len(codes),
        entropy=entropy_bits(freqs),
        avg_code=average_code_length(freqs, codes),
    )
    if debug >= DEBUG_LOW:
        print(f"[compress] leaves={stats.leaves} header={stats.header_bits}b payload={stats.payload_bits}b in={stats.bits_in}b")
    return stats


def decompress(br, bw, debug: int = 0) -> CodecStats:
    """
    Decompress a tree-header stream from 'br' into 'bw'.
    Raises BadMagicHeader / TruncatedStream / HuffException on malformed input.
    """
    start_out = bw.bits_written
    read_magic(br)
    root = read_tree(br)
    header_bits = br.bits_read

    if debug >= DEBUG_HIGH:
        for sym, code in sorted(build_codebook(root).items()):
            print(f"[decompress] leaf {_sym_name(sym)} code={code or '(empty)'}")

    read_compressed_bits(root, br, bw)

    stats = CodecStats(
        bits_in=br.bits_read,
        bits_out=bw.bits_written - start_out,
        header_bits=header_bits,
        payload_bits=br.bits_read - header_bits,
        leaves=count_leaves(root),
    )
    if debug >= DEBUG_LOW:
        print(f"[decompress] leaves={stats.leaves} header={stats.header_bits}b payload={stats.payload_bits}b out={stats.bits_out}b")
    return stats


def compress_bytes(data: bytes, debug: int = 0) -> bytes:
    bw = BitWriter()
    compress(BitReader(data), bw, debug=debug)
    bw.close()
    return bw.getvalue()


def decompress_bytes(blob: bytes, debug: int = 0) -> bytes:
    bw = BitWriter()
    decompress(BitReader(blob), bw, debug=debug)
    bw.close()
    return bw.getvalue()
