import argparse
import os
from bitpack import BitReader, BitWriter
from codec import decompress


def main(argv=None):
    ap = argparse.ArgumentParser(description="Decompress a tree-header Huffman file")
    ap.add_argument("--input", required=True, help="compressed file")
    ap.add_argument("--output", required=True, help="path to restored output")
    ap.add_argument("--debug", type=int, default=0, help="debug level (1=bit counts, 4=per-symbol)")
    args = ap.parse_args(argv)

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    try:
        with open(args.input, "rb") as fin, open(args.output, "wb") as fout:
            with BitWriter(fout) as bw:
                stats = decompress(BitReader(fin), bw, debug=args.debug)
    except BaseException:
        # partial output is never left behind
        if os.path.exists(args.output):
            os.remove(args.output)
        raise

    print(f"[decode] wrote {args.output} bytes={stats.bits_out // 8} leaves={stats.leaves}")
    return stats


if __name__ == "__main__":
    main()
