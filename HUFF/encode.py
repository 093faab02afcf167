import argparse
import os
from bitpack import BitReader, BitWriter
from codec import compress
from metrics import compression_ratio, space_saving


def main(argv=None):
    ap = argparse.ArgumentParser(description="Huffman-compress a file (tree header format)")
    ap.add_argument("--input", required=True, help="file to compress")
    ap.add_argument("--output", required=True, help="path to compressed output")
    ap.add_argument("--debug", type=int, default=0, help="debug level (1=bit counts, 4=per-symbol)")
    args = ap.parse_args(argv)

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    try:
        with open(args.input, "rb") as fin, open(args.output, "wb") as fout:
            with BitWriter(fout) as bw:
                stats = compress(BitReader(fin), bw, debug=args.debug)
    except BaseException:
        if os.path.exists(args.output):
            os.remove(args.output)
        raise

    n_in = os.path.getsize(args.input)
    n_out = os.path.getsize(args.output)
    print(f"[encode] wrote {args.output}")
    print(f"[encode] {n_in}B -> {n_out}B ratio={compression_ratio(n_in, n_out):.3f} saved={space_saving(n_in, n_out):.2f}%")
    print(f"[encode] leaves={stats.leaves} header={stats.header_bits}b payload={stats.payload_bits}b")
    if args.debug:
        print(f"[encode] entropy={stats.entropy:.4f} bits/B avg_code={stats.avg_code:.4f} bits/B")
    return stats


if __name__ == "__main__":
    main()
