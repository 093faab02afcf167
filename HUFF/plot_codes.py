import argparse
import os
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from huff_tree import ALPH_SIZE, build_codebook, build_tree, frequencies_from_bytes


def plot_code_lengths(freqs, codes, path: str):
    syms = np.arange(ALPH_SIZE)
    lengths = np.array([len(codes.get(s, "")) for s in syms])

    plt.figure(figsize=(10, 5))
    plt.subplot(2, 1, 1)
    plt.bar(syms, freqs[:ALPH_SIZE], width=1.0)
    plt.title("Byte frequency", fontsize=9)
    plt.xlim(-1, ALPH_SIZE)

    plt.subplot(2, 1, 2)
    plt.bar(syms, lengths, width=1.0, color="tab:orange")
    plt.title(f"Code length (EOF={len(codes.get(ALPH_SIZE, ''))} bits)", fontsize=9)
    plt.xlim(-1, ALPH_SIZE)
    plt.xlabel("byte value")

    plt.tight_layout()
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    plt.savefig(path, dpi=150)
    plt.close()


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", required=True, help="file to analyse")
    ap.add_argument("--output", required=True, help="path to .png")
    args = ap.parse_args(argv)

    with open(args.input, "rb") as f:
        freqs = frequencies_from_bytes(f.read())
    codes = build_codebook(build_tree(freqs))
    plot_code_lengths(freqs, codes, args.output)
    print(f"[plot] wrote {args.output} leaves={len(codes)}")


if __name__ == "__main__":
    main()
