from huff_tree import Node, ALPH_SIZE, BITS_PER_WORD, PSEUDO_EOF

BITS_PER_INT = 32

# File layout (bit level, MSB-first):
# magic(32) tree(preorder) codes(...) eof_code zero_padding
# tree: internal = 0 left right, leaf = 1 sym(9)
HUFF_NUMBER = 0xFACE8200  # older count-table header, read-only recognition
HUFF_TREE = HUFF_NUMBER | 1
LEAF_BITS = BITS_PER_WORD + 1


class HuffException(ValueError):
    """Malformed compressed stream."""


class BadMagicHeader(HuffException):
    pass


class TruncatedStream(HuffException, EOFError):
    pass


def write_magic(bw, magic: int = HUFF_TREE):
    bw.write_bits(BITS_PER_INT, magic)


def read_magic(br):
    bits = br.read_bits(BITS_PER_INT)
    if bits is None:
        raise TruncatedStream("Malformed stream: header too short")
    if bits == HUFF_NUMBER:
        raise BadMagicHeader(f"Bad magic 0x{bits:08x} (count header not supported)")
    if bits != HUFF_TREE:
        raise BadMagicHeader(f"Bad magic 0x{bits:08x} (not a tree header)")
    return bits


def write_tree(bw, node: Node):
    """Preorder: internal node -> 0 then children, leaf -> 1 then 9-bit symbol."""
    if node.sym is not None:
        bw.write_bits(1, 1)
        bw.write_bits(LEAF_BITS, node.sym)
        return
    bw.write_bits(1, 0)
    write_tree(bw, node.left)
    write_tree(bw, node.right)


def read_tree(br, depth: int = 0) -> Node:
    # 257 leaves never sit deeper than ALPH_SIZE
    if depth > ALPH_SIZE:
        raise HuffException("Malformed stream: tree too deep")
    bit = br.read_bits(1)
    if bit is None:
        raise TruncatedStream("Malformed stream: tree truncated")
    if bit == 0:
        left = read_tree(br, depth + 1)
        right = read_tree(br, depth + 1)
        return Node(0, left=left, right=right)
    sym = br.read_bits(LEAF_BITS)
    if sym is None:
        raise TruncatedStream("Malformed stream: tree leaf truncated")
    if sym > PSEUDO_EOF:
        raise HuffException(f"Malformed stream: leaf symbol {sym} out of range")
    return Node(0, sym=sym)


def tree_bits(node: Node) -> int:
    """Size of the serialized tree in bits."""
    if node.sym is not None:
        return 1 + LEAF_BITS
    return 1 + tree_bits(node.left) + tree_bits(node.right)
