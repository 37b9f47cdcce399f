import pytest

from errors import CorruptData, InvalidInput
from huffman import (
    DecodeTrie,
    Internal,
    Leaf,
    build_tree,
    count_frequencies,
    generate_codes,
)


def _leaves(node):
    if isinstance(node, Leaf):
        return [node]
    return _leaves(node.left) + _leaves(node.right)


def _check_weights(node):
    if isinstance(node, Internal):
        assert node.weight == node.left.weight + node.right.weight
        _check_weights(node.left)
        _check_weights(node.right)


def test_count_frequencies():
    assert count_frequencies("abracadabra") == {
        "a": 5, "b": 2, "r": 2, "c": 1, "d": 1
    }
    assert count_frequencies("") == {}


def test_build_tree_empty_raises():
    with pytest.raises(InvalidInput):
        build_tree({})


def test_build_tree_non_positive_weight_raises():
    with pytest.raises(InvalidInput):
        build_tree({"a": 0, "b": 1})


def test_build_tree_weights_and_leaves():
    freqs = {"a": 5, "b": 7, "c": 2, "d": 3}
    root = build_tree(freqs)
    assert root.weight == sum(freqs.values())
    _check_weights(root)
    leaves = _leaves(root)
    assert {leaf.symbol: leaf.weight for leaf in leaves} == freqs


def test_build_tree_single_symbol_adds_synthetic_sibling():
    root = build_tree({"A": 4})
    assert root == Internal(4, Leaf("A", 4), Leaf(None, 0))


def test_single_symbol_code_is_zero():
    assert generate_codes(build_tree({"A": 4})) == {"A": "0"}


def test_build_tree_is_deterministic_for_ties():
    freqs = {"d": 1, "c": 1, "b": 1, "a": 1}
    codes = generate_codes(build_tree(freqs))
    reordered = generate_codes(build_tree(dict(reversed(list(freqs.items())))))
    assert codes == reordered
    assert codes == {"a": "00", "b": "01", "c": "10", "d": "11"}


def test_generate_codes_prefix_free(is_prefix_free_fn, sample_text):
    codes = generate_codes(build_tree(count_frequencies(sample_text)))
    assert set(codes) == set(sample_text)
    assert all(len(c) >= 1 for c in codes.values())
    assert is_prefix_free_fn(codes)


def test_frequent_symbols_get_shorter_codes():
    codes = generate_codes(build_tree({"a": 50, "b": 3, "c": 2, "d": 1}))
    assert len(codes["a"]) == 1
    assert len(codes["a"]) < len(codes["d"])


def test_decode_trie_walk():
    trie = DecodeTrie({"a": "0", "b": "10", "c": "11"})
    assert trie.walk([1, 1, 0, 1, 0]) == "cab"


def test_decode_trie_no_path_raises():
    trie = DecodeTrie({"A": "0"})
    with pytest.raises(CorruptData):
        trie.walk([1])


def test_decode_trie_incomplete_code_raises():
    trie = DecodeTrie({"a": "0", "b": "10", "c": "11"})
    with pytest.raises(CorruptData):
        trie.walk([0, 1])


@pytest.mark.parametrize(
    "codes",
    [
        {"A": "2"},
        {"A": "0x"},
        {"A": ""},
        {"A": "0", "B": "0"},
        {"A": "0", "B": "01"},
        {"A": "01", "B": "0"},
    ],
)
def test_decode_trie_rejects_bad_tables(codes):
    with pytest.raises(InvalidInput):
        DecodeTrie(codes)
