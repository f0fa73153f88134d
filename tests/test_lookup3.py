import pytest

from jsonweave.lookup3 import hashlittle, hashmask, hashsize


def test_empty_key_returns_initial_state():
    assert hashlittle(b"", 0) == 0xDEADBEEF


def test_empty_key_includes_initval():
    assert hashlittle(b"", 5) == (0xDEADBEEF + 5) & 0xFFFFFFFF


def test_known_vector_initval_zero():
    assert hashlittle(b"Four score and seven years ago", 0) == 0x17770551


def test_known_vector_initval_one():
    assert hashlittle(b"Four score and seven years ago", 1) == 0xCD628161


def test_str_and_utf8_bytes_agree():
    assert hashlittle("caf\u00e9", 7) == hashlittle("caf\u00e9".encode("utf-8"), 7)


@pytest.mark.parametrize("size", range(0, 40))
def test_result_is_32_bit(size):
    value = hashlittle(bytes(range(size)), 0x12345678)
    assert 0 <= value <= 0xFFFFFFFF


def test_deterministic():
    results = [hashlittle(b"Four score and seven years ago", 0) for _ in range(3)]
    assert results == [0x17770551, 0x17770551, 0x17770551]


def test_initval_changes_hash():
    assert hashlittle(b"abc", 0) != hashlittle(b"abc", 1)


def test_trailing_zero_byte_changes_hash():
    assert hashlittle(b"abc") != hashlittle(b"abc\0")


def test_block_boundary_lengths_differ():
    hashes = {hashlittle(b"x" * n) for n in (11, 12, 13, 24, 25)}
    assert len(hashes) == 5


@pytest.mark.parametrize("order", range(0, 10))
def test_hashsize_is_power_of_two(order):
    assert hashsize(order) == 2 ** order


@pytest.mark.parametrize("order", range(0, 10))
def test_hashmask_is_size_minus_one(order):
    assert hashmask(order) == hashsize(order) - 1
    assert hashmask(order) & hashsize(order) == 0