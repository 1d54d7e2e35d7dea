"""Tests for hash module."""

import pytest
from hypothesis import given, strategies as st

from pagebuilder.core.hash import Algorithm, hash_bytes, hash_chunks, hash_string, new_hasher


def test_hash_string_xxhash():
    """Test xxhash string hashing."""
    result = hash_string("[]")
    assert len(result) == 16
    assert hash_string("[]", Algorithm.XXHASH64) == result


def test_hash_string_sha256():
    result = hash_string("[]", Algorithm.SHA256)
    assert len(result) == 64


def test_hash_truncate():
    assert hash_bytes(b"payload", Algorithm.SHA256, truncate=8) == hash_bytes(b"payload", Algorithm.SHA256)[:8]


def test_unknown_algorithm():
    with pytest.raises(ValueError):
        new_hasher("md5")


@given(st.text())
def test_string_and_bytes_agree(text):
    assert hash_string(text) == hash_bytes(text.encode("utf-8"))


@given(st.binary(), st.binary())
def test_distinct_payloads_rarely_collide(a, b):
    if a != b:
        assert hash_bytes(a) != hash_bytes(b)


def test_new_hasher_accepts_tag():
    hasher = new_hasher("sha256")
    hasher.update(b"[]")

    assert hasher.hexdigest() == hash_bytes(b"[]", Algorithm.SHA256)


@given(st.lists(st.binary(), max_size=8))
def test_chunks_match_concatenation(chunks):
    assert hash_chunks(chunks) == hash_bytes(b"".join(chunks))
