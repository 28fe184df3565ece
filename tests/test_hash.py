"""Hash utilities tests."""

import pytest
from gitlet.core import hash as hash_module
from gitlet.core.hash import hash_object, hash_file, is_valid_digest


def test_hash_object_empty():
    """Test hashing empty bytes."""
    assert hash_object(b'') == 'da39a3ee5e6b4b0d3255bfef95601890afd80709'


def test_hash_object_known_value():
    """Test hash matches the SHA-1 of the raw bytes."""
    assert hash_object(b'hello') == 'aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d'


def test_hash_object_different_data():
    """Test different data produces different hashes."""
    assert hash_object(b'hello') != hash_object(b'world')


def test_hash_file_matches_hash_object(tmp_path):
    """Test hashing a file hashes exactly its bytes."""
    path = tmp_path / 'a.txt'
    path.write_bytes(b'line one\nline two\n')
    assert hash_file(path) == hash_object(b'line one\nline two\n')


def test_hash_file_independent_of_name(tmp_path):
    """Test identical content at different paths has the same digest."""
    (tmp_path / 'sub').mkdir()
    first = tmp_path / 'one.txt'
    second = tmp_path / 'sub' / 'two.bin'
    first.write_bytes(b'same content')
    second.write_bytes(b'same content')
    assert hash_file(first) == hash_file(second)


def test_hash_file_spans_chunks(tmp_path, monkeypatch):
    """Test chunked hashing equals hashing the whole content."""
    monkeypatch.setattr(hash_module, 'CHUNK_SIZE', 7)
    data = bytes(range(256)) * 3
    path = tmp_path / 'big.bin'
    path.write_bytes(data)
    assert hash_file(path) == hash_object(data)


def test_hash_file_missing(tmp_path):
    """Test hashing a missing file raises OSError."""
    with pytest.raises(OSError):
        hash_file(tmp_path / 'missing.txt')


@pytest.mark.parametrize('digest,valid', [
    ('aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d', True),
    ('aaf4c61', False),
    ('AAF4C61DDCC5E8A2DABEDE0F3B482CD9AEA9434D', False),
    ('zaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d', False),
    ('', False),
])
def test_is_valid_digest(digest, valid):
    """Test digest validation."""
    assert is_valid_digest(digest) is valid
