"""Content-addressed blob storage for Gitlet."""

import logging
import os
import zlib
from pathlib import Path

from .errors import CorruptObject, IoError, ObjectNotFound
from .hash import CHUNK_SIZE, hash_file, is_valid_digest
from .objects import Blob

logger = logging.getLogger(__name__)


class ObjectStore:
    """
    Stores file contents compressed with zlib, keyed by content digest.

    Objects are sharded by the first two hex characters of their digest:
    blobs/ab/cdef0123... for digest abcdef0123...
    Nothing is cached between calls; every operation goes to disk.
    """

    def __init__(self, root: Path, compression_level: int = zlib.Z_DEFAULT_COMPRESSION):
        """
        Initialize object store.

        Args:
            root: Directory holding the sharded object files
            compression_level: zlib compression level (-1 to 9)
        """
        self.root = Path(root)
        self.compression_level = compression_level

    def object_path(self, digest: str) -> Path:
        """
        Get filesystem path for an object.

        Args:
            digest: 40-character SHA-1 hash

        Returns:
            Path: Full path to object file
        """
        return self.root / digest[:2] / digest[2:]

    def put(self, path) -> Blob:
        """
        Hash a file's content into a blob without storing it.

        Args:
            path: File to hash

        Returns:
            Blob: Blob identified by the file's digest

        Raises:
            IoError: If the file cannot be read
        """
        try:
            return Blob(hash_file(path))
        except OSError as exc:
            raise IoError(f"Cannot read '{path}' to hash it: {exc}") from exc

    def write(self, blob: Blob, source_path) -> Path:
        """
        Compress source_path's bytes and store them under blob's digest.

        Writing a digest that is already stored is a no-op.

        Args:
            blob: Blob for the file's content
            source_path: File to store

        Returns:
            Path: Location of the stored object

        Raises:
            IoError: If the source cannot be read or the object cannot be written
        """
        path = self.object_path(blob.hash)
        if path.exists():
            return path

        tmp_path = path.with_name(f'.{path.name}.tmp')
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            compressor = zlib.compressobj(self.compression_level)
            with open(source_path, 'rb') as src, open(tmp_path, 'wb') as dst:
                for chunk in iter(lambda: src.read(CHUNK_SIZE), b''):
                    dst.write(compressor.compress(chunk))
                dst.write(compressor.flush())
            os.replace(tmp_path, path)
        except OSError as exc:
            if tmp_path.exists():
                tmp_path.unlink()
            raise IoError(f"Cannot store '{source_path}' as blob {blob.hash}: {exc}") from exc

        logger.debug("Stored blob %s from %s", blob.hash, source_path)
        return path

    def read(self, blob: Blob, destination_path) -> None:
        """
        Decompress a stored object into destination_path, overwriting it.

        Args:
            blob: Blob to restore
            destination_path: File to write

        Raises:
            ObjectNotFound: If the object is not stored
            CorruptObject: If the object cannot be decompressed
            IoError: If the destination cannot be written
        """
        path = self._existing_path(blob.hash)
        destination = Path(destination_path)

        decompressor = zlib.decompressobj()
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'rb') as src, open(destination, 'wb') as dst:
                for chunk in iter(lambda: src.read(CHUNK_SIZE), b''):
                    dst.write(decompressor.decompress(chunk))
                dst.write(decompressor.flush())
        except zlib.error as exc:
            raise CorruptObject(f"Blob {blob.hash} is not valid zlib data: {exc}") from exc
        except OSError as exc:
            raise IoError(f"Cannot restore blob {blob.hash} to '{destination}': {exc}") from exc

        logger.debug("Restored blob %s to %s", blob.hash, destination)

    def contents(self, blob: Blob) -> bytes:
        """
        Return the decompressed bytes of a stored object.

        Raises:
            ObjectNotFound: If the object is not stored
            CorruptObject: If the object cannot be decompressed
        """
        path = self._existing_path(blob.hash)
        try:
            return zlib.decompress(path.read_bytes())
        except zlib.error as exc:
            raise CorruptObject(f"Blob {blob.hash} is not valid zlib data: {exc}") from exc

    def retrieve(self, digest: str) -> Blob:
        """
        Return the blob for a stored digest without reading its content.

        Raises:
            CorruptObject: If digest is not a 40-character hex string
            ObjectNotFound: If no object is stored under digest
        """
        self._existing_path(digest)
        return Blob(digest)

    def exists(self, digest: str) -> bool:
        """Check if an object is stored under digest."""
        return is_valid_digest(digest) and self.object_path(digest).is_file()

    def content_equals(self, blob: Blob, other_path) -> bool:
        """
        Check whether other_path currently holds blob's content.

        Only the digest of other_path is computed; the stored object is not read.

        Raises:
            IoError: If other_path cannot be read
        """
        return self.put(other_path).hash == blob.hash

    def delete(self, blob: Blob) -> None:
        """
        Remove a stored object, and its shard directory once empty.

        There is no reference counting here: callers must make sure no commit
        still needs the object.

        Raises:
            ObjectNotFound: If the object is not stored
        """
        path = self._existing_path(blob.hash)
        path.unlink()
        if not any(path.parent.iterdir()):
            path.parent.rmdir()
        logger.debug("Deleted blob %s", blob.hash)

    def _existing_path(self, digest: str) -> Path:
        if not is_valid_digest(digest):
            raise CorruptObject(f"Invalid object id: {digest!r}")
        path = self.object_path(digest)
        if not path.is_file():
            raise ObjectNotFound('blob', digest)
        return path

    def __repr__(self) -> str:
        return f"ObjectStore(root={self.root})"
