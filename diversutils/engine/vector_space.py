"""Vector spaces: key -> embedding tables loaded from word2vec files.

word2vec binary layout
----------------------

    b"<vocabulary_size> <dimensionality>\\n"
    then vocabulary_size records, each:
        key bytes (UTF-8, no spaces), one b" ",
        dimensionality little-endian IEEE-754 float32 values,
        an optional b"\\n"

Newlines before a key are skipped. Anything but whitespace after the last
declared record is an error. The text layout has the same header followed by
one ``key v1 ... vD`` line per record.

Loading is all-or-nothing: a ``VectorSpace`` is only built once the whole
file parsed.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Mapping

import numpy as np

from .errors import AllocationFailure, FileFormatError, InvalidArgument
from .precision import Precision, as_array, parse_precision

logger = logging.getLogger(__name__)

_FLOAT32_LE = np.dtype("<f4")
_WHITESPACE = b" \t\r\n"


class VectorSpace:
    """Immutable table of embeddings addressed by string keys.

    Attributes:
        vocabulary: key -> row index into ``vectors``
        vectors: (vocabulary_size, dimensionality) read-only array
        precision: storage precision of ``vectors``
        source: file the space was loaded from, if any
    """

    def __init__(
        self,
        vocabulary: dict[str, int],
        vectors: np.ndarray,
        precision: Precision,
        source: Path | None = None,
    ):
        if vectors.ndim != 2 or vectors.shape[0] != len(vocabulary):
            raise InvalidArgument(
                f"vector table shape {vectors.shape} does not match "
                f"{len(vocabulary)} keys"
            )
        self.vocabulary = vocabulary
        self.vectors = vectors
        self.vectors.flags.writeable = False
        self.precision = precision
        self.source = source

    @classmethod
    def from_vectors(
        cls, vectors: Mapping[str, object], precision=Precision.FP32
    ) -> VectorSpace:
        """Build a space from an in-memory ``key -> vector`` mapping."""
        precision = parse_precision(precision)
        keys = list(vectors)
        rows = [np.asarray(vectors[k], dtype=np.float64).ravel() for k in keys]
        dims = {row.shape[0] for row in rows}
        if len(dims) > 1:
            raise InvalidArgument(f"vectors have differing lengths {sorted(dims)}")
        dim = dims.pop() if dims else 0
        table = as_array(np.stack(rows) if rows else np.empty((0, dim)), precision)
        return cls({k: i for i, k in enumerate(keys)}, table, precision)

    @property
    def dimensionality(self) -> int:
        return self.vectors.shape[1]

    def __len__(self) -> int:
        return len(self.vocabulary)

    def __contains__(self, key) -> bool:
        return key in self.vocabulary

    def __repr__(self) -> str:
        return (
            f"VectorSpace(size={len(self)}, dim={self.dimensionality}, "
            f"precision={self.precision.name})"
        )

    def keys(self) -> Iterator[str]:
        return iter(self.vocabulary)

    def index_of(self, key: str) -> int | None:
        return self.vocabulary.get(key)

    def vector(self, key: str) -> np.ndarray | None:
        row = self.vocabulary.get(key)
        return None if row is None else self.vectors[row]


# =============================================================================
# Loading
# =============================================================================


def _parse_header(line: bytes, path) -> tuple[int, int]:
    parts = line.split()
    if len(parts) != 2:
        raise FileFormatError(f"malformed header {line[:64]!r}", path, 0)
    try:
        size, dim = int(parts[0]), int(parts[1])
    except ValueError:
        raise FileFormatError(f"malformed header {line[:64]!r}", path, 0) from None
    if size <= 0 or dim <= 0:
        raise FileFormatError(
            f"header declares {size} keys of dimensionality {dim}", path, 0
        )
    return size, dim


def _decode_key(raw: bytes, path, offset: int) -> str:
    if not raw:
        raise FileFormatError("empty key", path, offset)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise FileFormatError(f"key {raw[:64]!r} is not UTF-8", path, offset) from None


def _parse_binary(data: bytes, path) -> tuple[list[str], np.ndarray]:
    header_end = data.find(b"\n")
    if header_end < 0:
        raise FileFormatError("missing header line", path, 0)
    size, dim = _parse_header(data[:header_end], path)
    record_bytes = dim * _FLOAT32_LE.itemsize

    keys: list[str] = []
    rows: list[np.ndarray] = []
    pos = header_end + 1
    for row in range(size):
        while pos < len(data) and data[pos] == 0x0A:
            pos += 1
        if pos >= len(data):
            raise FileFormatError(
                f"file ends after {row} of {size} declared records", path, pos
            )
        key_end = data.find(b" ", pos)
        if key_end < 0:
            raise FileFormatError("key is not terminated by a space", path, pos)
        keys.append(_decode_key(data[pos:key_end], path, pos))
        pos = key_end + 1
        if pos + record_bytes > len(data):
            raise FileFormatError(
                f"truncated vector for key {keys[-1]!r}", path, pos
            )
        rows.append(np.frombuffer(data, dtype=_FLOAT32_LE, count=dim, offset=pos))
        pos += record_bytes
        if pos < len(data) and data[pos] == 0x0A:
            pos += 1

    if data[pos:].strip(_WHITESPACE):
        raise FileFormatError(
            f"unexpected data after {size} declared records", path, pos
        )
    return keys, np.stack(rows).astype(np.float32)


def _parse_text(data: bytes, path) -> tuple[list[str], np.ndarray]:
    lines = data.split(b"\n")
    size, dim = _parse_header(lines[0], path)
    records = [line for line in lines[1:] if line.strip(_WHITESPACE)]
    if len(records) != size:
        raise FileFormatError(
            f"header declares {size} records, found {len(records)}", path
        )

    keys: list[str] = []
    rows: list[list[float]] = []
    for line in records:
        fields = line.split()
        key = _decode_key(fields[0], path, None)
        if len(fields) - 1 != dim:
            raise FileFormatError(
                f"key {key!r} has {len(fields) - 1} values, expected {dim}", path
            )
        try:
            rows.append([float(v) for v in fields[1:]])
        except ValueError:
            raise FileFormatError(f"unparsable value for key {key!r}", path) from None
        keys.append(key)
    return keys, np.array(rows, dtype=np.float64)


def load_word2vec(path, precision=Precision.FP32, binary: bool = True) -> VectorSpace:
    """Load a word2vec file into a ``VectorSpace`` stored at ``precision``.

    Raises:
        FileFormatError: unreadable file, malformed header, truncated or
            malformed record, duplicate key, non-finite value, trailing data
        InvalidArgument: malformed precision tag or a path that is not str or
            os.PathLike
        AllocationFailure: the vector table does not fit in memory
    """
    precision = parse_precision(precision)
    if not isinstance(path, (str, os.PathLike)):
        raise InvalidArgument(f"path must be str or os.PathLike, got {type(path).__name__}")
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileFormatError(f"cannot read file: {e.strerror or e}", path) from e

    try:
        keys, table = (_parse_binary if binary else _parse_text)(data, path)
    except MemoryError:
        raise AllocationFailure(f"cannot allocate vector table for {path}") from None

    vocabulary: dict[str, int] = {}
    for row, key in enumerate(keys):
        if key in vocabulary:
            raise FileFormatError(f"duplicate key {key!r}", path)
        vocabulary[key] = row
    if not np.isfinite(table).all():
        raise FileFormatError("non-finite vector value", path)

    space = VectorSpace(vocabulary, as_array(table, precision), precision, source=path)
    logger.info("loaded %r from %s", space, path)
    return space


# =============================================================================
# Writing
# =============================================================================


def save_word2vec(path, vectors, binary: bool = True) -> None:
    """Write a ``VectorSpace`` or a ``key -> vector`` mapping as word2vec.

    Values are written as float32.
    """
    if isinstance(vectors, VectorSpace):
        items = [(k, vectors.vectors[i]) for k, i in vectors.vocabulary.items()]
    else:
        items = [(k, np.asarray(v, dtype=np.float64).ravel()) for k, v in vectors.items()]
    if not items:
        raise InvalidArgument("cannot write an empty vector space")
    dim = len(items[0][1])
    for key, vec in items:
        if not key or any(c in key for c in " \t\r\n"):
            raise InvalidArgument(f"key {key!r} is empty or contains whitespace")
        if len(vec) != dim:
            raise InvalidArgument(f"key {key!r} has {len(vec)} values, expected {dim}")

    with open(path, "wb") as f:
        f.write(f"{len(items)} {dim}\n".encode("ascii"))
        for key, vec in items:
            if binary:
                f.write(key.encode("utf-8") + b" ")
                f.write(np.asarray(vec, dtype=_FLOAT32_LE).tobytes())
                f.write(b"\n")
            else:
                values = " ".join(format(float(np.float32(v)), ".9g") for v in vec)
                f.write(f"{key} {values}\n".encode("utf-8"))
