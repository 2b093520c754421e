import bz2
import gzip
import logging
import lzma
from pathlib import Path
from typing import IO

from gbk_translate.bio_sequences.bio_seq_file_extensions import (
    COMPRESS_EXTENSIONS,
)

logger = logging.getLogger(__name__)

_OPENERS = {
    ".gz": gzip.open,
    ".bz2": bz2.open,
    ".xz": lzma.open,
}


def splitStemSuffixIfCompressed(
    filePath: Path, fullSuffix: bool = False
) -> tuple[str, str]:
    """Split "genome.gbk.gz" into ("genome", ".gbk.gz").
    Without fullSuffix the compression suffix is dropped: ("genome", ".gbk")
    """
    suffixes = filePath.suffixes
    compressed = len(suffixes) > 0 and suffixes[-1] in COMPRESS_EXTENSIONS
    if compressed and len(suffixes) > 1:
        suffix = "".join(suffixes[-2:]) if fullSuffix else suffixes[-2]
        stem = filePath.name[: -len("".join(suffixes[-2:]))]
    elif compressed:
        suffix = suffixes[-1] if fullSuffix else ""
        stem = filePath.name[: -len(suffixes[-1])]
    else:
        suffix = filePath.suffix
        stem = filePath.stem
    return stem, suffix


def getSuffixIfCompressed(filePath: Path) -> str:
    return splitStemSuffixIfCompressed(filePath)[1]


def openFileIfCompressed(filePath: Path) -> IO[str]:
    """Open a text file for reading, decompressing .gz, .bz2 and .xz
    on the fly."""
    opener = _OPENERS.get(filePath.suffix)
    if opener is None:
        return filePath.open("rt")
    logger.debug(f"Reading {filePath.suffix} compressed file {filePath}")
    return opener(filePath, "rt")
