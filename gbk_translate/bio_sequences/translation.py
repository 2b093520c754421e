from typing import Literal

from Bio.Seq import complement as _bio_complement
from Bio.Seq import reverse_complement as _bio_reverse_complement

from gbk_translate.bio_sequences.codon_table import (
    CODON_TABLE,
    START_CODONS,
    STOP,
    THREE_LETTER_CODES,
)
from gbk_translate.bio_sequences.errors import TranslationError
from gbk_translate.bio_sequences.locations import (
    Location,
    check_location_bounds,
)

CodeStyle = Literal["one", "three"]
THREE_LETTER_DELIMITER = "-"


def complement(seq: str) -> str:
    """A<->T, C<->G (IUPAC codes included), case preserved."""
    return _bio_complement(seq)


def reverse_complement(seq: str) -> str:
    return _bio_reverse_complement(seq)


def resolve_location(sequence: str, location: Location) -> str:
    """Cut the region of a location out of the full record sequence.

    Every span is sliced [start:end] and reverse complemented when it lies
    on the -1 strand, then the pieces are concatenated in listed order
    (not sorted by position).
    """
    check_location_bounds(location, len(sequence))
    pieces = []
    for span in location.spans:
        piece = sequence[span.start : span.end]
        if span.strand == -1:
            piece = reverse_complement(piece)
        pieces.append(piece)
    return "".join(pieces)


def split_codons(seq: str) -> list[str]:
    """Codons read from the first base, a trailing 1 or 2 bases are dropped"""
    return [seq[i : i + 3] for i in range(0, len(seq) - len(seq) % 3, 3)]


def translate_codon(codon: str) -> str:
    """Return the one letter amino acid of a codon, or "*" for a stop.
    RNA codons are read as DNA."""
    try:
        return CODON_TABLE[codon.upper().replace("U", "T")]
    except KeyError:
        raise TranslationError(
            f"Codon {codon!r} cannot be resolved to a single amino acid"
        ) from None


def is_start_codon(codon: str) -> bool:
    """ATG and the alternative starts of table 11 (GTG, TTG, CTG, ...)"""
    return codon.upper().replace("U", "T") in START_CODONS


def translate_sequence(nucleotides: str, code_style: CodeStyle = "three") -> str:
    """Translate a nucleotide sequence in frame 0 up to the first stop codon.

    The stop codon is not part of the result. A sequence without a stop is
    translated to its last complete codon.

    Args:
        nucleotides (str): Sequence already cut out of the record.
        code_style (Literal["one", "three"]): "one" gives "MA",
            "three" gives "Met-Ala".

    Returns:
        str: Amino acid sequence.

    Raises:
        TranslationError: Fewer than 3 bases, or an unresolvable codon.
    """
    if code_style not in ("one", "three"):
        raise ValueError(f"Code style must be 'one' or 'three' not {code_style}")
    if len(nucleotides) < 3:
        raise TranslationError(
            f"Sequence of length {len(nucleotides)} is too short for a codon"
        )
    amino_acids = []
    for codon in split_codons(nucleotides):
        aa = translate_codon(codon)
        if aa == STOP:
            break
        amino_acids.append(aa)
    if code_style == "one":
        return "".join(amino_acids)
    return THREE_LETTER_DELIMITER.join(THREE_LETTER_CODES[aa] for aa in amino_acids)


def translate(
    sequence: str, location: Location, code_style: CodeStyle = "three"
) -> str:
    """Translate the region of a record sequence described by location."""
    return translate_sequence(resolve_location(sequence, location), code_style)
