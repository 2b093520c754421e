"""Process wide codon table, built once at import and never modified.

Amino acids come from NCBI translation table 11 (bacterial, archaeal and
plant plastid code). Its codon to amino acid assignments are the same as
the standard table 1, the two tables only differ in their start codons.

Codons with IUPAC ambiguity symbols are included when every codon they
expand to gives the same result, e.g. GCN -> A, TAR -> stop. Codons that
expand to different amino acids (NNN, ATN, ...) are absent.
"""

from itertools import product
from types import MappingProxyType

from Bio.Data import CodonTable
from Bio.Data.IUPACData import ambiguous_dna_values, protein_letters_1to3

CODON_TABLE_ID = 11
STOP = "*"

_table = CodonTable.unambiguous_dna_by_id[CODON_TABLE_ID]


def _build_codon_table() -> MappingProxyType:
    # Not ambiguous_dna_by_id[11].forward_table: it gives B/Z/J for codons such as RAY
    unambiguous = dict(_table.forward_table)
    for stop in _table.stop_codons:
        unambiguous[stop] = STOP
    codons = {}
    for codon in product(ambiguous_dna_values, repeat=3):
        results = set(
            unambiguous[first + second + third]
            for first in ambiguous_dna_values[codon[0]]
            for second in ambiguous_dna_values[codon[1]]
            for third in ambiguous_dna_values[codon[2]]
        )
        if len(results) == 1:
            codons["".join(codon)] = results.pop()
    return MappingProxyType(codons)


CODON_TABLE = _build_codon_table()
START_CODONS = tuple(_table.start_codons)
STOP_CODONS = tuple(_table.stop_codons)

THREE_LETTER_CODES = MappingProxyType(
    {aa: protein_letters_1to3[aa] for aa in set(_table.forward_table.values())}
)
