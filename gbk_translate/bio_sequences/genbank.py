"""Reader for GenBank flat files.

A file holds one or more records, each made of:
    LOCUS line and other header keywords
    FEATURES table
    ORIGIN and the sequence lines
    // terminator

Records are scanned by Biopython (Bio.GenBank.parse), which keeps the raw
location text and every qualifier in file order. They are converted here to
frozen records whose locations are resolved against the record sequence.

Record level problems raise FormatError and stop the whole file. A feature
with a bad location is left out of its record, the error is logged and kept
in Record.diagnostics.
"""

import logging
import warnings
from dataclasses import dataclass, field
from io import StringIO
from typing import Iterator, TextIO

from Bio import BiopythonParserWarning, GenBank
from Bio.Data.IUPACData import ambiguous_dna_letters

from gbk_translate.bio_sequences.errors import (
    FeatureLocationError,
    FormatError,
)
from gbk_translate.bio_sequences.locations import (
    Location,
    check_location_bounds,
    parse_location,
)

logger = logging.getLogger(__name__)

SEQUENCE_SYMBOLS = frozenset(ambiguous_dna_letters + "U")
# Biopython only warns about these, a truncated record is not accepted here
FATAL_PARSER_WARNINGS = ("Premature end of file",)


@dataclass(frozen=True)
class Qualifiers:
    """Ordered multi-map of feature qualifiers.

    A key can appear several times (e.g. /note), all values are kept in
    file order. Flag qualifiers such as /pseudo have the value None.
    """

    pairs: tuple[tuple[str, str | None], ...] = ()

    def get(self, key: str, default=None):
        """First value of key."""
        for k, v in self.pairs:
            if k == key:
                return v
        return default

    def get_all(self, key: str) -> list[str | None]:
        return [v for k, v in self.pairs if k == key]

    def keys(self) -> list[str]:
        return list(dict.fromkeys(k for k, _ in self.pairs))

    def __contains__(self, key):
        return any(k == key for k, _ in self.pairs)

    def __iter__(self):
        return iter(self.pairs)

    def __len__(self):
        return len(self.pairs)


@dataclass(frozen=True)
class Feature:
    kind: str
    location: Location
    qualifiers: Qualifiers = field(default_factory=Qualifiers)


@dataclass(frozen=True)
class Record:
    name: str
    sequence: str
    circular: bool = False
    features: tuple[Feature, ...] = ()
    length: int | None = None
    molecule_type: str | None = None
    division: str | None = None
    date: str | None = None
    definition: str | None = None
    accession: str | None = None
    version: str | None = None
    organism: str | None = None
    taxonomy: tuple[str, ...] = ()
    diagnostics: tuple[FeatureLocationError, ...] = ()

    def __len__(self):
        return len(self.sequence)

    @property
    def topology(self) -> str:
        return "circular" if self.circular else "linear"


def parse(raw_text: str) -> list[Record]:
    """Parse the full text of a GenBank file.

    All records are parsed before anything is returned, a broken record
    anywhere in the text means no records at all.

    Raises:
        FormatError: the text is not a sequence of valid GenBank records.
    """
    records = list(iter_records(StringIO(raw_text)))
    if len(records) == 0:
        raise FormatError("No GenBank record found")
    return records


def iter_records(handle: TextIO) -> Iterator[Record]:
    """Yield records one by one from a GenBank file opened in text mode."""
    bioRecords = GenBank.parse(handle)
    while True:
        with warnings.catch_warnings():
            for message in FATAL_PARSER_WARNINGS:
                warnings.filterwarnings(
                    "error", message=message, category=BiopythonParserWarning
                )
            try:
                bioRecord = next(bioRecords)
            except StopIteration:
                return
            except (ValueError, BiopythonParserWarning) as e:
                raise FormatError(f"Invalid GenBank record: {e}") from e
        yield _convert_record(bioRecord)


def _convert_record(bioRecord) -> Record:
    name = bioRecord.locus
    if not name:
        raise FormatError("LOCUS line without an identifier")
    if bioRecord.residue_type.upper().startswith("PROTEIN"):
        raise FormatError(
            f"Record {name} is a protein record, "
            "a nucleotide record is required"
        )
    sequence = _check_sequence(bioRecord.sequence, name)
    length = int(bioRecord.size) if bioRecord.size.isdigit() else None
    if length is not None and length != len(sequence):
        raise FormatError(
            f"Record {name} declares {length} bp on the LOCUS line "
            f"but has a sequence of {len(sequence)} bp"
        )
    if bioRecord.topology == "":
        logger.warning(f"No topology on LOCUS line of {name}, assuming linear")
    circular = bioRecord.topology == "circular"

    features = []
    diagnostics = []
    for bioFeature in bioRecord.features:
        try:
            location = parse_location(
                bioFeature.location, len(sequence), circular
            )
            check_location_bounds(location, len(sequence))
        except FeatureLocationError as e:
            e.feature_kind = bioFeature.key
            if e.location_text is None:
                e.location_text = bioFeature.location
            logger.warning(f"Skipping feature in record {name}: {e}")
            diagnostics.append(e)
            continue
        qualifiers = Qualifiers(
            tuple(_qualifier_pair(q) for q in bioFeature.qualifiers)
        )
        features.append(Feature(bioFeature.key, location, qualifiers))

    logger.debug(
        f"Record {name}: {len(sequence)} bp, {len(features)} features, "
        f"{len(diagnostics)} skipped"
    )
    return Record(
        name=name,
        sequence=sequence,
        circular=circular,
        features=tuple(features),
        length=length,
        molecule_type=bioRecord.molecule_type or None,
        division=bioRecord.data_file_division or None,
        date=bioRecord.date or None,
        definition=bioRecord.definition or None,
        accession=bioRecord.accession[0] if bioRecord.accession else None,
        version=bioRecord.version or None,
        organism=bioRecord.organism or None,
        taxonomy=tuple(bioRecord.taxonomy),
        diagnostics=tuple(diagnostics),
    )


def _qualifier_pair(qualifier) -> tuple[str, str | None]:
    """("gene", "abcA") from the raw key '/gene=' and value '"abcA"'.
    A key without "=" is a flag such as /pseudo."""
    key = qualifier.key.lstrip("/")
    if not key.endswith("="):
        return key, None
    value = qualifier.value
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1].replace('""', '"')
    return key[:-1], value


def _check_sequence(sequence: str, record_name: str) -> str:
    if len(sequence) == 0:
        raise FormatError(f"Record {record_name} has an empty sequence")
    invalid = set(sequence) - SEQUENCE_SYMBOLS
    if invalid:
        raise FormatError(
            f"Invalid characters {sorted(invalid)} in sequence of record "
            f"{record_name}"
        )
    return sequence
