"""Feature locations of GenBank records.

All positions are stored 0-based, inclusive start, exclusive end, the same
convention python slices use. The GenBank text "10..18" becomes
Span(9, 18). A location is one of two variants:

    SimpleLocation - exactly one span
    JoinLocation   - spans concatenated in listed order (spliced regions)

Location text is parsed by Biopython (Bio.SeqFeature.Location.fromstring)
and its SimpleLocation/CompoundLocation parts are converted to frozen
spans. Each span carries its own strand, so "join(1..3,complement(7..9))"
keeps the per segment strand of the text.
Fuzzy boundaries ("<1..>206") are parsed as exact positions. The markers
are remembered on the span (partial_start, partial_end) but do not change
how the location resolves.
"""

from dataclasses import dataclass, replace
from typing import Literal

from Bio.SeqFeature import CompoundLocation, ExactPosition
from Bio.SeqFeature import Location as BioLocation

from gbk_translate.bio_sequences.errors import FeatureLocationError

Strand = Literal[1, -1]

SUPPORTED_OPERATORS = ("join",)


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    strand: Strand = 1
    partial_start: bool = False
    partial_end: bool = False

    def __post_init__(self):
        if self.start < 0 or self.end <= self.start:
            raise FeatureLocationError(
                f"Invalid span {self.start}..{self.end} (0-based, end exclusive)"
            )
        if self.strand not in (1, -1):
            raise ValueError(f"Strand must be 1 or -1 not {self.strand}")

    def __len__(self):
        return self.end - self.start

    def flipped(self) -> "Span":
        return replace(self, strand=-self.strand)

    def __str__(self):
        if len(self) == 1 and not (self.partial_start or self.partial_end):
            text = str(self.end)
        else:
            text = (
                f"{'<' if self.partial_start else ''}{self.start + 1}"
                f"..{'>' if self.partial_end else ''}{self.end}"
            )
        if self.strand == -1:
            text = f"complement({text})"
        return text


@dataclass(frozen=True)
class SimpleLocation:
    span: Span

    @property
    def spans(self) -> tuple[Span, ...]:
        return (self.span,)

    @property
    def start(self) -> int:
        return self.span.start

    @property
    def end(self) -> int:
        return self.span.end

    @property
    def strand(self) -> Strand:
        return self.span.strand

    def __len__(self):
        return len(self.span)

    def __str__(self):
        return str(self.span)


@dataclass(frozen=True)
class JoinLocation:
    spans: tuple[Span, ...]

    def __post_init__(self):
        if len(self.spans) == 0:
            raise FeatureLocationError("join() without any segment")

    @property
    def start(self) -> int:
        return min(s.start for s in self.spans)

    @property
    def end(self) -> int:
        return max(s.end for s in self.spans)

    @property
    def strand(self) -> Strand | None:
        """Common strand of all segments, None when strands are mixed."""
        strands = set(s.strand for s in self.spans)
        if len(strands) == 1:
            return strands.pop()
        return None

    def __len__(self):
        return sum(len(s) for s in self.spans)

    def __str__(self):
        return f"join({','.join(str(s) for s in self.spans)})"


Location = SimpleLocation | JoinLocation


def _to_span(part, text: str) -> Span:
    """Span of one Biopython SimpleLocation part"""
    if part.ref is not None:
        raise FeatureLocationError(
            f"Location {text!r} refers to another record ({part.ref})", text
        )
    try:
        return Span(
            int(part.start),
            int(part.end),
            strand=-1 if part.strand == -1 else 1,
            partial_start=not isinstance(part.start, ExactPosition),
            partial_end=not isinstance(part.end, ExactPosition),
        )
    except FeatureLocationError as e:
        raise FeatureLocationError(
            f"Empty or reversed region in location {text!r}: {e}", text
        ) from None


def parse_location(
    text: str, seq_length: int | None = None, circular: bool = False
) -> Location:
    """Parse a GenBank location expression.

    Accepted forms: "a..b", "a", "complement(x)" and "join(x,y,...)" whose
    segments may be complemented. complement(join(a..b,c..d)) is stored as
    join(complement(c..d),complement(a..b)) so that the listed order is
    always the reading order.

    Args:
        text (str): Location text, whitespace from line wrapping is ignored.
        seq_length (int | None): Length of the record sequence. With
            circular=True, "a..b" with a > b is read as wrapping the origin.
        circular (bool): Topology of the record.

    Raises:
        FeatureLocationError: malformed or unsupported expression.
    """
    cleaned = "".join(text.split())
    if not cleaned:
        raise FeatureLocationError("Empty location", text)
    try:
        bioLocation = BioLocation.fromstring(cleaned, seq_length, circular)
    except (ValueError, AssertionError) as e:
        # Biopython asserts on trailing text such as "1..3)"
        raise FeatureLocationError(
            f"Cannot parse location {text!r}: {str(e) or 'unexpected text'}",
            text,
        ) from None
    if isinstance(bioLocation, CompoundLocation):
        if bioLocation.operator not in SUPPORTED_OPERATORS:
            raise FeatureLocationError(
                f"Unsupported location operator {bioLocation.operator!r} "
                f"in {text!r}",
                text,
            )
        return JoinLocation(tuple(_to_span(p, text) for p in bioLocation.parts))
    return SimpleLocation(_to_span(bioLocation, text))


def check_location_bounds(location: Location, seq_length: int) -> None:
    """Raise FeatureLocationError when any span exceeds the sequence."""
    for span in location.spans:
        if span.end > seq_length:
            raise FeatureLocationError(
                f"Location {location} exceeds sequence length {seq_length}",
                str(location),
            )
