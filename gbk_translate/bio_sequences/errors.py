class GbkTranslateError(Exception):
    """Base class of all errors raised while reading or translating
    GenBank records."""


class FormatError(GbkTranslateError, ValueError):
    """The text does not follow the GenBank record grammar.
    Fatal for the whole file, no partial result is returned."""


class FeatureLocationError(GbkTranslateError, ValueError):
    """A single feature location is malformed or out of range.
    The parser drops the feature and keeps going."""

    def __init__(
        self,
        message: str,
        location_text: str | None = None,
        feature_kind: str | None = None,
    ):
        super().__init__(message)
        self.location_text = location_text
        self.feature_kind = feature_kind

    def __str__(self):
        msg = super().__str__()
        if self.feature_kind is not None:
            msg = f"{self.feature_kind} feature: {msg}"
        return msg


class TranslationError(GbkTranslateError, ValueError):
    """The resolved region is too short to hold a codon, or contains a
    codon that cannot be resolved to one amino acid."""
