from dataclasses import dataclass


@dataclass(frozen=True)
class TranslateConfig:
    """
    Default configuration for translating CDS features of GenBank files.
    """

    CODE_STYLE: str = "three"  # "one" -> MA, "three" -> Met-Ala
    FEATURE_KINDS: tuple[str, ...] = ("CDS",)
    # First qualifier found is used as the id of a CDS
    ID_QUALIFIERS: tuple[str, ...] = (
        "protein_id",
        "locus_tag",
        "gene",
        "label",
    )
    LINE_WIDTH: int = 72  # numbered sequence blocks
    DEFAULT_GBK: str = "nc_005816.gb"
    CPUS: int = 1
    REPORT_COLUMNS: tuple[str, ...] = (
        "record",
        "index",
        "kind",
        "id",
        "gene",
        "product",
        "location",
        "nt_length",
        "translation",
        "matches_annotation",
        "error",
    )


DEFAULT_CONFIG = TranslateConfig()
