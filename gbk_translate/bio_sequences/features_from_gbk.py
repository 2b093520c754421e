import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from pathlib import Path

import pandas as pd
from tqdm import tqdm

from gbk_translate.basic.decompress import (
    getSuffixIfCompressed,
    openFileIfCompressed,
)
from gbk_translate.bio_sequences.bio_seq_file_extensions import GBK_EXTENSIONS
from gbk_translate.bio_sequences.errors import TranslationError
from gbk_translate.bio_sequences.genbank import Feature, Record, parse
from gbk_translate.bio_sequences.translate_config import DEFAULT_CONFIG
from gbk_translate.bio_sequences.translation import (
    CodeStyle,
    is_start_codon,
    resolve_location,
    translate_sequence,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CdsTranslation:
    record: str
    index: int  # position of the feature in Record.features
    kind: str
    id: str
    gene: str
    product: str
    location: str
    nt_length: int
    translation: str | None
    matches_annotation: bool | None = None
    error: str | None = None


@dataclass(frozen=True)
class RecordReport:
    record: Record
    translations: list[CdsTranslation]

    @property
    def n_features(self) -> int:
        return len(self.record.features)


def read_gbk(gbkPath: Path) -> list[Record]:
    """Read all records of a GenBank file, which may be compressed
    (.gz, .bz2, .xz)."""
    gbkPath = Path(gbkPath)
    if getSuffixIfCompressed(gbkPath) not in GBK_EXTENSIONS:
        logger.warning(
            f"{gbkPath.name} does not have a GenBank extension "
            f"{GBK_EXTENSIONS}, reading it as GenBank anyway"
        )
    with openFileIfCompressed(gbkPath) as handle:
        records = parse(handle.read())
    logger.info(f"Read {len(records)} records from {gbkPath}")
    return records


def _get_cds_id(
    feat: Feature, index: int, idQualifiers=DEFAULT_CONFIG.ID_QUALIFIERS
) -> str:
    for idFrom in idQualifiers:
        value = feat.qualifiers.get(idFrom)
        if value:
            return value
    return f"CDS_{str(index).zfill(4)}"


def _translate_cds(
    record: Record,
    index: int,
    code_style: CodeStyle,
    idQualifiers=DEFAULT_CONFIG.ID_QUALIFIERS,
) -> CdsTranslation:
    feat = record.features[index]
    nucleotides = resolve_location(record.sequence, feat.location)
    translation = None
    matches = None
    error = None
    try:
        translation = translate_sequence(nucleotides, code_style)
        annotated = feat.qualifiers.get("translation")
        if annotated:
            one_letter = (
                translation
                if code_style == "one"
                else translate_sequence(nucleotides, "one")
            )
            # Annotated proteins start with M whatever the start codon
            if one_letter and is_start_codon(nucleotides[:3]):
                one_letter = "M" + one_letter[1:]
            matches = one_letter == annotated
    except TranslationError as e:
        error = str(e)
        logger.warning(
            f"Cannot translate {feat.kind} {feat.location} "
            f"in record {record.name}: {e}"
        )
    return CdsTranslation(
        record=record.name,
        index=index,
        kind=feat.kind,
        id=_get_cds_id(feat, index, idQualifiers),
        gene=feat.qualifiers.get("gene") or "",
        product=feat.qualifiers.get("product") or "",
        location=str(feat.location),
        nt_length=len(nucleotides),
        translation=translation,
        matches_annotation=matches,
        error=error,
    )


def translate_record_cdss(
    record: Record,
    code_style: CodeStyle = DEFAULT_CONFIG.CODE_STYLE,
    featureKinds=DEFAULT_CONFIG.FEATURE_KINDS,
    idQualifiers=DEFAULT_CONFIG.ID_QUALIFIERS,
    cpus: int = DEFAULT_CONFIG.CPUS,
) -> list[CdsTranslation]:
    """Translate all coding features of a record, in feature order.

    A feature that cannot be translated is reported with translation None
    and the error message, the other features are not affected.
    With cpus > 1, features are translated in a thread pool. The record and
    the codon table are only read.
    """
    if code_style not in ("one", "three"):
        raise ValueError(f"Code style must be 'one' or 'three' not {code_style}")
    indices = [
        i for i, feat in enumerate(record.features) if feat.kind in featureKinds
    ]
    if cpus > 1:
        with ThreadPoolExecutor(max_workers=cpus) as executor:
            translations = list(
                executor.map(
                    lambda i: _translate_cds(
                        record, i, code_style, idQualifiers
                    ),
                    indices,
                )
            )
    else:
        translations = [
            _translate_cds(record, i, code_style, idQualifiers)
            for i in indices
        ]
    n_failed = sum(t.translation is None for t in translations)
    if n_failed:
        logger.warning(
            f"{n_failed} of {len(translations)} features in record "
            f"{record.name} could not be translated"
        )
    return translations


def translate_gbk(
    gbkPath: Path,
    code_style: CodeStyle = DEFAULT_CONFIG.CODE_STYLE,
    featureKinds=DEFAULT_CONFIG.FEATURE_KINDS,
    idQualifiers=DEFAULT_CONFIG.ID_QUALIFIERS,
    cpus: int = DEFAULT_CONFIG.CPUS,
    progress: bool = False,
) -> list[RecordReport]:
    """
    Read a GenBank file and translate the coding features of every record.
    FormatError from reading the file is not caught.
    """
    reports = []
    for record in tqdm(read_gbk(gbkPath), disable=not progress):
        translations = translate_record_cdss(
            record,
            code_style=code_style,
            featureKinds=featureKinds,
            idQualifiers=idQualifiers,
            cpus=cpus,
        )
        reports.append(RecordReport(record, translations))
    logger.info(
        f"Translated {sum(len(r.translations) for r in reports)} features "
        f"from {gbkPath}"
    )
    return reports


def translations_to_dataframe(
    translations: list[CdsTranslation],
) -> pd.DataFrame:
    """One row per translated feature, columns as in
    TranslateConfig.REPORT_COLUMNS."""
    data = pd.DataFrame(
        [asdict(t) for t in translations],
        columns=list(DEFAULT_CONFIG.REPORT_COLUMNS),
    )
    return data.astype({"index": int, "nt_length": int})
