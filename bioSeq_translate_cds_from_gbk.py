"""List the CDS features of a GenBank file and show their translations.

    python bioSeq_translate_cds_from_gbk.py genome.gbk
    python bioSeq_translate_cds_from_gbk.py genome.gbk -1 -i 3
    python bioSeq_translate_cds_from_gbk.py genome.gbk.gz -t cds.tsv
"""

import argparse
import logging
import sys
from pathlib import Path

from gbk_translate.basic.basic import format_numbered_lines
from gbk_translate.bio_sequences.errors import FormatError
from gbk_translate.bio_sequences.features_from_gbk import (
    translate_gbk,
    translations_to_dataframe,
)
from gbk_translate.bio_sequences.translate_config import DEFAULT_CONFIG
from gbk_translate.bio_sequences.translation import resolve_location

logger = logging.getLogger(__name__)


def get_parser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(
        description="Translate CDS features of a GenBank file."
    )
    argparser.add_argument(
        "file",
        nargs="?",
        type=Path,
        default=Path(DEFAULT_CONFIG.DEFAULT_GBK),
        help=f"genbank file, default {DEFAULT_CONFIG.DEFAULT_GBK}",
    )
    argparser.add_argument(
        "-1",
        "--one-letter",
        action="store_true",
        help="one letter amino acid codes (default three letter)",
    )
    argparser.add_argument(
        "-i",
        "--index",
        type=int,
        help="show DNA and protein of the CDS with this number",
    )
    argparser.add_argument(
        "-t", "--tsv", type=Path, help="write all translations to a tsv file"
    )
    argparser.add_argument(
        "-c", "--cpus", type=int, default=DEFAULT_CONFIG.CPUS, help="threads"
    )
    return argparser


def print_cds_detail(record, cds, code_style: str) -> None:
    feat = record.features[cds.index]
    dna = resolve_location(record.sequence, feat.location)
    print(f"\nDNA sequence of {cds.id} ({cds.location}):")
    print("\n".join(format_numbered_lines(dna, DEFAULT_CONFIG.LINE_WIDTH)))
    print(f"Length: {len(dna)}\n")
    if cds.translation is None:
        print(f"Untranslatable: {cds.error}")
        return
    residue_width = 1 if code_style == "one" else 4
    print("One-letter code:" if code_style == "one" else "Three-letter code:")
    print(
        "\n".join(
            format_numbered_lines(
                cds.translation, DEFAULT_CONFIG.LINE_WIDTH, residue_width
            )
        )
    )
    n_aa = (len(cds.translation) + residue_width - 1) // residue_width
    print(f"Length: {n_aa} (stop not included)\n")


def main(argv=None) -> int:
    args = get_parser().parse_args(argv)
    gbkPath: Path = args.file
    code_style = "one" if args.one_letter else "three"

    if not gbkPath.exists():
        print(f"File '{gbkPath}' does not exist.")
        return 1

    print(f"\nReading records from file '{gbkPath}'...")
    try:
        reports = translate_gbk(gbkPath, code_style=code_style, cpus=args.cpus)
    except FormatError as e:
        print(f"Invalid GenBank file '{gbkPath}': {e}")
        return 1

    # CDS numbers run on across records
    numbered = []
    for report in reports:
        record = report.record
        print(f"Record name: {record.name}")
        print(f"Sequence length: {len(record)} ({record.topology})")
        print(
            f"\nFound {report.n_features} features, "
            f"including {len(report.translations)} genes."
        )
        if record.diagnostics:
            print(f"Skipped {len(record.diagnostics)} features:")
            for diagnostic in record.diagnostics:
                print(f"  {diagnostic}")
        for cds in report.translations:
            flag = "" if cds.translation is not None else " [untranslatable]"
            print(f"{len(numbered)}) {cds.id}: {cds.product}{flag}")
            numbered.append((record, cds))

    if args.index is not None:
        if not 0 <= args.index < len(numbered):
            print(f"Invalid selection: '{args.index}'")
            return 1
        print(f"You selected: {args.index}")
        print_cds_detail(*numbered[args.index], code_style)

    if args.tsv is not None:
        data = translations_to_dataframe(
            [t for report in reports for t in report.translations]
        )
        data.to_csv(args.tsv, sep="\t", index=False)
        logger.info(f"Wrote {len(data)} translations to {args.tsv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
