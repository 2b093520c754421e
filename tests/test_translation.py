import unittest
from itertools import product

from Bio.Data import CodonTable

from gbk_translate.bio_sequences.codon_table import (
    CODON_TABLE,
    STOP,
    STOP_CODONS,
    THREE_LETTER_CODES,
)
from gbk_translate.bio_sequences.errors import (
    FeatureLocationError,
    TranslationError,
)
from gbk_translate.bio_sequences.locations import (
    JoinLocation,
    SimpleLocation,
    Span,
    parse_location,
)
from gbk_translate.bio_sequences.translation import (
    complement,
    is_start_codon,
    resolve_location,
    reverse_complement,
    split_codons,
    translate,
    translate_codon,
    translate_sequence,
)


class TestCodonTable(unittest.TestCase):

    def test_all_unambiguous_codons_present(self):
        for codon in product("ACGT", repeat=3):
            self.assertIn("".join(codon), CODON_TABLE)

    def test_standard_assignments(self):
        self.assertEqual(CODON_TABLE["ATG"], "M")
        self.assertEqual(CODON_TABLE["TGG"], "W")
        self.assertEqual(CODON_TABLE["GCA"], "A")
        for stop in ["TAA", "TAG", "TGA"]:
            self.assertEqual(CODON_TABLE[stop], STOP)
        self.assertEqual(sorted(STOP_CODONS), ["TAA", "TAG", "TGA"])

    def test_ambiguous_codons(self):
        self.assertEqual(CODON_TABLE["GCN"], "A")
        self.assertEqual(CODON_TABLE["GGN"], "G")
        self.assertEqual(CODON_TABLE["TAR"], STOP)
        self.assertEqual(CODON_TABLE["TRA"], STOP)
        self.assertNotIn("NNN", CODON_TABLE)
        self.assertNotIn("ATN", CODON_TABLE)

    def test_codons_of_two_amino_acids_are_not_resolved(self):
        # Biopython's ambiguous table gives B (Asn or Asp) for RAY
        ambiguous = CodonTable.ambiguous_dna_by_id[11].forward_table
        self.assertEqual(ambiguous["RAY"], "B")
        self.assertNotIn("RAY", CODON_TABLE)
        with self.assertRaises(TranslationError):
            translate_codon("RAY")
        self.assertEqual(translate_codon("GAY"), ambiguous["GAY"])

    def test_start_codons(self):
        for codon in ["ATG", "GTG", "TTG", "CTG", "gtg", "GUG"]:
            self.assertTrue(is_start_codon(codon), codon)
        self.assertFalse(is_start_codon("GCA"))
        self.assertEqual(translate_sequence("GTGGCATAA", "one"), "VA")

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            CODON_TABLE["ATG"] = "X"

    def test_three_letter_codes(self):
        self.assertEqual(THREE_LETTER_CODES["M"], "Met")
        self.assertEqual(THREE_LETTER_CODES["W"], "Trp")
        self.assertEqual(len(THREE_LETTER_CODES), 20)


class TestComplement(unittest.TestCase):

    def test_complement(self):
        self.assertEqual(complement("ATGC"), "TACG")
        self.assertEqual(complement("atgc"), "tacg")

    def test_reverse_complement(self):
        self.assertEqual(reverse_complement("ATGAAATGA"), "TCATTTCAT")
        self.assertEqual(reverse_complement("AtgC"), "GcaT")

    def test_reverse_complement_twice_is_identity(self):
        for seq in ["ATGGCATAA", "acgtnACGTN", "GGGTTTAAACCC"]:
            self.assertEqual(reverse_complement(reverse_complement(seq)), seq)


class TestResolveLocation(unittest.TestCase):

    seq = "ATGGCATAATCATTTCATATGTTTCCCGGGTAG"

    def test_forward_span(self):
        loc = SimpleLocation(Span(0, 9))
        self.assertEqual(resolve_location(self.seq, loc), "ATGGCATAA")

    def test_reverse_span(self):
        loc = SimpleLocation(Span(9, 18, -1))
        self.assertEqual(resolve_location(self.seq, loc), "ATGAAATGA")

    def test_join_in_listed_order(self):
        loc = parse_location("join(19..24,28..33)")
        self.assertEqual(resolve_location(self.seq, loc), "ATGTTTGGGTAG")
        swapped = parse_location("join(28..33,19..24)")
        self.assertEqual(resolve_location(self.seq, swapped), "GGGTAGATGTTT")

    def test_join_with_per_segment_strand(self):
        loc = JoinLocation((Span(0, 3), Span(9, 18, -1)))
        self.assertEqual(resolve_location(self.seq, loc), "ATGATGAAATGA")

    def test_out_of_bounds(self):
        with self.assertRaises(FeatureLocationError):
            resolve_location("ATGGCA", SimpleLocation(Span(0, 9)))


class TestTranslate(unittest.TestCase):

    def test_translate_forward(self):
        loc = parse_location("1..9")
        self.assertEqual(translate("ATGGCATAA", loc, "three"), "Met-Ala")
        self.assertEqual(translate("ATGGCATAA", loc, "one"), "MA")

    def test_stop_ends_translation(self):
        loc = parse_location("1..9")
        self.assertEqual(translate("ATGTAAGGG", loc, "three"), "Met")
        self.assertEqual(translate("ATGTAAGGG", loc, "one"), "M")

    def test_no_stop_translates_to_the_end(self):
        self.assertEqual(translate_sequence("ATGGCAGGG", "one"), "MAG")

    def test_trailing_bases_are_dropped(self):
        self.assertEqual(split_codons("ATGGCAGG"), ["ATG", "GCA"])
        self.assertEqual(split_codons("ATGGCAG"), ["ATG", "GCA"])
        self.assertEqual(translate_sequence("ATGGCAGG", "one"), "MA")
        self.assertEqual(translate_sequence("ATGGCAG", "three"), "Met-Ala")

    def test_reverse_strand_equals_forward_of_reverse_complement(self):
        seq = "CCTTATGCCATCC"
        reverse = parse_location("complement(3..11)")
        forward = parse_location("1..9")
        rc_region = reverse_complement(seq[2:11])
        self.assertEqual(
            translate(seq, reverse, "three"),
            translate(rc_region, forward, "three"),
        )
        self.assertEqual(translate(seq, reverse, "one"), "MA")

    def test_join_order_changes_translation(self):
        seq = "ATGTTTCCCGGGAAA"
        self.assertEqual(
            translate(seq, parse_location("join(1..6,10..15)"), "one"), "MFGK"
        )
        self.assertEqual(
            translate(seq, parse_location("join(10..15,1..6)"), "one"), "GKMF"
        )

    def test_lowercase_and_rna(self):
        self.assertEqual(translate_sequence("atggca", "one"), "MA")
        self.assertEqual(translate_codon("AUG"), "M")

    def test_ambiguous_codon(self):
        self.assertEqual(translate_sequence("ATGGCN", "three"), "Met-Ala")
        with self.assertRaises(TranslationError):
            translate_sequence("ATGNNN", "one")

    def test_too_short(self):
        with self.assertRaises(TranslationError):
            translate_sequence("AT", "one")
        with self.assertRaises(TranslationError):
            translate("ATGGCA", parse_location("1..2"), "one")

    def test_only_stop_is_empty(self):
        self.assertEqual(translate_sequence("TAAATG", "three"), "")

    def test_unknown_code_style(self):
        with self.assertRaises(ValueError):
            translate_sequence("ATGGCA", "two")


if __name__ == "__main__":
    unittest.main()
