"""
Concept identifier and display term helper tests.
"""

import unittest

from ecl_curation.metadata.concept_tokens import (
    clean_concept_term,
    extract_piped_term,
    has_semantic_tag,
    is_concept_id,
    strip_semantic_tag,
)


class TestIsConceptId(unittest.TestCase):
    def test_accepts_six_to_eighteen_digits(self):
        self.assertTrue(is_concept_id("123456"))
        self.assertTrue(is_concept_id("71388002"))
        self.assertTrue(is_concept_id("999000011000000103"))

    def test_rejects_five_and_nineteen_digits(self):
        self.assertFalse(is_concept_id("12345"))
        self.assertFalse(is_concept_id("1234567890123456789"))

    def test_rejects_non_digit_tokens(self):
        self.assertFalse(is_concept_id("12345a"))
        self.assertFalse(is_concept_id(" 123456"))
        self.assertFalse(is_concept_id(""))
        self.assertFalse(is_concept_id(None))
        self.assertFalse(is_concept_id(123456))

    def test_rejects_non_ascii_digits(self):
        # Arabic-Indic digits are str.isdigit() but not concept ids
        self.assertFalse(is_concept_id("١٢٣٤٥٦"))


class TestExtractPipedTerm(unittest.TestCase):
    def test_returns_first_piped_segment(self):
        self.assertEqual(extract_piped_term("71388002 |Procedure| and |Other|"), "Procedure")

    def test_returns_none_without_closing_pipe(self):
        self.assertIsNone(extract_piped_term("71388002 |Procedure"))
        self.assertIsNone(extract_piped_term("71388002"))
        self.assertIsNone(extract_piped_term(None))

    def test_empty_segment(self):
        self.assertEqual(extract_piped_term("||"), "")


class TestSemanticTags(unittest.TestCase):
    def test_strip_semantic_tag(self):
        self.assertEqual(strip_semantic_tag("Procedure (procedure)"), "Procedure")
        self.assertEqual(strip_semantic_tag("  Asthma   (disorder)  "), "Asthma")

    def test_strip_leaves_untagged_terms(self):
        self.assertEqual(strip_semantic_tag("Asthma"), "Asthma")
        self.assertEqual(strip_semantic_tag("Type (1) diabetes"), "Type (1) diabetes")
        self.assertEqual(strip_semantic_tag(""), "")
        self.assertEqual(strip_semantic_tag(None), "")

    def test_strip_removes_stacked_tags(self):
        self.assertEqual(strip_semantic_tag("Fracture (morphology) (finding)"), "Fracture")

    def test_empty_parentheses_are_not_a_tag(self):
        self.assertEqual(strip_semantic_tag("Thing ()"), "Thing ()")
        self.assertFalse(has_semantic_tag("Thing ()"))

    def test_has_semantic_tag(self):
        self.assertTrue(has_semantic_tag("Procedure (procedure)"))
        self.assertFalse(has_semantic_tag("Procedure"))

    def test_clean_concept_term_defaults_when_empty(self):
        self.assertEqual(clean_concept_term(" Procedure (procedure) "), "Procedure")
        self.assertEqual(clean_concept_term("(finding)", "SNOMED CT concept"), "SNOMED CT concept")
        self.assertIsNone(clean_concept_term(None))


if __name__ == "__main__":
    unittest.main()
