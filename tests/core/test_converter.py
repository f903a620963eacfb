"""
Value set conversion tests through the full recognizer chain.
"""

import unittest

from ecl_curation.core.converter import (
    convert_value_set,
    explain_value_set,
    extract_snomed_ecl,
    match_value_set,
)
from ecl_curation.metadata.models import EclExpression, EclOperator, ConceptReference
from ecl_curation.pattern_plugins.base import PatternResult, PluginMetadata
from ecl_curation.pattern_plugins.registry import PatternRegistry


class TestEndToEndScenarios(unittest.TestCase):
    def test_complex_expression_with_semantic_tag(self):
        self.assertEqual(
            extract_snomed_ecl("SNOMED CT: - <71388002 |Procedure (procedure)|"),
            "< 71388002 |Procedure|",
        )

    def test_reference_set(self):
        self.assertEqual(
            extract_snomed_ecl("SNOMED CT: ^ 999000011000000103 |UK Drug Extension refset|"),
            "^ 999000011000000103 |UK Drug Extension refset|",
        )

    def test_dmd_code(self):
        self.assertEqual(extract_snomed_ecl("dm+d: 123456"), "< 123456 |dm+d concept|")

    def test_free_text_is_not_converted(self):
        self.assertEqual(extract_snomed_ecl("Local procedure codes"), "")
        self.assertIsNone(convert_value_set("Local procedure codes"))

    def test_empty_input(self):
        self.assertEqual(extract_snomed_ecl(""), "")
        self.assertIsNone(convert_value_set(None))
        self.assertIsNone(convert_value_set("   "))
        self.assertEqual(explain_value_set(""), [])


class TestRecognizerSelection(unittest.TestCase):
    def assertConverted(self, value_set, expected_ecl, expected_id):
        result = match_value_set(value_set)
        self.assertIsNotNone(result, value_set)
        self.assertEqual(result.ecl, expected_ecl)
        self.assertEqual(result.id, expected_id)

    def test_exact_concept(self):
        self.assertConverted("SNOMED CT: 123456 |Fever| (exact)", "123456 |Fever|", "exact_concept")

    def test_snomed_concept_id(self):
        self.assertConverted("SNOMED CT 123456", "< 123456 |SNOMED CT concept|", "snomed_concept_id")
        self.assertConverted("SNOMED CT: 123456", "< 123456 |SNOMED CT concept|", "snomed_concept_id")

    def test_snomed_concept_list(self):
        self.assertConverted(
            "SNOMED concepts: 123456, 234567",
            "< 123456 |SNOMED CT concept| OR < 234567 |SNOMED CT concept|",
            "snomed_concept_list",
        )
        self.assertConverted("SNOMED codes: 123456", "< 123456 |SNOMED CT concept|", "snomed_concept_list")

    def test_alternate_prefix(self):
        self.assertConverted("SCT: <<123456 |Asthma (disorder)|", "<< 123456 |Asthma|", "alternate_prefix")

    def test_fhir_urls(self):
        self.assertConverted(
            "http://snomed.info/sct?fhir_vs=ecl/%3C%3C%2073211009%20%7CDiabetes%20mellitus%7C",
            "<< 73211009 |Diabetes mellitus|",
            "fhir_ecl_url",
        )
        self.assertConverted(
            "http://snomed.info/sct?fhir_vs=refset/999000011000000103",
            "^ 999000011000000103 |SNOMED CT reference set|",
            "fhir_refset_url",
        )

    def test_standalone_forms(self):
        self.assertConverted("^123456", "^ 123456 |SNOMED CT reference set|", "standalone_refset")
        self.assertConverted("<<123456 |Asthma (disorder)|", "<< 123456 |Asthma|", "standalone_concept")
        self.assertConverted("Concept 123456", "< 123456 |SNOMED CT concept|", "standalone_concept")

    def test_bare_numbers_are_not_converted(self):
        self.assertIsNone(convert_value_set("123456, 234567"))
        self.assertIsNone(convert_value_set("123456"))

    def test_numbers_longer_than_eighteen_digits_are_not_converted(self):
        self.assertIsNone(convert_value_set("Contact 01234567890123456789"))
        self.assertIsNone(convert_value_set("http://snomed.info/sct?fhir_vs=refset/1234567890123456789"))
        self.assertEqual(
            extract_snomed_ecl("SNOMED codes: 1234567890123456789, 234567"),
            "< 234567 |SNOMED CT concept|",
        )

    def test_surrounding_whitespace_is_ignored(self):
        self.assertEqual(
            extract_snomed_ecl("  dm+d: 123456\n"),
            "< 123456 |dm+d concept|",
        )

    def test_earlier_recognizer_wins_on_overlap(self):
        value_set = "SNOMED CT: <<123456 |X|"
        self.assertConverted(value_set, "<< 123456 |X|", "complex_expression")

        matched = [r.id for r in explain_value_set(value_set)]
        self.assertEqual(matched[0], "complex_expression")
        self.assertIn("descendants_or_self", matched)
        self.assertIn("standalone_concept", matched)
        self.assertLess(matched.index("descendants_or_self"), matched.index("standalone_concept"))

    def test_expression_object(self):
        expression = convert_value_set("dm+d: 123456")
        self.assertIsInstance(expression, EclExpression)
        self.assertIs(expression.operator, EclOperator.DESCENDANTS)
        self.assertEqual(expression.concept_ids, ("123456",))


class TestCustomRegistry(unittest.TestCase):
    def test_uses_supplied_registry(self):
        registry = PatternRegistry()

        def detector(ctx):
            if "local" not in ctx.value_set.lower():
                return None
            return PatternResult(
                id="local_codes",
                description="local",
                expression=EclExpression.from_constraint(EclOperator.SELF, ConceptReference("123456", "Local")),
            )

        registry.register(PluginMetadata(id="local_codes", priority=1), detector)
        self.assertEqual(convert_value_set("Local procedure codes", registry).text, "123456 |Local|")
        self.assertIsNone(convert_value_set("dm+d: 123456", registry))


if __name__ == "__main__":
    unittest.main()
