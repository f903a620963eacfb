"""
ECL model rendering tests.
"""

import unittest
from datetime import date

from ecl_curation.metadata.models import (
    ECL_SOURCE_MARKER,
    ConceptReference,
    ConversionRecord,
    EclConstraint,
    EclExpression,
    EclOperator,
    RefsetReference,
    format_constraint,
)


class TestEclOperator(unittest.TestCase):
    def test_prefix_tokens(self):
        self.assertEqual(EclOperator.SELF.prefix, "")
        self.assertEqual(EclOperator.DESCENDANTS.prefix, "<")
        self.assertEqual(EclOperator.DESCENDANTS_OR_SELF.prefix, "<<")
        self.assertEqual(EclOperator.ANCESTORS.prefix, ">")
        self.assertEqual(EclOperator.ANCESTORS_OR_SELF.prefix, ">>")
        self.assertEqual(EclOperator.MEMBER_OF.prefix, "^")

    def test_from_token(self):
        self.assertIs(EclOperator.from_token("<<"), EclOperator.DESCENDANTS_OR_SELF)
        self.assertIs(EclOperator.from_token(" > "), EclOperator.ANCESTORS)
        self.assertIs(EclOperator.from_token(None), EclOperator.SELF)
        with self.assertRaises(ValueError):
            EclOperator.from_token("<<<")


class TestReferences(unittest.TestCase):
    def test_rejects_invalid_identifiers(self):
        with self.assertRaises(ValueError):
            ConceptReference("12345")
        with self.assertRaises(ValueError):
            RefsetReference("abc123456")

    def test_default_display_terms(self):
        self.assertEqual(ConceptReference("123456").display_term, "SNOMED CT concept")
        self.assertEqual(RefsetReference("123456").display_term, "SNOMED CT reference set")


class TestEclExpression(unittest.TestCase):
    def test_single_constraint_rendering(self):
        expression = EclExpression.from_constraint(
            EclOperator.DESCENDANTS, ConceptReference("71388002", "Procedure")
        )
        self.assertEqual(expression.text, "< 71388002 |Procedure|")
        self.assertEqual(str(expression), "< 71388002 |Procedure|")
        self.assertIs(expression.operator, EclOperator.DESCENDANTS)
        self.assertEqual(expression.concept_ids, ("71388002",))
        self.assertFalse(expression.compound)

    def test_self_has_no_operator_prefix(self):
        constraint = EclConstraint(EclOperator.SELF, ConceptReference("123456", "Fever"))
        self.assertEqual(constraint.render(), "123456 |Fever|")

    def test_format_constraint_matches_rendered_constraints(self):
        self.assertEqual(format_constraint(EclOperator.DESCENDANTS, "42", "dm+d concept"), "< 42 |dm+d concept|")
        self.assertEqual(format_constraint(EclOperator.SELF, "42", "Local"), "42 |Local|")
        for operator in EclOperator:
            constraint = EclConstraint(operator, ConceptReference("123456", "Fever"))
            self.assertEqual(constraint.render(), format_constraint(operator, "123456", "Fever"))

    def test_any_of_joins_with_or(self):
        expression = EclExpression.any_of([
            EclConstraint(EclOperator.DESCENDANTS, ConceptReference("123456")),
            EclConstraint(EclOperator.DESCENDANTS, ConceptReference("234567")),
        ])
        self.assertEqual(
            expression.text,
            "< 123456 |SNOMED CT concept| OR < 234567 |SNOMED CT concept|",
        )
        self.assertTrue(expression.compound)
        self.assertIsNone(expression.operator)

    def test_any_of_requires_constraints(self):
        with self.assertRaises(ValueError):
            EclExpression.any_of([])

    def test_from_text_is_compound(self):
        expression = EclExpression.from_text("< 1234567 |A| OR< 2345678 |B|")
        self.assertTrue(expression.compound)
        self.assertEqual(expression.constraints, ())


class TestConversionRecord(unittest.TestCase):
    def test_provenance_defaults(self):
        record = ConversionRecord("Procedure", "< 71388002 |Procedure|", date(2024, 3, 1))
        self.assertEqual(record.source, ECL_SOURCE_MARKER)
        self.assertEqual(record.converted_on_iso, "2024-03-01")


if __name__ == "__main__":
    unittest.main()
