import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pharma_core.lookup.models import CodeEntry, ParseFailure
from pharma_core.lookup.parsers import (
    ICD10APIParser,
    NIHClinicalTablesParser,
    OpenFDALabelParser,
    WHOICDParser,
)


class NIHClinicalTablesParserTests(unittest.TestCase):
    def setUp(self) -> None:
        self.parser = NIHClinicalTablesParser()

    def test_reads_display_rows(self) -> None:
        payload = [
            2,
            ["E11.9", "E11.65"],
            None,
            [
                ["E11.9", "Type 2 diabetes mellitus without complications"],
                ["E11.65", "Type 2 diabetes mellitus with hyperglycemia"],
            ],
        ]
        self.assertEqual(
            self.parser(payload),
            [
                CodeEntry("E11.9", "Type 2 diabetes mellitus without complications"),
                CodeEntry("E11.65", "Type 2 diabetes mellitus with hyperglycemia"),
            ],
        )

    def test_no_hits_is_empty_not_failure(self) -> None:
        self.assertEqual(self.parser([0, [], None, []]), [])
        self.assertEqual(self.parser([0, [], None, None]), [])

    def test_short_array_is_parse_failure(self) -> None:
        outcome = self.parser([1, ["E11.9"]])
        self.assertIsInstance(outcome, ParseFailure)
        self.assertEqual(outcome.provider, "NIH Clinical Tables")

    def test_object_payload_is_parse_failure(self) -> None:
        self.assertIsInstance(self.parser({"error": "bad request"}), ParseFailure)

    def test_rows_missing_code_or_name_are_dropped(self) -> None:
        payload = [3, [], None, [["", "No code"], ["I10"], ["I10", "Essential (primary) hypertension"], [None, None]]]
        self.assertEqual(self.parser(payload), [CodeEntry("I10", "Essential (primary) hypertension")])


class ICD10APIParserTests(unittest.TestCase):
    def setUp(self) -> None:
        self.parser = ICD10APIParser()

    def test_accepts_alternative_field_names(self) -> None:
        payload = [
            {"code": "I10", "desc": "Essential (primary) hypertension"},
            {"icd10_code": "I11.9", "description": "Hypertensive heart disease without heart failure"},
            {"code": "I15.9", "name": "Secondary hypertension, unspecified"},
        ]
        self.assertEqual([e.code for e in self.parser(payload)], ["I10", "I11.9", "I15.9"])

    def test_non_list_payload_is_parse_failure(self) -> None:
        self.assertIsInstance(self.parser({"Response": "False"}), ParseFailure)

    def test_duplicates_are_collapsed(self) -> None:
        payload = [{"code": "I10", "desc": "Hypertension"}, {"code": "I10", "desc": "Hypertension"}]
        self.assertEqual(len(self.parser(payload)), 1)


class WHOICDParserTests(unittest.TestCase):
    def test_strips_highlight_markup(self) -> None:
        payload = {
            "destinationEntities": [
                {"theCode": "5A11", "title": "Type 2 <em class='found'>diabetes</em> mellitus"},
                {"theCode": "", "title": "Chapter without code"},
            ]
        }
        self.assertEqual(WHOICDParser()(payload), [CodeEntry("5A11", "Type 2 diabetes mellitus")])

    def test_list_payload_is_parse_failure(self) -> None:
        self.assertIsInstance(WHOICDParser()([]), ParseFailure)


class OpenFDALabelParserTests(unittest.TestCase):
    def test_extracts_condition_keywords(self) -> None:
        payload = {
            "results": [
                {
                    "indications_and_usage": [
                        "Metformin is indicated as an adjunct to diet to improve glycemic control in adults "
                        "with type 2 Diabetes mellitus. Not for use in patients with kidney disease."
                    ]
                }
            ]
        }
        self.assertEqual(
            OpenFDALabelParser()(payload),
            [
                CodeEntry("MED_CONDITION", "diabetes (medical condition)"),
                CodeEntry("MED_CONDITION", "kidney (medical condition)"),
            ],
        )

    def test_label_without_indications_is_empty(self) -> None:
        self.assertEqual(OpenFDALabelParser()({"results": [{"openfda": {}}]}), [])

    def test_results_of_wrong_type_is_parse_failure(self) -> None:
        self.assertIsInstance(OpenFDALabelParser()({"results": "none"}), ParseFailure)


if __name__ == "__main__":
    unittest.main()
