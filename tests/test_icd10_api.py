import sys
from pathlib import Path
import unittest

import httpx
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parent))

from support import RecordingUpstream, bundled_context, make_app, timeout_everything

NIH_HYPERTENSION = [
    1,
    ["I10"],
    None,
    [["I10", "Essential (primary) hypertension"]],
]


class ICD10LiveEndpointTests(unittest.TestCase):
    def test_metformin_resolves_from_local_mapping_without_upstream_calls(self) -> None:
        upstream = RecordingUpstream()
        client = TestClient(make_app(bundled_context(upstream)))

        response = client.get("/api/icd10/live", params={"terms": "metformin"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {
                "results": [{"code": "E11.9", "description": "Type 2 diabetes mellitus without complications"}],
                "source": "Local Mapping",
            },
        )
        self.assertEqual(upstream.requests, [])

    def test_missing_or_blank_term_is_400(self) -> None:
        upstream = RecordingUpstream()
        client = TestClient(make_app(bundled_context(upstream)))

        self.assertEqual(client.get("/api/icd10/live").status_code, 400)
        self.assertEqual(client.get("/api/icd10/live", params={"terms": "   "}).status_code, 400)
        self.assertEqual(upstream.requests, [])

    def test_all_upstreams_timing_out_yields_none(self) -> None:
        client = TestClient(make_app(bundled_context(timeout_everything)))

        response = client.get("/api/icd10/live", params={"terms": "zolpidem"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"results": [], "source": "None"})

    def test_first_remote_hit_wins(self) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if request.url.host == "clinicaltables.nlm.nih.gov":
                return httpx.Response(200, json=[0, [], None, []])
            if request.url.host == "icd10api.com":
                return httpx.Response(200, json=[{"code": "I10", "desc": "Essential (primary) hypertension"}])
            return httpx.Response(200, json={"destinationEntities": [{"theCode": "BA00", "title": "Hypertension"}]})

        upstream = RecordingUpstream(respond)
        client = TestClient(make_app(bundled_context(upstream)))

        response = client.get("/api/icd10/live", params={"terms": "hypertension"})

        self.assertEqual(response.json()["source"], "ICD-10 API.com")
        self.assertEqual(upstream.hosts(), ["clinicaltables.nlm.nih.gov", "icd10api.com"])


class DrugCodesEndpointTests(unittest.TestCase):
    def test_extended_table_returns_every_mapped_code(self) -> None:
        client = TestClient(make_app(bundled_context()))

        body = client.get("/api/icd10/drug-codes", params={"drug": "metformin"}).json()

        self.assertEqual(body["source"], "Local Mapping")
        self.assertEqual([r["code"] for r in body["results"]], ["E11.9", "E11.65"])

    def test_unknown_drug_falls_through_to_nih(self) -> None:
        upstream = RecordingUpstream(lambda request: httpx.Response(200, json=NIH_HYPERTENSION))
        client = TestClient(make_app(bundled_context(upstream)))

        body = client.get("/api/icd10/drug-codes", params={"drug": "olmesartan"}).json()

        self.assertEqual(body["source"], "NIH Clinical Tables")
        self.assertLessEqual(len(body["results"]), 8)

    def test_missing_drug_is_400(self) -> None:
        client = TestClient(make_app(bundled_context()))
        self.assertEqual(client.get("/api/icd10/drug-codes").status_code, 400)


class ICD10SearchAndLocalTablesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(make_app(bundled_context()))

    def test_search_matches_code_or_description(self) -> None:
        body = self.client.get("/api/icd10/search", params={"q": "hyperlipidemia"}).json()
        self.assertEqual({r["code"] for r in body["results"]}, {"E78.2", "E78.5"})
        self.assertEqual(body["total"], 2)
        self.assertEqual(body["query"], "hyperlipidemia")

        by_code = self.client.get("/api/icd10/search", params={"q": "i10"}).json()
        self.assertEqual([r["code"] for r in by_code["results"]], ["I10"])

    def test_search_limit_falls_back_to_default(self) -> None:
        for limit in ("0", "abc", "-3", ""):
            response = self.client.get("/api/icd10/search", params={"q": "hyperlipidemia", "limit": limit})
            self.assertEqual(response.status_code, 200, limit)
            self.assertEqual(response.json()["total"], 2, limit)

        one = self.client.get("/api/icd10/search", params={"q": "hyperlipidemia", "limit": "1"}).json()
        self.assertEqual(one["total"], 1)

    def test_search_requires_query(self) -> None:
        self.assertEqual(self.client.get("/api/icd10/search").status_code, 400)

    def test_indications_are_deduplicated_by_code(self) -> None:
        body = self.client.get("/api/icd10/live/drugs/Metformin/indications").json()
        self.assertEqual(
            body["icd10_mappings"],
            [
                {"icd10_code": "E11.9", "indication": "Type 2 diabetes mellitus without complications"},
                {"icd10_code": "E11.65", "indication": "Type 2 diabetes mellitus with hyperglycemia"},
            ],
        )

    def test_reverse_lookup_uses_category_keywords(self) -> None:
        body = self.client.get("/api/icd10/live/icd10/e11.9/drugs").json()
        names = [d["name"] for d in body["drugs"]]
        self.assertIn("Glucophage 500mg", names)
        self.assertIn("Lantus SoloStar", names)
        self.assertNotIn("Norvasc 5mg", names)

    def test_reverse_lookup_unknown_category_is_empty(self) -> None:
        self.assertEqual(self.client.get("/api/icd10/live/icd10/Z00.0/drugs").json(), {"drugs": []})


if __name__ == "__main__":
    unittest.main()
