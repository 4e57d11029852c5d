import sys
from pathlib import Path
import unittest

import httpx
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parent))

from support import RecordingUpstream, bundled_context, make_app, timeout_everything

CONCEPT = {"conceptId": "44054006", "fsn": {"term": "Diabetes mellitus type 2 (disorder)"}, "active": True}


class SnomedProxyTests(unittest.TestCase):
    def test_concept_lookup_is_wrapped(self) -> None:
        upstream = RecordingUpstream(lambda request: httpx.Response(200, json=CONCEPT))
        client = TestClient(make_app(bundled_context(upstream)))

        response = client.get("/api/snomed/concepts/44054006")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "data": CONCEPT})
        self.assertEqual(upstream.requests[0].url.path, "/browser/MAIN/concepts/44054006")
        self.assertIn("en;q=0.8", upstream.requests[0].headers["Accept-Language"])

    def test_search_forwards_filters(self) -> None:
        upstream = RecordingUpstream(lambda request: httpx.Response(200, json={"items": [CONCEPT], "total": 1}))
        client = TestClient(make_app(bundled_context(upstream)))

        body = client.get(
            "/api/snomed/concepts/search",
            params={"term": "diabetes", "activeFilter": "true", "limit": 5},
        ).json()

        self.assertTrue(body["success"])
        params = upstream.requests[0].url.params
        self.assertEqual(params["term"], "diabetes")
        self.assertEqual(params["activeFilter"], "true")
        self.assertEqual(params["limit"], "5")
        self.assertNotIn("ecl", params)

    def test_upstream_failures(self) -> None:
        down = TestClient(make_app(bundled_context(timeout_everything)))
        response = down.get("/api/snomed/concepts/44054006")
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json(), {"success": False, "data": None})

        missing = TestClient(make_app(bundled_context(lambda request: httpx.Response(404, json={}))))
        self.assertEqual(missing.get("/api/snomed/concepts/0").status_code, 404)

    def test_health_counts_codesystems(self) -> None:
        upstream = RecordingUpstream(lambda request: httpx.Response(200, json={"items": [{"shortName": "SNOMEDCT"}]}))
        body = TestClient(make_app(bundled_context(upstream))).get("/api/snomed/health").json()
        self.assertTrue(body["success"])
        self.assertEqual(body["codesystems"], 1)
        self.assertEqual(body["branch"], "MAIN")

    def test_ancestors_descriptions_and_ecl(self) -> None:
        upstream = RecordingUpstream(lambda request: httpx.Response(200, json={"items": [CONCEPT]}))
        client = TestClient(make_app(bundled_context(upstream)))

        ancestors = client.get("/api/snomed/concepts/44054006/ancestors", params={"form": "stated"})
        descriptions = client.get(
            "/api/snomed/descriptions/search",
            params={"term": "diabetes", "semanticTag": "disorder"},
        )
        ecl = client.get("/api/snomed/ecl", params={"ecl": "<73211009", "returnIdOnly": "true"})

        for response in (ancestors, descriptions, ecl):
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json(), {"success": True, "data": {"items": [CONCEPT]}})

        ancestors_request, descriptions_request, ecl_request = upstream.requests
        self.assertEqual(ancestors_request.url.path, "/browser/MAIN/concepts/44054006/ancestors")
        self.assertEqual(ancestors_request.url.params["form"], "stated")
        self.assertEqual(descriptions_request.url.path, "/browser/MAIN/descriptions")
        self.assertEqual(descriptions_request.url.params["semanticTag"], "disorder")
        self.assertEqual(descriptions_request.url.params["active"], "true")
        self.assertNotIn("conceptActive", descriptions_request.url.params)
        self.assertEqual(ecl_request.url.path, "/MAIN/concepts")
        self.assertEqual(ecl_request.url.params["ecl"], "<73211009")
        self.assertEqual(ecl_request.url.params["returnIdOnly"], "true")
        self.assertEqual(ecl_request.url.params["form"], "inferred")

    def test_ancestors_descriptions_and_ecl_when_snowstorm_is_down(self) -> None:
        client = TestClient(make_app(bundled_context(timeout_everything)))

        for path, params in (
            ("/api/snomed/concepts/1/ancestors", {}),
            ("/api/snomed/descriptions/search", {"term": "x"}),
            ("/api/snomed/ecl", {"ecl": "<1"}),
        ):
            response = client.get(path, params=params)
            self.assertEqual(response.status_code, 502, path)
            self.assertEqual(response.json(), {"success": False, "data": None}, path)

    def test_ecl_requires_expression(self) -> None:
        upstream = RecordingUpstream()
        client = TestClient(make_app(bundled_context(upstream)))
        self.assertEqual(client.get("/api/snomed/ecl").status_code, 400)
        self.assertEqual(upstream.requests, [])


class HealthEndpointTests(unittest.TestCase):
    def test_reports_datasets_and_chains(self) -> None:
        body = TestClient(make_app(bundled_context())).get("/api/health").json()

        self.assertEqual(body["status"], "ok")
        loaded = body["application"]["dataLoaded"]
        self.assertEqual(loaded["uae_drugs"]["count"], 12)
        self.assertEqual(loaded["daman_formulary"]["status"], "ok")
        self.assertEqual(loaded["drugRegistry"]["backend"], "csv")
        self.assertEqual(
            loaded["lookupChains"]["icd10_live"],
            ["Local Mapping", "NIH Clinical Tables", "ICD-10 API.com", "WHO ICD API"],
        )


if __name__ == "__main__":
    unittest.main()
