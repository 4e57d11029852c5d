import sys
from pathlib import Path
import unittest

import httpx
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parent))

from support import RecordingUpstream, bundled_context, make_app, mock_client, timeout_everything

from pharma_core.services.external_apis import ExternalAPIs

OPENFDA_LABELS = {
    "meta": {"results": {"total": 1}},
    "results": [
        {
            "openfda": {
                "brand_name": ["Glucophage"],
                "generic_name": ["METFORMIN HYDROCHLORIDE"],
                "manufacturer_name": ["Bristol-Myers Squibb"],
                "dosage_form": ["TABLET, FILM COATED"],
                "route": ["ORAL"],
            },
            "indications_and_usage": ["Adjunct to diet and exercise in type 2 diabetes mellitus."],
        }
    ],
}

RXNORM_DRUGS = {
    "drugGroup": {
        "name": "metformin",
        "conceptGroup": [
            {"tty": "BN"},
            {
                "tty": "SCD",
                "conceptProperties": [
                    {
                        "rxcui": "861007",
                        "name": "metformin hydrochloride 500 MG Oral Tablet",
                        "synonym": "",
                        "tty": "SCD",
                        "language": "ENG",
                    }
                ],
            },
        ],
    }
}


def _route(request: httpx.Request) -> httpx.Response:
    if request.url.host == "api.fda.gov":
        return httpx.Response(200, json=OPENFDA_LABELS)
    if request.url.host == "rxnav.nlm.nih.gov":
        return httpx.Response(200, json=RXNORM_DRUGS)
    return httpx.Response(500, text="ChEMBL is down")


class OpenFDAClientTests(unittest.IsolatedAsyncioTestCase):
    async def test_404_moves_to_next_search_expression(self) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if "exact" in request.url.params["search"]:
                return httpx.Response(404, json={"error": {"code": "NOT_FOUND"}})
            return httpx.Response(200, json=OPENFDA_LABELS)

        upstream = RecordingUpstream(respond)
        async with mock_client(upstream) as client:
            outcome = await ExternalAPIs.build(client).openfda.drug_labels("metformin")

        self.assertEqual(len(upstream.requests), 2)
        self.assertEqual(outcome.total, 1)
        self.assertIsNone(outcome.note)
        label = outcome.items[0]
        self.assertEqual(label["brandName"], "Glucophage")
        self.assertEqual(label["route"], "ORAL")
        self.assertEqual(label["warnings"], "Not available")

    async def test_all_404_is_empty_without_error(self) -> None:
        async with mock_client(lambda request: httpx.Response(404, json={})) as client:
            outcome = await ExternalAPIs.build(client).openfda.adverse_events("nothing")
        self.assertEqual(outcome.items, ())
        self.assertEqual(outcome.note, "no_results")

    async def test_errors_report_unavailable(self) -> None:
        async with mock_client(timeout_everything) as client:
            outcome = await ExternalAPIs.build(client).openfda.drug_labels("metformin")
        self.assertEqual(outcome.as_dict("labels"), {"source": "OpenFDA", "labels": [], "total": 0, "note": "unavailable"})

    async def test_adverse_events_are_normalized(self) -> None:
        payload = {
            "results": [
                {
                    "receiptdate": "20240105",
                    "serious": "1",
                    "patient": {
                        "patientsex": "2",
                        "reaction": [{"reactionmeddrapt": "Lactic acidosis", "reactionoutcome": "1"}],
                    },
                }
            ]
        }
        async with mock_client(lambda request: httpx.Response(200, json=payload)) as client:
            outcome = await ExternalAPIs.build(client).openfda.adverse_events("metformin")
        event = outcome.items[0]
        self.assertEqual(event["patientAge"], "Unknown")
        self.assertEqual(event["reactions"], [{"term": "Lactic acidosis", "outcome": "1"}])


class CombinedSearchTests(unittest.TestCase):
    def test_failing_provider_yields_empty_block(self) -> None:
        client = TestClient(make_app(bundled_context(_route)))

        response = client.get("/api/external/combined-search/metformin")

        self.assertEqual(response.status_code, 200)
        sources = response.json()["sources"]
        self.assertEqual(sources["openFDA"]["total"], 1)
        self.assertEqual(sources["openFDA"]["items"][0]["genericName"], "METFORMIN HYDROCHLORIDE")
        self.assertNotIn("route", sources["openFDA"]["items"][0])
        self.assertEqual(sources["rxNorm"]["items"][0]["rxcui"], "861007")
        self.assertEqual(sources["chembl"], {"source": "ChEMBL", "items": [], "total": 0, "note": "unavailable"})

    def test_provider_raising_yields_empty_block(self) -> None:
        context = bundled_context(_route)

        async def explode(drug: str, limit: int = 5):
            raise RuntimeError("molecule index crashed")

        context.external.chembl.search = explode  # type: ignore[method-assign]
        client = TestClient(make_app(context))

        response = client.get("/api/external/combined-search/metformin")

        self.assertEqual(response.status_code, 200)
        sources = response.json()["sources"]
        self.assertEqual(sources["chembl"], {"source": "ChEMBL", "items": [], "total": 0, "note": "unavailable"})
        self.assertEqual(sources["openFDA"]["total"], 1)
        self.assertEqual(sources["rxNorm"]["items"][0]["rxcui"], "861007")

    def test_apis_parameter_selects_providers(self) -> None:
        upstream = RecordingUpstream(_route)
        client = TestClient(make_app(bundled_context(upstream)))

        body = client.get("/api/external/combined-search/metformin", params={"apis": "rxnorm"}).json()

        self.assertEqual(list(body["sources"]), ["rxNorm"])
        self.assertEqual(upstream.hosts(), ["rxnav.nlm.nih.gov"])

    def test_single_provider_routes_never_fail(self) -> None:
        client = TestClient(make_app(bundled_context(timeout_everything)))

        for path in (
            "/api/external/openfda/drug-labels/metformin",
            "/api/external/openfda/adverse-events/metformin",
            "/api/external/rxnorm/search/metformin",
            "/api/external/rxnorm/interactions/861007",
            "/api/external/chembl/search/metformin",
            "/api/external/chembl/targets/CHEMBL1431",
        ):
            response = client.get(path)
            self.assertEqual(response.status_code, 200, path)
            self.assertEqual(response.json()["total"], 0, path)
            self.assertEqual(response.json()["note"], "unavailable", path)

    def test_health_lists_base_urls(self) -> None:
        body = TestClient(make_app(bundled_context())).get("/api/external/health").json()
        self.assertEqual(body["apis"]["rxNorm"], "https://rxnav.nlm.nih.gov/REST")


if __name__ == "__main__":
    unittest.main()
