"""외부 API 클라이언트 테스트 (httpx.MockTransport)"""

import httpx
import pytest

from adhddb.ingest import (
    ClinicalTrialsGovClient,
    DrugSourceMapping,
    OpenFDAClient,
    RxNavClient,
    get_mapping,
    select_mappings,
)


def make_client(client_cls, handler, **kwargs):
    client = client_cls(transport=httpx.MockTransport(handler), request_delay=0, **kwargs)
    client.retry_delay = 0
    return client


# =============================================================================
# BaseAPIClient 재시도 정책
# =============================================================================

class TestRetryPolicy:
    @pytest.mark.asyncio
    async def test_not_found_returns_empty(self):
        async with make_client(OpenFDAClient, lambda r: httpx.Response(404)) as fda:
            result = await fda.search_drug_labels("nothing")
            assert result["results"] == []
            assert await fda.get_label_by_application_number("NDA000000") is None
            assert await fda.get_total_report_count("nothing") == 0

    @pytest.mark.asyncio
    async def test_rate_limit_then_success(self):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                return httpx.Response(429, headers={"Retry-After": "0"})
            return httpx.Response(200, json={"meta": {"results": {"total": 7}}, "results": []})

        async with make_client(OpenFDAClient, handler) as fda:
            assert await fda.get_total_report_count("methylphenidate") == 7
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_server_error_retried_then_raised(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        async with make_client(OpenFDAClient, handler) as fda:
            with pytest.raises(httpx.HTTPStatusError):
                await fda.search_drug_labels("methylphenidate")
        assert len(calls) == fda.max_retries

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(400)

        async with make_client(OpenFDAClient, handler) as fda:
            with pytest.raises(httpx.HTTPStatusError):
                await fda.search_drug_labels("methylphenidate")
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_transport_error_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) < 2:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={"studies": [], "totalCount": 0})

        async with make_client(ClinicalTrialsGovClient, handler) as ctgov:
            data = await ctgov.search_studies(intervention="guanfacine")
        assert data["totalCount"] == 0
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_requires_context_manager(self):
        fda = OpenFDAClient()
        with pytest.raises(RuntimeError):
            await fda.search_drug_labels("methylphenidate")


# =============================================================================
# OpenFDA
# =============================================================================

class TestOpenFDAClient:
    @pytest.mark.asyncio
    async def test_label_search_query(self):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json={"results": [{"id": "x"}]})

        async with make_client(OpenFDAClient, handler, api_key="secret") as fda:
            result = await fda.search_drug_labels("atomoxetine hydrochloride", limit=5)

        assert result["results"] == [{"id": "x"}]
        assert 'openfda.generic_name:"atomoxetine hydrochloride"' in seen["search"]
        assert seen["limit"] == "5"
        assert seen["api_key"] == "secret"

    @pytest.mark.asyncio
    async def test_serious_filter(self):
        searches = []

        def handler(request):
            searches.append(request.url.params["search"])
            return httpx.Response(200, json={"meta": {"results": {"total": 1}}})

        async with make_client(OpenFDAClient, handler) as fda:
            await fda.get_total_report_count("guanfacine", serious=True)
            await fda.get_total_report_count("guanfacine", serious=False)

        assert searches[0].endswith("AND serious:1")
        assert searches[1].endswith("AND serious:2")

    @pytest.mark.asyncio
    async def test_count_results(self):
        def handler(request):
            assert request.url.params["count"] == "patient.patientsex"
            return httpx.Response(200, json={"results": [{"term": 1, "count": 3}]})

        async with make_client(OpenFDAClient, handler) as fda:
            assert await fda.get_sex_counts("clonidine") == [{"term": 1, "count": 3}]


# =============================================================================
# RxNav
# =============================================================================

class TestRxNavClient:
    @pytest.mark.asyncio
    async def test_find_rxcui(self):
        def handler(request):
            assert request.url.params["search"] == "2"
            return httpx.Response(200, json={"idGroup": {"rxnormId": ["6901"]}})

        async with make_client(RxNavClient, handler) as rxnav:
            assert await rxnav.find_rxcui_by_string("methylphenidate") == ["6901"]

    @pytest.mark.asyncio
    async def test_get_all_related_skips_empty_groups(self):
        payload = {"allRelatedGroup": {"conceptGroup": [
            {"tty": "IN", "conceptProperties": [{"rxcui": "6901", "name": "methylphenidate"}]},
            {"tty": "BPCK"},
        ]}}

        async with make_client(RxNavClient, lambda r: httpx.Response(200, json=payload)) as rxnav:
            related = await rxnav.get_all_related("6901")
        assert list(related) == ["IN"]

    @pytest.mark.asyncio
    async def test_drug_info_rxcui_is_ingredient(self):
        def handler(request):
            path = request.url.path
            if path.endswith("/rxcui.json"):
                return httpx.Response(200, json={"idGroup": {"rxnormId": ["6901"]}})
            if path.endswith("/allProperties.json"):
                return httpx.Response(200, json={"propConceptGroup": {"propConcept": [
                    {"propName": "TTY", "propValue": "IN"},
                    {"propName": "RxNorm Name", "propValue": "methylphenidate"},
                ]}})
            if request.url.params.get("tty") == "IN":
                return httpx.Response(200, json={"relatedGroup": {"conceptGroup": []}})
            return httpx.Response(200, json={"relatedGroup": {"conceptGroup": [
                {"conceptProperties": [{"rxcui": "1", "name": request.url.params["tty"]}]},
            ]}})

        async with make_client(RxNavClient, handler) as rxnav:
            info = await rxnav.get_drug_info("methylphenidate")

        assert info["ingredient"] == {"rxcui": "6901", "name": "methylphenidate", "tty": "IN"}
        assert info["brand_names"][0]["name"] == "BN"
        assert info["clinical_drugs"][0]["name"] == "SCD SBD"

    @pytest.mark.asyncio
    async def test_drug_info_unknown(self):
        async with make_client(RxNavClient, lambda r: httpx.Response(200, json={"idGroup": {}})) as rxnav:
            info = await rxnav.get_drug_info("nothing")
        assert info["ingredient"] is None
        assert info["rxcuis"] == []


# =============================================================================
# ClinicalTrials.gov
# =============================================================================

class TestClinicalTrialsGovClient:
    @pytest.mark.asyncio
    async def test_query_building(self):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json={"studies": []})

        async with make_client(ClinicalTrialsGovClient, handler) as ctgov:
            await ctgov.search_studies(
                condition="ADHD", intervention="viloxazine", statuses=["RECRUITING", "COMPLETED"],
            )

        assert seen["query.term"] == "AREA[Condition]ADHD AND AREA[InterventionName]viloxazine"
        assert seen["filter.overallStatus"] == "RECRUITING,COMPLETED"
        assert "filter.phase" not in seen

    @pytest.mark.asyncio
    async def test_pagination(self):
        pages = {
            None: {"studies": [{"n": 1}, {"n": 2}], "nextPageToken": "p2"},
            "p2": {"studies": [{"n": 3}]},
        }

        def handler(request):
            return httpx.Response(200, json=pages[request.url.params.get("pageToken")])

        async with make_client(ClinicalTrialsGovClient, handler) as ctgov:
            studies = await ctgov.get_adhd_trials_for_drug("atomoxetine", limit=10)
        assert [s["n"] for s in studies] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_pagination_respects_limit(self):
        def handler(request):
            size = int(request.url.params["pageSize"])
            return httpx.Response(200, json={
                "studies": [{"n": i} for i in range(size)], "nextPageToken": "more",
            })

        async with make_client(ClinicalTrialsGovClient, handler) as ctgov:
            studies = await ctgov.get_adhd_trials_for_drug("atomoxetine", limit=25)
        assert len(studies) == 25


# =============================================================================
# 매핑
# =============================================================================

class TestMappings:
    def test_get_mapping(self):
        assert get_mapping("guanfacine").generic_name == "guanfacine hydrochloride"
        assert get_mapping("aspirin") is None

    def test_select_all(self):
        assert len(select_mappings()) == 7

    def test_select_unknown(self):
        with pytest.raises(KeyError, match="aspirin"):
            select_mappings(["methylphenidate", "aspirin"])

    def test_primary_trial_term(self):
        assert get_mapping("viloxazine").trial_search_terms[0] == "viloxazine"

    def test_trial_terms_default_to_ingredient(self):
        mapping = DrugSourceMapping(drug_id="x", generic_name="x hcl", ingredient_name="x")
        assert mapping.trial_search_terms == ("x",)
