import json

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from wwfm.config import Settings
from wwfm.services.backend_factory import build_search_backend
from wwfm.services.postgrest_backend import PostgrestSearchBackend
from wwfm.services.search_backend import CollaboratorUnavailable
from wwfm.services.sql_backend import SqlSearchBackend

BASE_URL = "https://wwfm.supabase.co/rest/v1"


def _postgrest(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return PostgrestSearchBackend(BASE_URL, "anon-key", client=client), client


class TestPostgrestBackend:
    async def test_search_solutions_request_and_mapping(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[
                {"id": 7, "title": "Vitamin D", "solution_category": "supplements_vitamins", "match_score": "0.9"},
            ])

        backend, client = _postgrest(handler)
        hits = await backend.search_solutions("vitamin d")
        await client.aclose()

        assert hits == [{"id": "7", "title": "Vitamin D", "category": "supplements_vitamins", "match_score": 0.9}]
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/rest/v1/rpc/search_solutions_fuzzy"
        assert json.loads(seen[0].content) == {"search_term": "vitamin d"}

    @pytest.mark.parametrize("method, function, argument", [
        ("match_category_fuzzy", "check_keyword_match_fuzzy", "search_term"),
        ("match_category_exact", "check_keyword_match", "search_term"),
        ("match_category_patterns", "match_category_patterns", "input_text"),
        ("match_category_partial", "match_category_partial", "input_text"),
        ("search_keywords_as_solutions", "search_keywords_as_solutions", "search_term"),
        ("search_keyword_suggestions", "search_keywords_for_autocomplete", "search_term"),
    ])
    async def test_rpc_function_names(self, method, function, argument):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        backend, client = _postgrest(handler)
        await getattr(backend, method)("calm")
        await client.aclose()

        assert seen[0].url.path == f"/rest/v1/rpc/{function}"
        assert json.loads(seen[0].content) == {argument: "calm"}

    async def test_fuzzy_returns_best_row_or_none(self):
        rows = [{"category": "apps_software", "match_type": "exact"}, {"category": "sleep", "match_type": "fuzzy"}]
        backend, client = _postgrest(lambda request: httpx.Response(200, json=rows))
        assert await backend.match_category_fuzzy("calm") == {"category": "apps_software", "match_type": "exact"}
        await client.aclose()

        backend, client = _postgrest(lambda request: httpx.Response(200, json=[]))
        assert await backend.match_category_fuzzy("calm") is None
        await client.aclose()

    async def test_keyword_rows_mapped(self):
        backend, client = _postgrest(lambda request: httpx.Response(200, json=[
            {"keyword": "calm app", "category": "apps_software", "match_score": 0.8},
        ]))
        hits = await backend.search_keyword_suggestions("calm")
        await client.aclose()
        assert hits == [{"keyword": "calm app", "category": "apps_software", "match_score": 0.8}]

    @pytest.mark.parametrize("response", [
        httpx.Response(500, json={"message": "internal error"}),
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(200, json={"message": "not a list"}),
    ])
    async def test_bad_responses_raise_collaborator_unavailable(self, response):
        backend, client = _postgrest(lambda request: response)
        with pytest.raises(CollaboratorUnavailable) as exc_info:
            await backend.match_category_exact("calm")
        await client.aclose()
        assert exc_info.value.operation == "match_category_exact"

    async def test_network_error_raises_collaborator_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        backend, client = _postgrest(handler)
        with pytest.raises(CollaboratorUnavailable):
            await backend.search_solutions("calm")
        await client.aclose()

    async def test_owned_client_configuration(self):
        backend = PostgrestSearchBackend("https://wwfm.supabase.co/", "anon-key", timeout=3.0)
        assert str(backend.client.base_url) == "https://wwfm.supabase.co/rest/v1/"
        assert backend.client.headers["apikey"] == "anon-key"
        assert backend.client.headers["Authorization"] == "Bearer anon-key"
        await backend.close()
        assert backend.client.is_closed


class FakeResult:
    def __init__(self, rows):
        self.rows = rows

    def mappings(self):
        return self

    def all(self):
        return self.rows


class FakeSession:
    def __init__(self, rows):
        self.rows = rows
        self.executed = []
        self.closed = False

    def execute(self, statement, params):
        self.executed.append((str(statement), params))
        return FakeResult(self.rows)

    def close(self):
        self.closed = True


class TestSqlBackend:
    async def test_calls_function_with_bound_argument(self):
        session = FakeSession([{"category": "sleep"}, {"category": "habits_routines"}])
        backend = SqlSearchBackend(lambda: session)

        hits = await backend.match_category_patterns("bedtime routine")

        assert hits == [{"category": "sleep"}, {"category": "habits_routines"}]
        assert session.executed == [
            ("SELECT * FROM match_category_patterns(:input_text)", {"input_text": "bedtime routine"}),
        ]
        assert session.closed

    async def test_database_error_raises_collaborator_unavailable(self):
        # SQLite has none of the search functions
        engine = create_engine("sqlite://")
        backend = SqlSearchBackend(sessionmaker(bind=engine))

        with pytest.raises(CollaboratorUnavailable) as exc_info:
            await backend.search_solutions("calm")
        assert exc_info.value.operation == "search_solutions"
        engine.dispose()


class TestBackendFactory:
    def test_postgrest_requires_credentials(self):
        settings = Settings(search_backend="postgrest", supabase_url=None, supabase_key=None)
        with pytest.raises(ValueError):
            build_search_backend(settings)

    async def test_postgrest_backend_built(self):
        settings = Settings(
            search_backend="postgrest",
            supabase_url="https://wwfm.supabase.co",
            supabase_key="anon-key",
            backend_timeout_seconds=2.5,
        )
        backend = build_search_backend(settings)
        assert isinstance(backend, PostgrestSearchBackend)
        assert backend.client.timeout.read == 2.5
        await backend.close()

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError, match="Unknown search backend"):
            build_search_backend(Settings(search_backend="graphql"))


class TestRowMapping:
    async def test_missing_scores_stay_none(self):
        backend, client = _postgrest(lambda request: httpx.Response(200, json=[
            {"id": 3, "title": "Calm", "solution_category": "apps_software"},
            {"id": 4, "title": "Calm Premium", "solution_category": "apps_software", "match_score": 0},
        ]))
        hits = await backend.search_solutions("calm")
        await client.aclose()

        assert [hit["match_score"] for hit in hits] == [None, 0.0]

    async def test_missing_keyword_score_stays_none(self):
        backend, client = _postgrest(lambda request: httpx.Response(200, json=[
            {"keyword": "calm app", "category": "apps_software"},
        ]))
        hits = await backend.search_keyword_suggestions("calm")
        await client.aclose()

        assert hits[0]["match_score"] is None
