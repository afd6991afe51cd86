"""Tests for all API endpoints."""
from urllib.parse import quote

import pytest


class TestCreateStringEndpoint:
    """Tests for POST /strings endpoint."""

    def test_create_string_success(self, client):
        response = client.post("/strings", json={"value": "Hello World"})
        assert response.status_code == 201
        data = response.json()
        assert data["value"] == "Hello World"
        assert set(data) == {"id", "value", "properties", "created_at"}
        assert data["properties"]["word_count"] == 2
        assert data["properties"]["sha256_hash"] == data["id"]

    def test_create_duplicate_conflict(self, client):
        client.post("/strings", json={"value": "Test String"})
        response = client.post("/strings", json={"value": "Test String"})
        assert response.status_code == 409
        assert "error" in response.json()

    @pytest.mark.parametrize("body", [{}, {"value": None}, {"value": ""}])
    def test_create_missing_value(self, client, body):
        response = client.post("/strings", json=body)
        assert response.status_code == 400

    def test_create_wrong_type(self, client):
        response = client.post("/strings", json={"value": 123})
        assert response.status_code == 422

    def test_create_invalid_json_body(self, client):
        response = client.post(
            "/strings",
            content=b'{"value": "oops"',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400


class TestGetStringEndpoint:
    def test_get_string_success(self, client):
        created = client.post("/strings", json={"value": "test string"}).json()
        response = client.get("/strings/test string")
        assert response.status_code == 200
        assert response.json() == created

    def test_get_string_by_id(self, client):
        created = client.post("/strings", json={"value": "lookup"}).json()
        response = client.get(f"/strings/{created['id']}")
        assert response.status_code == 200
        assert response.json()["value"] == "lookup"

    def test_get_string_not_found(self, client):
        response = client.get("/strings/nonexistent_value")
        assert response.status_code == 404
        assert "exist" in response.json()["error"]


class TestGetAllStringsEndpoint:
    @pytest.fixture(autouse=True)
    def seed(self, client):
        for v in ["hello", "racecar", "hello world", "a"]:
            client.post("/strings", json={"value": v})

    def test_get_all_strings(self, client):
        data = client.get("/strings").json()
        assert data["count"] == 4
        assert [d["value"] for d in data["data"]] == ["hello", "racecar", "hello world", "a"]
        assert data["filters_applied"] == {}

    def test_filter_by_palindrome(self, client):
        data = client.get("/strings?is_palindrome=true").json()
        assert data["count"] == 2
        assert data["filters_applied"] == {"is_palindrome": True}

    def test_filter_by_length(self, client):
        data = client.get("/strings?min_length=5&max_length=7").json()
        assert data["count"] == 2
        assert data["filters_applied"] == {"min_length": 5, "max_length": 7}

    def test_filter_by_word_count(self, client):
        assert client.get("/strings?word_count=1").json()["count"] == 3

    def test_filter_by_contains_character(self, client):
        assert client.get("/strings?contains_character=A").json()["count"] == 2

    def test_min_greater_than_max_is_empty(self, client):
        response = client.get("/strings?min_length=10&max_length=5")
        assert response.status_code == 200
        assert response.json()["count"] == 0

    @pytest.mark.parametrize(
        "query",
        [
            "is_palindrome=yes",
            "min_length=-1",
            "max_length=abc",
            "word_count=",
            "contains_character=abc",
        ],
    )
    def test_invalid_parameters(self, client, query):
        response = client.get(f"/strings?{query}")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid query parameter values or types"


class TestFilterByNaturalLanguageEndpoint:
    @pytest.fixture(autouse=True)
    def seed(self, client):
        for v in ["a", "racecar", "hello world", "level"]:
            client.post("/strings", json={"value": v})

    def _get(self, client, query):
        return client.get(f"/strings/filter-by-natural-language?query={quote(query)}")

    def test_single_word_palindromes(self, client):
        response = self._get(client, "single word palindromes")
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert data["interpreted_query"] == {
            "original": "single word palindromes",
            "parsed_filters": {"is_palindrome": True, "word_count": 1},
        }

    def test_strings_longer_than(self, client):
        data = self._get(client, "strings longer than 10 characters").json()
        assert data["count"] == 1
        assert data["interpreted_query"]["parsed_filters"] == {"min_length": 11}

    def test_strings_containing_letter(self, client):
        assert self._get(client, "strings containing the letter a").json()["count"] == 2

    def test_first_vowel(self, client):
        assert self._get(client, "strings that contain the first vowel").json()["count"] == 2

    def test_missing_query(self, client):
        response = client.get("/strings/filter-by-natural-language")
        assert response.status_code == 400

    def test_unparseable_query(self, client):
        response = self._get(client, "gibberish with no recognizable pattern")
        assert response.status_code == 400
        assert response.json()["error"] == "Unable to parse natural language query"

    def test_conflicting_query(self, client):
        response = self._get(client, "longer than 5 and shorter than 10")
        assert response.status_code == 422


class TestDeleteStringEndpoint:
    def test_delete_string_success(self, client):
        client.post("/strings", json={"value": "to delete"})
        response = client.delete("/strings/to delete")
        assert response.status_code == 204
        assert response.text == ""
        assert client.get("/strings/to delete").status_code == 404

    def test_delete_nonexistent_string(self, client):
        assert client.delete("/strings/nonexistent_value").status_code == 404

    def test_delete_reduces_count(self, client):
        client.post("/strings", json={"value": "string1"})
        client.post("/strings", json={"value": "string2"})
        client.delete("/strings/string2")
        data = client.get("/strings").json()
        assert data["count"] == 1
        assert data["data"][0]["value"] == "string1"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_apps_do_not_share_stores(client):
    from fastapi.testclient import TestClient
    from string_analyzer.main import create_app

    client.post("/strings", json={"value": "isolated"})
    with TestClient(create_app()) as other:
        assert other.get("/strings").json()["count"] == 0


def test_huge_min_length_matches_nothing(client):
    client.post("/strings", json={"value": "hello"})
    response = client.get("/strings?min_length=" + "9" * 400)
    assert response.status_code == 200
    assert response.json()["count"] == 0


def test_oversized_number_in_query_is_a_parse_error(client):
    response = client.get("/strings/filter-by-natural-language", params={"query": "longer than " + "1" * 5000})
    assert response.status_code == 400


def test_unknown_path_uses_error_body(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_disallowed_method_uses_error_body(client):
    response = client.put("/strings")
    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}


def test_shutdown_discards_store():
    from fastapi.testclient import TestClient
    from string_analyzer.main import create_app
    from string_analyzer.store import EntryStore

    store = EntryStore()
    with TestClient(create_app(store)) as c:
        c.post("/strings", json={"value": "short lived"})
        assert len(store) == 1
    assert len(store) == 0
