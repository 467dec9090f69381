import json
import sys
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from meta_marketing_mcp.core.graph_client import (
    GraphRequestError,
    _normalize_request_params,
    _sanitize_response_payload,
    _sanitize_url,
    make_api_request,
    response_id,
)

BASE_URL = "https://graph.facebook.com/v22.0"


def test_sanitize_url_removes_access_token_and_keeps_other_params():
    raw = (
        "https://graph.facebook.com/v22.0/act_123/campaigns"
        "?fields=id%2Cname&access_token=secret-token&limit=10"
    )
    sanitized = _sanitize_url(raw)

    assert "access_token=" not in sanitized
    assert "fields=id%2Cname" in sanitized
    assert "limit=10" in sanitized


def test_sanitize_response_payload_redacts_nested_paging_urls():
    payload = {
        "data": [{"id": "1"}],
        "paging": {"next": "https://graph.facebook.com/v22.0/act_123/campaigns?access_token=secret&after=abc"},
    }
    sanitized = _sanitize_response_payload(payload)

    assert "access_token=" not in sanitized["paging"]["next"]
    assert "after=abc" in sanitized["paging"]["next"]


def test_request_params_encode_objects_booleans_and_token():
    params = _normalize_request_params(
        {"targeting": {"age_min": 18}, "effective_status": ["PAUSED"], "is_skadnetwork_attribution": True, "bid_amount": None},
        "token",
    )

    assert json.loads(params["targeting"]) == {"age_min": 18}
    assert params["effective_status"] == '["PAUSED"]'
    assert params["is_skadnetwork_attribution"] == "true"
    assert "bid_amount" not in params
    assert params["access_token"] == "token"


def test_response_id_requires_id():
    assert response_id({"id": 123}) == "123"
    with pytest.raises(GraphRequestError):
        response_id({"success": True})


class _FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self.headers = {}
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    def json(self):
        if self._body is None:
            raise json.JSONDecodeError("Expecting value", self.text, 0)
        return self._body


class _FakeClient:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return None

    async def get(self, url, params, headers):
        self.calls.append(("GET", url, params))
        if self.error:
            raise self.error
        return self.response

    async def post(self, url, data, headers):
        self.calls.append(("POST", url, data))
        if self.error:
            raise self.error
        return self.response


@pytest.mark.asyncio
async def test_get_sends_query_params_and_returns_json():
    client = _FakeClient(_FakeResponse(body={"id": "1", "name": "Campaign"}))
    with patch("meta_marketing_mcp.core.graph_client.httpx.AsyncClient", return_value=client):
        payload = await make_api_request(BASE_URL, "1", "token", {"fields": "id,name"})

    assert payload == {"id": "1", "name": "Campaign"}
    method, url, params = client.calls[0]
    assert method == "GET"
    assert url == f"{BASE_URL}/1"
    assert params == {"fields": "id,name", "access_token": "token"}


@pytest.mark.asyncio
async def test_post_sends_form_body():
    client = _FakeClient(_FakeResponse(body={"id": "9"}))
    with patch("meta_marketing_mcp.core.graph_client.httpx.AsyncClient", return_value=client):
        await make_api_request(BASE_URL, "act_1/campaigns", "token", {"special_ad_categories": []}, method="POST")

    method, _, data = client.calls[0]
    assert method == "POST"
    assert data["special_ad_categories"] == "[]"


@pytest.mark.asyncio
async def test_remote_error_object_raises_with_payload_and_status():
    body = {"error": {"message": "(#100) Invalid parameter", "code": 100, "error_subcode": 33}}
    client = _FakeClient(_FakeResponse(status_code=400, body=body))
    with patch("meta_marketing_mcp.core.graph_client.httpx.AsyncClient", return_value=client):
        with pytest.raises(GraphRequestError) as caught:
            await make_api_request(BASE_URL, "1", "token")

    assert str(caught.value) == "(#100) Invalid parameter"
    assert caught.value.error_payload["code"] == 100
    assert caught.value.http_status == 400


@pytest.mark.asyncio
async def test_error_key_in_success_body_still_raises():
    client = _FakeClient(_FakeResponse(status_code=200, body={"error": {"message": "bad", "code": 1}}))
    with patch("meta_marketing_mcp.core.graph_client.httpx.AsyncClient", return_value=client):
        with pytest.raises(GraphRequestError):
            await make_api_request(BASE_URL, "1", "token")


@pytest.mark.asyncio
async def test_non_json_error_status_builds_synthetic_message():
    client = _FakeClient(_FakeResponse(status_code=503, body=None, text="<html>down</html>"))
    with patch("meta_marketing_mcp.core.graph_client.httpx.AsyncClient", return_value=client):
        with pytest.raises(GraphRequestError) as caught:
            await make_api_request(BASE_URL, "1", "token")

    assert str(caught.value) == "API request failed with status 503"
    assert caught.value.http_status == 503


@pytest.mark.asyncio
async def test_non_json_success_is_malformed_response():
    client = _FakeClient(_FakeResponse(status_code=200, body=None, text="ok"))
    with patch("meta_marketing_mcp.core.graph_client.httpx.AsyncClient", return_value=client):
        with pytest.raises(GraphRequestError, match="Malformed response"):
            await make_api_request(BASE_URL, "1", "token")


@pytest.mark.asyncio
async def test_transport_failure_becomes_network_error():
    client = _FakeClient(error=httpx.ConnectError("Connection refused"))
    with patch("meta_marketing_mcp.core.graph_client.httpx.AsyncClient", return_value=client):
        with pytest.raises(GraphRequestError, match="Network error"):
            await make_api_request(BASE_URL, "1", "token")
