import json

import pytest
import requests

from app.services.cms_service import SanityClient, CMSError


class FakeResponse:
    def __init__(self, body=None, status_code=200, invalid_json=False):
        self.body = body
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self.body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.requests.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def make_client(session, **kwargs):
    return SanityClient(
        project_id="abc123",
        dataset="production",
        api_version="2024-01-24",
        session=session,
        **kwargs,
    )


def test_query_url():
    assert make_client(FakeSession()).query_url == (
        "https://abc123.apicdn.sanity.io/v2024-01-24/data/query/production"
    )
    assert make_client(FakeSession(), use_cdn=False).query_url == (
        "https://abc123.api.sanity.io/v2024-01-24/data/query/production"
    )


def test_params_are_bound_not_interpolated():
    session = FakeSession(FakeResponse({"result": None}))
    cms = make_client(session, token="sk-test")
    code = 'X"] || true || ["'
    cms.fetch('*[_type == "coupon" && code == $code][0]', {"code": code})

    sent = session.requests[0]
    assert sent["params"]["query"] == '*[_type == "coupon" && code == $code][0]'
    assert json.loads(sent["params"]["$code"]) == code
    assert sent["headers"] == {"Authorization": "Bearer sk-test"}
    assert sent["timeout"] == 10.0


def test_fetch_returns_result():
    session = FakeSession(FakeResponse({"ms": 3, "result": [{"planId": "a"}]}))
    assert make_client(session).fetch('*[_type == "pricing"]') == [{"planId": "a"}]
    assert session.requests[0]["headers"] == {}


@pytest.mark.parametrize("session", [
    FakeSession(error=requests.ConnectionError("refused")),
    FakeSession(FakeResponse({"error": "bad query"}, status_code=400)),
    FakeSession(FakeResponse(invalid_json=True)),
    FakeSession(FakeResponse({"ms": 3})),
])
def test_fetch_failures_raise_cms_error(session):
    with pytest.raises(CMSError):
        make_client(session).fetch('*[_type == "pricing"]')


def test_image_url_variants():
    cms = make_client(FakeSession())
    expected = "https://cdn.sanity.io/images/abc123/production/f00d-640x480.jpg"
    assert cms.image_url("image-f00d-640x480-jpg") == expected
    assert cms.image_url({"asset": {"_ref": "image-f00d-640x480-jpg"}}) == expected
    assert cms.image_url({"asset": {"_id": "image-f00d-640x480-jpg", "url": "https://x/y.jpg"}}) == (
        "https://x/y.jpg"
    )
    assert cms.image_url(None) is None
    assert cms.image_url("file-f00d-pdf") is None
