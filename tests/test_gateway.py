"""
Tests for the gateway building blocks.
"""

import asyncio

import pytest
from starlette.requests import Request

from mai_gateway.gateway.body import collect_body, parse_payload
from mai_gateway.gateway.cors import access_control_headers, classify_origin, is_trusted_origin
from mai_gateway.gateway.errors import InvalidJSONError, PayloadTooLargeError
from mai_gateway.gateway.models import AccessDecision, GatewayResponse, RouteKind
from mai_gateway.gateway.responses import render
from mai_gateway.gateway.routing import ROUTE_TABLE, needs_body, resolve_route


def make_request(chunks):
    """Build a Starlette request whose body arrives in the given chunks."""
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]

    async def receive():
        return messages.pop(0)

    scope = {"type": "http", "method": "POST", "path": "/plans", "headers": []}
    return Request(scope, receive)


class TestOriginClassifier:
    """Tests for origin classification."""

    @pytest.mark.parametrize("origin", [
        "https://sunfirematrix.com",
        "https://a.b.sunfirematrix.com",
        "https://WWW.SunfireMatrix.COM",
        "https://agent-portal.sunfirematrix.com",
        "https://my_app.sunfirematrix.com",
        "http://localhost",
        "http://localhost:5173",
        "HTTP://LOCALHOST:3000",
        "chrome-extension://abc",
        "chrome-extension://",
    ])
    def test_trusted(self, origin):
        """Test Sunfire, localhost and extension origins are trusted."""
        assert is_trusted_origin(origin)

    @pytest.mark.parametrize("origin", [
        "https://evil.com",
        "http://sunfirematrix.com",
        "https://sunfirematrix.com.evil.com",
        "https://evilsunfirematrix.com",
        "https://evil.com/x.sunfirematrix.com",
        "https://sunfirematrix.com:8443",
        "https://localhost:5173",
        "http://localhost:",
        "http://localhost:5173/",
        "http://localhost.evil.com",
        "http://127.0.0.1:5173",
        "https://sunfirematrix.com\n",
        "Chrome-Extension://abc",
        "moz-extension://abc",
        "",
    ])
    def test_untrusted(self, origin):
        """Test anything outside the three rules is not trusted."""
        assert not is_trusted_origin(origin)

    def test_classify_trusted_echoes_exact_origin(self):
        """Test the decision keeps the origin's original casing."""
        decision = classify_origin("https://WWW.SunfireMatrix.COM")
        assert decision.allow_origin == "https://WWW.SunfireMatrix.COM"
        assert decision.vary_by_origin is True

    def test_classify_untrusted(self):
        """Test untrusted origins produce an empty decision."""
        decision = classify_origin("https://evil.com")
        assert decision == AccessDecision(allow_origin=None, vary_by_origin=False)

    def test_headers_for_trusted(self):
        """Test the full header set for a trusted origin."""
        headers = access_control_headers(classify_origin("chrome-extension://abc"))
        assert headers == {
            "Access-Control-Allow-Origin": "chrome-extension://abc",
            "Vary": "Origin",
            "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type, Authorization",
            "Access-Control-Max-Age": "86400",
        }

    def test_headers_for_untrusted(self):
        """Test untrusted origins only get the unconditional headers."""
        headers = access_control_headers(classify_origin(""))
        assert "Access-Control-Allow-Origin" not in headers
        assert "Vary" not in headers
        assert headers["Access-Control-Max-Age"] == "86400"


class TestRouteTable:
    """Tests for route resolution."""

    @pytest.mark.parametrize("method,target,kind", [
        ("OPTIONS", "/anything", RouteKind.PREFLIGHT),
        ("OPTIONS", "/plans", RouteKind.PREFLIGHT),
        ("GET", "/health", RouteKind.HEALTH),
        ("GET", "/api/health", RouteKind.HEALTH),
        ("POST", "/plans", RouteKind.PLAN_FETCH),
        ("POST", "/api/plans", RouteKind.PLAN_FETCH),
        ("POST", "/ai-recommend", RouteKind.SCRIPT_GENERATE),
        ("POST", "/api/recommend", RouteKind.SCRIPT_GENERATE),
        ("GET", "/plans", RouteKind.NOT_FOUND),
        ("POST", "/health", RouteKind.NOT_FOUND),
        ("POST", "/Plans", RouteKind.NOT_FOUND),
        ("POST", "/plans/", RouteKind.NOT_FOUND),
        ("POST", "/plans?x=1", RouteKind.NOT_FOUND),
        ("DELETE", "/plans", RouteKind.NOT_FOUND),
    ])
    def test_resolve(self, method, target, kind):
        """Test precedence and exact matching."""
        assert resolve_route(method, target) is kind

    def test_table_only_uses_get_and_post(self):
        """Test the table never shadows the OPTIONS preflight."""
        assert {method for method, _ in ROUTE_TABLE} == {"GET", "POST"}

    def test_only_post_needs_body(self):
        """Test body parsing is limited to POST."""
        assert needs_body("POST")
        assert not needs_body("GET")
        assert not needs_body("OPTIONS")


class TestBody:
    """Tests for body collection and parsing."""

    def test_collects_all_chunks(self):
        """Test chunks are joined once the stream ends."""
        request = make_request([b'{"zip":', b' "33101"', b"}"])
        assert asyncio.run(collect_body(request)) == b'{"zip": "33101"}'

    def test_limit_exceeded(self):
        """Test the size guard trips as soon as the limit is crossed."""
        request = make_request([b"x" * 10, b"y" * 10])
        with pytest.raises(PayloadTooLargeError):
            asyncio.run(collect_body(request, max_bytes=15))

    def test_limit_is_inclusive(self):
        """Test a body exactly at the limit is accepted."""
        request = make_request([b"x" * 10, b"y" * 5])
        assert len(asyncio.run(collect_body(request, max_bytes=15))) == 15

    def test_empty_body_is_empty_object(self):
        """Test an empty body parses as {}."""
        assert parse_payload(b"") == {}

    @pytest.mark.parametrize("raw,expected", [
        (b'{"a": 1}', {"a": 1}),
        (b"[1, 2]", [1, 2]),
        (b'"text"', "text"),
        (b"null", None),
        (b"  {}  ", {}),
    ])
    def test_valid_json(self, raw, expected):
        """Test any JSON value is accepted."""
        assert parse_payload(raw) == expected

    @pytest.mark.parametrize("raw", [
        b"not-json{",
        b"   ",
        b'{"a": NaN}',
        b"Infinity",
        b"\xff\xfe{}",
        b"{'a': 1}",
        pytest.param(b"[" * 200000, id="unbalanced-deep-nesting"),
        pytest.param(b"[" * 200000 + b"]" * 200000, id="balanced-deep-nesting"),
    ])
    def test_invalid_json(self, raw):
        """Test malformed bodies raise InvalidJSONError."""
        with pytest.raises(InvalidJSONError) as exc_info:
            parse_payload(raw)
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid JSON"


class TestResponseWriter:
    """Tests for response rendering."""

    def test_json_body(self):
        """Test compact JSON with matching Content-Length."""
        response = render(GatewayResponse(status_code=200, body={"status": "ok"}))
        assert response.status_code == 200
        assert response.body == b'{"status":"ok"}'
        assert response.headers["content-type"] == "application/json"
        assert response.headers["content-length"] == "15"

    def test_no_content(self):
        """Test 204 has no body and no framing headers."""
        response = render(GatewayResponse(status_code=204))
        assert response.body == b""
        assert "content-type" not in response.headers
        assert "content-length" not in response.headers

    def test_non_ascii_length_in_bytes(self):
        """Test Content-Length counts encoded bytes."""
        response = render(GatewayResponse(status_code=200, body={"name": "Añejo"}))
        assert response.headers["content-length"] == str(len(response.body))
        assert len(response.body) > len('{"name":"Añejo"}')
