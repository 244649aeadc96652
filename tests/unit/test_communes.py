import asyncio

import httpx

from immo_assistant.services.communes import (
    CommuneDirectory,
    PostalCodeResolver,
    match_postal_code,
    parse_communes,
)


def resolver_for(handler) -> PostalCodeResolver:
    directory = CommuneDirectory("https://geo.test/communes", transport=httpx.MockTransport(handler))
    return PostalCodeResolver(directory)


def test_match_prefers_first_candidate_in_directory_order(communes_payload):
    communes = parse_communes(communes_payload)

    assert match_postal_code("Bordeaux", communes) == "33000"
    assert match_postal_code("angers", communes) == "49000"
    assert match_postal_code("saint etienne", communes) is None
    assert match_postal_code("Saint-Etienne", communes) == "42000"


def test_match_accepts_containment_both_ways(communes_payload):
    communes = parse_communes(communes_payload)

    assert match_postal_code("Bordeaux Centre", communes) == "33000"
    assert match_postal_code("Étienne", communes) == "42000"


def test_match_without_postal_codes_is_absent(communes_payload):
    assert match_postal_code("Sans Code", parse_communes(communes_payload)) is None
    assert match_postal_code("", parse_communes(communes_payload)) is None


def test_parse_skips_malformed_records(communes_payload):
    names = [commune.name for commune in parse_communes(communes_payload)]

    assert "Bordeaux" in names
    assert len(names) == 6


def test_resolver_fetches_directory_once(communes_payload):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=communes_payload)

    postal_code = asyncio.run(resolver_for(handler).resolve("Angers"))

    assert postal_code == "49000"
    assert len(requests) == 1
    assert requests[0].url.host == "geo.test"


def test_resolver_swallows_network_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    assert asyncio.run(resolver_for(handler).resolve("Angers")) is None


def test_resolver_swallows_http_error_and_bad_payload():
    def failing(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="maintenance")

    def malformed(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "unexpected"})

    def not_json(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    assert asyncio.run(resolver_for(failing).resolve("Angers")) is None
    assert asyncio.run(resolver_for(malformed).resolve("Angers")) is None
    assert asyncio.run(resolver_for(not_json).resolve("Angers")) is None


def test_resolver_swallows_invalid_directory_url():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.InvalidURL("Invalid non-printable ASCII character in URL")

    assert asyncio.run(resolver_for(handler).resolve("Angers")) is None
