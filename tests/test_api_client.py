"""Tests for the API client: request construction and error classification."""

from __future__ import annotations

import json
from decimal import Decimal

import httpx
import pytest

from ntropy_cli.core.api_client import (
    API_KEY_HEADER,
    APIResponse,
    ErrorKind,
    NtropyAPIError,
    extract_items,
    next_cursor,
)


def ok(payload=None, status=200):
    def handler(request: httpx.Request) -> httpx.Response:
        if payload is None:
            return httpx.Response(status)
        return httpx.Response(status, json=payload)
    return handler


# One call per public operation, used to check properties that hold for all of them
ALL_OPERATIONS = [
    ("enrich_transaction", lambda api: api.enrich_transaction({"id": "tx_1"})),
    ("enrich_batch", lambda api: api.enrich_batch([{"id": "tx_1"}])),
    ("get_batch", lambda api: api.get_batch("b_1")),
    ("get_transaction", lambda api: api.get_transaction("tx_1")),
    ("list_transactions", lambda api: api.list_transactions(limit=20)),
    ("create_account_holder", lambda api: api.create_account_holder({"id": "ah_1"})),
    ("get_account_holder", lambda api: api.get_account_holder("ah_1")),
    ("list_account_holders", lambda api: api.list_account_holders(limit=20)),
    ("delete_account_holder", lambda api: api.delete_account_holder("ah_1")),
    ("get_report", lambda api: api.get_report("ah_1", period="2024-01")),
    ("get_metrics", lambda api: api.get_metrics("ah_1")),
    ("list_labels", lambda api: api.list_labels()),
]


class TestCredentials:
    """The API key is a local precondition and is sent verbatim."""

    @pytest.mark.parametrize("name,call", ALL_OPERATIONS)
    def test_unconfigured_makes_no_request(self, name, call, empty_store, make_client, make_transport):
        """Should fail with NOT_CONFIGURED and never touch the network."""
        transport = make_transport(ok({}))
        api = make_client(empty_store, transport)

        response = call(api)

        assert not response.success
        assert response.kind is ErrorKind.NOT_CONFIGURED
        assert "config set" in response.error
        assert transport.requests == []

    def test_empty_key_counts_as_unconfigured(self, make_client, make_transport):
        """Should treat an empty stored key as missing."""
        from ntropy_cli.core.store import MemoryConfigStore

        transport = make_transport(ok({}))
        api = make_client(MemoryConfigStore({"apiKey": ""}), transport)

        assert api.list_labels().kind is ErrorKind.NOT_CONFIGURED
        assert transport.requests == []

    @pytest.mark.parametrize("name,call", ALL_OPERATIONS)
    def test_key_sent_verbatim(self, name, call, store, make_client, make_transport):
        """Should send the stored key unchanged in the X-API-KEY header."""
        transport = make_transport(ok({}))
        api = make_client(store, transport)

        call(api)

        assert len(transport.requests) == 1
        headers = transport.last.headers
        assert headers[API_KEY_HEADER] == "test-key-123"
        assert headers["Accept"] == "application/json"
        assert headers["Content-Type"] == "application/json"
        assert "Authorization" not in headers

    def test_key_read_fresh_on_each_call(self, store, make_client, make_transport):
        """Should pick up a key changed between calls."""
        transport = make_transport(ok([]))
        api = make_client(store, transport)

        api.list_labels()
        store.set("apiKey", "rotated-key")
        api.list_labels()

        assert [r.headers[API_KEY_HEADER] for r in transport.requests] == ["test-key-123", "rotated-key"]


class TestRequestConstruction:
    """Method, path, query and body per operation."""

    @pytest.mark.parametrize(
        "call,method,path",
        [
            (lambda api: api.enrich_transaction({"id": "tx_1"}), "POST", "/v3/transactions"),
            (lambda api: api.enrich_batch([]), "POST", "/v3/transactions/batch"),
            (lambda api: api.get_batch("b_1"), "GET", "/v3/transactions/batch/b_1"),
            (lambda api: api.get_transaction("tx_1"), "GET", "/v3/transactions/tx_1"),
            (lambda api: api.list_transactions(), "GET", "/v3/transactions"),
            (lambda api: api.create_account_holder({}), "POST", "/v3/account-holders"),
            (lambda api: api.get_account_holder("ah_1"), "GET", "/v3/account-holders/ah_1"),
            (lambda api: api.list_account_holders(), "GET", "/v3/account-holders"),
            (lambda api: api.delete_account_holder("ah_1"), "DELETE", "/v3/account-holders/ah_1"),
            (lambda api: api.get_report("ah_1"), "GET", "/v3/account-holders/ah_1/reports"),
            (lambda api: api.get_metrics("ah_1"), "GET", "/v3/account-holders/ah_1/metrics"),
            (lambda api: api.list_labels(), "GET", "/v3/labels"),
        ],
    )
    def test_method_and_path(self, call, method, path, store, make_client, make_transport):
        """Should use the documented method and path for each operation."""
        transport = make_transport(ok({}))
        call(make_client(store, transport))

        assert transport.last.method == method
        assert transport.last.url.host == "api.test"
        assert transport.last.url.path == path

    def test_list_limit_only(self, store, make_client, make_transport):
        """Should send only limit when no cursor is given."""
        transport = make_transport(ok([]))
        make_client(store, transport).list_transactions(limit=20)

        params = transport.last.url.params
        assert params.get_list("limit") == ["20"]
        assert "cursor" not in params
        assert "cursor" not in str(transport.last.url)

    def test_list_limit_and_cursor(self, store, make_client, make_transport):
        """Should send both limit and cursor when paging."""
        transport = make_transport(ok([]))
        make_client(store, transport).list_account_holders(limit=20, cursor="abc")

        params = transport.last.url.params
        assert params.get_list("limit") == ["20"]
        assert params.get_list("cursor") == ["abc"]

    def test_extra_params_cannot_duplicate_limit(self, store, make_client, make_transport):
        """Should let explicit limit win over extra params."""
        transport = make_transport(ok([]))
        make_client(store, transport).list_transactions(limit=5, params={"limit": 99, "status": "done"})

        params = transport.last.url.params
        assert params.get_list("limit") == ["5"]
        assert params["status"] == "done"

    def test_report_period_optional(self, store, make_client, make_transport):
        """Should add period to the report query only when given."""
        transport = make_transport(ok({}))
        api = make_client(store, transport)

        api.get_report("ah_1")
        assert "period" not in transport.last.url.params

        api.get_report("ah_1", period="2024-01")
        assert transport.last.url.params["period"] == "2024-01"

    def test_body_passed_through(self, store, make_client, make_transport, sample_transaction):
        """Should send the transaction body as given."""
        transport = make_transport(ok({}))
        make_client(store, transport).enrich_transaction(sample_transaction)

        assert transport.last_json() == sample_transaction

    def test_batch_body_wraps_transactions(self, store, make_client, make_transport, sample_transaction):
        """Should wrap batch transactions in a transactions envelope."""
        transport = make_transport(ok({"id": "batch_1"}))
        make_client(store, transport).enrich_batch([sample_transaction, sample_transaction])

        assert transport.last_json() == {"transactions": [sample_transaction, sample_transaction]}

    def test_decimal_amount_sent_as_number(self, store, make_client, make_transport):
        """Should send Decimal amounts as JSON numbers."""
        transport = make_transport(ok({}))
        make_client(store, transport).enrich_transaction({"id": "tx_1", "amount": Decimal("-4.50")})

        assert transport.last_json()["amount"] == -4.5

    def test_whole_decimal_sent_exactly(self, store, make_client, make_transport):
        """Should send whole amounts as integers with every digit kept."""
        transport = make_transport(ok({}))
        make_client(store, transport).enrich_transaction({"amount": Decimal("12345678901234567.00")})

        assert b'"amount": 12345678901234567' in transport.last.content

    def test_lossy_decimal_is_rejected(self, store, make_client, make_transport):
        """Should refuse amounts a JSON number would round, before any request."""
        transport = make_transport(ok({}))

        with pytest.raises(ValueError, match="more digits"):
            make_client(store, transport).enrich_transaction({"amount": Decimal("12345678901234567.89")})
        assert transport.requests == []

    def test_get_has_no_body(self, store, make_client, make_transport):
        """Should send GET requests without a body."""
        transport = make_transport(ok({}))
        make_client(store, transport).get_transaction("tx_1")

        assert transport.last.content == b""

    def test_ids_are_url_quoted(self, store, make_client, make_transport):
        """Should percent-encode ids in the path."""
        transport = make_transport(ok({}))
        make_client(store, transport).get_account_holder("a/b c")

        assert transport.last.url.raw_path == b"/v3/account-holders/a%2Fb%20c"


class TestResponses:
    """Decoding successful responses."""

    def test_create_echo(self, store, make_client, make_transport):
        """Should return the created resource body."""
        def echo(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            return httpx.Response(200, json={**body, "id": body["id"]})

        transport = make_transport(echo)
        response = make_client(store, transport).create_account_holder(
            {"id": "ah_1", "type": "consumer", "currency": "USD"}
        )

        assert response.success
        assert response.data["id"] == "ah_1"
        assert response.data["type"] == "consumer"
        assert response.data["currency"] == "USD"

    def test_enrich_returns_merchant(self, store, make_client, make_transport, sample_transaction, enriched_transaction):
        """Should return enrichment fields from the response."""
        transport = make_transport(ok(enriched_transaction))
        response = make_client(store, transport).enrich_transaction(sample_transaction)

        assert response.data["merchant"]["name"] == "Blue Bottle"
        assert response.unwrap() == enriched_transaction

    def test_delete_no_content(self, store, make_client, make_transport):
        """Should succeed with no data on an empty 204."""
        transport = make_transport(ok(None, status=204))
        response = make_client(store, transport).delete_account_holder("ah_1")

        assert response.success
        assert response.status_code == 204
        assert response.data is None
        assert response.unwrap() is None

    def test_repeated_get_is_identical(self, store, make_client, make_transport, enriched_transaction):
        """Should return equal data for repeated reads."""
        transport = make_transport(ok(enriched_transaction))
        api = make_client(store, transport)

        first = api.get_transaction("tx_1")
        second = api.get_transaction("tx_1")

        assert first.data == second.data
        assert json.dumps(first.data, sort_keys=True) == json.dumps(second.data, sort_keys=True)

    def test_non_json_success_body(self, store, make_client, make_transport):
        """Should wrap a non-JSON success body under raw."""
        transport = make_transport(lambda request: httpx.Response(200, text="accepted"))
        response = make_client(store, transport).list_labels()

        assert response.success
        assert response.data == {"raw": "accepted"}


class TestErrorClassification:
    """HTTP statuses and transport failures map onto ErrorKind."""

    @pytest.mark.parametrize(
        "status,kind,fragment",
        [
            (401, ErrorKind.UNAUTHENTICATED, "Authentication failed"),
            (403, ErrorKind.FORBIDDEN, "Permission denied"),
            (404, ErrorKind.NOT_FOUND, "not found"),
            (429, ErrorKind.RATE_LIMITED, "Rate limit"),
            (500, ErrorKind.SERVER_ERROR, "API Error (500)"),
            (422, ErrorKind.SERVER_ERROR, "API Error (422)"),
            (301, ErrorKind.SERVER_ERROR, "API Error (301)"),
            (304, ErrorKind.SERVER_ERROR, "API Error (304)"),
        ],
    )
    def test_status_mapping(self, status, kind, fragment, store, make_client, make_transport):
        """Should classify every non-2xx status."""
        transport = make_transport(ok({"detail": "nope"}, status=status))
        response = make_client(store, transport).get_transaction("tx_1")

        assert not response.success
        assert response.kind is kind
        assert response.status_code == status
        assert fragment in response.error
        assert len(transport.requests) == 1

    def test_server_error_uses_message_field(self, store, make_client, make_transport):
        """Should use the message field as error detail."""
        transport = make_transport(ok({"message": "amount must be a number"}, status=400))
        response = make_client(store, transport).enrich_transaction({"amount": "x"})

        assert response.error == "API Error (400): amount must be a number"

    def test_server_error_serializes_body_without_message(self, store, make_client, make_transport):
        """Should fall back to the serialized body as detail."""
        transport = make_transport(ok({"errors": [{"field": "date"}]}, status=400))
        response = make_client(store, transport).enrich_transaction({})

        assert response.error == 'API Error (400): {"errors": [{"field": "date"}]}'

    def test_server_error_plain_text_body(self, store, make_client, make_transport):
        """Should use a plain-text body as detail."""
        transport = make_transport(lambda request: httpx.Response(502, text="Bad Gateway"))
        response = make_client(store, transport).list_labels()

        assert response.kind is ErrorKind.SERVER_ERROR
        assert response.error == "API Error (502): Bad Gateway"

    def test_connection_failure_is_unreachable(self, store, make_client, make_transport):
        """Should report connection errors as UNREACHABLE."""
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        response = make_client(store, make_transport(refuse)).list_labels()

        assert not response.success
        assert response.kind is ErrorKind.UNREACHABLE
        assert response.status_code == 0
        assert "Connection refused" in response.error

    def test_timeout_is_unreachable(self, store, make_client, make_transport):
        """Should report timeouts as UNREACHABLE with the base URL."""
        def slow(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        response = make_client(store, make_transport(slow)).list_labels()

        assert response.kind is ErrorKind.UNREACHABLE
        assert response.error == "Could not reach https://api.test/v3: request timed out after 5s"

    def test_unexpected_errors_propagate(self, store, make_client, make_transport):
        """Should let unexpected exceptions escape unchanged."""
        def broken(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            make_client(store, make_transport(broken)).list_labels()

    def test_unwrap_raises_classified_error(self, store, make_client, make_transport):
        """Should raise NtropyAPIError carrying the kind and status."""
        transport = make_transport(ok({}, status=429))
        response = make_client(store, transport).list_labels()

        with pytest.raises(NtropyAPIError) as exc_info:
            response.unwrap()

        assert exc_info.value.kind is ErrorKind.RATE_LIMITED
        assert exc_info.value.status_code == 429
        assert "Rate limit" in str(exc_info.value)

    def test_unwrap_not_configured(self, empty_store, make_client, make_transport):
        """Should raise NOT_CONFIGURED from unwrap."""
        response = make_client(empty_store, make_transport(ok({}))).list_labels()

        with pytest.raises(NtropyAPIError) as exc_info:
            response.unwrap()
        assert exc_info.value.kind is ErrorKind.NOT_CONFIGURED


class TestClientLifecycle:

    def test_context_manager_closes_client(self, store, make_transport):
        """Should close the HTTP client on exit."""
        from ntropy_cli.core.api_client import APIClient

        with APIClient(store, "https://api.test/v3", transport=make_transport(ok([]))) as api:
            api.list_labels()
            assert api._client is not None
        assert api._client is None

    def test_base_url_trailing_slash(self, store, make_transport):
        """Should not double the slash after the base URL."""
        from ntropy_cli.core.api_client import APIClient

        transport = make_transport(ok([]))
        with APIClient(store, "https://api.test/v3/", transport=transport) as api:
            api.list_labels()
        assert transport.last.url.path == "/v3/labels"


class TestEnvelopeHelpers:
    """The API has returned lists in several envelopes."""

    @pytest.mark.parametrize(
        "data",
        [
            [{"id": 1}],
            {"data": [{"id": 1}]},
            {"transactions": [{"id": 1}]},
            {"items": [{"id": 1}]},
        ],
    )
    def test_extract_items_shapes(self, data):
        """Should find items in every supported envelope."""
        assert extract_items(data, "transactions") == [{"id": 1}]

    def test_extract_items_hyphenated_resource(self):
        """Should find items under a hyphenated resource key."""
        assert extract_items({"account_holders": [1, 2]}, "account-holders") == [1, 2]

    @pytest.mark.parametrize("data", [None, {}, {"data": "nope"}, "text", 3])
    def test_extract_items_unknown_shapes(self, data):
        """Should return an empty list for unknown shapes."""
        assert extract_items(data, "labels") == []

    def test_next_cursor(self):
        """Should read the pagination cursor when present."""
        assert next_cursor({"next_cursor": "n1"}) == "n1"
        assert next_cursor({"cursor": "c1"}) == "c1"
        assert next_cursor({"next_cursor": ""}) is None
        assert next_cursor([1, 2]) is None

    def test_success_response_defaults(self):
        """Should default to no error and no kind."""
        response = APIResponse(success=True, data=[1])
        assert response.kind is None
        assert response.unwrap() == [1]
