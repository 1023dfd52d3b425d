"""Tests for the HTTP node client against a mocked transport."""

from __future__ import annotations

import dataclasses
import json
from typing import Callable

import httpx
import pytest

from subnet_bridge.chain.rpc import HttpNodeClient, ReadOnlyCall
from subnet_bridge.clarity.values import (
    NONE,
    OptionalSome,
    ResponseOk,
    StandardPrincipal,
    UIntValue,
    to_hex,
)
from subnet_bridge.errors import (
    NetworkError,
    ReadOnlyCallError,
    RejectedError,
    TransactionRejectedError,
)

NODE = "http://node.test:3999"
USER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
ALT = "ST000000000000000000002AMW42H"


def client_for(handler: Callable[[httpx.Request], httpx.Response]) -> HttpNodeClient:
    return HttpNodeClient(NODE, transport=httpx.MockTransport(handler))


class TestGetNonce:
    def test_reads_account_nonce(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == f"/v2/accounts/{USER}"
            assert request.url.params["proof"] == "0"
            return httpx.Response(200, json={"balance": "0x0", "nonce": 7})

        assert client_for(handler).get_nonce(USER) == 7

    def test_missing_nonce(self) -> None:
        client = client_for(lambda request: httpx.Response(200, json={"balance": "0x0"}))
        with pytest.raises(NetworkError):
            client.get_nonce(USER)

    def test_http_error_status(self) -> None:
        client = client_for(lambda request: httpx.Response(404, text="not found"))
        with pytest.raises(NetworkError, match="404"):
            client.get_nonce(USER)


class TestBroadcast:
    def test_success_returns_txid(self) -> None:
        raw = b"\x80\x00\x00\x00\x00"

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path == "/v2/transactions"
            assert request.headers["content-type"] == "application/octet-stream"
            assert request.content == raw
            return httpx.Response(200, json="ab" * 32)

        assert client_for(handler).broadcast_transaction(raw) == "ab" * 32

    def test_rejection(self) -> None:
        body = {
            "error": "transaction rejected",
            "reason": "ConflictingNonceInMempool",
            "reason_data": None,
            "txid": "cd" * 32,
        }
        client = client_for(lambda request: httpx.Response(400, json=body))
        with pytest.raises(TransactionRejectedError) as excinfo:
            client.broadcast_transaction(b"\x00")
        assert excinfo.value.reason == "ConflictingNonceInMempool"
        assert excinfo.value.txid == "cd" * 32
        assert "ConflictingNonceInMempool" in str(excinfo.value)

    def test_rejection_is_not_a_network_error(self) -> None:
        body = {"error": "transaction rejected", "reason": "BadNonce"}
        client = client_for(lambda request: httpx.Response(400, json=body))
        with pytest.raises(RejectedError):
            client.broadcast_transaction(b"\x00")

    def test_server_error(self) -> None:
        client = client_for(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(NetworkError, match="500"):
            client.broadcast_transaction(b"\x00")

    def test_non_json_success(self) -> None:
        client = client_for(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(NetworkError):
            client.broadcast_transaction(b"\x00")


class TestTransportFailures:
    def test_unreachable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError, match="failed"):
            client_for(handler).get_nonce(USER)

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(NetworkError, match="Timed out"):
            client_for(handler).broadcast_transaction(b"\x00")


class TestReadOnly:
    def make_call(self, function_name: str = "get-owner") -> ReadOnlyCall:
        return ReadOnlyCall(
            contract_address=USER,
            contract_name="simple-nft-l1",
            function_name=function_name,
            function_args=(UIntValue(5),),
            sender_address=ALT,
        )

    def test_request_and_result(self) -> None:
        result = ResponseOk(OptionalSome(StandardPrincipal(USER)))

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path == f"/v2/contracts/call-read/{USER}/simple-nft-l1/get-owner"
            body = json.loads(request.content)
            assert body == {"sender": ALT, "arguments": [to_hex(UIntValue(5))]}
            return httpx.Response(200, json={"okay": True, "result": to_hex(result)})

        assert client_for(handler).call_read_only(self.make_call()) == result

    def test_function_name_is_quoted(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.raw_path.endswith(b"/is-owner%3F")
            return httpx.Response(200, json={"okay": True, "result": to_hex(NONE)})

        assert client_for(handler).call_read_only(self.make_call("is-owner?")) == NONE

    def test_evaluation_failure(self) -> None:
        body = {"okay": False, "cause": "Unchecked(NoSuchContract)"}
        client = client_for(lambda request: httpx.Response(200, json=body))
        with pytest.raises(ReadOnlyCallError, match="NoSuchContract"):
            client.call_read_only(self.make_call())

    def test_missing_result(self) -> None:
        client = client_for(lambda request: httpx.Response(200, json={"okay": True}))
        with pytest.raises(NetworkError, match="no result"):
            client.call_read_only(self.make_call())

    def test_carries_no_credential_or_nonce(self) -> None:
        names = {f.name for f in dataclasses.fields(ReadOnlyCall)}
        assert names.isdisjoint({"sender_key", "nonce", "fee"})
