"""
Node RPC Client for Stacks and subnet nodes.

Uses httpx against the node's /v2 endpoints. Supports nonce lookup,
transaction broadcast and read-only contract calls. No retries: every
failure is raised to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence
from urllib.parse import quote

import httpx

from ..clarity.values import ClarityValue, deserialize, to_hex
from ..errors import NetworkError, ReadOnlyCallError, TransactionRejectedError
from .network import get_rpc_url


@dataclass(frozen=True)
class ReadOnlyCall:
    """
    A read-only function call. Carries no credential and no nonce.

    Attributes:
        contract_address: Issuer address of the contract
        contract_name: Contract name
        function_name: Read-only function to evaluate
        function_args: Arguments in declared order
        sender_address: Caller address (``tx-sender`` during evaluation)
    """
    contract_address: str
    contract_name: str
    function_name: str
    sender_address: str
    function_args: Sequence[ClarityValue] = field(default_factory=tuple)


class NodeClient(Protocol):
    def get_nonce(self, address: str) -> int:
        ...

    def broadcast_transaction(self, raw_tx: bytes) -> str:
        ...

    def call_read_only(self, call: ReadOnlyCall) -> ClarityValue:
        ...


class HttpNodeClient:
    """
    NodeClient over the node HTTP RPC.

    Args:
        rpc_url: Node base URL (default: STACKS_NODE_URL or localhost:3999)
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (used by tests)
    """

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        timeout: float = 30,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.rpc_url = (rpc_url or get_rpc_url()).rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.rpc_url}{path}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                return client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Timed out talking to {url}") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Request to {url} failed: {exc}") from exc

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(
                f"Unexpected response ({response.status_code}) from {response.url}: "
                f"{response.text[:200]}"
            ) from exc

    def get_nonce(self, address: str) -> int:
        """
        Get the next nonce for an account.

        Args:
            address: c32 account address

        Returns:
            The nonce the next transaction from this account must use
        """
        response = self._request("GET", f"/v2/accounts/{address}", params={"proof": 0})
        if response.status_code != 200:
            raise NetworkError(
                f"Account lookup failed ({response.status_code}): {response.text[:200]}"
            )
        data = self._json(response)
        try:
            return int(data["nonce"])
        except (KeyError, TypeError, ValueError) as exc:
            raise NetworkError(f"Account response has no nonce: {data}") from exc

    def broadcast_transaction(self, raw_tx: bytes) -> str:
        """
        Submit a signed, serialized transaction.

        Returns:
            Transaction id (hex)

        Raises:
            TransactionRejectedError: If the node refuses the transaction
            NetworkError: On transport failure or an unexpected response
        """
        response = self._request(
            "POST",
            "/v2/transactions",
            content=raw_tx,
            headers={"Content-Type": "application/octet-stream"},
        )

        if response.status_code == 200:
            txid = self._json(response)
            if not isinstance(txid, str):
                raise NetworkError(f"Unexpected broadcast response: {txid!r}")
            return txid

        if response.status_code == 400:
            data = self._json(response)
            if isinstance(data, dict) and "error" in data:
                raise TransactionRejectedError(
                    reason=data.get("reason") or data["error"],
                    reason_data=data.get("reason_data"),
                    txid=data.get("txid"),
                )

        raise NetworkError(
            f"Broadcast failed ({response.status_code}): {response.text[:200]}"
        )

    def call_read_only(self, call: ReadOnlyCall) -> ClarityValue:
        """
        Evaluate a read-only function against the current chain tip.

        Returns:
            Decoded Clarity result

        Raises:
            ReadOnlyCallError: If evaluation fails on the node
        """
        path = "/v2/contracts/call-read/{}/{}/{}".format(
            call.contract_address,
            call.contract_name,
            quote(call.function_name, safe=""),
        )
        payload = {
            "sender": call.sender_address,
            "arguments": [to_hex(arg) for arg in call.function_args],
        }
        response = self._request("POST", path, json=payload)
        if response.status_code != 200:
            raise NetworkError(
                f"Read-only call failed ({response.status_code}): {response.text[:200]}"
            )

        data = self._json(response)
        if not isinstance(data, dict):
            raise NetworkError(f"Unexpected read-only response: {data!r}")
        if not data.get("okay"):
            raise ReadOnlyCallError(
                f"{call.function_name} failed: {data.get('cause', 'unknown cause')}"
            )
        result = data.get("result")
        if not isinstance(result, str):
            raise NetworkError(f"Read-only response has no result: {data}")
        return deserialize(result)
