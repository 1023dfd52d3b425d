"""
Error taxonomy for subnet-bridge.

Three kinds of failure reach the top level unrecovered:
- construction errors: malformed arguments, credentials or addresses
- network errors: endpoint unreachable, timeout, unexpected response
- rejections: the node refuses the transaction or the read-only call

Every kind exits with the same status code.
"""

from __future__ import annotations

from typing import Any, Optional


class BridgeError(RuntimeError):
    exit_code: int = 1


class ConstructionError(BridgeError):
    pass


class AddressError(ConstructionError):
    pass


class ClarityValueError(ConstructionError):
    pass


class InvalidKeyError(ConstructionError):
    pass


class NetworkError(BridgeError):
    pass


class RejectedError(BridgeError):
    pass


class TransactionRejectedError(RejectedError):
    """The node refused a broadcast transaction."""

    def __init__(
        self,
        reason: str,
        reason_data: Optional[Any] = None,
        txid: Optional[str] = None,
    ) -> None:
        self.reason = reason
        self.reason_data = reason_data
        self.txid = txid
        message = f"transaction rejected: {reason}"
        if reason_data:
            message += f" ({reason_data})"
        super().__init__(message)


class ReadOnlyCallError(RejectedError):
    pass
