"""
Chain - Network configuration, transaction building and node RPC.

Builds and signs single-sig contract-call transactions and talks to a
Stacks (or subnet) node over its HTTP RPC with httpx.
"""
