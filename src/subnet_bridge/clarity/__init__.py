"""
Clarity - Typed values and addresses for Stacks contract calls.

Provides the Clarity value union (encode / decode / text rendering)
and the c32check address codec used by principals and payloads.
"""
