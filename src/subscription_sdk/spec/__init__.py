"""
Spec - On-chain content schemas.

JSON Schemas describing the Move structs this SDK reads, and a registry
that validates RPC responses against them before any field is accessed.
"""
