"""
Chain - Sui fullnode interaction layer.

Provides the JSON-RPC client and the unsigned transaction descriptor
builder. Signing and submission happen elsewhere.

Uses httpx directly instead of a full node SDK.
"""
