"""Infrastructure Layer - LLM vendor clients and cross-cutting concerns.

Invariants:
    - Every vendor call goes through ResilientLLMClient (retry, timeout, error mapping)
    - Vendor SDK exceptions never escape this layer: all map to ProviderAPIError
"""
