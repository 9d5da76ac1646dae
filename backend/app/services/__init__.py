"""Services Layer - orchestrates core logic and infrastructure clients.

Invariants:
    - Services never import from api/
    - Provider failures are handled here; request validation errors are not
"""
