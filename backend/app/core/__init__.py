"""Core Layer - pure text and domain logic, no IO, no network.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Randomness is injected (random.Random) so guidance output is reproducible in tests
"""
