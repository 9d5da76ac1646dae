"""Prompt Enhancer API package.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
