"""Service layer — the payload builder and its result types.

Services may import from domain, strategies, and translation.
They must never import from config.logging or perform I/O.
"""
