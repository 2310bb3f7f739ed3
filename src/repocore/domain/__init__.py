"""Domain layer: failures, results, entities, and data-source contracts.

This layer depends only on stdlib and pydantic.
It must never import from network, services, or config.
"""
