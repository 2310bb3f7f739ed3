"""Service layer: guards, repository orchestration, and use cases.

Services may import from domain and network layers.
Every public operation returns a Result; none raise for runtime conditions.
"""
