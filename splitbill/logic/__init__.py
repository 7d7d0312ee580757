"""Core business logic layer.

Subpackages:
- settlement: discount normalization, share resolution, tax apportionment, aggregation
- reporting: read-only summaries built on top of the settlement stages
"""
__all__ = ["settlement", "reporting"]
