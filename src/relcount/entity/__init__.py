"""Domain entities with cached relation counts."""

from relcount.entity._entity import DomainEntity

__all__ = ["DomainEntity"]
