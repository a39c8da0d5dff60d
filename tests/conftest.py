"""Shared test fixtures for relcount tests."""

from collections.abc import Iterable
from typing import ClassVar

import pytest

from relcount import DomainEntity


class Blog(DomainEntity):
    """Entity with two relations used across the test suite."""

    relation_names: ClassVar[frozenset[str]] = frozenset({"posts", "tags"})
    title: str = ""

    def add_post(self, post: str) -> None:
        self.add_related("posts", post)

    def remove_post(self, post: str) -> None:
        self.remove_related("posts", post)

    def set_posts(self, posts: Iterable[str]) -> None:
        self.set_related("posts", posts)

    def get_posts(self) -> tuple[str, ...]:
        return self.get_related("posts")

    def count_posts(self) -> int:
        return self.count_related("posts")


class CountingList(list[str]):
    """List that records how often its size was asked for."""

    len_calls: int

    def __init__(self, items: Iterable[str] = ()) -> None:
        super().__init__(items)
        self.len_calls = 0

    def __len__(self) -> int:
        self.len_calls += 1
        return super().__len__()


@pytest.fixture
def blog() -> Blog:
    """Create a persisted Blog with no relations set."""
    return Blog(id=1, title="Notes")

