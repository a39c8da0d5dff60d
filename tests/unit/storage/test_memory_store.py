"""Consumer tests for MemoryRelationStore."""

from relcount.storage import MemoryRelationStore, RelationStoreProtocol


class TestMemoryRelationStore:
    def test_isinstance_protocol_returns_true(self) -> None:
        assert isinstance(MemoryRelationStore(), RelationStoreProtocol) is True

    def test_add_assigns_increasing_ids(self) -> None:
        store = MemoryRelationStore()

        first = store.add("Blog", 1, "tags", "a")
        second = store.add("Blog", 1, "tags", "b")

        assert (first.id, second.id) == (1, 2)

    def test_lazy_records_count_not_load(self) -> None:
        store = MemoryRelationStore()
        _ = store.add("Blog", 1, "tags", "a")

        tags = store.lazy("Blog", 1, "tags")

        assert tags.known_size == 1
        assert store.count_calls == [("Blog", 1, "tags")]
        assert store.load_calls == []

    def test_materialize_records_load(self) -> None:
        store = MemoryRelationStore()
        _ = store.add("Blog", 1, "tags", "a")

        _ = store.lazy("Blog", 1, "tags").materialize()

        assert store.load_calls == [("Blog", 1, "tags")]

    def test_remove(self) -> None:
        store = MemoryRelationStore()
        item = store.add("Blog", 1, "tags", "a")
        assert item.id is not None

        assert store.remove(item.id) is True
        assert store.remove(item.id) is False
        assert store.count("Blog", 1, "tags") == 0

    def test_search_treats_wildcards_literally(self) -> None:
        store = MemoryRelationStore()
        _ = store.add("Blog", 1, "tags", "50% off")
        _ = store.add("Blog", 1, "tags", "500 off")

        labels = [i.label for i in store.search("Blog", 1, "tags", "50%")]

        assert labels == ["50% off"]

    def test_search_ignores_ascii_case_only(self) -> None:
        store = MemoryRelationStore()
        _ = store.add("Blog", 1, "tags", "Python")
        _ = store.add("Blog", 1, "tags", "ÄPFEL")

        assert [i.label for i in store.search("Blog", 1, "tags", "python")] == ["Python"]
        assert store.search("Blog", 1, "tags", "äpfel") == []
