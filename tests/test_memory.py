# tests/test_memory.py
import pytest

from drivenav.exceptions import NotFoundError, PermanentError
from drivenav.storage.dto import NodeKind


def test_new_store_has_only_root(store):
    root = store.by_id("root")
    assert root.is_folder
    assert store.parents("root") == []
    assert store.children("root", NodeKind.FOLDER) == []


def test_by_id_missing_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.by_id("nope")


def test_children_are_filtered_by_kind_in_creation_order(store):
    b = store.create_folder("B")
    a = store.create_folder("A")
    f = store.add_file("notes.txt", b"hello")

    assert [n.id for n in store.children("root", NodeKind.FOLDER)] == [b.id, a.id]
    assert [n.id for n in store.children("root", NodeKind.FILE)] == [f.id]


def test_node_can_have_multiple_parents(store):
    p1 = store.create_folder("P1")
    p2 = store.create_folder("P2")
    reports = store.create_folder("Reports", p1.id)
    store.add_parent(reports.id, p2.id)

    assert [p.id for p in store.parents(reports.id)] == [p1.id, p2.id]
    assert reports in store.children(p2.id, NodeKind.FOLDER)


def test_add_parent_twice_keeps_one_edge(store):
    folder = store.create_folder("Once")
    store.add_parent(folder.id, "root")

    assert [p.id for p in store.parents(folder.id)] == ["root"]


def test_add_parent_rejects_cycles(store):
    outer = store.create_folder("Outer")
    inner = store.create_folder("Inner", outer.id)

    with pytest.raises(PermanentError, match="cycle"):
        store.add_parent(outer.id, inner.id)
    with pytest.raises(PermanentError, match="cycle"):
        store.add_parent(outer.id, outer.id)


def test_add_parent_rejects_file_as_folder(store):
    file = store.add_file("a.txt")
    folder = store.create_folder("F")

    with pytest.raises(PermanentError, match="not a folder"):
        store.add_parent(folder.id, file.id)


def test_remove_missing_edge_raises_not_found(store):
    folder = store.create_folder("F")
    other = store.create_folder("Other")

    with pytest.raises(NotFoundError):
        store.remove_parent(folder.id, other.id)


def test_copy_file_creates_independent_node(store):
    dest = store.create_folder("Dest")
    original = store.add_file("a.txt", b"payload")

    copy = store.copy_file(original.id, "a.txt", dest.id)

    assert copy.id != original.id
    assert copy.name == "a.txt"
    assert copy.content == b"payload"
    assert [p.id for p in store.parents(copy.id)] == [dest.id]
    assert [p.id for p in store.parents(original.id)] == ["root"]


def test_copy_file_rejects_folders(store):
    folder = store.create_folder("F")

    with pytest.raises(PermanentError):
        store.copy_file(folder.id, "F", "root")


def test_by_name_top_level_ignores_containment(store):
    a = store.create_folder("A")
    nested = store.create_folder("Invoices", a.id)
    top = store.create_folder("Invoices")
    file = store.add_file("Invoices", parent_id=a.id)

    assert [n.id for n in store.by_name_top_level("Invoices")] == [nested.id, top.id, file.id]
    assert [n.id for n in store.by_name_top_level("Invoices", NodeKind.FOLDER)] == [nested.id, top.id]
    assert store.by_name_top_level("My Drive") == []
