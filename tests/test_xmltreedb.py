import datetime as dt

import pytest

from diplotree.errors import TreeDBError
from diplotree.values import DataType
from diplotree.xmltreedb import ROOT_ELEMENT_NAME, XMLTreeDB


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "tree.xml"


def reopen(path):
    db = XMLTreeDB()
    db.open(path)
    return db


def test_create_writes_empty_document(db_path):
    db = XMLTreeDB()
    db.create(db_path)
    content = db_path.read_text(encoding="utf-8")
    assert content.startswith('<?xml version="1.0"?>')
    assert ROOT_ELEMENT_NAME in content
    db.close()


def test_open_empty_database_has_root_without_children(db_path):
    with XMLTreeDB() as db:
        db.create(db_path)
    db = reopen(db_path)
    root = db.root()
    assert root.is_root()
    assert db.child_nodes(root) == []
    db.close()


def test_open_missing_file_raises(tmp_path):
    db = XMLTreeDB()
    with pytest.raises(TreeDBError):
        db.open(tmp_path / "missing.xml")


def test_open_wrong_root_raises(db_path):
    db_path.write_text('<?xml version="1.0"?>\n<other />\n', encoding="utf-8")
    with pytest.raises(TreeDBError):
        XMLTreeDB().open(db_path)


def test_root_before_open_raises():
    with pytest.raises(TreeDBError):
        XMLTreeDB().root()


def test_append_child_null_round_trip(db_path):
    with XMLTreeDB() as db:
        db.create(db_path)
        db.append_child_node(db.root(), "key1")
    db = reopen(db_path)
    node = db.child(db.root(), "key1")
    assert node.name == "key1"
    assert db.value(node) is None
    db.close()


def test_append_two_children_keep_order(db_path):
    with XMLTreeDB() as db:
        db.create(db_path)
        db.append_child_node(db.root(), "key1")
        db.append_child_node(db.root(), "key2")
    db = reopen(db_path)
    assert [n.name for n in db.child_nodes(db.root())] == ["key1", "key2"]
    db.close()


def test_string_values_round_trip(db_path):
    with XMLTreeDB() as db:
        db.create(db_path)
        db.append_child_node(db.root(), "key1", "value1")
        db.append_child_node(db.root(), "key2", "value2")
    db = reopen(db_path)
    assert db.child_value(db.root(), "key1") == "value1"
    assert db.child_value(db.root(), "key2") == "value2"
    db.close()


def test_string_value_written_with_data_type(db_path):
    with XMLTreeDB() as db:
        db.create(db_path)
        db.append_child_node(db.root(), "key1", "value1")
    content = db_path.read_text(encoding="utf-8")
    assert 'data-type="unicode-string"' in content
    assert "value1" in content


def test_typed_values_round_trip(db_path):
    values = {
        "count": 42,
        "ratio": 0.5,
        "day": dt.date(2020, 1, 2),
        "at": dt.time(10, 20, 30),
    }
    with XMLTreeDB() as db:
        db.create(db_path)
        for name, value in values.items():
            db.append_child_node(db.root(), name, value)
    db = reopen(db_path)
    for name, value in values.items():
        assert db.child_value(db.root(), name) == value
    db.close()


def test_value_with_data_type_filter(db_path):
    db = XMLTreeDB()
    db.create(db_path)
    node = db.append_child_node(db.root(), "key1", "value1")
    assert db.value(node, DataType.UNICODE_STRING) == "value1"
    assert db.value(node, DataType.UNSIGNED_INT_64BIT) is None
    assert db.child_value(db.root(), "key1", DataType.UNICODE_STRING) == "value1"
    db.close()


def test_child_value_of_missing_child_raises(db_path):
    db = XMLTreeDB()
    db.create(db_path)
    with pytest.raises(TreeDBError):
        db.child_value(db.root(), "absent")
    db.close()


def test_child_missing_returns_none(db_path):
    db = XMLTreeDB()
    db.create(db_path)
    assert db.child(db.root(), "absent") is None
    db.close()


def test_nested_child_and_parent(db_path):
    with XMLTreeDB() as db:
        db.create(db_path)
        node1 = db.append_child_node(db.root(), "key1")
        node2 = db.append_child_node(node1, "key2")
        assert db.parent(node2) is node1
        assert db.parent(node1) is db.root()
        assert db.parent(db.root()) is None
    db = reopen(db_path)
    inner = db.child(db.child(db.root(), "key1"), "key2")
    assert inner.name == "key2"
    db.close()


def test_parent_with_value_and_children_round_trip(db_path):
    with XMLTreeDB() as db:
        db.create(db_path)
        parent = db.append_child_node(db.root(), "parent", "value1")
        db.append_child_node(parent, "inner", "value2")
    db = reopen(db_path)
    parent = db.child(db.root(), "parent")
    assert db.value(parent) == "value1"
    assert db.child_value(parent, "inner") == "value2"
    assert [n.name for n in db.child_nodes(parent)] == ["inner"]
    db.close()


def test_siblings(db_path):
    db = XMLTreeDB()
    db.create(db_path)
    a = db.append_child_node(db.root(), "a")
    b = db.append_child_node(db.root(), "b")
    c = db.append_child_node(db.root(), "c")
    assert db.next_sibling(a) is b
    assert db.next_sibling(a, "c") is c
    assert db.next_sibling(c) is None
    assert db.previous_sibling(c) is b
    assert db.previous_sibling(c, "a") is a
    assert db.previous_sibling(a) is None
    db.close()


def test_insert_child_node_position(db_path):
    with XMLTreeDB() as db:
        db.create(db_path)
        db.append_child_node(db.root(), "key2")
        db.insert_child_node(db.root(), 0, "key0")
        db.insert_child_node(db.root(), 1, "key1")
    db = reopen(db_path)
    assert [n.name for n in db.child_nodes(db.root())] == ["key0", "key1", "key2"]
    db.close()


def test_set_child_node_replaces_first(db_path):
    db = XMLTreeDB()
    db.create(db_path)
    first = db.append_child_node(db.root(), "key1", "value1")
    result = db.set_child_node(db.root(), "key1", "value2")
    assert result is first
    assert db.child_value(db.root(), "key1") == "value2"
    assert len(db.child_nodes(db.root())) == 1
    db.close()


def test_set_child_node_appends_when_absent(db_path):
    db = XMLTreeDB()
    db.create(db_path)
    node = db.set_child_node(db.root(), "key1", "value1")
    assert db.child(db.root(), "key1") is node
    assert db.value(node) == "value1"
    db.close()


def test_set_value_persists(db_path):
    with XMLTreeDB() as db:
        db.create(db_path)
        node = db.append_child_node(db.root(), "key1")
        db.set_value(node, 7)
    db = reopen(db_path)
    assert db.child_value(db.root(), "key1") == 7
    db.close()


def test_set_value_rejects_unsupported(db_path):
    db = XMLTreeDB()
    db.create(db_path)
    node = db.append_child_node(db.root(), "key1")
    with pytest.raises(TypeError):
        db.set_value(node, [1, 2])
    db.close()


def test_remove_child_node(db_path):
    with XMLTreeDB() as db:
        db.create(db_path)
        db.append_child_node(db.root(), "key1")
        db.append_child_node(db.root(), "key2")
        assert db.remove_child_node(db.root(), "key1") == 1
        assert db.remove_child_node(db.root(), "absent") == 0
    db = reopen(db_path)
    assert [n.name for n in db.child_nodes(db.root())] == ["key2"]
    db.close()


def test_remove_all_child_nodes(db_path):
    with XMLTreeDB() as db:
        db.create(db_path)
        for name in ("a", "b", "c"):
            db.append_child_node(db.root(), name)
        assert db.remove_all_child_nodes(db.root()) == 3
        assert db.child_nodes(db.root()) == []
    db = reopen(db_path)
    assert db.child_nodes(db.root()) == []
    db.close()


def test_unknown_data_type_raises_on_load(db_path):
    db_path.write_text(
        '<?xml version="1.0"?>\n'
        f'<{ROOT_ELEMENT_NAME}><key1 data-type="mystery">x</key1></{ROOT_ELEMENT_NAME}>\n',
        encoding="utf-8",
    )
    db = reopen(db_path)
    with pytest.raises(TreeDBError):
        db.child_nodes(db.root())


def test_close_is_idempotent(db_path):
    db = XMLTreeDB()
    db.create(db_path)
    db.append_child_node(db.root(), "key1", "value1")
    db.close()
    db.close()
    assert reopen(db_path).child_value(reopen(db_path).root(), "key1") == "value1"


def test_many_children_round_trip(db_path):
    names = [f"key{i}" for i in range(523)]
    with XMLTreeDB() as db:
        db.create(db_path)
        for name in names:
            db.append_child_node(db.root(), name)
    db = reopen(db_path)
    assert [n.name for n in db.child_nodes(db.root())] == names
    db.close()