# diplotree

A small hierarchical database. Every node has a name, an optional typed value
and an ordered list of children. The whole tree is kept in a single XML file
whose root element is `diplodocusdb-xmltreedb`. It uses only the standard
library.

## Installation

```
pip install .
```

## Usage

```python
from diplotree.xmltreedb import XMLTreeDB

with XMLTreeDB() as db:
    db.create("settings.xml")
    root = db.root()
    server = db.append_child_node(root, "server")
    db.append_child_node(server, "host", "localhost")
    db.set_child_node(server, "port", 8080)

with XMLTreeDB() as db:
    db.open("settings.xml")
    server = db.child(db.root(), "server")
    print(db.child_value(server, "host"))   # localhost
    print(db.child_value(server, "port"))   # 8080
    for node in db.child_nodes(server):
        print(node.name)
```

`create` writes a new, empty file at once. Every other change is made to the
document in memory; `close`, or leaving the `with` block, writes the tree
back to its file, indented by two spaces.

### The database API

`XMLTreeDB` offers:

- `root()`, `parent(node)`, `child_nodes(parent)`, `child(parent, name)`
- `previous_sibling(node, name=None)`, `next_sibling(node, name=None)`
- `value(node, data_type=None)` and `child_value(parent, name, data_type=None)`;
  when a `DataType` is given and the node's value is of another type, `None`
  is returned. `child_value` raises `TreeDBError` if there is no such child.
- `set_value(node, value)`
- `insert_child_node(parent, index, name, value=None)`,
  `append_child_node(parent, name, value=None)`
- `set_child_node(parent, name, value=None)`: sets the value of the first
  child with that name, or appends one if there is none
- `remove_child_node(parent, name)`: removes the first child with that name
  and returns 0 or 1
- `remove_all_child_nodes(parent)`: returns the number of children removed

Nodes are `diplotree.node.XMLTreeDBNode` objects with `name`, `value`,
`data_type` and `is_root()`; `child` and the sibling lookups return `None`
when nothing matches.

### Values

Values are Python objects of these types, listed in `diplotree.values.DataType`:

| Python value         | `data-type` attribute  | stored text                  |
|----------------------|------------------------|------------------------------|
| `None`               | (no attribute)         | (none)                       |
| `int`, 0 to 2**64-1  | `unsigned-int-64bits`  | decimal digits               |
| `float`              | `ieee-754-binary64`    | eight decimal places         |
| `str`                | `unicode-string`       | the string                   |
| `datetime.date`      | `date`                 | ISO 8601                     |
| `datetime.time`      | `time-of-day`          | ISO 8601                     |

Other types (including `bool` and `datetime.datetime`) raise `TypeError`;
integers outside the unsigned 64-bit range raise `ValueError`.

A node without children keeps its value as its text; a node that has both a
value and children keeps the value in a leading `<data>` element:

```xml
<?xml version="1.0"?>
<diplodocusdb-xmltreedb>
  <server data-type="unicode-string">
    <data>main</data>
    <host data-type="unicode-string">localhost</host>
    <port data-type="unsigned-int-64bits">8080</port>
  </server>
</diplodocusdb-xmltreedb>
```

`diplotree.values` also exposes `data_type_of`, `encode_value` and
`decode_value` for working with this text form directly.

### Node identifiers

`diplotree.node_id.NodeID` is an ordered, immutable identifier (0 is null)
with `to_bytes()` / `NodeID.from_bytes(data)` for unsigned LEB128 encoding.
The XML database itself does not use it.

### Errors

An unreadable file, a document with the wrong root element, an unknown
`data-type` or a malformed date or time raise
`diplotree.errors.TreeDBError`, which carries a `message` and an `ErrorCode`.

## What it does not do

There is no command-line tool and no server; the package is a library only.
There are no transactions: changes live in memory until the database is
closed, and nothing is saved if the process ends before that. Only the XML
file format is supported.

## Running the tests

```
pip install .[test]
pytest
```