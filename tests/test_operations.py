import pytest

from mongoscript.errors import ArgumentTypeError, ArityError, LooseLiteralParseError
from mongoscript.operations import build_operation, convert_to_number
from mongoscript.parsers import parse_mongodb_command
from mongoscript.schemas import OperationKind


def build(statement):
    return build_operation(parse_mongodb_command(statement))


@pytest.mark.parametrize("value, expected", [
    (1, 1),
    (-1.0, -1),
    (0.5, 0.5),
    ("1", 1),
    ("-1", -1),
    ("1.5", 1.5),
    ("2.0", 2),
    ("text", "text"),
    ("2dsphere", "2dsphere"),
    ("nan", "nan"),
    ("1_0", "1_0"),
    (" 1 ", " 1 "),
    ("1e2", "1e2"),
    ("+1", "+1"),
    (True, True),
])
def test_convert_to_number(value, expected):
    result = convert_to_number(value)
    assert result == expected
    assert type(result) is type(expected)


# ---------- CREATE COLLECTION ----------
def test_create_collection_with_validator():
    op = build('db.createCollection("x", {validator:{bsonType:"object"}});')
    assert op.kind is OperationKind.CREATE_COLLECTION
    assert op.collection == "x"
    assert op.method == "createCollection"
    assert op.validator == {"bsonType": "object"}


def test_create_collection_name_only():
    op = build("db.createCollection('logs')")
    assert op.collection == "logs"
    assert op.validator is None


def test_create_collection_ignores_non_object_validator():
    assert build("db.createCollection('logs', {validator: 5})").validator is None


def test_create_collection_bad_options_literal():
    with pytest.raises(LooseLiteralParseError):
        build("db.createCollection('x', {validator: bare})")


def test_create_index_bad_options_literal():
    with pytest.raises(LooseLiteralParseError):
        build("db.users.createIndex({email: 1}, {unique: yes})")


def test_create_collection_requires_name():
    with pytest.raises(ArityError):
        build("db.createCollection()")


# ---------- CREATE INDEX ----------
def test_create_index_keeps_field_order():
    op = build("db.users.createIndex({b:1, a:-1});")
    assert op.kind is OperationKind.CREATE_INDEX
    assert op.collection == "users"
    assert op.index_spec == [("b", 1), ("a", -1)]
    assert op.index_options is None


def test_create_index_coerces_directions():
    op = build("db.posts.createIndex({title: 'text', score: '-1', w: 1.0, loc: '2dsphere'})")
    assert op.index_spec == [("title", "text"), ("score", -1), ("w", 1), ("loc", "2dsphere")]
    assert type(op.index_spec[2][1]) is int


def test_create_index_options():
    op = build("db.users.createIndex({email: 1}, {unique: true, name: 'email_idx', sparse: true})")
    assert op.index_options.unique is True
    assert op.index_options.name == "email_idx"
    assert op.index_options.as_kwargs() == {"unique": True, "name": "email_idx"}


def test_create_index_ignores_badly_typed_options():
    op = build("db.users.createIndex({email: 1}, {unique: 'yes', name: 3})")
    assert op.index_options.as_kwargs() == {}


def test_create_index_requires_spec():
    with pytest.raises(ArityError):
        build("db.users.createIndex()")
    with pytest.raises(ArgumentTypeError):
        build("db.users.createIndex({})")


# ---------- INSERT ----------
def test_insert_one():
    op = build("db.users.insertOne({name:'Ann', age:30});")
    assert op.kind is OperationKind.INSERT
    assert op.collection == "users"
    assert op.method == "insertOne"
    assert op.documents == [{"name": "Ann", "age": 30}]


def test_insert_many():
    op = build("db.users.insertMany([{name: 'a'}, {name: 'b'},]);")
    assert op.method == "insertMany"
    assert op.documents == [{"name": "a"}, {"name": "b"}]


def test_insert_many_requires_array():
    with pytest.raises(ArgumentTypeError):
        build("db.users.insertMany({name: 'a'})")


def test_insert_without_document():
    with pytest.raises(ArityError, match="no document to insert"):
        build("db.users.insertOne()")


def test_insert_bad_literal():
    with pytest.raises(LooseLiteralParseError):
        build("db.users.insertOne({name: Ann})")


# ---------- UPDATE ----------
def test_update_one():
    op = build("db.users.updateOne({name: 'Ann'}, {$set: {age: 31}})")
    assert op.kind is OperationKind.UPDATE
    assert op.filter == {"name": "Ann"}
    assert op.update == {"$set": {"age": 31}}
    assert op.options == {}


def test_update_many_with_options():
    op = build("db.users.updateMany({}, {$inc: {n: 1}}, {upsert: true})")
    assert op.method == "updateMany"
    assert op.options == {"upsert": True}


def test_update_requires_two_arguments():
    with pytest.raises(ArityError):
        build("db.users.updateOne({a:1})")


# ---------- DELETE ----------
def test_delete_many():
    op = build("db.users.deleteMany({age: {$lt: 18}})")
    assert op.kind is OperationKind.DELETE
    assert op.filter == {"age": {"$lt": 18}}


def test_delete_requires_filter():
    with pytest.raises(ArityError):
        build("db.users.deleteOne()")
