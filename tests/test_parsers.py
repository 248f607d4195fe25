import pytest

from mongoscript.errors import FormatError, UnbalancedSyntaxError, UnsupportedMethodError
from mongoscript.parsers import find_matching_paren, parse_mongodb_command, split_top_level_json_args


# ---------- ARGUMENT SPLITTING ----------
def test_split_respects_nesting():
    assert split_top_level_json_args("{a:1},{b:{c:2}}") == ["{a:1}", "{b:{c:2}}"]


def test_split_ignores_commas_in_strings_and_arrays():
    args = split_top_level_json_args("{a: \"x,y\"}, [1, 2, 3], 'p,q'")
    assert args == ['{a: "x,y"}', "[1, 2, 3]", "'p,q'"]


def test_split_array_of_documents_is_one_argument():
    assert split_top_level_json_args("[{a:1}, {b:2}]") == ["[{a:1}, {b:2}]"]


def test_split_drops_empty_tail():
    assert split_top_level_json_args(" {a:1} , ") == ["{a:1}"]
    assert split_top_level_json_args("") == []


# ---------- CALL EXTRACTION ----------
def test_collection_call():
    call = parse_mongodb_command("db.users.insertOne({name:'Ann', age:30});")
    assert call.collection == "users"
    assert call.method == "insertOne"
    assert call.args_text == "{name:'Ann', age:30}"


def test_create_collection_call_has_no_collection():
    call = parse_mongodb_command('db.createCollection("x", {validator:{bsonType:"object"}});')
    assert call.collection is None
    assert call.method == "createCollection"
    assert call.args_text == '"x", {validator:{bsonType:"object"}}'


def test_nested_parentheses_are_matched():
    call = parse_mongodb_command("db.users.insertOne({a: (1)})")
    assert call.args_text == "{a: (1)}"


@pytest.mark.parametrize("statement", [
    "users.insertOne({})",
    "db.users",
    "db..insertOne({})",
    "db.users.insertOne",
    ";",
])
def test_format_errors(statement):
    with pytest.raises(FormatError):
        parse_mongodb_command(statement)


def test_missing_close_paren():
    with pytest.raises(UnbalancedSyntaxError) as exc:
        parse_mongodb_command("db.users.insertOne({a: 1}")
    assert exc.value.statement == "db.users.insertOne({a: 1}"


def test_unsupported_method():
    with pytest.raises(UnsupportedMethodError) as exc:
        parse_mongodb_command("db.users.find({})")
    assert exc.value.method == "find"
    assert exc.value.collection == "users"


def test_find_matching_paren_counts_only_parens():
    assert find_matching_paren("f(a(b)c)d", 1) == 7
    assert find_matching_paren("f(a(b", 1) == -1
