import string

import pytest

from jsonweave import seed
from jsonweave.hashtable import HashTable


class Value:
    """Distinct object so that identity checks mean something."""

    def __init__(self, payload):
        self.payload = payload


@pytest.fixture
def restore_seed():
    yield
    seed.reset_seed()


def test_get_missing_key_raises():
    table = HashTable()
    with pytest.raises(KeyError):
        _ = table["a"]
    assert table.get("a", "missing") == "missing"
    assert len(table) == 0


def test_set_get_and_delete_only_key():
    table = HashTable()
    text = Value("test")
    table["a"] = text
    assert table["a"] is text
    del table["a"]
    assert len(table) == 0
    assert "a" not in table


def test_non_string_key_rejected():
    table = HashTable()
    with pytest.raises(TypeError):
        table[None] = 1
    assert len(table) == 0
    assert list(table) == []


def test_colliding_keys_and_replacement():
    table = HashTable()
    text = Value("test")
    other = Value("other")
    table["a"] = text
    for key in ("b", "lp", "px"):
        table[key] = text
    assert table["a"] is text
    table["a"] = other
    assert table["a"] is other
    assert len(table) == 4

    with pytest.raises(KeyError):
        del table["nonexisting"]

    del table["px"]
    del table["a"]
    del table["lp"]
    assert list(table) == ["b"]


def test_rehashing_keeps_all_items():
    table = HashTable()
    text = Value("test")
    table["b"] = text
    for key in ("a", "lp", "px", "c", "d", "e"):
        table[key] = text
    table["foo"] = 123
    assert table["foo"] == 123
    assert len(table) == 8
    for key in ("a", "b", "lp", "px", "c", "d", "e"):
        assert table[key] is text


def test_clear():
    table = HashTable()
    ten = Value(10)
    for key in "abcde":
        table[key] = ten
    assert len(table) == 5
    table.clear()
    assert len(table) == 0
    assert list(table) == []
    table["z"] = ten
    assert list(table) == ["z"]


def test_update():
    table = HashTable()
    other = HashTable()
    nine = Value(9)
    ten = Value(10)

    table.update(other)
    assert len(table) == 0
    assert len(other) == 0

    for key in "abcde":
        other[key] = ten
    table.update(other)
    assert len(table) == 5
    assert all(table[key] is ten for key in "abcde")

    table.update(other)
    assert len(table) == 5
    assert all(table[key] is ten for key in "abcde")

    other.clear()
    for key in "abfgh":
        other[key] = nine
    table.update(other)
    assert len(table) == 8
    assert all(table[key] is nine for key in "abfgh")
    assert all(table[key] is ten for key in "cde")


def test_set_many_keys():
    table = HashTable()
    value = Value("a")
    for key in string.ascii_lowercase:
        table[key] = value
    assert len(table) == 26
    assert list(table) == list(string.ascii_lowercase)
    assert all(table[key] is value for key in string.ascii_lowercase)


def test_keys_from_invalid_utf8():
    table = HashTable()
    text = Value("bar")
    key1 = b"a\xefz".decode("utf-8", "surrogateescape")
    key2 = b"asdf\xfe".decode("utf-8", "surrogateescape")
    table["foo"] = text
    table[key1] = text
    table["bax"] = 123
    table[key2] = 321
    assert table["foo"] is text
    assert table[key1] is text
    assert table["bax"] == 123
    assert table[key2] == 321


def test_iteration_order_and_iter_from():
    table = HashTable()
    foo, bar, baz = Value("foo"), Value("bar"), Value("baz")
    table["a"] = foo
    table["b"] = bar
    table["c"] = baz
    assert list(table.items()) == [("a", foo), ("b", bar), ("c", baz)]

    with pytest.raises(KeyError):
        table.iter_from("foo")

    assert list(table.iter_from("b")) == ["b", "c"]

    table["b"] = baz
    assert table["b"] is baz
    assert list(table) == ["a", "b", "c"]


def test_empty_iteration():
    table = HashTable()
    assert list(table) == []


def test_preserve_order():
    table = HashTable()
    table["foobar"] = 1
    table["bazquux"] = 2
    table["lorem ipsum"] = 3
    table["dolor"] = 4
    table["sit amet"] = 5
    table["bazquux"] = 6
    del table["dolor"]
    table["helicopter"] = 7
    assert list(table.items()) == [
        ("foobar", 1),
        ("bazquux", 6),
        ("lorem ipsum", 3),
        ("sit amet", 5),
        ("helicopter", 7),
    ]


def test_foreach_copy_is_equal():
    source = HashTable({"foo": 1, "bar": 2, "baz": 3})
    copy = HashTable()
    for key, value in source.items():
        copy[key] = value
    assert copy == source
    assert list(copy) == ["foo", "bar", "baz"]


def test_delete_while_iterating():
    table = HashTable([("foo", 1), ("bar", 2), ("baz", 3)])
    seen = []
    for key in table:
        seen.append(key)
        del table[key]
    assert seen == ["foo", "bar", "baz"]
    assert len(table) == 0


def test_init_from_pairs_and_mapping():
    from_pairs = HashTable([("x", 1), ("y", 2)])
    from_mapping = HashTable({"x": 1, "y": 2})
    assert dict(from_pairs) == {"x": 1, "y": 2}
    assert from_pairs == from_mapping


def test_membership():
    table = HashTable({"k": None})
    assert "k" in table
    assert "missing" not in table
    assert 5 not in table
    assert table.get("missing", "default") == "default"


def test_behaviour_independent_of_seed(restore_seed):
    seed.reset_seed()
    seed.object_seed(12345)
    first = HashTable((key, ord(key)) for key in string.ascii_letters)
    seed.reset_seed()
    seed.object_seed(999)
    second = HashTable((key, ord(key)) for key in string.ascii_letters)
    assert list(first.items()) == list(second.items())
    assert first["Q"] == ord("Q")
    assert second["q"] == ord("q")