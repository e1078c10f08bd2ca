import pytest
from hypothesis import given
from hypothesis import strategies as st

from diskfs.hashtable import HashTable

HASH_TEST_VECTOR = [str(n) for n in range(15)]


def make_table():
    return HashTable(int, lambda key: key)


def test_self_test_round_trip():
    table = make_table()
    table.sanity_check()
    assert table.is_empty()
    assert list(table) == []
    for item in HASH_TEST_VECTOR:
        table.insert(item)
        assert int(item) in table
        assert not table.is_empty()
    table.sanity_check()
    for item in HASH_TEST_VECTOR:
        assert table.remove(int(item)) == item
    assert table.is_empty()
    table.sanity_check()


def test_initial_bucket_count():
    assert make_table().num_buckets == 4


def test_fifteen_items_force_rehash():
    table = make_table()
    for item in HASH_TEST_VECTOR:
        table.insert(item)
    assert table.num_buckets == 16
    assert len(table) == 15
    table.sanity_check()


def test_iteration_with_identity_hash_follows_bucket_order():
    table = make_table()
    for item in reversed(HASH_TEST_VECTOR):
        table.insert(item)
    assert list(table) == HASH_TEST_VECTOR


def test_find_present_and_missing():
    table = make_table()
    table.insert("7")
    assert table.find(7) == "7"
    assert table.find(8) is None
    assert 8 not in table


def test_duplicate_key_rejected():
    table = make_table()
    table.insert("3")
    with pytest.raises(ValueError):
        table.insert("3")
    assert len(table) == 1


def test_remove_missing_raises_key_error():
    table = make_table()
    table.insert("1")
    with pytest.raises(KeyError):
        table.remove(2)
    assert len(table) == 1


def test_apply_visits_every_item_once():
    table = make_table()
    for item in HASH_TEST_VECTOR:
        table.insert(item)
    seen = []
    table.apply(seen.append)
    assert sorted(seen, key=int) == HASH_TEST_VECTOR


def test_default_hash_with_string_keys():
    table = HashTable(lambda pair: pair[0])
    table.insert(("alpha", 1))
    table.insert(("beta", 2))
    assert table.find("beta") == ("beta", 2)
    assert table.remove("alpha") == ("alpha", 1)
    assert len(table) == 1


def test_sanity_check_detects_changed_hash():
    offset = {"value": 0}
    table = HashTable(int, lambda key: key + offset["value"])
    for item in ["0", "1", "2"]:
        table.insert(item)
    table.sanity_check()
    offset["value"] = 1
    with pytest.raises(RuntimeError):
        table.sanity_check()


@given(st.lists(st.integers(min_value=-1000, max_value=1000), unique=True))
def test_insert_then_remove_all(keys):
    table = HashTable(lambda item: item, abs)
    for key in keys:
        table.insert(key)
    table.sanity_check()
    assert len(table) == len(keys)
    assert sorted(table) == sorted(keys)
    for key in keys:
        assert table.find(key) == key
    for key in keys:
        assert table.remove(key) == key
    assert table.is_empty()
    table.sanity_check()