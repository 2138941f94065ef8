import pytest

from nutsdb.ds.lists import (
    MAX_INT,
    MIN_INT,
    CountError,
    IndexOutOfRangeError,
    List,
    ListError,
    ListNotFoundError,
    MinIntError,
)

KEY = "myList"


@pytest.fixture
def data():
    lst = List()
    for item in (b"a", b"b", b"c", b"d"):
        lst.rpush(KEY, item)
    return lst


def test_rpush_order(data):
    assert [data.lpop(KEY) for _ in range(4)] == [b"a", b"b", b"c", b"d"]


def test_rpush_returns_size():
    lst = List()
    assert lst.rpush(KEY, b"a", b"b") == 2
    assert lst.rpush(KEY, b"c") == 3


def test_rpeek_and_rpop(data):
    for expected in (b"d", b"c", b"b", b"a"):
        assert data.rpeek(KEY) == expected
        assert data.rpop(KEY) == expected
    with pytest.raises(ListNotFoundError):
        data.rpeek(KEY)


def test_lpush():
    lst = List()
    lst.lpush(KEY, b"a")
    lst.lpush(KEY, b"b")
    lst.lpush(KEY, b"c")
    lst.lpush(KEY, b"d", b"e", b"f")
    assert lst.lpush(KEY, *[b"d", b"e", b"f"]) == 9
    expected = [b"f", b"e", b"d", b"f", b"e", b"d", b"c", b"b", b"a"]
    assert [lst.lpop(KEY) for _ in range(9)] == expected


def test_rpush_and_lpush(data):
    data.lpush(KEY, b"e")
    data.lpush(KEY, b"f")
    data.lpush(KEY, b"g")
    assert data.lrange(KEY, 0, -1) == [b"g", b"f", b"e", b"a", b"b", b"c", b"d"]


def test_lpop(data):
    assert data.lpop(KEY) == b"a"
    with pytest.raises(ListNotFoundError):
        data.lpop("key_fake")
    assert data.lpop(KEY) == b"b"
    assert data.lpop(KEY) == b"c"
    assert data.lpop(KEY) == b"d"
    with pytest.raises(ListNotFoundError):
        data.lpop(KEY)


def test_rpop(data):
    assert data.size(KEY) == 4
    assert data.rpop(KEY) == b"d"
    assert data.size(KEY) == 3
    with pytest.raises(ListNotFoundError):
        data.rpop("key_fake")


def test_size_missing_key():
    with pytest.raises(ListNotFoundError):
        List().size("nothing")


@pytest.fixture
def six():
    lst = List()
    for item in (b"a", b"b", b"c", b"d", b"e", b"f"):
        lst.rpush(KEY, item)
    return lst


@pytest.mark.parametrize(
    "start,end,want",
    [
        (0, 2, [b"a", b"b", b"c"]),
        (4, 8, [b"e", b"f"]),
        (-3, -1, [b"d", b"e", b"f"]),
        (0, 0, [b"a"]),
        (0, -1, [b"a", b"b", b"c", b"d", b"e", b"f"]),
    ],
)
def test_lrange(six, start, end, want):
    assert six.lrange(KEY, start, end) == want


@pytest.mark.parametrize("start,end", [(-1, 2), (-1, -2)])
def test_lrange_bad_range(six, start, end):
    with pytest.raises(ListError):
        six.lrange(KEY, start, end)


def test_lrange_fake_key(six):
    with pytest.raises(ListNotFoundError):
        six.lrange("key_fake", -2, -1)


def test_lrange_empty_store():
    with pytest.raises(ListNotFoundError):
        List().lrange(KEY, 0, -1)


def test_lrange_emptied_list():
    lst = List()
    lst.rpush(KEY, b"g")
    assert lst.lpop(KEY) == b"g"
    assert lst.lrange(KEY, 0, -1) == []


def test_lrange_start_beyond_list_start(six):
    with pytest.raises(IndexOutOfRangeError):
        six.lrange(KEY, -10, -1)


def test_lrem_from_head(data):
    with pytest.raises(ListNotFoundError):
        data.lrem("key_fake", 1, b"a")
    assert data.lrem(KEY, 1, b"a") == 1
    assert data.lrange(KEY, 0, -1) == [b"b", b"c", b"d"]


def test_lrem_from_tail(data):
    assert data.lrem(KEY, -1, b"d") == 1
    assert data.lrange(KEY, 0, -1) == [b"a", b"b", b"c"]


def test_lrem_two_from_tail(data):
    data.rpush(KEY, b"b")
    assert data.lrem(KEY, -2, b"b") == 2
    assert data.lrange(KEY, 0, -1) == [b"a", b"c", b"d"]


def test_lrem_counts_larger_than_matches(data):
    assert data.lrem(KEY, -10, b"b") == 1


def test_lrem_count_four():
    lst = List()
    for item in (b"a", b"b", b"c", b"d", b"b"):
        lst.rpush(KEY, item)
    assert lst.lrem(KEY, 4, b"b") == 2


def test_lrem_count_two():
    lst = List()
    for item in (b"a", b"b", b"c", b"d", b"b"):
        lst.rpush(KEY, item)
    assert lst.lrem(KEY, 2, b"b") == 2
    assert lst.lrange(KEY, 0, -1) == [b"a", b"c", b"d"]


def test_lrem_keeps_last_when_removing_from_head():
    lst = List()
    for item in (b"b", b"a", b"b"):
        lst.rpush(KEY, item)
    assert lst.lrem(KEY, 1, b"b") == 1
    assert lst.lrange(KEY, 0, -1) == [b"a", b"b"]


def test_lrem_keeps_first_when_removing_from_tail():
    lst = List()
    for item in (b"b", b"a", b"b"):
        lst.rpush(KEY, item)
    assert lst.lrem(KEY, -1, b"b") == 1
    assert lst.lrange(KEY, 0, -1) == [b"b", b"a"]


def test_lrem_all(data):
    data.rpush(KEY, b"b")
    data.rpush(KEY, b"b")
    assert data.lrem(KEY, 0, b"b") == 3
    assert data.size(KEY) == 3


def test_lrem_three_from_tail(data):
    data.rpush(KEY, b"b")
    data.rpush(KEY, b"b")
    assert data.lrem(KEY, -3, b"b") == 3
    assert data.size(KEY) == 3


def test_lrem_min_int_and_missing_item(data):
    data.rpush(KEY, b"b")
    data.rpush(KEY, b"b")
    assert data.lrem(KEY, 0, b"b") == 3
    assert data.size(KEY) == 3
    with pytest.raises(MinIntError):
        data.lrem(KEY, MIN_INT, b"b")
    assert data.lrem(KEY, 0, b"item_not_exists") == 0


def test_lrem_num(data):
    with pytest.raises(ListNotFoundError):
        data.lrem_num("key_not_exists", 0, None)
    with pytest.raises(CountError):
        data.lrem_num(KEY, MAX_INT, None)


def test_lrem_num_counts_matches(data):
    data.rpush(KEY, b"a")
    assert data.lrem_num(KEY, 0, b"a") == 2
    assert data.lrem_num(KEY, 1, b"a") == 1
    assert data.lrange(KEY, 0, -1) == [b"a", b"b", b"c", b"d", b"a"]


@pytest.mark.parametrize(
    "indexes,want_items,want_removed",
    [
        ([], [b"a", b"b", b"c", b"d"], 0),
        ([0], [b"b", b"c", b"d"], 1),
        ([0, 0, 0], [b"b", b"c", b"d"], 1),
        ([0, 0, 2, 8], [b"b", b"d"], 2),
        ([-1, 0, 1, 2, 3, 4, 5], [], 4),
    ],
)
def test_lrem_by_index(data, indexes, want_items, want_removed):
    assert data.lrem_by_index_pre_check(KEY, indexes) == want_removed
    assert data.lrem_by_index(KEY, indexes) == want_removed
    assert data.items[KEY] == want_items


def test_lrem_by_index_missing_key(data):
    with pytest.raises(ListNotFoundError):
        data.lrem_by_index_pre_check("key2", [])
    with pytest.raises(ListNotFoundError):
        data.lrem_by_index("key2", [])
    assert data.items[KEY] == [b"a", b"b", b"c", b"d"]


def test_lset(data):
    assert data.items[KEY][0] == b"a"
    data.lset(KEY, 0, b"a1")
    assert data.items[KEY][0] == b"a1"
    with pytest.raises(ListNotFoundError):
        data.lset("key_fake", 0, b"a1")
    with pytest.raises(IndexOutOfRangeError):
        data.lset(KEY, 4, b"a1")
    with pytest.raises(IndexOutOfRangeError):
        data.lset(KEY, -1, b"a1")


def test_ltrim(data):
    assert data.items[KEY] == [b"a", b"b", b"c", b"d"]
    data.ltrim(KEY, 0, 2)
    assert data.items[KEY] == [b"a", b"b", b"c"]
    with pytest.raises(ListNotFoundError):
        data.ltrim("key_fake", 0, 2)
    with pytest.raises(ListError):
        data.ltrim(KEY, -1, -2)


def test_is_empty(data):
    assert data.is_empty(KEY) is False
    empty = List()
    with pytest.raises(ListNotFoundError):
        empty.is_empty("empty")
    empty.rpush("empty", b"a")
    empty.lpop("empty")
    assert empty.is_empty("empty") is True