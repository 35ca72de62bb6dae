from pytest import raises

from linkedmap import LinkedMap, check_invariants, from_pairs, new


def test_remove_and_update_scenario():
    m = new()
    m.upsert("a", 1)
    m.upsert("b", 2)
    m.upsert("c", 3)
    m.remove("b")
    m.upsert("a", 10)

    assert len(m) == 2
    assert m.front() == ("a", 10, True)
    assert m.back() == ("c", 3, True)
    assert m.render() == "{a: 10, c: 3}"


def test_empty_scenario():
    m = new()
    assert m.front()[2] is False
    assert m.back()[2] is False
    calls = []
    m.range(lambda k, v: calls.append((k, v)) or True)
    assert calls == []
    assert m.render() == "{}"


def test_move_after_scenario():
    m = from_pairs([("a", 1), ("b", 2), ("c", 3)])
    assert m.move_after("c", "a")
    assert m.keys() == ["a", "c", "b"]


def test_insertion_order_round_trip():
    m = LinkedMap()
    m.upsert("k1", "v1")
    m.upsert("k2", "v2")
    m.upsert("k3", "v3")
    seen = []
    m.range(lambda k, v: seen.append((k, v)) or True)
    assert seen == [("k1", "v1"), ("k2", "v2"), ("k3", "v3")]
    assert m.render() == "{k1: v1, k2: v2, k3: v3}"


def test_recently_used_eviction():
    # least-recently-used bookkeeping: touch moves to back, evict from front
    capacity = 3
    cache = new()

    def touch(key, value):
        if not cache.upsert(key, value):
            cache.move_to_back(key)
        while len(cache) > capacity:
            oldest, _, _ = cache.front()
            cache.remove(oldest)

    for key in ["a", "b", "c", "a", "d", "b", "e"]:
        touch(key, key.upper())
        check_invariants(cache)

    assert cache.keys() == ["d", "b", "e"]
    assert cache.render() == "{d: D, b: B, e: E}"


def test_reorder_playlist():
    tracks = from_pairs((f"t{i}", i) for i in range(1, 6))
    tracks.move_to_front("t5")
    tracks.move_before("t1", "t4")
    tracks.move_after("t2", "t4")
    tracks.remove("t3")
    assert tracks.keys() == ["t5", "t1", "t4", "t2"]
    check_invariants(tracks)

    tracks.reset().upsert("intro", 0)
    assert tracks.items() == [("intro", 0)]


def test_range_stops_early():
    m = from_pairs((i, i * i) for i in range(10))
    seen = []

    def until_large(key, value):
        if value > 10:
            return False
        seen.append(key)
        return True

    m.range(until_large)
    assert seen == [0, 1, 2, 3]


def test_many_entries():
    m = new()
    n = 5000
    for i in range(n):
        m.upsert(i, str(i))
    for i in range(0, n, 3):
        m.move_to_front(i)
    for i in range(1, n, 3):
        m.remove(i)
    check_invariants(m)
    assert len(m) == n - len(range(1, n, 3))
    last_moved = max(range(0, n, 3))
    assert m.front() == (last_moved, str(last_moved), True)
    untouched = max(range(2, n, 3))
    assert m.back() == (untouched, str(untouched), True)

    with raises(RuntimeError):
        for key in m:
            m.move_to_back(key)
