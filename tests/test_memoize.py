from collections import OrderedDict

from fnkit import NOT_PROVIDED, args_equal, memoize, memoize0, memoize_one


class LRUCache[K, V]:
    """Two-entry LRU cache used to check memoize() accepts custom caches."""

    def __init__(self, size: int = 2):
        self.size = size
        self.data: OrderedDict[K, V] = OrderedDict()

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __getitem__(self, key: K) -> V:
        self.data.move_to_end(key)
        return self.data[key]

    def __setitem__(self, key: K, value: V) -> None:
        self.data[key] = value
        if len(self.data) > self.size:
            self.data.popitem(last=False)


def test_memoize_caches_by_argument():
    calls: list[str] = []

    def count(value: str) -> int:
        calls.append(value)
        return len(calls)

    fn = memoize(count)

    assert fn("foo") == 1
    assert fn("foo") == 1
    assert fn("bar") == 2
    assert fn("bar") == 2
    assert calls == ["foo", "bar"]


def test_memoize_with_custom_cache():
    calls: list[int] = []

    def square(value: int) -> int:
        calls.append(value)
        return value * value

    cache: LRUCache[int, int] = LRUCache(size=2)
    fn = memoize(square, cache)

    assert [fn(1), fn(2), fn(1), fn(3)] == [1, 4, 1, 9]
    assert calls == [1, 2, 3]

    # 2 was evicted as least recently used.
    assert fn(2) == 4
    assert calls == [1, 2, 3, 2]


def test_memoize_caches_none_results():
    calls: list[int] = []

    def nothing(value: int) -> None:
        calls.append(value)

    fn = memoize(nothing)
    fn(1)
    fn(1)
    assert calls == [1]


def test_memoize_keeps_function_metadata():
    def lookup(key: str) -> str:
        """Look a key up."""
        return key

    assert memoize(lookup).__name__ == "lookup"
    assert memoize(lookup).__doc__ == "Look a key up."


def test_memoize0_calls_once():
    calls: list[int] = []

    def compute() -> int:
        calls.append(1)
        return len(calls)

    fn = memoize0(compute)

    assert fn() == 1
    assert fn() == 1
    assert calls == [1]


def test_memoize0_caches_none():
    calls: list[int] = []

    def compute() -> None:
        calls.append(1)

    fn = memoize0(compute)
    assert fn() is None
    assert fn() is None
    assert len(calls) == 1


def test_memoize0_retries_after_error():
    attempts: list[int] = []

    def flaky() -> str:
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("first call fails")
        return "ok"

    fn = memoize0(flaky)
    try:
        fn()
    except RuntimeError:
        pass

    assert fn() == "ok"
    assert fn() == "ok"
    assert len(attempts) == 2


def test_memoize_one_tracks_latest_arguments():
    calls: list[str] = []

    def count(value: str) -> int:
        calls.append(value)
        return len(calls)

    fn = memoize_one(count)

    assert fn("foo") == 1
    assert fn("foo") == 1

    assert fn("bar") == 2
    assert fn("bar") == 2

    assert fn("foo") == 3
    assert fn("foo") == 3


def test_memoize_one_compares_by_identity():
    calls: list[list[int]] = []

    def total(values: list[int]) -> int:
        calls.append(values)
        return sum(values)

    fn = memoize_one(total)
    values = [1, 2, 3]

    assert fn(values) == 6
    assert fn(values) == 6
    assert len(calls) == 1

    assert fn([1, 2, 3]) == 6  # Equal but not identical.
    assert len(calls) == 2


def test_memoize_one_considers_keyword_arguments():
    calls: list[tuple[int, int]] = []

    def scale(value: int, *, factor: int = 1) -> int:
        calls.append((value, factor))
        return value * factor

    fn = memoize_one(scale)

    assert fn(2, factor=3) == 6
    assert fn(2, factor=3) == 6
    assert fn(2) == 2
    assert fn(2, factor=4) == 8
    assert calls == [(2, 3), (2, 1), (2, 4)]


def test_args_equal():
    marker = object()

    assert args_equal((), ())
    assert args_equal((1, marker), [1, marker])
    assert not args_equal((1,), (1, 2))
    assert not args_equal((object(),), (object(),))


def test_not_provided_is_a_singleton_sentinel():
    assert repr(NOT_PROVIDED) == "NOT_PROVIDED"
    assert NOT_PROVIDED is not None
