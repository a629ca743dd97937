from schedsim.models import Job
from schedsim.priqueue import OrderedQueue


def ascending(a, b):
    return a - b


def descending(a, b):
    return b - a


def by_key(a, b):
    return a[0] - b[0]


def _is_sorted(q, comparator):
    items = list(q)
    return all(comparator(items[i], items[i + 1]) <= 0 for i in range(len(items) - 1))


def test_empty_queue():
    q = OrderedQueue(ascending)
    assert q.size() == 0
    assert len(q) == 0
    assert q.peek() is None
    assert q.poll() is None
    assert q.at(0) is None
    assert q.remove_matching(1) == 0
    assert q.remove_at(0) is None


def test_remove_at_out_of_range():
    q = OrderedQueue(ascending)
    q.offer(3)
    assert q.remove_at(100) is None
    assert q.at(1) is None
    assert q.size() == 1


def test_offer_returns_insertion_index():
    q = OrderedQueue(ascending)
    assert q.offer(5) == 0
    assert q.offer(1) == 0
    assert q.offer(9) == 2
    assert q.offer(4) == 1
    assert list(q) == [1, 4, 5, 9]


def test_queue_stays_sorted_after_every_offer():
    values = [7, 2, 9, 2, 0, 5, 5, 11, 3, 8]
    for comparator in (ascending, descending):
        q = OrderedQueue(comparator)
        for v in values:
            q.offer(v)
            assert _is_sorted(q, comparator)
        assert q.size() == len(values)


def test_offer_is_stable_for_equal_items():
    q = OrderedQueue(by_key)
    a = (1, "a")
    b = (1, "b")
    c = (0, "c")
    d = (1, "d")
    for item in (a, b, c, d):
        q.offer(item)
    assert list(q) == [c, a, b, d]


def test_always_rear_comparator_keeps_insertion_order():
    q = OrderedQueue(lambda a, b: -1)
    for i, v in enumerate([3, 1, 2]):
        assert q.offer(v) == i
    assert list(q) == [3, 1, 2]


def test_peek_and_poll():
    q = OrderedQueue(ascending)
    for v in (4, 2, 6):
        q.offer(v)
    assert q.peek() == 2
    assert q.size() == 3
    assert q.poll() == 2
    assert q.poll() == 4
    assert q.peek() == 6
    assert q.size() == 1


def test_at_and_remove_at():
    q = OrderedQueue(ascending)
    for v in range(10):
        q.offer(v)
    assert q.at(3) == 3
    assert q.remove_at(3) == 3
    assert q.at(3) == 4
    assert q.size() == 9
    assert _is_sorted(q, ascending)


def test_size_after_offers_and_removals():
    q = OrderedQueue(ascending)
    for v in range(8):
        q.offer(v)
    q.poll()
    q.remove_at(2)
    q.remove_at(0)
    assert q.size() == 8 - 3


def test_remove_matching_uses_identity_not_comparator():
    a = Job(job_id=1, arrival_time=0, running_time=5, priority=1, remaining_time=5)
    twin = Job(job_id=1, arrival_time=0, running_time=5, priority=1, remaining_time=5)
    q = OrderedQueue(lambda x, y: x.running_time - y.running_time)
    q.offer(a)
    q.offer(twin)

    assert q.remove_matching(a) == 1
    assert q.size() == 1
    assert q.peek() is twin


def test_remove_matching_removes_every_reference():
    item = [42]
    other = [42]
    q = OrderedQueue(lambda x, y: 0)
    q.offer(item)
    q.offer(other)
    q.offer(item)
    assert q.remove_matching(item) == 2
    assert list(q) == [other]


def test_reorder_after_keys_change():
    jobs = [
        Job(job_id=i, arrival_time=i, running_time=r, priority=0, remaining_time=r)
        for i, r in enumerate((3, 5, 8))
    ]
    comparator = lambda x, y: x.remaining_time - y.remaining_time  # noqa: E731
    q = OrderedQueue(comparator)
    for job in jobs:
        q.offer(job)

    jobs[2].remaining_time = 1
    q.reorder()
    assert [j.job_id for j in q] == [2, 0, 1]
    assert _is_sorted(q, comparator)


def test_clear():
    q = OrderedQueue(ascending)
    for v in range(5):
        q.offer(v)
    q.clear()
    assert q.size() == 0
    assert q.peek() is None
