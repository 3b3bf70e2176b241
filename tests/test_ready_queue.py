import pytest

from schedsim.errors import EmptyQueueError
from schedsim.models import Process
from schedsim.ready_queue import ReadyQueue


def _proc(pid):
    return Process(pid, arrival_time=0, burst_time=1)


def test_pop_returns_smallest_key():
    q = ReadyQueue()
    for pid, key in [(1, 5), (2, 3), (3, 8), (4, 1), (5, 9), (6, 2), (7, 7)]:
        q.push(_proc(pid), key)

    assert len(q) == 7
    assert [q.pop().pid for _ in range(7)] == [4, 6, 2, 1, 7, 3, 5]
    assert len(q) == 0


def test_ties_pop_in_insertion_order():
    q = ReadyQueue()
    q.push(_proc(1), 2)
    q.push(_proc(2), 1)
    q.push(_proc(3), 2)
    q.push(_proc(4), 1)
    assert [q.pop().pid for _ in range(4)] == [2, 4, 1, 3]


def test_heap_order_with_many_entries():
    q = ReadyQueue()
    keys = {pid: (pid * 37) % 11 for pid in range(1, 51)}
    for pid, key in keys.items():
        q.push(_proc(pid), key)

    expected = sorted(keys, key=lambda pid: keys[pid])
    assert [q.pop().pid for _ in range(len(keys))] == expected


def test_interleaved_push_and_pop():
    q = ReadyQueue()
    q.push(_proc(1), 4)
    q.push(_proc(2), 2)
    assert q.pop().pid == 2
    q.push(_proc(3), 1)
    q.push(_proc(4), 4)
    assert [q.pop().pid for _ in range(3)] == [3, 1, 4]


def test_peek_does_not_remove():
    q = ReadyQueue()
    q.push(_proc(1), 3)
    q.push(_proc(2), 0)
    assert q.peek().pid == 2
    assert len(q) == 2


def test_truthiness_tracks_contents():
    q = ReadyQueue()
    assert not q
    q.push(_proc(1), 0)
    assert q
    q.pop()
    assert not q


def test_pop_empty_raises():
    q = ReadyQueue()
    with pytest.raises(EmptyQueueError):
        q.pop()
    # Still an IndexError for callers that only know the builtin.
    with pytest.raises(IndexError):
        q.peek()
