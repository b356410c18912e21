import pytest

from harness import Allocator
from LinkedQueue import LinkedQueue


@pytest.fixture
def allocator():
    return Allocator()


@pytest.fixture
def make_queue(allocator):
    """Build a queue on the test allocator, tail-inserting ``items``."""
    def _make(*items):
        q = LinkedQueue(allocator)
        for s in items:
            assert q.insert_tail(s)
        return q
    return _make


def node_ids(q):
    out = []
    n = q._head
    while n is not None:
        out.append(id(n))
        n = n.next
    return out


def check_links(q):
    """Walk head to tail and check the cached tail and size agree."""
    count = 0
    last = None
    n = q._head
    while n is not None:
        count += 1
        last = n
        n = n.next
    assert count == q.size()
    assert last is q._tail
    if q.size() == 1:
        assert q._head is q._tail
