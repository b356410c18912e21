from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple, Union

from harness import AllocationFailure, Allocator, default_allocator
from natural_order import Comparator, natural_compare

logger = logging.getLogger(__name__)

Text = Union[str, bytes, bytearray]


class _Node:
    __slots__ = ("value", "next")
    def __init__(self):
        self.value: Optional[bytearray] = None
        self.next: Optional["_Node"] = None


def _to_bytes(s: Text) -> bytes:
    if isinstance(s, str):
        s = s.encode("utf-8")
    elif not isinstance(s, (bytes, bytearray)):
        raise TypeError(f"queue payload must be str or bytes, not {type(s).__name__}")
    # a payload ends at its first NUL
    return bytes(s).split(b"\0", 1)[0]


def _text(payload: bytearray) -> str:
    return payload.decode("utf-8", errors="replace")


class LinkedQueue:
    """Singly linked queue of text payloads with cached head, tail and size.

    Every node and payload buffer is drawn from ``allocator`` and handed back
    to it on removal or destruction, so a test allocator can count them.
    """

    def __init__(self, allocator: Optional[Allocator] = None):
        self._allocator = allocator if allocator is not None else default_allocator()
        self._head: Optional[_Node] = None
        self._tail: Optional[_Node] = None
        self._size: int = 0
        self._freed = False
        self._allocator.allocate(self)

    @classmethod
    def create(cls, allocator: Optional[Allocator] = None) -> Optional["LinkedQueue"]:
        try:
            return cls(allocator)
        except AllocationFailure:
            logger.debug("could not allocate queue")
            return None

    def free(self) -> None:
        if self._freed:
            return
        node = self._head
        while node is not None:
            self._head = node.next
            self._size -= 1
            if self._head is None:
                self._tail = None
            self._release(node)
            node = self._head
        self._freed = True
        self._allocator.free(self)

    def __enter__(self) -> "LinkedQueue":
        return self

    def __exit__(self, *exc) -> None:
        self.free()

    # ---- basics ----
    @property
    def freed(self) -> bool:
        return self._freed

    def empty(self) -> bool:
        return self._size == 0

    def size(self) -> int:
        if self._freed:
            return 0
        return self._size

    def __len__(self) -> int:
        return self.size()

    # ---- insert/remove ----
    def _new_node(self, s: Text) -> Optional[_Node]:
        data = _to_bytes(s)
        try:
            node = self._allocator.allocate(_Node())
        except AllocationFailure:
            logger.debug("could not allocate node")
            return None
        try:
            node.value = self._allocator.allocate(bytearray(data))
        except AllocationFailure:
            logger.debug("could not allocate %d byte payload, releasing node", len(data) + 1)
            self._allocator.free(node)
            return None
        return node

    def _release(self, node: _Node) -> None:
        self._allocator.free(node.value)
        node.value = None
        node.next = None
        self._allocator.free(node)

    def insert_head(self, s: Optional[Text]) -> bool:
        if self._freed or s is None:
            return False
        n = self._new_node(s)
        if n is None:
            return False
        n.next = self._head
        if self._head is None:
            self._tail = n
        self._head = n
        self._size += 1
        return True

    def insert_tail(self, s: Optional[Text]) -> bool:
        if self._freed or s is None:
            return False
        n = self._new_node(s)
        if n is None:
            return False
        if self._tail is None:
            self._head = n
        else:
            self._tail.next = n
        self._tail = n
        self._size += 1
        return True

    def _detach_head(self) -> Optional[_Node]:
        if self._freed or self._head is None:
            return None
        n = self._head
        self._head = n.next
        if self._head is None:
            self._tail = None
        self._size -= 1
        return n

    def remove_head(self, sp: Optional[bytearray] = None, bufsize: int = 0) -> bool:
        """Remove the head element.

        If ``sp`` is given and ``bufsize`` is positive, up to ``bufsize - 1``
        bytes of the removed payload are copied into it, followed by a NUL.
        ``bufsize`` never reaches past ``len(sp)``.
        """
        if sp is not None and not isinstance(sp, bytearray):
            raise TypeError(f"output buffer must be a bytearray, not {type(sp).__name__}")
        n = self._detach_head()
        if n is None:
            return False
        try:
            if sp is not None and bufsize > 0:
                bufsize = min(bufsize, len(sp))
                if bufsize > 0:
                    count = min(len(n.value), bufsize - 1)
                    sp[:count] = n.value[:count]
                    sp[count] = 0
        finally:
            self._release(n)
        return True

    def pop_front(self) -> Tuple[bool, Optional[str]]:
        n = self._detach_head()
        if n is None:
            return False, None
        value = _text(n.value)
        self._release(n)
        return True, value

    # ---- access ----
    def head(self) -> Optional[str]:
        if self._freed or self._head is None:
            return None
        return _text(self._head.value)

    def tail(self) -> Optional[str]:
        if self._freed or self._tail is None:
            return None
        return _text(self._tail.value)

    # ---- rearrange ----
    def reverse(self) -> None:
        if self._freed or self._size < 2:
            return
        prev: Optional[_Node] = None
        node = self._head
        while node is not None:
            nxt = node.next
            node.next = prev
            prev = node
            node = nxt
        self._head, self._tail = self._tail, self._head

    def sort(self, compare: Comparator = natural_compare) -> None:
        """Stable in-place selection sort.

        Each round finds the first minimum of the unsorted suffix and relinks
        that node to the end of the sorted prefix.
        """
        if self._freed or self._size < 2:
            return
        sorted_tail: Optional[_Node] = None
        while True:
            start = self._head if sorted_tail is None else sorted_tail.next
            if start is None or start.next is None:
                break
            min_prev, min_node = None, start
            prev, node = start, start.next
            while node is not None:
                if compare(_text(node.value), _text(min_node.value)) < 0:
                    min_prev, min_node = prev, node
                prev, node = node, node.next
            if min_prev is not None:
                min_prev.next = min_node.next
                if min_node is self._tail:
                    self._tail = min_prev
                min_node.next = start
                if sorted_tail is None:
                    self._head = min_node
                else:
                    sorted_tail.next = min_node
            sorted_tail = min_node

    # ---- utils ----
    def __iter__(self) -> Iterator[str]:
        n = None if self._freed else self._head
        while n is not None:
            yield _text(n.value)
            n = n.next

    def to_list(self) -> List[str]:
        return list(self)

    def __repr__(self) -> str:
        if self._freed:
            return "LinkedQueue(<freed>)"
        return f"LinkedQueue({self.to_list()!r})"


# ---- procedural API ----
def q_new(allocator: Optional[Allocator] = None) -> Optional[LinkedQueue]:
    return LinkedQueue.create(allocator)


def q_free(q: Optional[LinkedQueue]) -> None:
    if q is not None:
        q.free()


def q_insert_head(q: Optional[LinkedQueue], s: Optional[Text]) -> bool:
    if q is None:
        return False
    return q.insert_head(s)


def q_insert_tail(q: Optional[LinkedQueue], s: Optional[Text]) -> bool:
    if q is None:
        return False
    return q.insert_tail(s)


def q_remove_head(q: Optional[LinkedQueue], sp: Optional[bytearray] = None, bufsize: int = 0) -> bool:
    if q is None:
        return False
    return q.remove_head(sp, bufsize)


def q_size(q: Optional[LinkedQueue]) -> int:
    if q is None:
        return 0
    return q.size()


def q_reverse(q: Optional[LinkedQueue]) -> None:
    if q is not None:
        q.reverse()


def q_sort(q: Optional[LinkedQueue], compare: Comparator = natural_compare) -> None:
    if q is not None:
        q.sort(compare)
