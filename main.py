import logging
import os
import sys

from harness import Allocator
from LinkedQueue import (
    LinkedQueue,
    q_free,
    q_insert_head,
    q_insert_tail,
    q_new,
    q_remove_head,
    q_reverse,
    q_size,
    q_sort,
)
from natural_order import lexical_compare

DELIM = "&-=-&"


def print_section(name: str):
    print(f"{DELIM} {name}")


def print_queue(q: "LinkedQueue", label: str = ""):
    if label:
        print(f"{label}: ", end="")
    print(f"[{' '.join(q.to_list())}] size={q_size(q)}")


def remove_into(q: "LinkedQueue", bufsize: int):
    buf = bytearray(bufsize)
    ok = q_remove_head(q, buf, bufsize)
    text = bytes(buf).split(b"\0", 1)[0].decode("utf-8", errors="replace") if ok else "N/A"
    print(f"ok={ok} removed={text}")


# ───────────────────────── tasks ─────────────────────────

def task1_basic_ops():
    print_section("start-task1")

    q = q_new()
    print_section("empty-queue")
    print(f"ok={q_remove_head(q)} size={q_size(q)}")

    print_section("insert_head")
    for s in ("a", "b", "c"):
        q_insert_head(q, s)
    print_queue(q, "after-insert")

    print_section("remove_head")
    remove_into(q, 64)
    remove_into(q, 2)
    print_queue(q, "after-remove")

    print_section("free")
    q_free(q)
    print(f"size={q_size(q)}")


def task2_reverse():
    print_section("start-task2")

    q = q_new()
    for s in ("a", "b", "c"):
        q_insert_head(q, s)
    print_queue(q, "seed")

    print_section("reverse")
    q_reverse(q)
    print_queue(q, "after-reverse")
    remove_into(q, 64)
    remove_into(q, 64)
    print_queue(q, "after-remove")
    q_free(q)


def task3_sort():
    print_section("start-task3")

    q = q_new()
    for s in ("banana", "Apple", "cherry10", "cherry2"):
        q_insert_tail(q, s)
    print_queue(q, "seed")

    print_section("natural-sort")
    q_sort(q)
    print_queue(q, "after-sort")

    print_section("lexical-sort")
    q_sort(q, lexical_compare)
    print_queue(q, "after-sort")
    q_free(q)


def task4_alloc_failure():
    print_section("start-task4")

    probability = float(os.getenv("QUEUE_FAIL_PROBABILITY", "0.5"))
    seed = int(os.getenv("QUEUE_SEED", "0"))
    allocator = Allocator(fail_probability=probability, seed=seed)

    q = None
    for _ in range(100):
        q = q_new(allocator)
        if q is not None:
            break
    if q is None:
        print("could not allocate queue")
        return
    inserted = 0
    for i in range(10):
        if q_insert_tail(q, f"item{i}"):
            inserted += 1
    print_section("insert_tail")
    print(f"inserted={inserted} size={q_size(q)} live={allocator.live}")

    print_section("free")
    q_free(q)
    print(f"live={allocator.live} allocated={allocator.allocated} freed={allocator.freed}")


# ───────────────────────── entry ─────────────────────────

TASKS = {
    "task1": task1_basic_ops,
    "task2": task2_reverse,
    "task3": task3_sort,
    "task4": task4_alloc_failure,
}


def main(argv=None):
    argv = sys.argv if argv is None else argv
    logging.basicConfig(level=os.getenv("QUEUE_LOG_LEVEL", "WARNING").upper())
    which = argv[1] if len(argv) >= 2 else ""
    if which in TASKS:
        TASKS[which]()
        return 0
    # default: run all
    for task in TASKS.values():
        task()
    return 0


if __name__ == "__main__":
    sys.exit(main())
