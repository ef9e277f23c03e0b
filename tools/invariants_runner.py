#!/usr/bin/env python3
# tools/invariants_runner.py
#
# MPRList invariants (property tests) over randomly generated lists.
#
# This runner:
# - generates random delegation lists, sorted and unsorted, with duplicate names
# - checks round-trip, sort idempotence and estimate/materialize parity
# - checks the REPLACE / APPEND / SKIP insert postconditions
#
# Exit code:
#   0 -> all checks passed
#   1 -> invariant violation

import os, sys, random
from typing import List, Tuple

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(ROOT, "implementations", "python"))

from mprlist import (
    Delegation, Encoder, Estimator, MPRList, INS_APPEND, INS_REPLACE, INS_SKIP,
    PREFERENCE_MAX, TLV_CONTENT, TLV_MPR_LIST,
)

SEED = int(os.environ.get("MPR_SEED", "1337"))
TRIALS = int(os.environ.get("MPR_TRIALS", "2000"))
MAX_LIST = int(os.environ.get("MPR_GEN_MAX_LIST", "7"))
MAX_COMPONENTS = int(os.environ.get("MPR_GEN_MAX_COMPONENTS", "4"))

random.seed(SEED)

# Small alphabet so duplicate names actually happen.
NAME_POOL = ["a", "b", "c", "aa", "ab"]

def rand_preference() -> int:
    r = random.random()
    if r < 0.6:
        return random.randint(0, 20)
    if r < 0.9:
        return random.randint(0, 70000)
    return random.randint(0, PREFERENCE_MAX)

def rand_name() -> str:
    n = random.randint(0, MAX_COMPONENTS)
    return "/" + "/".join(random.choice(NAME_POOL) for _ in range(n))

def rand_pairs() -> List[Tuple[int, str]]:
    return [(rand_preference(), rand_name()) for _ in range(random.randint(1, MAX_LIST))]

def fail(msg: str, ctx) -> int:
    print("INVARIANT FAIL:", msg)
    print("CTX:", ctx)
    return 1

def is_ascending(lst: MPRList) -> bool:
    dels = list(lst)
    return all(a <= b for a, b in zip(dels, dels[1:]))

def main() -> int:
    for t in range(TRIALS):
        pairs = rand_pairs()
        tlv_type = random.choice([TLV_CONTENT, TLV_MPR_LIST])
        unsorted = MPRList.unsorted(pairs)

        # (1) Estimate/materialize parity
        enc = Encoder()
        n = unsorted.wire_encode(enc, tlv_type)
        if n != unsorted.wire_encode(Estimator(), tlv_type) or n != len(enc.getvalue()):
            return fail("estimate/materialize parity", pairs)

        # (2) Round-trip: wire order kept, or ascending order
        wire = enc.getvalue()
        kept = MPRList.from_wire(wire, want_sort=False)
        if kept != unsorted:
            return fail("round-trip want_sort=False", pairs)
        ordered = MPRList.from_wire(wire, want_sort=True)
        if not is_ascending(ordered) or sorted(ordered) != sorted(unsorted):
            return fail("round-trip want_sort=True", pairs)

        # (3) Sort idempotence; sort() agrees with decode-time sorting
        unsorted.sort()
        once = list(unsorted)
        unsorted.sort()
        if list(unsorted) != once or not unsorted.is_sorted or once != list(ordered):
            return fail("sort idempotence", pairs)

        # (4) Literal construction leaves one entry per name
        literal = MPRList(pairs)
        names = [d.name for d in literal]
        if len(names) != len(set(names)) or not is_ascending(literal):
            return fail("literal REPLACE construction", pairs)

        # (5) Insert policies
        pref, name = rand_preference(), rand_name()
        existing = any(d.name == Delegation(pref, name).name for d in literal)
        count = lambda lst: sum(1 for d in lst if d.name == Delegation(pref, name).name)

        skip = MPRList(pairs)
        if skip.insert(pref, name, INS_SKIP) == existing:
            return fail("SKIP return value", (pairs, pref, name))
        if existing and skip != literal:
            return fail("SKIP changed the list", (pairs, pref, name))

        replace = MPRList(pairs)
        replace.insert(pref, name, INS_REPLACE)
        if count(replace) != 1 or Delegation(pref, name) not in list(replace):
            return fail("REPLACE postcondition", (pairs, pref, name))

        append = MPRList(pairs)
        append.insert(pref, name, INS_APPEND)
        if count(append) != count(literal) + 1 or not is_ascending(append):
            return fail("APPEND postcondition", (pairs, pref, name))

    print(f"OK: invariants passed for TRIALS={TRIALS} seed={SEED}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
