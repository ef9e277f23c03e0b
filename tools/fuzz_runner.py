#!/usr/bin/env python3
# tools/fuzz_runner.py
#
# Mutation fuzzing of the MPRList decoder.
#
# Starts from random VALID list wires and applies byte-level mutations:
#   A) flip / replace random octets
#   B) truncate or extend the buffer
#   C) splice a random slice of one wire into another
#
# Every mutated input must either decode to a non-empty list whose
# re-encoding decodes to the same entries, or raise MprListError.
# Any other exception prints a minimal repro payload and exits non-zero.

import os, sys, random, traceback
from typing import List, Tuple

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(ROOT, "implementations", "python"))

from mprlist import MPRList, MprListError, TLV_CONTENT, TLV_MPR_LIST

SEED = int(os.environ.get("MPR_SEED", "4242"))
ROUNDS = int(os.environ.get("MPR_FUZZ_ROUNDS", "5000"))

random.seed(SEED)

def rand_wire() -> bytes:
    pairs: List[Tuple[int, str]] = []
    for _ in range(random.randint(1, 5)):
        comps = ["".join(random.choice("abc") for _ in range(random.randint(1, 3)))
                 for _ in range(random.randint(0, 3))]
        pairs.append((random.randint(0, 2**random.choice([8, 16, 32, 64]) - 1),
                      "/" + "/".join(comps)))
    return MPRList.unsorted(pairs).encode(random.choice([TLV_CONTENT, TLV_MPR_LIST]))

def mutate(wire: bytes, other: bytes) -> bytes:
    buf = bytearray(wire)
    r = random.random()
    if r < 0.5:
        for _ in range(random.randint(1, 3)):
            buf[random.randrange(len(buf))] = random.getrandbits(8)
    elif r < 0.75:
        if random.random() < 0.5:
            del buf[random.randrange(len(buf)):]
        else:
            buf += bytes(random.getrandbits(8) for _ in range(random.randint(1, 4)))
    else:
        a = random.randrange(len(other))
        b = random.randint(a, len(other))
        at = random.randrange(len(buf))
        buf[at:at] = other[a:b]
    return bytes(buf)

def crash(label: str, data: bytes) -> None:
    print("CRASH:", label)
    print("INPUT:", data.hex())
    traceback.print_exc()
    raise SystemExit(1)

def main() -> int:
    decoded = rejected = 0
    for _ in range(ROUNDS):
        data = mutate(rand_wire(), rand_wire())
        want_sort = random.random() < 0.5
        try:
            lst = MPRList.from_wire(data, want_sort=want_sort)
        except MprListError:
            rejected += 1
            continue
        except Exception:
            crash("decode raised a non-MprListError exception", data)

        try:
            again = MPRList.from_wire(lst.encode(data[0]), want_sort=want_sort)
        except Exception:
            crash("re-encode of a decoded list failed", data)
        if len(lst) == 0 or again != lst:
            print("MISMATCH: re-encode round-trip", data.hex())
            return 1
        decoded += 1

    print(f"OK: fuzz passed for ROUNDS={ROUNDS} seed={SEED} "
          f"(decoded={decoded}, rejected={rejected})")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
