"""
Benchmark: seqdelta vs difflib.SequenceMatcher.

difflib produces opcodes over SOURCE coordinates that must be replayed
right to left (or rebased) to patch a list; seqdelta produces a delta
over TARGET coordinates that applies left to right in one pass, and
whose payloads share one arena.

The point is NOT "we're faster" — difflib uses a heuristic matcher that
is usually faster on long inputs.  The point is:
    seqdelta's rewrites come from an exact LCS, are canonical, and can
    be replayed onto derived structures (Tokenization) incrementally.
"""

import difflib
import sys
import os
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from seqdelta.core import diff, lcs_length
from seqdelta.delta import SequenceDelta
from seqdelta.errors import ScanError
from seqdelta.formats import diff_strings, patch_string
from seqdelta.lex import Token, Tokenization


# ═══════════════════════════════════════════════════════════════════
#  TEST DATA
# ═══════════════════════════════════════════════════════════════════

CONFIG_A = """\
[server]
host = 0.0.0.0
port = 443
tls = true
workers = 4

[database]
host = db.internal
port = 5432
name = production
pool_size = 10

[cache]
backend = redis
ttl = 300
""".splitlines()

CONFIG_B = """\
[server]
host = 0.0.0.0
port = 8080
tls = false
workers = 8

[database]
host = db.staging
port = 5432
name = staging
pool_size = 5

[monitoring]
enabled = true
endpoint = /health
""".splitlines()

SOURCE_V1 = "def area(w, h):\n    return w * h\n\nprint(area(3, 4))\n"
SOURCE_V2 = "def area(width, height=1):\n    return width * height\n\nprint(area(3))\n"

STRING_PAIRS = [
    ("kitten", "sitting"),
    ("saturday", "sunday"),
    ("intention", "execution"),
    ("pneumonoultramicroscopicsilicovolcanoconiosis",
     "pseudopseudohypoparathyroidism"),
    ("abcdefghijklmnopqrstuvwxyz", "zyxwvutsrqponmlkjihgfedcba"),
]


class SourceTokenizer:
    """Identifiers, numbers, whitespace runs and single punctuation."""
    lookahead = 1

    def scan(self, items, i):
        if i >= len(items):
            raise ScanError(f"end of input at {i}")
        c = items[i]
        for kind, accept in (("name", _is_name), ("number", str.isdigit), ("space", str.isspace)):
            if accept(c):
                j = i + 1
                while j < len(items) and accept(items[j]):
                    j += 1
                return Token(kind, i, j - 1)
        return Token("punct", i, i)


def _is_name(c):
    return c.isalpha() or c == "_"


def _difflib_patch(a, b):
    """Patch a copy of a into b by replaying SequenceMatcher opcodes."""
    target = list(a)
    ops = difflib.SequenceMatcher(None, a, b, autojunk=False).get_opcodes()
    for tag, i1, i2, j1, j2 in reversed(ops):
        if tag != "equal":
            target[i1:i2] = b[j1:j2]
    return target, sum(1 for op in ops if op[0] != "equal")


# ═══════════════════════════════════════════════════════════════════
#  BENCHMARKS
# ═══════════════════════════════════════════════════════════════════

def benchmark_string_round_trip():
    """Verify and time diff/patch on classic string pairs."""
    print("=" * 70)
    print("  §1  STRING ROUND-TRIP")
    print("=" * 70)
    print()

    all_pass = True
    for s1, s2 in STRING_PAIRS:
        t0 = time.perf_counter()
        delta = diff_strings(s1, s2)
        patched = patch_string(s1, delta)
        dt = time.perf_counter() - t0

        match = "✓" if patched == s2 else "✗"
        if patched != s2:
            all_pass = False

        print(f"  {match} \"{s1[:30]}\" → \"{s2[:30]}\"  rewrites={len(delta)}  "
              f"LCS={lcs_length(s1, s2)}  [{dt*1000:.1f}ms]")

    print()
    if all_pass:
        print("  RESULT: every delta reproduces its target exactly.")
    else:
        print("  RESULT: MISMATCH — a delta does NOT reproduce its target!")
    print()


def benchmark_config_diff():
    """Line-level diff of a realistic config file."""
    print("=" * 70)
    print("  §2  CONFIG DIFF (line level)")
    print("=" * 70)
    print()

    t0 = time.perf_counter()
    delta = diff(CONFIG_A, CONFIG_B)
    dt_diff = time.perf_counter() - t0

    target = list(CONFIG_A)
    t0 = time.perf_counter()
    delta.apply(target)
    dt_apply = time.perf_counter() - t0

    print(f"  Rewrites:        {len(delta)}")
    print(f"  Arena items:     {len(delta.arena)}")
    print(f"  Round-trip:      {'OK' if target == CONFIG_B else 'MISMATCH'}")
    print(f"  Time (diff):     {dt_diff*1000:.2f}ms")
    print(f"  Time (apply):    {dt_apply*1000:.3f}ms")
    print()
    for rewrite in delta:
        print(f"    {rewrite.region!r} ← {list(rewrite.payload)}")
    print()


def benchmark_vs_difflib():
    """Compare with difflib.SequenceMatcher."""
    print("=" * 70)
    print("  §3  COMPARISON WITH difflib")
    print("=" * 70)
    print()

    for label, a, b in [("config", CONFIG_A, CONFIG_B),
                        ("source", list(SOURCE_V1), list(SOURCE_V2))]:
        t0 = time.perf_counter()
        delta = diff(a, b)
        target = list(a)
        delta.apply(target)
        sd_time = time.perf_counter() - t0

        t0 = time.perf_counter()
        dl_target, dl_ops = _difflib_patch(a, b)
        dl_time = time.perf_counter() - t0

        print(f"  {label}:")
        print(f"    seqdelta:  {len(delta):>3} rewrites  "
              f"{'OK' if target == b else 'MISMATCH'}  {sd_time*1000:.3f}ms")
        print(f"    difflib:   {dl_ops:>3} opcodes   "
              f"{'OK' if dl_target == b else 'MISMATCH'}  {dl_time*1000:.3f}ms")
    print()

    print("  KEY INSIGHT:")
    print("    difflib opcodes index the SOURCE and must be replayed backwards.")
    print("    seqdelta rewrites index the TARGET and apply front to back,")
    print("    so the same delta can update a token bitmap in one pass.")
    print()


def benchmark_tokenization():
    """Incremental vs full rescan after an edit to source text."""
    print("=" * 70)
    print("  §4  INCREMENTAL TOKENIZATION")
    print("=" * 70)
    print()

    for copies in [10, 100, 1000]:
        before = list(SOURCE_V1 * copies)
        after = list(SOURCE_V1 * (copies - 1) + SOURCE_V2)
        # Only the last copy differs; diff it and rebase onto the full text
        offset = len(SOURCE_V1) * (copies - 1)
        delta = diff(before[offset:], after[offset:])
        full_delta = SequenceDelta()
        for rewrite in delta:
            region = rewrite.region
            full_delta.append(range(region.offset + offset, region.end + offset), rewrite.payload)

        timings = {}
        for incremental in (False, True):
            tok = Tokenization(before, SourceTokenizer(), incremental=incremental)
            t0 = time.perf_counter()
            tok.apply(full_delta)
            timings[incremental] = time.perf_counter() - t0
            assert list(tok.items) == after

        print(f"  {len(before):>6} items: full={timings[False]*1000:>8.2f}ms  "
              f"incremental={timings[True]*1000:>8.2f}ms")
    print()


def benchmark_scaling():
    """Test how the LCS diff scales with input size."""
    print("=" * 70)
    print("  §5  SCALING")
    print("=" * 70)
    print()

    for n in [10, 50, 100, 500]:
        # Shifted by 1
        a_data = list(range(n))
        b_data = list(range(1, n + 1))

        t0 = time.perf_counter()
        d = diff(a_data, b_data)
        dt = time.perf_counter() - t0

        print(f"  Seq length {n:>4}: rewrites={len(d):>3}  time={dt*1000:>8.2f}ms")

    print()


def main():
    print()
    print("╔══════════════════════════════════════════════════════════════════════╗")
    print("║          SEQUENCE DELTAS — BENCHMARK SUITE                           ║")
    print("║          seqdelta v0.1.0                                             ║")
    print("╚══════════════════════════════════════════════════════════════════════╝")
    print()

    benchmark_string_round_trip()
    benchmark_config_diff()
    benchmark_vs_difflib()
    benchmark_tokenization()
    benchmark_scaling()

    print("=" * 70)
    print("  SUMMARY")
    print("=" * 70)
    print()
    print("  seqdelta provides sequence deltas that:")
    print("    1. Round-trip exactly (diff then apply reproduces the target)")
    print("    2. Are canonical (one specific LCS, deterministic tie-break)")
    print("    3. Apply left to right in target coordinates")
    print("    4. Keep derived token boundaries up to date incrementally")
    print()


if __name__ == "__main__":
    main()
