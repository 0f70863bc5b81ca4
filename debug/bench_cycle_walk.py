#!/usr/bin/env python3
"""Quick fwxfpe benchmark - encrypt timing and cycle-walk pass counts"""
import time

KEY = "0123456789zxcvbn"
PASSWORD = "0123456789qwerty"
IV = "0123456789abcdef"
DOMAINS = [("0", "999"), ("0", "999999999"), ("100000", "999999")]


def bench_domain(min_value, max_value, count=200):
    from fwxfpe import fwxfpe

    ctx = fwxfpe.Context(min_value, max_value, "aes-128-cbc", 7)
    key = fwxfpe.KeyMaterial(KEY, PASSWORD, IV)
    lower = int(min_value)
    start = time.perf_counter()
    for offset in range(count):
        ctx.encrypt(str(lower + offset), key)
    elapsed = time.perf_counter() - start
    space = 1 << ctx.sizing.bin_size
    size = int(max_value) - lower + 1
    return elapsed, space / size


def main():
    print("Benchmarking fwxfpe encrypt (200 values per domain)...\n")
    for min_value, max_value in DOMAINS:
        elapsed, passes = bench_domain(min_value, max_value)
        print(f"[{min_value}, {max_value}]")
        print(f"  Time: {elapsed:.3f}s ({elapsed / 200 * 1000:.2f} ms/op)")
        print(f"  Expected walk passes: {passes:.2f}")
    print("\n✅ Python benchmark complete")


if __name__ == '__main__':
    main()
