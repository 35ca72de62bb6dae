import random

from pyinstrument import Profiler
from linkedmap import new


def churn(n, rounds, seed=1):
    rng = random.Random(seed)
    m = new()
    for i in range(n):
        m.upsert(i, i)
    for _ in range(rounds):
        a = rng.randrange(n)
        b = rng.randrange(n)
        op = rng.randrange(4)
        if op == 0:
            m.move_to_front(a)
        elif op == 1:
            m.move_after(a, b)
        elif op == 2:
            m.remove(a)
            m.upsert(a, b)
        else:
            m.load(a)
    return m


def benchmark_large():
    N = 100_000
    ROUNDS = 1_000_000

    profiler = Profiler()
    profiler.start()

    print(f"Starting churn ({N} keys, {ROUNDS} operations)...")
    m = churn(N, ROUNDS)
    total = 0
    for _, value in m.items():
        total += value
    print(f"Churn finished, {len(m)} keys, value sum {total}.")

    profiler.stop()

    profiler.print()

    # Optional: save to HTML
    with open("linkedmap_profile.html", "w") as f:
        f.write(profiler.output_html())


if __name__ == "__main__":
    benchmark_large()
