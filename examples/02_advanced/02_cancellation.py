"""
Taking the head of an endless stream.

A producer blocks as soon as its single-slot buffer is full, so a chain that
is abandoned half-way leaves its threads parked forever. Using the conduit as
a context manager cancels the chain on exit and lets the threads finish.
"""
import itertools

from stroom import Conduit


def naturals(out):
    for i in itertools.count():
        out.put(i)


def main():
    with Conduit(naturals).map(lambda x: x * x) as squares:
        print("--- First Squares ---")
        print(squares.take(5))

    squares.join(timeout=1.0)
    squares.upstream.join(timeout=1.0)
    print(f"\nproducer still running: {squares.upstream.running}")


if __name__ == "__main__":
    main()
