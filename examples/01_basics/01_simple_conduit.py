"""
A simple example demonstrating the basic usage of stroom.
A source feeds a filter and a map stage, each running on its own thread, and
a terminal operation collects the result on the main thread.
"""
from stroom import integer_range


def is_odd(x: int) -> bool:
    return x % 2 == 1


def main():
    """Builds the conduit chain and drains it."""
    # 1. A source: the integers 1..10, produced by their own task.
    numbers = integer_range(1, 11)

    # 2. Stages: each call starts one task reading the previous conduit.
    squares = numbers.filter(is_odd).map(lambda x: x * x)

    # 3. A terminal operation blocks until the conduit closes.
    print("--- Odd Squares ---")
    print(squares.take_all())

    # Folding passes (new value, accumulator) to the combiner.
    total = integer_range(1, 6).reduce(lambda value, acc: value + acc, 0)
    print("\n--- Sum of 1..5 ---")
    print(total)


if __name__ == "__main__":
    main()
