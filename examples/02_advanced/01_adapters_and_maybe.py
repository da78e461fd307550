"""
Using the function adapters: currying and flipping ordinary functions, and
catching unusable functions when a stage is built rather than while it runs.
"""
import operator

from stroom import AdapterError, attempt, FilterFunc, curry, flip, just, nothing, values


def label(x: int) -> str:
    return f"#{x}"


def main():
    add_ten = curry(operator.add, 10)
    print("--- Curried Map ---")
    print(values(1, 2, 3).map(add_ten).take_all())

    # reduce calls combiner(value, acc); flip makes it acc - value.
    print("\n--- Flipped Reduce ---")
    print(values(1, 2, 3).reduce(flip(operator.sub), 100))

    print("\n--- Construction Errors ---")
    source = values(1, 2, 3)
    try:
        source.filter(label)
    except AdapterError as e:
        print(f"rejected: {e}")
    source.drop_all()

    outcome = attempt(FilterFunc, label)
    print(f"attempt ok={outcome.ok}")

    print("\n--- Maybe ---")
    print(just(20).map(add_ten))
    print(nothing.map(add_ten))
    print(just(just("nested")).join())


if __name__ == "__main__":
    main()
