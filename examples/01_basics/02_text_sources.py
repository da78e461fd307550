"""
Reading lines and words from text, and stepping through a conduit
piece by piece.
"""
import io

from stroom import from_text_lines, from_text_words

TEXT = """the quick brown fox
jumps over
the lazy dog"""


def main():
    lines = from_text_lines(io.StringIO(TEXT))
    print("--- First Line ---")
    print(lines.first())
    print("--- Remaining Lines ---")
    print(lines.take_all())

    words = from_text_words(io.StringIO(TEXT))
    print("\n--- Words 3 to 5 ---")
    print(words.drop(2).take(3))
    words.drop_all()


if __name__ == "__main__":
    main()
