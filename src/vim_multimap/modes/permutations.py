"""Letter arrangements used to enumerate shorthand mode descriptors."""

from __future__ import annotations

from functools import lru_cache

MODE_LETTERS = "vico"


def permutations(letters: str) -> tuple[str, ...]:
    """Return every ordered arrangement of every non-empty subset of ``letters``.

    Each level of the recursion keeps the tail arrangements on their own as well
    as with the removed head in front, so ``permutations("vi")`` is
    ``("i", "iv", "v", "vi")`` and ``permutations("vico")`` has 64 entries
    rather than 4!. The result is sorted and free of duplicates.
    """

    if len(letters) <= 1:
        return (letters,)
    if len(letters) == 2:
        return tuple(sorted({letters[0], letters[1], letters, letters[::-1]}))

    found: set[str] = set()
    for index, head in enumerate(letters):
        tail = letters[:index] + letters[index + 1 :]
        for arrangement in permutations(tail):
            found.add(arrangement)
            found.add(head + arrangement)
    return tuple(sorted(found))


@lru_cache(maxsize=None)
def mode_letter_catalogue(letters: str = MODE_LETTERS) -> tuple[str, ...]:
    """Every mode-letter set a directive name may start with.

    ``"a"`` and the bare ``"n"`` come first, followed by ``"n"`` plus each
    arrangement of ``letters``.
    """

    arrangements = permutations(letters)
    return ("a", "n") + tuple(f"n{arrangement}" for arrangement in arrangements)


__all__ = ["MODE_LETTERS", "permutations", "mode_letter_catalogue"]
