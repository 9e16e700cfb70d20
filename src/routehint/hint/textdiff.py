"""Character-level edit scripts between two strings.

``diff(actual, expected)`` returns the shortest sequence of ``Same``,
``Add`` and ``Remove`` runs that turns *actual* into *expected*:

- ``Add``    — text in *expected* that *actual* lacks,
- ``Remove`` — text in *actual* that *expected* doesn't have.

The script comes from a longest-common-subsequence table, so its
distance (added plus removed characters) is minimal. When several
minimal scripts exist, removals are emitted before additions, which
keeps the result deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Same:
    text: str


@dataclass(frozen=True, slots=True)
class Add:
    text: str


@dataclass(frozen=True, slots=True)
class Remove:
    text: str


type Edit = Same | Add | Remove
type EditScript = tuple[Edit, ...]


def _lcs_table(a: str, b: str) -> list[list[int]]:
    """``table[i][j]`` is the LCS length of ``a[i:]`` and ``b[j:]``."""
    table = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i in range(len(a) - 1, -1, -1):
        row, below = table[i], table[i + 1]
        for j in range(len(b) - 1, -1, -1):
            if a[i] == b[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])
    return table


def _append(ops: list[Edit], kind: type[Same] | type[Add] | type[Remove], char: str) -> None:
    """Append one character, merging it into the previous run of the same kind."""
    if ops and type(ops[-1]) is kind:
        ops[-1] = kind(ops[-1].text + char)
    else:
        ops.append(kind(char))


def diff(actual: str, expected: str) -> EditScript:
    """Return the minimal edit script turning *actual* into *expected*."""
    table = _lcs_table(actual, expected)
    ops: list[Edit] = []
    i = j = 0
    while i < len(actual) and j < len(expected):
        if actual[i] == expected[j]:
            _append(ops, Same, actual[i])
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            _append(ops, Remove, actual[i])
            i += 1
        else:
            _append(ops, Add, expected[j])
            j += 1
    for char in actual[i:]:
        _append(ops, Remove, char)
    for char in expected[j:]:
        _append(ops, Add, char)
    return tuple(ops)


def distance(script: EditScript) -> int:
    """Number of characters added plus removed."""
    return sum(len(op.text) for op in script if not isinstance(op, Same))


def actual_text(script: EditScript) -> str:
    """Reconstruct the *actual* side (``Same`` + ``Remove``)."""
    return "".join(op.text for op in script if not isinstance(op, Add))


def expected_text(script: EditScript) -> str:
    """Reconstruct the *expected* side (``Same`` + ``Add``)."""
    return "".join(op.text for op in script if not isinstance(op, Remove))
