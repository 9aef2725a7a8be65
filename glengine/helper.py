"""Diagnostic printing helpers."""

from __future__ import annotations

from typing import Callable, Sequence


def format_vector(name: str, vector: Sequence[float]) -> str:
    """Format a vector as ``name: x, y, z`` with six decimals."""
    return f"{name}: " + ", ".join(f"{float(c):f}" for c in vector)


def _print_sized(name: str, vector: Sequence[float], size: int) -> None:
    if len(vector) != size:
        raise ValueError(f"expected a {size}-component vector, got {len(vector)}")
    print(format_vector(name, vector))


def print_vector3(name: str, vector: Sequence[float]) -> None:
    """Print a 3-component vector."""
    _print_sized(name, vector, 3)


def print_vector2(name: str, vector: Sequence[float]) -> None:
    """Print a 2-component vector."""
    _print_sized(name, vector, 2)


def print_gl_error(context_name: str, get_error: Callable[[], int]) -> None:
    """Report pending graphics errors obtained from ``get_error``.

    Like the driver query loop it mirrors, the continuation check consumes
    an error code of its own.
    """
    print("----------------- Error check ----------------")
    while True:
        code = get_error()
        print(f"Context: {context_name}")
        print(f"Error code: {code}" if code else "No errors")
        if not get_error():
            break
    print("-----------------------------------------------")