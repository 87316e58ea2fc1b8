"""Package-level utilities for affinekit."""

import inspect
from pathlib import Path


def find_stack_level() -> int:
    """Find the first place in the stack that is not inside affinekit.

    Adapted from
    [pandas](https://github.com/pandas-dev/pandas/tree/main/pandas/util/_exceptions.py#L37)
    and
    [Nilearn](https://github.com/nilearn/nilearn/blob/2d1a2c6d901ef4aba2737ed84e08ad1956afd123/nilearn/_utils/logger.py#L150).

    Returns
    -------
    int
        Stack level pointing to the first frame outside the affinekit package.
    """
    import affinekit

    pkg_dir = Path(affinekit.__file__).parent

    frame = inspect.currentframe()
    try:
        n = 0
        while frame:
            filename = inspect.getfile(frame)
            if not filename.startswith(str(pkg_dir)):
                break
            frame = frame.f_back
            n += 1
    finally:
        # See note in
        # https://docs.python.org/3/library/inspect.html#inspect.Traceback
        del frame
    return n


def format_number(value: float) -> str:
    """Format a float with the shortest representation that round-trips.

    Integral values lose their trailing ``.0`` and negative zero is written as ``0``,
    so ``2.0`` becomes ``"2"`` and ``-0.0`` becomes ``"0"``.

    Parameters
    ----------
    value : float
        Value to format.

    Returns
    -------
    str
        Text representation of `value`.
    """
    # Adding 0.0 turns -0.0 into 0.0.
    text = repr(float(value) + 0.0)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def round_number(value: float, precision: int) -> float:
    """Round `value` to `precision` decimals, dropping representation noise.

    ``1.9999999999`` rounds to ``2.0`` at the default precision of 7.

    Parameters
    ----------
    value : float
        Value to round.
    precision : int
        Number of decimal digits to keep.

    Returns
    -------
    float
        Rounded value.
    """
    return round(float(value), precision) + 0.0


def _one_level_deeper() -> int:
    """Call `find_stack_level` one level deeper.

    Used in tests for `find_stack_level`. Must be defined in an affinekit module (not a
    test file) so the stack level counter increments past this frame.

    Returns
    -------
    int
        Result of `find_stack_level` called from within affinekit.
    """
    return find_stack_level()
