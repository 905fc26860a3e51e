"""Parameter normalization shared by every execution path."""

from typing import Any, Sequence


def normalize_params(params: tuple[Any, ...]) -> Sequence[Any]:
    """Normalize variadic call parameters into one positional sequence.

    Callers may pass parameters flat (``db.execute(sql, 1, "a")``) or as a
    single list or tuple (``db.execute(sql, [1, "a"])``). When exactly one
    argument is given and it is list-shaped it is unwrapped; nothing else
    is converted.

    Args:
        params: The positional arguments as received by the caller.

    Returns:
        Sequence of values to bind to ``?`` placeholders, in order.
    """
    if len(params) == 1 and isinstance(params[0], (list, tuple)):
        return tuple(params[0])
    return params
