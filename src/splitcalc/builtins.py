"""
Default math functions and constants.

Every function takes the evaluated argument list and returns a float.
Missing arguments read as 0.0 and extra arguments are ignored, so any
function tolerates an empty argument list.

Registration order is significant: when a fragment starts with two
registered names (``sin`` and ``sinh``), the earlier one yields to the
later one. Longer names that extend a shorter one are therefore
registered after it.
"""

import math
from typing import Callable, Dict, Optional, Sequence

import numpy as np

# Signature of a registered n-ary function.
MathFunction = Callable[[Sequence[float]], float]

# Signature of a registered constant.
ConstantFunction = Callable[[], float]


def _arg(args: Sequence[float], index: int) -> float:
    """Returns the argument at index, or 0.0 when it was not supplied."""
    if index < len(args):
        return args[index]
    return 0.0


def _unary(fn: Callable[[float], float]) -> MathFunction:
    """Adapts a one-argument numpy ufunc to the registry signature."""

    def call(args: Sequence[float]) -> float:
        return float(fn(_arg(args, 0)))

    return call


def _degrees(fn: Callable[[float], float]) -> MathFunction:
    """Adapts a radian trig function to take degrees."""

    def call(args: Sequence[float]) -> float:
        return float(fn(np.deg2rad(_arg(args, 0))))

    return call


def _round(args: Sequence[float]) -> float:
    if len(args) == 2:
        if not math.isfinite(args[1]):
            return math.nan
        return float(np.round(args[0], int(args[1])))
    return float(np.round(_arg(args, 0)))


def _log(args: Sequence[float]) -> float:
    if len(args) == 2:
        return float(np.log(args[0]) / np.log(args[1]))
    return float(np.log(_arg(args, 0)))


def _atan2(args: Sequence[float]) -> float:
    return float(np.arctan2(_arg(args, 0), _arg(args, 1)))


def _min(args: Sequence[float]) -> float:
    return float(np.minimum(_arg(args, 0), _arg(args, 1)))


def _max(args: Sequence[float]) -> float:
    return float(np.maximum(_arg(args, 0), _arg(args, 1)))


def _fact(args: Sequence[float]) -> float:
    """Factorial of the argument truncated to an integer; negative gives 0."""
    x = _arg(args, 0)
    if not math.isfinite(x):
        return math.nan
    n = int(x)
    if n < 0:
        return 0.0
    try:
        return float(math.factorial(n))
    except OverflowError:
        return math.inf


def _binom(args: Sequence[float]) -> float:
    """Binomial coefficient of the truncated arguments."""
    x, y = _arg(args, 0), _arg(args, 1)
    if not (math.isfinite(x) and math.isfinite(y)):
        return math.nan
    n, k = int(x), int(y)
    if n < 0 or k < 0:
        return 0.0
    if n == 0 or k == 0 or k == n:
        return 1.0
    if k > n:
        return 0.0
    try:
        return float(math.comb(n, k))
    except OverflowError:
        return math.inf


def make_random_sampler(rng: np.random.Generator) -> MathFunction:
    """
    Creates the ``rnd`` function bound to a random generator.

    rnd() samples [0, 1), rnd(a) samples [0, a), rnd(a, b) samples [a, b).
    """

    def rnd(args: Sequence[float]) -> float:
        if len(args) == 2:
            return float(args[0] + rng.random() * (args[1] - args[0]))
        if len(args) == 1:
            return float(rng.random() * args[0])
        return float(rng.random())

    return rnd


def default_functions(seed: Optional[int] = None) -> Dict[str, MathFunction]:
    """
    Builds the default function table.

    Args:
        seed: Optional seed for the ``rnd`` sampler

    Returns:
        A new dict of name -> function, in registration order
    """
    return {
        "sqrt": _unary(np.sqrt),
        "abs": _unary(np.abs),
        "ln": _unary(np.log),
        "floor": _unary(np.floor),
        "ceil": _unary(np.ceil),
        "round": _round,
        "exp": _unary(np.exp),
        "log": _log,
        "log10": _unary(np.log10),
        "sgn": _unary(np.sign),
        "sin": _unary(np.sin),
        "sind": _degrees(np.sin),
        "sinh": _unary(np.sinh),
        "cos": _unary(np.cos),
        "cosd": _degrees(np.cos),
        "cosh": _unary(np.cosh),
        "tan": _unary(np.tan),
        "tand": _degrees(np.tan),
        "tanh": _unary(np.tanh),
        "asin": _unary(np.arcsin),
        "acos": _unary(np.arccos),
        "atan": _unary(np.arctan),
        "atan2": _atan2,
        "min": _min,
        "max": _max,
        "rnd": make_random_sampler(np.random.default_rng(seed)),
        "fact": _fact,
        "binom": _binom,
    }


def default_constants() -> Dict[str, ConstantFunction]:
    """Builds the default constant table, in registration order."""
    return {
        "PI": lambda: math.pi,
        "e": lambda: math.e,
        "Infinity": lambda: math.inf,
        "NegInfinity": lambda: -math.inf,
        "Deg2Rad": lambda: math.pi / 180.0,
        "Rad2Deg": lambda: 180.0 / math.pi,
    }
