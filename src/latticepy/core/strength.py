"""Combinators for numeric and symbolic bond strengths.

A strength is either a number (int, float or complex) or a symbolic label
(``str``). Numbers combine arithmetically; as soon as one operand is symbolic
the combination is the textual composition ``"a+b"`` or ``"a*b"``.
"""

from __future__ import annotations

from tokenize import TokenError

import numpy as np
import sympy as sp
from sympy.core.sympify import SympifyError
from sympy.parsing.sympy_parser import parse_expr, standard_transformations

from .types import Strength


ZERO_STRENGTH_TOLERANCE = 1e-18

# parse_expr evaluates generated code; only these names are visible to it
_NAMESPACE = {
    "__builtins__": {},
    "Integer": sp.Integer,
    "Float": sp.Float,
    "Rational": sp.Rational,
    "Symbol": sp.Symbol,
    "Function": sp.Function,
    "I": sp.I,
}


class StrengthEvaluationError(ValueError):
    """Raised when a symbolic strength is not a plain arithmetic expression."""


def is_symbolic(strength: Strength) -> bool:
    return isinstance(strength, str)


def conjugate_strength(strength: Strength) -> Strength:
    if isinstance(strength, (complex, np.complexfloating)):
        return strength.conjugate()
    return strength


def add_strengths(first: Strength, second: Strength) -> Strength:
    if is_symbolic(first) or is_symbolic(second):
        return f"{first}+{second}"
    return first + second


def multiply_strengths(first: Strength, second: Strength) -> Strength:
    if is_symbolic(first) or is_symbolic(second):
        return f"{first}*{second}"
    return first * second


def strengths_equal(first: Strength, second: Strength) -> bool:
    """Exact equality; a symbolic strength never equals a numeric one."""

    if is_symbolic(first) != is_symbolic(second):
        return False
    return bool(first == second)


def parse_float_strength(strength: Strength) -> float | None:
    """Return the float a symbolic strength spells out, or ``None``."""

    try:
        return float(strength)
    except (TypeError, ValueError):
        return None


def is_negligible(strength: Strength, tolerance: float = ZERO_STRENGTH_TOLERANCE) -> bool:
    """True for strengths with magnitude ``<= tolerance``.

    Symbolic strengths count only when they parse cleanly to a float.
    """

    if is_symbolic(strength):
        value = parse_float_strength(strength)
        return value is not None and abs(value) <= tolerance
    return abs(strength) <= tolerance




def _to_number(value: sp.Expr) -> Strength:
    if value.is_Integer:
        return int(value)
    if value.is_real:
        return float(value)
    return complex(value)


def evaluate_strength(expression: str) -> Strength:
    """Evaluate an arithmetic expression of numeric literals with sympy.

    The result must be a finite number; labels that remain free symbols are
    reported as ``StrengthEvaluationError``.
    """

    text = expression.strip()
    if "__" in text:
        raise StrengthEvaluationError(f"Strength expression '{expression}' contains a dunder name.")
    try:
        value = parse_expr(
            text,
            global_dict=dict(_NAMESPACE),
            transformations=standard_transformations,
        )
    except (SympifyError, SyntaxError, TokenError, TypeError, ValueError, NameError, AttributeError) as exc:
        raise StrengthEvaluationError(f"Cannot parse strength expression '{expression}'.") from exc

    if not isinstance(value, sp.Expr):
        raise StrengthEvaluationError(f"Strength expression '{expression}' is not arithmetic.")
    if value.free_symbols:
        names = ", ".join(sorted(str(s) for s in value.free_symbols))
        raise StrengthEvaluationError(f"Strength expression '{expression}' has unresolved labels: {names}.")
    if not value.is_number:
        raise StrengthEvaluationError(f"Strength expression '{expression}' does not reduce to a number.")
    if value.has(sp.zoo, sp.nan, sp.oo, -sp.oo):
        raise StrengthEvaluationError(f"Strength expression '{expression}' is not finite.")
    return _to_number(value)
