import numpy as np
import pytest

from latticepy.core.strength import (
    StrengthEvaluationError,
    add_strengths,
    conjugate_strength,
    evaluate_strength,
    is_negligible,
    multiply_strengths,
    parse_float_strength,
    strengths_equal,
)


def test_numeric_strengths_combine_arithmetically() -> None:
    assert add_strengths(2.0, 3.0) == 5.0
    assert multiply_strengths(2.0, 1j) == 2j
    assert add_strengths(1 + 1j, 1 - 1j) == 2.0


def test_symbolic_strengths_combine_textually() -> None:
    assert add_strengths(2.0, "x") == "2.0+x"
    assert add_strengths("t1", "t2") == "t1+t2"
    assert multiply_strengths("a", 3) == "a*3"


def test_conjugate_only_touches_complex_values() -> None:
    assert conjugate_strength(1 + 2j) == 1 - 2j
    assert conjugate_strength(np.complex128(0.5j)) == -0.5j
    assert conjugate_strength(1.5) == 1.5
    assert conjugate_strength("t") == "t"


def test_symbolic_never_equals_numeric() -> None:
    assert not strengths_equal(1.0, "1.0")
    assert strengths_equal(1, 1.0)
    assert strengths_equal("t", "t")
    assert not strengths_equal("t", "u")


def test_negligible_strengths() -> None:
    assert is_negligible(1e-20)
    assert not is_negligible(1e-10)
    assert is_negligible(0j)
    assert is_negligible("1e-30")
    assert not is_negligible("t")
    assert not is_negligible("0.5")
    assert parse_float_strength("t") is None
    assert parse_float_strength(" 2.5 ") == 2.5


def test_evaluate_arithmetic_expressions() -> None:
    assert evaluate_strength("2*(3+1)") == 8
    assert evaluate_strength("-1.5 + 0.5") == -1.0
    assert evaluate_strength("2**3/4") == 2.0
    assert evaluate_strength("1j*2") == 2j


def test_evaluate_returns_plain_python_numbers() -> None:
    assert type(evaluate_strength("2*(3+1)")) is int
    assert type(evaluate_strength("0.5*2")) is float
    assert type(evaluate_strength("1/3")) is float
    assert type(evaluate_strength("1 + 2j")) is complex


@pytest.mark.parametrize("expression", ["t*2", "2 +", "__import__('os')", "(1).__class__", "1/0", "[1, 2]", "1 < 2", "f(2)"])
def test_evaluate_rejects_non_arithmetic(expression: str) -> None:
    with pytest.raises(StrengthEvaluationError):
        evaluate_strength(expression)
