'''
Integration tests
'''

import math

from fxcalc.context import Context
from fxcalc.integration import (discontinuities, integrate, romberg, simpson,
                                trapezoid)
from fxcalc.util import DivisionByZeroError, IntegrateError, NonFiniteError

from pytest import approx, raises


def test_polynomial():
    assert integrate(lambda x: x * x, 0, 1) == approx(1 / 3)
    assert integrate('x^2', 0, 1) == approx(1 / 3)


def test_cosine():
    assert integrate(math.cos, 0, math.pi / 2) == approx(1)
    assert integrate('cos(x)', 0, math.pi / 2,
                     context=Context('RAD')) == approx(1)


def test_angle_unit_applies_to_expressions():
    assert integrate('cos(x)', 0, 90) == approx(180 / math.pi)


def test_empty_interval():
    assert integrate('1/x', 0, 0) == 0.0


def test_reversed_bounds():
    assert integrate(lambda x: x, 1, 0) == approx(-0.5)
    assert integrate('x^2', 1, 0) == approx(-1 / 3)


def test_other_variable():
    assert integrate('t^2', 0, 3, variable='t') == approx(9)


def test_infinite_bounds():
    with raises(IntegrateError, match='must be finite'):
        integrate(lambda x: 1, 0, math.inf)


def test_non_finite_value():
    with raises(NonFiniteError, match='non-finite value inf'):
        integrate(lambda x: math.inf, 0, 1)


def test_evaluation_errors_reported():
    with raises(IntegrateError, match='Cannot evaluate at X=0') as excinfo:
        integrate('1/x', -1, 1)
    assert isinstance(excinfo.value.__cause__, DivisionByZeroError)
    with raises(IntegrateError):
        integrate('ln(x)', 0, 1)


def test_parse_errors_reported():
    with raises(IntegrateError, match='Cannot parse'):
        integrate('x+(', 0, 1)


def test_context_left_alone():
    context = Context(bindings={'X': 5})
    with raises(IntegrateError):
        integrate('1/x', -1, 1, context=context)
    assert context.bindings == {'X': 5}
    integrate('x', 0, 1, context=context)
    assert context.bindings == {'X': 5}


def test_max_depth_accepts_first_refinement():
    whole = simpson(math.sqrt, 0, 1)
    refined = simpson(math.sqrt, 0, 0.5) + simpson(math.sqrt, 0.5, 1)
    assert integrate(math.sqrt, 0, 1, max_depth=0) == \
        approx(refined + (refined - whole) / 15, rel=1e-12)


def test_non_finite_value_inside_recursion():
    def f(x):
        return math.inf if x == 0.25 else x

    with raises(NonFiniteError, match='at x = 0.25'):
        integrate(f, 0, 1)


def test_simpson_exact_for_cubics():
    assert simpson(lambda x: x ** 3, 0, 2) == approx(4)


def test_trapezoid():
    assert trapezoid(lambda x: x, 0, 1, n=10) == approx(0.5)
    assert trapezoid('x^2', 0, 1, n=1000) == approx(1 / 3, abs=1e-6)


def test_trapezoid_needs_a_panel():
    with raises(IntegrateError, match='at least one panel'):
        trapezoid(lambda x: x, 0, 1, n=0)


def test_romberg():
    assert romberg(math.exp, 0, 1) == approx(math.e - 1, abs=1e-9)


def test_discontinuities():
    assert discontinuities('1/x', -1, 1, samples=4) == [0.0]
    assert discontinuities('x^2', -1, 1) == []
