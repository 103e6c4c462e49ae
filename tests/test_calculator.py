import math

from fxcalc.calculator import Calculator
from fxcalc.util import CalcError, DomainError, SolveError

from pytest import approx, raises


def test_evaluate_sets_answer(calculator):
    assert calculator.evaluate('2+3') == 5
    assert calculator.recall('Ans') == 5
    assert calculator.evaluate('Ans*2') == 10


def test_failed_evaluation_keeps_answer(calculator):
    calculator.evaluate('1+1')
    with raises(DomainError):
        calculator.evaluate('sqrt(-1)')
    assert calculator.recall('Ans') == 2


def test_store_and_recall(calculator):
    calculator.store('a', 42)
    assert calculator.recall('A') == 42
    assert calculator.evaluate('a+1') == 43


def test_e_register_is_not_euler(calculator):
    calculator.store('E', 3)
    assert calculator.evaluate('E*2') == 6
    assert calculator.evaluate('e') == math.e


def test_memory_arithmetic(calculator):
    calculator.store('M', 10)
    calculator.add('M', 5)
    assert calculator.recall('M') == 15
    calculator.subtract('M', 3)
    assert calculator.recall('M') == 12


def test_clear(calculator):
    calculator.store('A', 1)
    calculator.store('B', 2)
    calculator.evaluate('7')
    calculator.clear('A')
    assert calculator.recall('A') == 0
    assert calculator.recall('B') == 2
    calculator.clear()
    assert calculator.recall('B') == 0
    assert calculator.recall('Ans') == 7


def test_invalid_register(calculator):
    with raises(CalcError, match='Invalid memory register: Q'):
        calculator.store('Q', 1)
    with raises(CalcError):
        calculator.recall('G')


def test_angle_unit():
    assert Calculator('RAD').evaluate('sin(pi/2)') == approx(1)
    assert Calculator().evaluate('sin(90)') == approx(1)


def test_equation():
    assert Calculator.equation('x^2=9') == '(x^2)-(9)'
    assert Calculator.equation('x-1') == 'x-1'
    with raises(CalcError, match='More than one ='):
        Calculator.equation('x=1=2')


def test_solve_equation(calculator):
    assert calculator.solve('x^2=9', initial_guess=1) == approx(3)
    assert calculator.recall('X') == approx(3)
    assert calculator.recall('Ans') == approx(3)


def test_solve_guess_from_register(calculator):
    calculator.store('X', 1)
    assert calculator.solve('x^2-2') == approx(math.sqrt(2))


def test_solve_other_register(calculator):
    assert calculator.solve('2*y=3', 'y') == approx(1.5)
    assert calculator.recall('Y') == approx(1.5)


def test_failed_solve_keeps_registers(calculator):
    calculator.store('X', 7)
    with raises(SolveError):
        calculator.solve('sqrt(x)+1', method='newton', initial_guess=-4)
    assert calculator.recall('X') == 7


def test_integrate(calculator):
    assert calculator.integrate('x', 0, 2) == approx(2)
    assert calculator.recall('Ans') == approx(2)
