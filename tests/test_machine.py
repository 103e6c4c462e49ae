'''
Stack machine and end-to-end evaluation tests
'''

import math

from fxcalc.context import Context
from fxcalc.machine import Machine, evaluate, evaluate_rpn, function_of
from fxcalc.parser import parse
from fxcalc.tokens import Function, Number, Operator
from fxcalc.util import (ArityError, DivisionByZeroError, DomainError,
                         EvaluationError, UndefinedVariableError)

from pytest import approx, mark, raises


@mark.parametrize('expression, value', [
    ('2+3*4', 14),
    ('(2+3)*4', 20),
    ('2^3^2', 512),
    ('8-3-2', 3),
    ('7%4', 3),
    ('9\N{DIVISION SIGN}3\N{MULTIPLICATION SIGN}2', 6),
])
def test_arithmetic(expression, value):
    assert evaluate(expression) == value


@mark.parametrize('expression, value', [
    ('-3+5', 2),
    ('5*-2', -10),
    ('-3^2', -9),
    ('2^-2', 0.25),
    ('-(2+3)', -5),
    ('3--2', 5),
])
def test_unary_minus(expression, value):
    assert evaluate(expression) == value


@mark.parametrize('text', ['0', '42', '3.25', '0.1', '.5', '123456.789'])
def test_literals_evaluate_to_themselves(text):
    assert evaluate(text) == float(text)


@mark.parametrize('expression', ['sqrt(-1)', 'log(0)', 'ln(-1)', 'asin(2)',
                                 '0^-1', '(-8)^(1/3)'])
def test_domain_errors(expression):
    with raises(DomainError, match='Invalid domain'):
        evaluate(expression)


def test_division_by_zero():
    with raises(DivisionByZeroError):
        evaluate('10/0')
    with raises(DivisionByZeroError):
        evaluate('5%0')


def test_overflow_saturates():
    assert evaluate('10^400') == math.inf
    assert evaluate('(-10)^401') == -math.inf
    assert evaluate('sinh(1000)') == math.inf


def test_factorial():
    assert evaluate('5!') == 120
    assert evaluate('0!') == 1
    assert evaluate('3!+1') == 7
    assert math.isfinite(evaluate('170!'))
    assert evaluate('171!') == math.inf


@mark.parametrize('expression', ['2.5!', '(-1)!'])
def test_factorial_domain(expression):
    with raises(DomainError, match='non-negative integers'):
        evaluate(expression)


def test_permutations_and_combinations():
    assert evaluate('nPr(5,2)') == 20
    assert evaluate('nCr(5,2)') == 10
    assert evaluate('nCr(2,5)') == 0


def test_trig_degrees(deg):
    assert evaluate('sin(30)', deg) == approx(0.5)
    assert evaluate('cos(180)', deg) == approx(-1)
    assert evaluate('asin(1)', deg) == approx(90)
    assert evaluate('tan\N{SUPERSCRIPT MINUS}\N{SUPERSCRIPT ONE}(1)',
                    deg) == approx(45)


def test_trig_radians(rad):
    assert evaluate('sin(\N{GREEK SMALL LETTER PI}/6)', rad) == approx(0.5)
    assert evaluate('acos(-1)', rad) == approx(math.pi)


def test_trig_gradians(grad):
    assert evaluate('sin(100)', grad) == approx(1)
    assert evaluate('asin(1)', grad) == approx(100)


def test_hyperbolic_ignores_angle_unit(deg, rad):
    assert evaluate('sinh(1)', deg) == evaluate('sinh(1)', rad) == \
        approx(math.sinh(1))
    assert evaluate('atanh(0.5)', deg) == approx(math.atanh(0.5))


def test_other_functions():
    assert evaluate('log(100)') == 2
    assert evaluate('ln(e)') == approx(1)
    assert evaluate('\N{SQUARE ROOT}(16)') == 4
    assert evaluate('\N{CUBE ROOT}(-8)') == approx(-2)
    assert evaluate('\N{FOURTH ROOT}(16)') == approx(2)
    assert evaluate('abs(-3)') == evaluate('Abs(-3)') == 3


def test_fourth_root_of_negative_is_nan():
    assert math.isnan(evaluate('\N{FOURTH ROOT}(-16)'))


def test_variables():
    assert evaluate('2*x', Context(bindings={'x': 3})) == 6
    assert evaluate('Ans*2', Context(bindings={'Ans': 21})) == 42


def test_undefined_variable():
    with raises(UndefinedVariableError, match='Undefined variable: X'):
        evaluate('x+1')


def test_evaluate_leaves_context_alone():
    context = Context(bindings={'A': 1})
    evaluate('A+1', context)
    assert context.bindings == {'A': 1}


def test_leftover_operands():
    with raises(EvaluationError, match='stack has 2 items'):
        evaluate_rpn([Number(1), Number(2)])
    with raises(EvaluationError):
        evaluate('2x', Context(bindings={'X': 3}))


def test_insufficient_operands():
    with raises(ArityError, match='Insufficient operands for \\+'):
        evaluate_rpn([Number(1), Operator('+')])
    with raises(ArityError):
        evaluate('2+')


def test_unknown_function():
    with raises(EvaluationError, match='Unknown function: foo'):
        evaluate_rpn([Number(1), Function('foo')])


def test_machine_reusable():
    machine = Machine()
    assert machine.run(parse('1+1')) == 2
    assert machine.run(parse('2*3')) == 6


def test_function_of():
    context = Context('RAD', {'X': 7, 'A': 2})
    f = function_of('A*x^2', context=context)
    assert f(3) == 18
    assert f(-1) == 2
    assert context.bindings == {'X': 7, 'A': 2}


def test_function_of_unbound_variable_is_removed_again():
    context = Context()
    f = function_of('x+1', context=context)
    assert f(1) == 2
    assert 'X' not in context.bindings


def test_huge_permutations_and_combinations_saturate():
    assert evaluate('nCr(2000000,1000000)') == math.inf
    assert evaluate('nPr(300000,300000)') == math.inf
    assert evaluate('nCr(2000000,1)') == 2000000


def test_none_binding_is_undefined():
    with raises(UndefinedVariableError, match='Undefined variable: A'):
        evaluate('A+1', Context(bindings={'A': None}))
