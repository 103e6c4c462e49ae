from fxcalc.tables import (FUNCTIONS, OPERATORS, UNARY_MINUS, Associativity,
                           hyperbolic, operator_spec)
from fxcalc.tokens import Operator

from pytest import mark


INVERSE = '\N{SUPERSCRIPT MINUS}\N{SUPERSCRIPT ONE}'


@mark.parametrize('name, counterpart', [
    ('sin', 'sinh'),
    ('tan', 'tanh'),
    ('sin' + INVERSE, 'sinh' + INVERSE),
    ('asin', 'asinh'),
    ('sinh', 'sinh'),
    ('log', 'log'),
    ('nosuch', 'nosuch'),
])
def test_hyperbolic(name, counterpart):
    assert hyperbolic(name) == counterpart


def test_inverse_spellings():
    assert FUNCTIONS['sin' + INVERSE] is FUNCTIONS['asin']
    assert FUNCTIONS['cosh' + INVERSE] is FUNCTIONS['acosh']


def test_operator_spec():
    assert operator_spec(Operator('\N{MULTIPLICATION SIGN}', unary=True)) \
        is UNARY_MINUS
    assert operator_spec(Operator('^')).associativity is Associativity.RIGHT
    assert OPERATORS['!'].postfix
    assert not OPERATORS['-'].postfix


def test_unary_minus_binds_like_power():
    assert UNARY_MINUS.precedence == OPERATORS['^'].precedence
    assert UNARY_MINUS.precedence > OPERATORS['*'].precedence
