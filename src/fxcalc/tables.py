'''
Operator, function and constant tables the parser and the machine consult,
with the domain-checked operations themselves.
'''

from collections import namedtuple
from enum import Enum
import math
import operator
import sys

from .util import DivisionByZeroError, DomainError


# Largest n for which n! is a finite double.
MAX_FACTORIAL = 170
# Natural log of the largest finite double.
MAX_LOG = math.log(sys.float_info.max)


class Associativity(Enum):
    LEFT = 'left'
    RIGHT = 'right'


class Category(Enum):
    TRIG = 'trig'
    HYPERBOLIC = 'hyperbolic'
    OTHER = 'other'


class OperatorSpec(namedtuple('OperatorSpec',
                              'precedence associativity arity function')):
    __slots__ = ()

    @property
    def postfix(self):
        return self.arity == 1


FunctionSpec = namedtuple('FunctionSpec', 'arity category function inverse',
                          defaults=(False,))


def _integral(x, name):
    '''
    Return x as an int, if it is a non-negative integral float.
    '''
    if not (math.isfinite(x) and float(x).is_integer() and x >= 0):
        raise DomainError(
            '{} requires non-negative integers, got {:g}'.format(name, x))
    return int(x)


def _saturate(n):
    '''
    Convert an exact integer result to float, infinity if it won't fit.
    '''
    try:
        return float(n)
    except OverflowError:
        return math.inf


def _divide(a, b):
    if b == 0:
        raise DivisionByZeroError('Division by zero')
    return a / b


def _remainder(a, b):
    if b == 0:
        raise DivisionByZeroError('Division by zero')
    return math.fmod(a, b)


def _power(base, exponent):
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and float(exponent).is_integer() and exponent % 2:
            return -math.inf
        return math.inf
    except ValueError:
        raise DomainError('Invalid domain for ^: {:g}^{:g}'.format(
            base, exponent)) from None


def _factorial(x):
    n = _integral(x, 'Factorial')
    if n > MAX_FACTORIAL:
        return math.inf
    return float(math.factorial(n))


def _permutations(n, r):
    n, r = _integral(n, 'nPr'), _integral(r, 'nPr')
    if r > n:
        return 0.0
    if math.lgamma(n + 1) - math.lgamma(n - r + 1) > MAX_LOG:
        return math.inf
    return _saturate(math.perm(n, r))


def _combinations(n, r):
    n, r = _integral(n, 'nCr'), _integral(r, 'nCr')
    if r > n:
        return 0.0
    if (math.lgamma(n + 1) - math.lgamma(r + 1) -
            math.lgamma(n - r + 1)) > MAX_LOG:
        return math.inf
    return _saturate(math.comb(n, r))


def _log(x):
    if x <= 0:
        raise DomainError('Invalid domain for log: {:g}'.format(x))
    return math.log10(x)


def _ln(x):
    if x <= 0:
        raise DomainError('Invalid domain for ln: {:g}'.format(x))
    return math.log(x)


def _sqrt(x):
    if x < 0:
        raise DomainError('Invalid domain for sqrt: {:g}'.format(x))
    return math.sqrt(x)


def _cbrt(x):
    return math.copysign(abs(x) ** (1 / 3), x)


def _fourth_root(x):
    # No domain check: negative radicands give NaN.
    if x < 0:
        return math.nan
    return x ** (1 / 4)


def _sinh(x):
    try:
        return math.sinh(x)
    except OverflowError:
        return math.copysign(math.inf, x)


def _cosh(x):
    try:
        return math.cosh(x)
    except OverflowError:
        return math.inf


_MULTIPLY = OperatorSpec(2, Associativity.LEFT, 2, operator.mul)

OPERATORS = {
    '+': OperatorSpec(1, Associativity.LEFT, 2, operator.add),
    '-': OperatorSpec(1, Associativity.LEFT, 2, operator.sub),
    '\N{MINUS SIGN}': OperatorSpec(1, Associativity.LEFT, 2, operator.sub),
    '*': _MULTIPLY,
    '\N{MULTIPLICATION SIGN}': _MULTIPLY,
    '/': OperatorSpec(2, Associativity.LEFT, 2, _divide),
    '\N{DIVISION SIGN}': OperatorSpec(2, Associativity.LEFT, 2, _divide),
    '%': OperatorSpec(2, Associativity.LEFT, 2, _remainder),
    '^': OperatorSpec(3, Associativity.RIGHT, 2, _power),
    '!': OperatorSpec(4, Associativity.LEFT, 1, _factorial),
}

# The × the lexer substitutes for a leading minus. Binds like ^ so that
# -3^2 is -(3^2) and 2^-2 is 2^(-2).
UNARY_MINUS = OperatorSpec(3, Associativity.RIGHT, 2, operator.mul)

_INVERSE = '\N{SUPERSCRIPT MINUS}\N{SUPERSCRIPT ONE}'

FUNCTIONS = {
    'sin': FunctionSpec(1, Category.TRIG, math.sin),
    'cos': FunctionSpec(1, Category.TRIG, math.cos),
    'tan': FunctionSpec(1, Category.TRIG, math.tan),
    'asin': FunctionSpec(1, Category.TRIG, math.asin, inverse=True),
    'acos': FunctionSpec(1, Category.TRIG, math.acos, inverse=True),
    'atan': FunctionSpec(1, Category.TRIG, math.atan, inverse=True),
    'sinh': FunctionSpec(1, Category.HYPERBOLIC, _sinh),
    'cosh': FunctionSpec(1, Category.HYPERBOLIC, _cosh),
    'tanh': FunctionSpec(1, Category.HYPERBOLIC, math.tanh),
    'asinh': FunctionSpec(1, Category.HYPERBOLIC, math.asinh, inverse=True),
    'acosh': FunctionSpec(1, Category.HYPERBOLIC, math.acosh, inverse=True),
    'atanh': FunctionSpec(1, Category.HYPERBOLIC, math.atanh, inverse=True),
    'log': FunctionSpec(1, Category.OTHER, _log),
    'ln': FunctionSpec(1, Category.OTHER, _ln),
    'sqrt': FunctionSpec(1, Category.OTHER, _sqrt),
    '\N{SQUARE ROOT}': FunctionSpec(1, Category.OTHER, _sqrt),
    '\N{CUBE ROOT}': FunctionSpec(1, Category.OTHER, _cbrt),
    '\N{FOURTH ROOT}': FunctionSpec(1, Category.OTHER, _fourth_root),
    'abs': FunctionSpec(1, Category.OTHER, abs),
    'Abs': FunctionSpec(1, Category.OTHER, abs),
    'nPr': FunctionSpec(2, Category.OTHER, _permutations),
    'nCr': FunctionSpec(2, Category.OTHER, _combinations),
}
# Calculator-key spellings of the inverse functions: sin⁻¹, sinh⁻¹, ...
for _name in 'sin', 'cos', 'tan', 'sinh', 'cosh', 'tanh':
    FUNCTIONS[_name + _INVERSE] = FUNCTIONS['a' + _name]
del _name

CONSTANTS = {
    '\N{GREEK SMALL LETTER PI}': math.pi,
    'pi': math.pi,
    'e': math.e,
}


def operator_spec(token):
    '''
    Return the OperatorSpec for an Operator token.
    '''
    if token.unary:
        return UNARY_MINUS
    return OPERATORS[token.symbol]


def hyperbolic(name):
    '''
    Return the hyperbolic counterpart of trig function name.

    sin becomes sinh, sin⁻¹ sinh⁻¹, asin asinh. Anything but a trig function
    comes back unchanged.

    The evaluator never calls this; it is for front ends with a hyp key,
    which rewrite the function name before building the expression.
    '''
    spec = FUNCTIONS.get(name)
    if spec is None or spec.category is not Category.TRIG:
        return name
    if name.endswith(_INVERSE):
        return name[:-len(_INVERSE)] + 'h' + _INVERSE
    return name + 'h'
