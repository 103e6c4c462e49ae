from pytest import fixture

from fxcalc.calculator import Calculator
from fxcalc.context import AngleUnit, Context


@fixture
def deg() -> Context:
    return Context(AngleUnit.DEG)


@fixture
def rad() -> Context:
    return Context(AngleUnit.RAD)


@fixture
def grad() -> Context:
    return Context(AngleUnit.GRAD)


@fixture
def calculator() -> Calculator:
    '''
    Fresh calculator in DEG mode, all registers zero.
    '''
    return Calculator()
