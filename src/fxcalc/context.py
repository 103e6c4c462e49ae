from contextlib import contextmanager
from enum import Enum
import math

from .util import UndefinedVariableError


class AngleUnit(Enum):
    '''
    Unit trigonometric functions read their argument in.
    '''
    DEG = 'DEG'
    RAD = 'RAD'
    GRAD = 'GRAD'

    def to_radians(self, value):
        if self is AngleUnit.DEG:
            return value * (math.pi / 180)
        elif self is AngleUnit.GRAD:
            return value * (math.pi / 200)
        return value

    def from_radians(self, value):
        if self is AngleUnit.DEG:
            return value * (180 / math.pi)
        elif self is AngleUnit.GRAD:
            return value * (200 / math.pi)
        return value


# Sentinel for a binding that did not exist before Context.bind.
_UNBOUND = object()


def binding_name(name):
    '''
    Normalize a binding name: letters are upper-case, Ans stays as is.
    '''
    if len(name) == 1:
        return name.upper()
    return name


class Context:
    '''
    Angle unit and variable bindings an expression is evaluated against.

    The bindings are copied on construction; the caller's mapping is never
    written to.
    '''

    DEFAULT_ANGLE_UNIT = AngleUnit.DEG

    def __init__(self, angle_unit=None, bindings=None):
        if angle_unit is None:
            angle_unit = type(self).DEFAULT_ANGLE_UNIT
        self.angle_unit = AngleUnit(angle_unit)
        self.bindings = {binding_name(name): value
                         for name, value
                         in (bindings or {}).items()}

    def __repr__(self):
        return 'Context({}, {!r})'.format(self.angle_unit.value,
                                          self.bindings)

    def copy(self):
        return type(self)(self.angle_unit, self.bindings)

    def lookup(self, name):
        '''
        Return the value bound to name; unbound and None are both undefined.
        '''
        value = self.bindings.get(binding_name(name))
        if value is None:
            raise UndefinedVariableError(
                'Undefined variable: {}'.format(name))
        return value

    @contextmanager
    def bind(self, name, value):
        '''
        Bind name to value for the duration of the with block.

        The previous binding, or its absence, is restored on the way out,
        whether or not the block raised.
        '''
        name = binding_name(name)
        previous = self.bindings.get(name, _UNBOUND)
        self.bindings[name] = value
        try:
            yield self
        finally:
            if previous is _UNBOUND:
                del self.bindings[name]
            else:
                self.bindings[name] = previous
