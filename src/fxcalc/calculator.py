import logging

from .context import AngleUnit, Context, binding_name
from .integration import integrate
from .machine import evaluate
from .solver import solve
from .util import CalcError


logger = logging.getLogger(__name__)


class Calculator:
    '''
    Memory registers and angle mode around the evaluation core.

    Registers are readable as variables in expressions. Every computation
    runs against a snapshot of them, so a failed one never leaves a register
    changed.
    '''

    REGISTERS = 'M', 'A', 'B', 'C', 'D', 'E', 'F', 'X', 'Y', 'Ans'
    ANSWER = 'Ans'
    DEFAULT_ANGLE_UNIT = AngleUnit.DEG

    def __init__(self, angle_unit=None, strict=True):
        '''
        Create calculator with all registers cleared.

        :param strict: fail on characters the lexer does not know, rather
                       than skip them.
        '''
        if angle_unit is None:
            angle_unit = type(self).DEFAULT_ANGLE_UNIT
        self.angle_unit = AngleUnit(angle_unit)
        self.strict = strict
        self.registers = dict.fromkeys(type(self).REGISTERS, 0.0)

    def context(self):
        '''
        Snapshot of the angle unit and registers.
        '''
        return Context(self.angle_unit, self.registers)

    def _register(self, name):
        register = binding_name(name)
        if register not in self.registers:
            raise CalcError('Invalid memory register: {}'.format(name))
        return register

    def _answer(self, value):
        self.registers[type(self).ANSWER] = value
        return value

    def evaluate(self, expression):
        '''
        Evaluate expression and remember the result as Ans.
        '''
        return self._answer(evaluate(expression, self.context(),
                                     strict=self.strict))

    def store(self, register, value):
        self.registers[self._register(register)] = value
        logger.debug('Stored %r in %s', value, register)

    def recall(self, register):
        return self.registers[self._register(register)]

    def add(self, register, value):
        '''
        Add value to register (M+).
        '''
        register = self._register(register)
        self.registers[register] += value

    def subtract(self, register, value):
        '''
        Subtract value from register (M-).
        '''
        self.add(register, -value)

    def clear(self, register=None):
        '''
        Zero one register, or all of them except Ans.
        '''
        if register is not None:
            self.registers[self._register(register)] = 0.0
            return
        for name in self.registers:
            if name != type(self).ANSWER:
                self.registers[name] = 0.0

    @staticmethod
    def equation(text):
        '''
        Rewrite an equation lhs=rhs as the expression (lhs)-(rhs).
        '''
        lhs, equals, rhs = text.partition('=')
        if not equals:
            return text
        if '=' in rhs:
            raise CalcError('More than one = in {}'.format(text))
        return '({})-({})'.format(lhs, rhs)

    def solve(self, equation, variable='X', initial_guess=None, **options):
        '''
        Solve an expression or lhs=rhs equation for variable.

        The initial guess defaults to the variable's register, and the root
        found is stored back into it as well as into Ans.

        :param options: passed on to solver.solve.
        '''
        name = binding_name(variable)
        if initial_guess is None:
            initial_guess = self.registers.get(name, 0.0)
        root = solve(type(self).equation(equation), name, initial_guess,
                     context=self.context(), strict=self.strict, **options)
        if name in self.registers:
            self.registers[name] = root
        return self._answer(root)

    def integrate(self, expression, a, b, **options):
        '''
        Integrate expression over [a, b] and remember the result as Ans.

        :param options: passed on to integration.integrate.
        '''
        return self._answer(integrate(expression, a, b,
                                      context=self.context(),
                                      strict=self.strict, **options))
