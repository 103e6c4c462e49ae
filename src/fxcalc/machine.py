from collections import deque
import logging

from .context import Context, binding_name
from .parser import parse
from .tables import CONSTANTS, FUNCTIONS, Category, operator_spec
from .tokens import (Comma, Constant, Function, LParen, Number, Operator,
                     RParen, TOKEN_TYPES, Variable)
from .util import (ArityError, DomainError, EvalError, EvaluationError,
                   wrap_errors)


logger = logging.getLogger(__name__)


class Machine:
    '''
    Arithmetic stack machine.

    Runs RPN token sequences against a Context. The stack is reset at the
    start of every run, so a machine can be reused across evaluations.
    '''

    def __init__(self, context=None):
        '''
        Create empty stack machine.

        :param context: angle unit and bindings; a default Context if None.
        '''
        self.context = context if context is not None else Context()
        self.stack = deque()

    def run(self, rpn):
        '''
        Evaluate an RPN token sequence and return its single value.
        '''
        self.stack.clear()
        for token in rpn:
            type(self).HANDLERS[type(token)](self, token)
        if len(self.stack) != 1:
            raise EvaluationError(
                'Invalid expression: stack has {} items'.format(
                    len(self.stack)))
        return self.stack.pop()

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1, consumer='stack'):
        '''
        Pop specified number of args from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise ArityError(
                'Insufficient operands for {}: needs {}, have {}'.format(
                    consumer, n, len(self.stack)))
        return [self.stack.pop() for _ in range(n)]

    def _number(self, token):
        self._pshstack(float(token.value))

    def _constant(self, token):
        try:
            self._pshstack(CONSTANTS[token.name])
        except KeyError:
            raise EvaluationError(
                'Unknown constant: {}'.format(token.name)) from None

    def _variable(self, token):
        self._pshstack(float(self.context.lookup(token.name)))

    def _operator(self, token):
        try:
            spec = operator_spec(token)
        except KeyError:
            raise EvaluationError(
                'Unknown operator: {}'.format(token.symbol)) from None
        # If you don't reverse, you'll do 2^9 when you say 9 2 ^.
        args = reversed(self._popstack(spec.arity, token.symbol))
        self._pshstack(self._call(token.symbol, spec.function, *args))

    def _function(self, token):
        try:
            spec = FUNCTIONS[token.name]
        except KeyError:
            raise EvaluationError(
                'Unknown function: {}'.format(token.name)) from None
        args = list(reversed(self._popstack(spec.arity, token.name)))
        unit = self.context.angle_unit
        if spec.category is Category.TRIG and not spec.inverse:
            args = [unit.to_radians(arg) for arg in args]
        result = self._call(token.name, spec.function, *args)
        if spec.category is Category.TRIG and spec.inverse:
            result = unit.from_radians(result)
        self._pshstack(result)

    def _call(self, name, function, *args):
        '''
        Apply function, reporting math library domain failures as such.
        '''
        try:
            return float(function(*args))
        except ValueError as e:
            raise DomainError('Invalid domain for {}: {}'.format(
                name, ', '.join('{:g}'.format(arg) for arg in args))) from e

    def _misplaced(self, token):
        raise EvaluationError('Unexpected {} in RPN'.format(token))

    HANDLERS = {
        Number: _number,
        Constant: _constant,
        Variable: _variable,
        Operator: _operator,
        Function: _function,
        LParen: _misplaced,
        RParen: _misplaced,
        Comma: _misplaced,
    }
    assert set(HANDLERS) == set(TOKEN_TYPES)


def evaluate_rpn(rpn, context=None):
    return Machine(context).run(rpn)


def evaluate(expression, context=None, strict=True):
    '''
    Parse and evaluate an infix expression.

    :param context: Context to evaluate against; angle unit DEG and no
                    bindings if None.
    '''
    result = Machine(context).run(parse(expression, strict=strict))
    logger.debug('%s = %r', expression, result)
    return result


def function_of(expression, variable='x', context=None, strict=True,
                errors=None):
    '''
    Parse expression once and return it as a function of variable.

    The function evaluates on a private copy of context, binding variable to
    its argument for the duration of each call only.

    :param errors: error kind to report parse and evaluation failures as,
                   instead of the EvalError raised.
    '''
    try:
        rpn = parse(expression, strict=strict)
    except EvalError as e:
        if errors is None:
            raise
        raise errors('Cannot parse {!r}: {}'.format(expression, e)) from e
    scope = context.copy() if context is not None else Context()
    machine = Machine(scope)

    def function(value):
        with scope.bind(variable, value):
            return machine.run(rpn)
    function.__name__ = 'f({})'.format(variable)
    function.__doc__ = expression
    if errors is not None:
        function = wrap_errors(errors, 'Cannot evaluate at {}={{}}'.format(
            binding_name(variable)))(function)
    return function
