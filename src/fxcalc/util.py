from functools import wraps


class CalcError(Exception):
    pass


class EvalError(CalcError):
    '''
    Anything that can go wrong turning a string into a number.
    '''


class ExpressionSyntaxError(EvalError):
    pass


class EvaluationError(EvalError):
    pass


class ArityError(EvaluationError):
    pass


class UndefinedVariableError(EvalError):
    pass


class DomainError(EvalError):
    pass


class DivisionByZeroError(EvalError):
    pass


class SolveError(CalcError):
    pass


class NoSignChangeError(SolveError):
    pass


class DerivativeTooSmallError(SolveError):
    pass


class NonConvergenceError(SolveError):
    pass


class IntegrateError(CalcError):
    pass


class NonFiniteError(IntegrateError):
    pass


def wrap_errors(kind, fmt):
    '''
    Decorator that re-raises evaluation errors as another error kind.

    The new message is fmt, formatted with the call's arguments, followed by
    the original message. Errors that already are of that kind pass through.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except kind:
                raise
            except EvalError as e:
                raise kind('{}: {}'.format(fmt.format(*args, **kwargs),
                                           e)) from e
        return wrapper
    return decorator
