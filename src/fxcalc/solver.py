'''
Root finding on expressions treated as black-box functions of one variable.

Every algorithm takes a plain callable, so it works just as well on Python
functions as on expressions turned into functions by function_of.
'''

import logging
import math
import sys

from .machine import function_of
from .util import (DerivativeTooSmallError, NoSignChangeError,
                   NonConvergenceError, SolveError)


logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-8
DEFAULT_MAX_ITERATIONS = 100
# Central difference step for Newton's method without a derivative.
DERIVATIVE_STEP = 1e-7
# Below this |f'(x)| a Newton step would blow up.
MIN_DERIVATIVE = 1e-12
# Bracket search without bounds: guess ± 10, ± 20, ..., ± 100.
SEARCH_STEP = 10
SEARCH_WINDOWS = 10

METHODS = 'bisection', 'newton', 'secant', 'brent'


def _brackets(fa, fb):
    '''
    Return True if a root lies between points valued fa and fb.
    '''
    if not (math.isfinite(fa) and math.isfinite(fb)):
        return False
    return fa == 0 or fb == 0 or (fa < 0) != (fb < 0)


def bisection(f, a, b, tolerance=DEFAULT_TOLERANCE,
              max_iterations=DEFAULT_MAX_ITERATIONS):
    '''
    Find a root of f in [a, b] by repeated halving.

    Converges whenever f(a) and f(b) differ in sign. Returns the midpoint of
    whatever bracket is left after max_iterations.
    '''
    fa = f(a)
    fb = f(b)
    if not _brackets(fa, fb):
        raise NoSignChangeError(
            'Function must have different signs at bounds: '
            'f({:g}) = {:g}, f({:g}) = {:g}'.format(a, fa, b, fb))
    if abs(fa) < tolerance:
        return a
    if abs(fb) < tolerance:
        return b

    for iteration in range(max_iterations):
        mid = (a + b) / 2
        fmid = f(mid)
        if abs(fmid) < tolerance or abs(b - a) < tolerance:
            logger.debug('Bisection converged after %d iterations',
                         iteration + 1)
            return mid
        if (fa < 0) != (fmid < 0):
            b, fb = mid, fmid
        else:
            a, fa = mid, fmid
    logger.debug('Bisection stopped at [%r, %r] after %d iterations',
                 a, b, max_iterations)
    return (a + b) / 2


def newton(f, x0, derivative=None, tolerance=DEFAULT_TOLERANCE,
           max_iterations=DEFAULT_MAX_ITERATIONS, step=DERIVATIVE_STEP):
    '''
    Newton-Raphson iteration x <- x - f(x)/f'(x) from x0.

    :param derivative: f', or None for a central difference of width 2*step.
    '''
    if derivative is None:
        def derivative(x):
            return (f(x + step) - f(x - step)) / (2 * step)

    x = x0
    for iteration in range(max_iterations):
        fx = f(x)
        if not math.isfinite(fx):
            raise NonConvergenceError(
                'Newton iteration left the domain: f({:g}) = {}'.format(
                    x, fx))
        if abs(fx) < tolerance:
            return x
        dfx = derivative(x)
        if abs(dfx) < MIN_DERIVATIVE:
            raise DerivativeTooSmallError(
                "Derivative too small at x = {:g}, Newton's method "
                "failed".format(x))
        x_new = x - fx / dfx
        if abs(x_new - x) < tolerance:
            logger.debug('Newton converged after %d iterations',
                         iteration + 1)
            return x_new
        x = x_new
    raise NonConvergenceError(
        'Newton method did not converge in {} iterations'.format(
            max_iterations))


def secant(f, x0, x1, tolerance=DEFAULT_TOLERANCE,
           max_iterations=DEFAULT_MAX_ITERATIONS):
    '''
    Secant iteration from x0 and x1: Newton with the slope of the last two
    iterates standing in for the derivative.
    '''
    fx0 = f(x0)
    for iteration in range(max_iterations):
        fx1 = f(x1)
        if abs(fx1) < tolerance:
            return x1
        if abs(fx1 - fx0) < MIN_DERIVATIVE:
            raise DerivativeTooSmallError(
                'Division by zero in secant method: f({:g}) == f({:g})'
                .format(x0, x1))
        x2 = x1 - fx1 * (x1 - x0) / (fx1 - fx0)
        if abs(x2 - x1) < tolerance:
            logger.debug('Secant converged after %d iterations',
                         iteration + 1)
            return x2
        x0, fx0, x1 = x1, fx1, x2
    raise NonConvergenceError(
        'Secant method did not converge in {} iterations'.format(
            max_iterations))


def brent(f, a, b, tolerance=DEFAULT_TOLERANCE,
          max_iterations=DEFAULT_MAX_ITERATIONS):
    '''
    Brent's method: inverse quadratic interpolation and secant steps, kept
    inside a shrinking bracket by falling back to bisection.

    b is the best estimate so far, c the bracketing contrapoint, a the
    previous b. An interpolated step is only taken if it lands well inside
    the bracket and is less than half the step before last.
    '''
    fa = f(a)
    fb = f(b)
    if not _brackets(fa, fb):
        raise NoSignChangeError(
            'Function must have different signs at bounds: '
            'f({:g}) = {:g}, f({:g}) = {:g}'.format(a, fa, b, fb))
    if fa == 0:
        return a

    c, fc = a, fa
    d = e = b - a
    for iteration in range(max_iterations):
        if (fb > 0 and fc > 0) or (fb < 0 and fc < 0):
            c, fc = a, fa
            d = e = b - a
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

        tol1 = 2 * sys.float_info.epsilon * abs(b) + tolerance / 2
        xm = (c - b) / 2
        if abs(xm) <= tol1 or abs(fb) < tolerance:
            logger.debug('Brent converged after %d iterations', iteration)
            return b

        if abs(e) >= tol1 and abs(fa) > abs(fb):
            s = fb / fa
            if a == c:
                # Secant step.
                p = 2 * xm * s
                q = 1 - s
            else:
                # Inverse quadratic interpolation.
                q = fa / fc
                r = fb / fc
                p = s * (2 * xm * q * (q - r) - (b - a) * (r - 1))
                q = (q - 1) * (r - 1) * (s - 1)
            if p > 0:
                q = -q
            else:
                p = -p
            if 2 * p < min(3 * xm * q - abs(tol1 * q), abs(e * q)):
                e, d = d, p / q
            else:
                d = e = xm
        else:
            d = e = xm

        a, fa = b, fb
        b += d if abs(d) > tol1 else math.copysign(tol1, xm)
        fb = f(b)
    raise NonConvergenceError(
        'Brent method did not converge in {} iterations'.format(
            max_iterations))


def _search_bracket(f, guess):
    '''
    Look for a sign change on symmetric windows around guess.

    A heuristic: a root is not guaranteed to be found even when one exists.
    Windows whose ends cannot be evaluated are passed over.
    '''
    for window in range(1, SEARCH_WINDOWS + 1):
        a = guess - window * SEARCH_STEP
        b = guess + window * SEARCH_STEP
        try:
            found = _brackets(f(a), f(b))
        except SolveError as e:
            logger.debug('Skipping window [%g, %g]: %s', a, b, e)
            continue
        if found:
            logger.debug('Sign change found on [%g, %g]', a, b)
            return a, b
    return None


def _as_function(function, variable, context, strict=True):
    if callable(function):
        return function
    return function_of(function, variable, context, strict=strict,
                       errors=SolveError)


def solve(expression, variable='x', initial_guess=0.0, method='brent',
          bounds=None, tolerance=DEFAULT_TOLERANCE,
          max_iterations=DEFAULT_MAX_ITERATIONS, context=None, strict=True):
    '''
    Find a value of variable for which expression evaluates to zero.

    Evaluation errors surface as SolveError. The context passed in is never
    modified; each evaluation binds variable on a private copy.

    :param method: one of METHODS.
    :param bounds: (a, b) bracket. Required for bisection, the second point
                   for secant, and for brent skips the bracket search.
    '''
    if method not in METHODS:
        raise SolveError('Unknown method {!r}, expected one of {}'.format(
            method, ', '.join(METHODS)))
    f = _as_function(expression, variable, context, strict)
    options = dict(tolerance=tolerance, max_iterations=max_iterations)
    logger.debug('Solving %s = 0 for %s by %s', expression, variable, method)

    if method == 'bisection':
        if bounds is None:
            raise SolveError('Bisection requires bounds (a, b)')
        return bisection(f, *bounds, **options)
    elif method == 'newton':
        return newton(f, initial_guess, **options)
    elif method == 'secant':
        x1 = bounds[1] if bounds is not None else initial_guess + 1
        return secant(f, initial_guess, x1, **options)

    if bounds is not None:
        return brent(f, *bounds, **options)
    bracket = _search_bracket(f, initial_guess)
    if bracket is None:
        logger.debug('No sign change within %g of %g, falling back to '
                     'Newton', SEARCH_STEP * SEARCH_WINDOWS, initial_guess)
        return newton(f, initial_guess, **options)
    return brent(f, *bracket, **options)


def _value(f, x):
    '''
    Return f(x), or None where f cannot be evaluated.
    '''
    try:
        return f(x)
    except SolveError as e:
        logger.debug('Cannot evaluate at %g: %s', x, e)
        return None


def find_all_roots(function, a, b, divisions=20,
                   tolerance=DEFAULT_TOLERANCE,
                   max_iterations=DEFAULT_MAX_ITERATIONS,
                   variable='x', context=None, strict=True):
    '''
    Return the distinct roots Brent's method finds on divisions equal
    sub-intervals of [a, b], in ascending order.

    Only sub-intervals with a sign change are searched, so roots of even
    multiplicity are missed. Sub-intervals with an end point that cannot be
    evaluated, or on which Brent fails, are passed over.
    '''
    f = _as_function(function, variable, context, strict)
    step = (b - a) / divisions
    roots = []
    x0, f0 = a, _value(f, a)
    for i in range(1, divisions + 1):
        x1 = a + i * step
        f1 = _value(f, x1)
        if f0 is None or f1 is None or not _brackets(f0, f1):
            x0, f0 = x1, f1
            continue
        try:
            root = brent(f, x0, x1, tolerance=tolerance,
                         max_iterations=max_iterations)
        except SolveError as e:
            logger.debug('Skipping [%g, %g]: %s', x0, x1, e)
        else:
            if all(abs(root - other) > tolerance * 10 for other in roots):
                roots.append(root)
        x0, f0 = x1, f1
    return sorted(roots)
