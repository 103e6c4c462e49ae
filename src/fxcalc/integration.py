'''
Definite integrals of expressions or Python functions of one variable.
'''

import logging
import math

from .machine import function_of
from .util import IntegrateError, NonFiniteError


logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-8
DEFAULT_MAX_DEPTH = 20


def _as_function(function, variable, context, strict=True):
    if callable(function):
        return function
    return function_of(function, variable, context, strict=strict,
                       errors=IntegrateError)


def _sample(f, x):
    y = f(x)
    if not math.isfinite(y):
        raise NonFiniteError(
            'Function returned non-finite value {} at x = {:g}'.format(y, x))
    return y


def _adaptive_simpson(f, a, b, epsilon, whole, fa, fb, fc, depth):
    '''
    Refine the Simpson estimate whole of [a, b] by splitting it in two.

    fa, fb, fc are f at a, b and the midpoint, carried over from the caller
    so that each level only samples the two new quarter points.
    '''
    c = (a + b) / 2
    h = b - a
    fd = _sample(f, (a + c) / 2)
    fe = _sample(f, (c + b) / 2)
    left = h / 12 * (fa + 4 * fd + fc)
    right = h / 12 * (fc + 4 * fe + fb)
    refined = left + right
    if depth <= 0 or abs(refined - whole) <= 15 * epsilon:
        # Richardson extrapolation cancels the leading error term.
        return refined + (refined - whole) / 15
    return (_adaptive_simpson(f, a, c, epsilon / 2, left, fa, fc, fd,
                              depth - 1) +
            _adaptive_simpson(f, c, b, epsilon / 2, right, fc, fb, fe,
                              depth - 1))


def integrate(function, a, b, tolerance=DEFAULT_TOLERANCE,
              max_depth=DEFAULT_MAX_DEPTH, variable='x', context=None,
              strict=True):
    '''
    Integrate function over [a, b] by adaptive Simpson's rule.

    :param function: a Python callable, or an expression in variable.
                     Expressions evaluate on a private copy of context and
                     report evaluation errors as IntegrateError.
    :param tolerance: absolute error budget, halved at each subdivision.
    :param max_depth: subdivision levels after which estimates are accepted
                      as they are.
    '''
    f = _as_function(function, variable, context, strict)
    if not (math.isfinite(a) and math.isfinite(b)):
        raise IntegrateError('Integration bounds must be finite')
    if a == b:
        return 0.0
    if a > b:
        return -integrate(f, b, a, tolerance=tolerance, max_depth=max_depth)

    fa = _sample(f, a)
    fb = _sample(f, b)
    fc = _sample(f, (a + b) / 2)
    whole = (b - a) / 6 * (fa + 4 * fc + fb)
    result = _adaptive_simpson(f, a, b, tolerance, whole, fa, fb, fc,
                               max_depth)
    logger.debug('Integral over [%g, %g] = %r', a, b, result)
    return result


def simpson(function, a, b, variable='x', context=None, strict=True):
    '''
    Simpson's rule on the single interval [a, b].
    '''
    f = _as_function(function, variable, context, strict)
    fa = _sample(f, a)
    fb = _sample(f, b)
    fc = _sample(f, (a + b) / 2)
    return (b - a) / 6 * (fa + 4 * fc + fb)


def trapezoid(function, a, b, n=100, variable='x', context=None,
              strict=True):
    '''
    Composite trapezoidal rule on n equal panels.
    '''
    if n < 1:
        raise IntegrateError('Need at least one panel, got {}'.format(n))
    f = _as_function(function, variable, context, strict)
    h = (b - a) / n
    inner = math.fsum(_sample(f, a + i * h) for i in range(1, n))
    return h * ((_sample(f, a) + _sample(f, b)) / 2 + inner)


def romberg(function, a, b, max_steps=10, tolerance=1e-10, variable='x',
            context=None, strict=True):
    '''
    Romberg integration: trapezoid estimates with 2**i panels, improved by
    repeated Richardson extrapolation.

    Returns once two successive diagonal entries agree within tolerance, or
    the last diagonal entry after max_steps rows.
    '''
    f = _as_function(function, variable, context, strict)
    previous = [(b - a) * (_sample(f, a) + _sample(f, b)) / 2]
    for i in range(1, max_steps):
        h = (b - a) / 2 ** i
        midpoints = math.fsum(_sample(f, a + (2 * k - 1) * h)
                              for k in range(1, 2 ** (i - 1) + 1))
        row = [previous[0] / 2 + h * midpoints]
        for j in range(1, i + 1):
            factor = 4 ** j
            row.append((factor * row[j - 1] - previous[j - 1]) /
                       (factor - 1))
        if i > 1 and abs(row[i] - previous[i - 1]) < tolerance:
            logger.debug('Romberg converged after %d rows', i + 1)
            return row[i]
        previous = row
    return previous[-1]


def discontinuities(function, a, b, samples=100, variable='x',
                    context=None, strict=True):
    '''
    Return the points of an even grid over [a, b) where function fails or is
    not finite.
    '''
    f = _as_function(function, variable, context, strict)
    step = (b - a) / samples
    points = []
    for i in range(samples):
        x = a + i * step
        try:
            _sample(f, x)
        except (IntegrateError, ArithmeticError, ValueError) as e:
            logger.debug('Discontinuity at %g: %s', x, e)
            points.append(x)
    return points
