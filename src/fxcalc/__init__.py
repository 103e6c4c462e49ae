'''
Scientific calculator core.

Infix expressions are tokenized, reordered into RPN by the shunting-yard
algorithm and run on a stack machine, with DEG/RAD/GRAD trigonometry and
calculator-style domain errors. On top of that sit root finding (bisection,
Newton-Raphson, secant, Brent) and adaptive Simpson integration, both of
which treat any expression as a function of one variable.

Variables are single letters bound through a Context; the Calculator class
keeps memory registers (M, A-F, X, Y, Ans) and feeds them in as bindings.
'''

from .calculator import Calculator
from .context import AngleUnit, Context
from .integration import integrate
from .lexer import Lexer, tokenize
from .machine import Machine, evaluate, evaluate_rpn, function_of
from .parser import Parser, parse, parse_to_rpn
from .solver import solve


__all__ = ('AngleUnit', 'Calculator', 'Context', 'Lexer', 'Machine',
           'Parser', 'evaluate', 'evaluate_rpn', 'function_of', 'integrate',
           'parse', 'parse_to_rpn', 'solve', 'tokenize')
