from functools import reduce
import logging
import operator

import regex

from .tables import CONSTANTS, FUNCTIONS, OPERATORS
from .tokens import (Comma, Constant, Function, LParen, Number, Operator,
                     RParen, Variable)
from .util import ExpressionSyntaxError


logger = logging.getLogger(__name__)


def _alternation(names):
    '''
    Regex alternation of names, longest first so sinh wins over sin.
    '''
    return r'(?:' + r'|'.join(map(regex.escape,
                                  sorted(names, key=len, reverse=True))) + r')'


class Lexer:
    '''
    Lexer for the infix calculator grammar.

    Holds no state between calls; strict decides whether characters that fit
    no lexeme are an error or are logged and skipped.
    '''
    FUNCTION = _alternation(FUNCTIONS)
    CONSTANT = _alternation(CONSTANTS)
    # Digits with at most one decimal point: 1, 1., 1.5, .5 but not .
    NUMBER = r'''
              (?:
                  \d+
                  (?:
                      \.
                      \d*
                  )?
              )|(?:
                  \.
                  \d+
              )
              '''
    OPERATOR = _alternation(OPERATORS)
    # The one multi-letter variable: the last answer register.
    ANSWER = r'Ans'
    VARIABLE = r'[A-Za-z]'

    # All possible lexemes, in the order they are tried.
    LEXEME = r'(?<function>' + FUNCTION + r')|' \
             r'(?<constant>' + CONSTANT + r')|' \
             r'(?<number>' + NUMBER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<lparen>\()|' \
             r'(?<rparen>\))|' \
             r'(?<comma>,)|' \
             r'(?<variable>' + ANSWER + r'|' + VARIABLE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)
    SPACE = regex.compile(r'\s+')
    MINUSES = {'-', '\N{MINUS SIGN}'}

    def __init__(self, strict=True):
        self.strict = strict
        self.pattern = regex.compile(type(self).LEXEME, flags=type(self).FLAGS)

    def lex(self, line):
        '''
        Take a line and yield its tokens.

        Whitespace is dropped before scanning. A minus sign in prefix
        position becomes Number(-1) followed by a unary ×.
        '''
        line = type(self).SPACE.sub('', line)
        previous = None
        pos = 0
        while pos < len(line):
            match = self.pattern.match(line, pos)
            if match is None:
                if self.strict:
                    raise ExpressionSyntaxError(
                        "Couldn't lex {}".format(line[pos:]))
                logger.warning('Skipping unknown character %r in %r',
                               line[pos], line)
                pos += 1
                continue
            pos = match.end()
            for token in self._tokens(match, previous):
                yield token
                previous = token

    def _tokens(self, match, previous):
        '''
        Turn one lexeme match into zero or more tokens.
        '''
        kind = match.lastgroup
        text = match.group(kind)
        if kind == 'function':
            return [Function(text)]
        elif kind == 'constant':
            return [Constant(text)]
        elif kind == 'number':
            return [Number(float(text))]
        elif kind == 'operator':
            if self.isprefix(previous):
                if text in type(self).MINUSES:
                    return [Number(-1.0),
                            Operator('\N{MULTIPLICATION SIGN}', unary=True)]
                elif text == '+':
                    return []
            return [Operator(text)]
        elif kind == 'lparen':
            return [LParen()]
        elif kind == 'rparen':
            return [RParen()]
        elif kind == 'comma':
            return [Comma()]
        elif kind == 'variable':
            return [Variable(text if len(text) > 1 else text.upper())]
        raise ExpressionSyntaxError("Couldn't lex {}".format(text))

    def isprefix(self, previous):
        '''
        Return True if an operator after previous has no left operand.
        '''
        if previous is None or isinstance(previous, (LParen, Comma)):
            return True
        return (isinstance(previous, Operator) and
                (previous.unary or not OPERATORS[previous.symbol].postfix))


def tokenize(expression, strict=True):
    return list(Lexer(strict=strict).lex(expression))
