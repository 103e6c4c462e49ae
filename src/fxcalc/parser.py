import logging

from .lexer import Lexer
from .tables import Associativity, FUNCTIONS, operator_spec
from .tokens import (Comma, Constant, Function, LParen, Number, Operator,
                     RParen, TOKEN_TYPES, Variable)
from .util import ArityError, ExpressionSyntaxError


logger = logging.getLogger(__name__)


class Parser:
    '''
    Shunting-yard conversion of infix tokens to RPN.

    Like the Lexer, holds no state between calls.
    '''

    def parse(self, tokens):
        '''
        Return the tokens reordered into postfix (RPN) order.

        :param tokens: infix token sequence, as produced by Lexer.lex.
        '''
        output = []
        stack = []
        # One entry per open parenthesis: [function or None, comma count]
        groups = []
        for token in tokens:
            type(self).HANDLERS[type(token)](self, token, output, stack,
                                             groups)
        while stack:
            token = stack.pop()
            if isinstance(token, (LParen, RParen)):
                raise ExpressionSyntaxError('Mismatched parentheses')
            output.append(token)
        return output

    def _operand(self, token, output, stack, groups):
        output.append(token)

    def _function(self, token, output, stack, groups):
        stack.append(token)

    def _comma(self, token, output, stack, groups):
        while stack and not isinstance(stack[-1], LParen):
            output.append(stack.pop())
        if not stack:
            raise ExpressionSyntaxError('Comma outside of parentheses')
        groups[-1][1] += 1

    def _operator(self, token, output, stack, groups):
        op1 = operator_spec(token)
        if op1.postfix:
            # Its operand is already complete on the output.
            output.append(token)
            return
        while stack and isinstance(stack[-1], Operator):
            op2 = operator_spec(stack[-1])
            if (op1.associativity is Associativity.LEFT and
                op1.precedence <= op2.precedence) or \
               (op1.associativity is Associativity.RIGHT and
                op1.precedence < op2.precedence):
                output.append(stack.pop())
            else:
                break
        stack.append(token)

    def _lparen(self, token, output, stack, groups):
        function = stack[-1] if stack and isinstance(stack[-1],
                                                     Function) else None
        groups.append([function, 0])
        stack.append(token)

    def _rparen(self, token, output, stack, groups):
        while stack and not isinstance(stack[-1], LParen):
            output.append(stack.pop())
        if not stack:
            raise ExpressionSyntaxError('Mismatched parentheses')
        stack.pop()
        function, commas = groups.pop()
        if function is None:
            if commas:
                raise ExpressionSyntaxError(
                    'Comma outside of a function call')
            return
        arity = FUNCTIONS[function.name].arity
        if commas + 1 != arity:
            raise ArityError('{} takes {} argument(s), got {}'.format(
                function.name, arity, commas + 1))
        output.append(stack.pop())

    HANDLERS = {
        Number: _operand,
        Constant: _operand,
        Variable: _operand,
        Function: _function,
        Comma: _comma,
        Operator: _operator,
        LParen: _lparen,
        RParen: _rparen,
    }
    assert set(HANDLERS) == set(TOKEN_TYPES)


def parse_to_rpn(tokens):
    return Parser().parse(tokens)


def parse(expression, strict=True):
    '''
    Tokenize and parse expression into RPN.
    '''
    tokens = list(Lexer(strict=strict).lex(expression))
    logger.debug('Tokens: %s', ' '.join(map(str, tokens)))
    rpn = Parser().parse(tokens)
    logger.debug('RPN: %s', ' '.join(map(str, rpn)))
    return rpn
