from os import isatty
import sys
from sys import stdin, stdout, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
import regex

from .calculator import Calculator
from .context import AngleUnit
from .lexer import Lexer
from .parser import Parser
from .solver import METHODS
from .util import CalcError


logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # Not persisted across sessions.
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    # Trailing "-> R" or "→ R": store the result into register R.
    STORE = regex.compile(r'''
                          (?:->|\N{RIGHTWARDS ARROW})
                          \s*
                          (?<register>\w+)
                          \s*$
                          ''', flags=regex.VERBOSE)
    LOG_FORMAT = '%(levelname)s:%(name)s: %(message)s'

    def dumper(self):
        '''
        Dump the tokens and RPN of every expression.
        '''
        lexer = Lexer(strict=not self.args.lenient)
        parser = Parser()
        print('[tokens]\t[rpn]')
        for line in self._lines():
            try:
                tokens = list(lexer.lex(line))
                rpn = parser.parse(tokens)
            except CalcError as e:
                self._report(e)
                continue
            print(' '.join(map(str, tokens)),
                  ' '.join(map(str, rpn)),
                  sep='\t')

    def executor(self):
        '''
        Evaluate, solve or integrate every expression.
        '''
        calculator = Calculator(angle_unit=self.args.angle,
                                strict=not self.args.lenient)
        for line in self._lines():
            expression, register = self._split_store(line)
            try:
                result = self._compute(calculator, expression)
                if register is not None:
                    calculator.store(register, result)
            # Abort entire rest of line, makes sense anyway
            except CalcError as e:
                self._report(e)
                continue
            self.print(result)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def _compute(self, calculator, expression):
        if self.args.solve is not None:
            return calculator.solve(expression, self.args.solve,
                                    initial_guess=self.args.guess,
                                    method=self.args.method,
                                    bounds=self.args.bounds)
        elif self.args.integrate is not None:
            a, b = self.args.integrate
            return calculator.integrate(expression, a, b,
                                        variable=self.args.variable)
        return calculator.evaluate(expression)

    def _split_store(self, line):
        '''
        Split "expression -> R" into the expression and register R.
        '''
        match = type(self).STORE.search(line)
        if match is None:
            return line, None
        return line[:match.start()], match.group('register')

    def _lines(self):
        for line in self.args.expressions:
            line = line.strip()
            if line:
                yield line

    def _report(self, error):
        print(error.args[0], file=sys.stderr)
        logger.debug('Failed', exc_info=error)

    def print(self, value):
        '''
        Round value to the requested precision, if any, and print it.
        '''
        if self.args.precision is not None:
            value = round(value, self.args.precision)
        print(value)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Scientific calculator: evaluate, solve, integrate')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='debug logging, tracebacks')
        self.argument_parser.add_argument('-a', '--angle',
                                          choices=[unit.value
                                                   for unit in AngleUnit],
                                          default=Calculator
                                          .DEFAULT_ANGLE_UNIT.value)
        self.argument_parser.add_argument('-l', '--lenient',
                                          action='store_true',
                                          help='skip unknown characters')
        self.argument_parser.add_argument('-k', '--precision', type=int)
        modes = self.argument_parser.add_mutually_exclusive_group()
        modes.add_argument('-s', '--solve', metavar='VARIABLE',
                           help='solve each expression (or lhs=rhs) for '
                                'VARIABLE')
        modes.add_argument('-i', '--integrate', nargs=2, type=float,
                           metavar=('A', 'B'),
                           help='integrate each expression over [A, B]')
        self.argument_parser.add_argument('--guess', type=float)
        self.argument_parser.add_argument('--bounds', nargs=2, type=float,
                                          metavar=('A', 'B'))
        self.argument_parser.add_argument('--method', choices=METHODS,
                                          default='brent')
        self.argument_parser.add_argument('--variable', default='x')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format=type(self).LOG_FORMAT)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
