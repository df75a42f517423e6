"""
This module provides the `make_llparser` function, which builds
an LL(1) parse table from a grammar. The table drives a predictive,
stack-based parse of a token stream through its `walk` method.

    >>> g = Grammar(
    ...     Rule('S', ('a', 'S', 'b')),
    ...     Rule('S', ()),
    ...     )
    >>> p = make_llparser(g)

Parsing
-------
The `walk` method expects an iterable of tokens. Tokens are matched
to terminals by their token class, see the `tokens` module.

Whenever the parser finishes the right-hand side of a rule, it calls
the semantic action associated with the rule. Without an action,
the parse yields a simple parse tree of nested tuples.

    >>> p.walk([])
    ()
    >>> p.walk(['a', 'b'])
    ('a', (), 'b')
    >>> p.walk(['a', 'a', 'b', 'b'])
    ('a', ('a', (), 'b'), 'b')

Modify the semantic actions to get the required results.

    >>> g2 = Grammar(
    ...     Rule('S', ('a', 'S', 'b'), lambda ctx, a, s, b: s + 1),
    ...     Rule('S', (), lambda ctx: 0),
    ...     )
    >>> make_llparser(g2).walk('aaabbb')
    3

Errors
------
Errors during table construction and parsing are signaled with
exceptions. The `make_llparser` function will raise `GrammarConflictError`
if the grammar turns out not to be LL(1).

    >>> g3 = Grammar(
    ...     Rule('list', ()),
    ...     Rule('list', ('list', 'item')),
    ...     )
    >>> make_llparser(g3)
    Traceback (most recent call last):
        ...
    llcc.llparser.GrammarConflictError: LL(1) conflict in cell [<list>, 'item']: <list> = <list>, 'item'; clashes with <list> = ;

A failed parse raises a `ParsingError`. The errors carry the index
of the offending token.

    >>> p.walk(['a', 'b', 'b'])
    Traceback (most recent call last):
        ...
    llcc.llparser.TrailingInputError: 2: error: input remains after the stack emptied: 'b'
    >>> p.walk(['b'])
    Traceback (most recent call last):
        ...
    llcc.llparser.TrailingInputError: 0: error: input remains after the stack emptied: 'b'
    >>> p.walk(['a', 'a'])
    Traceback (most recent call last):
        ...
    llcc.llparser.PrematureEndOfInputError: 2: error: input exhausted, the stack still holds: 'b', 'b'
"""

import logging
import sys

from .grammar import Grammar, InvalidGrammarError
from .rule import Rule
from .symbols import Variable, TokenClass, EPSILON, END_OF_INPUT
from .tokens import TokenStream, extract_symbol, extract_value

table_log = logging.getLogger('llcc.table')
walk_log = logging.getLogger('llcc.walk')

class GrammarConflictError(InvalidGrammarError):
    """Raised during the construction of a parse table, if the grammar is not LL(1).

    The error holds the cell in which two rules clashed, both as symbols
    ('variable', 'terminal') and as indexes into the table ('row', 'column'),
    and the two rules.
    """
    def __init__(self, message, variable, terminal, row, column, existing, rule):
        InvalidGrammarError.__init__(self, message)
        self.variable = variable
        self.terminal = terminal
        self.row = row
        self.column = column
        self.existing = existing
        self.rule = rule

    def print_trace(self, file=None):
        file = file or sys.stderr
        print(self, file=file)
        print('Cell [%d,%d] currently has %s but tried to assign %s' % (
            self.row, self.column, self.existing, self.rule), file=file)

class ParsingError(RuntimeError):
    """Raised by a parser if the input word is not a sentence of the grammar."""
    def __init__(self, message, pos=None):
        RuntimeError.__init__(self, message)
        self.pos = pos

    def format(self, severity='error'):
        return '%s: %s: %s' % (self.pos, severity, self.args[0])

    def __str__(self):
        return self.format()

class NoApplicableRuleError(ParsingError):
    """The table has no rule for the variable on top of the stack and the next token."""
    def __init__(self, variable, terminal, token, index, remaining, pos=None):
        ParsingError.__init__(self, 'there is no rule for [%r, %r]' % (variable, terminal),
            index if pos is None else pos)
        self.variable = variable
        self.terminal = terminal
        self.token = token
        self.index = index
        self.remaining = remaining

class TerminalMismatchError(ParsingError):
    """The terminal on top of the stack differs from the class of the next token."""
    def __init__(self, expected, found, token, index, remaining, pos=None):
        ParsingError.__init__(self, 'stack and input terminals do not match: [%r, %r]' % (expected, found),
            index if pos is None else pos)
        self.expected = expected
        self.found = found
        self.token = token
        self.index = index
        self.remaining = remaining

class IncompleteParseError(ParsingError):
    """Either the input ran out before the stack emptied, or the other way around.

    If 'input_exhausted' is set, 'stack' holds the unmatched symbols from the top
    of the stack down. Otherwise 'remaining' holds the unconsumed tokens.
    """
    def __init__(self, message, index, stack, remaining, pos=None):
        ParsingError.__init__(self, message, index if pos is None else pos)
        self.index = index
        self.stack = tuple(stack)
        self.remaining = tuple(remaining)

    @property
    def input_exhausted(self):
        return not self.remaining

class PrematureEndOfInputError(IncompleteParseError):
    """Raised when the input ends while the stack still holds symbols."""
    def __init__(self, index, stack, pos=None):
        IncompleteParseError.__init__(self,
            'input exhausted, the stack still holds: %s' % ', '.join(repr(sym) for sym in stack),
            index, stack, (), pos)

class TrailingInputError(IncompleteParseError, TerminalMismatchError):
    """Raised when the stack empties while tokens remain.

    The first remaining token is a mismatch against the end-of-input marker.
    """
    def __init__(self, index, remaining, pos=None):
        IncompleteParseError.__init__(self,
            'input remains after the stack emptied: %s' % ', '.join(
                repr(extract_symbol(tok)) for tok in remaining),
            index, (), remaining, pos)
        self.expected = END_OF_INPUT
        self.found = extract_symbol(remaining[0])
        self.token = remaining[0]

class _Reduce:
    """Stack marker, popped when all items of the rule's right-hand side are done."""
    __slots__ = ('rule',)

    def __init__(self, rule):
        self.rule = rule

def _default_reducer(rule, ctx, *args):
    if rule.action is not None:
        return rule.action(ctx, *args)
    return args

class ParseTable:
    """Represents an LL(1) parse table.

    The rows are the variables of the grammar, the columns its token classes
    followed by the end-of-input marker. Each cell holds at most one rule.
    The table is built during construction; if the grammar is not LL(1),
    GrammarConflictError is raised.

    >>> g = Grammar(Rule('S', ('a', 'S', 'b')), Rule('S', ()))
    >>> table = ParseTable(g)
    >>> table.rows, table.columns
    ([<S>], ['a', 'b', $])
    >>> print(table.rule_for(Variable('S'), TokenClass('a')))
    <S> = 'a', <S>, 'b';
    >>> print(table.rule_for(Variable('S'), END_OF_INPUT))
    <S> = ;

    An unknown symbol and an empty cell both mean that no rule applies.
    The 'cell' method tells the two apart.

    >>> g = Grammar(Rule('S', ('a',)))
    >>> table = ParseTable(g)
    >>> table.rule_for(Variable('S'), END_OF_INPUT) is None
    True
    >>> table.rule_for(Variable('T'), END_OF_INPUT) is None
    True
    >>> table.cell(Variable('S'), END_OF_INPUT) is None
    True
    >>> table.cell(Variable('T'), END_OF_INPUT)
    Traceback (most recent call last):
        ...
    KeyError: <T>
    """

    def __init__(self, grammar):
        self.grammar = grammar
        self.rows = grammar.variables()
        self.columns = grammar.token_classes()
        self.columns.append(END_OF_INPUT)

        self._row_index = dict((var, i) for i, var in enumerate(self.rows))
        self._column_index = dict((term, i) for i, term in enumerate(self.columns))
        self.table = self._construct_table()

    def _construct_table(self):
        table = [[None] * len(self.columns) for _ in self.rows]

        def assign(rule, terminal):
            row = self._row_index[rule.left]
            column = self._column_index[terminal]
            existing = table[row][column]
            if existing is not None and existing is not rule:
                raise GrammarConflictError('LL(1) conflict in cell [%r, %r]: %s clashes with %s' % (
                        rule.left, terminal, rule, existing),
                    rule.left, terminal, row, column, existing, rule)
            if table_log.isEnabledFor(logging.DEBUG):
                table_log.debug('[%r, %r] = %s', rule.left, terminal, rule)
            table[row][column] = rule

        for rule in self.grammar:
            first = rule.first()
            for terminal in first:
                if terminal is not EPSILON:
                    assign(rule, terminal)
            if EPSILON in first:
                for terminal in rule.left.follow:
                    assign(rule, terminal)
        return table

    def cell(self, variable, terminal):
        """Returns the rule in the cell or None if the cell is empty.

        Raises KeyError if either symbol has no row or column in this table.
        """
        row = self._row_index.get(variable)
        if row is None:
            raise KeyError(variable)
        column = self._column_index.get(terminal)
        if column is None:
            raise KeyError(terminal)
        return self.table[row][column]

    def rule_for(self, variable, terminal):
        row = self._row_index.get(variable)
        column = self._column_index.get(terminal)
        if row is None or column is None:
            return None
        return self.table[row][column]

    def __contains__(self, key):
        variable, terminal = key
        return variable in self._row_index and terminal in self._column_index

    def __iter__(self):
        """Yields (variable, terminal, rule) for every non-empty cell, row by row."""
        for row, variable in enumerate(self.rows):
            for column, terminal in enumerate(self.columns):
                rule = self.table[row][column]
                if rule is not None:
                    yield variable, terminal, rule

    def walk(self, tokens, context=None, extract_symbol=extract_symbol,
            extract_value=extract_value, reducer=None, expand_visitor=None,
            match_visitor=None):
        """Parses the tokens and returns the value of the root rule.

        The stack is seeded with the root variable. A variable on top
        of the stack is replaced by the right-hand side of the rule found
        in the table for the next token; a terminal on top of the stack
        must match the next token. The parse succeeds iff the stack empties
        exactly when the tokens are consumed.
        """
        reducer = reducer or _default_reducer
        ts = tokens if isinstance(tokens, TokenStream) else TokenStream(tokens, extract_symbol)

        stack = [self.grammar.root()]
        values = []

        def _unwind():
            while stack and isinstance(stack[-1], _Reduce):
                rule = stack.pop().rule
                if rule.right:
                    args = values[-len(rule.right):]
                    del values[-len(rule.right):]
                else:
                    args = []
                values.append(reducer(rule, context, *args))

        al = walk_log
        while stack:
            top = stack[-1]
            lookahead = ts.peek_class()
            if al.isEnabledFor(logging.INFO):
                al.info('{stack: <40} {input}'.format(
                    stack=' '.join(repr(sym) for sym in reversed(stack) if not isinstance(sym, _Reduce)),
                    input=ts))

            if isinstance(top, Variable):
                rule = self.rule_for(top, lookahead)
                if rule is None:
                    if ts.is_consumed():
                        raise PrematureEndOfInputError(ts.position, self._symbols(stack), ts.location())
                    raise NoApplicableRuleError(top, lookahead, ts.peek(), ts.position, ts.remaining(), ts.location())
                if expand_visitor:
                    expand_visitor(rule)

                stack.pop()
                stack.append(_Reduce(rule))
                stack.extend(reversed(rule.right))
            else:
                token = ts.peek()
                index = ts.position
                if ts.match(top):
                    stack.pop()
                    if match_visitor:
                        match_visitor(token)
                    values.append(extract_value(token) if token is not None else None)
                elif ts.is_consumed():
                    raise PrematureEndOfInputError(ts.position, self._symbols(stack), ts.location())
                else:
                    raise TerminalMismatchError(top, lookahead, token, index, ts.remaining(), ts.location())
            _unwind()

        if not ts.is_consumed():
            raise TrailingInputError(ts.position, ts.remaining(), ts.location())

        assert len(values) == 1
        return values[0]

    @staticmethod
    def _symbols(stack):
        return [sym for sym in reversed(stack) if not isinstance(sym, _Reduce)]

def make_llparser(g):
    return ParseTable(g)
