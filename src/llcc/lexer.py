"""
A tokenizer driven by a deterministic automaton.

The lexer is given a list of (token class, pattern) pairs. Patterns are
either strings, which stand for themselves, or pattern objects from the
`patterns` module. When two patterns match the same text, the one listed
first wins; otherwise the longest match wins.

    >>> from llcc.patterns import Rep, char_range, plus
    >>> lex = Lexer([
    ...     ('if', 'if'),
    ...     ('id', Cat(char_range('a', 'z'), Rep(char_range('a', 'z')))),
    ...     ('num', plus(char_range('0', '9'))),
    ...     ('ws', plus(Lit(' \\n'))),
    ...     ], discard=['ws'])
    >>> [(str(tok.token_class), tok.value) for tok in lex.tokens('if iffy 42')]
    [('if', 'if'), ('id', 'iffy'), ('num', '42')]

Characters that do not start any token are reported with their position.

    >>> list(lex.tokens('if ?'))
    Traceback (most recent call last):
        ...
    llcc.lexer.LexingError: 1:4: error: invalid character: '?'
"""

import logging

from .automaton import Automaton, determinize
from .llparser import ParsingError
from .patterns import Cat, Lit, add_pattern
from .symbols import Terminal, TokenClass
from .tokens import Token, TokenPos

lexer_log = logging.getLogger('llcc.lexer')

class LexingError(ParsingError):
    """Raised when the input contains a character that starts no token."""
    def __init__(self, message, pos, char):
        ParsingError.__init__(self, message, pos)
        self.char = char

class Lexer:
    def __init__(self, rules, discard=()):
        self.token_classes = []
        self.discard = set(c if isinstance(c, Terminal) else TokenClass(c) for c in discard)

        self.nfa = Automaton()
        initial = self.nfa.new_state()
        self.nfa.initial.add(initial)
        for token_class, pattern in rules:
            if not isinstance(token_class, Terminal):
                token_class = TokenClass(token_class)
            if token_class not in self.token_classes:
                self.token_classes.append(token_class)
            start = self.nfa.new_state()
            final = self.nfa.new_state()
            initial.add_transition(None, start)
            add_pattern(self.nfa, start, final, pattern)
            self.nfa.set_accepting(final, token_class)

        self.set_dfa(determinize(self.nfa))

    def set_dfa(self, dfa):
        assert len(dfa.initial) == 1
        self.dfa = dfa
        self._edges = [dict((t.symbol, t.target) for t in state.transitions) for state in dfa.states]

    def tokens(self, s, filename=None):
        """Splits 's' into tokens, yields Token objects carrying their TokenPos."""
        initial = next(iter(self.dfa.initial))

        line, col = 1, 1
        i = 0
        while i < len(s):
            state = initial
            last_accept = None
            j = i
            while j < len(s):
                state = self._edges[state.index].get(s[j])
                if state is None:
                    break
                j += 1
                label = self.dfa.accept_labels.get(state)
                if label is not None:
                    last_accept = (j, label)

            if last_accept is None:
                raise LexingError('invalid character: %r' % (s[i],), TokenPos(filename, line, col), s[i])

            end, token_class = last_accept
            text = s[i:end]
            if token_class not in self.discard:
                tok = Token(token_class, text, TokenPos(filename, line, col))
                if lexer_log.isEnabledFor(logging.DEBUG):
                    lexer_log.debug('token %r', tok)
                yield tok

            newlines = text.count('\n')
            if newlines:
                line += newlines
                col = len(text) - text.rfind('\n')
            else:
                col += len(text)
            i = end
