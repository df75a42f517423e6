"""
Grammar symbols. A right-hand side of a rule is a sequence of terminals
and variables (non-terminals).

Terminals come in three flavors. Ordinary terminals are token classes
and are identified by name.

    >>> TokenClass('id') == TokenClass('id')
    True
    >>> TokenClass('id')
    'id'

The empty string marker and the end-of-input marker are singletons.

    >>> EPSILON.is_epsilon(), END_OF_INPUT.is_epsilon()
    (True, False)
    >>> EPSILON, END_OF_INPUT
    (epsilon, $)

Variables are identified by their label and carry their First and Follow
sets, which are filled in by the grammar that owns them.

    >>> v = Variable('expr')
    >>> v == Variable('expr')
    True
    >>> v
    <expr>
    >>> v.add_to_first(TokenClass('id')), v.add_to_first(TokenClass('id'))
    (True, False)
    >>> sorted(t.name for t in v.first)
    ['id']
"""

from typing import Union

class Terminal:
    """Base class of all terminal symbols."""
    name = None

    def is_epsilon(self):
        return False

    def __str__(self):
        return self.name

class TokenClass(Terminal):
    def __init__(self, name):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, TokenClass) and self.name == other.name

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((TokenClass, self.name))

    def __repr__(self):
        return repr(self.name)

class Epsilon(Terminal):
    name = 'epsilon'

    def is_epsilon(self):
        return True

    def __repr__(self):
        return 'epsilon'

class EndOfInput(Terminal):
    name = '$'

    def __repr__(self):
        return '$'

EPSILON = Epsilon()
END_OF_INPUT = EndOfInput()

class Variable:
    """A non-terminal symbol.

    Two variables with the same label are the same symbol. The sets are only
    meaningful for the instances owned by a grammar.
    """
    def __init__(self, label):
        self.label = label
        self.first = set()
        self.follow = set()

    def add_to_first(self, terminal):
        if terminal in self.first:
            return False
        self.first.add(terminal)
        return True

    def add_all_to_first(self, terminals):
        size = len(self.first)
        self.first.update(terminals)
        return len(self.first) != size

    def add_to_follow(self, terminal):
        if terminal in self.follow:
            return False
        self.follow.add(terminal)
        return True

    def add_all_to_follow(self, terminals):
        size = len(self.follow)
        self.follow.update(terminals)
        return len(self.follow) != size

    def nullable(self):
        return EPSILON in self.first

    def __eq__(self, other):
        return isinstance(other, Variable) and self.label == other.label

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((Variable, self.label))

    def __str__(self):
        return '<%s>' % (self.label,)

    def __repr__(self):
        return '<%s>' % (self.label,)

RuleItem = Union[Terminal, Variable]
