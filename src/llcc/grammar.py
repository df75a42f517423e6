import logging

from .rule import Rule, first_of_sequence
from .symbols import Variable, Terminal, TokenClass, EPSILON, END_OF_INPUT

grammar_log = logging.getLogger('llcc.grammar')

class InvalidGrammarError(Exception):
    """Raised when a grammar cannot be constructed or is not LL(1)."""

class Grammar:
    """Represents a set of production rules together with the First and Follow
    sets of its variables.

    Each rule is encapsulated by an instance of the 'Rule' class.
    The rules are supplied during construction.

    The grammar also tracks the root variable, which is either set explicitly
    during construction, or assumed to be the left hand side symbol of the first
    rule.

    >>> g = Grammar(
    ...     Rule('list', ()),
    ...     Rule('list', ('item', 'list')))
    >>> print(g)
    <list> = ;
    <list> = 'item', <list>;
    >>> g.root()
    <list>

    Symbols are considered variables if they stand on the left side of some
    rule. All other symbols are considered token classes. The grammar owns
    a single Variable instance per label and rewrites the rules to refer to it.

    >>> g[1].right
    ('item', <list>)
    >>> g[1].right[1] is g[0].left is g.variable('list')
    True
    >>> [g.is_terminal(symbol) for symbol in ('list', 'item', 'unreferenced')]
    [False, True, True]

    Grammars expose their rules using the standard list interface.

    >>> len(g)
    2
    >>> for rule in g.rules('list'): print(rule)
    <list> = ;
    <list> = 'item', <list>;

    First and Follow sets are computed during construction. The Follow set
    of the root contains the end-of-input marker.

    >>> sorted(t.name for t in g.variable('list').first)
    ['epsilon', 'item']
    >>> sorted(t.name for t in g.variable('list').follow)
    ['$']

    The sets are a fixed point, another round of propagation changes nothing.

    >>> g.compute_first_follow()
    False
    """
    def __init__(self, *rules, **kw):
        if any((opt not in ('root', 'tokens') for opt in kw)) or any((not isinstance(rule, Rule) for rule in rules)):
            raise TypeError('Unknown argument')
        if not rules:
            raise InvalidGrammarError('The grammar needs at least one rule.')

        self._variables = {}
        for rule in rules:
            label = self._label(rule.left)
            if label not in self._variables:
                self._variables[label] = Variable(label)

        self._token_classes = []
        for token in kw.get('tokens', ()):
            self._add_token_class(token)

        self._rules = tuple(Rule(self._variables[self._label(rule.left)],
                [self._symbol(item) for item in rule.right], rule.action) for rule in rules)

        self._rule_cache = {}
        for rule in self._rules:
            self._rule_cache.setdefault(rule.left, []).append(rule)
        for left in self._rule_cache:
            self._rule_cache[left] = tuple(self._rule_cache[left])

        root = kw.get('root')
        if root is None:
            self._root = self._rules[0].left
        else:
            label = root.label if isinstance(root, Variable) else root
            if label not in self._variables:
                raise InvalidGrammarError('The root %r is not a variable of the grammar' % (root,))
            self._root = self._variables[label]

        self.compute_first_follow()

    @staticmethod
    def _label(left):
        if isinstance(left, Variable):
            return left.label
        if isinstance(left, Terminal):
            raise InvalidGrammarError('A terminal cannot stand on the left side of a rule: %r' % (left,))
        return left

    def _add_token_class(self, token):
        if not isinstance(token, Terminal):
            token = TokenClass(token)
        if token not in self._token_classes:
            self._token_classes.append(token)
        return token

    def _symbol(self, item):
        if isinstance(item, Variable):
            if item.label not in self._variables:
                raise InvalidGrammarError('The variable %r has no rules' % (item,))
            return self._variables[item.label]
        if item is END_OF_INPUT:
            return item
        if isinstance(item, Terminal):
            return self._add_token_class(item)
        if item in self._variables:
            return self._variables[item]
        return self._add_token_class(item)

    def __getitem__(self, index):
        return self._rules[index]

    def __len__(self):
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    def __str__(self):
        return '\n'.join(str(rule) for rule in self._rules)

    def __repr__(self):
        return 'Grammar(%s)' % ', '.join(repr(rule) for rule in self._rules)

    def rules(self, left):
        """Retrieves the rules with a given variable (or label) on the left.

        >>> g = Grammar(Rule('a', ('b',)), Rule('b', ('c',)), Rule('b', ('d',)))
        >>> for rule in g.rules('c'): print(rule)
        >>> for rule in g.rules(Variable('b')): print(rule)
        <b> = 'c';
        <b> = 'd';
        """
        if not isinstance(left, Variable):
            left = self._variables.get(left)
        return self._rule_cache.get(left, ())

    def is_terminal(self, symbol):
        if isinstance(symbol, Variable):
            return symbol.label not in self._variables
        return isinstance(symbol, Terminal) or symbol not in self._variables

    def variable(self, label):
        """Returns the variable owned by this grammar, raises KeyError if there is none."""
        if isinstance(label, Variable):
            label = label.label
        return self._variables[label]

    def variables(self):
        """Returns the variables in the order of their first appearance on a left side."""
        return list(self._variables.values())

    def token_classes(self):
        """Returns the token classes, the explicitly supplied ones first,
        the rest in the order of their first appearance in the rules.

        >>> g = Grammar(Rule('s', ('x', 's', 'y')), Rule('s', ()), tokens=['z'])
        >>> g.token_classes()
        ['z', 'x', 'y']
        """
        return list(self._token_classes)

    def root(self):
        return self._root

    def first(self, items):
        """Returns the First set of a sequence of symbols (or labels) of this grammar."""
        return first_of_sequence([self._lookup(item) for item in items])

    def follow(self, variable):
        return frozenset(self.variable(variable).follow)

    def nullable(self, variable):
        return self.variable(variable).nullable()

    def _lookup(self, item):
        if isinstance(item, Variable):
            return self.variable(item)
        if isinstance(item, str) and item in self._variables:
            return self._variables[item]
        return item

    def compute_first_follow(self):
        """Propagates First and Follow sets until a fixed point is reached.

        The sets only ever grow and are bounded by the finite set of terminals,
        so the iteration terminates. Returns True if any set grew.
        """
        grew = self._root.add_to_follow(END_OF_INPUT)

        passes = 0
        done = False
        while not done:
            done = True
            passes += 1
            for rule in self._rules:
                if rule.left.add_all_to_first(rule.first()):
                    done = False

                for i, item in enumerate(rule.right):
                    if not isinstance(item, Variable):
                        continue
                    rest = first_of_sequence(rule.right[i+1:])
                    if item.add_all_to_follow(t for t in rest if t is not EPSILON):
                        done = False
                    if EPSILON in rest and item.add_all_to_follow(rule.left.follow):
                        done = False
            if not done:
                grew = True

        if grammar_log.isEnabledFor(logging.DEBUG):
            grammar_log.debug('First/Follow fixed point reached after %d passes', passes)
            for var in self._variables.values():
                grammar_log.debug('  %r first=%s follow=%s', var,
                    sorted(t.name for t in var.first), sorted(t.name for t in var.follow))
        return grew
