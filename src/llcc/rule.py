from .symbols import Variable, TokenClass, EPSILON

class Rule:
    """Represents a single production rule of a grammar.

    A rule always has a single variable on the left and a sequence
    (possibly empty) of variables and terminals on the right.

    >>> S, a, b = Variable('S'), TokenClass('a'), TokenClass('b')
    >>> r = Rule(S, (a, S, b))
    >>> print(r)
    <S> = 'a', <S>, 'b';

    The symbols may also be given as strings. The differentiation between
    variables and terminals then only occurs at the grammar level, see
    the Grammar class.

    >>> print(Rule('S', ('a', 'S', 'b')))
    'S' = 'a', 'S', 'b';

    A rule can have no symbols on the right, such rules produce empty strings.
    The epsilon marker is equivalent to an empty right-hand side.

    >>> print(Rule(S, ()))
    <S> = ;
    >>> Rule(S, (EPSILON,)) == Rule(S, ())
    True

    The left and right symbols can be accessed via 'left' and 'right' members.

    >>> r.left, r.right
    (<S>, ('a', <S>, 'b'))

    A rule can have an associated semantic action. It is called when the parser
    finishes recognizing the rule's right-hand side. The default is None.

    >>> repr(r.action)
    'None'
    """

    def __init__(self, left, right=(), action=None):
        self.left = left
        self.right = tuple(item for item in right if item is not EPSILON)
        self.action = action

    def first(self):
        """Returns the First set of the right-hand side.

        The First sets of the variables on the right are consulted as they are,
        so the result is only complete once the owning grammar computed them.

        >>> S, A = Variable('S'), Variable('A')
        >>> sorted(t.name for t in Rule(S, ('x', A)).first())
        ['x']
        >>> sorted(t.name for t in Rule(S, ()).first())
        ['epsilon']
        >>> A.first.update([TokenClass('y'), EPSILON])
        >>> sorted(t.name for t in Rule(S, (A, 'z')).first())
        ['y', 'z']
        >>> sorted(t.name for t in Rule(S, (A, A)).first())
        ['epsilon', 'y']
        """
        return first_of_sequence(self.right)

    def __eq__(self, other):
        if not isinstance(other, Rule):
            return NotImplemented
        return (self.left, self.right, self.action) == (other.left, other.right, other.action)

    def __ne__(self, other):
        res = self.__eq__(other)
        return res if res is NotImplemented else not res

    def __hash__(self):
        return hash((self.left, self.right, self.action))

    def __str__(self):
        """
        >>> print(Rule('a', ('b', 'c')))
        'a' = 'b', 'c';
        >>> def _custom_action(ctx): pass
        >>> print(Rule('a', (), _custom_action))
        'a' = ; {_custom_action}
        >>> print(Rule('a', (), lambda x: x))
        'a' = ; {<lambda>}
        """
        r = [repr(self.left), ' = ', ', '.join(repr(symbol) for symbol in self.right), ';']
        if self.action is not None:
            r.extend((' {', getattr(self.action, '__name__', ''), '}'))
        return ''.join(r)

    def __repr__(self):
        """
        >>> print(repr(Rule('a', ('b', 'c'))))
        Rule('a', ('b', 'c'))
        >>> print(repr(Rule(Variable('a'), ())))
        Rule(<a>, ())
        """
        if self.action is not None:
            args = (self.left, self.right, self.action)
        else:
            args = (self.left, self.right)
        return 'Rule(%s)' % ', '.join((repr(arg) for arg in args))

def first_of_sequence(items):
    """Returns the First set of a sequence of rule items.

    The items are scanned left to right. A terminal ends the scan, a variable
    contributes its First set and ends the scan unless it is nullable.
    The epsilon marker is part of the result iff all items are nullable.
    Plain strings are taken to be token classes.

    >>> sorted(t.name for t in first_of_sequence(['a', 'b']))
    ['a']
    >>> first_of_sequence([]) == {EPSILON}
    True
    """
    res = set()
    for item in items:
        if isinstance(item, Variable):
            item_first = item.first
        elif item is EPSILON:
            continue
        elif isinstance(item, str):
            item_first = (TokenClass(item),)
        else:
            item_first = (item,)

        res.update(t for t in item_first if t is not EPSILON)
        if EPSILON not in item_first:
            return res
    res.add(EPSILON)
    return res
