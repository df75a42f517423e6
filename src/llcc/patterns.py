"""
Patterns describe regular languages over characters. They are built
programmatically and translated into automata with epsilon edges.

    >>> ident = Cat(char_range('a', 'z'), Rep(Alt(char_range('a', 'z'), char_range('0', '9'))))
    >>> fa = make_enfa(ident, 'ident')
    >>> fa.matches('x1'), fa.matches('1x'), fa.matches('')
    (True, False, False)

    >>> fa = make_enfa(literal('while'), 'kw')
    >>> fa.matches('while'), fa.matches('whil')
    (True, False)
"""

from .automaton import Automaton

class Lit:
    def __init__(self, charset):
        self.charset = frozenset(charset)

    def __repr__(self):
        return 'Lit(%r)' % (''.join(sorted(self.charset)),)

    def __contains__(self, ch):
        return ch in self.charset

class Rep:
    def __init__(self, term):
        self.term = term

    def __repr__(self):
        return 'Rep({0})'.format(repr(self.term))

class Alt:
    def __init__(self, *terms):
        self.terms = terms

    def __repr__(self):
        return 'Alt({0})'.format(', '.join((repr(t) for t in self.terms)))

class Cat:
    def __init__(self, *terms):
        self.terms = tuple(terms)

    def __repr__(self):
        return 'Cat({0})'.format(', '.join((repr(t) for t in self.terms)))

def literal(text):
    """
    >>> literal('ab')
    Cat(Lit('a'), Lit('b'))
    """
    return Cat(*(Lit(ch) for ch in text))

def char_range(first, last):
    """
    >>> char_range('a', 'e')
    Lit('abcde')
    """
    return Lit(chr(c) for c in range(ord(first), ord(last) + 1))

def plus(term):
    return Cat(term, Rep(term))

def opt(term):
    return Alt(Cat(), term)

def add_pattern(fa, src, sink, pattern):
    """Connects 'src' to 'sink' with a subautomaton of 'fa' that accepts 'pattern'.

    A string stands for its literal, None for the empty string.
    """
    if pattern is None:
        src.add_transition(None, sink)
    elif isinstance(pattern, str):
        add_pattern(fa, src, sink, literal(pattern))
    elif isinstance(pattern, Alt):
        for term in pattern.terms:
            mid = fa.new_state()
            add_pattern(fa, src, mid, term)
            mid.add_transition(None, sink)
    elif isinstance(pattern, Rep):
        mid = fa.new_state()
        src.add_transition(None, mid)
        mid.add_transition(None, sink)
        add_pattern(fa, mid, mid, pattern.term)
    elif isinstance(pattern, Cat):
        if not pattern.terms:
            src.add_transition(None, sink)
            return
        for term in pattern.terms[:-1]:
            mid = fa.new_state()
            add_pattern(fa, src, mid, term)
            src = mid
        add_pattern(fa, src, sink, pattern.terms[-1])
    elif isinstance(pattern, Lit):
        for ch in sorted(pattern.charset):
            src.add_transition(ch, sink)
    else:
        raise TypeError('Not a pattern: %r' % (pattern,))

def make_enfa(pattern, accept_label=True):
    fa = Automaton()
    initial = fa.new_state()
    fa.initial.add(initial)
    final = fa.new_state()
    fa.set_accepting(final, accept_label)
    add_pattern(fa, initial, final, pattern)
    return fa
