"""
Finite automaton engine. Contains classes to represent nondeterministic
automata with epsilon edges and the subset construction that converts
them to deterministic ones.

An automaton owns its states. The states are allocated by the automaton
and are numbered in the order of their allocation.

    >>> fa = Automaton()
    >>> s0, s1, s2 = fa.new_state(), fa.new_state(), fa.new_state()
    >>> fa.initial.add(s0)
    >>> [s.label for s in fa.states]
    ['0', '1', '2']

Edges are labeled with single characters, epsilon edges are labeled
with None. The accepting states are kept by the automaton, each is mapped
to an accept label.

    >>> e = s0.add_transition('a', s1)
    >>> e = s0.add_transition(None, s2)
    >>> e = s2.add_transition('b', s2)
    >>> fa.set_accepting(s1)
    >>> fa.set_accepting(s2, 'bees')
    >>> fa.matches('a'), fa.matches(''), fa.matches('bbb'), fa.matches('ab')
    (True, True, True, False)

The subset construction yields an automaton without epsilon edges,
each of its states remembers the set of states it was built from.

    >>> dfa = determinize(fa)
    >>> len(dfa.states)
    3
    >>> dfa.states[0].origin
    StateSet(0, 2)
"""

import logging

automaton_log = logging.getLogger('llcc.automaton')

class Transition:
    """An edge between two states.

    Transitions are compared by identity, adding the same edge twice
    results in two transitions.
    """
    def __init__(self, source, symbol, target):
        self.source = source
        self.symbol = symbol
        self.target = target

    def is_epsilon(self):
        return self.symbol is None

    def __repr__(self):
        return 'Transition(%s, %r, %s)' % (self.source.label, self.symbol, self.target.label)

class State:
    """
    A state of a finite automaton. Contains the list of outgoing edges.

    States are compared by identity. Two distinct states are never equal,
    regardless of their edges.
    """
    def __init__(self, index, label=None):
        self.index = index
        self.label = str(index) if label is None else label
        self.transitions = []
        self.origin = None

    def add_transition(self, symbol, target):
        transition = Transition(self, symbol, target)
        self.transitions.append(transition)
        return transition

    def __repr__(self):
        return 'State(%s)' % (self.label,)

class StateSet:
    """A set of states of a nondeterministic automaton that are reached together.

    State sets compare by membership, they are used to identify the states
    of a deterministic automaton during the subset construction.

    >>> fa = Automaton()
    >>> a, b = fa.new_state(), fa.new_state()
    >>> StateSet([a, b, a]) == StateSet([b, a])
    True
    >>> len({StateSet([a, b]), StateSet([b, a]), StateSet([a])})
    2
    """
    def __init__(self, states=()):
        self.states = frozenset(states)

    def __eq__(self, other):
        return isinstance(other, StateSet) and self.states == other.states

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self.states)

    def __iter__(self):
        return iter(sorted(self.states, key=lambda state: state.index))

    def __len__(self):
        return len(self.states)

    def __contains__(self, state):
        return state in self.states

    def __bool__(self):
        return bool(self.states)

    def closure(self):
        return epsilon_closure(self.states)

    def is_closed(self):
        return self.closure() == self

    def symbols(self):
        """Returns the set of non-epsilon symbols on the outgoing edges."""
        return set(t.symbol for state in self.states for t in state.transitions if t.symbol is not None)

    def move(self, symbol):
        """Returns the states reachable over a single edge labeled 'symbol'."""
        return StateSet(t.target for state in self.states for t in state.transitions if t.symbol == symbol)

    def __repr__(self):
        return 'StateSet(%s)' % ', '.join(state.label for state in self)

def epsilon_closure(states):
    """Returns the StateSet reachable from 'states' over epsilon edges alone.

    The closure of a closed set is the set itself.

    >>> fa = Automaton()
    >>> a, b, c = fa.new_state(), fa.new_state(), fa.new_state()
    >>> e = a.add_transition(None, b)
    >>> e = b.add_transition(None, a)
    >>> e = b.add_transition('x', c)
    >>> closure = epsilon_closure([a])
    >>> closure
    StateSet(0, 1)
    >>> closure.closure() == closure
    True
    """
    q = list(states)
    res = set(q)
    while q:
        state = q.pop()
        for t in state.transitions:
            if t.symbol is not None:
                continue
            if t.target in res:
                continue
            q.append(t.target)
            res.add(t.target)
    return StateSet(res)

class Automaton:
    """
    A finite automaton consists of a list of states and the edges
    that interconnect them.

    The FA can have zero or more initial states and zero or more accepting
    states. The accepting states are labeled, for a tokenizer the label
    is typically the token class to emit. Accepting states are stored
    in a dict that maps them to the corresponding label.
    """
    def __init__(self):
        self.states = []
        self.initial = set()
        self.accept_labels = {}

    def new_state(self, label=None):
        state = State(len(self.states), label)
        self.states.append(state)
        return state

    def set_accepting(self, state, label=True):
        """Marks the state as accepting with the given label, or as not accepting if label is None."""
        if label is None or label is False:
            self.accept_labels.pop(state, None)
        else:
            self.accept_labels[state] = label

    def accepts(self, state):
        return state in self.accept_labels

    def accepting_states(self):
        return sorted(self.accept_labels, key=lambda state: state.index)

    def reachable_states(self):
        """Returns the StateSet of states reachable from the initial states over any edges."""
        stack = list(self.initial)
        seen = set(stack)
        while stack:
            for t in stack.pop().transitions:
                if t.target not in seen:
                    seen.add(t.target)
                    stack.append(t.target)
        return StateSet(seen)

    def run(self, text):
        """Returns the StateSet the automaton is in after reading 'text'."""
        current = epsilon_closure(self.initial)
        for ch in text:
            if not current:
                break
            current = current.move(ch).closure()
        return current

    def matches(self, text):
        return any(state in self.accept_labels for state in self.run(text))

    def accept_label(self, states):
        """Returns the label of the earliest allocated accepting state among 'states'."""
        for state in sorted(states, key=lambda state: state.index):
            if state in self.accept_labels:
                return self.accept_labels[state]
        return None

    def __str__(self):
        res = []
        for state in self.states:
            accept_label = self.accept_labels.get(state)
            res.append('%s%s%s' % (
                '%r ' % accept_label if accept_label is not None else ' ',
                state.label,
                ' initial' if state in self.initial else ''))
            for t in state.transitions:
                res.append('    %s %r' % (t.target.label, t.symbol if t.symbol is not None else 'epsilon'))
        return '\n'.join(res)

def determinize(enfa, accept_combine=None):
    """
    Converts an NFA with epsilon edges (labeled with None) to a DFA.

    Every state of the result corresponds to the epsilon-closed set of NFA
    states stored in its 'origin' member. Equal sets map to the same state.
    The accept label of a DFA state is computed by 'accept_combine' from
    the set of NFA states, by default the label of the earliest allocated
    accepting NFA state wins.
    """
    accept_combine = accept_combine or enfa.accept_label

    dfa = Automaton()
    state_map = {}

    def _get_state(state_set):
        res = state_map.get(state_set)
        if res is None:
            res = dfa.new_state()
            res.origin = state_set
            state_map[state_set] = res
            q.append(res)
            label = accept_combine(state_set)
            if label is not None:
                dfa.set_accepting(res, label)
        return res

    q = []
    dfa.initial.add(_get_state(epsilon_closure(enfa.initial)))
    while q:
        current = q.pop(0)
        for symbol in sorted(current.origin.symbols(), key=repr):
            target = _get_state(current.origin.move(symbol).closure())
            current.add_transition(symbol, target)

    if automaton_log.isEnabledFor(logging.DEBUG):
        automaton_log.debug('determinized %d NFA states into %d DFA states',
            len(enfa.states), len(dfa.states))
    return dfa

def union_fa(fas):
    """
    Builds a FA that accepts a union of languages of the provided FAs.
    The states of the FAs are moved into the new automaton.

    >>> fas = []
    >>> for word in ('if', 'in'):
    ...     fa = Automaton()
    ...     prev = fa.new_state()
    ...     fa.initial.add(prev)
    ...     for ch in word:
    ...         s = fa.new_state()
    ...         t = prev.add_transition(ch, s)
    ...         prev = s
    ...     fa.set_accepting(prev, word)
    ...     fas.append(fa)
    >>> union = union_fa(fas)
    >>> union.matches('if'), union.matches('in'), union.matches('i')
    (True, True, False)
    >>> len(determinize(union).states)
    4
    """
    final_fa = Automaton()
    final_init = final_fa.new_state()
    final_fa.initial.add(final_init)
    for fa in fas:
        for state in fa.states:
            if state.label == str(state.index):
                state.label = str(len(final_fa.states))
            state.index = len(final_fa.states)
            final_fa.states.append(state)
        final_fa.accept_labels.update(fa.accept_labels)
        for init in fa.initial:
            final_init.add_transition(None, init)
    return final_fa
