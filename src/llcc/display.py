"""
Text renderings of parse tables, First/Follow sets and automata.

    >>> from llcc.grammar import Grammar
    >>> from llcc.rule import Rule
    >>> from llcc.llparser import ParseTable
    >>> g = Grammar(Rule('S', ('a', 'S', 'b')), Rule('S', ()))
    >>> print(render_table(ParseTable(g)))
    Variable | a               | b       | $
    ---------+-----------------+---------+--------
    <S>      | <S> ::= a <S> b | <S> ::= | <S> ::=

Empty cells are marked with a filler.

    >>> print(render_table(ParseTable(Grammar(Rule('S', ('a',))))))
    Variable | a         | $
    ---------+-----------+---
    <S>      | <S> ::= a | ~~
"""

from jinja2 import Template

_table_templ = Template("""\
{{ header|join(' | ') }}
{{ rule }}
{% for row in rows -%}
{{ row|join(' | ') }}
{% endfor %}""")

_sets_templ = Template("""\
{% for var, first, follow, nullable in rows -%}
{{ var.ljust(width) }} first={ {{- first|join(', ') -}} } follow={ {{- follow|join(', ') -}} }{% if nullable %} nullable{% endif %}
{% endfor %}""")

_fa_templ = Template("""\
{% for state in states -%}
{{ state.label }}{% if state.initial %} initial{% endif %}{% if state.accept is not none %} accept={{ state.accept }}{% endif %}
{% for symbol, target in state.edges -%}
{{ '    ' }}--{{ symbol }}--> {{ target }}
{% endfor -%}
{% endfor %}""")

def _strip(text):
    return '\n'.join(line.rstrip() for line in text.strip('\n').split('\n'))

def format_rule(rule):
    return ' '.join([str(rule.left), '::='] + [str(item) for item in rule.right])

def render_table(table, empty='~~'):
    header = ['Variable'] + [str(term) for term in table.columns]
    rows = []
    for variable, cells in zip(table.rows, table.table):
        rows.append([str(variable)] + [format_rule(rule) if rule is not None else empty for rule in cells])

    widths = [max(len(line[i]) for line in [header] + rows) for i in range(len(header))]
    def _pad(line):
        return [cell.ljust(width) for cell, width in zip(line, widths)]

    return _strip(_table_templ.render(
        header=_pad(header),
        rule='-+-'.join('-' * width for width in widths),
        rows=[_pad(row) for row in rows]))

def render_sets(grammar):
    rows = []
    for var in grammar.variables():
        rows.append((str(var),
            sorted(str(t) for t in var.first),
            sorted(str(t) for t in var.follow),
            var.nullable()))
    width = max(len(row[0]) for row in rows)
    return _strip(_sets_templ.render(rows=rows, width=width))

def render_automaton(fa):
    """Lists the states reachable from the initial ones, with their edges.

    >>> from llcc.automaton import Automaton
    >>> fa = Automaton()
    >>> s0, s1, s2 = fa.new_state(), fa.new_state(), fa.new_state()
    >>> fa.initial.add(s0)
    >>> e = s0.add_transition('a', s1)
    >>> e = s2.add_transition('b', s1)
    >>> fa.set_accepting(s1)
    >>> print(render_automaton(fa))
    0 initial
        --'a'--> 1
    1 accept=True
    """
    reachable = fa.reachable_states()
    states = []
    for state in fa.states:
        if state not in reachable:
            continue
        states.append({
            'label': state.label,
            'initial': state in fa.initial,
            'accept': fa.accept_labels.get(state),
            'edges': [('eps' if t.symbol is None else repr(t.symbol), t.target.label) for t in state.transitions],
            })
    return _strip(_fa_templ.render(states=states))
