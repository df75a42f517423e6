import unittest

from llcc.grammar import Grammar
from llcc.llparser import (ParseTable, make_llparser, GrammarConflictError, ParsingError,
    NoApplicableRuleError, TerminalMismatchError, IncompleteParseError,
    PrematureEndOfInputError, TrailingInputError)
from llcc.rule import Rule
from llcc.symbols import Variable, TokenClass, END_OF_INPUT
from llcc.tokens import Token, TokenPos, TokenStream
from llcc.tests.sample_grammars import anbn, expr_grammar, ambiguous_grammar

class TestParseTable(unittest.TestCase):
    def test_one_rule_per_cell(self):
        table = ParseTable(expr_grammar())
        self.assertEqual([str(v) for v in table.rows], ['<E>', '<Ep>', '<T>', '<Tp>', '<F>'])
        self.assertEqual([str(t) for t in table.columns], ['+', '*', '(', ')', 'num', '$'])

        cells = dict(((v.label, t.name), r) for v, t, r in table)
        self.assertEqual(len(cells), 13)
        self.assertEqual(cells['Ep', ')'].right, ())
        self.assertEqual(cells['Ep', '$'].right, ())
        self.assertEqual(cells['Tp', '+'].right, ())
        self.assertEqual(cells['F', 'num'].right, (TokenClass('num'),))
        self.assertEqual(cells['F', '('].right, (TokenClass('('), Variable('E'), TokenClass(')')))
        self.assertNotIn(('F', '+'), cells)

    def test_first_first_conflict(self):
        with self.assertRaises(GrammarConflictError) as cm:
            make_llparser(ambiguous_grammar())
        e = cm.exception
        self.assertEqual(e.variable, Variable('S'))
        self.assertEqual(e.terminal, TokenClass('a'))
        self.assertEqual((e.row, e.column), (0, 0))
        self.assertEqual(str(e.existing), "<S> = 'a';")
        self.assertEqual(str(e.rule), "<S> = 'a', 'b';")

    def test_identical_rules_conflict(self):
        g = Grammar(Rule('S', ('a',)), Rule('S', ('a',)))
        with self.assertRaises(GrammarConflictError) as cm:
            ParseTable(g)
        e = cm.exception
        self.assertEqual((e.variable, e.terminal), (Variable('S'), TokenClass('a')))
        self.assertIs(e.existing, g[0])
        self.assertIs(e.rule, g[1])

    def test_first_follow_conflict(self):
        g = Grammar(
            Rule('S', ('A', 'a')),
            Rule('A', ('a',)),
            Rule('A', ()),
            )
        with self.assertRaises(GrammarConflictError) as cm:
            ParseTable(g)
        e = cm.exception
        self.assertEqual(e.variable, Variable('A'))
        self.assertEqual(e.terminal, TokenClass('a'))
        self.assertEqual(set(map(str, (e.existing, e.rule))), set(["<A> = 'a';", "<A> = ;"]))

    def test_nullable_rule_fills_follow_cells(self):
        g = Grammar(
            Rule('S', ('A',)),
            Rule('A', ('x',)),
            Rule('A', ()),
            )
        table = ParseTable(g)
        self.assertEqual(str(table.rule_for(Variable('S'), TokenClass('x'))), "<S> = <A>;")
        self.assertEqual(str(table.rule_for(Variable('S'), END_OF_INPUT)), "<S> = <A>;")

    def test_unknown_symbols(self):
        table = ParseTable(anbn)
        self.assertIsNone(table.rule_for(Variable('X'), TokenClass('a')))
        self.assertIsNone(table.rule_for(Variable('S'), TokenClass('c')))
        self.assertRaises(KeyError, table.cell, Variable('S'), TokenClass('c'))
        self.assertNotIn((Variable('S'), TokenClass('c')), table)
        self.assertIn((Variable('S'), END_OF_INPUT), table)

class TestWalk(unittest.TestCase):
    def setUp(self):
        self.anbn = make_llparser(anbn)

    def test_valid_derivations(self):
        for tokens in ([], ['a', 'b'], ['a', 'a', 'b', 'b'], list('aaaabbbb')):
            derivation = []
            self.anbn.walk(tokens, expand_visitor=derivation.append)
            self.assertEqual(len(derivation), len(tokens) // 2 + 1)

    def test_terminal_mismatch_at_second_b(self):
        with self.assertRaises(TerminalMismatchError) as cm:
            self.anbn.walk(['a', 'b', 'b'])
        e = cm.exception
        self.assertIsInstance(e, TrailingInputError)
        self.assertIsInstance(e, IncompleteParseError)
        self.assertEqual(e.index, 2)
        self.assertEqual(e.expected, END_OF_INPUT)
        self.assertEqual(e.found, TokenClass('b'))
        self.assertFalse(e.input_exhausted)
        self.assertEqual(e.remaining, ('b',))

    def test_input_exhausted(self):
        with self.assertRaises(PrematureEndOfInputError) as cm:
            self.anbn.walk(['a', 'a', 'b'])
        e = cm.exception
        self.assertTrue(e.input_exhausted)
        self.assertEqual(e.stack, (TokenClass('b'),))
        self.assertEqual(e.index, 3)

    def test_variable_without_end_of_input_rule(self):
        p = make_llparser(Grammar(Rule('S', ('a', 'T')), Rule('T', ('b',))))
        with self.assertRaises(PrematureEndOfInputError) as cm:
            p.walk(['a'])
        self.assertEqual(cm.exception.stack, (Variable('T'),))

    def test_no_applicable_rule(self):
        p = make_llparser(expr_grammar())
        with self.assertRaises(NoApplicableRuleError) as cm:
            p.walk(['num', '+', '*', 'num'])
        e = cm.exception
        self.assertEqual(e.index, 2)
        self.assertEqual(e.variable, Variable('T'))
        self.assertEqual(e.terminal, TokenClass('*'))
        self.assertEqual(e.remaining, ('*', 'num'))

    def test_terminal_mismatch(self):
        p = make_llparser(Grammar(Rule('S', ('a', 'b'))))
        with self.assertRaises(TerminalMismatchError) as cm:
            p.walk([('a', 1), ('c', 2)])
        e = cm.exception
        self.assertNotIsInstance(e, IncompleteParseError)
        self.assertEqual(e.index, 1)
        self.assertEqual((e.expected, e.found), (TokenClass('b'), TokenClass('c')))
        self.assertEqual(e.token, ('c', 2))

    def test_error_position_from_tokens(self):
        p = make_llparser(Grammar(Rule('S', ('a', 'b'))))
        pos = TokenPos('input.txt', 3, 7)
        with self.assertRaises(ParsingError) as cm:
            p.walk([Token('a', 'a', TokenPos('input.txt', 3, 5)), Token('c', 'c', pos)])
        self.assertEqual(cm.exception.pos, pos)
        self.assertEqual(str(cm.exception), "input.txt(3:7): error: stack and input terminals do not match: ['b', 'c']")

    def test_table_is_reusable_after_errors(self):
        self.assertRaises(ParsingError, self.anbn.walk, ['b'])
        self.assertEqual(self.anbn.walk(['a', 'b']), ('a', (), 'b'))

    def test_semantic_actions(self):
        p = make_llparser(expr_grammar())
        tokens = [('num', '2'), ('+', '+'), ('num', '3'), ('*', '*'), ('num', '4')]
        self.assertEqual(p.walk(tokens), 14)
        tokens = [('(', '('), ('num', '2'), ('+', '+'), ('num', '3'), (')', ')'), ('*', '*'), ('num', '4')]
        self.assertEqual(p.walk(tokens), 20)

    def test_custom_reducer_and_context(self):
        calls = []
        def reducer(rule, ctx, *args):
            calls.append(ctx)
            return len(args)
        self.assertEqual(self.anbn.walk('ab', context='ctx', reducer=reducer), 3)
        self.assertEqual(calls, ['ctx', 'ctx'])

    def test_visitors(self):
        expanded, matched = [], []
        self.anbn.walk(['a', 'a', 'b', 'b'], expand_visitor=lambda rule: expanded.append(len(rule.right)),
            match_visitor=matched.append)
        self.assertEqual(expanded, [3, 3, 0])
        self.assertEqual(matched, ['a', 'a', 'b', 'b'])

    def test_token_stream_input(self):
        ts = TokenStream(['a', 'b'])
        self.anbn.walk(ts)
        self.assertTrue(ts.is_consumed())

    def test_explicit_end_of_input(self):
        p = make_llparser(Grammar(Rule('S', ('x', END_OF_INPUT))))
        self.assertEqual(p.walk(['x']), ('x', None))

if __name__ == '__main__':
    unittest.main()
