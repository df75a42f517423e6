import contextlib
import io
import os
import tempfile
import unittest

from llcc.__main__ import _main, load_object
from llcc.grammar import Grammar
from llcc.lexer import Lexer

GRAMMARS = 'llcc.tests.sample_grammars'

class TestCli(unittest.TestCase):
    def _run(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            status = _main(list(argv))
        return status, out.getvalue(), err.getvalue()

    def test_load_object(self):
        self.assertIsInstance(load_object(GRAMMARS + ':anbn', Grammar), Grammar)
        self.assertIsInstance(load_object(GRAMMARS + ':expr_grammar', Grammar), Grammar)
        self.assertIsInstance(load_object(GRAMMARS + ':expr_lexer', Lexer), Lexer)
        self.assertRaises(ValueError, load_object, GRAMMARS, Grammar)
        self.assertRaises(TypeError, load_object, GRAMMARS + ':not_a_grammar', Grammar)

    def test_parse_tokens(self):
        status, out, err = self._run(GRAMMARS + ':anbn', '--tokens', 'a', 'a', 'b', 'b')
        self.assertEqual(status, 0)
        self.assertIn('Successfully parsed', out)

    def test_parse_empty_token_list(self):
        status, out, err = self._run(GRAMMARS + ':anbn', '--tokens')
        self.assertEqual(status, 0)

    def test_parse_error(self):
        status, out, err = self._run(GRAMMARS + ':anbn', '--tokens', 'a', 'b', 'b')
        self.assertEqual(status, 1)
        self.assertIn('2: error: input remains after the stack emptied', err)

    def test_conflict(self):
        status, out, err = self._run(GRAMMARS + ':ambiguous_grammar', '--print-table')
        self.assertEqual(status, 1)
        self.assertIn('LL(1) conflict', err)
        self.assertIn('Cell [0,0]', err)
        self.assertEqual(out, '')

    def test_print_table_and_sets(self):
        status, out, err = self._run(GRAMMARS + ':expr_grammar', '--print-table', '--print-sets')
        self.assertEqual(status, 0)
        self.assertIn('Variable | +', out)
        self.assertIn('<Ep> ::= + <T> <Ep>', out)
        self.assertIn('| ~~', out)
        self.assertIn('<Tp> first={*, epsilon} follow={$, ), +} nullable', out)

    def test_parse_file(self):
        fd, path = tempfile.mkstemp(suffix='.txt')
        try:
            with os.fdopen(fd, 'w') as fout:
                fout.write('(1 + 2) * 3\n')
            status, out, err = self._run(GRAMMARS + ':expr_grammar', '--lexer', GRAMMARS + ':expr_lexer',
                '--parse', path, '--print-dfa')
        finally:
            os.remove(path)
        self.assertEqual(status, 0, err)
        self.assertIn('Successfully parsed', out)
        self.assertIn('initial', out)

    def test_bad_reference(self):
        status, out, err = self._run('llcc.tests.no_such_module:g')
        self.assertEqual(status, 1)
        self.assertIn('error:', err)

if __name__ == '__main__':
    unittest.main()
