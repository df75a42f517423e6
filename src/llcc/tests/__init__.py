def load_tests(loader, tests, ignore):
    import doctest

    import llcc.automaton
    import llcc.display
    import llcc.grammar
    import llcc.lexer
    import llcc.llparser
    import llcc.patterns
    import llcc.rule
    import llcc.symbols
    import llcc.tokens

    tests.addTests(doctest.DocTestSuite(llcc.automaton))
    tests.addTests(doctest.DocTestSuite(llcc.display))
    tests.addTests(doctest.DocTestSuite(llcc.grammar))
    tests.addTests(doctest.DocTestSuite(llcc.lexer))
    tests.addTests(doctest.DocTestSuite(llcc.llparser))
    tests.addTests(doctest.DocTestSuite(llcc.patterns))
    tests.addTests(doctest.DocTestSuite(llcc.rule))
    tests.addTests(doctest.DocTestSuite(llcc.symbols))
    tests.addTests(doctest.DocTestSuite(llcc.tokens))

    tests.addTests(loader.loadTestsFromNames([
        'llcc.tests.test_automaton',
        'llcc.tests.test_cli',
        'llcc.tests.test_grammar',
        'llcc.tests.test_lexer',
        'llcc.tests.test_llparser',
        ]))

    return tests

if __name__ == '__main__':
    import unittest
    unittest.main()
