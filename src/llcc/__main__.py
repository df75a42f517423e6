from .grammar import Grammar, InvalidGrammarError
from .lexer import Lexer
from .llparser import ParsingError, GrammarConflictError, make_llparser
from .display import render_table, render_sets, render_automaton
import importlib, logging, sys

def load_object(ref, kind):
    """Resolves a 'module:attribute' reference. Callables are called without arguments."""
    module_name, sep, attr = ref.partition(':')
    if not sep or not attr:
        raise ValueError('expected module:attribute, got %r' % (ref,))
    obj = importlib.import_module(module_name)
    for name in attr.split('.'):
        obj = getattr(obj, name)
    if not isinstance(obj, kind) and callable(obj):
        obj = obj()
    if not isinstance(obj, kind):
        raise TypeError('%s does not refer to a %s' % (ref, kind.__name__))
    return obj

def _main(argv=None):
    from argparse import ArgumentParser
    ap = ArgumentParser(prog='llcc')
    ap.add_argument('grammar', help='The grammar to use, as module:attribute')
    ap.add_argument('-l', '--lexer', help='The lexer to tokenize --parse input with, as module:attribute')
    ap.add_argument('-t', '--tokens', nargs='*', help='Parse the given sequence of token classes')
    ap.add_argument('-p', '--parse', help='Tokenize the file with the lexer and parse it')
    ap.add_argument('--print-table', action="store_true", help='Show the LL(1) parse table')
    ap.add_argument('--print-sets', action="store_true", help='Show the First and Follow sets')
    ap.add_argument('--print-dfa', action="store_true", help='Show the states of the lexer\'s DFA')
    ap.add_argument('-v', '--verbose', action="count", default=0, help='Log parser steps (-vv for more detail)')
    args = ap.parse_args(argv)

    logging.basicConfig(level=[logging.WARNING, logging.INFO, logging.DEBUG][min(args.verbose, 2)],
        format='%(name)s: %(message)s')

    if args.parse and not args.lexer:
        ap.error('--parse requires --lexer')

    try:
        g = load_object(args.grammar, Grammar)
        lexer = load_object(args.lexer, Lexer) if args.lexer else None
    except (ImportError, AttributeError, ValueError, TypeError) as e:
        print('error: %s' % e, file=sys.stderr)
        return 1
    except InvalidGrammarError as e:
        print(e, file=sys.stderr)
        return 1

    try:
        if args.print_sets:
            print(render_sets(g))

        p = make_llparser(g)
        if args.print_table:
            print(render_table(p))
        if args.print_dfa and lexer is not None:
            print(render_automaton(lexer.dfa))

        if args.tokens is not None:
            p.walk(args.tokens)
            print('Successfully parsed the token stream!')

        if args.parse:
            with open(args.parse, 'r') as fin:
                text = fin.read()
            p.walk(lexer.tokens(text, filename=args.parse))
            print('Successfully parsed the token stream!')

    except GrammarConflictError as e:
        e.print_trace()
        return 1
    except InvalidGrammarError as e:
        print(e, file=sys.stderr)
        return 1
    except ParsingError as e:
        print(e, file=sys.stderr)
        return 1
    return 0

if __name__ == '__main__':
    sys.exit(_main())
