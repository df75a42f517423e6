"""
LL(1) compiler construction kit: finite automata for tokenizers,
First/Follow sets, LL(1) parse tables and a table-driven parser.
"""

from .symbols import Terminal, TokenClass, Variable, EPSILON, END_OF_INPUT
from .rule import Rule
from .grammar import Grammar, InvalidGrammarError
from .automaton import Automaton, State, StateSet, Transition, determinize, epsilon_closure, union_fa
from .tokens import Token, TokenPos, TokenStream
from .llparser import (ParseTable, make_llparser, GrammarConflictError, ParsingError,
    NoApplicableRuleError, TerminalMismatchError, IncompleteParseError,
    PrematureEndOfInputError, TrailingInputError)
from .lexer import Lexer, LexingError
