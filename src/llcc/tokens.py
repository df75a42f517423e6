"""
Tokens and token streams.

A token is anything the parser can extract a token class from. For tuples,
the first member is the token class and the second member the token's value.
For objects, the class is read from the `token_class` member, the value from
`value`. Otherwise, the token itself is both the class and the value.

    >>> ts = TokenStream([Token('id', 'x'), ('+', '+'), 'id'])
    >>> ts.peek_class()
    'id'
    >>> ts.match(TokenClass('+'))
    False
    >>> ts.match(TokenClass('id')), ts.position
    (True, 1)
    >>> ts.match(TokenClass('+')), ts.match(TokenClass('id'))
    (True, True)
    >>> ts.is_consumed(), ts.peek_class()
    (True, $)
"""

from .symbols import Terminal, TokenClass, END_OF_INPUT

class TokenPos:
    def __init__(self, filename, line, col):
        self.filename = filename
        self.line = line
        self.col = col

    def __eq__(self, other):
        if not isinstance(other, TokenPos):
            return NotImplemented
        return (self.filename, self.line, self.col) == (other.filename, other.line, other.col)

    def __hash__(self):
        return hash((self.filename, self.line, self.col))

    def __str__(self):
        if self.filename is None:
            return "%d:%d" % (self.line, self.col)
        return "%s(%d:%d)" % (self.filename, self.line, self.col)

    def __repr__(self):
        return 'TokenPos(%r, %d, %d)' % (self.filename, self.line, self.col)

class Token:
    def __init__(self, token_class, value, pos=None):
        if not isinstance(token_class, Terminal):
            token_class = TokenClass(token_class)
        self.token_class = token_class
        self.value = value
        self.pos = pos

    def __eq__(self, rhs):
        if isinstance(rhs, Token):
            return (self.token_class, self.value) == (rhs.token_class, rhs.value)
        return NotImplemented

    def __hash__(self):
        return hash((self.token_class, self.value))

    def __str__(self):
        return '%s %r' % (self.token_class, self.value)

    def __repr__(self):
        if self.pos is not None:
            return 'Token(%r, %r, %r)' % (self.token_class, self.value, self.pos)
        else:
            return 'Token(%r, %r)' % (self.token_class, self.value)

def extract_symbol(token):
    """Returns the token class of a token.

    >>> extract_symbol(('num', 42)), extract_symbol(Token('num', 42)), extract_symbol('num')
    ('num', 'num', 'num')
    """
    symbol = token[0] if isinstance(token, tuple) else getattr(token, 'token_class', token)
    if not isinstance(symbol, Terminal):
        symbol = TokenClass(symbol)
    return symbol

def extract_value(token):
    return token[1] if isinstance(token, tuple) else getattr(token, 'value', token)

def extract_location(token, token_index=None):
    if isinstance(token, tuple):
        return token[2] if len(token) > 2 else token_index
    pos = getattr(token, 'pos', None)
    return token_index if pos is None else pos

class TokenStream:
    """A cursor over a finite sequence of tokens.

    Once all tokens are consumed, the stream behaves as if it ended
    with the end-of-input marker.
    """
    def __init__(self, tokens, extract_symbol=extract_symbol):
        self.tokens = tuple(tokens)
        self.position = 0
        self._extract_symbol = extract_symbol

    def is_consumed(self):
        return self.position >= len(self.tokens)

    def peek(self):
        """Returns the next token, or None if the stream is consumed."""
        if self.is_consumed():
            return None
        return self.tokens[self.position]

    def peek_class(self):
        if self.is_consumed():
            return END_OF_INPUT
        symbol = self._extract_symbol(self.tokens[self.position])
        if not isinstance(symbol, Terminal):
            symbol = TokenClass(symbol)
        return symbol

    def match(self, expected):
        """Advances past the next token if its class is 'expected'.

        The end-of-input marker matches a consumed stream without advancing.
        """
        if self.is_consumed():
            return expected is END_OF_INPUT
        if self.peek_class() != expected:
            return False
        self.position += 1
        return True

    def remaining(self):
        return self.tokens[self.position:]

    def location(self):
        """Returns the source position of the next token, or its index if it has none."""
        if self.is_consumed():
            if self.tokens:
                return extract_location(self.tokens[-1], len(self.tokens))
            return 0
        return extract_location(self.tokens[self.position], self.position)

    def __len__(self):
        return len(self.tokens)

    def __str__(self):
        consumed = ' '.join(str(self._extract_symbol(tok)) for tok in self.tokens[:self.position])
        rest = ' '.join(str(self._extract_symbol(tok)) for tok in self.tokens[self.position:])
        return '%s . %s' % (consumed, rest) if consumed else '. %s' % rest
