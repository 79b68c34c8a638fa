"""Token navigation utilities for the jadeite parser.

The lexer is a generator, so navigation buffers at most a few tokens of
lookahead instead of indexing into a list.
"""

from collections.abc import Iterator

from jadeite.errors import ParseError
from jadeite.tokens import Token, TokenType


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _tokens: Iterator[Token]
        - _buffer: list[Token]
        - _current_token: Token | None
        - _source_file: str | None

    """

    _tokens: Iterator[Token]
    _buffer: list[Token]
    _current_token: Token | None
    _source_file: str | None

    def _advance(self) -> Token | None:
        """Advance to next token and return it (None at end of stream)."""
        if self._buffer:
            self._current_token = self._buffer.pop(0)
        else:
            self._current_token = next(self._tokens, None)
        return self._current_token

    def _peek(self) -> Token | None:
        """Return the next token without consuming it."""
        if not self._buffer:
            token = next(self._tokens, None)
            if token is None:
                return None
            self._buffer.append(token)
        return self._buffer[0]

    def _expect(self, token_type: TokenType, message: str) -> Token:
        """Consume the next token, which must be of ``token_type``.

        Raises:
            ParseError: With ``message`` if the next token has another type.
        """
        token = self._peek()
        if token is None or token.type is not token_type:
            raise self._error(message, token or self._current_token)
        self._advance()
        return token

    def _error(self, message: str, token: Token | None = None) -> ParseError:
        token = token or self._current_token
        if token is None:
            return ParseError(message, source_file=self._source_file)
        return ParseError(message, token.line, token.offset, self._source_file)
