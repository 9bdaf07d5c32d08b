"""Error kinds recorded by a parser that entered the error state.

Traversal calls never raise these; they only explain why ``is_valid()``
turned false. The decoding helpers raise them.
"""


class LookaheadError(Exception):
    """Base class for every reason a traversal becomes invalid."""


class MalformedInputError(LookaheadError):
    """The tokenizer rejected the input (syntax, truncation, encoding)."""


class ProtocolError(LookaheadError):
    """An operation was called that the buffered token does not allow."""

    def __init__(self, operation: str, state):
        self.operation = operation
        self.state = state
        super().__init__(f"{operation}() is not valid in state {state.name}")


class UnsupportedFeatureError(LookaheadError):
    """The tokenizer produced something the parser refuses to carry."""
