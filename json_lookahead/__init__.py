"""Pull-style lookahead traversal of JSON on top of the ijson tokenizer."""
from .errors import LookaheadError, MalformedInputError, ProtocolError, UnsupportedFeatureError
from .handler import LookaheadParserHandler, LookaheadState
from .parser import LookaheadParser
from .streaming_parser import StreamingJSONParser, measure_depth, read_value
from .value import JsonType, Value

__version__ = "0.1.0"

__all__ = [
    "JsonType",
    "LookaheadError",
    "LookaheadParser",
    "LookaheadParserHandler",
    "LookaheadState",
    "MalformedInputError",
    "ProtocolError",
    "StreamingJSONParser",
    "UnsupportedFeatureError",
    "Value",
    "measure_depth",
    "read_value",
]
