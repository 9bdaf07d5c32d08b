"""Event sink that buffers exactly one tokenizer event.

The tokenizer (ijson) is asked for one ``(event, value)`` token at a time.
Each token is dispatched to exactly one callback below, which records the
token's shape in ``state`` and its payload in ``value``.
"""
import enum
import io
import logging

import ijson

from . import config
from .errors import LookaheadError, MalformedInputError, UnsupportedFeatureError
from .value import INT64_MIN, UINT64_MAX, Value

logger = logging.getLogger(__name__)


class LookaheadState(enum.Enum):
    INIT = 0
    ERROR = 1
    HAS_NULL = 2
    HAS_BOOL = 3
    HAS_NUMBER = 4
    HAS_STRING = 5
    HAS_KEY = 6
    ENTERING_OBJECT = 7
    EXITING_OBJECT = 8
    ENTERING_ARRAY = 9
    EXITING_ARRAY = 10
    # no token left and no error: the document was fully consumed
    EXHAUSTED = 11


VALUE_STATES = frozenset({
    LookaheadState.HAS_NULL,
    LookaheadState.HAS_BOOL,
    LookaheadState.HAS_NUMBER,
    LookaheadState.HAS_STRING,
    LookaheadState.HAS_KEY,
})

TOKENIZER_ERRORS = (ijson.JSONError, UnicodeDecodeError)


def open_source(source):
    """Return a binary stream over ``source`` for the tokenizer."""
    if isinstance(source, str):
        return io.BytesIO(source.encode("utf-8"))
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(source)
    if hasattr(source, "read"):
        return source
    raise TypeError(f"cannot parse JSON from {type(source).__name__}")


class LookaheadParserHandler:
    """Callback target for one tokenizer; holds a single buffered token."""

    def __init__(self, source, backend=None, buf_size=None):
        self.state = LookaheadState.INIT
        self.value = None
        self.error = None
        self._parse_error = False

        name = backend or config.backend_name()
        tokenizer = ijson.get_backend(name) if name else ijson
        self._events = iter(tokenizer.basic_parse(
            open_source(source),
            buf_size=buf_size or config.buf_size(),
            use_float=True,
        ))
        self._callbacks = {
            "null": lambda _: self.null(),
            "boolean": self.boolean,
            "number": self.number,
            "string": self.string,
            "map_key": self.key,
            "start_map": lambda _: self.start_object(),
            "end_map": lambda _: self.end_object(),
            "start_array": lambda _: self.start_array(),
            "end_array": lambda _: self.end_array(),
        }
        self.parse_next()

    # tokenizer callbacks

    def null(self):
        self.state = LookaheadState.HAS_NULL
        self.value = Value.null()
        return True

    def boolean(self, b):
        self.state = LookaheadState.HAS_BOOL
        self.value = Value.boolean(b)
        return True

    def integer(self, i):
        if not INT64_MIN <= i <= UINT64_MAX:
            try:
                d = float(i)
            except OverflowError:
                # recorded as a tokenizer fault; not an unsupported token
                self._tokenizer_failed(MalformedInputError("number too big"))
                return True
            return self.double(d)
        self.state = LookaheadState.HAS_NUMBER
        self.value = Value.number(i)
        return True

    def double(self, d):
        self.state = LookaheadState.HAS_NUMBER
        self.value = Value.number(d)
        return True

    def raw_number(self, n):
        return False

    def number(self, n):
        if isinstance(n, int):
            return self.integer(n)
        if isinstance(n, float):
            return self.double(n)
        return self.raw_number(n)

    def string(self, s):
        self.state = LookaheadState.HAS_STRING
        self.value = Value.string(s)
        return True

    def start_object(self):
        self.state = LookaheadState.ENTERING_OBJECT
        return True

    def key(self, s):
        self.state = LookaheadState.HAS_KEY
        self.value = Value.string(s)
        return True

    def end_object(self):
        self.state = LookaheadState.EXITING_OBJECT
        return True

    def start_array(self):
        self.state = LookaheadState.ENTERING_ARRAY
        return True

    def end_array(self):
        self.state = LookaheadState.EXITING_ARRAY
        return True

    # driving the tokenizer

    def has_parse_error(self) -> bool:
        return self._parse_error

    def parse_next(self):
        """Request exactly one more token from the tokenizer."""
        if self._parse_error:
            self.state = LookaheadState.ERROR
            return
        if self.state in (LookaheadState.ERROR, LookaheadState.EXHAUSTED):
            return

        try:
            event, payload = next(self._events)
        except StopIteration:
            self.state = LookaheadState.EXHAUSTED
            return
        except TOKENIZER_ERRORS as e:
            error = MalformedInputError(str(e) or type(e).__name__)
            error.__cause__ = e
            self._tokenizer_failed(error)
            return

        callback = self._callbacks.get(event)
        if callback is None or not callback(payload):
            self._tokenizer_failed(UnsupportedFeatureError(
                f"tokenizer event {event!r} with {type(payload).__name__} payload is not supported"))

    def _tokenizer_failed(self, error: LookaheadError):
        self._parse_error = True
        self._fail(error)

    def _fail(self, error: LookaheadError):
        if self.error is None:
            self.error = error
            logger.debug(f"lookahead parser entered error state: {error}")
        self.state = LookaheadState.ERROR
