"""Pull-style navigation over a JSON document, one token of lookahead.

Typical use::

    parser = LookaheadParser(b'{"a": 1, "b": [true, null]}')
    parser.enter_object()
    while (key := parser.next_object_key()) is not None:
        if key == "a":
            a = parser.get_int()
        else:
            parser.skip_value()
    if not parser.is_valid():
        raise parser.error

Every consuming call checks the buffered token, returns its result and
requests the next token. A call that does not fit the buffered token puts
the parser in the error state for good and returns a sentinel (``0``,
``0.0``, ``False`` or ``None``); check ``is_valid()`` before trusting it.
"""
from typing import Optional

from .errors import ProtocolError
from .handler import VALUE_STATES, LookaheadParserHandler, LookaheadState
from .value import JsonType, Value


class LookaheadParser(LookaheadParserHandler):
    """Caller-driven traversal of a single JSON source, forward only."""

    def is_valid(self) -> bool:
        return self.state is not LookaheadState.ERROR

    def _misuse(self, operation: str):
        self._fail(ProtocolError(operation, self.state))

    def enter_object(self) -> bool:
        if self.state is not LookaheadState.ENTERING_OBJECT:
            self._misuse("enter_object")
            return False
        self.parse_next()
        return True

    def enter_array(self) -> bool:
        if self.state is not LookaheadState.ENTERING_ARRAY:
            self._misuse("enter_array")
            return False
        self.parse_next()
        return True

    def next_object_key(self) -> Optional[str]:
        """Consume the next key of the current object.

        Returns None once the object is finished (the closing brace is
        consumed too) or on error. Each key must be followed by exactly one
        value accessor, enter call or skip.
        """
        if self.state is LookaheadState.HAS_KEY:
            result = self.value.data
            self.parse_next()
            return result

        if self.state is not LookaheadState.EXITING_OBJECT:
            self._misuse("next_object_key")
            return None

        self.parse_next()
        return None

    def next_array_value(self) -> bool:
        """Tell whether the current array has another element.

        On True nothing is consumed and the caller must read the element
        with one accessor, enter call or skip. On False the closing bracket
        has been consumed, or the parser is invalid.
        """
        if self.state is LookaheadState.EXITING_ARRAY:
            self.parse_next()
            return False

        if self.state in (LookaheadState.ERROR, LookaheadState.EXITING_OBJECT,
                           LookaheadState.HAS_KEY, LookaheadState.EXHAUSTED):
            self._misuse("next_array_value")
            return False

        return True

    def get_int(self) -> int:
        """Consume a number that fits a signed 32-bit integer."""
        if self.state is not LookaheadState.HAS_NUMBER or not self.value.is_int():
            self._misuse("get_int")
            return 0
        return self._consume()

    def get_int64(self) -> int:
        if self.state is not LookaheadState.HAS_NUMBER or not self.value.is_int64():
            self._misuse("get_int64")
            return 0
        return self._consume()

    def get_uint64(self) -> int:
        if self.state is not LookaheadState.HAS_NUMBER or not self.value.is_uint64():
            self._misuse("get_uint64")
            return 0
        return self._consume()

    def get_double(self) -> float:
        """Consume any number, widened to float."""
        if self.state is not LookaheadState.HAS_NUMBER:
            self._misuse("get_double")
            return 0.0
        return float(self._consume())

    def get_bool(self) -> bool:
        if self.state is not LookaheadState.HAS_BOOL:
            self._misuse("get_bool")
            return False
        return self._consume()

    def get_null(self) -> None:
        if self.state is not LookaheadState.HAS_NULL:
            self._misuse("get_null")
            return
        self.parse_next()

    def get_string(self) -> Optional[str]:
        if self.state is not LookaheadState.HAS_STRING:
            self._misuse("get_string")
            return None
        return self._consume()

    def _consume(self):
        result = self.value.data
        self.parse_next()
        return result

    def skip_value(self):
        """Discard the next value, however deeply nested."""
        self._skip_out(0)

    def skip_array(self):
        """Discard the rest of an array that has already been entered."""
        self._skip_out(1)

    def skip_object(self):
        """Discard the rest of an object that has already been entered."""
        self._skip_out(1)

    def _skip_out(self, depth: int):
        while True:
            if self.state in (LookaheadState.ENTERING_ARRAY, LookaheadState.ENTERING_OBJECT):
                depth += 1
            elif self.state in (LookaheadState.EXITING_ARRAY, LookaheadState.EXITING_OBJECT):
                depth -= 1
            elif self.state in (LookaheadState.ERROR, LookaheadState.EXHAUSTED):
                return

            self.parse_next()
            if depth <= 0:
                return

    def peek_value(self) -> Optional[Value]:
        """The buffered scalar or key, or None for structural tokens."""
        if self.state in VALUE_STATES:
            return self.value
        return None

    def peek_type(self) -> JsonType:
        if self.state in VALUE_STATES:
            return self.value.type
        if self.state is LookaheadState.ENTERING_ARRAY:
            return JsonType.ARRAY
        if self.state is LookaheadState.ENTERING_OBJECT:
            return JsonType.OBJECT
        return JsonType.NO_VALUE
