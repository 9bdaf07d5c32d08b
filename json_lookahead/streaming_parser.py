#!/usr/bin/env python3
"""Constant-memory record access built on the lookahead parser."""
import logging
from typing import Any, Callable, Iterator, List, Optional

from .errors import LookaheadError, ProtocolError
from .handler import LookaheadState
from .parser import LookaheadParser
from .value import JsonType

logger = logging.getLogger(__name__)

_ENTERING = (LookaheadState.ENTERING_ARRAY, LookaheadState.ENTERING_OBJECT)
_EXITING = (LookaheadState.EXITING_ARRAY, LookaheadState.EXITING_OBJECT)


def _check(parser: LookaheadParser):
    if not parser.is_valid():
        raise parser.error


def read_value(parser: LookaheadParser) -> Any:
    """Consume the next value and return it as plain Python data."""
    if parser.state is LookaheadState.HAS_KEY:
        raise ProtocolError("read_value", parser.state)
    kind = parser.peek_type()
    if kind == JsonType.OBJECT:
        parser.enter_object()
        result = {}
        while (key := parser.next_object_key()) is not None:
            result[key] = read_value(parser)
    elif kind == JsonType.ARRAY:
        parser.enter_array()
        result = []
        while parser.next_array_value():
            result.append(read_value(parser))
    elif kind == JsonType.NO_VALUE:
        _check(parser)
        raise ProtocolError("read_value", parser.state)
    else:
        result = parser.peek_value().data
        parser.skip_value()
    _check(parser)
    return result


def measure_depth(parser: LookaheadParser) -> int:
    """Consume the next value and return how deeply it nests.

    Scalars and empty containers count 0; every container level that holds
    at least one value adds 1.
    """
    if parser.state is LookaheadState.HAS_KEY:
        raise ProtocolError("measure_depth", parser.state)
    depth = max_depth = 0
    while True:
        state = parser.state
        if state is LookaheadState.ERROR:
            raise parser.error
        if state is LookaheadState.EXHAUSTED:
            raise ProtocolError("measure_depth", state)
        if state in _EXITING:
            depth -= 1
        elif state is not LookaheadState.HAS_KEY:
            max_depth = max(max_depth, depth)
            if state in _ENTERING:
                depth += 1
        parser.parse_next()
        if depth <= 0:
            break
    _check(parser)
    return max_depth


def _walk(parser: LookaheadParser, path: List[str], visit: Callable) -> Iterator[Any]:
    if not path:
        yield visit(parser)
        return

    head, rest = path[0], path[1:]
    if head == 'item':
        if parser.peek_type() != JsonType.ARRAY:
            parser.skip_value()
            return
        parser.enter_array()
        while parser.next_array_value():
            yield from _walk(parser, rest, visit)
    else:
        if parser.peek_type() != JsonType.OBJECT:
            parser.skip_value()
            return
        parser.enter_object()
        while (key := parser.next_object_key()) is not None:
            if key == head:
                yield from _walk(parser, rest, visit)
            else:
                parser.skip_value()


def _split_pointer(pointer: str) -> List[str]:
    return pointer.split('.') if pointer else []


class StreamingJSONParser:
    def __init__(self, backend: Optional[str] = None, buf_size: Optional[int] = None):
        self.backend = backend
        self.buf_size = buf_size

    def parser_for(self, f, buf_size: Optional[int] = None) -> LookaheadParser:
        return LookaheadParser(f, backend=self.backend, buf_size=buf_size or self.buf_size)

    def auto_detect_json_structure(self, path: str) -> str:
        """Return 'array', 'object', or 'unknown'."""
        try:
            with open(path, 'rb') as f:
                kind = self.parser_for(f).peek_type()
        except OSError as e:
            logger.error(f"detect structure failed: {e}")
            return 'unknown'
        if kind == JsonType.ARRAY:
            return 'array'
        if kind == JsonType.OBJECT:
            return 'object'
        return 'unknown'

    def walk_records(self, path: str, pointer: str = 'item', visit: Callable = read_value,
                     buf_size: Optional[int] = None) -> Iterator[Any]:
        """Yield ``visit(parser)`` for every value addressed by ``pointer``.

        ``pointer`` is a dotted prefix: '' is the whole document, 'item' each
        element of the top-level array, 'users.item' each element of the
        'users' array. ``visit`` must consume exactly one value.
        """
        try:
            with open(path, 'rb') as f:
                parser = self.parser_for(f, buf_size)
                yield from _walk(parser, _split_pointer(pointer), visit)
                _check(parser)
        except LookaheadError as e:
            logger.error(f"stream parse failed: {e}")
            raise

    def iter_records(self, path: str, pointer: str = 'item',
                     buf_size: Optional[int] = None) -> Iterator[Any]:
        """Yield parsed records without loading the full file."""
        return self.walk_records(path, pointer, read_value, buf_size)

    def count_records(self, path: str, pointer: str = 'item') -> int:
        return sum(1 for _ in self.walk_records(path, pointer, LookaheadParser.skip_value))
