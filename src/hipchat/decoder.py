"""
Response Decoder

Turns raw API response bodies into Room and Message records. The declared
response format only selects which strategy parses the body; both
strategies feed the same record constructors, so callers get identical
records from json and xml responses.

Records are produced one at a time: the xml strategy feeds the decoded text
to an ElementTree.XMLPullParser, so an encoding declaration in the document
is ignored, and the json strategy builds each record only when it is
requested.
"""

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Union
from xml.etree import ElementTree

from .errors import DecodeError, UnsupportedFormat
from .schemas import Message, ResponseFormat, Room

logger = logging.getLogger(__name__)


class JsonStrategy:
    """Reads collections shaped like {"rooms": [{...}, ...]}."""

    def iter_items(self, text: str, collection: str, item: str) -> Iterator[Dict]:
        try:
            data = json.loads(text)
        except ValueError as e:
            raise DecodeError(text, f"json object ({e})") from e

        if not isinstance(data, dict) or not isinstance(data.get(collection), list):
            raise DecodeError(text, f'json object with a "{collection}" list')

        for entry in data[collection]:
            if not isinstance(entry, dict):
                raise DecodeError(json.dumps(entry), f"json {item} object")
            yield entry

    def error_message(self, text: str) -> Optional[str]:
        try:
            error = json.loads(text).get("error") or {}
            return error.get("message")
        except (ValueError, AttributeError):
            return None


class XmlStrategy:
    """Reads collections shaped like <rooms><room>...</room></rooms>."""

    def iter_items(self, text: str, collection: str, item: str) -> Iterator[Dict]:
        depth = 0
        try:
            for event, element in _pull_events(text):
                if event == "start":
                    if depth == 0 and element.tag != collection:
                        raise DecodeError(
                            text[:200], f"xml document with a <{collection}> root"
                        )
                    depth += 1
                    continue

                depth -= 1
                if depth == 1:
                    if element.tag != item:
                        raise DecodeError(
                            ElementTree.tostring(element, encoding="unicode"),
                            f"<{item}> element",
                        )
                    yield _element_to_dict(element)
                    element.clear()
        except ElementTree.ParseError as e:
            raise DecodeError(text, f"well-formed xml ({e})") from e

    def error_message(self, text: str) -> Optional[str]:
        try:
            root = ElementTree.fromstring(text)
        except ElementTree.ParseError:
            return None
        if root.tag != "error":
            return None
        return root.findtext("message")


def _pull_events(text: str, chunk_size: int = 65536):
    parser = ElementTree.XMLPullParser(events=("start", "end"))
    for start in range(0, len(text), chunk_size):
        parser.feed(text[start : start + chunk_size])
        yield from parser.read_events()
    parser.close()
    yield from parser.read_events()


def _element_to_dict(element: ElementTree.Element) -> Union[Dict[str, Any], str]:
    children = list(element)
    if not children:
        return (element.text or "").strip()
    return {child.tag: _element_to_dict(child) for child in children}


class ResponseDecoder:
    """
    Decodes list and history responses into typed records.

    Attributes:
        strategies: Parsing strategy for each supported response format
    """

    def __init__(self, strategies: Optional[Dict[ResponseFormat, Any]] = None):
        self.strategies = strategies or {
            ResponseFormat.JSON: JsonStrategy(),
            ResponseFormat.XML: XmlStrategy(),
        }

    def decode_rooms(self, text: str, fmt: ResponseFormat) -> List[Room]:
        """
        Decode a rooms/list response.

        Returns:
            Rooms in the order the service listed them

        Raises:
            UnsupportedFormat: If no strategy handles fmt
            DecodeError: If the body does not match the expected shape
        """
        return list(self.iter_rooms(text, fmt))

    def iter_rooms(self, text: str, fmt: ResponseFormat) -> Iterator[Room]:
        """Decode a rooms/list response one room at a time."""
        strategy = self._strategy(fmt)
        return self._records(strategy.iter_items(text, "rooms", "room"), Room.from_dict, "room")

    def decode_messages(self, text: str, fmt: ResponseFormat) -> List[Message]:
        """
        Decode a rooms/history response.

        Returns:
            Messages in the order returned by the service (chronological)

        Raises:
            UnsupportedFormat: If no strategy handles fmt
            DecodeError: If the body does not match the expected shape
        """
        strategy = self._strategy(fmt)
        messages = self._records(
            strategy.iter_items(text, "messages", "message"), Message.from_dict, "message"
        )
        return list(messages)

    def decode_error(self, text: str, fmt: ResponseFormat) -> Optional[str]:
        """Extract the service's error message from a failed response, if any."""
        try:
            strategy = self._strategy(fmt)
        except UnsupportedFormat:
            return None
        return strategy.error_message(text)

    def _strategy(self, fmt):
        if isinstance(fmt, str) and not isinstance(fmt, ResponseFormat):
            try:
                fmt = ResponseFormat(fmt.strip().lower())
            except ValueError:
                raise UnsupportedFormat(fmt) from None
        strategy = self.strategies.get(fmt)
        if strategy is None:
            raise UnsupportedFormat(fmt)
        return strategy

    @staticmethod
    def _records(
        items: Iterator[Dict], build: Callable[[Dict], Any], shape: str
    ) -> Iterator[Any]:
        for item in items:
            try:
                record = build(item)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise DecodeError(repr(item), f"{shape} entry ({e!r})") from e
            logger.debug(f"Decoded {shape}: {record}")
            yield record
