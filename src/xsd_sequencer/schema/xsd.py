"""XSD document token source.

This module reads XML Schema documents with defusedxml's incremental parser
and turns them into the structural token stream the schema walker consumes.
Character encoding is taken from the document's XML declaration by the parser.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, Union
from xml.etree.ElementTree import ParseError

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from xsd_sequencer.errors import MalformedInputError
from xsd_sequencer.schema.base import NodeClosed, NodeOpened, Token, TokenSource

logger = logging.getLogger(__name__)


def local_name(qualified: str) -> str:
    """Drop a Clark-notation namespace from a tag or attribute name.

    Example: "{http://www.w3.org/2001/XMLSchema}element" -> "element"
    """
    if qualified.startswith("{"):
        return qualified.partition("}")[2]
    return qualified


class XsdTokenSource(TokenSource):
    """Token source backed by an XSD file or binary file object.

    Attributes:
        source: Path to the schema file, or an open binary file object.
    """

    def __init__(self, source: Union[str, Path, BinaryIO]) -> None:
        self.source = source

    @property
    def description(self) -> str:
        if isinstance(self.source, (str, Path)):
            return str(self.source)
        return getattr(self.source, "name", repr(self.source))

    def tokens(self) -> Iterator[Token]:
        """Yield NodeOpened/NodeClosed tokens for every element in the document.

        Raises:
            MalformedInputError: If the document is not well-formed XML or uses
                constructs defusedxml refuses (DTD entities and the like).
            OSError: If the file cannot be opened.
        """
        source = str(self.source) if isinstance(self.source, Path) else self.source
        logger.debug("Reading schema tokens from %s", self.description)

        try:
            for event, element in ET.iterparse(source, events=("start", "end")):
                if event == "start":
                    yield NodeOpened(
                        name=local_name(element.tag),
                        attributes=self._local_attributes(element.attrib),
                    )
                else:
                    yield NodeClosed(name=local_name(element.tag))
                    element.clear()
        except ParseError as e:
            raise MalformedInputError(f"{self.description}: {e}") from e
        except DefusedXmlException as e:
            raise MalformedInputError(f"{self.description}: refused by parser: {e}") from e

    @staticmethod
    def _local_attributes(attrib: Dict[str, str]) -> Dict[str, str]:
        return {local_name(key): value for key, value in attrib.items()}
