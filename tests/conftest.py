"""Shared fixtures for configuration generator tests."""

from typing import Callable, List, Tuple
from xml.etree import ElementTree

import pytest
from lticonfig.generator import ConfigurationBuilder

NAMESPACES = {
    "cc": "http://www.imsglobal.org/xsd/imslticc_v1p0",
    "blti": "http://www.imsglobal.org/xsd/imsbasiclti_v1p0",
    "lticm": "http://www.imsglobal.org/xsd/imslticm_v1p0",
    "lticp": "http://www.imsglobal.org/xsd/imslticp_v1p0",
    "xsi": "http://www.w3.org/2001/XMLSchema-instance",
}

TOOL_NAME = "Course Reserves"
TOOL_ID = "course-reserves"
LAUNCH_URL = "https://tools.example.edu/reserves/launch"


@pytest.fixture
def builder() -> ConfigurationBuilder:
    """Builder holding only the required fields."""
    return ConfigurationBuilder(TOOL_NAME, TOOL_ID, LAUNCH_URL)


@pytest.fixture
def parse() -> Callable[[str], ElementTree.Element]:
    """Parse rendered XML text into an element tree root."""
    def _parse(document: str) -> ElementTree.Element:
        return ElementTree.fromstring(document.encode("utf-8"))
    return _parse


@pytest.fixture
def option_properties() -> Callable[[ElementTree.Element], List[Tuple[str, List[Tuple[str, str]]]]]:
    """List each options block as (name, [(property, value), ...]) in document order."""
    def _collect(root: ElementTree.Element) -> List[Tuple[str, List[Tuple[str, str]]]]:
        blocks = []
        for options in root.findall("blti:extensions/lticm:options", NAMESPACES):
            properties = [
                (prop.get("name"), prop.text)
                for prop in options.findall("lticm:property", NAMESPACES)
            ]
            blocks.append((options.get("name"), properties))
        return blocks
    return _collect
