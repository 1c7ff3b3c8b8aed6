"""
LTI Tool Provider Configuration Generator

Builds the XML configuration document that a Learning Management System reads to
register an LTI Tool Provider and its placements. Fields are validated as they
are set, so a builder that has been constructed successfully always renders.

Document layout:
- ``cartridge_basiclti_link`` root declaring the cartridge, basic LTI, common
  messaging and common profile namespaces
- title, optional description and icon, launch URL
- Canvas extensions: tool id, privacy level, optional domain, placement options
- fixed bundle and icon references

Copyright (c) 2025 Mohammad Atashi <mohammadaliatashi@icloud.com>
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union
from xml.dom import minidom
from xml.etree.ElementTree import Element, SubElement, tostring

from lticonfig.enums import LaunchPrivacy, PlacementOption
from lticonfig.exceptions import ConfigurationError, ErrorKind
from lticonfig.settings import ToolProviderSettings


logger = logging.getLogger(__name__)

CARTRIDGE_NAMESPACE = "http://www.imsglobal.org/xsd/imslticc_v1p0"
BASIC_LTI_NAMESPACE = "http://www.imsglobal.org/xsd/imsbasiclti_v1p0"
COMMON_MESSAGING_NAMESPACE = "http://www.imsglobal.org/xsd/imslticm_v1p0"
COMMON_PROFILE_NAMESPACE = "http://www.imsglobal.org/xsd/imslticp_v1p0"
SCHEMA_INSTANCE_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

EXTENSION_PLATFORM = "canvas.instructure.com"
MEDIA_TYPE = "application/xml"

DEFAULT_PLACEMENT = PlacementOption.COURSE_NAVIGATION

OptionLike = Union[PlacementOption, str]
PrivacyLike = Union[LaunchPrivacy, str, None]

# Characters XML 1.0 does not allow in documents
INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def schema_location() -> str:
    """
    Build the ``xsi:schemaLocation`` value.

    Returns:
        Space-separated namespace URI / schema file pairs
    """
    namespaces = [
        CARTRIDGE_NAMESPACE,
        BASIC_LTI_NAMESPACE,
        COMMON_MESSAGING_NAMESPACE,
        COMMON_PROFILE_NAMESPACE,
    ]
    return " ".join(f"{uri} {uri}.xsd" for uri in namespaces)


class ConfigurationBuilder:
    """
    Mutable description of an LTI Tool Provider configuration.

    Name, id and launch URL are required and must be non-empty. Every other
    field is optional; unset optional fields are left out of the rendered
    document entirely.
    """

    def __init__(self,
                 name: str,
                 tool_id: str,
                 launch_url: str,
                 description: Optional[str] = None,
                 icon_url: Optional[str] = None,
                 launch_privacy: PrivacyLike = None,
                 domain: Optional[str] = None):
        """
        Initialize the builder.

        Args:
            name: Human-readable name of the tool
            tool_id: Identifier of the tool, expected to be globally unique
            launch_url: URL the Tool Consumer posts launch requests to
            description: Optional description of the tool
            icon_url: Optional URL of the tool's icon
            launch_privacy: Privacy level, ``ANONYMOUS`` when not given
            domain: Optional domain the tool is served from

        Raises:
            ConfigurationError: If a required field is empty or the privacy
                level is not a ``LaunchPrivacy`` member
        """
        self._name = ""
        self._tool_id = ""
        self._launch_url = ""
        self._description: Optional[str] = None
        self._icon_url: Optional[str] = None
        self._privacy_level = LaunchPrivacy.ANONYMOUS
        self._domain: Optional[str] = None
        self._placement_options: Dict[PlacementOption, Dict[str, str]] = {}

        self.set_name(name)
        self.set_id(tool_id)
        self.set_launch_url(launch_url)
        self.set_description(description)
        self.set_icon_url(icon_url)
        self.set_launch_privacy(launch_privacy)
        self.set_domain(domain)

    @classmethod
    def from_settings(cls, settings: ToolProviderSettings) -> 'ConfigurationBuilder':
        """
        Create a builder from validated settings.

        Args:
            settings: Settings loaded from a file or constructed directly

        Returns:
            Builder holding the settings' fields and placement options
        """
        builder = cls(
            settings.name,
            settings.tool_id,
            settings.launch_url,
            description=settings.description,
            icon_url=settings.icon_url,
            launch_privacy=settings.privacy_level,
            domain=settings.domain,
        )
        for option, properties in settings.placements.items():
            builder.set_option(option, properties)
        return builder

    # Required fields

    def set_name(self, name: str) -> 'ConfigurationBuilder':
        """Set the tool name shown by the Tool Consumer."""
        self._name = self._require("name", name)
        return self

    def set_id(self, tool_id: str) -> 'ConfigurationBuilder':
        """Set the tool id. Uniqueness is the caller's responsibility."""
        self._tool_id = self._require("id", tool_id)
        return self

    def set_launch_url(self, launch_url: str) -> 'ConfigurationBuilder':
        """Set the launch URL. The value is not checked for URL syntax."""
        self._launch_url = self._require("launch URL", launch_url)
        return self

    # Optional fields

    def set_description(self, description: Optional[str]) -> 'ConfigurationBuilder':
        """Set the tool description; an empty value clears it."""
        self._description = self._optional("description", description)
        return self

    def set_icon_url(self, icon_url: Optional[str]) -> 'ConfigurationBuilder':
        """Set the icon URL; an empty value clears it."""
        self._icon_url = self._optional("icon URL", icon_url)
        return self

    def set_domain(self, domain: Optional[str]) -> 'ConfigurationBuilder':
        """Set the domain the tool is served from; an empty value clears it."""
        self._domain = self._optional("domain", domain)
        return self

    def set_launch_privacy(self, launch_privacy: PrivacyLike) -> 'ConfigurationBuilder':
        """
        Set the privacy level used when launching the tool.

        Args:
            launch_privacy: A ``LaunchPrivacy`` member, member name or code;
                empty values reset the level to ``ANONYMOUS``

        Raises:
            ConfigurationError: If the value is not a ``LaunchPrivacy`` member
        """
        if not launch_privacy:
            self._privacy_level = LaunchPrivacy.ANONYMOUS
            return self

        if not LaunchPrivacy.is_member(launch_privacy):
            raise ConfigurationError(
                f"Invalid launch privacy setting '{launch_privacy}'",
                ErrorKind.TOOL_PROVIDER,
                {"field": "launch_privacy", "value": launch_privacy},
            )
        self._privacy_level = LaunchPrivacy.from_value(launch_privacy)
        return self

    # Placement options

    def set_option(self, option: OptionLike,
                   properties: Mapping[str, Any]) -> 'ConfigurationBuilder':
        """
        Replace the properties of a placement option.

        Args:
            option: A ``PlacementOption`` member, member name or code
            properties: Property names mapped to values, kept in order

        Raises:
            ConfigurationError: If the option is not a ``PlacementOption`` member
                or a property holds characters XML does not allow
        """
        placement = self._placement(option)
        resolved = {
            self._checked("property name", str(key)): self._checked(f"property {key}", str(value))
            for key, value in properties.items()
        }
        self._placement_options[placement] = resolved
        logger.debug(f"Placement option {placement.code} set with {len(properties)} properties")
        return self

    def set_option_property(self, option: OptionLike, name: str,
                            value: Any) -> 'ConfigurationBuilder':
        """
        Set a single property of a placement option, creating the option if needed.

        Args:
            option: A ``PlacementOption`` member, member name or code
            name: Property name
            value: Property value

        Raises:
            ConfigurationError: If the option is not a ``PlacementOption`` member
                or the property holds characters XML does not allow
        """
        placement = self._placement(option)
        name = self._checked("property name", str(name))
        value = self._checked(f"property {name}", str(value))
        self._placement_options.setdefault(placement, {})[name] = value
        return self

    # Accessors

    @property
    def name(self) -> str:
        return self._name

    @property
    def tool_id(self) -> str:
        return self._tool_id

    @property
    def launch_url(self) -> str:
        return self._launch_url

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def icon_url(self) -> Optional[str]:
        return self._icon_url

    @property
    def privacy_level(self) -> LaunchPrivacy:
        return self._privacy_level

    @property
    def domain(self) -> Optional[str]:
        return self._domain

    @property
    def placement_options(self) -> Dict[PlacementOption, Dict[str, str]]:
        """Copy of the configured placement options in insertion order."""
        return {option: dict(properties)
                for option, properties in self._placement_options.items()}

    # Rendering

    def render(self) -> str:
        """
        Render the configuration as a pretty-printed XML document.

        Returns:
            UTF-8 XML text beginning with the XML declaration
        """
        root = Element("cartridge_basiclti_link")
        root.set("xmlns", CARTRIDGE_NAMESPACE)
        root.set("xmlns:blti", BASIC_LTI_NAMESPACE)
        root.set("xmlns:lticm", COMMON_MESSAGING_NAMESPACE)
        root.set("xmlns:lticp", COMMON_PROFILE_NAMESPACE)
        root.set("xmlns:xsi", SCHEMA_INSTANCE_NAMESPACE)
        root.set("xsi:schemaLocation", schema_location())

        SubElement(root, "blti:title").text = self._name
        if self._description is not None:
            SubElement(root, "blti:description").text = self._description
        if self._icon_url is not None:
            SubElement(root, "blti:icon").text = self._icon_url
        SubElement(root, "blti:launch_url").text = self._launch_url

        self._add_extensions(root)

        bundle = SubElement(root, "cartridge_bundle")
        bundle.set("identiferref", "BLT001_Bundle")
        icon = SubElement(root, "cartridge_icon")
        icon.set("identifierref", "BLT001_Icon")

        # Generate pretty-printed XML
        rough_string = tostring(root, encoding='unicode')
        reparsed = minidom.parseString(rough_string)
        pretty_xml = reparsed.toprettyxml(indent="  ", encoding="UTF-8").decode("utf-8")

        logger.debug(f"Rendered LTI configuration for tool {self._tool_id}")
        return pretty_xml

    def save(self, output_path: Union[str, Path]) -> Path:
        """
        Write the rendered document to a file.

        Args:
            output_path: Destination path

        Returns:
            The path written
        """
        output_path = Path(output_path)
        document = self.render()
        output_path.write_text(document, encoding="utf-8")
        logger.info(f"LTI configuration written: {output_path} ({len(document.encode('utf-8'))} bytes)")
        return output_path

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(name={self._name!r}, tool_id={self._tool_id!r}, "
                f"launch_url={self._launch_url!r})")

    def _add_extensions(self, root: Element) -> None:
        """Add the Canvas extension block with tool properties and placements."""
        extensions = SubElement(root, "blti:extensions")
        extensions.set("platform", EXTENSION_PLATFORM)

        self._add_property(extensions, "tool_id", self._tool_id)
        self._add_property(extensions, "privacy_level", self._privacy_level.code)
        if self._domain:
            self._add_property(extensions, "domain", self._domain)

        placements = self._placement_options or {DEFAULT_PLACEMENT: {}}
        for option, properties in placements.items():
            options = SubElement(extensions, "lticm:options")
            options.set("name", option.code)
            for name, value in self._with_defaults(properties).items():
                self._add_property(options, name, value)

    def _with_defaults(self, properties: Mapping[str, str]) -> Dict[str, str]:
        """Return a copy of ``properties`` with ``text`` and ``url`` filled in."""
        resolved = dict(properties)
        resolved.setdefault("text", self._name)
        resolved.setdefault("url", self._launch_url)
        return resolved

    @staticmethod
    def _add_property(parent: Element, name: str, value: str) -> None:
        element = SubElement(parent, "lticm:property")
        element.set("name", name)
        element.text = value

    @staticmethod
    def _require(field_name: str, value: Any) -> str:
        if not isinstance(value, str) or not value:
            raise ConfigurationError(
                f"A non-empty {field_name} is required",
                ErrorKind.TOOL_PROVIDER,
                {"field": field_name, "value": value},
            )
        return ConfigurationBuilder._checked(field_name, value)

    @staticmethod
    def _optional(field_name: str, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        return ConfigurationBuilder._checked(field_name, str(value))

    @staticmethod
    def _checked(field_name: str, value: str) -> str:
        match = INVALID_XML_CHARS.search(value)
        if match:
            raise ConfigurationError(
                f"The {field_name} contains a character not allowed in XML: {match.group()!r}",
                ErrorKind.TOOL_PROVIDER,
                {"field": field_name, "value": value},
            )
        return value

    @staticmethod
    def _placement(option: OptionLike) -> PlacementOption:
        if not PlacementOption.is_member(option):
            raise ConfigurationError(
                f"Invalid placement option '{option}'",
                ErrorKind.TOOL_PROVIDER,
                {"field": "option", "value": option},
            )
        return PlacementOption.from_value(option)
