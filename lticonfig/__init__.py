"""Generate LTI Tool Provider configuration XML for Learning Management Systems."""

from lticonfig.enums import LaunchPrivacy, PlacementOption
from lticonfig.exceptions import ConfigurationError, ErrorKind
from lticonfig.generator import MEDIA_TYPE, ConfigurationBuilder
from lticonfig.settings import ToolProviderSettings, load_settings

__all__ = [
    "ConfigurationBuilder",
    "ConfigurationError",
    "ErrorKind",
    "LaunchPrivacy",
    "MEDIA_TYPE",
    "PlacementOption",
    "ToolProviderSettings",
    "load_settings",
]

__version__ = "1.0.0"
