"""
Closed enumerations consumed by the configuration generator.

Each member maps a symbolic name to the external string code written into the
configuration document. Lookups accept a member, its name or its code; anything
else is not a member.

Copyright (c) 2025 Mohammad Atashi <mohammadaliatashi@icloud.com>
"""

from enum import Enum
from typing import Any


class _CodedEnum(Enum):
    """Enum whose value is the external code used in the XML document."""

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def from_value(cls, value: Any) -> '_CodedEnum':
        """
        Resolve a member from a member, member name or external code.

        Args:
            value: The candidate value

        Returns:
            The matching member

        Raises:
            ValueError: If the value does not identify a member
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            if value in cls.__members__:
                return cls.__members__[value]
            for member in cls:
                if member.value == value:
                    return member
        raise ValueError(f"{value!r} is not a valid {cls.__name__}")

    @classmethod
    def is_member(cls, value: Any) -> bool:
        """Check whether ``value`` identifies a member of this enumeration."""
        try:
            cls.from_value(value)
        except ValueError:
            return False
        return True


class LaunchPrivacy(_CodedEnum):
    """
    How much user information the Tool Consumer shares with the Tool Provider
    when launching the tool.
    """
    USER_PROFILE = "public"
    NAME_ONLY = "name_only"
    EMAIL_ONLY = "email_only"
    ANONYMOUS = "anonymous"


class PlacementOption(_CodedEnum):
    """Locations in the Tool Consumer's interface where the tool can be placed."""
    EDITOR = "editor"
    LINK_SELECTION = "link_selection"
    HOMEWORK_SUBMISSION = "homework_submission"
    COURSE_NAVIGATION = "course_navigation"
    ACCOUNT_NAVIGATION = "account_navigation"
    USER_NAVIGATION = "user_navigation"
