"""
Domain Enums

Closed enumerations for the configurator. These replace the string keys
that used to index the car table directly.
"""

from enum import Enum


class ModelKey(str, Enum):
    """
    Selectable vehicle models.

    Declaration order is the catalog's canonical order; the first member
    is the default model of a new configuration.
    """
    SPORTS = "sports"
    MUSCLE = "muscle"
    SUPERCAR = "supercar"

    @classmethod
    def parse(cls, value: "str | ModelKey") -> "ModelKey":
        """Return the member for ``value``; raises ValueError if unknown."""
        if isinstance(value, cls):
            return value
        return cls(value)


class TrimSlot(str, Enum):
    """
    Trim slots with a documented baseline option.

    Trim slots are open-ended; these are the ones the builder knows about.
    """
    WHEEL = "wheel"
    SPOILER = "spoiler"
    INTERIOR = "interior"

    @property
    def baseline(self) -> str:
        """Option a configuration reads when the slot was never selected."""
        return {
            TrimSlot.WHEEL: "Classic",
            TrimSlot.SPOILER: "None",
            TrimSlot.INTERIOR: "Black",
        }[self]

    @property
    def display_name(self) -> str:
        return self.value.title()


NO_TRIM = "None"
