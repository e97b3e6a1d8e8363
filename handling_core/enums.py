"""Closed enumerations stored in handling lines.

Every enumeration decodes unknown wire values to a default member instead of
failing, matching how the games themselves treat the file.
"""

from __future__ import annotations

from enum import Enum


class DriveType(Enum):
    FRONT = "F"
    REAR = "R"
    FOUR_WHEEL = "4"

    @classmethod
    def from_wire(cls, token: str) -> "DriveType":
        """Decode the first character of *token*; unknown values mean rear drive."""

        if not token:
            return cls.REAR
        try:
            return cls(token[0].upper())
        except ValueError:
            return cls.REAR

    def to_wire(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return {
            DriveType.FRONT: "Front (F)",
            DriveType.REAR: "Rear (R)",
            DriveType.FOUR_WHEEL: "4-Wheel (4)",
        }[self]


class EngineType(Enum):
    PETROL = "P"
    DIESEL = "D"
    ELECTRIC = "E"

    @classmethod
    def from_wire(cls, token: str) -> "EngineType":
        if not token:
            return cls.PETROL
        try:
            return cls(token[0].upper())
        except ValueError:
            return cls.PETROL

    def to_wire(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return {
            EngineType.PETROL: "Petrol (P)",
            EngineType.DIESEL: "Diesel (D)",
            EngineType.ELECTRIC: "Electric (E)",
        }[self]


class LightType(Enum):
    LONG = 0
    SMALL = 1
    BIG = 2
    TALL = 3

    @classmethod
    def from_wire(cls, token: str) -> "LightType":
        """Decode an integer token; anything that is not 0-3 means ``LONG``."""

        if not token.lstrip("+-").isdigit():
            return cls.LONG
        try:
            return cls(int(token))
        except ValueError:
            return cls.LONG

    def to_wire(self) -> str:
        return str(self.value)

    @property
    def display_name(self) -> str:
        return f"{self.name.title()} ({self.value})"


__all__ = ["DriveType", "EngineType", "LightType"]
