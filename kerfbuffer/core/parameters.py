from math import isfinite
from typing import Dict

from .offset import DEFAULT_ARC_SEGMENTS, offset_with_arc_segments

INT_PARAMETERS = ("arc_segments",)

FLOAT_PARAMETERS = ("distance",)

SECTION = "offset"


class OffsetParameters:
    """
    OffsetParameters is a helper class which seeks to normalize, validate, and extract the offset
    values from an underlying dictionary. The dictionary is the primary storage, typically the
    `offset` section of the settings, values that do not convert or are out of range are replaced
    by the defaults.
    """

    def __init__(self, settings: Dict = None, **kwargs):
        self.settings = settings
        if self.settings is None:
            self.settings = dict()
        if kwargs:
            self.settings.update(kwargs)
        self.validate()

    def __repr__(self):
        return f"{self.__class__.__name__}({self.settings})"

    def __eq__(self, other):
        if not isinstance(other, OffsetParameters):
            return NotImplemented
        return self.settings == other.settings

    def validate(self):
        settings = self.settings
        for v in FLOAT_PARAMETERS:
            if v in settings:
                try:
                    settings[v] = float(settings[v])
                except (ValueError, TypeError):
                    del settings[v]
        for v in INT_PARAMETERS:
            if v in settings:
                try:
                    settings[v] = int(float(settings[v]))
                except (ValueError, TypeError, OverflowError):
                    del settings[v]
        if "arc_segments" in settings and settings["arc_segments"] < 1:
            del settings["arc_segments"]
        if "distance" in settings and not isfinite(settings["distance"]):
            del settings["distance"]

    @property
    def arc_segments(self) -> int:
        return self.settings.get("arc_segments", DEFAULT_ARC_SEGMENTS)

    @arc_segments.setter
    def arc_segments(self, value: int):
        if int(value) < 1:
            raise ValueError(f"arc_segments must be at least 1, got {value}")
        self.settings["arc_segments"] = int(value)

    @property
    def distance(self) -> float:
        return self.settings.get("distance", 0.0)

    @distance.setter
    def distance(self, value: float):
        value = float(value)
        if not isfinite(value):
            raise ValueError(f"distance must be finite, got {value}")
        self.settings["distance"] = value

    @classmethod
    def load(cls, settings, section=SECTION):
        """
        Reads the parameters stored in the section of a Settings instance.
        """
        values = {}
        for key in INT_PARAMETERS:
            value = settings.read_persistent(int, section, key)
            if value is not None:
                values[key] = value
        for key in FLOAT_PARAMETERS:
            value = settings.read_persistent(float, section, key)
            if value is not None:
                values[key] = value
        return cls(values)

    def save(self, settings, section=SECTION):
        for key, value in self.settings.items():
            if key in INT_PARAMETERS or key in FLOAT_PARAMETERS:
                settings.write_persistent(section, key, value)

    def offset(self, geometry, distance=None):
        """
        Offsets geometry with these parameters. An explicit distance overrides the
        configured one.
        """
        if distance is None:
            distance = self.distance
        return offset_with_arc_segments(geometry, distance, self.arc_segments)
