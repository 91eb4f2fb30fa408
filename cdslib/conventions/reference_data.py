"""
Reference data used to resolve calendar identifiers into calendars.
"""

from typing import Dict, Mapping, Optional

from .calendars import CALENDARS, Calendar


class ReferenceData:
    """Lookup of holiday calendars by identifier.

    Products and date adjustments only hold calendar names; the calendars
    themselves are supplied at resolution time through this object.
    """

    def __init__(self, calendars: Optional[Mapping[str, Calendar]] = None):
        self._calendars: Dict[str, Calendar] = {
            name.upper(): cal for name, cal in (calendars or {}).items()
        }

    @classmethod
    def standard(cls) -> "ReferenceData":
        """Reference data containing the built-in calendar registry."""
        return cls(CALENDARS)

    def calendar(self, name: str) -> Calendar:
        """Get a calendar by identifier."""
        name_upper = name.upper()
        if name_upper not in self._calendars:
            raise ValueError(
                f"Unknown calendar: {name}. Available: {sorted(self._calendars)}"
            )
        return self._calendars[name_upper]

    def with_calendar(self, name: str, calendar: Calendar) -> "ReferenceData":
        """Return a copy with an additional or replaced calendar."""
        calendars = dict(self._calendars)
        calendars[name.upper()] = calendar
        return ReferenceData(calendars)

    def __contains__(self, name: str) -> bool:
        return name.upper() in self._calendars
