"""Station domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """Represents a station of the rail network.

    The name doubles as the partial-match key used to test whether a trip's
    scheduled path passes through this station.
    """

    name: str
    id: int  # EVA number, e.g. 8000105 for Frankfurt (Main) Hbf
