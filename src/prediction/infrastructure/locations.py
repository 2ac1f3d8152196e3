from typing import Iterable, List
from ..domain.entities import Location

class StaticLocationProvider:
    """
    Fixed, ordered camera locations for the process lifetime.
    """
    def __init__(self, locations: Iterable[Location]):
        self._locations: List[Location] = list(locations)

    def get_locations(self) -> List[Location]:
        return list(self._locations)
