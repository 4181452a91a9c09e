"""Static birding constants.

Reference data that doesn't change with API calls: earth radius, search
radius presets, eBird query limits, hotspot quality presets.

Adding a new module:
1. Create ``reference/{name}.py`` with constants
2. Re-export from this ``__init__.py``
"""

from bird_finder.reference.geography import EARTH_RADIUS_MILES as EARTH_RADIUS_MILES
from bird_finder.reference.geography import KM_PER_MILE as KM_PER_MILE
from bird_finder.reference.search import DEFAULT_RADIUS_MILES as DEFAULT_RADIUS_MILES
from bird_finder.reference.search import EXPANDED_RADIUS_MILES as EXPANDED_RADIUS_MILES
from bird_finder.reference.search import MAX_RADIUS_KM as MAX_RADIUS_KM
from bird_finder.reference.search import QUALITY_FILTERS as QUALITY_FILTERS
from bird_finder.reference.search import RADIUS_OPTIONS_MILES as RADIUS_OPTIONS_MILES
