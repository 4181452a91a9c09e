"""Bird Finder - likely birds and the best birding hotspots near a coordinate.

Architecture::

    datasources/   External APIs (eBird recent observations, hotspots)
    analysis/      Pure scoring and ranking (distance, likelihood, quality, ranking)
    store.py       JSON store for saved search preferences and ranked results
    flows/         Prefect orchestration (fetch -> score -> rank -> store)
    services/      Shared utilities (HTTP client with retry)
    reference/     Static constants (earth radius, radius presets, API limits)

Data flow: datasources -> analysis (aggregate -> score -> rank) -> store/derived

Extension points - see each package's docstring:
  - New data source:   datasources/__init__.py
  - New analysis:      analysis/__init__.py
"""

__version__ = "0.1.0"

from bird_finder.config import Settings
from bird_finder.schemas import Hotspot, ObservationRecord

__all__ = ["Hotspot", "ObservationRecord", "Settings", "__version__"]
