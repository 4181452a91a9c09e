"""
Prefect flows for the search pipeline.

Flows:
- search-birds: eBird observations -> likelihood scores -> ranked species
- search-hotspots: eBird hotspots -> quality tiers + distance -> ranked hotspots

Usage (local):
    python -m bird_finder.flows.search

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m bird_finder.flows.search
"""
