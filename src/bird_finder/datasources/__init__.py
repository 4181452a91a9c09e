"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, request helper
    └── {feature}.py      # Parse + fetch functions (one per endpoint/concept)

Fetch functions return ``bird_finder.schemas`` models; the analysis layer
never sees raw API dicts.

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with the files above (see ``ebird/``).
2. Parse rows defensively: skip unusable rows, default bad numbers.
3. Re-export public API in ``__init__.py`` with ``__all__``.
4. Call it from a ``@task`` in ``flows/search.py``.
5. Add tests in ``tests/test_{name}.py``.
"""
