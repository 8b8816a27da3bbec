"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses (DB wiring,
settings, errors, logging). Feature-specific SQL and request handling live in
the corresponding feature package (e.g. `companies/`).
"""
