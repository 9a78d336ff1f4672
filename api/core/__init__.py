"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that feature packages use
(DB wiring, settings, response encoding). Keep feature-specific SQL and
request handling in the corresponding feature package (e.g. `blogs/`).
"""
