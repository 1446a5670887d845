"""Productboard Core - API access for the Productboard connector.

Modules:
- config: environment-driven settings and credential lookup
- errors: error taxonomy shared by every layer
- client: authenticated HTTP adapter for the Productboard REST API
- pagination: link- and cursor-based listing walkers
- normalizers: argument reconciliation into canonical request shapes
- schemas: typed request bodies and listing results
"""

__version__ = "1.0.0"
