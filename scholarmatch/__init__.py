"""ScholarMatch NIL advisor: deal valuation, offer scoring and brand matching."""

__version__ = "0.1.0"
