"""opgraph - compile released operator versions into an OLM update graph."""

__version__ = "0.3.0"
