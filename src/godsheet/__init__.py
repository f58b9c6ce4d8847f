"""godsheet - derived character-sheet state and roll requests."""

__version__ = "0.1.0"
