"""stockroom - inventory manager with a rule-based chat assistant."""

__version__ = "0.1.0"
