"""Version information for foldaq; should match pyproject.toml."""

__version__ = "0.1.0"
