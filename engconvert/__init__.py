"""Convert citybuilding game language files (texts and messages) between ENG and XML."""

__version__ = "0.4.0"