__version__ = "2024.10.1a1"
