"""refnote - reference records for markdown vault notes."""

__version__ = "0.1.0"
