"""yacsend: pick which regions of request files to run, and remember the choice."""

__version__ = "0.1.0"
