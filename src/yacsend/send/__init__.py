"""Region selection for the ``send`` command.

Choices made at the prompt are remembered per file in ``~/.httpyac/recent.json``
and offered first as ``recent(<name>)`` on the next run.
"""
