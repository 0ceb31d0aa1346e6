"""Error types raised by the generator.

Only programming errors surface here: an empty sequence handed to the
seeded stream, or a part tag / region that is not in its catalog. Both
abort the current ``generate`` call; nothing in the generation path
catches them.
"""


class InvalidArgument(ValueError):
    """A caller passed a value the generator cannot interpret."""
