"""lexis: spaced-repetition scheduling and vocabulary bank for language learners."""

from lexis.consts import VERSION

__version__ = VERSION
