"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~mealfinder.exceptions.MealFinderError` subclass.
Shell wrappers can inspect the exit code to tell a missing meal from a
network outage without parsing stderr.

Example::

    $ mealfinder meal 1
    $ echo $?
    4   # EXIT_NOT_FOUND -- no meal with that id
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_NOT_FOUND = 4
"""The API answered, but the requested meal does not exist."""

EXIT_NETWORK_ERROR = 6
"""A transport failure or non-success HTTP status."""

EXIT_DECODE_ERROR = 7
"""The API returned a body that is not the expected JSON document."""
