"""Built-in CLI sub-command groups for mealfinder.

* :mod:`~mealfinder.commands.config` -- view and modify global settings.

The view commands (``open``, ``browse``, ``search``, ...) live on the root
application in :mod:`mealfinder.app`.
"""
