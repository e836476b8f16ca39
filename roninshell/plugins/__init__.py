"""
Builtin commands shipped with roninshell.

Each subpackage is a category; its entrypoint.py declares commands with
@command and the loader registers them at startup.
"""
