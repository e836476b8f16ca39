#!/usr/bin/env python3
# roninshell/helpers/__init__.py
from __future__ import annotations
from .process import ProcessInvoker, ProcessResult, is_executable, which

__all__ = ["ProcessInvoker", "ProcessResult", "is_executable", "which"]
