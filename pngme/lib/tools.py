#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Miscellaneous helper functions for the command line interface.
"""
from __future__ import annotations

import os
import sys


def get_terminal_size(default=0):
    """
    Returns the usable width of the attached terminal, one column less than its full width. A
    positive value of `PNGME_TERM_SIZE` overrides the terminal. When neither stderr nor stdout is
    a terminal, the given default is returned.
    """
    from pngme.lib.environment import environment
    ev_terminal_size = environment.term_size.value
    if ev_terminal_size and ev_terminal_size > 0:
        return ev_terminal_size
    for stream in (sys.stderr, sys.stdout):
        if not stream.isatty():
            continue
        try:
            width = os.get_terminal_size(stream.fileno()).columns
        except OSError:
            continue
        if width >= 2:
            return width - 1
    return default


def exception_to_string(exception: BaseException, default=None) -> str:
    """
    Attempts to convert a given exception to a good description that can be exposed to the user.
    """
    if not exception.args:
        return exception.__class__.__name__
    it = (a for a in exception.args if isinstance(a, str))
    if default is None:
        default = str(exception)
    return max(it, key=len, default=default).strip()
