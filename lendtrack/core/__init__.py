#!/usr/bin/env python

"""
    Core module for LendTrack: storage, loan state machine, snapshot
    reader and action dispatcher

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from lendtrack.core import db as database
from lendtrack.core import models

__all__ = ["database", "models"]
