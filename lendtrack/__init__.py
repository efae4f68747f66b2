#!/usr/bin/env python

"""
    LendTrack, a small inventory & lending tracker

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

__title__ = 'lendtrack'
__version__ = '0.1.0'
