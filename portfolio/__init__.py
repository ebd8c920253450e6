# -*- coding: utf-8 -*-
"""Portfolio site with a paid API key checkout for the compress service."""

__version__ = "1.0.0"
