#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/parsers/__init__.py
"""Parsers producing texctx syntax trees."""

from texctx.parsers.latex import LatexTreeParser, environment_parameters

__all__ = ["LatexTreeParser", "environment_parameters"]
