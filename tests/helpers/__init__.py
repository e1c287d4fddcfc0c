"""Test helper utilities for matchmaker tests."""

from .profiles import load_fixture_catalog, make_creator, make_sponsor

__all__ = ["load_fixture_catalog", "make_creator", "make_sponsor"]
