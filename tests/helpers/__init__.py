"""Shared builders for allocation tests."""
