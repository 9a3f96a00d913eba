"""Setuptools build hooks for lazycomb."""

from __future__ import annotations

from setuptools import setup

# Metadata lives in pyproject.toml. The package is pure Python, so the
# default ``bdist_wheel`` is kept and wheels are tagged ``py3-none-any``.
setup()
