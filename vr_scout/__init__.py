"""
VR Scout package initializer.
Defines package version; the CLI lives in :mod:`vr_scout.cli`.
"""
__version__ = "0.1.0"
