"""
Presentation Layer Package

HTTP controllers and the response writers that turn aggregated health into
wire documents.
"""

from vitals.presentation import controllers, writers

__all__ = ["controllers", "writers"]
