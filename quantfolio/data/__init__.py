"""
Asset data for QuantFolio.

This module provides the asset records consumed by the optimizer and a
small demonstration universe.
"""

from typing import List

from .models import Asset, SAMPLE_ASSETS, get_sample_assets

__all__: List[str] = ["Asset", "SAMPLE_ASSETS", "get_sample_assets"]
