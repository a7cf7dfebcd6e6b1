"""
Module 'pricing' (feature-first): point d'entrée public.
Réunit le calcul du devis, les zones de trajet et la congestion charge.
"""

from .calculator import Quote, calculate_quote, calculate_price, clamp_number, round_to_step
from .congestion import congestion_charge_applies, ranges_overlap, time_window_range
from .zones import clean_postcode, zone_from_postcode, travel_cost

__all__ = [
    # calculator
    "Quote",
    "calculate_quote",
    "calculate_price",
    "clamp_number",
    "round_to_step",
    # congestion
    "congestion_charge_applies",
    "ranges_overlap",
    "time_window_range",
    # zones
    "clean_postcode",
    "zone_from_postcode",
    "travel_cost",
]
