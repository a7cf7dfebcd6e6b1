"""Collect My Item: devis, réservation et paiement Stripe pour un service de coursier à Londres."""

__version__ = "1.0.0"
