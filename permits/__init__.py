"""Application de renouvellement de permis: inscription, page membres, paiement Stripe Checkout."""

__version__ = "1.0.0"
