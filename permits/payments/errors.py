"""
Erreurs de la passerelle de paiement (ensemble fermé).
Chaque variante porte le statut HTTP et le message affichable côté utilisateur;
le détail Stripe reste dans les logs serveur.
"""


class GatewayError(Exception):
    status_code = 500
    public_message = "Error creating payment session."


class CardError(GatewayError):
    """Problème lié au moyen de paiement: l'utilisateur peut réessayer."""
    status_code = 400
    public_message = "There was an issue with the payment method."


class InvalidRequestError(GatewayError):
    """Requête mal formée envoyée au fournisseur (bug appelant)."""
    status_code = 400
    public_message = "Invalid request to payment provider."


class ProviderAPIError(GatewayError):
    """Panne ou indisponibilité du fournisseur: réessayer plus tard."""
    status_code = 502
    public_message = "Payment provider is unavailable. Please try again later."


class UnknownGatewayError(GatewayError):
    pass


class GatewayNotConfiguredError(GatewayError):
    public_message = "Server misconfiguration. Please try again later."
