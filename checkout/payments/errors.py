"""
Erreurs classifiées du pipeline de paiement.
Chaque erreur porte un code HTTP et un message public (jamais de secrets ni de payload amont).
Le rendu JSON {"error": message} est fait par checkout.app_setup.exceptions.
"""
from typing import Any, Optional

# module checkout.payments.errors
class PaymentError(Exception):
    status_code: int = 500
    default_message: str = "Erreur interne du serveur"

    def __init__(self, message: Optional[str] = None, *, upstream: Any = None):
        self.message = message or self.default_message
        # Détail amont conservé pour les logs uniquement
        self.upstream = upstream
        super().__init__(self.message)


class PlanNotFoundError(PaymentError):
    status_code = 404
    default_message = "Plan de paiement introuvable"


class PlanStoreUnavailableError(PaymentError):
    status_code = 502
    default_message = "Magasin de contenu indisponible"


class GatewayConfigMissingError(PaymentError):
    status_code = 400
    default_message = "Configuration de la passerelle introuvable"


class MalformedPriceError(PaymentError):
    status_code = 500
    default_message = "Prix du plan invalide"


class CouponConfigError(PaymentError):
    status_code = 400
    default_message = "Endpoint de coupons non configuré"


class CouponInvalidError(PaymentError):
    status_code = 400
    default_message = "Coupon invalide"


class CouponUnavailableError(PaymentError):
    status_code = 502
    default_message = "Erreur lors de la validation du coupon"


class GatewayRejectedError(PaymentError):
    status_code = 502
    default_message = "Erreur lors du traitement du paiement"


class GatewayResponseMalformedError(PaymentError):
    status_code = 502
    default_message = "URL de redirection absente de la réponse de la passerelle"


class GatewayUnavailableError(PaymentError):
    status_code = 502
    default_message = "Passerelle de paiement indisponible"


class InternalError(PaymentError):
    status_code = 500
    default_message = "Erreur interne du serveur"
