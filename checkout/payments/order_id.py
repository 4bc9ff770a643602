"""
Identifiants de commande lisibles: <plan>-<DD-MM-YYYY-HH>-<montant entier>-<suffixe>.
Le suffixe (6 caractères base 36) vient de `secrets`. Unicité non garantie:
~36^6 combinaisons par tranche (heure, plan, montant), acceptable pour ce domaine.
"""
import re
import secrets
from datetime import datetime
from decimal import Decimal, ROUND_FLOOR
from typing import Optional

SUFFIX_LENGTH = 6
PLAN_PREFIX_LENGTH = 10
_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_STRIP = re.compile(r"[\s.]+")

# module checkout.payments.order_id
def _base36(value: int, width: int) -> str:
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits)).rjust(width, "0")

def random_suffix(length: int = SUFFIX_LENGTH) -> str:
    return _base36(secrets.randbelow(36 ** length), length)

def generate_order_id(plan_name: str, amount: Decimal, now: Optional[datetime] = None) -> str:
    """
    Construit l'identifiant envoyé à la passerelle (order_id).
    - plan_name: espaces et points retirés, tronqué à 10 caractères (casse conservée)
    - amount: seule la partie entière (floor) apparaît dans l'identifiant
    - now: horodatage (heure locale par défaut), injectable pour les tests
    """
    now = now or datetime.now()
    plan_part = _STRIP.sub("", plan_name or "")[:PLAN_PREFIX_LENGTH]
    stamp = now.strftime("%d-%m-%Y-%H")
    amount_int = Decimal(amount).to_integral_value(rounding=ROUND_FLOOR)
    return f"{plan_part}-{stamp}-{amount_int}-{random_suffix()}"
