"""
Lecture des prix saisis dans le CMS ("49.90 USD", "$49.90", "100").
Pas de réseau, pas de configuration.
"""
import re
from decimal import Decimal, InvalidOperation

from .errors import MalformedPriceError
from .models import ParsedPrice

DEFAULT_CURRENCY = "USD"

_NON_NUMERIC = re.compile(r"[^0-9.]")
# Préfixe numérique lisible (mêmes règles qu'un parseFloat: "1.2.3" -> 1.2)
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")

# module checkout.payments.price
def parse_price(raw_price: str) -> ParsedPrice:
    """
    Découpe le prix brut en montant + devise.
    - 1er token: on retire tout sauf chiffres et '.', puis on lit le nombre en tête.
    - 2e token (optionnel): code devise tel quel, sinon USD.
    - Seul '.' est un séparateur décimal ("49,90" se lit 4990).
    - Soulève MalformedPriceError si aucun nombre n'est lisible.
    """
    parts = (raw_price or "").split()
    if not parts:
        raise MalformedPriceError(upstream=raw_price)

    cleaned = _NON_NUMERIC.sub("", parts[0])
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        raise MalformedPriceError(upstream=raw_price)
    try:
        amount = Decimal(match.group(0))
    except InvalidOperation as e:
        raise MalformedPriceError(upstream=raw_price) from e

    currency = parts[1] if len(parts) > 1 else DEFAULT_CURRENCY
    return ParsedPrice(amount=amount, currency_code=currency)
