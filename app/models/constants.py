"""Domain constants.

The supported-currency list is a fixed reference for clients populating
pickers; conversion itself accepts whatever codes the provider knows.
"""

from typing import Tuple

SUPPORTED_CURRENCIES: Tuple[str, ...] = (
    "USD",
    "EUR",
    "GBP",
    "JPY",
    "AUD",
    "CAD",
    "CHF",
    "CNY",
    "INR",
)
