"""
Types shared by several schema modules.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

# Amounts are Decimal in Python and plain JSON numbers on the wire.
MoneyAmount = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]
