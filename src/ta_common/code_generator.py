"""Human-readable agency codes for new clients and orders.

Layout:
  - client: "CLI" + YYMMDD + 2 random digits  (e.g. CLI25031407)
  - order:  "ORD" + YYMMDD + 3 random digits  (e.g. ORD250314042)

Codes are not guaranteed unique; the backend assigns the opaque ids.
"""

import random
from datetime import datetime

from src.ta_common.datetime_utils import utc_now

CLIENT_CODE_PREFIX = "CLI"
ORDER_CODE_PREFIX = "ORD"


def _date_part(now: datetime) -> str:
    return now.strftime("%y%m%d")


def generate_client_code(now: datetime | None = None) -> str:
    now = now or utc_now()
    return f"{CLIENT_CODE_PREFIX}{_date_part(now)}{random.randint(0, 99):02d}"


def generate_order_code(now: datetime | None = None) -> str:
    now = now or utc_now()
    return f"{ORDER_CODE_PREFIX}{_date_part(now)}{random.randint(0, 999):03d}"
