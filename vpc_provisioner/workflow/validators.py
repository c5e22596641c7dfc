"""Field validators for the provision request dialog.

Each validator returns ``None`` when the value is acceptable and a message
for the dialog otherwise.
"""

from __future__ import annotations

import ipaddress
import re
from decimal import Decimal
from typing import Any, Mapping, Optional

from vpc_provisioner.models.types import OptionStore

_NUMBER_RE = re.compile(r"^\s*\d*(\.\d+)?\s*$")
_SHARED_PROCESSOR_STEP = Decimal("0.25")


def validate_entitled_processors(values: Mapping[str, Any], value: Any) -> Optional[str]:
    """Dedicated instances take whole processors; shared ones take quarters."""
    dedicated = OptionStore(values).get_last("instance_type") == "dedicated"

    text = str(value or "").strip()
    amount = Decimal(text) if text and _NUMBER_RE.match(text) else Decimal(0)
    if amount <= 0:
        return "Entitled Processors field does not contain a well-formed positive number"

    if dedicated:
        if amount % 1 != 0:
            return 'For dedicated processors, the format is: "positive integer"'
    elif (amount / _SHARED_PROCESSOR_STEP) % 1 != 0:
        return 'For shared processors, the format is: "positive whole multiple of 0.25"'
    return None


def validate_ip_address(value: Any) -> Optional[str]:
    text = str(value or "").strip()
    if not text:
        return "IP is blank"
    try:
        address = ipaddress.ip_address(text)
    except ValueError:
        address = None
    if address is None or address.version != 4:
        return "IP-address field has to be either blank or a valid IPv4 address"
    return None
