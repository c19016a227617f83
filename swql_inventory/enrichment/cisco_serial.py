"""Manufacture date decoding for Cisco chassis serial numbers.

Cisco 11-character serials follow the ``LLLYYWWSSSS`` layout:

* ``LLL``  three-letter factory code (e.g. ``FOC``, ``JAE``)
* ``YY``   manufacture year as an offset from 1996
* ``WW``   manufacture week, ``01``-``53``
* ``SSSS`` unit identifier

Usage::

    decode_cisco_serial("FOC1234X0AB")   # date(2008, 8, 19)
"""

from __future__ import annotations

import re
from datetime import date, timedelta

from ..core.exceptions import SerialDecodeError

YEAR_BASE = 1996

_SERIAL_RE = re.compile(r"^[A-Z]{3}(\d{2})(\d{2})[A-Z0-9]{4}$")


def decode_cisco_serial(serial: str) -> date:
    """Return the first day of the manufacture week encoded in ``serial``.

    Raises:
        SerialDecodeError: If the serial does not follow the layout or
            encodes an impossible week.

    """
    candidate = str(serial).strip().upper()
    match = _SERIAL_RE.match(candidate)
    if match is None:
        raise SerialDecodeError(
            "Serial does not follow the LLLYYWWSSSS layout",
            details={"serial": serial},
        )
    year = YEAR_BASE + int(match.group(1))
    week = int(match.group(2))
    if not 1 <= week <= 53:
        raise SerialDecodeError(
            "Serial encodes an invalid manufacture week",
            details={"serial": serial, "week": week},
        )
    return date(year, 1, 1) + timedelta(weeks=week - 1)
