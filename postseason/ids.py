from __future__ import annotations

"""Deterministic IDs for bracket nodes.

Node ids only depend on season year, conference and bracket position, so the
same slot has the same id on every call (display layers can key on them).

ID conventions
--------------
- Playoffs nodes:
    PO{season_year}_{CONF}_{ROUND}_{LABEL}
    ex) PO2025_E_R1_1V8, PO2025_W_R2_SF1, PO2025_F_F_FIN
- Cup nodes:
    CUP{season_year}_{CONF}_{ROUND}_{LABEL}
    ex) CUP2025_E_QF_1, CUP2025_W_SF_1, CUP2025_F_F_FIN
"""

import datetime as _dt
from typing import Iterable, Literal, Optional

Conf = Literal["E", "W", "F"]


def parse_season_year(season_id: Optional[str]) -> Optional[int]:
    """Parse start year from season_id like '2025-26'."""
    if not season_id:
        return None
    s = str(season_id).strip()
    if len(s) < 4:
        return None
    head = s.split("-", 1)[0].strip()
    try:
        year = int(head)
    except ValueError:
        return None
    return year if year > 0 else None


def season_year_from_dates(dates: Iterable[_dt.date], *, season_start_month: int = 9) -> Optional[int]:
    """Season start year inferred from the earliest game date (Sep-Dec belong to that year)."""
    earliest = min(dates, default=None)
    if earliest is None:
        return None
    return earliest.year if earliest.month >= season_start_month else earliest.year - 1


def _conf_code(conf: str) -> Conf:
    c = str(conf or "").strip().lower()
    if c.startswith("e"):
        return "E"
    if c.startswith("w"):
        return "W"
    return "F"


def _token(value: str, what: str) -> str:
    t = str(value).strip().upper().replace(" ", "")
    if not t:
        raise ValueError(f"{what} is empty")
    return t


def make_series_id(season_year: int, conf: str, round_code: str, label: str) -> str:
    return f"PO{int(season_year)}_{_conf_code(conf)}_{_token(round_code, 'round_code')}_{_token(label, 'label')}"


def make_cup_node_id(season_year: int, conf: str, round_code: str, label: str) -> str:
    return f"CUP{int(season_year)}_{_conf_code(conf)}_{_token(round_code, 'round_code')}_{_token(label, 'label')}"
