"""
Dataset loading and record parsing.

Accepted record shapes (keys may hold numbers or numeric strings):

  Planet list:      {"name", "orbitalRadius", "orbitalSpeed", "orbitalPeriod", "size"}
  Small-body feed:  {"full_name", "a", "e", "per_y", "diameter"}
  Comet catalog:    {"object_name", "q_au_1", "q_au_2", "p_yr"}

Periods given in years (p_yr, per_y) are converted to days. A record that
cannot be parsed is skipped and logged; it never aborts the rest of the batch.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from orrery_sim.core.config import DEFAULT_UNITS, UnitPolicy
from orrery_sim.core.constants import DAYS_PER_YEAR
from orrery_sim.core.errors import InvalidElements
from orrery_sim.physics.orbit import OrbitalElements

logger = logging.getLogger(__name__)

ID_KEYS: Tuple[str, ...] = ("id", "spkid", "pdes", "full_name", "object_name", "name")
NAME_KEYS: Tuple[str, ...] = ("name", "full_name", "object_name")
PERIOD_DAY_KEYS: Tuple[str, ...] = ("period", "orbitalPeriod")
PERIOD_YEAR_KEYS: Tuple[str, ...] = ("p_yr", "per_y")
SIZE_KEYS: Tuple[str, ...] = ("diameter", "size")


def _first_present(raw: Mapping[str, Any], keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = raw.get(key)
        if value is not None and str(value).strip() != "":
            return key
    return None


def _number(raw: Mapping[str, Any], key: str) -> float:
    value = raw.get(key)
    if isinstance(value, bool):
        raise InvalidElements(f"Field '{key}' is not numeric. Got: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidElements(f"Field '{key}' is not numeric. Got: {value!r}") from exc
    if not math.isfinite(number):
        raise InvalidElements(f"Field '{key}' must be finite. Got: {value!r}")
    return number


def _optional_number(raw: Mapping[str, Any], keys: Sequence[str]) -> Optional[float]:
    key = _first_present(raw, keys)
    return None if key is None else _number(raw, key)


def _axis_and_eccentricity(raw: Mapping[str, Any]) -> Tuple[float, float, Optional[float]]:
    """Returns (a, e, mean_radius) from whichever distance fields the record has."""
    if _first_present(raw, ("a",)) is not None:
        a = _number(raw, "a")
        e = _optional_number(raw, ("e",))
        return a, (0.0 if e is None else e), None

    if _first_present(raw, ("q_au_1",)) is not None and _first_present(raw, ("q_au_2",)) is not None:
        q = _number(raw, "q_au_1")
        big_q = _number(raw, "q_au_2")
        if q <= 0 or big_q < q:
            raise InvalidElements(f"Perihelion/aphelion out of order. Got: q={q}, Q={big_q}")
        return (q + big_q) / 2.0, (big_q - q) / (big_q + q), None

    if _first_present(raw, ("orbitalRadius",)) is not None:
        radius = _number(raw, "orbitalRadius")
        e = _optional_number(raw, ("e",))
        return radius, (0.0 if e is None else e), radius

    raise InvalidElements("Missing distance field (a, q_au_1/q_au_2 or orbitalRadius).")


def _period_days(raw: Mapping[str, Any], days_per_year: float) -> float:
    key = _first_present(raw, PERIOD_DAY_KEYS)
    if key is not None:
        return _number(raw, key)
    key = _first_present(raw, PERIOD_YEAR_KEYS)
    if key is not None:
        return _number(raw, key) * days_per_year
    raise InvalidElements("Missing period field (period, orbitalPeriod, p_yr or per_y).")


def parse_record(raw: Mapping[str, Any], index: int = 0, days_per_year: float = DAYS_PER_YEAR) -> OrbitalElements:
    """
    Parse one raw record into validated OrbitalElements.
    Raises InvalidElements naming the offending field.
    """
    if not isinstance(raw, Mapping):
        raise InvalidElements(f"Record must be a mapping. Got: {type(raw).__name__}")

    id_key = _first_present(raw, ID_KEYS)
    body_id = str(raw[id_key]).strip() if id_key is not None else f"body-{index}"
    name_key = _first_present(raw, NAME_KEYS)
    name = str(raw[name_key]).strip() if name_key is not None else body_id

    a, e, mean_radius = _axis_and_eccentricity(raw)
    size = _optional_number(raw, SIZE_KEYS)

    return OrbitalElements(
        body_id=body_id,
        name=name,
        semi_major_axis=a,
        eccentricity=e,
        orbital_period=_period_days(raw, days_per_year),
        size_hint=1.0 if size is None else size,
        initial_phase=_optional_number(raw, ("initial_phase",)) or 0.0,
        mean_radius=mean_radius,
        angular_speed=_optional_number(raw, ("orbitalSpeed",)),
    )


def load_elements(records: Iterable[Mapping[str, Any]], units: UnitPolicy = DEFAULT_UNITS) -> List[OrbitalElements]:
    """
    Parse a batch of records. Malformed records and duplicate IDs are skipped
    with a warning; an empty input yields an empty list.
    """
    out: List[OrbitalElements] = []
    seen = set()
    skipped = 0

    for i, raw in enumerate(records):
        try:
            el = parse_record(raw, index=i, days_per_year=units.days_per_year)
        except InvalidElements as exc:
            logger.warning("Skipping record %d: %s", i, exc)
            skipped += 1
            continue

        if el.body_id in seen:
            logger.warning("Skipping record %d: duplicate body ID '%s'", i, el.body_id)
            skipped += 1
            continue

        seen.add(el.body_id)
        out.append(el)

    logger.info("Loaded %d bodies (%d skipped)", len(out), skipped)
    return out


def _flatten_payload(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        if isinstance(data.get("data"), list):
            return data["data"]
        buckets = data.get("near_earth_objects")
        if isinstance(buckets, dict):
            # NASA NeoWs feed: {"near_earth_objects": {"2024-10-01": [...], ...}}
            bad_days = [day for day in buckets if not isinstance(buckets[day], list)]
            if bad_days:
                raise ValueError(f"Day bucket is not a list: {bad_days[0]!r}")
            return [obj for day in sorted(buckets) for obj in buckets[day]]
        if isinstance(buckets, list):
            return buckets
    raise ValueError(f"Unsupported catalog layout: {type(data).__name__}")


def load_catalog_json(path: str) -> List[Dict[str, Any]]:
    """
    Read raw records from a JSON file. A missing file, bad JSON or an
    unknown layout is logged and yields an empty list.
    """
    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            data = json.load(f)
        records = _flatten_payload(data)
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError is a ValueError
        logger.error("Could not load catalog '%s': %s", path, exc)
        return []

    logger.info("Read %d records from '%s'", len(records), path)
    return records


def load_catalog(path: str, units: UnitPolicy = DEFAULT_UNITS) -> List[OrbitalElements]:
    return load_elements(load_catalog_json(path), units)
