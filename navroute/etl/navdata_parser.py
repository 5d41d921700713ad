"""Navigation data parser — normalizes airport / navaid / airway JSON exports."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from navroute.contracts.enums import NavaidType
from navroute.persistence.errors import NavDataFormatError

logger = logging.getLogger(__name__)

_NAVAID_TYPES = {t.value for t in NavaidType}


@dataclass
class ParsedNavData:
    """Complete parsed navigation dataset, ready for ``NavDataBuilder``."""

    airports: list[dict] = field(default_factory=list)
    navaids: list[dict] = field(default_factory=list)
    airway_fixes: list[dict] = field(default_factory=list)


def parse_navdata_json(
    airports_path: Path,
    navaids_path: Path,
    airways_path: Path,
) -> ParsedNavData:
    """Parse the three JSON exports into normalized row dicts.

    Each export is an object keyed by identifier:
    - airports: ``{icao, name, latitude_deg, longitude_deg, aliases, ...}``
    - navaids: ``{identifier, name, type, latitude_deg, longitude_deg, ...}``
    - airways: ``{id, type, segments: [{fix_identifier, sequence, minimum_altitude, ...}]}``

    Records without usable coordinates are skipped.
    """
    result = parse_navdata(
        _read_json(airports_path),
        _read_json(navaids_path),
        _read_json(airways_path),
    )
    logger.info(
        "Parsed navigation data: %d airports, %d navaids, %d airway fixes",
        len(result.airports),
        len(result.navaids),
        len(result.airway_fixes),
    )
    return result


def parse_navdata(
    airports: dict[str, Any],
    navaids: dict[str, Any],
    airways: dict[str, Any],
) -> ParsedNavData:
    """Normalize already-decoded export objects (see ``parse_navdata_json``)."""
    result = ParsedNavData()

    for key, raw in airports.items():
        row = _parse_airport(key, raw)
        if row is not None:
            result.airports.append(row)

    for key, raw in navaids.items():
        row = _parse_navaid(key, raw)
        if row is not None:
            result.navaids.append(row)

    for key, raw in airways.items():
        result.airway_fixes.extend(_parse_airway(key, raw))

    return result


def _read_json(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise NavDataFormatError(str(path), f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise NavDataFormatError(str(path), "expected an object keyed by identifier")
    return data


def _coords(raw: dict) -> tuple[float, float] | None:
    try:
        lat = float(raw["latitude_deg"])
        lon = float(raw["longitude_deg"])
    except (KeyError, TypeError, ValueError):
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return None
    return lat, lon


def _parse_airport(key: str, raw: dict) -> dict | None:
    coords = _coords(raw)
    if coords is None:
        logger.debug("Skipping airport %s: no coordinates", key)
        return None
    icao = (raw.get("icao") or key).strip().upper()
    aliases = []
    for alias in raw.get("aliases") or []:
        alias = str(alias).strip().upper()
        if alias and alias != icao and alias not in aliases:
            aliases.append(alias)
    elevation = raw.get("elevation_ft")
    return {
        "icao": icao,
        "name": raw.get("name") or "",
        "latitude": coords[0],
        "longitude": coords[1],
        "elevation_ft": int(elevation) if elevation is not None else None,
        "municipality": raw.get("municipality"),
        "airport_type": raw.get("type"),
        "aliases": aliases,
    }


def _parse_navaid(key: str, raw: dict) -> dict | None:
    coords = _coords(raw)
    navaid_type = str(raw.get("type", "")).strip().upper()
    if coords is None or navaid_type not in _NAVAID_TYPES:
        logger.debug("Skipping navaid %s: type=%r coords=%s", key, navaid_type, coords)
        return None
    return {
        "identifier": (raw.get("identifier") or key).strip().upper(),
        "navaid_type": navaid_type,
        "name": raw.get("name") or "",
        "latitude": coords[0],
        "longitude": coords[1],
        "frequency_khz": raw.get("frequency_khz"),
    }


def _parse_airway(key: str, raw: dict) -> list[dict]:
    airway_id = (raw.get("id") or key).strip().upper()
    rows = []
    for index, seg in enumerate(raw.get("segments") or []):
        coords = _coords(seg)
        fix = str(seg.get("fix_identifier", "")).strip().upper()
        if coords is None or not fix:
            logger.debug("Skipping %s segment %d: fix=%r", airway_id, index, fix)
            continue
        rows.append(
            {
                "airway_id": airway_id,
                "airway_type": raw.get("type"),
                "sequence": int(seg.get("sequence", index)),
                "fix_identifier": fix,
                "latitude": coords[0],
                "longitude": coords[1],
                "minimum_altitude_ft": _altitude_ft(seg.get("minimum_altitude")),
            }
        )
    return rows


def _altitude_ft(value) -> int | None:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None
