# probe_frame/rig_config.py
# JSON rig / job files -> typed records. Field names are matched loosely
# (see _first) so hand-edited files with lowercase keys still load.
from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import RigConfigError
from .types import AxisMapping, Point3, StageLimits

logger = logging.getLogger(__name__)

_LIMIT_KEYS = {
    "x_len": ("X", "x", "x_len", "xLen", "XLen"),
    "y_len": ("Y", "y", "y_len", "yLen", "YLen"),
    "z_len": ("Z", "z", "z_len", "zLen", "ZLen"),
}

_MAPPING_KEYS = {
    "ax": ("Axial", "axial", "ax", "Ax"),
    "lat": ("Lateral", "lateral", "lat", "Lat"),
    "elev": ("Elevation", "elevation", "elev", "Elev", "Elevational"),
}


def _first(row: dict, *keys: str, default=None):
    for k in keys:
        if k in row and row.get(k) not in (None, ""):
            return row.get(k)
    return default


def _flt(x, what: str) -> float:
    try:
        return float(x)
    except (TypeError, ValueError):
        raise RigConfigError(f"{what}: expected a number, got {x!r}.") from None


def _int(x, what: str) -> int:
    try:
        f = float(x)
    except (TypeError, ValueError):
        raise RigConfigError(f"{what}: expected an axis label 1, 2 or 3, got {x!r}.") from None
    if not f.is_integer():
        raise RigConfigError(f"{what}: expected an axis label 1, 2 or 3, got {x!r}.")
    return int(f)


@dataclass(frozen=True)
class RigConfig:
    name: str
    limits: StageLimits
    mapping: AxisMapping


@dataclass(frozen=True)
class StepVectorJob:
    p1: Point3
    p2: Point3
    rig: Optional[RigConfig] = None


# ---------- parsers ----------

def parse_limits(block: Dict[str, Any]) -> StageLimits:
    if not isinstance(block, dict):
        raise RigConfigError("StageLimits must be an object with X, Y and Z travel.")
    vals = {}
    for field_name, keys in _LIMIT_KEYS.items():
        raw = _first(block, *keys)
        if raw is None:
            raise RigConfigError(f"StageLimits: missing '{keys[0]}'.")
        v = _flt(raw, f"StageLimits.{keys[0]}")
        if not math.isfinite(v):
            raise RigConfigError(f"StageLimits.{keys[0]}: travel must be a finite length, got {v!r}.")
        if v < 0:
            raise RigConfigError(f"StageLimits.{keys[0]}: travel must be non-negative, got {v:g}.")
        vals[field_name] = v
    return StageLimits(**vals)


def parse_mapping(block: Dict[str, Any]) -> AxisMapping:
    if not isinstance(block, dict):
        raise RigConfigError("AxisMapping must be an object with Axial, Lateral and Elevation.")
    vals = {}
    for field_name, keys in _MAPPING_KEYS.items():
        raw = _first(block, *keys)
        if raw is None:
            raise RigConfigError(f"AxisMapping: missing '{keys[0]}'.")
        vals[field_name] = _int(raw, f"AxisMapping.{keys[0]}")
    # uniqueness is the validator's job, so it can be reported with the other causes
    return AxisMapping(**vals)


def parse_point(raw, what: str) -> Point3:
    if isinstance(raw, dict):
        raw = [_first(raw, k, k.upper()) for k in ("x", "y", "z")]
    if not isinstance(raw, (list, tuple)) or len(raw) != 3:
        raise RigConfigError(f"{what}: expected [x, y, z], got {raw!r}.")
    return Point3(*(_flt(v, what) for v in raw))


def parse_rig(row: Dict[str, Any]) -> RigConfig:
    if not isinstance(row, dict):
        raise RigConfigError("Rig configuration must be a JSON object.")
    limits = parse_limits(_first(row, "StageLimits", "stage_limits", "limits", default={}))
    mapping = parse_mapping(_first(row, "AxisMapping", "axis_mapping", "axdir", default={}))
    name = str(_first(row, "Name", "name", default="rig"))
    return RigConfig(name=name, limits=limits, mapping=mapping)


def parse_job(row: Dict[str, Any]) -> StepVectorJob:
    if not isinstance(row, dict):
        raise RigConfigError("Job file must be a JSON object.")
    p1 = _first(row, "P1", "p1")
    p2 = _first(row, "P2", "p2")
    if p1 is None or p2 is None:
        raise RigConfigError("Job file needs both 'P1' and 'P2'.")
    rig_block = _first(row, "Rig", "rig")
    rig = parse_rig(rig_block) if rig_block is not None else None
    return StepVectorJob(p1=parse_point(p1, "P1"), p2=parse_point(p2, "P2"), rig=rig)


# ---------- file loaders ----------

def _load_json(path: str) -> Any:
    logger.debug("Loading JSON from %s", path)
    if not os.path.exists(path):
        raise RigConfigError(f"File not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise RigConfigError(f"{path}: invalid JSON ({e}).") from e
    except UnicodeDecodeError as e:
        raise RigConfigError(f"{path}: not UTF-8 text ({e}).") from e
    except OSError as e:
        raise RigConfigError(f"{path}: cannot read file ({e.strerror or e}).") from e


def load_rig(path: str) -> RigConfig:
    rig = parse_rig(_load_json(path))
    logger.info("Loaded rig '%s' from %s", rig.name, path)
    return rig


def load_job(path: str) -> StepVectorJob:
    return parse_job(_load_json(path))


def rig_to_dict(rig: RigConfig) -> Dict[str, Any]:
    lim, m = rig.limits, rig.mapping
    return {
        "Name": rig.name,
        "StageLimits": {"X": lim.x_len, "Y": lim.y_len, "Z": lim.z_len},
        "AxisMapping": {"Axial": m.ax, "Lateral": m.lat, "Elevation": m.elev},
    }
