# ui/state_helpers.py
from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, is_dataclass
from typing import Any, Dict


def _norm_value(x: Any) -> Any:
    if isinstance(x, dict):
        return {str(k): _norm_value(v) for k, v in sorted(x.items(), key=lambda kv: str(kv[0]))}
    if isinstance(x, (list, tuple)):
        return [_norm_value(v) for v in x]
    if isinstance(x, (str, int, float, bool)) or x is None:
        return x
    return str(x)


def _inputs(ctx: Any) -> Dict[str, Any]:
    # Solo INPUTS. No metas resultados aquí.
    datos = getattr(ctx, "datos", None)
    if is_dataclass(datos) and not isinstance(datos, type):
        return asdict(datos)
    return datos if isinstance(datos, dict) else {}


def build_inputs_fingerprint(ctx: Any) -> str:
    payload = _norm_value(_inputs(ctx))
    raw = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def save_result_fingerprint(ctx: Any) -> str:
    fp = build_inputs_fingerprint(ctx)
    setattr(ctx, "result_inputs_fingerprint", fp)
    return fp


def is_result_stale(ctx: Any) -> bool:
    saved = getattr(ctx, "result_inputs_fingerprint", None)
    if not saved:
        return False
    return str(saved) != build_inputs_fingerprint(ctx)
