# electrico/normas/cargador_yaml.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .modelos import ParametroNormativo, ReglaPuestaTierra
from .proveedor import como_fecha

DATA_DIR = Path(__file__).resolve().parent / "datos"
ARCHIVO_PARAMETROS = "parametros_normativos.yaml"
ARCHIVO_PUESTA_TIERRA = "reglas_puesta_tierra.yaml"


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"No existe archivo normativo: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Archivo de parámetros inválido (debe ser dict): {path}")
    return data


def _req(d: Dict[str, Any], k: str, ctx: str) -> Any:
    if k not in d or d[k] is None:
        raise ValueError(f"Falta '{k}' en {ctx}")
    return d[k]


def _req_num(d: Dict[str, Any], k: str, ctx: str) -> float:
    v = _req(d, k, ctx)
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{k}' debe ser numérico en {ctx}. Valor={v!r}") from e


def _fila(clave: str, d: Any, ctx: str) -> ParametroNormativo:
    # forma corta: `clave: 32.3`
    if not isinstance(d, dict):
        d = {"valor": d}
    try:
        desde = como_fecha(d.get("vigente_desde"))
        hasta = como_fecha(d.get("vigente_hasta"))
    except ValueError as e:
        raise ValueError(f"Vigencia inválida en {ctx}: {e}") from e
    rs = d.get("rule_set_id")
    return ParametroNormativo(
        clave=str(clave),
        valor=_req_num(d, "valor", ctx),
        unidad=str(d.get("unidad") or ""),
        fuente=str(d.get("fuente") or ""),
        rule_set_id=str(rs) if rs is not None else None,
        vigente_desde=desde,
        vigente_hasta=hasta,
    )


def parametros_desde_dict(doc: Dict[str, Any]) -> List[ParametroNormativo]:
    """
    Convierte el documento YAML (ya leído) en filas normativas.

    Formato:
        parametros:
          lighting_va_per_m2: {valor: 32.3, unidad: VA/m2, fuente: "..."}
          fd_tomas:
            - {valor: 1.0}
            - {valor: 0.9, rule_set_id: RIE-2024, vigente_desde: 2024-01-01}
    """
    params = doc.get("parametros") or {}
    if not isinstance(params, dict):
        raise ValueError("'parametros' debe ser un mapeo clave -> fila(s)")

    out: List[ParametroNormativo] = []
    for clave, filas in params.items():
        if isinstance(filas, list):
            for i, f in enumerate(filas):
                out.append(_fila(clave, f, f"parametros.{clave}[{i}]"))
        else:
            out.append(_fila(clave, filas, f"parametros.{clave}"))
    return out


def cargar_parametros_yaml(path: Union[str, Path, None] = None) -> List[ParametroNormativo]:
    ruta = Path(path) if path is not None else DATA_DIR / ARCHIVO_PARAMETROS
    return parametros_desde_dict(_read_yaml(ruta))


def reglas_desde_dict(doc: Dict[str, Any]) -> List[ReglaPuestaTierra]:
    """
    Formato:
        reglas:
          - {limite_a: 60, egc_mm2: 6, gec_mm2: 10}

    Devuelve las reglas ordenadas por limite_a ascendente.
    """
    filas = doc.get("reglas")
    if not isinstance(filas, list) or not filas:
        raise ValueError("'reglas' debe ser una lista no vacía")

    out: List[ReglaPuestaTierra] = []
    for i, d in enumerate(filas):
        ctx = f"reglas[{i}]"
        if not isinstance(d, dict):
            raise ValueError(f"{ctx} debe ser un mapeo")
        out.append(ReglaPuestaTierra(
            limite_a=_req_num(d, "limite_a", ctx),
            egc_mm2=_req_num(d, "egc_mm2", ctx),
            gec_mm2=_req_num(d, "gec_mm2", ctx),
            nota=str(d.get("nota") or ""),
        ))
    return sorted(out, key=lambda r: r.limite_a)


def cargar_reglas_puesta_tierra_yaml(path: Union[str, Path, None] = None) -> List[ReglaPuestaTierra]:
    ruta = Path(path) if path is not None else DATA_DIR / ARCHIVO_PUESTA_TIERRA
    return reglas_desde_dict(_read_yaml(ruta))


__all__ = [
    "DATA_DIR",
    "ARCHIVO_PARAMETROS",
    "ARCHIVO_PUESTA_TIERRA",
    "parametros_desde_dict",
    "cargar_parametros_yaml",
    "reglas_desde_dict",
    "cargar_reglas_puesta_tierra_yaml",
]
