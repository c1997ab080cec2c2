# src/hdfsconf/core/settings/units.py
"""
Conversão de durações e tamanhos de dados para unidades canônicas.

Durações são expressas em milissegundos e tamanhos em bytes. Valores
aceitos:
    - duração: `timedelta`, número (já em ms) ou texto "<número><unidade>"
      com unidade em {ns, us, ms, s, m, h, d}
    - tamanho: número (já em bytes) ou texto "<número><unidade>"
      com unidade em {B, kB, MB, GB, TB, PB} (potências de 1024)

Invariantes:
    - Valores negativos ou malformados levantam `InvalidConfigurationError`
    - `to_int_exact` trunca (não arredonda) e rejeita overflow de 32 bits
"""

from __future__ import annotations

import math
import re
from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, Union

from hdfsconf.core.config.errors import InvalidConfigurationError

DurationLike = Union[str, int, float, timedelta]
DataSizeLike = Union[str, int, float]

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_VALUE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]+)\s*$")

# fatores decimais: "2.01s" vale exatamente 2010 ms antes de truncar
_DURATION_UNITS_MS: Dict[str, Decimal] = {
    "ns": Decimal("0.000001"),
    "us": Decimal("0.001"),
    "ms": Decimal(1),
    "s": Decimal(1_000),
    "m": Decimal(60_000),
    "h": Decimal(3_600_000),
    "d": Decimal(86_400_000),
}

_DATA_SIZE_UNITS: Dict[str, int] = {
    "B": 1,
    "kB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
    "TB": 1024**4,
    "PB": 1024**5,
}


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise InvalidConfigurationError(msg)


def _number(value: Any, name: str) -> Decimal:
    _expect(not isinstance(value, bool), f"{name} must be a number, got bool")
    if isinstance(value, float):
        _expect(math.isfinite(value), f"{name} must be finite: {value!r}")
        # repr preserva o literal escrito (0.1 → "0.1"), não a expansão binária
        number = Decimal(repr(value))
    else:
        number = Decimal(value)
    _expect(number >= 0, f"{name} must not be negative: {value!r}")
    return number


def parse_duration(value: DurationLike, name: str = "duration") -> Decimal:
    """Converte uma duração para milissegundos exatos (sem truncar)."""
    if isinstance(value, timedelta):
        micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
        return _number(Decimal(micros) / 1_000, name)
    if isinstance(value, (int, float)):
        return _number(value, name)
    _expect(isinstance(value, str), f"{name} must be a duration, got {type(value).__name__}")

    match = _VALUE_PATTERN.match(value)
    _expect(match is not None, f"{name} is not a valid duration: {value!r}")
    amount, unit = match.group(1), match.group(2)
    _expect(unit in _DURATION_UNITS_MS, f"{name} has unknown time unit: {unit!r}")
    return _number(amount, name) * _DURATION_UNITS_MS[unit]


def parse_data_size(value: DataSizeLike, name: str = "data size") -> Decimal:
    """Converte um tamanho de dados para bytes exatos (sem truncar)."""
    if isinstance(value, (int, float)):
        return _number(value, name)
    _expect(isinstance(value, str), f"{name} must be a data size, got {type(value).__name__}")

    match = _VALUE_PATTERN.match(value)
    _expect(match is not None, f"{name} is not a valid data size: {value!r}")
    amount, unit = match.group(1), match.group(2)
    _expect(unit in _DATA_SIZE_UNITS, f"{name} has unknown data size unit: {unit!r}")
    return _number(amount, name) * _DATA_SIZE_UNITS[unit]


def to_int_exact(value: Decimal, name: str) -> int:
    """Trunca para inteiro e falha quando o resultado não cabe em 32 bits com sinal."""
    result = int(value)
    _expect(
        INT32_MIN <= result <= INT32_MAX,
        f"{name} overflows a 32-bit integer: {result}",
    )
    return result


def duration_to_millis(value: DurationLike, name: str) -> int:
    return to_int_exact(parse_duration(value, name), name)


def data_size_to_bytes(value: DataSizeLike, name: str) -> int:
    return to_int_exact(parse_data_size(value, name), name)
