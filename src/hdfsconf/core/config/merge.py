# src/hdfsconf/core/config/merge.py
"""
Utilitários canônicos de merge de configuração.

Este módulo concentra as duas políticas de merge usadas pelo hdfsconf:

    - `deep_merge`: resolução de arquivos de settings (defaults + local),
      estruturados e possivelmente aninhados
    - `merge_properties`: sobreposição plana de propriedades de baixo nível
      (chave string → valor string), usada na leitura de arquivos de recurso

Política de deep-merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

Política de propriedades (v1):
    - estruturas aninhadas são achatadas com "." como separador
    - o valor posterior sempre vence para a mesma chave
    - a ordem de primeira inserção das chaves é preservada

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída
"""

from copy import deepcopy
from typing import Any, Dict, Mapping

from .errors import ConfigTypeConflictError, InvalidResourceError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de configuração.

    Decisões arquiteturais:
        - O merge é puramente funcional (inputs não são mutados)
        - Não existem heurísticas implícitas para listas
        - Conflitos estruturais são tratados como falha fatal
        - `None` no override é tratado como ausência de valor explícito
          para a chave (o tipo da base prevalece)

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos da configuração.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result or result[key] is None or override_value is None:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        # dict -> merge recursivo
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        # list -> sobrescrita total
        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        # duração "10s" sobre número de ms (e vice-versa) é um override legítimo
        if _is_scalar(base_value) and _is_scalar(override_value):
            result[key] = override_value
            continue

        if type(base_value) is not type(override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def property_value(value: Any) -> str:
    """Converte um valor escalar de recurso para a representação textual de propriedade."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(property_value(v) for v in value)
    if isinstance(value, (str, int, float)):
        return str(value)
    raise InvalidResourceError(
        f"Valor de propriedade não suportado: {type(value).__name__}"
    )


def flatten_properties(data: Mapping[str, Any], prefix: str = "") -> Dict[str, str]:
    """
    Achata um mapa possivelmente aninhado em propriedades planas.

    Exemplo:
        {"dfs": {"client": {"socket-timeout": 1000}}}
        → {"dfs.client.socket-timeout": "1000"}

    Raises:
        InvalidResourceError: Se alguma chave não for string ou algum valor
            não puder ser representado como texto.
    """
    result: Dict[str, str] = {}
    for key, value in data.items():
        if not isinstance(key, str) or not key.strip():
            raise InvalidResourceError(f"Chave de propriedade inválida: {key!r}")
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping):
            result.update(flatten_properties(value, full_key))
        else:
            result[full_key] = property_value(value)
    return result


def merge_properties(base: Mapping[str, str], override: Mapping[str, str]) -> Dict[str, str]:
    """Retorna um novo mapa com `override` aplicado sobre `base` (o posterior vence)."""
    result: Dict[str, str] = dict(base)
    result.update(override)
    return result
