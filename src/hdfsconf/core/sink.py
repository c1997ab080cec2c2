# src/hdfsconf/core/sink.py
"""
Sink de configuração compartilhado da derivação.

Este módulo define o `ConfigurationSink`, a estrutura mutável que recebe
a configuração final entregue ao cliente HDFS. O orquestrador e todos os
initializers de extensão escrevem no mesmo sink, em sequência.

O ConfigurationSink atua como:
    - mapa plano de propriedades (chave string → valor string)
    - ponto único de escrita tipada (int, boolean, classe, listas)
    - registro estruturado de eventos da derivação

Princípios fundamentais:
    - Um sink por derivação (não é thread-safe)
    - Valores são sempre armazenados como texto, como no cliente HDFS
    - Nenhum estado global: "definir se ausente" é uma consulta explícita
      seguida de escrita condicional

Invariantes:
    - Booleanos são armazenados como "true"/"false"
    - Classes são armazenadas pelo nome qualificado
    - Eventos sempre incluem `source`, `level`, `message` e `timestamp`

Limites explícitos:
    - Não aplica regras de derivação
    - Não persiste dados automaticamente
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional


def qualified_name(cls: type) -> str:
    """Nome qualificado (`módulo.Classe`) usado para registrar classes no sink."""
    return f"{cls.__module__}.{cls.__qualname__}"


@dataclass
class ConfigurationSink:
    """
    Configuração mutável de baixo nível em construção.

    Decisões arquiteturais:
        - A ordem de inserção das chaves é preservada
        - `unset` remove a chave (distinto de definir valor vazio)
        - Escritas tipadas convertem para texto no momento da escrita

    Invariantes:
        - Toda chave e todo valor armazenado é `str`
        - `events` cresce apenas por `log`
    """

    _properties: Dict[str, str] = field(default_factory=dict, repr=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self._properties = {str(k): str(v) for k, v in self._properties.items()}

    @classmethod
    def from_mapping(cls, properties: Mapping[str, Any]) -> "ConfigurationSink":
        return cls(dict(properties))

    # -----------------------------
    # Mapa de propriedades
    # -----------------------------

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._properties.get(key, default)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"value for '{key}' must be str, got {type(value).__name__}")
        self._properties[key] = value

    def unset(self, key: str) -> None:
        self._properties.pop(key, None)

    def copy_from(self, properties: Mapping[str, str]) -> None:
        for key, value in properties.items():
            self.set(key, value)

    def to_dict(self) -> Dict[str, str]:
        return dict(self._properties)

    def __contains__(self, key: object) -> bool:
        return key in self._properties

    def __getitem__(self, key: str) -> str:
        return self._properties[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    # -----------------------------
    # Escritas e leituras tipadas
    # -----------------------------

    def set_int(self, key: str, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"value for '{key}' must be int, got {type(value).__name__}")
        self.set(key, str(value))

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        raw = self.get(key)
        if raw is None or not raw.strip():
            return default
        return int(raw.strip())

    def set_boolean(self, key: str, value: bool) -> None:
        self.set(key, "true" if value else "false")

    def get_boolean(self, key: str, default: bool = False) -> bool:
        raw = self.get(key)
        if raw is None:
            return default
        normalized = raw.strip().lower()
        if normalized == "true":
            return True
        if normalized == "false":
            return False
        return default

    def set_boolean_if_unset(self, key: str, value: bool) -> bool:
        """Define o booleano apenas quando a chave está ausente; retorna se escreveu."""
        if key in self._properties:
            return False
        self.set_boolean(key, value)
        return True

    def set_strings(self, key: str, *values: str) -> None:
        self.set(key, ",".join(values))

    def get_strings(self, key: str) -> List[str]:
        raw = self.get(key)
        if raw is None or not raw.strip():
            return []
        return [v.strip() for v in raw.split(",")]

    def set_class(self, key: str, cls: type, interface: Optional[type] = None) -> None:
        """
        Registra uma classe pelo nome qualificado.

        Quando `interface` é informado e é um Protocol `@runtime_checkable`
        (ou classe base), a conformidade é verificada antes da escrita.
        """
        if interface is not None and not issubclass(cls, interface):
            raise TypeError(f"{qualified_name(cls)} does not implement {qualified_name(interface)}")
        self.set(key, qualified_name(cls))

    def get_class(self, key: str) -> Optional[type]:
        """Resolve o nome qualificado armazenado em `key` de volta para a classe Python."""
        raw = self.get(key)
        if raw is None or not raw.strip():
            return None
        # o nome pode conter classes aninhadas: tenta o módulo mais longo primeiro
        parts = raw.strip().split(".")
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                target: Any = importlib.import_module(module_name)
            except ImportError:
                continue
            for attr in parts[split:]:
                target = getattr(target, attr)
            return target
        raise ImportError(f"Cannot resolve class '{raw}' configured in '{key}'")

    # -----------------------------
    # Rastreabilidade
    # -----------------------------

    def log(self, *, source: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "source": source,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def events_for(self, source: str) -> Iterable[Dict[str, Any]]:
        return [e for e in self.events if e.get("source") == source]
