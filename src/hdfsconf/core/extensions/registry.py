# src/hdfsconf/core/extensions/registry.py
"""
Registro estrutural de initializers de extensão.

O registry valida cada initializer antes que ele seja entregue ao
orquestrador, garantindo que:
    - o objeto satisfaz o protocolo `ConfigurationInitializer`
    - cada instância aparece uma única vez (conjunto ordenado)
    - a ordem de primeira inserção é preservada explicitamente

Invariantes:
    - A lista retornada reflete a ordem da primeira ocorrência de cada instância
    - Registrar de novo a mesma instância é um no-op
    - Nenhum initializer inválido é aceito

Limites explícitos:
    - Não executa initializers
    - Não interage com o sink
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .initializer import ConfigurationInitializer


@dataclass
class InitializerRegistry:
    """Conjunto ordenado de initializers de extensão (identidade de instância)."""

    _initializers: List[ConfigurationInitializer] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def of(cls, initializers: Iterable[ConfigurationInitializer]) -> "InitializerRegistry":
        registry = cls()
        for initializer in initializers:
            registry.add(initializer)
        return registry

    def add(self, initializer: ConfigurationInitializer) -> bool:
        """Registra o initializer; retorna False quando a instância já estava registrada."""
        if not isinstance(initializer, ConfigurationInitializer):
            raise TypeError(
                f"{type(initializer).__name__} does not implement "
                "initialize_configuration(config)"
            )
        if any(existing is initializer for existing in self._initializers):
            return False
        self._initializers.append(initializer)
        return True

    def list(self) -> Tuple[ConfigurationInitializer, ...]:
        return tuple(self._initializers)

    def __len__(self) -> int:
        return len(self._initializers)
