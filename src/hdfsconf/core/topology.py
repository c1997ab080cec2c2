# src/hdfsconf/core/topology.py
"""
Resolução de topologia de rede (host → switch/rack) usada pelo cliente HDFS.

O comportamento padrão do cliente faz lookups reversos de DNS no momento
da conexão para decidir se nós são "rack local". Nesse ambiente isso é
lento e pouco confiável; o orquestrador instala incondicionalmente o
`NoOpDNSToSwitchMapping`, que sempre reporta "desconhecido".
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class DNSToSwitchMapping(Protocol):
    """Contrato de resolução de nomes de host para identificadores de topologia."""

    def resolve(self, names: Sequence[str]) -> List[str]:
        ...

    def reload_cached_mappings(self, names: Optional[Sequence[str]] = None) -> None:
        ...


class NoOpDNSToSwitchMapping:
    """Resolução sem estado e sem efeitos colaterais; segura para compartilhar."""

    def resolve(self, names: Sequence[str]) -> List[str]:
        # o cliente interpreta lista vazia como "mapeamento desconhecido", não como erro
        return []

    def reload_cached_mappings(self, names: Optional[Sequence[str]] = None) -> None:
        # no-op
        return None
