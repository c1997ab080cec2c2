# src/hdfsconf/core/extensions/initializer.py
"""
Contrato canônico de initializer de extensão.

Um initializer de extensão é um mutador independente, fornecido pelo
chamador, que ajusta a configuração depois que as regras do orquestrador
já foram aplicadas (ex.: credenciais de object storage, chaves de um
provedor específico).

Princípios fundamentais:
    - Initializers não conhecem o orquestrador nem outros initializers
    - Initializers não controlam a ordem de execução
    - Todos compartilham o mesmo sink: escritas anteriores são visíveis
      aos posteriores (não há isolamento)
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não define política de retry ou tratamento de exceções;
      falhas se propagam ao chamador sem rollback
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from hdfsconf.core.sink import ConfigurationSink


@runtime_checkable
class ConfigurationInitializer(Protocol):
    """
    Capacidade "dado um sink, mute-o".

    O protocolo não impõe herança, apenas conformidade estrutural: qualquer
    objeto com `initialize_configuration(config)` é aceito.

    Invariantes:
        - `initialize_configuration` é chamado no máximo uma vez por derivação
        - O valor de retorno é ignorado
    """

    def initialize_configuration(self, config: ConfigurationSink) -> None:
        """Ajusta o sink in-place."""
        ...
