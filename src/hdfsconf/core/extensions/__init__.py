# src/hdfsconf/core/extensions/__init__.py
"""
Extensões do orquestrador de configuração.

## Componentes
- **initializer**
  - `ConfigurationInitializer` (Protocol): contrato "dado um sink, mute-o"
- **registry**
  - `InitializerRegistry`: validação estrutural e conjunto ordenado de instâncias

Initializers rodam depois das regras do orquestrador, na ordem fixada na
construção, compartilhando o mesmo sink.
"""

from .initializer import ConfigurationInitializer
from .registry import InitializerRegistry

__all__ = ["ConfigurationInitializer", "InitializerRegistry"]
