# src/hdfsconf/__init__.py
"""
hdfsconf: derivação determinística da configuração de cliente HDFS.

Este pacote raiz define o namespace público do hdfsconf, que traduz
settings tipados e validados (timeouts, proxy, codec, criptografia,
tamanhos de cache) em um conjunto plano e ordenado de chaves de baixo
nível entregue ao cliente do sistema de arquivos distribuído.

Arquitetura em alto nível:
    - core.config      → leitura/merge de recursos e erros
    - core.settings    → settings validados e conversão de unidades
    - core.sink        → sink mutável de configuração + log de eventos
    - core.compression → codecs e chaves de compressão por formato
    - core.topology    → stub de resolução de topologia de rede
    - core.extensions  → protocolo e registry de initializers de extensão
    - core.engine      → orquestrador da derivação

Limites explícitos:
    - Não realiza I/O no sistema de arquivos distribuído
    - Não calcula topologia de rede
    - Não agenda trabalho distribuído
"""

from .core.compression import HiveCompressionCodec, configure_compression
from .core.engine import HdfsConfigurationInitializer, initialize
from .core.extensions import ConfigurationInitializer
from .core.settings import HdfsSettings, HostAndPort, load_settings
from .core.sink import ConfigurationSink
from .core.topology import NoOpDNSToSwitchMapping

__all__ = [
    "ConfigurationInitializer",
    "ConfigurationSink",
    "HdfsConfigurationInitializer",
    "HdfsSettings",
    "HiveCompressionCodec",
    "HostAndPort",
    "NoOpDNSToSwitchMapping",
    "configure_compression",
    "initialize",
    "load_settings",
]
