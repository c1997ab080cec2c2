# src/hdfsconf/core/engine/__init__.py
"""
Orquestração da derivação de configuração do cliente HDFS.

Componentes principais:
    - hdfs → `initialize` (derivação pura sobre um sink) e
      `HdfsConfigurationInitializer` (recursos lidos uma vez + initializers fixos)

Invariantes:
    - A derivação é determinística para os mesmos settings, recursos e initializers
    - Cada initializer de extensão é executado no máximo uma vez por derivação
"""

from .hdfs import HdfsConfigurationInitializer, initialize

__all__ = ["HdfsConfigurationInitializer", "initialize"]
