# src/hdfsconf/core/settings/__init__.py
"""
Settings de alto nível do cliente HDFS.

Componentes:
    - units → conversão de durações (ms) e tamanhos (bytes)
    - hdfs  → `HdfsSettings`, `HostAndPort` e `load_settings`
"""

from .hdfs import HdfsSettings, HostAndPort, load_settings

__all__ = ["HdfsSettings", "HostAndPort", "load_settings"]
