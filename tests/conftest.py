# tests/conftest.py
"""
Fixtures compartilhados para testes do hdfsconf.

Este módulo define fixtures reutilizáveis que fornecem:
- conteúdos de arquivos de recurso nos formatos suportados
- settings mínimos e determinísticos
- sinks vazios
- initializers de extensão dummy para testes de orquestração

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Initializers dummy utilizam duck typing em vez de herança
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O fora de `tmp_path`
    - Todas as fixtures são seguras para execução em paralelo
"""

import pytest


# =====================================================
# Recursos
# =====================================================

@pytest.fixture
def core_site_xml() -> str:
    """Recurso no formato Hadoop XML, semelhante a um `core-site.xml` real."""
    return """\
<?xml version="1.0"?>
<configuration>
  <property>
    <name>fs.defaultFS</name>
    <value>hdfs://namenode:8020</value>
  </property>
  <property>
    <name>dfs.replication</name>
    <value>3</value>
  </property>
  <property>
    <name>ipc.ping.interval</name>
    <value>99999</value>
  </property>
</configuration>
"""


@pytest.fixture
def hdfs_site_properties() -> str:
    """Recurso no formato Java properties, sobrescrevendo parte do XML."""
    return """\
# overrides locais
dfs.replication = 2
dfs.domain.socket.path: /var/run/hdfs/dn_socket
hadoop.security.authentication=kerberos
"""


@pytest.fixture
def write_resource(tmp_path):
    """Escreve um recurso em `tmp_path` e retorna seu caminho como string."""

    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


# =====================================================
# Settings e sink
# =====================================================

@pytest.fixture
def settings():
    from hdfsconf.core.settings.hdfs import HdfsSettings

    return HdfsSettings()


@pytest.fixture
def sink():
    from hdfsconf.core.sink import ConfigurationSink

    return ConfigurationSink()


# =====================================================
# Initializers dummy
# =====================================================

@pytest.fixture
def SettingInitializer():
    """
    Classe de initializer dummy que escreve um par chave/valor e registra
    o valor observado antes da escrita (para testes de ordem e visibilidade).
    """

    class _SettingInitializer:
        def __init__(self, key: str, value: str):
            self.key = key
            self.value = value
            self.observed = None
            self.calls = 0

        def initialize_configuration(self, config):
            self.calls += 1
            self.observed = config.get(self.key)
            config.set(self.key, self.value)

    return _SettingInitializer


@pytest.fixture
def FailingInitializer():
    class _FailingInitializer:
        def initialize_configuration(self, config):
            config.set("extension.partial", "true")
            raise RuntimeError("initializer boom")

    return _FailingInitializer
