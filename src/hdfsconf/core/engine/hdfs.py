# src/hdfsconf/core/engine/hdfs.py
"""
Orquestrador de derivação da configuração do cliente HDFS.

Este módulo compõe loader de recursos, settings validados, mapeamento de
compressão, stub de topologia e initializers de extensão para produzir a
configuração final entregue ao cliente.

Ordem de aplicação (cada passo pode sobrescrever os anteriores):
    1. cópia da configuração base (recursos) para o sink
    2. stub de topologia, incondicional
    3. proxy SOCKS, se configurado
    4. domain socket e short-circuit reads ("definir se ausente")
    5. timeouts, retries, caches e tamanho máximo de linha, incondicionais
    6. wire encryption, se habilitada
    7. chaves de compressão por formato
    8. initializers de extensão, na ordem fixada na construção

Decisões arquiteturais:
    - Recursos são lidos uma vez, na construção, e compartilhados
    - Falhas de initializers de extensão não são capturadas: o sink pode
      ficar parcialmente preenchido e nenhum rollback é feito
"""

from __future__ import annotations

from typing import Callable, Iterable, Mapping, Optional, Sequence, Tuple

from hdfsconf.core import keys
from hdfsconf.core.compression import HiveCompressionCodec, configure_compression
from hdfsconf.core.config.loader import read_configuration
from hdfsconf.core.extensions.initializer import ConfigurationInitializer
from hdfsconf.core.extensions.registry import InitializerRegistry
from hdfsconf.core.settings.hdfs import HdfsSettings
from hdfsconf.core.sink import ConfigurationSink, qualified_name
from hdfsconf.core.topology import DNSToSwitchMapping, NoOpDNSToSwitchMapping

CompressionKeyMapper = Callable[[ConfigurationSink, HiveCompressionCodec], None]

SOURCE = "hdfs"


def initialize(
    sink: ConfigurationSink,
    base_configuration: Mapping[str, str],
    settings: HdfsSettings,
    compression_mapper: CompressionKeyMapper = configure_compression,
    extension_initializers: Sequence[ConfigurationInitializer] = (),
) -> None:
    """
    Deriva a configuração de baixo nível sobre `sink`.

    Args:
        sink (ConfigurationSink): Sink de destino, exclusivo desta derivação.
        base_configuration (Mapping[str, str]): Propriedades já mescladas dos recursos.
        settings (HdfsSettings): Settings validados.
        compression_mapper (CompressionKeyMapper): Mapeamento de codec para chaves.
        extension_initializers (Sequence[ConfigurationInitializer]): Mutadores
            adicionais, executados em ordem após as regras do orquestrador.

    Raises:
        Exception: Qualquer erro levantado por um initializer de extensão,
            propagado sem modificação.
    """
    sink.copy_from(base_configuration)
    sink.log(source=SOURCE, level="DEBUG", message="base configuration copied", keys=len(base_configuration))

    # evita que o cliente faça lookups reversos de DNS para decidir se nós são rack local
    sink.set_class(keys.NET_TOPOLOGY_NODE_SWITCH_MAPPING_IMPL_KEY, NoOpDNSToSwitchMapping, DNSToSwitchMapping)

    if settings.socks_proxy is not None:
        sink.set(keys.HADOOP_RPC_SOCKET_FACTORY_CLASS_DEFAULT_KEY, keys.SOCKS_SOCKET_FACTORY_CLASS)
        sink.set(keys.HADOOP_SOCKS_SERVER_KEY, str(settings.socks_proxy))
        sink.log(source=SOURCE, level="INFO", message="socks proxy configured", proxy=str(settings.socks_proxy))

    if settings.domain_socket_path is not None:
        sink.set_strings(keys.DFS_DOMAIN_SOCKET_PATH_KEY, settings.domain_socket_path)

    # short-circuit reads apenas com domain socket configurado (via settings ou recursos)
    if sink.get(keys.DFS_DOMAIN_SOCKET_PATH_KEY, "").strip():
        enabled = sink.set_boolean_if_unset(keys.DFS_CLIENT_READ_SHORTCIRCUIT_KEY, True)
        sink.log(
            source=SOURCE,
            level="INFO",
            message="short-circuit reads enabled" if enabled else "short-circuit reads left as configured",
            value=sink.get(keys.DFS_CLIENT_READ_SHORTCIRCUIT_KEY),
        )

    sink.set_int(keys.DFS_CLIENT_SOCKET_TIMEOUT_KEY, settings.dfs_timeout)
    sink.set_int(keys.IPC_PING_INTERVAL_KEY, settings.ipc_ping_interval)
    sink.set_int(keys.IPC_CLIENT_CONNECT_TIMEOUT_KEY, settings.dfs_connect_timeout)
    sink.set_int(keys.IPC_CLIENT_CONNECT_MAX_RETRIES_KEY, settings.dfs_connect_max_retries)

    if settings.hdfs_wire_encryption_enabled:
        sink.set(keys.HADOOP_RPC_PROTECTION_KEY, keys.RPC_PROTECTION_PRIVACY)
        sink.set_boolean(keys.DFS_ENCRYPT_DATA_TRANSFER_KEY, True)
        sink.log(source=SOURCE, level="INFO", message="wire encryption enabled")

    sink.set_int(keys.FS_CACHE_MAX_SIZE_KEY, settings.file_system_max_cache_size)
    sink.set_int(keys.DFS_CLIENT_KEY_PROVIDER_CACHE_EXPIRY_KEY, settings.dfs_key_provider_cache_ttl)
    sink.set_int(keys.LINE_RECORD_READER_MAX_LINE_LENGTH_KEY, settings.text_max_line_length)

    compression_mapper(sink, settings.compression_codec)
    sink.log(source=SOURCE, level="DEBUG", message="compression configured", codec=settings.compression_codec.value)

    for index, initializer in enumerate(extension_initializers):
        # registrado antes da chamada para que uma falha seja atribuível
        sink.log(
            source=SOURCE,
            level="DEBUG",
            message="running configuration initializer",
            index=index,
            initializer=qualified_name(type(initializer)),
        )
        initializer.initialize_configuration(sink)


class HdfsConfigurationInitializer:
    """
    Orquestrador configurado de derivação.

    Lê os arquivos de recurso uma única vez (na construção) e fixa a lista
    de initializers de extensão; cada chamada a `initialize_configuration`
    aplica a mesma derivação sobre um sink novo.
    """

    def __init__(
        self,
        settings: HdfsSettings,
        configuration_initializers: Iterable[ConfigurationInitializer] = (),
        *,
        compression_mapper: CompressionKeyMapper = configure_compression,
    ):
        if settings is None:
            raise TypeError("settings is None")
        if configuration_initializers is None:
            raise TypeError("configuration_initializers is None")

        self.settings: HdfsSettings = settings
        self.compression_mapper: CompressionKeyMapper = compression_mapper
        self._base_configuration: Mapping[str, str] = read_configuration(settings.resource_config_files)
        self._initializers: Tuple[ConfigurationInitializer, ...] = InitializerRegistry.of(
            configuration_initializers
        ).list()

    @property
    def base_configuration(self) -> Mapping[str, str]:
        return self._base_configuration

    @property
    def configuration_initializers(self) -> Tuple[ConfigurationInitializer, ...]:
        return self._initializers

    def initialize_configuration(self, config: ConfigurationSink) -> None:
        initialize(
            config,
            self._base_configuration,
            self.settings,
            self.compression_mapper,
            self._initializers,
        )

    def new_configuration(self, properties: Optional[Mapping[str, str]] = None) -> ConfigurationSink:
        """Cria um sink (opcionalmente pré-populado) e aplica a derivação sobre ele."""
        config = ConfigurationSink.from_mapping(properties or {})
        self.initialize_configuration(config)
        return config
