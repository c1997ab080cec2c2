# src/hdfsconf/core/settings/hdfs.py
"""
Settings validados de acesso ao HDFS.

Este módulo define o `HdfsSettings`, o snapshot imutável de valores de
alto nível (timeouts, proxy, caminhos, codec, tamanhos de cache) a partir
do qual a configuração de baixo nível do cliente é derivada.

Responsabilidades do módulo:
    - Normalizar durações para milissegundos inteiros (truncando)
    - Normalizar tamanhos para bytes inteiros
    - Validar domínios de valores na construção
    - Construir settings a partir de mapas soltos ou arquivos YAML/JSON

Invariantes:
    - `dfs_timeout` >= 1 ms
    - `text_max_line_length` >= 1 byte
    - Todo valor normalizado cabe em um inteiro de 32 bits com sinal
    - Instâncias são imutáveis após a construção

Limites explícitos:
    - Não lê variáveis de ambiente
    - Não deriva chaves de baixo nível (responsabilidade do orquestrador)
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from hdfsconf.core.compression import HiveCompressionCodec
from hdfsconf.core.config.errors import InvalidConfigurationError
from hdfsconf.core.config.loader import load_structured_file
from hdfsconf.core.config.merge import deep_merge

from .units import (
    INT32_MAX,
    INT32_MIN,
    DataSizeLike,
    DurationLike,
    data_size_to_bytes,
    duration_to_millis,
)


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise InvalidConfigurationError(msg)


@dataclass(frozen=True)
class HostAndPort:
    """Endereço `host:port` (IPv6 entre colchetes na forma textual)."""

    host: str
    port: int

    def __post_init__(self) -> None:
        _expect(isinstance(self.host, str) and bool(self.host.strip()), "host must be a non-empty string")
        _expect(
            isinstance(self.port, int) and not isinstance(self.port, bool) and 0 < self.port <= 65535,
            f"port must be in 1..65535, got: {self.port!r}",
        )

    @classmethod
    def from_string(cls, text: str) -> "HostAndPort":
        _expect(isinstance(text, str) and bool(text.strip()), f"invalid host:port: {text!r}")
        text = text.strip()
        if text.startswith("["):
            host, sep, rest = text[1:].partition("]")
            _expect(bool(sep) and rest.startswith(":"), f"invalid host:port: {text!r}")
            port_text = rest[1:]
        else:
            host, sep, port_text = text.rpartition(":")
            _expect(bool(sep) and ":" not in host, f"invalid host:port: {text!r}")
        _expect(port_text.isdigit(), f"invalid port in host:port: {text!r}")
        return cls(host=host, port=int(port_text))

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class HdfsSettings:
    """
    Snapshot imutável e validado dos settings de acesso ao HDFS.

    Os campos aceitam valores "crus" na construção e são normalizados em
    `__post_init__`:
        - durações (`timedelta`, ms numéricos ou "10s", "500ms", "30m")
          tornam-se milissegundos inteiros
        - tamanhos (bytes numéricos ou "100MB") tornam-se bytes inteiros
        - `socks_proxy` em texto torna-se `HostAndPort`
        - `compression_codec` em texto torna-se `HiveCompressionCodec`

    Raises:
        InvalidConfigurationError: Para qualquer valor fora do domínio.
    """

    socks_proxy: Optional[Union[HostAndPort, str]] = None
    ipc_ping_interval: DurationLike = "10s"
    dfs_timeout: DurationLike = "60s"
    dfs_connect_timeout: DurationLike = "500ms"
    dfs_connect_max_retries: int = 5
    dfs_key_provider_cache_ttl: DurationLike = "30m"
    domain_socket_path: Optional[str] = None
    compression_codec: Union[HiveCompressionCodec, str] = HiveCompressionCodec.GZIP
    file_system_max_cache_size: int = 1000
    hdfs_wire_encryption_enabled: bool = False
    text_max_line_length: DataSizeLike = "100MB"
    resource_config_files: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        def normalize(name: str, value: Any) -> None:
            object.__setattr__(self, name, value)

        if isinstance(self.socks_proxy, str):
            normalize("socks_proxy", HostAndPort.from_string(self.socks_proxy))
        _expect(
            self.socks_proxy is None or isinstance(self.socks_proxy, HostAndPort),
            f"socks_proxy must be host:port, got: {self.socks_proxy!r}",
        )

        for name in ("ipc_ping_interval", "dfs_timeout", "dfs_connect_timeout", "dfs_key_provider_cache_ttl"):
            normalize(name, duration_to_millis(getattr(self, name), name))
        _expect(self.dfs_timeout >= 1, "dfs_timeout must be at least 1 ms")

        normalize("text_max_line_length", data_size_to_bytes(self.text_max_line_length, "text_max_line_length"))
        _expect(self.text_max_line_length >= 1, "text_max_line_length must be at least 1 byte")

        normalize("dfs_connect_max_retries", _int32(self.dfs_connect_max_retries, "dfs_connect_max_retries"))
        _expect(self.dfs_connect_max_retries >= 0, "dfs_connect_max_retries must not be negative")
        normalize(
            "file_system_max_cache_size",
            _int32(self.file_system_max_cache_size, "file_system_max_cache_size"),
        )

        _expect(
            self.domain_socket_path is None or isinstance(self.domain_socket_path, str),
            "domain_socket_path must be a string",
        )
        normalize("compression_codec", HiveCompressionCodec.from_name(self.compression_codec))
        normalize(
            "hdfs_wire_encryption_enabled",
            _bool(self.hdfs_wire_encryption_enabled, "hdfs_wire_encryption_enabled"),
        )
        normalize("resource_config_files", _paths(self.resource_config_files))

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "HdfsSettings":
        """
        Constrói settings a partir de um mapa solto.

        Chaves aceitas para cada campo:
            - o nome do campo (`dfs_timeout`)
            - a forma kebab-case (`dfs-timeout`)
            - o nome de propriedade do conector Hive (`hive.dfs-timeout`)

        Mapas aninhados são achatados com "." antes da resolução, de modo
        que `{"hive": {"dfs-timeout": "10s"}}` equivale a `hive.dfs-timeout`.

        Raises:
            InvalidConfigurationError: Para chaves desconhecidas, chaves
                repetidas sob nomes diferentes ou valores inválidos.
        """
        _expect(isinstance(cfg, Mapping), f"settings must be a mapping, got {type(cfg).__name__}")

        kwargs: Dict[str, Any] = {}
        for key, value in _flatten_raw(cfg).items():
            name = _FIELD_ALIASES.get(key)
            _expect(name is not None, f"unknown setting: {key!r}")
            _expect(name not in kwargs, f"setting {name!r} given more than once")
            kwargs[name] = value
        return cls(**kwargs)


def load_settings(*, defaults_path: Union[str, Path], local_path: Optional[Union[str, Path]] = None) -> HdfsSettings:
    """
    Carrega settings de um arquivo de defaults e, opcionalmente, de um override local.

    Política de resolução:
        - O arquivo de defaults é obrigatório
        - O arquivo local é opcional e ignorado quando não existe
        - Quando presente, o local tem prioridade (deep-merge)

    Raises:
        ResourceNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedResourceFormatError: Se o formato não for YAML/JSON.
        InvalidResourceError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural no merge.
        InvalidConfigurationError: Se os settings resultantes forem inválidos.
    """
    effective = load_structured_file(defaults_path)

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, load_structured_file(local_file))

    return HdfsSettings.from_mapping(effective)


# Nomes de propriedade do conector Hive para cada campo
HIVE_PROPERTY_NAMES: Dict[str, str] = {
    "socks_proxy": "hive.metastore.thrift.client.socks-proxy",
    "ipc_ping_interval": "hive.dfs.ipc-ping-interval",
    "dfs_timeout": "hive.dfs-timeout",
    "dfs_connect_timeout": "hive.dfs.connect.timeout",
    "dfs_connect_max_retries": "hive.dfs.connect.max-retries",
    "dfs_key_provider_cache_ttl": "hive.dfs.key-provider.cache-ttl",
    "domain_socket_path": "hive.dfs.domain-socket-path",
    "compression_codec": "hive.compression-codec",
    "file_system_max_cache_size": "hive.fs.cache.max-size",
    "hdfs_wire_encryption_enabled": "hive.hdfs.wire-encryption.enabled",
    "text_max_line_length": "hive.text.max-line-length",
    "resource_config_files": "hive.config.resources",
}


def _build_aliases() -> Dict[str, str]:
    aliases: Dict[str, str] = {}
    for f in fields(HdfsSettings):
        aliases[f.name] = f.name
        aliases[f.name.replace("_", "-")] = f.name
        aliases[HIVE_PROPERTY_NAMES[f.name]] = f.name
    return aliases


def _flatten_raw(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in data.items():
        _expect(isinstance(key, str), f"setting names must be strings, got: {key!r}")
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping):
            result.update(_flatten_raw(value, full_key))
        else:
            result[full_key] = value
    return result


def _int32(value: Any, name: str) -> int:
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value.strip())
    _expect(
        isinstance(value, int) and not isinstance(value, bool),
        f"{name} must be an integer, got: {value!r}",
    )
    _expect(INT32_MIN <= value <= INT32_MAX, f"{name} overflows a 32-bit integer: {value}")
    return value


def _bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise InvalidConfigurationError(f"{name} must be a boolean, got: {value!r}")


def _paths(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(p.strip() for p in value.split(",") if p.strip())
    if isinstance(value, Iterable):
        result = []
        for p in value:
            _expect(isinstance(p, (str, Path)), f"resource_config_files entries must be paths, got: {p!r}")
            result.append(str(p))
        return tuple(result)
    raise InvalidConfigurationError(f"resource_config_files must be a list of paths, got: {value!r}")


_FIELD_ALIASES = _build_aliases()
