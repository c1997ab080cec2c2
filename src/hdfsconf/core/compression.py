# src/hdfsconf/core/compression.py
"""
Codecs de compressão e mapeamento para chaves por formato de serialização.

Cada formato (Text/RCFile, ORC, Parquet, SequenceFile) possui seu próprio
interruptor de compressão, com semântica própria para "desligado":
alguns exigem um sentinela explícito (ORC "NONE", Parquet "UNCOMPRESSED"),
outros apenas um booleano. Por isso cada chave é definida de forma
independente, e não derivada de um único flag compartilhado.

Componentes principais:
    - HiveCompressionCodec → enum de codecs com identificadores por formato
    - configure_compression → aplica o codec sobre um ConfigurationSink
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from hdfsconf.core import keys
from hdfsconf.core.config.errors import InvalidConfigurationError
from hdfsconf.core.sink import ConfigurationSink


@dataclass(frozen=True)
class CodecFormats:
    """Identificadores de um codec em cada formato de saída."""

    codec_class: Optional[str]
    orc_compression_kind: str
    parquet_compression_codec: str


class HiveCompressionCodec(str, Enum):
    """
    Codec de compressão escolhido nos settings.

    O valor textual do enum é o identificador genérico do codec; os
    identificadores específicos de cada formato são expostos como
    propriedades (`codec_class`, `orc_compression_kind`,
    `parquet_compression_codec`).

    Invariantes:
        - Apenas NONE não possui classe de codec nativa
        - ORC e Parquet sempre possuem um identificador, inclusive para NONE
    """

    NONE = "NONE"
    SNAPPY = "SNAPPY"
    LZ4 = "LZ4"
    ZSTD = "ZSTD"
    GZIP = "GZIP"

    @property
    def formats(self) -> CodecFormats:
        return _CODEC_FORMATS[self]

    @property
    def codec_class(self) -> Optional[str]:
        return self.formats.codec_class

    @property
    def orc_compression_kind(self) -> str:
        return self.formats.orc_compression_kind

    @property
    def parquet_compression_codec(self) -> str:
        return self.formats.parquet_compression_codec

    @classmethod
    def from_name(cls, name: "str | HiveCompressionCodec") -> "HiveCompressionCodec":
        """Resolve um codec pelo nome, sem diferenciar maiúsculas de minúsculas."""
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            try:
                return cls(name.strip().upper())
            except ValueError:
                pass
        allowed = ", ".join(c.value for c in cls)
        raise InvalidConfigurationError(
            f"compression_codec must be one of {{{allowed}}}, got: {name!r}"
        )


_HADOOP_CODEC_PACKAGE = "org.apache.hadoop.io.compress"

_CODEC_FORMATS: Dict[HiveCompressionCodec, CodecFormats] = {
    HiveCompressionCodec.NONE: CodecFormats(None, "NONE", "UNCOMPRESSED"),
    HiveCompressionCodec.SNAPPY: CodecFormats(f"{_HADOOP_CODEC_PACKAGE}.SnappyCodec", "SNAPPY", "SNAPPY"),
    HiveCompressionCodec.LZ4: CodecFormats(f"{_HADOOP_CODEC_PACKAGE}.Lz4Codec", "LZ4", "LZ4"),
    HiveCompressionCodec.ZSTD: CodecFormats(f"{_HADOOP_CODEC_PACKAGE}.ZStandardCodec", "ZSTD", "ZSTD"),
    HiveCompressionCodec.GZIP: CodecFormats(f"{_HADOOP_CODEC_PACKAGE}.GzipCodec", "ZLIB", "GZIP"),
}


def configure_compression(config: ConfigurationSink, compression_codec: HiveCompressionCodec) -> None:
    """
    Aplica o codec sobre todas as chaves de compressão por formato.

    Política (v1):
        - flags genéricos e de Text: `True` sse o codec não é NONE
        - ORC: sempre recebe o kind do codec (inclusive "NONE")
        - RCFile/Text: classe nativa quando existe; caso contrário as duas
          chaves de classe são removidas (nunca fica valor obsoleto)
        - Parquet: sempre recebe o nome do codec (inclusive "UNCOMPRESSED")
        - SequenceFile: granularidade fixa BLOCK

    Args:
        config (ConfigurationSink): Sink de destino (mutado in-place).
        compression_codec (HiveCompressionCodec): Codec escolhido.
    """
    compression = compression_codec is not HiveCompressionCodec.NONE
    config.set_boolean(keys.HIVE_COMPRESS_RESULT_KEY, compression)
    config.set_boolean(keys.MAPRED_OUTPUT_COMPRESS_KEY, compression)
    config.set_boolean(keys.FILE_OUTPUT_FORMAT_COMPRESS_KEY, compression)
    # ORC
    config.set(keys.ORC_COMPRESS_KEY, compression_codec.orc_compression_kind)
    # RCFile e Text
    codec_class = compression_codec.codec_class
    if codec_class is not None:
        config.set(keys.MAPRED_OUTPUT_COMPRESSION_CODEC_KEY, codec_class)
        config.set(keys.FILE_OUTPUT_FORMAT_COMPRESS_CODEC_KEY, codec_class)
    else:
        config.unset(keys.MAPRED_OUTPUT_COMPRESSION_CODEC_KEY)
        config.unset(keys.FILE_OUTPUT_FORMAT_COMPRESS_CODEC_KEY)
    # Parquet
    config.set(keys.PARQUET_COMPRESSION_KEY, compression_codec.parquet_compression_codec)
    # SequenceFile
    config.set(keys.FILE_OUTPUT_FORMAT_COMPRESS_TYPE_KEY, keys.SEQUENCE_FILE_COMPRESSION_TYPE_BLOCK)
