# tests/core/engine/test_hdfs_initialize.py
"""
Testes das regras de derivação aplicadas por `initialize`.

Os testes asseguram que:
- timeouts, retries, caches e tamanho de linha são sempre sobrescritos
- o stub de topologia é instalado incondicionalmente
- proxy e wire encryption só tocam suas chaves quando habilitados
- short-circuit reads são habilitados apenas se ainda não configurados
- o mapeamento de compressão é aplicado depois das regras anteriores

Invariantes:
    - Chaves não mencionadas pelas regras preservam o valor base
    - O resultado depende apenas de (base, settings, initializers)
"""

import pytest

try:
    from hdfsconf.core import keys
    from hdfsconf.core.compression import HiveCompressionCodec
    from hdfsconf.core.engine.hdfs import initialize
    from hdfsconf.core.settings.hdfs import HdfsSettings
    from hdfsconf.core.sink import ConfigurationSink, qualified_name
    from hdfsconf.core.topology import NoOpDNSToSwitchMapping
except Exception as e:  # noqa: BLE001
    initialize = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing engine module. Implement:\n"
            "- src/hdfsconf/core/engine/hdfs.py (initialize)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _derive(settings, base=None, **kwargs):
    sink = ConfigurationSink()
    initialize(sink, base or {}, settings, **kwargs)
    return sink


def test_numeric_keys_from_settings():
    _require_imports()
    settings = HdfsSettings(
        dfs_timeout="60s",
        ipc_ping_interval="10s",
        dfs_connect_timeout="500ms",
        dfs_connect_max_retries=5,
        file_system_max_cache_size=1000,
        dfs_key_provider_cache_ttl="30m",
        text_max_line_length="100MB",
    )
    sink = _derive(settings)

    assert sink.get("dfs.client.socket-timeout") == "60000"
    assert sink.get("ipc.ping.interval") == "10000"
    assert sink.get("ipc.client.connect.timeout") == "500"
    assert sink.get("ipc.client.connect.max.retries") == "5"
    assert sink.get("fs.cache.max-size") == "1000"
    assert sink.get("dfs.client.key.provider.cache.expiry") == "1800000"
    assert sink.get("mapreduce.input.linerecordreader.line.maxlength") == "104857600"


def test_numeric_keys_override_base_values(settings):
    _require_imports()
    sink = _derive(settings, {"ipc.ping.interval": "99999", "fs.cache.max-size": "1"})
    assert sink.get("ipc.ping.interval") == "10000"
    assert sink.get("fs.cache.max-size") == "1000"


def test_durations_are_truncated():
    _require_imports()
    sink = _derive(HdfsSettings(dfs_connect_timeout="1500us"))
    assert sink.get("ipc.client.connect.timeout") == "1"


def test_unrelated_base_keys_are_preserved(settings):
    _require_imports()
    sink = _derive(settings, {"fs.defaultFS": "hdfs://namenode:8020"})
    assert sink.get("fs.defaultFS") == "hdfs://namenode:8020"


def test_topology_stub_is_always_installed(settings):
    _require_imports()
    sink = _derive(settings, {keys.NET_TOPOLOGY_NODE_SWITCH_MAPPING_IMPL_KEY: "org.apache.hadoop.net.ScriptBasedMapping"})
    assert sink.get("net.topology.node.switch.mapping.impl") == qualified_name(NoOpDNSToSwitchMapping)
    assert sink.get_class("net.topology.node.switch.mapping.impl") is NoOpDNSToSwitchMapping


def test_socks_proxy_configured():
    _require_imports()
    sink = _derive(HdfsSettings(socks_proxy="proxy.example:1080"))
    assert sink.get("hadoop.rpc.socket.factory.class.default") == "org.apache.hadoop.net.SocksSocketFactory"
    assert sink.get("hadoop.socks.server") == "proxy.example:1080"


def test_socks_proxy_absent_leaves_base_untouched(settings):
    _require_imports()
    base = {
        "hadoop.rpc.socket.factory.class.default": "org.apache.hadoop.net.StandardSocketFactory",
        "hadoop.socks.server": "old:1",
    }
    sink = _derive(settings, base)
    assert sink.get("hadoop.rpc.socket.factory.class.default") == "org.apache.hadoop.net.StandardSocketFactory"
    assert sink.get("hadoop.socks.server") == "old:1"

    assert "hadoop.socks.server" not in _derive(settings)


def test_domain_socket_enables_short_circuit():
    _require_imports()
    sink = _derive(HdfsSettings(domain_socket_path="/var/run/hdfs/dn_socket"))
    assert sink.get("dfs.domain.socket.path") == "/var/run/hdfs/dn_socket"
    assert sink.get("dfs.client.read.shortcircuit") == "true"


def test_domain_socket_keeps_explicit_short_circuit_false():
    _require_imports()
    sink = _derive(
        HdfsSettings(domain_socket_path="/var/run/hdfs/dn_socket"),
        {"dfs.client.read.shortcircuit": "false"},
    )
    assert sink.get("dfs.client.read.shortcircuit") == "false"


def test_domain_socket_from_base_enables_short_circuit(settings):
    _require_imports()
    sink = _derive(settings, {"dfs.domain.socket.path": "/var/run/hdfs/dn_socket"})
    assert sink.get("dfs.client.read.shortcircuit") == "true"


@pytest.mark.parametrize("path", [None, "", "   "])
def test_absent_or_blank_domain_socket_does_not_force_short_circuit(path):
    _require_imports()
    sink = _derive(HdfsSettings(domain_socket_path=path))
    assert "dfs.client.read.shortcircuit" not in sink


def test_blank_domain_socket_is_still_written():
    _require_imports()
    sink = _derive(HdfsSettings(domain_socket_path=""), {"dfs.domain.socket.path": "/old"})
    assert sink.get("dfs.domain.socket.path") == ""


def test_wire_encryption_enabled():
    _require_imports()
    sink = _derive(HdfsSettings(hdfs_wire_encryption_enabled=True))
    assert sink.get("hadoop.rpc.protection") == "privacy"
    assert sink.get("dfs.encrypt.data.transfer") == "true"


def test_wire_encryption_disabled_preserves_base(settings):
    _require_imports()
    base = {"hadoop.rpc.protection": "authentication", "dfs.encrypt.data.transfer": "false"}
    sink = _derive(settings, base)
    assert sink.get("hadoop.rpc.protection") == "authentication"
    assert sink.get("dfs.encrypt.data.transfer") == "false"

    bare = _derive(settings)
    assert "hadoop.rpc.protection" not in bare
    assert "dfs.encrypt.data.transfer" not in bare


def test_default_compression_is_gzip(settings):
    _require_imports()
    sink = _derive(settings)
    assert sink.get("orc.compress") == "ZLIB"
    assert sink.get("parquet.compression") == "GZIP"
    assert sink.get("mapred.output.compression.codec") == "org.apache.hadoop.io.compress.GzipCodec"
    assert sink.get("mapreduce.output.fileoutputformat.compress.type") == "BLOCK"


def test_compression_mapper_is_pluggable_and_runs_after_rules(settings):
    _require_imports()
    seen = []

    def mapper(config, codec):
        seen.append((codec, config.get("ipc.ping.interval")))
        config.set("custom.codec", codec.value)

    sink = _derive(HdfsSettings(compression_codec="LZ4"), compression_mapper=mapper)
    assert seen == [(HiveCompressionCodec.LZ4, "10000")]
    assert sink.get("custom.codec") == "LZ4"
    assert "orc.compress" not in sink


def test_derivation_is_deterministic(settings):
    _require_imports()
    base = {"fs.defaultFS": "hdfs://namenode:8020"}
    assert _derive(settings, base).to_dict() == _derive(settings, base).to_dict()


def test_derivation_events_are_logged():
    _require_imports()
    sink = _derive(HdfsSettings(socks_proxy="p:1", domain_socket_path="/s", hdfs_wire_encryption_enabled=True))
    messages = [e["message"] for e in sink.events_for("hdfs")]
    assert messages == [
        "base configuration copied",
        "socks proxy configured",
        "short-circuit reads enabled",
        "wire encryption enabled",
        "compression configured",
    ]
