# tests/core/sink/test_configuration_sink.py
"""
Testes do ConfigurationSink.

Os testes asseguram que:
- valores são armazenados sempre como texto
- escritas tipadas seguem a representação do cliente HDFS
- "definir se ausente" respeita valores já presentes
- classes são registradas pelo nome qualificado e resolvidas de volta
- o registro de eventos é estruturado e filtrável por origem
"""

import pytest

from hdfsconf.core.sink import ConfigurationSink, qualified_name
from hdfsconf.core.topology import DNSToSwitchMapping, NoOpDNSToSwitchMapping


def test_initial_properties_are_stringified():
    sink = ConfigurationSink({"dfs.replication": 3})
    assert sink["dfs.replication"] == "3"
    assert len(sink) == 1
    assert "dfs.replication" in sink


def test_set_rejects_non_string_values(sink):
    with pytest.raises(TypeError):
        sink.set("dfs.replication", 3)


def test_unset_removes_key_and_is_idempotent(sink):
    sink.set("a", "1")
    sink.unset("a")
    sink.unset("a")
    assert "a" not in sink
    assert sink.get("a") is None


def test_copy_from_overrides_existing_keys():
    sink = ConfigurationSink.from_mapping({"a": "1", "b": "2"})
    sink.copy_from({"b": "3", "c": "4"})
    assert sink.to_dict() == {"a": "1", "b": "3", "c": "4"}
    assert list(sink) == ["a", "b", "c"]


def test_typed_int(sink):
    sink.set_int("ipc.ping.interval", 10000)
    assert sink.get("ipc.ping.interval") == "10000"
    assert sink.get_int("ipc.ping.interval") == 10000
    assert sink.get_int("missing", 7) == 7
    with pytest.raises(TypeError):
        sink.set_int("x", True)


def test_typed_boolean(sink):
    sink.set_boolean("dfs.encrypt.data.transfer", True)
    assert sink.get("dfs.encrypt.data.transfer") == "true"
    assert sink.get_boolean("dfs.encrypt.data.transfer") is True
    sink.set("weird", "maybe")
    assert sink.get_boolean("weird", default=True) is True


def test_set_boolean_if_unset(sink):
    assert sink.set_boolean_if_unset("dfs.client.read.shortcircuit", True) is True
    assert sink.get("dfs.client.read.shortcircuit") == "true"

    sink.set("dfs.client.read.shortcircuit", "false")
    assert sink.set_boolean_if_unset("dfs.client.read.shortcircuit", True) is False
    assert sink.get("dfs.client.read.shortcircuit") == "false"


def test_set_boolean_if_unset_respects_empty_value(sink):
    sink.set("flag", "")
    assert sink.set_boolean_if_unset("flag", True) is False
    assert sink.get("flag") == ""


def test_strings(sink):
    sink.set_strings("dfs.domain.socket.path", "/var/run/a", "/var/run/b")
    assert sink.get("dfs.domain.socket.path") == "/var/run/a,/var/run/b"
    assert sink.get_strings("dfs.domain.socket.path") == ["/var/run/a", "/var/run/b"]
    assert sink.get_strings("missing") == []


def test_set_class_and_get_class_round_trip(sink):
    sink.set_class("net.topology.node.switch.mapping.impl", NoOpDNSToSwitchMapping, DNSToSwitchMapping)
    assert sink.get("net.topology.node.switch.mapping.impl") == qualified_name(NoOpDNSToSwitchMapping)
    assert sink.get_class("net.topology.node.switch.mapping.impl") is NoOpDNSToSwitchMapping


def test_set_class_checks_interface(sink):
    class NotAMapping:
        pass

    with pytest.raises(TypeError):
        sink.set_class("net.topology.node.switch.mapping.impl", NotAMapping, DNSToSwitchMapping)
    assert "net.topology.node.switch.mapping.impl" not in sink


def test_get_class_unresolvable_raises(sink):
    sink.set("k", "org.apache.hadoop.net.SocksSocketFactory")
    with pytest.raises(ImportError):
        sink.get_class("k")


def test_log_records_structured_events(sink):
    sink.log(source="hdfs", level="info", message="hello", step=1)
    sink.log(source="other", level="info", message="x")

    assert len(sink.events) == 2
    event = sink.events[0]
    assert event["source"] == "hdfs"
    assert event["level"] == "info"
    assert event["message"] == "hello"
    assert event["step"] == 1
    assert "timestamp" in event
    assert [e["message"] for e in sink.events_for("hdfs")] == ["hello"]


def test_set_class_requires_every_protocol_method(sink):
    class ResolveOnly:
        def resolve(self, names):
            return []

    class FullMapping(ResolveOnly):
        def reload_cached_mappings(self, names=None):
            return None

    with pytest.raises(TypeError):
        sink.set_class("topology.impl", ResolveOnly, DNSToSwitchMapping)
    sink.set_class("topology.impl", FullMapping, DNSToSwitchMapping)
    assert sink.get("topology.impl").endswith("FullMapping")


def test_set_class_with_plain_base_class(sink):
    class Base:
        pass

    class Child(Base):
        pass

    sink.set_class("impl", Child, Base)
    assert sink.get("impl") == qualified_name(Child)
    with pytest.raises(TypeError):
        sink.set_class("impl", Base, Child)
