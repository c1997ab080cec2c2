# src/hdfsconf/core/keys.py
"""
Nomes canônicos das chaves de configuração de baixo nível.

Os valores espelham exatamente os nomes lidos pelo cliente HDFS, pelo
Hive e pelos writers ORC/Parquet; não devem ser renomeados.
"""

# Topologia / rede
NET_TOPOLOGY_NODE_SWITCH_MAPPING_IMPL_KEY = "net.topology.node.switch.mapping.impl"
HADOOP_RPC_SOCKET_FACTORY_CLASS_DEFAULT_KEY = "hadoop.rpc.socket.factory.class.default"
HADOOP_SOCKS_SERVER_KEY = "hadoop.socks.server"
SOCKS_SOCKET_FACTORY_CLASS = "org.apache.hadoop.net.SocksSocketFactory"

# Short-circuit reads
DFS_DOMAIN_SOCKET_PATH_KEY = "dfs.domain.socket.path"
DFS_CLIENT_READ_SHORTCIRCUIT_KEY = "dfs.client.read.shortcircuit"

# Timeouts / retries / caches
DFS_CLIENT_SOCKET_TIMEOUT_KEY = "dfs.client.socket-timeout"
IPC_PING_INTERVAL_KEY = "ipc.ping.interval"
IPC_CLIENT_CONNECT_TIMEOUT_KEY = "ipc.client.connect.timeout"
IPC_CLIENT_CONNECT_MAX_RETRIES_KEY = "ipc.client.connect.max.retries"
FS_CACHE_MAX_SIZE_KEY = "fs.cache.max-size"
DFS_CLIENT_KEY_PROVIDER_CACHE_EXPIRY_KEY = "dfs.client.key.provider.cache.expiry"
LINE_RECORD_READER_MAX_LINE_LENGTH_KEY = "mapreduce.input.linerecordreader.line.maxlength"

# Wire encryption
HADOOP_RPC_PROTECTION_KEY = "hadoop.rpc.protection"
RPC_PROTECTION_PRIVACY = "privacy"
DFS_ENCRYPT_DATA_TRANSFER_KEY = "dfs.encrypt.data.transfer"

# Compressão
HIVE_COMPRESS_RESULT_KEY = "hive.exec.compress.output"
MAPRED_OUTPUT_COMPRESS_KEY = "mapred.output.compress"
FILE_OUTPUT_FORMAT_COMPRESS_KEY = "mapreduce.output.fileoutputformat.compress"
ORC_COMPRESS_KEY = "orc.compress"
MAPRED_OUTPUT_COMPRESSION_CODEC_KEY = "mapred.output.compression.codec"
FILE_OUTPUT_FORMAT_COMPRESS_CODEC_KEY = "mapreduce.output.fileoutputformat.compress.codec"
PARQUET_COMPRESSION_KEY = "parquet.compression"
FILE_OUTPUT_FORMAT_COMPRESS_TYPE_KEY = "mapreduce.output.fileoutputformat.compress.type"
SEQUENCE_FILE_COMPRESSION_TYPE_BLOCK = "BLOCK"
