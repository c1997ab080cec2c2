# src/hdfsconf/core/config/errors.py
"""
Exceções canônicas da camada de configuração do hdfsconf.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a validação de settings, a leitura de arquivos de recurso e a resolução
da configuração do cliente HDFS.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Todo erro de configuração é fatal (não existe modo best-effort)
    - Mensagens de erro são claras e direcionadas ao operador

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Falhas de initializers de extensão NÃO são encapsuladas aqui;
      elas se propagam sem modificação para o chamador

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende do orquestrador nem do sink
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do cliente HDFS.

    Todas as exceções levantadas durante validação de settings, leitura
    de recursos e merge de configuração devem herdar desta classe.
    """


class InvalidConfigurationError(ConfigError, ValueError):
    """
    Exceção levantada quando um valor de settings está fora do domínio permitido.

    Exemplos:
        - dfs_timeout menor que 1 ms
        - text_max_line_length menor que 1 byte
        - duração ou tamanho que não cabe em um inteiro de 32 bits
        - nome de codec de compressão desconhecido

    Invariantes:
        - Nenhuma instância de settings é produzida após este erro
    """


class ResourceLoadError(ConfigError):
    """
    Exceção base para falhas de leitura de arquivos de recurso.

    Um único recurso ilegível invalida toda a derivação: a configuração
    base nunca é produzida parcialmente.
    """


class ResourceNotFoundError(ResourceLoadError):
    """Arquivo de recurso (ou de settings) não encontrado no caminho informado."""


class UnsupportedResourceFormatError(ResourceLoadError):
    """
    Exceção levantada quando a extensão do arquivo não é suportada.

    Formatos suportados:
        - Hadoop XML (.xml)
        - Java properties (.properties)
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidResourceError(ResourceLoadError):
    """Conteúdo do recurso não pôde ser interpretado ou não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"dfs": {"timeout": "60s"}}
        - override: {"dfs": "10s"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class UnreadableResourceError(ResourceLoadError):
    """
    O caminho existe mas não pôde ser lido (permissão, diretório, falha de I/O).

    A causa original (`OSError`) é preservada em `__cause__`.
    """
