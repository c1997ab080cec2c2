# src/hdfsconf/core/config/__init__.py

"""
Camada de configuração do hdfsconf.

Responsabilidades do pacote:
    - Leitura de arquivos de recurso (XML, properties, YAML, JSON)
    - Merge determinístico de propriedades (o posterior vence)
    - Deep-merge de arquivos de settings (defaults + local)
    - Hierarquia de erros de configuração

Invariantes:
    - A configuração base é um mapa somente leitura de string → string
    - Conflitos estruturais e recursos ilegíveis são tratados como erro fatal
"""
