# src/hdfsconf/core/config/loader.py
"""
Loader canônico de arquivos de recurso e de settings do hdfsconf.

Este módulo é responsável por ler, validar estruturalmente e mesclar:
    - arquivos de recurso com propriedades de baixo nível do cliente HDFS
      (a "configuração base", semeada antes das regras derivadas)
    - arquivos de settings estruturados (YAML/JSON)

Formatos de recurso suportados (v1):
    - Hadoop XML (.xml)            → <configuration><property>...</property></configuration>
    - Java properties (.properties) → chave=valor / chave: valor
    - YAML (.yaml, .yml)            → mapas aninhados achatados com "."
    - JSON (.json)                  → idem YAML

Princípios fundamentais:
    - Recursos são lidos uma única vez, na construção do orquestrador
    - Um recurso ilegível ou malformado aborta toda a derivação
    - Arquivos posteriores sobrescrevem chaves de arquivos anteriores

Invariantes:
    - O resultado de `read_configuration` é um mapa somente leitura
    - Lista vazia de caminhos produz mapa vazio
    - Nenhuma configuração parcial é retornada em caso de erro

Limites explícitos:
    - Não aplica regras derivadas (responsabilidade do orquestrador)
    - Não resolve <include> nem substituição de variáveis do Hadoop
"""

from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple, Union
import json
import xml.etree.ElementTree as ElementTree

import yaml  # PyYAML

from .errors import (
    InvalidResourceError,
    ResourceNotFoundError,
    UnreadableResourceError,
    UnsupportedResourceFormatError,
)
from .merge import flatten_properties, merge_properties

PathLike = Union[str, Path]

_YAML_SUFFIXES = {".yaml", ".yml"}
_STRUCTURED_SUFFIXES = _YAML_SUFFIXES | {".json"}
_RESOURCE_SUFFIXES = _STRUCTURED_SUFFIXES | {".xml", ".properties"}


def _require_file(path: Path) -> None:
    if not path.exists():
        raise ResourceNotFoundError(f"Arquivo de recurso não encontrado: {path}")
    if not path.is_file():
        raise UnreadableResourceError(f"Recurso não é um arquivo regular: {path}")


def _unreadable(path: Path, e: OSError) -> UnreadableResourceError:
    return UnreadableResourceError(f"Não foi possível ler {path}: {e}")


def load_structured_file(path: PathLike) -> Dict[str, Any]:
    """
    Carrega um arquivo YAML ou JSON e valida que a raiz é um dicionário.

    Decisões arquiteturais:
        - Arquivos vazios são interpretados como dicionários vazios
        - Formatos não suportados geram erro explícito

    Args:
        path (PathLike): Caminho para o arquivo.

    Returns:
        Dict[str, Any]: Conteúdo do arquivo.

    Raises:
        ResourceNotFoundError: Se o arquivo não existir.
        UnsupportedResourceFormatError: Se a extensão não for YAML/JSON.
        UnreadableResourceError: Se o caminho não for um arquivo ou a leitura falhar.
        InvalidResourceError: Se o conteúdo não puder ser interpretado ou não for um dict.
    """
    path = Path(path)
    _require_file(path)

    suffix = path.suffix.lower()
    if suffix not in _STRUCTURED_SUFFIXES:
        raise UnsupportedResourceFormatError(f"Formato não suportado: {path.suffix}")

    try:
        with path.open("r", encoding="utf-8") as f:
            if suffix in _YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidResourceError(f"Conteúdo inválido em {path}: {e}") from e
    except OSError as e:
        raise _unreadable(path, e) from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidResourceError(
            f"Raiz do recurso deve ser dict, recebido: {type(data).__name__} ({path})"
        )

    return data


def _load_xml(path: Path) -> Dict[str, str]:
    try:
        root = ElementTree.parse(str(path)).getroot()
    except ElementTree.ParseError as e:
        raise InvalidResourceError(f"XML inválido em {path}: {e}") from e
    except OSError as e:
        raise _unreadable(path, e) from e

    if root.tag != "configuration":
        raise InvalidResourceError(
            f"Raiz XML deve ser <configuration>, recebido: <{root.tag}> ({path})"
        )

    properties: Dict[str, str] = {}
    for prop in root.iter("property"):
        name = prop.findtext("name")
        if name is None or not name.strip():
            raise InvalidResourceError(f"<property> sem <name> em {path}")
        value = prop.findtext("value")
        # o Hadoop ignora propriedades sem <value>; apenas <name> é aparado
        if value is None:
            continue
        properties[name.strip()] = value
    return properties


_PROPERTIES_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _unescape_properties(text: str) -> str:
    out = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\" or i + 1 >= len(text):
            out.append(ch)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u":
            code = text[i + 2 : i + 6]
            try:
                if len(code) != 4:
                    raise ValueError(code)
                out.append(chr(int(code, 16)))
            except ValueError as e:
                raise InvalidResourceError(f"Escape unicode malformado: \\u{code}") from e
            i += 6
            continue
        out.append(_PROPERTIES_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_property_line(line: str) -> Tuple[str, str]:
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in "=:" or ch.isspace():
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip()
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip()
    return _unescape_properties(key), _unescape_properties(rest)


def _load_properties(path: Path) -> Dict[str, str]:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidResourceError(f"Conteúdo inválido em {path}: {e}") from e
    except OSError as e:
        raise _unreadable(path, e) from e

    properties: Dict[str, str] = {}
    pending = ""
    for raw in text.splitlines():
        line = raw.lstrip()
        if not pending and (not line or line[0] in "#!"):
            continue
        # continuação: número ímpar de barras no fim da linha
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue
        line = pending + line
        pending = ""
        key, value = _split_property_line(line)
        if key:
            properties[key] = value
    if pending:
        key, value = _split_property_line(pending)
        if key:
            properties[key] = value
    return properties


def load_resource(path: PathLike) -> Dict[str, str]:
    """
    Carrega um único arquivo de recurso como propriedades planas (string → string).

    Raises:
        ResourceNotFoundError: Se o arquivo não existir.
        UnsupportedResourceFormatError: Se a extensão não for suportada.
        UnreadableResourceError: Se o caminho não for um arquivo ou a leitura falhar.
        InvalidResourceError: Se o conteúdo for malformado.
    """
    path = Path(path)
    _require_file(path)

    suffix = path.suffix.lower()
    if suffix not in _RESOURCE_SUFFIXES:
        raise UnsupportedResourceFormatError(f"Formato não suportado: {path.suffix}")

    if suffix == ".xml":
        return _load_xml(path)
    if suffix == ".properties":
        return _load_properties(path)
    return flatten_properties(load_structured_file(path))


def read_configuration(resource_paths: Iterable[PathLike]) -> Mapping[str, str]:
    """
    Lê e mescla arquivos de recurso, da esquerda para a direita.

    Para cada caminho, em ordem, suas propriedades são carregadas e
    aplicadas sobre o acumulador; valores posteriores sobrescrevem
    valores anteriores para chaves idênticas.

    Args:
        resource_paths (Iterable[PathLike]): Caminhos dos arquivos de recurso.

    Returns:
        Mapping[str, str]: Configuração base somente leitura.

    Raises:
        ResourceLoadError: Se qualquer recurso for ilegível ou malformado.
    """
    result: Dict[str, str] = {}
    for resource_path in resource_paths:
        result = merge_properties(result, load_resource(resource_path))
    return MappingProxyType(result)
