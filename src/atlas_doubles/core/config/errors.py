# src/atlas_doubles/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Atlas Doubles.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, o merge e a validação das settings do registry de
test doubles.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Nenhuma setting inválida é corrigida silenciosamente

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção aqui representa uso incorreto de um double
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Atlas Doubles.

    Permite captura genérica de falhas de configuração, distinta das
    falhas de uso do registry (ver `atlas_doubles.core.exceptions`).
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de defaults não é encontrado.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - O pacote distribui um defaults canônico (`config.defaults.yaml`)

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz da configuração não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"doubles": {"signature_policy": "strict"}}
        - override: {"doubles": "permissive"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSettingError(ConfigError):
    """
    Exceção levantada quando uma setting resolvida possui valor inválido.

    Exemplo:
        - doubles.signature_policy: "loose" (aceitos: strict, permissive)

    Limites explícitos:
        - Não realiza coerção de tipos
        - Não substitui o valor por um default
    """
