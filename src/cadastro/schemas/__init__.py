from .fields import FieldType, FieldDescriptor, FieldSchema, make_schema, matches_type
from .entities import (
    ENDERECO_FIELDS,
    ASSOCIADO_FIELDS,
    DEPENDENTE_FIELDS,
    CARTAO_ASSOCIADO_FIELDS,
    ATENDIMENTO_FIELDS,
    AGENDAMENTO_FIELDS,
    CONTATO_FIELDS,
    HISTORICO_FIELDS,
    NEGOCIACAO_FIELDS,
    PARCELA_FIELDS,
)

__all__ = [
    "FieldType",
    "FieldDescriptor",
    "FieldSchema",
    "make_schema",
    "matches_type",
    "ENDERECO_FIELDS",
    "ASSOCIADO_FIELDS",
    "DEPENDENTE_FIELDS",
    "CARTAO_ASSOCIADO_FIELDS",
    "ATENDIMENTO_FIELDS",
    "AGENDAMENTO_FIELDS",
    "CONTATO_FIELDS",
    "HISTORICO_FIELDS",
    "NEGOCIACAO_FIELDS",
    "PARCELA_FIELDS",
]
