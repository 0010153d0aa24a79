"""
Entity catalogue.

An EntityDescriptor ties together everything the generic layers need to serve one
entity: its ORM model, its FieldSchema and its normalization hooks. The repository's
column whitelist is derived from the schema plus the identity and audit columns.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Type

from sqlalchemy.ext.asyncio import AsyncSession

from ..database.base import AUDIT_COLUMNS, IDENTITY_COLUMN, Base
from ..models import (
    Agendamento,
    Associado,
    Atendimento,
    CartaoAssociado,
    Contato,
    Dependente,
    Historico,
    Negociacao,
    Parcela,
)
from ..repositories import DependenteRepository, EntityRepository
from ..schemas.entities import (
    AGENDAMENTO_FIELDS,
    ASSOCIADO_FIELDS,
    ATENDIMENTO_FIELDS,
    CARTAO_ASSOCIADO_FIELDS,
    CONTATO_FIELDS,
    DEPENDENTE_FIELDS,
    HISTORICO_FIELDS,
    NEGOCIACAO_FIELDS,
    PARCELA_FIELDS,
)
from ..schemas.fields import FieldSchema
from ..validators.normalizers import (
    Normalizer,
    format_decimal,
    format_digits,
    format_object,
    format_string,
)


@dataclass(frozen=True)
class EntityDescriptor:
    name: str
    model: Type[Base]
    fields: FieldSchema
    normalizers: Mapping[str, Normalizer] = field(default_factory=dict)
    repository_class: Type[EntityRepository] = EntityRepository

    @property
    def writable_columns(self) -> frozenset[str]:
        return frozenset(self.fields)

    @property
    def columns(self) -> frozenset[str]:
        return self.writable_columns | AUDIT_COLUMNS | {IDENTITY_COLUMN}

    def repository(self, db: AsyncSession) -> EntityRepository:
        return self.repository_class(
            self.model,
            db,
            columns=self.columns,
            writable=self.writable_columns,
            normalizers=self.normalizers,
        )


_format_endereco = format_object({
    "cep": format_digits,
    "estado": format_string,
    "rua": format_string,
    "logradouro": format_string,
    "quadra": format_string,
    "lote": format_string,
    "numero": format_string,
    "complemento": format_string,
})

_DESCRIPTORS = (
    EntityDescriptor(
        name="associado",
        model=Associado,
        fields=ASSOCIADO_FIELDS,
        normalizers={
            "nome": format_string,
            "rg": format_digits,
            "cpf_cnpj": format_digits,
            "naturalidade": format_string,
            "profissao": format_string,
            "usuario_cremacao": format_string,
            "empresa_anterior": format_string,
            "endereco": _format_endereco,
            "endereco_cobranca": _format_endereco,
        },
    ),
    EntityDescriptor(
        name="dependente",
        model=Dependente,
        fields=DEPENDENTE_FIELDS,
        normalizers={
            "nome": format_string,
            "cpf": format_digits,
            "altura": format_decimal,
            "peso": format_decimal,
            "cor": format_string,
            "porte": format_string,
            "usuario_cremacao": format_string,
        },
        repository_class=DependenteRepository,
    ),
    EntityDescriptor(
        name="cartao_associado",
        model=CartaoAssociado,
        fields=CARTAO_ASSOCIADO_FIELDS,
        normalizers={"valor_pagar": format_decimal},
    ),
    EntityDescriptor(name="atendimento", model=Atendimento, fields=ATENDIMENTO_FIELDS),
    EntityDescriptor(name="agendamento", model=Agendamento, fields=AGENDAMENTO_FIELDS),
    EntityDescriptor(name="contato", model=Contato, fields=CONTATO_FIELDS),
    EntityDescriptor(name="historico", model=Historico, fields=HISTORICO_FIELDS),
    EntityDescriptor(
        name="negociacao",
        model=Negociacao,
        fields=NEGOCIACAO_FIELDS,
        normalizers={
            "valor_total": format_decimal,
            "valor_desconto": format_decimal,
            "valor_pagar": format_decimal,
        },
    ),
    EntityDescriptor(
        name="parcela",
        model=Parcela,
        fields=PARCELA_FIELDS,
        normalizers={
            "valor_pagar": format_decimal,
            "valor_parcela": format_decimal,
            "valor_adicional": format_decimal,
            "valor_adesao": format_decimal,
            "valor_pago": format_decimal,
        },
    ),
)

REGISTRY: Mapping[str, EntityDescriptor] = MappingProxyType({d.name: d for d in _DESCRIPTORS})


def get_descriptor(name: str) -> EntityDescriptor:
    """
    Raises:
        KeyError: no entity is registered under `name`.
    """
    try:
        return REGISTRY[name]
    except KeyError:
        raise KeyError(f"Unknown entity '{name}'. Registered: {', '.join(sorted(REGISTRY))}") from None
