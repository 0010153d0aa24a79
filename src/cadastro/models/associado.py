from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import AuditMixin, Base, active_unique_indexes
from ..schemas.entities import ASSOCIADO_FIELDS
from .column_types import JSONType


class Associado(AuditMixin, Base):
    """
    Member (titular) of a plan.

    Residential and billing addresses are stored as JSON objects validated against
    ENDERECO_FIELDS.
    """
    __tablename__ = "associado"
    __table_args__ = active_unique_indexes(__tablename__, ASSOCIADO_FIELDS)

    unidade_id: Mapped[int] = mapped_column(Integer, nullable=False)
    situacao_id: Mapped[int] = mapped_column(Integer, nullable=False)

    nome: Mapped[str] = mapped_column(String(150), nullable=False)
    rg: Mapped[str] = mapped_column(String(30), nullable=False)

    # Unique among active members (partial index)
    cpf_cnpj: Mapped[str | None] = mapped_column(String(14), nullable=True)

    data_nascimento: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    data_falecimento: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    estado_civil_id: Mapped[int] = mapped_column(Integer, nullable=False)
    religiao_id: Mapped[int] = mapped_column(Integer, nullable=False)
    naturalidade: Mapped[str | None] = mapped_column(String(100), nullable=True)
    nacionalidade: Mapped[bool] = mapped_column(Boolean, nullable=False)
    profissao: Mapped[str | None] = mapped_column(String(100), nullable=True)
    sexo: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cremacao: Mapped[bool] = mapped_column(Boolean, nullable=False)
    adicional_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    filiacao_cremacao: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    data_inicio_carencia_cremacao: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    data_fim_carencia_cremacao: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    cadastro_cremacao: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    usuario_cremacao: Mapped[str | None] = mapped_column(String(100), nullable=True)
    situacao_cremacao_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Unique among active members (partial index)
    contrato: Mapped[int] = mapped_column(Integer, nullable=False)
    contrato_cemiterio: Mapped[int | None] = mapped_column(Integer, nullable=True)

    endereco: Mapped[dict] = mapped_column(JSONType, nullable=False)
    endereco_comercial: Mapped[bool] = mapped_column(Boolean, nullable=False)
    endereco_cobranca: Mapped[dict] = mapped_column(JSONType, nullable=False)

    plano_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    data_contrato: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    data_inicio_carencia: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    data_fim_carencia: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    data_primeira_parcela: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    dia_pagamento: Mapped[int | None] = mapped_column(Integer, nullable=True)
    ultimo_pagamento: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    ultimo_mes_pago: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    cobrador_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    regiao_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rota_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cobrador_temporario_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    regiao_temporaria_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rota_temporaria_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    vendedor_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    concorrente_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    data_cancelamento: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    data_quitacao: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    data_contrato_anterior: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    ultimo_mes_pago_anterior: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    empresa_anterior: Mapped[str | None] = mapped_column(String(150), nullable=True)

    observacao: Mapped[str | None] = mapped_column(Text, nullable=True)

    local_cobranca: Mapped[int] = mapped_column(Integer, nullable=False)
    # Only the time part is meaningful
    horario_cobranca: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    termo_reajuste: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    boleto_entregue: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    tipo_entrega_boleto: Mapped[int] = mapped_column(Integer, nullable=False)
