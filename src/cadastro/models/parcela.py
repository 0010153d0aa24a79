from datetime import datetime

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import AuditMixin, Base
from .column_types import Money


class Parcela(AuditMixin, Base):
    __tablename__ = "parcela"

    associado_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    negociacao_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    pagamento: Mapped[int | None] = mapped_column(Integer, nullable=True)

    data_vencimento: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    data_pagamento: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    valor_pagar: Mapped[float] = mapped_column(Money, nullable=False)
    valor_parcela: Mapped[float] = mapped_column(Money, nullable=False)
    valor_adicional: Mapped[float | None] = mapped_column(Money, nullable=True)
    valor_adesao: Mapped[float | None] = mapped_column(Money, nullable=True)
    valor_pago: Mapped[float | None] = mapped_column(Money, nullable=True)
    tipo: Mapped[int] = mapped_column(Integer, nullable=False)
