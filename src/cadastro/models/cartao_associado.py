from datetime import datetime

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import AuditMixin, Base
from .column_types import JSONType, Money


class CartaoAssociado(AuditMixin, Base):
    """Membership card issued for a member or one of their dependents."""
    __tablename__ = "cartao_associado"

    associado_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    dependente_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # List of payment ids covering the card fee
    pagamento: Mapped[list | None] = mapped_column(JSONType, nullable=True)
    data_pagamento: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    valor_pagar: Mapped[float] = mapped_column(Money, nullable=False)

    # 0: pending, 1: paid
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
