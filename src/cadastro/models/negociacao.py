from sqlalchemy import Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import AuditMixin, Base
from .column_types import Money


class Negociacao(AuditMixin, Base):
    """Debt renegotiation; its installments live in `parcela`."""
    __tablename__ = "negociacao"

    associado_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    cobrador_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tipo: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False)
    motivo: Mapped[str | None] = mapped_column(Text, nullable=True)

    valor_total: Mapped[float] = mapped_column(Money, nullable=False)
    valor_desconto: Mapped[float | None] = mapped_column(Money, nullable=True)
    porcentagem_desconto: Mapped[float | None] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=True)
    valor_pagar: Mapped[float] = mapped_column(Money, nullable=False)
    porcentagem_permitida: Mapped[float | None] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=True)
    quantidade_parcela: Mapped[int] = mapped_column(Integer, nullable=False)
