from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import AuditMixin, Base


class Agendamento(AuditMixin, Base):
    """Collection visit scheduled for a collector."""
    __tablename__ = "agendamento"

    associado_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    cobrador_id: Mapped[int] = mapped_column(Integer, nullable=False)
    tipo: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False)
    retorno: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    motivo: Mapped[str | None] = mapped_column(Text, nullable=True)
