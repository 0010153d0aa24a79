from datetime import datetime

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import AuditMixin, Base


class Atendimento(AuditMixin, Base):
    __tablename__ = "atendimento"

    associado_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    tipo_atendimento_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sub_tipo_atendimento_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    data_contato: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    data_retorno: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # 0: open, 1: in progress, 2: closed
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    inicio_atendimento: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    fim_atendimento: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
