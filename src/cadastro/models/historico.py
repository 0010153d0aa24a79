from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import AuditMixin, Base


class Historico(AuditMixin, Base):
    __tablename__ = "historico"

    associado_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    categoria_id: Mapped[int] = mapped_column(Integer, nullable=False)
    sub_categoria_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    descricao: Mapped[str] = mapped_column(Text, nullable=False)
