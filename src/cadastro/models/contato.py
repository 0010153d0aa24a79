from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import AuditMixin, Base


class Contato(AuditMixin, Base):
    __tablename__ = "contato"

    associado_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    tipo: Mapped[int] = mapped_column(Integer, nullable=False)
    descricao: Mapped[str] = mapped_column(String(150), nullable=False)
