from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import AuditMixin, Base, active_unique_indexes
from ..schemas.entities import DEPENDENTE_FIELDS


class Dependente(AuditMixin, Base):
    """
    Dependent of a member: a person (tipo=1) or a pet (tipo=2).
    """
    __tablename__ = "dependente"
    __table_args__ = active_unique_indexes(__tablename__, DEPENDENTE_FIELDS)

    associado_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    parentesco_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    raca_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    especie_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    situacao_id: Mapped[int] = mapped_column(Integer, nullable=False)

    nome: Mapped[str] = mapped_column(String(100), nullable=False)
    cpf: Mapped[str | None] = mapped_column(String(11), nullable=True)

    # Pets only
    altura: Mapped[float | None] = mapped_column(Numeric(6, 2, asdecimal=False), nullable=True)
    peso: Mapped[float | None] = mapped_column(Numeric(6, 2, asdecimal=False), nullable=True)
    cor: Mapped[str | None] = mapped_column(String(50), nullable=True)
    porte: Mapped[str | None] = mapped_column(String(2), nullable=True)

    data_nascimento: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    data_filiacao: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    data_falecimento: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    data_inicio_carencia: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    data_fim_carencia: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    tipo: Mapped[int] = mapped_column(Integer, nullable=False)

    cremacao: Mapped[bool] = mapped_column(Boolean, nullable=False)
    filiacao_cremacao: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    data_inicio_carencia_cremacao: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    data_fim_carencia_cremacao: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    cadastro_cremacao: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    usuario_cremacao: Mapped[str | None] = mapped_column(String(100), nullable=True)
