"""
Tabela com os acidentes agregados por UF.
Uma linha por UF; recarregar os dados sobrescreve a linha existente.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from prf_acidentes.config.params import UF_MAX_LEN


class Base(DeclarativeBase):
    pass


class AccidentStats(Base):
    """
    Totais de uma UF e, em ``data_json``, as seis tabelas de frequência::

        {"causas": [...], "dias": [...], "fases": [...],
         "condicoes": [...], "pistas": [...], "classificacoes": [...]}
    """

    __tablename__ = "accident_stats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uf: Mapped[str] = mapped_column(String(UF_MAX_LEN), nullable=False, unique=True)
    total_accidents: Mapped[int] = mapped_column(Integer, nullable=False)
    total_deaths: Mapped[int] = mapped_column(Integer, nullable=False)
    total_severe_injuries: Mapped[int] = mapped_column(Integer, nullable=False)
    total_minor_injuries: Mapped[int] = mapped_column(Integer, nullable=False)
    total_unharmed: Mapped[int] = mapped_column(Integer, nullable=False)
    data_json: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"AccidentStats(uf={self.uf!r}, total_accidents={self.total_accidents})"
