"""
Persistência dos acidentes agregados por UF.

O repositório não faz commit; `load_accident_data` controla a transação.
"""

import json
from typing import List, Optional, Union

from loguru import logger
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from prf_acidentes.model.aggregator import AggregationResult, RegionSummary
from prf_acidentes.storage.database import get_engine
from prf_acidentes.storage.models import AccidentStats, Base


class AccidentStatsRepository:
    """
    Leitura e gravação das linhas de ``accident_stats``.

    Upsert: gravar uma UF já existente sobrescreve todos os totais e o
    ``data_json`` da linha em vez de gerar erro de chave duplicada.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def upsert(self, uf: str, summary: RegionSummary) -> AccidentStats:
        values = dict(
            total_accidents=summary.totals.total_acidentes,
            total_deaths=summary.totals.total_mortos,
            total_severe_injuries=summary.totals.total_feridos_graves,
            total_minor_injuries=summary.totals.total_feridos_leves,
            total_unharmed=summary.totals.total_ilesos,
            data_json=json.dumps(summary.to_blob(), ensure_ascii=False),
        )

        row = self.get(uf)
        if row is None:
            row = AccidentStats(uf=uf, **values)
            self._session.add(row)
        else:
            for key, value in values.items():
                setattr(row, key, value)

        self._session.flush()
        return row

    def get(self, uf: str) -> Optional[AccidentStats]:
        stmt = select(AccidentStats).where(AccidentStats.uf == uf).limit(1)
        return self._session.scalars(stmt).first()

    def list_all(self) -> List[AccidentStats]:
        stmt = select(AccidentStats).order_by(AccidentStats.id)
        return list(self._session.scalars(stmt))


def create_tables(engine: Engine) -> None:
    Base.metadata.create_all(engine)


def load_accident_data(result: AggregationResult, engine: Optional[Engine] = None) -> bool:
    """Grava no banco uma linha por UF do resultado da agregação.

    Parameters
    ----------
    result : AggregationResult
        Resultado da agregação.
    engine : Optional[Engine], optional
        Engine do banco; quando omitido, usa `get_engine()`, by default None

    Returns
    -------
    bool
        True se os dados foram gravados; False se o banco não estiver disponível.
    """
    if engine is None:
        engine = get_engine()
    if engine is None:
        logger.warning("[Database] Banco indisponível: carga dos acidentes ignorada.")
        return False

    try:
        create_tables(engine)
        with Session(engine) as session, session.begin():
            repository = AccidentStatsRepository(session)
            for uf, summary in result.regions.items():
                repository.upsert(uf, summary)
    except SQLAlchemyError as error:
        logger.error(f"[Database] Falha ao carregar os acidentes: {error}")
        raise

    logger.info(f"[Database] {len(result.regions)} UFs carregadas com sucesso.")
    return True


def get_accident_stats(
    uf: Optional[str] = None, engine: Optional[Engine] = None
) -> Union[AccidentStats, List[AccidentStats], None]:
    """Consulta as estatísticas de uma UF ou de todas.

    Returns
    -------
    Union[AccidentStats, List[AccidentStats], None]
        A linha da UF (ou None se não existir), a lista de todas as linhas,
        ou None se o banco não estiver disponível.
    """
    if engine is None:
        engine = get_engine()
    if engine is None:
        logger.warning("[Database] Banco indisponível: consulta ignorada.")
        return None

    try:
        with Session(engine, expire_on_commit=False) as session:
            repository = AccidentStatsRepository(session)
            if uf:
                return repository.get(uf)
            return repository.list_all()
    except SQLAlchemyError as error:
        logger.error(f"[Database] Falha ao consultar os acidentes: {error}")
        raise
