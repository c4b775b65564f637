"""
Criação preguiçosa do engine do SQLAlchemy.

Sem DATABASE_URL o pipeline continua funcionando: quem depende do banco
recebe None e apenas registra um aviso.
"""

from typing import Optional

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from prf_acidentes.config.settings import get_database_url

_engine: Optional[Engine] = None


def get_engine(database_url: Optional[str] = None) -> Optional[Engine]:
    """Retorna o engine do banco, criando-o na primeira chamada.

    Parameters
    ----------
    database_url : Optional[str], optional
        Url do banco; quando omitida, lê DATABASE_URL, by default None

    Returns
    -------
    Optional[Engine]
        Engine ou None se o banco não estiver configurado ou não puder ser criado.
    """
    global _engine

    if database_url is not None:
        return _create_engine(database_url)

    if _engine is None:
        url = get_database_url()
        if url is None:
            logger.warning("[Database] DATABASE_URL não definida.")
            return None
        _engine = _create_engine(url)

    return _engine


def reset_engine() -> None:
    global _engine

    if _engine is not None:
        _engine.dispose()
    _engine = None


def _create_engine(url: str) -> Optional[Engine]:
    try:
        return create_engine(url, pool_pre_ping=True)
    except (SQLAlchemyError, ImportError, ValueError) as error:
        logger.warning(f"[Database] Falha ao conectar: {error}")
        return None
