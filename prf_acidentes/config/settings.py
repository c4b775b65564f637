import os
from typing import Optional


def get_database_url() -> Optional[str]:
    """Lê a url do banco de dados da variável de ambiente DATABASE_URL.

    Returns
    -------
    Optional[str]
        Url do banco ou None quando a variável não está definida (ou vazia).
    """
    url = os.getenv("DATABASE_URL", "").strip()
    return url or None
