import json
from pathlib import Path
from typing import Any, Dict, Union

import pandas as pd
from loguru import logger


def trace_df(df: pd.DataFrame) -> pd.DataFrame:
    """Imprime as dimensões do data frame.

    Parameters
    ----------
    df : pd.DataFrame
        Base de dados.

    Returns
    -------
    pd.DataFrame
        Base de dados.
    """
    logger.info(f"shape: {df.shape}")
    return df


def write_document(document: Dict[str, Any], path: Union[str, Path]) -> Path:
    """Grava o documento agregado em json (utf-8, indentado).

    Parameters
    ----------
    document : Dict[str, Any]
        Documento produzido por `AggregationResult.to_document`.
    path : Union[str, Path]
        Caminho do arquivo de saída. As pastas são criadas se necessário.

    Returns
    -------
    Path
        Caminho gravado.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as file:
        json.dump(document, file, ensure_ascii=False, indent=2)
    return path


def read_document(path: Union[str, Path]) -> Dict[str, Any]:
    with open(path, encoding="utf-8") as file:
        return json.load(file)
