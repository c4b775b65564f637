from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union
from zipfile import ZipFile

import pandas as pd
from loguru import logger

from prf_acidentes.config.params import (
    CATEGORY_COLS,
    COUNT_COLS,
    CSV_CHUNKSIZE,
    CSV_ENCODING,
    CSV_SEP,
    DEFAULT_LABEL,
    DEFAULT_UF,
    INPUT_COLS,
    UF_COL,
)
from prf_acidentes.model.records import AccidentRecord, parse_count


@contextmanager
def read_csv_chunks(
    path: Union[str, Path],
    sep: str = CSV_SEP,
    encoding: str = CSV_ENCODING,
    chunksize: int = CSV_CHUNKSIZE,
) -> Iterator[pd.io.parsers.TextFileReader]:
    """Abre o csv dos acidentes para leitura em blocos.

    Todas as colunas são lidas como texto; o tratamento dos tipos fica com
    `clean_accidents`. Arquivos .zip são abertos e o primeiro .csv é lido.

    Parameters
    ----------
    path : Union[str, Path]
        Caminho do csv (ou do zip com o csv)
    sep : str, optional
        Delimitador do csv, by default ";"
    encoding : str, optional
        Encoding, by default "latin-1"
    chunksize : int, optional
        Número de linhas por bloco, by default 50_000

    Yields
    ------
    pd.io.parsers.TextFileReader
        Iterador de data frames
    """
    path = Path(path)
    options = dict(
        sep=sep,
        encoding=encoding,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        chunksize=chunksize,
    )

    if path.suffix.lower() == ".zip":
        with ZipFile(path) as zip_file:
            members = [name for name in zip_file.namelist() if name.lower().endswith(".csv")]
            if not members:
                raise FileNotFoundError(f"Nenhum csv encontrado em {path}.")
            logger.info(f"Lendo {members[0]} de {path.name}.")
            with zip_file.open(members[0]) as csv_file:
                with pd.read_csv(csv_file, **options) as reader:
                    yield reader
    else:
        with pd.read_csv(path, **options) as reader:
            yield reader


def clean_accidents(df: pd.DataFrame) -> pd.DataFrame:
    """Padroniza um bloco de acidentes: contagens inteiras e rótulos sem espaços.

    Colunas ausentes são criadas vazias e recebem os valores padrão.

    Parameters
    ----------
    df : pd.DataFrame
        Bloco lido do csv

    Returns
    -------
    pd.DataFrame
        Data frame somente com as colunas de entrada, já tratadas
    """
    missing = [col for col in INPUT_COLS if col not in df.columns]
    if missing:
        logger.warning(f"Colunas ausentes no csv: {missing}.")

    df = df.reindex(columns=INPUT_COLS, fill_value="")

    for col in COUNT_COLS:
        df[col] = df[col].map(parse_count)

    df[UF_COL] = clean_text(df[UF_COL], DEFAULT_UF)
    for col in CATEGORY_COLS:
        df[col] = clean_text(df[col], DEFAULT_LABEL)

    return df


def clean_text(col: pd.Series, default: str) -> pd.Series:
    """Remove os espaços das pontas e substitui os vazios pelo rótulo padrão."""
    out = col.fillna("").astype(str).str.strip()
    return out.mask(out == "", default)


def records_from_df(df: pd.DataFrame) -> Iterator[AccidentRecord]:
    """Converte um data frame tratado em registros de acidentes."""
    n_counts = len(COUNT_COLS)
    for uf, *values in df[INPUT_COLS].itertuples(index=False, name=None):
        counts = [int(value) for value in values[:n_counts]]
        yield AccidentRecord(uf, *counts, *values[n_counts:])
