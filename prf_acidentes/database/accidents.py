from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

import pandas as pd
from loguru import logger
from pandera import Check, Column, DataFrameSchema
from pandera.errors import SchemaError

from prf_acidentes.config.params import (
    CSV_CHUNKSIZE,
    DIAS_SEMANA,
    INPUT_COLS,
    UF_COL,
    UF_MAX_LEN,
)
from prf_acidentes.config.paths import (
    PATH_DATA_PRF_CACHE,
    PATH_DATA_PRF_CSV,
    PATH_OUTPUT_JSON,
)
from prf_acidentes.database.utils import clean_accidents, read_csv_chunks, records_from_df
from prf_acidentes.model.aggregator import AggregationResult, aggregate
from prf_acidentes.model.records import AccidentRecord
from prf_acidentes.utils import read_document, trace_df, write_document


class Accidents:
    def __init__(
        self,
        path: Union[str, Path] = PATH_DATA_PRF_CSV,
        verbose: bool = True,
        read_cache: bool = False,
        cache_dir: Union[str, Path] = PATH_DATA_PRF_CACHE,
        chunksize: int = CSV_CHUNKSIZE,
        weekdays: Sequence[str] = DIAS_SEMANA,
    ) -> None:
        self.name = "accidents"
        self.path = Path(path)
        self.cache_dir = Path(cache_dir)
        self.chunksize = chunksize
        self.weekdays = list(weekdays)
        self.verbose = verbose
        self.read_cache = read_cache
        self.result: Optional[AggregationResult] = None

        # Todas as colunas chegam como texto; as ausentes recebem os valores padrão.
        self.df_schema_in: dict[str, Column] = {
            col: Column(str, nullable=True, required=False) for col in INPUT_COLS
        }
        self.df_schema_in[UF_COL] = Column(
            str,
            checks=Check.str_length(max_value=UF_MAX_LEN),
            nullable=True,
            required=False,
        )

    def extract(self) -> Iterator[AccidentRecord]:
        """Método para leitura dos registros de acidentes, bloco a bloco"""

        logger.info(
            "Início da leitura dos registros de acidentes."
        ) if self.verbose else None

        with read_csv_chunks(self.path, chunksize=self.chunksize) as reader:
            for i, df in enumerate(reader, start=1):
                logger.info(f"Lendo o bloco {i} do csv.") if self.verbose else None

                df = self.__validate(df, i)
                df = clean_accidents(df)
                self.__print_df_shape(df)

                yield from records_from_df(df)

        logger.info("Fim da extração dos dados.") if self.verbose else None

    def transform(self) -> None:
        """Método para agregação dos acidentes por UF"""

        logger.info("Início da agregação.") if self.verbose else None

        cache_path = self.cache_dir / f"{self.name}.json"
        if self.read_cache:
            logger.info("Modo de leitura da cache ativo.")
            self.result = AggregationResult.from_document(read_document(cache_path))
            logger.info("Fim da agregação.")
            return

        result = aggregate(self.extract(), self.weekdays)

        # Armazena a cache caso o modo de leitura da cache não esteja ativo:
        logger.info(f"Armazenado {cache_path}.")
        write_document(result.to_document(), cache_path)

        self.result = result
        logger.info(
            f"Total de registros: {result.global_totals.total_acidentes}."
        ) if self.verbose else None
        logger.info(f"Total de UFs: {len(result.regions)}.") if self.verbose else None
        logger.info("Fim da agregação.") if self.verbose else None

    def load(self, path: Union[str, Path] = PATH_OUTPUT_JSON) -> Path:
        """Método para gravação do documento consumido pelo painel

        Parameters
        ----------
        path : Union[str, Path], optional
            Caminho do json de saída, by default PATH_OUTPUT_JSON

        Returns
        -------
        Path
            Caminho gravado.
        """
        if self.result is None:
            self.transform()

        out = write_document(self.result.to_document(), path)
        logger.info(f"Dados processados e salvos em: {out}")

        return out

    #######################################################################

    def __print_df_shape(self, df: pd.DataFrame):
        trace_df(df) if self.verbose else None

    def __validate(self, df: pd.DataFrame, chunk: int) -> pd.DataFrame:
        """Método para validar as colunas de um bloco de acidentes.

        A validação não descarta registros: em caso de erro, o bloco segue sem filtro.

        Parameters
        ----------
        df : pd.DataFrame
            Bloco lido do csv.
        chunk : int
            Número do bloco (para o log).

        Returns
        -------
        pd.DataFrame
            Bloco somente com as colunas de entrada.
        """
        try:
            df = DataFrameSchema(
                columns=self.df_schema_in,
                strict="filter",
            ).validate(df)
        except SchemaError as se:
            logger.error(f"Erro ao validar o bloco {chunk} dos acidentes.")
            logger.error(se)

        return df
