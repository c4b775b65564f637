import re
from dataclasses import dataclass
from typing import Any, Mapping

import pandas as pd

from prf_acidentes.config.params import (
    CATEGORY_COLS,
    COUNT_COLS,
    DEFAULT_LABEL,
    DEFAULT_UF,
    UF_COL,
)

COUNT_PATTERN = re.compile(r"^\s*\+?(\d+)(?:\.\d*)?\s*$", re.ASCII)


def parse_count(value: Any) -> int:
    """Converte o texto de uma contagem de vítimas para inteiro.

    Aceita somente dígitos, com parte decimal opcional (truncada). Valores
    vazios, negativos, em notação científica ou não numéricos viram 0.

    Parameters
    ----------
    value : Any
        Valor lido do csv (normalmente str).

    Returns
    -------
    int
        Contagem não negativa.
    """
    if value is None or isinstance(value, bool):
        return 0
    match = COUNT_PATTERN.match(str(value))
    if match is None:
        return 0
    return int(match.group(1))


def clean_label(value: Any, default: str = DEFAULT_LABEL) -> str:
    """Remove os espaços das pontas do rótulo, substituindo vazios pelo padrão."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return default
    label = str(value).strip()
    return label or default


@dataclass(frozen=True)
class AccidentRecord:
    uf: str = DEFAULT_UF
    mortos: int = 0
    feridos_graves: int = 0
    feridos_leves: int = 0
    ilesos: int = 0
    causa_acidente: str = DEFAULT_LABEL
    dia_semana: str = DEFAULT_LABEL
    fase_dia: str = DEFAULT_LABEL
    condicao_metereologica: str = DEFAULT_LABEL
    tipo_pista: str = DEFAULT_LABEL
    classificacao_acidente: str = DEFAULT_LABEL

    @classmethod
    def from_raw(cls, row: Mapping[str, Any]) -> "AccidentRecord":
        """Cria o registro a partir de uma linha crua do csv (dicionário coluna -> texto).

        Campos ausentes recebem os valores padrão; nenhuma linha é rejeitada.
        """
        fields = {UF_COL: clean_label(row.get(UF_COL), DEFAULT_UF)}
        fields.update({col: parse_count(row.get(col)) for col in COUNT_COLS})
        fields.update({col: clean_label(row.get(col)) for col in CATEGORY_COLS})
        return cls(**fields)
