import math
from typing import List, Optional

import pandas as pd

from prf_acidentes.config.params import (
    HIDDEN_CONDITIONS,
    INTENSITY_LOW,
    INTENSITY_MEDIUM,
    MAX_LABEL_LEN,
    STATE_NAMES,
    TOP_N_CAUSES,
)
from prf_acidentes.model.aggregator import AggregationResult, CategoryFrequency


def top_causes(
    causes: List[CategoryFrequency],
    n: int = TOP_N_CAUSES,
    max_label_len: int = MAX_LABEL_LEN,
) -> pd.DataFrame:
    """Seleciona as causas mais frequentes de uma UF com o percentual de participação.

    Parameters
    ----------
    causes : List[CategoryFrequency]
        Tabela de causas da UF, já ordenada.
    n : int, optional
        Número de causas, by default 10
    max_label_len : int, optional
        Tamanho máximo do rótulo de exibição, by default 35

    Returns
    -------
    pd.DataFrame
        Campos causa, count, percentual e causa_exibicao.
    """
    df = pd.DataFrame(
        [(freq.label, freq.count) for freq in causes], columns=["causa", "count"]
    )
    total = df["count"].sum()

    df = df.head(n).copy()
    df["count"] = df["count"].astype(int)
    df["percentual"] = (df["count"] / total * 100).round(1) if total > 0 else 0.0
    df["causa_exibicao"] = df["causa"].map(
        lambda x: x[: max_label_len - 3] + "..." if len(x) > max_label_len else x
    )

    return df


def visible_conditions(conditions: List[CategoryFrequency]) -> List[CategoryFrequency]:
    """Remove as condições meteorológicas não informadas ("ignorado")."""
    hidden = [x.lower() for x in HIDDEN_CONDITIONS]
    return [freq for freq in conditions if freq.label.lower() not in hidden]


def state_ranking(result: AggregationResult, n: Optional[int] = None) -> pd.DataFrame:
    """Classifica as UFs pelo total de acidentes.

    O percentual é calculado sobre a soma de todas as UFs e a intensidade
    divide o intervalo [mín, máx] em três faixas (Baixa, Média e Alta).

    Parameters
    ----------
    result : AggregationResult
        Resultado da agregação.
    n : Optional[int], optional
        Número de UFs no ranking, by default None (todas)

    Returns
    -------
    pd.DataFrame
        Campos uf, estado, total_acidentes, percentual e intensidade.
    """
    columns = ["uf", "estado", "total_acidentes", "percentual", "intensidade"]
    df = pd.DataFrame(
        [(uf, region.totals.total_acidentes) for uf, region in result.regions.items()],
        columns=["uf", "total_acidentes"],
    )
    if df.empty:
        return pd.DataFrame(columns=columns)

    df["estado"] = df["uf"].map(lambda x: STATE_NAMES.get(x, x))

    total = df["total_acidentes"].sum()
    df["percentual"] = (df["total_acidentes"] / total * 100).round(1) if total > 0 else 0.0

    min_acc = df["total_acidentes"].min()
    max_acc = df["total_acidentes"].max()
    low = math.floor(min_acc + (max_acc - min_acc) * INTENSITY_LOW + 0.5)
    medium = math.floor(min_acc + (max_acc - min_acc) * INTENSITY_MEDIUM + 0.5)
    df["intensidade"] = df["total_acidentes"].map(
        lambda x: "Baixa" if x <= low else ("Média" if x <= medium else "Alta")
    )

    df = df.sort_values(by="total_acidentes", ascending=False, kind="stable")
    if n is not None:
        df = df.head(n)

    return df[columns].reset_index(drop=True)
