from conftest import WEEKDAYS_EN, record

from prf_acidentes.model.aggregator import AggregationResult, CategoryFrequency, aggregate
from prf_acidentes.model.report import state_ranking, top_causes, visible_conditions


def test_top_causes_percentages_use_all_causes():
    causes = [
        CategoryFrequency("Velocidade", 6),
        CategoryFrequency("Álcool", 3),
        CategoryFrequency("Sono", 1),
    ]

    df = top_causes(causes, n=2)

    assert df["causa"].tolist() == ["Velocidade", "Álcool"]
    assert df["count"].tolist() == [6, 3]
    assert df["percentual"].tolist() == [60.0, 30.0]


def test_top_causes_truncates_long_labels():
    label = "Reação tardia ou ineficiente do condutor ao obstáculo"
    df = top_causes([CategoryFrequency(label, 1), CategoryFrequency("Curta", 1)])

    assert df["causa_exibicao"].iloc[0] == label[:32] + "..."
    assert len(df["causa_exibicao"].iloc[0]) == 35
    assert df["causa_exibicao"].iloc[1] == "Curta"
    assert df["causa"].iloc[0] == label


def test_top_causes_empty():
    df = top_causes([])

    assert df.empty
    assert "percentual" in df.columns


def test_visible_conditions_hides_ignored():
    conditions = [
        CategoryFrequency("Céu Claro", 4),
        CategoryFrequency("Ignorado", 2),
        CategoryFrequency("Chuva", 1),
    ]

    assert [c.label for c in visible_conditions(conditions)] == ["Céu Claro", "Chuva"]


def test_state_ranking():
    records = [record("RJ")] * 2 + [record("SP")] * 12 + [record("PR")] * 6
    result = aggregate(records, WEEKDAYS_EN)

    df = state_ranking(result)

    assert df["uf"].tolist() == ["SP", "PR", "RJ"]
    assert df["estado"].tolist() == ["São Paulo", "Paraná", "Rio de Janeiro"]
    assert df["percentual"].tolist() == [60.0, 30.0, 10.0]
    assert df["intensidade"].tolist() == ["Alta", "Média", "Baixa"]


def test_state_ranking_top_n_and_unknown_state():
    result = aggregate([record("SP"), record("SP"), record("UNKNOWN")], WEEKDAYS_EN)

    df = state_ranking(result, n=1)

    assert df["uf"].tolist() == ["SP"]

    full = state_ranking(result)
    assert full["estado"].tolist() == ["São Paulo", "UNKNOWN"]


def test_state_ranking_empty():
    df = state_ranking(aggregate([]))

    assert df.empty
    assert list(df.columns) == ["uf", "estado", "total_acidentes", "percentual", "intensidade"]


def test_state_ranking_thresholds_round_half_up():
    result = AggregationResult.from_document(
        {
            "ufs": {
                "SP": {"total_acidentes": 50},
                "RJ": {"total_acidentes": 17},
                "PR": {"total_acidentes": 0},
            }
        }
    )

    df = state_ranking(result)

    assert df["uf"].tolist() == ["SP", "RJ", "PR"]
    assert df["intensidade"].tolist() == ["Alta", "Baixa", "Baixa"]
