import pytest

from prf_acidentes.model.records import AccidentRecord

WEEKDAYS_EN = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

CSV_HEADER = (
    "id;data_inversa;dia_semana;uf;causa_acidente;classificacao_acidente;"
    "fase_dia;condicao_metereologica;tipo_pista;mortos;feridos_leves;"
    "feridos_graves;ilesos"
)

CSV_ROWS = [
    "1;2024-01-01;segunda-feira;SP;Velocidade Incompatível;Com Vítimas Fatais;"
    "Plena Noite;Chuva;Dupla;1;0;2;1",
    "2;2024-01-02;terça-feira;SP;Velocidade Incompatível;Com Vítimas Feridas;"
    "Pleno dia;Céu Claro;Simples;0;1;0;2",
    "3;2024-01-03;quarta-feira;PR;Ausência de reação do condutor;Sem Vítimas;"
    "Pleno dia;Céu Claro;Dupla;0;0;0;3",
    "4;2024-01-06;sábado; ;Ingestão de álcool;Com Vítimas Feridas;"
    "Anoitecer;Nublado;Múltipla;abc;1;0;0",
]


def record(uf="SP", mortos=0, causa="Speeding", dia="Monday", **kwargs) -> AccidentRecord:
    return AccidentRecord(uf=uf, mortos=mortos, causa_acidente=causa, dia_semana=dia, **kwargs)


@pytest.fixture
def records():
    return [
        record("SP", 1, "Speeding", "Monday", feridos_graves=2, ilesos=1),
        record("SP", 0, "Speeding", "Tuesday", feridos_leves=1, ilesos=2),
        record("RJ", 2, "Alcohol", "Sunday", fase_dia="Night"),
        record("SP", 0, "Distraction", "Monday", tipo_pista="Dupla"),
        record("PR", 0, "Alcohol", "Friday", condicao_metereologica="Rain"),
        record("RJ", 0, "Speeding", "Sunday", feridos_leves=3),
        record("SP", 3, "Distraction", "Saturday", classificacao_acidente="Fatal"),
    ]


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "datatran2024.csv"
    path.write_text("\n".join([CSV_HEADER] + CSV_ROWS) + "\n", encoding="latin-1")
    return path
