import json

import pytest
from loguru import logger

from prf_acidentes.database.accidents import Accidents


def _accidents(path, tmp_path, **kwargs):
    return Accidents(path=path, verbose=False, cache_dir=tmp_path / "cache", **kwargs)


def test_transform_aggregates_csv(csv_path, tmp_path):
    accidents = _accidents(csv_path, tmp_path)
    accidents.transform()

    doc = accidents.result.to_document()
    assert doc["total_acidentes"] == 4
    assert doc["total_mortos"] == 1
    assert doc["total_feridos_graves"] == 2
    assert doc["total_feridos_leves"] == 2
    assert doc["total_ilesos"] == 6
    assert list(doc["ufs"]) == ["SP", "PR", "UNKNOWN"]
    assert doc["causas_por_uf"]["SP"] == [{"causa": "Velocidade Incompatível", "count": 2}]
    assert doc["dias_semana_por_uf"]["SP"][:3] == [
        {"dia": "segunda-feira", "count": 1},
        {"dia": "terça-feira", "count": 1},
        {"dia": "quarta-feira", "count": 0},
    ]
    assert doc["dias_semana_por_uf"]["UNKNOWN"][5] == {"dia": "sábado", "count": 1}
    assert doc["condicao_metereologica_por_uf"]["PR"] == [{"condicao": "Céu Claro", "count": 1}]


def test_chunk_size_does_not_change_result(csv_path, tmp_path):
    whole = _accidents(csv_path, tmp_path)
    whole.transform()
    chunked = _accidents(csv_path, tmp_path, chunksize=1)
    chunked.transform()

    assert chunked.result.to_document() == whole.result.to_document()


def test_load_writes_identical_files(csv_path, tmp_path):
    first = _accidents(csv_path, tmp_path).load(tmp_path / "a" / "accidents-data.json")
    second = _accidents(csv_path, tmp_path).load(tmp_path / "b" / "accidents-data.json")

    assert first.read_bytes() == second.read_bytes()
    doc = json.loads(first.read_text(encoding="utf-8"))
    assert doc["ufs"]["PR"]["total_ilesos"] == 3
    assert "Ausência de reação do condutor" in first.read_text(encoding="utf-8")


def test_read_cache_skips_csv(csv_path, tmp_path):
    accidents = _accidents(csv_path, tmp_path)
    accidents.transform()
    assert (tmp_path / "cache" / "accidents.json").exists()

    cached = _accidents(tmp_path / "gone.csv", tmp_path, read_cache=True)
    cached.transform()

    assert cached.result == accidents.result


def test_missing_csv_aborts(tmp_path):
    with pytest.raises(FileNotFoundError):
        _accidents(tmp_path / "gone.csv", tmp_path).transform()


def test_header_only_csv(tmp_path):
    path = tmp_path / "vazio.csv"
    path.write_text("uf;mortos;dia_semana\n", encoding="latin-1")

    accidents = _accidents(path, tmp_path)
    accidents.transform()

    doc = accidents.result.to_document()
    assert doc["total_acidentes"] == 0
    assert doc["ufs"] == {}


def test_missing_columns_get_defaults(tmp_path):
    path = tmp_path / "parcial.csv"
    path.write_text("uf;mortos\nSC;2\nSC;x\n", encoding="latin-1")

    accidents = _accidents(path, tmp_path)
    accidents.transform()

    doc = accidents.result.to_document()
    assert doc["ufs"]["SC"]["total_acidentes"] == 2
    assert doc["ufs"]["SC"]["total_mortos"] == 2
    assert doc["tipo_pista_por_uf"]["SC"] == [{"pista": "Unknown", "count": 2}]


def test_invalid_uf_is_logged_and_kept(tmp_path):
    path = tmp_path / "uf_longa.csv"
    path.write_text("uf;mortos\nRIO GRANDE DO NORTE;1\nRN;0\n", encoding="latin-1")

    messages = []
    handler_id = logger.add(messages.append, level="ERROR")
    try:
        accidents = _accidents(path, tmp_path)
        accidents.transform()
    finally:
        logger.remove(handler_id)

    doc = accidents.result.to_document()
    assert list(doc["ufs"]) == ["RIO GRANDE DO NORTE", "RN"]
    assert doc["total_mortos"] == 1
    assert any("Erro ao validar o bloco 1" in str(message) for message in messages)
