from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from loguru import logger
from unidecode import unidecode

from prf_acidentes.config.params import DIAS_SEMANA, DIMENSIONS, WEEKDAY_DIMENSION
from prf_acidentes.model.records import AccidentRecord

DIMENSION_FIELDS = [dim[0] for dim in DIMENSIONS]


@dataclass
class Totals:
    """Contagem de acidentes e somas de vítimas (globais ou de uma UF)."""

    total_acidentes: int = 0
    total_mortos: int = 0
    total_feridos_graves: int = 0
    total_feridos_leves: int = 0
    total_ilesos: int = 0

    def add(self, record: AccidentRecord) -> None:
        self.total_acidentes += 1
        self.total_mortos += record.mortos
        self.total_feridos_graves += record.feridos_graves
        self.total_feridos_leves += record.feridos_leves
        self.total_ilesos += record.ilesos

    def merge(self, other: "Totals") -> None:
        self.total_acidentes += other.total_acidentes
        self.total_mortos += other.total_mortos
        self.total_feridos_graves += other.total_feridos_graves
        self.total_feridos_leves += other.total_feridos_leves
        self.total_ilesos += other.total_ilesos

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Totals":
        data = data or {}
        return cls(**{key: int(data.get(key, 0) or 0) for key in cls.__dataclass_fields__})


@dataclass
class RegionAggregate:
    """Acumulador de uma UF: totais e uma tabela de frequências por dimensão."""

    totals: Totals = field(default_factory=Totals)
    tables: Dict[str, Counter] = field(
        default_factory=lambda: {name: Counter() for name in DIMENSION_FIELDS}
    )

    def add(self, record: AccidentRecord) -> None:
        self.totals.add(record)
        for name in DIMENSION_FIELDS:
            self.tables[name][getattr(record, name)] += 1

    def merge(self, other: "RegionAggregate") -> None:
        self.totals.merge(other.totals)
        for name in DIMENSION_FIELDS:
            self.tables[name].update(other.tables[name])


@dataclass(frozen=True)
class CategoryFrequency:
    label: str
    count: int

    def to_dict(self, label_key: str) -> Dict[str, Any]:
        return {label_key: self.label, "count": self.count}


@dataclass
class RegionSummary:
    """Resultado final de uma UF: totais e tabelas já ordenadas."""

    totals: Totals
    tables: Dict[str, List[CategoryFrequency]]

    def to_blob(self) -> Dict[str, List[Dict[str, Any]]]:
        """Monta o json aninhado armazenado no banco para a UF.

        Returns
        -------
        Dict[str, List[Dict[str, Any]]]
            Dicionário com as chaves causas, dias, fases, condicoes, pistas e classificacoes.
        """
        return {
            blob_key: [freq.to_dict(label_key) for freq in self.tables[name]]
            for name, _, label_key, blob_key in DIMENSIONS
        }


@dataclass
class AggregationResult:
    global_totals: Totals
    regions: Dict[str, RegionSummary]

    def to_document(self) -> Dict[str, Any]:
        """Converte o resultado no documento consumido pelo painel e pelo banco.

        A ordem das UFs é a ordem em que apareceram na base.
        """
        document: Dict[str, Any] = self.global_totals.to_dict()
        document["ufs"] = {uf: region.totals.to_dict() for uf, region in self.regions.items()}
        for name, doc_key, label_key, _ in DIMENSIONS:
            document[doc_key] = {
                uf: [freq.to_dict(label_key) for freq in region.tables[name]]
                for uf, region in self.regions.items()
            }
        return document

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "AggregationResult":
        """Lê o documento json de volta para os tipos do agregador.

        Chaves ausentes viram totais zerados ou tabelas vazias.

        Parameters
        ----------
        document : Dict[str, Any]
            Documento no formato produzido por `to_document`.

        Returns
        -------
        AggregationResult
            Resultado tipado.

        Raises
        ------
        ValueError
            Se o documento (ou `ufs`) não for um objeto json, ou se algum
            valor não puder ser lido como contagem.
        """
        if not isinstance(document, dict):
            raise ValueError("Documento de acidentes inválido: esperado um objeto json.")
        ufs = document.get("ufs") or {}
        if not isinstance(ufs, dict):
            raise ValueError("Documento de acidentes inválido: 'ufs' deve ser um objeto json.")

        try:
            regions = {}
            for uf, totals in ufs.items():
                tables = {}
                for name, doc_key, label_key, _ in DIMENSIONS:
                    rows = (document.get(doc_key) or {}).get(uf) or []
                    tables[name] = [
                        CategoryFrequency(str(row.get(label_key, "")), int(row.get("count", 0) or 0))
                        for row in rows
                    ]
                regions[uf] = RegionSummary(Totals.from_dict(totals), tables)
            return cls(Totals.from_dict(document), regions)
        except (AttributeError, TypeError, ValueError) as error:
            raise ValueError(f"Documento de acidentes inválido: {error}") from error


def weekday_key(label: str) -> str:
    """Chave de comparação de dias da semana: sem acentos, minúscula e sem o sufixo "-feira"."""
    key = unidecode(label).strip().lower()
    if key.endswith("-feira"):
        key = key[: -len("-feira")]
    return key


class Aggregator:
    """Agregação dos registros de acidentes por UF em uma única passada.

    Parameters
    ----------
    weekdays : Sequence[str], optional
        Ordem canônica dos dias da semana, by default DIAS_SEMANA
    """

    def __init__(self, weekdays: Sequence[str] = DIAS_SEMANA):
        self.weekdays = list(weekdays)
        self.global_totals = Totals()
        self.regions: Dict[str, RegionAggregate] = {}

    def add(self, record: AccidentRecord) -> None:
        self.global_totals.add(record)
        region = self.regions.get(record.uf)
        if region is None:
            region = self.regions[record.uf] = RegionAggregate()
        region.add(record)

    def update(self, records: Iterable[AccidentRecord]) -> "Aggregator":
        for record in records:
            self.add(record)
        return self

    def merge(self, other: "Aggregator") -> "Aggregator":
        """Soma os acumuladores de outro agregador (por exemplo, de outra partição da base)."""
        self.global_totals.merge(other.global_totals)
        for uf, other_region in other.regions.items():
            region = self.regions.get(uf)
            if region is None:
                region = self.regions[uf] = RegionAggregate()
            region.merge(other_region)
        return self

    def result(self) -> AggregationResult:
        regions = {}
        for uf, region in self.regions.items():
            tables = {}
            for name in DIMENSION_FIELDS:
                if name == WEEKDAY_DIMENSION:
                    tables[name] = self.__weekday_table(uf, region.tables[name])
                else:
                    tables[name] = self.__sorted_table(region.tables[name])
            regions[uf] = RegionSummary(Totals(**region.totals.to_dict()), tables)

        return AggregationResult(Totals(**self.global_totals.to_dict()), regions)

    #######################################################################

    def __sorted_table(self, counter: Counter) -> List[CategoryFrequency]:
        # sorted é estável: empates mantêm a ordem de aparecimento
        items = sorted(counter.items(), key=lambda item: item[1], reverse=True)
        return [CategoryFrequency(label, count) for label, count in items]

    def __weekday_table(self, uf: str, counter: Counter) -> List[CategoryFrequency]:
        canonical = {weekday_key(day): day for day in self.weekdays}
        counts = dict.fromkeys(self.weekdays, 0)
        n_unmatched = 0
        for label, count in counter.items():
            day = canonical.get(weekday_key(label))
            if day is None:
                n_unmatched += count
            else:
                counts[day] += count

        if n_unmatched:
            logger.warning(
                f"{n_unmatched} registro(s) de {uf} com dia da semana fora da ordem canônica."
            )

        return [CategoryFrequency(day, count) for day, count in counts.items()]


def aggregate(
    records: Iterable[AccidentRecord], weekdays: Sequence[str] = DIAS_SEMANA
) -> AggregationResult:
    """Agrega uma sequência de registros de acidentes.

    Parameters
    ----------
    records : Iterable[AccidentRecord]
        Registros já tratados (pode ser um gerador).
    weekdays : Sequence[str], optional
        Ordem canônica dos dias da semana, by default DIAS_SEMANA

    Returns
    -------
    AggregationResult
        Totais globais e, por UF, totais e tabelas de frequência ordenadas.
    """
    return Aggregator(weekdays).update(records).result()
