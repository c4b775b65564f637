"""
Linha de comando: processa o csv da PRF, carrega o resultado no banco e
imprime os rankings do painel.
"""

import argparse
import sys
from typing import List, Optional

from loguru import logger

from prf_acidentes.config.params import CSV_CHUNKSIZE, TOP_N_CAUSES
from prf_acidentes.config.paths import (
    PATH_DATA_PRF_CACHE,
    PATH_DATA_PRF_CSV,
    PATH_OUTPUT_JSON,
)
from prf_acidentes.database.accidents import Accidents
from prf_acidentes.model.aggregator import AggregationResult
from prf_acidentes.model.report import state_ranking, top_causes, visible_conditions
from prf_acidentes.storage.database import get_engine
from prf_acidentes.storage.repository import load_accident_data
from prf_acidentes.utils import read_document


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prf-acidentes",
        description="Agregação dos acidentes nas rodovias federais por UF.",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Mostra somente avisos e erros."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    process = subparsers.add_parser("process", help="Agrega o csv e grava o json.")
    process.add_argument("--input", default=str(PATH_DATA_PRF_CSV), help="csv (ou zip) da PRF.")
    process.add_argument("--output", default=str(PATH_OUTPUT_JSON), help="json de saída.")
    process.add_argument("--cache-dir", default=str(PATH_DATA_PRF_CACHE))
    process.add_argument("--chunksize", type=int, default=CSV_CHUNKSIZE)
    process.add_argument(
        "--read-cache", action="store_true", help="Usa o resultado em cache em vez do csv."
    )

    load = subparsers.add_parser("load", help="Carrega o json agregado no banco.")
    load.add_argument("--input", default=str(PATH_OUTPUT_JSON), help="json agregado.")
    load.add_argument(
        "--database-url", default=None, help="Url do banco (padrão: DATABASE_URL)."
    )

    report = subparsers.add_parser("report", help="Imprime o ranking das UFs.")
    report.add_argument("--input", default=str(PATH_OUTPUT_JSON), help="json agregado.")
    report.add_argument("--uf", default=None, help="UF para listar as principais causas.")
    report.add_argument("--top", type=int, default=TOP_N_CAUSES)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.quiet:
        logger.remove()
        logger.add(sys.stderr, level="WARNING")

    try:
        if args.command == "process":
            return _process(args)
        if args.command == "load":
            return _load(args)
        return _report(args)
    except (OSError, ValueError) as error:
        print(f"prf-acidentes: {error}", file=sys.stderr)
        return 1


def _process(args: argparse.Namespace) -> int:
    accidents = Accidents(
        path=args.input,
        verbose=not args.quiet,
        read_cache=args.read_cache,
        cache_dir=args.cache_dir,
        chunksize=args.chunksize,
    )
    accidents.transform()
    accidents.load(args.output)
    return 0


def _load(args: argparse.Namespace) -> int:
    result = AggregationResult.from_document(read_document(args.input))

    engine = None
    if args.database_url:
        engine = get_engine(args.database_url)
        if engine is None:
            logger.warning("[Database] --database-url inutilizável: carga dos acidentes ignorada.")
            return 0

    if load_accident_data(result, engine=engine):
        print("Dados carregados com sucesso!")
    return 0


def _report(args: argparse.Namespace) -> int:
    result = AggregationResult.from_document(read_document(args.input))

    print(state_ranking(result).to_string(index=False))

    if args.uf:
        region = result.regions.get(args.uf)
        if region is None:
            print(f"prf-acidentes: UF {args.uf} não encontrada.", file=sys.stderr)
            return 1
        print()
        df = top_causes(region.tables["causa_acidente"], n=args.top)
        print(df[["causa_exibicao", "count", "percentual"]].to_string(index=False))

        print()
        for freq in visible_conditions(region.tables["condicao_metereologica"]):
            print(f"{freq.label}: {freq.count}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
