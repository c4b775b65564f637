from pathlib import Path

# Caminhos na pasta raíz do projeto
PATH_ROOT = Path(__file__).parents[2].absolute()

PATH_PRF_ACIDENTES = PATH_ROOT / "prf_acidentes"

# Caminhos em data/
PATH_DATA = PATH_ROOT / "data"

PATH_DATA_PRF = PATH_DATA / "prf"
PATH_DATA_PRF_CACHE = PATH_DATA_PRF / "cache"
PATH_DATA_PRF_CSV = PATH_DATA_PRF / "datatran2024.csv"

# Documento consumido pelo painel
PATH_PUBLIC = PATH_ROOT / "public"
PATH_OUTPUT_JSON = PATH_PUBLIC / "accidents-data.json"
