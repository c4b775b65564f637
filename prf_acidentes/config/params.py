# Parâmetros do arquivo de acidentes:
CSV_SEP = ";"
CSV_ENCODING = "latin-1"
CSV_CHUNKSIZE = 50_000

# Rótulos padrão para campos vazios:
DEFAULT_UF = "UNKNOWN"
DEFAULT_LABEL = "Unknown"

UF_COL = "uf"
UF_MAX_LEN = 16  # largura da coluna uf no banco
COUNT_COLS = ["mortos", "feridos_graves", "feridos_leves", "ilesos"]
CATEGORY_COLS = [
    "causa_acidente",
    "dia_semana",
    "fase_dia",
    "condicao_metereologica",
    "tipo_pista",
    "classificacao_acidente",
]
INPUT_COLS = [UF_COL] + COUNT_COLS + CATEGORY_COLS

# Ordem canônica dos dias da semana (rótulos da base da PRF):
DIAS_SEMANA = [
    "segunda-feira",
    "terça-feira",
    "quarta-feira",
    "quinta-feira",
    "sexta-feira",
    "sábado",
    "domingo",
]

# Dimensões: (campo do registro, chave no documento, chave do rótulo, chave no json do banco)
DIMENSIONS = [
    ("causa_acidente", "causas_por_uf", "causa", "causas"),
    ("dia_semana", "dias_semana_por_uf", "dia", "dias"),
    ("fase_dia", "fase_dia_por_uf", "fase", "fases"),
    ("condicao_metereologica", "condicao_metereologica_por_uf", "condicao", "condicoes"),
    ("tipo_pista", "tipo_pista_por_uf", "pista", "pistas"),
    ("classificacao_acidente", "classificacao_por_uf", "classificacao", "classificacoes"),
]
WEEKDAY_DIMENSION = "dia_semana"

# Parâmetros do painel:
TOP_N_CAUSES = 10
MAX_LABEL_LEN = 35
HIDDEN_CONDITIONS = ["ignorado"]
INTENSITY_LOW = 0.33
INTENSITY_MEDIUM = 0.66

STATE_NAMES = {
    "AC": "Acre",
    "AL": "Alagoas",
    "AP": "Amapá",
    "AM": "Amazonas",
    "BA": "Bahia",
    "CE": "Ceará",
    "DF": "Distrito Federal",
    "ES": "Espírito Santo",
    "GO": "Goiás",
    "MA": "Maranhão",
    "MT": "Mato Grosso",
    "MS": "Mato Grosso do Sul",
    "MG": "Minas Gerais",
    "PA": "Pará",
    "PB": "Paraíba",
    "PR": "Paraná",
    "PE": "Pernambuco",
    "PI": "Piauí",
    "RJ": "Rio de Janeiro",
    "RN": "Rio Grande do Norte",
    "RS": "Rio Grande do Sul",
    "RO": "Rondônia",
    "RR": "Roraima",
    "SC": "Santa Catarina",
    "SP": "São Paulo",
    "SE": "Sergipe",
    "TO": "Tocantins",
}
