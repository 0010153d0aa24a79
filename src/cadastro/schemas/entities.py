"""
Field schemas for every registered entity.

Date formats are strptime patterns. The address objects of an associado share one
nested schema.
"""

from .fields import FieldDescriptor, FieldType, make_schema

STRING = FieldType.STRING
NUMBER = FieldType.NUMBER
BOOLEAN = FieldType.BOOLEAN
OBJECT = FieldType.OBJECT
ARRAY = FieldType.ARRAY
DATETIME = FieldType.DATETIME

DATE_BR = "%d/%m/%Y"
DATE_ISO = "%Y-%m-%d"
DATETIME_BR = "%d/%m/%Y %H:%M:%S"
TIME = "%H:%M:%S"

# Document shapes, punctuation optional. The stored value is digits only.
CPF = r"\d{3}\.?\d{3}\.?\d{3}-?\d{2}"
CNPJ = r"\d{2}\.?\d{3}\.?\d{3}/?\d{4}-?\d{2}"
CPF_CNPJ = f"{CPF}|{CNPJ}"
CEP = r"\d{5}-?\d{3}"
UF = r"[A-Z]{2}"


# --- Enumerations ---

SEXO = {
    1: "MASCULINO",
    2: "FEMININO",
    3: "NÃO BINÁRIO",
    4: "INDEFINIDO",
}

LOCAL_COBRANCA = {
    1: "ESCRITORIO",
    2: "BOLETO",
    3: "COBRANÇA RESIDENCIAL",
    4: "COBRANÇA COMERCIAL",
    5: "PAGAMENTO RECORRENTE",
}

TIPO_ENTREGA_BOLETO = (1, 2, 3, 4, 5, 6)

PORTES = ("P", "M", "G", "GG")

TIPO_DEPENDENTE = (1, 2)

STATUS_CARTAO = (0, 1)

STATUS_ATENDIMENTO = (0, 1, 2)


ENDERECO_FIELDS = make_schema(
    municipio_id=FieldDescriptor(type=NUMBER, required=True),
    bairro_id=FieldDescriptor(type=NUMBER, required=True),
    cep=FieldDescriptor(type=STRING, required=True, pattern=CEP),
    estado=FieldDescriptor(type=STRING, required=True, pattern=UF),
    rua=FieldDescriptor(type=STRING, required=True, max_length=100),
    logradouro=FieldDescriptor(type=STRING, required=True, max_length=30),
    quadra=FieldDescriptor(type=STRING, max_length=10),
    lote=FieldDescriptor(type=STRING, max_length=10),
    numero=FieldDescriptor(type=STRING, max_length=10),
    complemento=FieldDescriptor(type=STRING, max_length=100),
)


ASSOCIADO_FIELDS = make_schema(
    unidade_id=FieldDescriptor(type=NUMBER, required=True),
    situacao_id=FieldDescriptor(type=NUMBER, required=True),
    nome=FieldDescriptor(type=STRING, required=True, max_length=150),
    rg=FieldDescriptor(type=STRING, required=True, max_length=30),
    cpf_cnpj=FieldDescriptor(type=STRING, unique=True, pattern=CPF_CNPJ),
    data_nascimento=FieldDescriptor(type=DATETIME, required=True, format=DATE_ISO),
    data_falecimento=FieldDescriptor(type=DATETIME, format=DATE_ISO),
    estado_civil_id=FieldDescriptor(type=NUMBER, required=True),
    religiao_id=FieldDescriptor(type=NUMBER, required=True),
    naturalidade=FieldDescriptor(type=STRING, max_length=100),
    nacionalidade=FieldDescriptor(type=BOOLEAN, required=True),
    profissao=FieldDescriptor(type=STRING, max_length=100),
    sexo=FieldDescriptor(type=NUMBER, enum_values=tuple(SEXO)),
    cremacao=FieldDescriptor(type=BOOLEAN, required=True),
    adicional_id=FieldDescriptor(type=NUMBER),
    filiacao_cremacao=FieldDescriptor(type=DATETIME, format=DATE_BR),
    data_inicio_carencia_cremacao=FieldDescriptor(type=DATETIME, format=DATE_BR),
    data_fim_carencia_cremacao=FieldDescriptor(type=DATETIME, format=DATE_BR),
    cadastro_cremacao=FieldDescriptor(type=DATETIME, format=DATETIME_BR),
    usuario_cremacao=FieldDescriptor(type=STRING, max_length=100),
    situacao_cremacao_id=FieldDescriptor(type=NUMBER),
    contrato=FieldDescriptor(type=NUMBER, required=True, unique=True),
    contrato_cemiterio=FieldDescriptor(type=NUMBER),
    endereco=FieldDescriptor(type=OBJECT, required=True, nested_fields=ENDERECO_FIELDS),
    endereco_comercial=FieldDescriptor(type=BOOLEAN, required=True),
    endereco_cobranca=FieldDescriptor(type=OBJECT, required=True, nested_fields=ENDERECO_FIELDS),
    plano_id=FieldDescriptor(type=NUMBER),
    data_contrato=FieldDescriptor(type=DATETIME, format=DATE_BR),
    data_inicio_carencia=FieldDescriptor(type=DATETIME, format=DATE_BR),
    data_fim_carencia=FieldDescriptor(type=DATETIME, format=DATE_BR),
    data_primeira_parcela=FieldDescriptor(type=DATETIME, format=DATE_BR),
    dia_pagamento=FieldDescriptor(type=NUMBER),
    ultimo_pagamento=FieldDescriptor(type=DATETIME, format=DATE_BR),
    ultimo_mes_pago=FieldDescriptor(type=DATETIME, format=DATE_BR),
    # Collection route; the *_temporario(a) ids override it for a while
    cobrador_id=FieldDescriptor(type=NUMBER),
    regiao_id=FieldDescriptor(type=NUMBER),
    rota_id=FieldDescriptor(type=NUMBER),
    cobrador_temporario_id=FieldDescriptor(type=NUMBER),
    regiao_temporaria_id=FieldDescriptor(type=NUMBER),
    rota_temporaria_id=FieldDescriptor(type=NUMBER),
    vendedor_id=FieldDescriptor(type=NUMBER),
    concorrente_id=FieldDescriptor(type=NUMBER),
    data_cancelamento=FieldDescriptor(type=DATETIME, format=DATE_BR),
    data_quitacao=FieldDescriptor(type=DATETIME, format=DATE_BR),
    # Contract held with a previous provider
    data_contrato_anterior=FieldDescriptor(type=DATETIME, format=DATE_BR),
    ultimo_mes_pago_anterior=FieldDescriptor(type=DATETIME, format=DATE_BR),
    empresa_anterior=FieldDescriptor(type=STRING, max_length=150),
    observacao=FieldDescriptor(type=STRING),
    local_cobranca=FieldDescriptor(type=NUMBER, required=True, enum_values=tuple(LOCAL_COBRANCA)),
    horario_cobranca=FieldDescriptor(type=DATETIME, format=TIME),
    termo_reajuste=FieldDescriptor(type=BOOLEAN, default=False),
    boleto_entregue=FieldDescriptor(type=BOOLEAN, default=False),
    tipo_entrega_boleto=FieldDescriptor(type=NUMBER, required=True, enum_values=TIPO_ENTREGA_BOLETO),
)


DEPENDENTE_FIELDS = make_schema(
    associado_id=FieldDescriptor(type=NUMBER, required=True),
    parentesco_id=FieldDescriptor(type=NUMBER),
    raca_id=FieldDescriptor(type=NUMBER),
    especie_id=FieldDescriptor(type=NUMBER),
    situacao_id=FieldDescriptor(type=NUMBER, required=True),
    nome=FieldDescriptor(type=STRING, required=True, max_length=100),
    cpf=FieldDescriptor(type=STRING, unique=True, pattern=CPF),
    altura=FieldDescriptor(type=NUMBER),
    peso=FieldDescriptor(type=NUMBER),
    cor=FieldDescriptor(type=STRING, max_length=50),
    porte=FieldDescriptor(type=STRING, enum_values=PORTES),
    data_nascimento=FieldDescriptor(type=DATETIME, required=True, format=DATE_BR),
    data_filiacao=FieldDescriptor(type=DATETIME, required=True, format=DATE_BR),
    data_falecimento=FieldDescriptor(type=DATETIME, format=DATE_BR),
    data_inicio_carencia=FieldDescriptor(type=DATETIME, format=DATE_BR),
    data_fim_carencia=FieldDescriptor(type=DATETIME, format=DATE_BR),
    tipo=FieldDescriptor(type=NUMBER, required=True, enum_values=TIPO_DEPENDENTE),
    cremacao=FieldDescriptor(type=BOOLEAN, required=True),
    filiacao_cremacao=FieldDescriptor(type=DATETIME, format=DATE_BR),
    data_inicio_carencia_cremacao=FieldDescriptor(type=DATETIME, format=DATE_BR),
    data_fim_carencia_cremacao=FieldDescriptor(type=DATETIME, format=DATE_BR),
    cadastro_cremacao=FieldDescriptor(type=DATETIME, format=DATETIME_BR),
    usuario_cremacao=FieldDescriptor(type=STRING, max_length=100),
)


CARTAO_ASSOCIADO_FIELDS = make_schema(
    associado_id=FieldDescriptor(type=NUMBER, required=True),
    dependente_id=FieldDescriptor(type=NUMBER),
    pagamento=FieldDescriptor(type=ARRAY),
    data_pagamento=FieldDescriptor(type=DATETIME, format=DATE_BR),
    valor_pagar=FieldDescriptor(type=NUMBER, required=True),
    status=FieldDescriptor(type=NUMBER, enum_values=STATUS_CARTAO, default=0),
)


ATENDIMENTO_FIELDS = make_schema(
    associado_id=FieldDescriptor(type=NUMBER, required=True),
    tipo_atendimento_id=FieldDescriptor(type=NUMBER),
    sub_tipo_atendimento_id=FieldDescriptor(type=NUMBER),
    data_contato=FieldDescriptor(type=DATETIME, format=DATE_BR),
    data_retorno=FieldDescriptor(type=DATETIME, format=DATETIME_BR),
    status=FieldDescriptor(type=NUMBER, enum_values=STATUS_ATENDIMENTO, default=0),
    inicio_atendimento=FieldDescriptor(type=DATETIME, format=DATETIME_BR),
    fim_atendimento=FieldDescriptor(type=DATETIME, format=DATETIME_BR),
)


AGENDAMENTO_FIELDS = make_schema(
    associado_id=FieldDescriptor(type=NUMBER, required=True),
    cobrador_id=FieldDescriptor(type=NUMBER, required=True),
    tipo=FieldDescriptor(type=NUMBER, required=True),
    status=FieldDescriptor(type=NUMBER, required=True),
    retorno=FieldDescriptor(type=DATETIME, format=DATETIME_BR),
    motivo=FieldDescriptor(type=STRING),
)


CONTATO_FIELDS = make_schema(
    associado_id=FieldDescriptor(type=NUMBER, required=True),
    tipo=FieldDescriptor(type=NUMBER, required=True),
    descricao=FieldDescriptor(type=STRING, required=True),
)


HISTORICO_FIELDS = make_schema(
    associado_id=FieldDescriptor(type=NUMBER, required=True),
    categoria_id=FieldDescriptor(type=NUMBER, required=True),
    sub_categoria_id=FieldDescriptor(type=NUMBER),
    descricao=FieldDescriptor(type=STRING, required=True),
)


NEGOCIACAO_FIELDS = make_schema(
    associado_id=FieldDescriptor(type=NUMBER, required=True),
    cobrador_id=FieldDescriptor(type=NUMBER),
    tipo=FieldDescriptor(type=NUMBER, required=True),
    status=FieldDescriptor(type=NUMBER, required=True),
    motivo=FieldDescriptor(type=STRING),
    valor_total=FieldDescriptor(type=NUMBER, required=True),
    valor_desconto=FieldDescriptor(type=NUMBER),
    porcentagem_desconto=FieldDescriptor(type=NUMBER),
    valor_pagar=FieldDescriptor(type=NUMBER, required=True),
    porcentagem_permitida=FieldDescriptor(type=NUMBER),
    quantidade_parcela=FieldDescriptor(type=NUMBER, required=True),
)


PARCELA_FIELDS = make_schema(
    associado_id=FieldDescriptor(type=NUMBER, required=True),
    negociacao_id=FieldDescriptor(type=NUMBER),
    pagamento=FieldDescriptor(type=NUMBER),
    data_vencimento=FieldDescriptor(type=DATETIME, required=True, format=DATE_BR),
    data_pagamento=FieldDescriptor(type=DATETIME, format=DATE_BR),
    valor_pagar=FieldDescriptor(type=NUMBER, required=True),
    valor_parcela=FieldDescriptor(type=NUMBER, required=True),
    valor_adicional=FieldDescriptor(type=NUMBER),
    valor_adesao=FieldDescriptor(type=NUMBER),
    valor_pago=FieldDescriptor(type=NUMBER),
    tipo=FieldDescriptor(type=NUMBER, required=True),
)
