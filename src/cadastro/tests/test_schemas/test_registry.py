import pytest
from pydantic import ValidationError

from cadastro.database.base import AUDIT_COLUMNS
from cadastro.entities import REGISTRY, get_descriptor
from cadastro.repositories import DependenteRepository
from cadastro.schemas.entities import ASSOCIADO_FIELDS, ENDERECO_FIELDS
from cadastro.schemas.fields import FieldDescriptor, FieldType, matches_type


class TestRegistry:

    def test_every_entity_is_registered(self):
        assert set(REGISTRY) == {
            "associado",
            "dependente",
            "cartao_associado",
            "atendimento",
            "agendamento",
            "contato",
            "historico",
            "negociacao",
            "parcela",
        }

    @pytest.mark.parametrize("name", sorted(REGISTRY))
    def test_columns_match_the_table(self, name):
        """
        Behavior:
                - Compare each descriptor's column set with its ORM table.

        Importance:
                - Filter and payload keys are whitelisted against `columns`; a schema
                  field without a column (or the reverse) would only show up at runtime.
        """
        descriptor = get_descriptor(name)
        table_columns = {column.name for column in descriptor.model.__table__.columns}

        assert descriptor.columns == table_columns
        assert AUDIT_COLUMNS <= descriptor.columns
        assert descriptor.writable_columns.isdisjoint(AUDIT_COLUMNS | {"id"})

    @pytest.mark.parametrize("name", sorted(REGISTRY))
    def test_normalizers_target_declared_fields(self, name):
        descriptor = get_descriptor(name)

        assert set(descriptor.normalizers) <= set(descriptor.fields)

    @pytest.mark.parametrize("name", sorted(REGISTRY))
    def test_unique_fields_have_an_active_only_index(self, name):
        descriptor = get_descriptor(name)
        table = descriptor.model.__table__
        unique_fields = {field for field, d in descriptor.fields.items() if d.unique}

        indexed = {
            column.name
            for index in table.indexes
            if index.unique and (index.name or "").endswith("_ativo")
            for column in index.columns
        }

        assert indexed == unique_fields

    def test_unique_fields(self):
        unique = {
            (name, field)
            for name, descriptor in REGISTRY.items()
            for field, d in descriptor.fields.items()
            if d.unique
        }
        assert unique == {("associado", "cpf_cnpj"), ("associado", "contrato"), ("dependente", "cpf")}

    def test_dependente_uses_its_own_repository(self):
        # the repository only holds the session; no I/O happens here
        assert isinstance(get_descriptor("dependente").repository(None), DependenteRepository)

    def test_unknown_entity(self):
        with pytest.raises(KeyError, match="Unknown entity"):
            get_descriptor("boleto")


class TestSchemas:

    def test_schema_is_read_only(self):
        with pytest.raises(TypeError):
            ASSOCIADO_FIELDS["nome"] = FieldDescriptor(type=FieldType.NUMBER)

    def test_nested_schema_is_read_only(self):
        nested = ASSOCIADO_FIELDS["endereco"].nested_fields

        assert nested == ENDERECO_FIELDS
        with pytest.raises(TypeError):
            nested["cep"] = FieldDescriptor(type=FieldType.NUMBER)

    def test_descriptor_is_frozen(self):
        with pytest.raises(ValidationError):
            ASSOCIADO_FIELDS["nome"].required = False

    def test_declaration_order_is_kept(self):
        fields = list(ASSOCIADO_FIELDS)

        assert fields[:3] == ["unidade_id", "situacao_id", "nome"]
        assert fields[-1] == "tipo_entrega_boleto"


class TestFieldDescriptor:

    def test_has_default_only_when_given(self):
        assert FieldDescriptor(type=FieldType.STRING).has_default is False
        assert FieldDescriptor(type=FieldType.STRING, default=None).has_default is True

    def test_format_only_for_datetime(self):
        with pytest.raises(ValidationError, match="format applies only to datetime"):
            FieldDescriptor(type=FieldType.STRING, format="%d/%m/%Y")

    def test_nested_only_for_object_or_array(self):
        with pytest.raises(ValidationError):
            FieldDescriptor(type=FieldType.NUMBER, nested_fields=ENDERECO_FIELDS)

    def test_default_must_match_type(self):
        with pytest.raises(ValidationError):
            FieldDescriptor(type=FieldType.NUMBER, default="0")

    def test_default_must_be_an_allowed_value(self):
        with pytest.raises(ValidationError):
            FieldDescriptor(type=FieldType.NUMBER, enum_values=(0, 1), default=2)

    @pytest.mark.parametrize(
        "field_type, value, expected",
        [
            (FieldType.NUMBER, 1, True),
            (FieldType.NUMBER, 1.5, True),
            (FieldType.NUMBER, True, False),
            (FieldType.BOOLEAN, 0, False),
            (FieldType.STRING, b"x", False),
            (FieldType.OBJECT, {}, True),
            (FieldType.ARRAY, (1,), True),
            (FieldType.ARRAY, "abc", False),
        ],
    )
    def test_matches_type(self, field_type, value, expected):
        assert matches_type(field_type, value) is expected

    def test_string_rules_only_for_strings(self):
        with pytest.raises(ValidationError, match="max_length and pattern apply only to string"):
            FieldDescriptor(type=FieldType.NUMBER, max_length=10)
        with pytest.raises(ValidationError, match="max_length and pattern apply only to string"):
            FieldDescriptor(type=FieldType.DATETIME, pattern=r"\d+")

    def test_pattern_must_compile(self):
        with pytest.raises(ValidationError, match="invalid pattern"):
            FieldDescriptor(type=FieldType.STRING, pattern="[0-9")


class TestMemberSchema:

    @pytest.mark.parametrize(
        "field",
        [
            "adicional_id",
            "situacao_cremacao_id",
            "contrato_cemiterio",
            "cobrador_id",
            "regiao_id",
            "rota_id",
            "cobrador_temporario_id",
            "regiao_temporaria_id",
            "rota_temporaria_id",
            "vendedor_id",
            "concorrente_id",
        ],
    )
    def test_optional_reference_ids(self, field):
        descriptor = ASSOCIADO_FIELDS[field]

        assert descriptor.type is FieldType.NUMBER
        assert descriptor.required is False

    @pytest.mark.parametrize(
        "field, fmt",
        [
            ("filiacao_cremacao", "%d/%m/%Y"),
            ("data_inicio_carencia_cremacao", "%d/%m/%Y"),
            ("data_fim_carencia_cremacao", "%d/%m/%Y"),
            ("cadastro_cremacao", "%d/%m/%Y %H:%M:%S"),
            ("data_inicio_carencia", "%d/%m/%Y"),
            ("data_fim_carencia", "%d/%m/%Y"),
            ("data_primeira_parcela", "%d/%m/%Y"),
            ("ultimo_pagamento", "%d/%m/%Y"),
            ("ultimo_mes_pago", "%d/%m/%Y"),
            ("data_cancelamento", "%d/%m/%Y"),
            ("data_quitacao", "%d/%m/%Y"),
            ("data_contrato_anterior", "%d/%m/%Y"),
            ("ultimo_mes_pago_anterior", "%d/%m/%Y"),
            ("data_nascimento", "%Y-%m-%d"),
        ],
    )
    def test_date_formats(self, field, fmt):
        assert ASSOCIADO_FIELDS[field].type is FieldType.DATETIME
        assert ASSOCIADO_FIELDS[field].format == fmt

    @pytest.mark.parametrize(
        "field, length",
        [("nome", 150), ("rg", 30), ("naturalidade", 100), ("usuario_cremacao", 100), ("empresa_anterior", 150)],
    )
    def test_max_lengths_fit_their_columns(self, field, length):
        assert ASSOCIADO_FIELDS[field].max_length == length
        assert get_descriptor("associado").model.__table__.columns[field].type.length >= length
