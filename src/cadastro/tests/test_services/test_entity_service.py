import logging

import pytest

from cadastro.config import Settings
from cadastro.entities import get_descriptor
from cadastro.exceptions import (
    DuplicateError,
    FailureReason,
    InvalidFilterError,
    NotFoundError,
    ValidationFailure,
)
from cadastro.services import EntityService
from cadastro.tests.test_fixtures.repository_fixtures import make_associado_payload, make_dependente_payload


@pytest.mark.asyncio
class TestCreate:

    async def test_duplicate_cpf_is_rejected_until_the_holder_is_deactivated(
        self, associado_service, create_associado, faker_br
    ):
        """
        Behavior:
                - Create a member with cpf_cnpj "111.111.111-11", then try a second one.
                - Deactivate the first and try again.

        Importance:
                - Uniqueness only counts active records: the second create fails with
                  a duplicate while the first is active and succeeds once it is not.
        """
        # Arrange
        first = await create_associado(cpf_cnpj="111.111.111-11")

        # Act & Assert: blocked while the holder is active
        with pytest.raises(DuplicateError) as exc_info:
            await associado_service.create(make_associado_payload(faker_br, cpf_cnpj="111.111.111-11"), actor="MARIA")
        assert exc_info.value.field == "cpf_cnpj"
        assert exc_info.value.reason is FailureReason.DUPLICATE

        # Act & Assert: allowed after deactivation
        await associado_service.toggle_active(first.id, actor="MARIA")
        second = await associado_service.create(make_associado_payload(faker_br, cpf_cnpj="111.111.111-11"), actor="MARIA")
        assert second.ativo is True
        assert second.cpf_cnpj == "11111111111"

    async def test_formatted_and_plain_cpf_collide(self, associado_service, create_associado, faker_br):
        await create_associado(cpf_cnpj="123.456.789-09")

        with pytest.raises(DuplicateError):
            await associado_service.create(make_associado_payload(faker_br, cpf_cnpj="12345678909"))

    async def test_actor_defaults_to_configured_identity(self, db_session, associado_payload):
        service = EntityService(get_descriptor("associado"), db_session, settings=Settings(DEFAULT_ACTOR="sistema"))

        associado = await service.create(associado_payload)

        assert associado.created_by == "SISTEMA"

    async def test_invalid_payload_writes_nothing(self, associado_service, associado_payload):
        associado_payload["sexo"] = 5

        with pytest.raises(ValidationFailure):
            await associado_service.create(associado_payload, actor="MARIA")

        assert await associado_service.list_all() == []

    async def test_validation_failure_is_logged_with_field_and_reason(self, associado_service, associado_payload, caplog):
        caplog.set_level(logging.INFO)
        associado_payload.pop("nome")

        with pytest.raises(ValidationFailure):
            await associado_service.create(associado_payload, actor="MARIA")

        records = [r for r in caplog.records if r.getMessage() == "service.validation_failed"]
        assert records
        assert records[0].field == "nome"
        assert records[0].reason == "required"
        assert records[0].entity == "associado"

    async def test_defaults_are_persisted(self, db_session, faker_br):
        service = EntityService(get_descriptor("cartao_associado"), db_session, settings=Settings())

        cartao = await service.create({"associado_id": 1, "valor_pagar": 19.999}, actor="MARIA")

        assert cartao.status == 0
        assert cartao.valor_pagar == 20.0

    async def test_malformed_cpf_is_rejected_and_never_stored(self, dependente_service, faker_br):
        """
        Behavior:
                - Create two dependents whose cpf holds no digits at all.

        Importance:
                - Both are rejected as badly formatted. Neither is stored as an empty
                  cpf, so the second never shows up as a duplicate of the first.
        """
        for cpf in ("abc", "xyz"):
            with pytest.raises(ValidationFailure) as exc_info:
                await dependente_service.create(make_dependente_payload(faker_br, cpf=cpf), actor="MARIA")

            assert not isinstance(exc_info.value, DuplicateError)
            assert exc_info.value.field == "cpf"
            assert exc_info.value.reason is FailureReason.FORMAT

        assert await dependente_service.list_all() == []


@pytest.mark.asyncio
class TestUpdate:

    async def test_resending_own_unique_values_is_not_a_duplicate(self, associado_service, create_associado):
        associado = await create_associado(cpf_cnpj="111.111.111-11")

        updated = await associado_service.update(
            associado.id, {"cpf_cnpj": "111.111.111-11", "contrato": associado.contrato, "nome": "outro"}, actor="MARIA"
        )

        assert updated.cpf_cnpj == "11111111111"
        assert updated.nome == "OUTRO"
        assert updated.updated_by == "MARIA"

    async def test_taking_another_active_records_value_is_a_duplicate(self, associado_service, create_associado):
        await create_associado(cpf_cnpj="111.111.111-11")
        other = await create_associado(cpf_cnpj="222.222.222-22")

        with pytest.raises(DuplicateError):
            await associado_service.update(other.id, {"cpf_cnpj": "111.111.111-11"}, actor="MARIA")

    async def test_partial_update_keeps_other_fields(self, associado_service, create_associado):
        associado = await create_associado(termo_reajuste=True)

        updated = await associado_service.update(associado.id, {"observacao": "mudou de endereco"}, actor="MARIA")

        assert updated.termo_reajuste is True
        assert updated.observacao == "mudou de endereco"

    async def test_missing_record_is_not_found_before_validation(self, associado_service):
        with pytest.raises(NotFoundError):
            await associado_service.update(99999, {"sexo": 99}, actor="MARIA")

    async def test_invalid_field_value_is_rejected(self, associado_service, create_associado):
        associado = await create_associado()

        with pytest.raises(ValidationFailure) as exc_info:
            await associado_service.update(associado.id, {"data_nascimento": "31/12/1990"}, actor="MARIA")

        assert exc_info.value.reason is FailureReason.FORMAT


@pytest.mark.asyncio
class TestListing:

    async def test_list_all_and_list_active(self, associado_service, create_associado):
        active = await create_associado()
        inactive = await create_associado()
        await associado_service.toggle_active(inactive.id, actor="MARIA")

        every = await associado_service.list_all()
        only_active = await associado_service.list_active()

        assert [a.id for a in every] == [active.id, inactive.id]
        assert [a.id for a in only_active] == [active.id]

    async def test_empty_result_is_success_by_default(self, associado_service):
        assert await associado_service.list_active({"contrato": 1}) == []

    async def test_empty_result_can_be_configured_as_not_found(self, db_session):
        service = EntityService(
            get_descriptor("associado"), db_session, settings=Settings(LIST_EMPTY_AS_NOT_FOUND=True)
        )

        with pytest.raises(NotFoundError):
            await service.list_all({"contrato": 1})

    async def test_invalid_filter_key(self, associado_service):
        with pytest.raises(InvalidFilterError):
            await associado_service.list_all({"senha": "x"})

    async def test_get(self, associado_service, create_associado):
        associado = await create_associado()

        assert (await associado_service.get(associado.id)).id == associado.id
        with pytest.raises(NotFoundError):
            await associado_service.get(associado.id + 1000)
